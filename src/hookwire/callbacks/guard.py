# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Guard evaluation for conditional advice."""

from __future__ import annotations

from typing import Any

from hookwire.callbacks.types import HandlerRef


def evaluate_guard(
    guard: HandlerRef | None,
    instance: Any,
    args: tuple,
    kwargs: dict[str, Any] | None = None,
) -> bool:
    """Return whether advice gated by *guard* should run.

    A missing guard always allows the advice. Otherwise the guard is invoked
    with the same instance and arguments as the advice itself and its result
    is coerced with ``bool()``. Nothing is cached: a guard shared by several
    entries runs once per entry, and any state it mutates is visible to the
    guards evaluated after it.
    """
    if guard is None:
        return True
    return bool(guard.invoke(instance, args, kwargs or {}))
