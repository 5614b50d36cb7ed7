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
"""Advice decorators — mark methods as before/after advice in a class body."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from hookwire.callbacks.types import Phase

F = TypeVar("F", bound=Callable[..., Any])

ADVICE_ATTR = "__hookwire_advice__"


@dataclass(frozen=True)
class AdviceDeclaration:
    """Advice recorded on a method, registered when its class is created."""

    phase: Phase
    operation: str
    guard: Any = None
    require_defined: bool = False


def _make_advice(phase: Phase) -> Callable[..., Callable[[F], F]]:
    """Create an advice decorator factory for *phase*.

    The returned factory takes the operation name and returns a decorator
    that appends an :class:`AdviceDeclaration` to the method's
    ``__hookwire_advice__`` list. Stacked decorators keep top-to-bottom
    order.
    """

    def factory(operation: str, guard: Any = None, *, require_defined: bool = False) -> Callable[[F], F]:
        declaration = AdviceDeclaration(phase, operation, guard, require_defined)

        def decorator(fn: F) -> F:
            existing = getattr(fn, ADVICE_ATTR, ())
            setattr(fn, ADVICE_ATTR, (declaration, *existing))
            return fn

        return decorator

    return factory


before = _make_advice(Phase.BEFORE)
after = _make_advice(Phase.AFTER)


def advice_declarations(value: Any) -> tuple[AdviceDeclaration, ...]:
    """Return the declarations attached to a class-body member."""
    return getattr(value, ADVICE_ATTR, ())
