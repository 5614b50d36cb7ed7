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
"""Callback core types — handler references, advice entries, and phases."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from hookwire.kernel.exceptions import HANDLER_INVALID, RegistrationError


class Phase(str, Enum):
    """When an advice entry runs relative to the wrapped operation."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class NamedOperation:
    """A handler that calls the method *name* on the instance.

    Attributes:
        name: Attribute name looked up on the instance at invocation time.
    """

    name: str

    def invoke(self, instance: Any, args: tuple, kwargs: dict[str, Any]) -> Any:
        return getattr(instance, self.name)(*args, **kwargs)


@dataclass(frozen=True)
class InlineClosure:
    """A handler wrapping a plain callable.

    The instance is passed explicitly as the first positional argument,
    followed by the forwarded call arguments.
    """

    fn: Callable[..., Any]

    def invoke(self, instance: Any, args: tuple, kwargs: dict[str, Any]) -> Any:
        return self.fn(instance, *args, **kwargs)


HandlerRef = NamedOperation | InlineClosure


@dataclass(frozen=True)
class AdviceEntry:
    """One registered piece of advice and its optional guard."""

    handler: HandlerRef
    guard: HandlerRef | None = None


def resolve_handler(value: Any, role: str = "handler") -> HandlerRef:
    """Turn a declaration argument into a :data:`HandlerRef`.

    Strings name a method on the instance; any other callable becomes an
    inline closure. Existing handler references pass through unchanged.

    Raises:
        RegistrationError: If *value* is none of the above.
    """
    if isinstance(value, (NamedOperation, InlineClosure)):
        return value
    if isinstance(value, str):
        if not value:
            raise RegistrationError(f"{role} name must not be empty", code=HANDLER_INVALID)
        return NamedOperation(value)
    if callable(value):
        return InlineClosure(value)
    raise RegistrationError(
        f"Only a method name or a callable is allowed for {role}, but got {type(value).__name__}",
        code=HANDLER_INVALID,
        context={"role": role, "type": type(value).__name__},
    )
