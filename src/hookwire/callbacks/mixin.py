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
"""Callbacks mixin — declare advice on a class and run it from operations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hookwire.callbacks.accessors import CallbackAttribute, generate_accessor
from hookwire.callbacks.decorators import AdviceDeclaration, advice_declarations
from hookwire.callbacks.engine import dispatch
from hookwire.callbacks.registry import AdviceRegistry, operation_defined, registry_for
from hookwire.callbacks.types import AdviceEntry, Phase
from hookwire.kernel.exceptions import OPERATION_UNDEFINED, RegistrationError


class Callbacks:
    """Mixin giving a class its own advice registry.

    Advice can be declared with the :func:`~hookwire.callbacks.before` and
    :func:`~hookwire.callbacks.after` method decorators inside the class
    body, or with the classmethods below once the class exists::

        class Player(Callbacks):
            health = callback_attribute()

            @before("health=", guard=lambda player, value: value <= 0)
            def play_death_sound(self, value): ...

        Player.after("health=", lambda player, value: player.redraw())

    Every subclass gets its own registry, seeded at class-creation time with
    the advice of all its bases (left to right, each inherited entry once).
    A subclass that overrides a decorated method and decorates it again for
    the same operation replaces the inherited entry instead of adding one.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry = registry_for(cls, create=True)
        assert registry is not None

        defined: set[str] = set()
        for base in cls.__bases__:
            defined.update(dir(base))

        for attr_name, value in list(cls.__dict__.items()):
            for declaration in advice_declarations(value):
                if declaration.require_defined and not _declared_before(cls, declaration, defined):
                    raise RegistrationError(
                        f"`{declaration.operation}` is not or not yet defined for {cls.__qualname__}: "
                        "operation not yet defined",
                        code=OPERATION_UNDEFINED,
                        context={
                            "owner": cls.__qualname__,
                            "operation": declaration.operation,
                            "phase": declaration.phase.value,
                        },
                    )
                registry.redeclare(declaration.operation, declaration.phase, attr_name, declaration.guard)
            defined.add(attr_name)

    @classmethod
    def callback_registry(cls) -> AdviceRegistry:
        """Return this class's own advice registry."""
        registry = registry_for(cls, create=True)
        assert registry is not None
        return registry

    @classmethod
    def before(cls, name: str, handler: Any, guard: Any = None) -> AdviceEntry:
        """Run *handler* before operation *name*, optionally gated by *guard*."""
        return cls.callback_registry().register(name, Phase.BEFORE, handler, guard)

    @classmethod
    def after(cls, name: str, handler: Any, guard: Any = None) -> AdviceEntry:
        """Run *handler* after operation *name*, optionally gated by *guard*."""
        return cls.callback_registry().register(name, Phase.AFTER, handler, guard)

    @classmethod
    def before_defined(cls, name: str, handler: Any, guard: Any = None) -> AdviceEntry:
        """Like :meth:`before`, but *name* must already be defined on the class."""
        return cls.callback_registry().register_defined(name, Phase.BEFORE, handler, guard)

    @classmethod
    def after_defined(cls, name: str, handler: Any, guard: Any = None) -> AdviceEntry:
        """Like :meth:`after`, but *name* must already be defined on the class."""
        return cls.callback_registry().register_defined(name, Phase.AFTER, handler, guard)

    @classmethod
    def attr_reader_with_callbacks(cls, *fields: str) -> list[CallbackAttribute]:
        return [generate_accessor(cls, field, reader=True, writer=False) for field in fields]

    @classmethod
    def attr_writer_with_callbacks(cls, *fields: str) -> list[CallbackAttribute]:
        return [generate_accessor(cls, field, reader=False, writer=True) for field in fields]

    @classmethod
    def attr_accessor_with_callbacks(cls, *fields: str) -> list[CallbackAttribute]:
        return [generate_accessor(cls, field) for field in fields]

    def run_callbacks(self, name: str, operation: Callable[[], Any], *args: Any, **kwargs: Any) -> Any:
        """Run *operation* wrapped by the advice registered for *name*.

        Call it from inside an operation's body with the operation's own
        name and arguments::

            def bar(self, value):
                return self.run_callbacks("bar", lambda: self._store(value), value)
        """
        return dispatch(name, self, args, operation, kwargs)


def _declared_before(cls: type, declaration: AdviceDeclaration, defined: set[str]) -> bool:
    operation = declaration.operation
    if operation.endswith("="):
        return operation[:-1] in defined and operation_defined(cls, operation)
    return operation in defined
