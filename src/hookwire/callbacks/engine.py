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
"""Dispatch engine — runs an operation wrapped by its registered advice."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar, overload

import structlog

from hookwire.callbacks.guard import evaluate_guard
from hookwire.callbacks.registry import resolve_registry
from hookwire.callbacks.types import AdviceEntry, Phase
from hookwire.core.settings import get_properties

logger = structlog.get_logger("hookwire.callbacks.engine")

F = TypeVar("F", bound=Callable[..., Any])


def dispatch(
    name: str,
    instance: Any,
    args: tuple | list,
    operation: Callable[[], Any],
    kwargs: dict[str, Any] | None = None,
) -> Any:
    """Run *operation* wrapped by the advice registered for *name*.

    Before-advice runs in registration order, then ``operation()``, then
    after-advice in registration order. Each entry runs only if its guard
    passes. The operation's result is returned unchanged.

    *operation* takes no arguments; *args* and *kwargs* are forwarded to
    advice handlers and guards only.

    Any exception from a guard, a handler or the operation propagates
    as-is and nothing after it runs: a failing before-advice prevents the
    operation, and a failing operation prevents the after-advice.
    """
    registry = resolve_registry(type(instance))
    if registry is None:
        return operation()

    args = tuple(args)
    kwargs = kwargs or {}
    trace = get_properties().trace

    _run_phase(registry.lookup(name, Phase.BEFORE), name, Phase.BEFORE, instance, args, kwargs, trace)
    result = operation()
    _run_phase(registry.lookup(name, Phase.AFTER), name, Phase.AFTER, instance, args, kwargs, trace)
    return result


def _run_phase(
    entries: tuple[AdviceEntry, ...],
    name: str,
    phase: Phase,
    instance: Any,
    args: tuple,
    kwargs: dict[str, Any],
    trace: bool,
) -> None:
    for position, entry in enumerate(entries):
        if not evaluate_guard(entry.guard, instance, args, kwargs):
            if trace:
                logger.debug("advice_skipped", operation=name, phase=phase.value, position=position)
            continue
        if trace:
            logger.debug("advice_invoked", operation=name, phase=phase.value, position=position, handler=entry.handler)
        entry.handler.invoke(instance, args, kwargs)


@overload
def intercepted(target: F) -> F: ...


@overload
def intercepted(target: str) -> Callable[[F], F]: ...


def intercepted(target: Any) -> Any:
    """Route calls of a method through :func:`dispatch`.

    The operation name defaults to the method's own name::

        class Order(Callbacks):
            @intercepted
            def submit(self, channel): ...

            @intercepted("checkout")
            def _do_checkout(self): ...

    The call's own arguments are forwarded to advice and guards.
    """

    def decorate(fn: F, name: str) -> F:
        @functools.wraps(fn)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            return dispatch(name, self, args, lambda: fn(self, *args, **kwargs), kwargs)

        wrapper.__hookwire_operation__ = name  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    if isinstance(target, str):
        return lambda fn: decorate(fn, target)
    return decorate(target, target.__name__)
