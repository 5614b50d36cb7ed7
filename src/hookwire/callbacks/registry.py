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
"""AdviceRegistry — per-class storage of before/after advice lists."""

from __future__ import annotations

import inspect
from typing import Any

import structlog

from hookwire.callbacks.types import AdviceEntry, HandlerRef, NamedOperation, Phase, resolve_handler
from hookwire.core.settings import get_properties
from hookwire.kernel.exceptions import HANDLER_UNDEFINED, OPERATION_UNDEFINED, RegistrationError

logger = structlog.get_logger("hookwire.callbacks.registry")

_REGISTRY_ATTR = "__hookwire_callbacks__"

_MISSING = object()


def operation_defined(owner: type, name: str) -> bool:
    """Return whether *owner* defines the operation *name*.

    Setter operations use the ``"<field>="`` convention and count as defined
    when ``<field>`` is a writable attribute of the class. A getter
    operation on an attribute with its reader disabled is not defined.
    """
    if name.endswith("="):
        attr = inspect.getattr_static(owner, name[:-1], _MISSING)
        if attr is _MISSING:
            return False
        if isinstance(attr, property):
            return attr.fset is not None
        return bool(getattr(attr, "writer", hasattr(type(attr), "__set__")))
    attr = inspect.getattr_static(owner, name, _MISSING)
    if attr is _MISSING:
        return False
    return bool(getattr(attr, "reader", True))


class AdviceRegistry:
    """Ordered before/after advice for the operations of one class.

    Usage::

        registry = AdviceRegistry(Widget)
        registry.register("save", Phase.BEFORE, "validate")
        registry.register("save", Phase.AFTER, lambda widget: widget.flush())

        for entry in registry.lookup("save", Phase.BEFORE):
            ...

    Lists are append-only. An operation that never received advice looks
    exactly like one with two empty lists.
    """

    def __init__(self, owner: type | None = None) -> None:
        self.owner = owner
        self._advice: dict[str, dict[Phase, list[AdviceEntry]]] = {}
        self._inherited_entries: list[AdviceEntry] = []

    def __repr__(self) -> str:
        owner = self.owner.__qualname__ if self.owner is not None else None
        return f"AdviceRegistry(owner={owner!r}, operations={self.names()!r})"

    def register(
        self,
        name: str,
        phase: Phase | str,
        handler: Any,
        guard: Any = None,
    ) -> AdviceEntry:
        """Append advice for *name* in *phase*; the new entry runs last."""
        phase = Phase(phase)
        entry = AdviceEntry(
            handler=resolve_handler(handler),
            guard=resolve_handler(guard, role="guard") if guard is not None else None,
        )
        properties = get_properties()
        if properties.validate_handlers:
            self._check_named(entry.handler, name, phase)
            if entry.guard is not None:
                self._check_named(entry.guard, name, phase)

        lists = self._advice.setdefault(name, {Phase.BEFORE: [], Phase.AFTER: []})
        lists[phase].append(entry)
        if properties.trace:
            logger.debug(
                "advice_registered",
                owner=self._owner_name(),
                operation=name,
                phase=phase.value,
                handler=entry.handler,
                guarded=entry.guard is not None,
            )
        return entry

    def register_defined(
        self,
        name: str,
        phase: Phase | str,
        handler: Any,
        guard: Any = None,
    ) -> AdviceEntry:
        """Like :meth:`register`, but *name* must already exist on the owner.

        Raises:
            RegistrationError: If the owning class does not define *name* yet.
        """
        if self.owner is None or not operation_defined(self.owner, name):
            raise RegistrationError(
                f"`{name}` is not or not yet defined for {self._owner_name()}: operation not yet defined",
                code=OPERATION_UNDEFINED,
                context={"owner": self._owner_name(), "operation": name, "phase": Phase(phase).value},
            )
        return self.register(name, phase, handler, guard)

    def lookup(self, name: str, phase: Phase | str) -> tuple[AdviceEntry, ...]:
        """Return the advice for *name* in *phase*, in registration order."""
        lists = self._advice.get(name)
        if lists is None:
            return ()
        return tuple(lists[Phase(phase)])

    def names(self) -> list[str]:
        """Names of the operations that carry any advice."""
        return list(self._advice)

    def copy(self, owner: type | None = None) -> AdviceRegistry:
        """Return an independent registry holding the same entries."""
        clone = AdviceRegistry(owner if owner is not None else self.owner)
        clone._advice = {
            name: {phase: list(entries) for phase, entries in lists.items()} for name, lists in self._advice.items()
        }
        clone._inherited_entries = list(self._inherited_entries)
        return clone

    def merge(self, other: AdviceRegistry) -> None:
        """Append the entries of *other* that this registry does not hold yet.

        Entries are compared by identity, so advice a class inherits along
        two paths of a diamond is kept once, while deliberate duplicates made
        by separate registrations survive. Merged entries count as
        inherited for :meth:`redeclare`.
        """
        for name, lists in other._advice.items():
            own = self._advice.setdefault(name, {Phase.BEFORE: [], Phase.AFTER: []})
            for phase, entries in lists.items():
                for entry in entries:
                    if not any(existing is entry for existing in own[phase]):
                        own[phase].append(entry)
                        self._inherited_entries.append(entry)

    def redeclare(
        self,
        name: str,
        phase: Phase | str,
        handler: Any,
        guard: Any = None,
    ) -> AdviceEntry:
        """Register advice that may override an inherited declaration.

        When an inherited entry for *name* and *phase* has an equal handler,
        the new entry takes its place in the list; otherwise this is a plain
        :meth:`register`. Overriding a decorated method and decorating it
        again therefore runs it once, at the base class's position.
        """
        phase = Phase(phase)
        ref = resolve_handler(handler)
        entries = self._advice.get(name, {}).get(phase, [])
        for position, existing in enumerate(entries):
            if existing.handler == ref and any(existing is inherited for inherited in self._inherited_entries):
                replacement = self.register(name, phase, ref, guard)
                entries.pop()
                entries[position] = replacement
                self._inherited_entries = [e for e in self._inherited_entries if e is not existing]
                return replacement
        return self.register(name, phase, ref, guard)

    def _check_named(self, ref: HandlerRef, name: str, phase: Phase) -> None:
        if not isinstance(ref, NamedOperation) or self.owner is None:
            return
        if inspect.getattr_static(self.owner, ref.name, _MISSING) is _MISSING:
            raise RegistrationError(
                f"`{ref.name}` is not defined for {self._owner_name()}",
                code=HANDLER_UNDEFINED,
                context={"owner": self._owner_name(), "operation": name, "phase": phase.value, "handler": ref.name},
            )

    def _owner_name(self) -> str:
        return self.owner.__qualname__ if self.owner is not None else "<unbound>"


def registry_for(cls: type, create: bool = False) -> AdviceRegistry | None:
    """Return the registry declared on *cls* itself.

    Registries are looked up in the class's own namespace only, so a
    subclass never appends to its base's lists. With *create*, a registry
    is attached on first use, seeded from the advice of every base.
    """
    registry = cls.__dict__.get(_REGISTRY_ATTR)
    if registry is None and create:
        registry = _inherited(cls)
        setattr(cls, _REGISTRY_ATTR, registry)
    return registry


def _inherited(cls: type) -> AdviceRegistry:
    registry = AdviceRegistry(cls)
    for base in cls.__bases__:
        parent = resolve_registry(base)
        if parent is not None:
            registry.merge(parent)
    return registry


def resolve_registry(cls: type) -> AdviceRegistry | None:
    """Return the registry that governs instances of *cls*.

    This is the class's own registry or, failing that, the nearest one in
    its MRO. ``None`` means no advice was ever declared.
    """
    for klass in cls.__mro__:
        registry = klass.__dict__.get(_REGISTRY_ATTR)
        if registry is not None:
            return registry
    return None
