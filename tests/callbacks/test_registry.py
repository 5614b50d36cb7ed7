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
"""Tests for AdviceRegistry and the type-to-registry table."""

from __future__ import annotations

from typing import Any

import pytest

import hookwire.callbacks.registry as registry_module
from hookwire.callbacks.accessors import CallbackAttribute
from hookwire.callbacks.registry import AdviceRegistry, operation_defined, registry_for, resolve_registry
from hookwire.callbacks.types import InlineClosure, NamedOperation, Phase
from hookwire.core import settings
from hookwire.kernel.exceptions import HANDLER_INVALID, HANDLER_UNDEFINED, OPERATION_UNDEFINED, RegistrationError

# ---- Fixture classes --------------------------------------------------------


class Host:
    def bar(self) -> None:
        pass

    def say_hi(self) -> None:
        pass

    @property
    def size(self) -> int:
        return 1

    @property
    def name(self) -> str:
        return ""

    @name.setter
    def name(self, value: str) -> None:
        pass


def _guard(instance: object) -> bool:
    return True


# ---- Tests ------------------------------------------------------------------


class TestRegisterAndLookup:
    def test_lookup_unknown_name_is_empty(self) -> None:
        registry = AdviceRegistry(Host)
        assert registry.lookup("bar", Phase.BEFORE) == ()
        assert registry.lookup("bar", Phase.AFTER) == ()

    def test_register_appends_in_order(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "say_hi")
        registry.register("bar", Phase.BEFORE, _guard)

        entries = registry.lookup("bar", Phase.BEFORE)
        assert [e.handler for e in entries] == [NamedOperation("say_hi"), InlineClosure(_guard)]
        assert registry.lookup("bar", Phase.AFTER) == ()

    def test_register_returns_entry_with_guard(self) -> None:
        registry = AdviceRegistry(Host)
        entry = registry.register("bar", "after", "say_hi", guard="bar")
        assert entry.guard == NamedOperation("bar")
        assert registry.lookup("bar", "after") == (entry,)

    def test_duplicate_registration_appends_again(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "say_hi")
        registry.register("bar", Phase.BEFORE, "say_hi")
        assert len(registry.lookup("bar", Phase.BEFORE)) == 2

    def test_lookup_is_a_snapshot(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "say_hi")
        snapshot = registry.lookup("bar", Phase.BEFORE)
        registry.register("bar", Phase.BEFORE, "bar")
        assert len(snapshot) == 1
        assert len(registry.lookup("bar", Phase.BEFORE)) == 2

    def test_invalid_phase(self) -> None:
        registry = AdviceRegistry(Host)
        with pytest.raises(ValueError):
            registry.register("bar", "around", "say_hi")

    def test_invalid_handler(self) -> None:
        registry = AdviceRegistry(Host)
        with pytest.raises(RegistrationError) as excinfo:
            registry.register("bar", Phase.BEFORE, 42)
        assert excinfo.value.code == HANDLER_INVALID
        assert registry.names() == []

    def test_names(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "say_hi")
        registry.register("name=", Phase.AFTER, "say_hi")
        assert registry.names() == ["bar", "name="]

    def test_copy_is_independent(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "say_hi")
        clone = registry.copy()
        clone.register("bar", Phase.BEFORE, "bar")

        assert len(registry.lookup("bar", Phase.BEFORE)) == 1
        assert len(clone.lookup("bar", Phase.BEFORE)) == 2
        assert clone.owner is Host


class TestRegisterDefined:
    def test_rejects_undefined_operation(self) -> None:
        registry = AdviceRegistry(Host)
        with pytest.raises(RegistrationError) as excinfo:
            registry.register_defined("missing", Phase.BEFORE, "say_hi")
        assert excinfo.value.code == OPERATION_UNDEFINED
        assert excinfo.value.context == {"owner": "Host", "operation": "missing", "phase": "before"}
        assert registry.names() == []

    def test_accepts_defined_operation(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register_defined("bar", Phase.AFTER, "say_hi")
        assert len(registry.lookup("bar", Phase.AFTER)) == 1

    def test_unowned_registry_rejects(self) -> None:
        with pytest.raises(RegistrationError):
            AdviceRegistry().register_defined("bar", Phase.BEFORE, "say_hi")


class TestOperationDefined:
    def test_method(self) -> None:
        assert operation_defined(Host, "bar")
        assert not operation_defined(Host, "baz")

    def test_getter_needs_readable_attribute(self) -> None:
        class Fields:
            hidden = CallbackAttribute(reader=False)
            shown = CallbackAttribute(writer=False)

        assert not operation_defined(Fields, "hidden")
        assert operation_defined(Fields, "hidden=")
        assert operation_defined(Fields, "shown")
        assert not operation_defined(Fields, "shown=")

        with pytest.raises(RegistrationError):
            AdviceRegistry(Fields).register_defined("hidden", Phase.BEFORE, "say_hi")

    def test_setter_needs_writable_property(self) -> None:
        assert operation_defined(Host, "name=")
        assert not operation_defined(Host, "size=")
        assert not operation_defined(Host, "bar=")
        assert not operation_defined(Host, "missing=")


class TestHandlerValidation:
    def test_named_handlers_unchecked_by_default(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "not_there", guard="nor_this")
        assert len(registry.lookup("bar", Phase.BEFORE)) == 1

    def test_eager_validation_rejects_unknown_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "_properties", settings.CallbackProperties(validate_handlers=True))
        registry = AdviceRegistry(Host)

        with pytest.raises(RegistrationError) as excinfo:
            registry.register("bar", Phase.BEFORE, "not_there")
        assert excinfo.value.code == HANDLER_UNDEFINED
        assert excinfo.value.context["handler"] == "not_there"

        with pytest.raises(RegistrationError):
            registry.register("bar", Phase.BEFORE, "say_hi", guard="nor_this")

        registry.register("bar", Phase.BEFORE, "say_hi", guard="bar")
        registry.register("bar", Phase.BEFORE, _guard, guard=_guard)
        assert len(registry.lookup("bar", Phase.BEFORE)) == 2


class TestRegistryTable:
    def test_plain_class_has_no_registry(self) -> None:
        class Plain:
            pass

        assert registry_for(Plain) is None
        assert resolve_registry(Plain) is None

    def test_create_attaches_registry(self) -> None:
        class Plain:
            pass

        registry = registry_for(Plain, create=True)
        assert registry is not None
        assert registry.owner is Plain
        assert registry_for(Plain) is registry

    def test_create_seeds_from_base(self) -> None:
        class Base:
            pass

        class Child(Base):
            pass

        base_registry = registry_for(Base, create=True)
        assert base_registry is not None
        base_registry.register("bar", Phase.BEFORE, "say_hi")

        assert resolve_registry(Child) is base_registry

        child_registry = registry_for(Child, create=True)
        assert child_registry is not None
        assert child_registry is not base_registry
        assert child_registry.owner is Child
        assert len(child_registry.lookup("bar", Phase.BEFORE)) == 1
        assert resolve_registry(Child) is child_registry


class TestMergeAndRedeclare:
    def test_merge_appends_missing_entries_once(self) -> None:
        shared = AdviceRegistry(Host)
        shared.register("bar", Phase.BEFORE, "say_hi")
        left = shared.copy()
        left.register("bar", Phase.BEFORE, "bar")
        right = shared.copy()
        right.register("bar", Phase.AFTER, _guard)

        merged = AdviceRegistry(Host)
        merged.merge(left)
        merged.merge(right)

        assert [e.handler for e in merged.lookup("bar", Phase.BEFORE)] == [NamedOperation("say_hi"), NamedOperation("bar")]
        assert [e.handler for e in merged.lookup("bar", Phase.AFTER)] == [InlineClosure(_guard)]

    def test_merge_keeps_deliberate_duplicates(self) -> None:
        source = AdviceRegistry(Host)
        source.register("bar", Phase.BEFORE, "say_hi")
        source.register("bar", Phase.BEFORE, "say_hi")

        merged = AdviceRegistry(Host)
        merged.merge(source)
        assert len(merged.lookup("bar", Phase.BEFORE)) == 2

    def test_redeclare_replaces_inherited_entry_in_place(self) -> None:
        base = AdviceRegistry(Host)
        base.register("bar", Phase.BEFORE, "say_hi")
        base.register("bar", Phase.BEFORE, _guard)

        child = AdviceRegistry(Host)
        child.merge(base)
        replacement = child.redeclare("bar", Phase.BEFORE, "say_hi", guard="bar")

        entries = child.lookup("bar", Phase.BEFORE)
        assert entries == (replacement, base.lookup("bar", Phase.BEFORE)[1])
        assert replacement.guard == NamedOperation("bar")
        assert len(base.lookup("bar", Phase.BEFORE)) == 2
        assert base.lookup("bar", Phase.BEFORE)[0].guard is None

    def test_redeclare_appends_when_not_inherited(self) -> None:
        registry = AdviceRegistry(Host)
        registry.register("bar", Phase.BEFORE, "say_hi")
        registry.redeclare("bar", Phase.BEFORE, "say_hi")
        assert len(registry.lookup("bar", Phase.BEFORE)) == 2

    def test_redeclare_only_replaces_once(self) -> None:
        base = AdviceRegistry(Host)
        base.register("bar", Phase.AFTER, "say_hi")

        child = AdviceRegistry(Host)
        child.merge(base)
        child.redeclare("bar", Phase.AFTER, "say_hi")
        child.redeclare("bar", Phase.AFTER, "say_hi")
        assert len(child.lookup("bar", Phase.AFTER)) == 2


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def debug(self, event: str, **kwargs: Any) -> None:
        self.events.append((event, kwargs))


class TestRegistrationTrace:
    def test_silent_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        recorder = _RecordingLogger()
        monkeypatch.setattr(registry_module, "logger", recorder)

        AdviceRegistry(Host).register("bar", Phase.BEFORE, "say_hi")
        assert recorder.events == []

    def test_advice_registered_event(self, monkeypatch: pytest.MonkeyPatch) -> None:
        recorder = _RecordingLogger()
        monkeypatch.setattr(registry_module, "logger", recorder)
        monkeypatch.setattr(settings, "_properties", settings.CallbackProperties(trace=True))

        AdviceRegistry(Host).register("bar", Phase.AFTER, "say_hi", guard=_guard)

        assert recorder.events == [
            (
                "advice_registered",
                {
                    "owner": "Host",
                    "operation": "bar",
                    "phase": "after",
                    "handler": NamedOperation("say_hi"),
                    "guarded": True,
                },
            )
        ]
