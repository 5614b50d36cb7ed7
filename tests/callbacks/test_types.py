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
"""Tests for handler references and advice entries."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from hookwire.callbacks.types import AdviceEntry, InlineClosure, NamedOperation, Phase, resolve_handler
from hookwire.kernel.exceptions import HookwireException, RegistrationError


class Target:
    def greet(self, name: str, *, punctuation: str = "!") -> str:
        return f"hello {name}{punctuation}"


class TestResolveHandler:
    def test_string_becomes_named_operation(self) -> None:
        assert resolve_handler("greet") == NamedOperation("greet")

    def test_callable_becomes_inline_closure(self) -> None:
        def fn(instance: Any) -> None:
            pass

        assert resolve_handler(fn) == InlineClosure(fn)

    def test_existing_reference_passes_through(self) -> None:
        ref = NamedOperation("greet")
        assert resolve_handler(ref) is ref

    @pytest.mark.parametrize("value", [42, None, 1.5, ["greet"]])
    def test_rejects_other_shapes(self, value: Any) -> None:
        with pytest.raises(RegistrationError, match="Only a method name or a callable"):
            resolve_handler(value)

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(RegistrationError):
            resolve_handler("")

    def test_error_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            resolve_handler(3)
        with pytest.raises(HookwireException):
            resolve_handler(3)

    def test_role_in_message(self) -> None:
        with pytest.raises(RegistrationError, match="for guard"):
            resolve_handler(3, role="guard")


class TestInvocation:
    def test_named_operation_calls_method(self) -> None:
        ref = NamedOperation("greet")
        assert ref.invoke(Target(), ("bob",), {"punctuation": "?"}) == "hello bob?"

    def test_inline_closure_receives_instance_first(self) -> None:
        target = Target()
        received: list[tuple] = []
        ref = InlineClosure(lambda instance, *args, **kwargs: received.append((instance, args, kwargs)))

        ref.invoke(target, (1, 2), {"k": "v"})
        assert received == [(target, (1, 2), {"k": "v"})]


class TestImmutability:
    def test_references_are_frozen(self) -> None:
        ref = NamedOperation("greet")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ref.name = "other"  # type: ignore[misc]

    def test_entries_are_frozen(self) -> None:
        entry = AdviceEntry(handler=NamedOperation("greet"))
        assert entry.guard is None
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.guard = NamedOperation("x")  # type: ignore[misc]


class TestPhase:
    def test_values(self) -> None:
        assert Phase("before") is Phase.BEFORE
        assert Phase.AFTER.value == "after"
