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
"""Tests for the hookwire exception hierarchy."""

from hookwire.kernel import HookwireException, RegistrationError


class TestHookwireException:
    def test_message_code_context(self):
        exc = HookwireException("bad", code="X_1", context={"k": "v"})
        assert str(exc) == "bad"
        assert exc.code == "X_1"
        assert exc.context == {"k": "v"}

    def test_defaults(self):
        exc = HookwireException("bad")
        assert exc.code is None
        assert exc.context == {}

    def test_context_not_shared(self):
        assert HookwireException("a").context is not HookwireException("b").context


class TestRegistrationError:
    def test_hierarchy(self):
        exc = RegistrationError("nope", code="OPERATION_UNDEFINED")
        assert isinstance(exc, HookwireException)
        assert isinstance(exc, TypeError)
        assert exc.code == "OPERATION_UNDEFINED"
