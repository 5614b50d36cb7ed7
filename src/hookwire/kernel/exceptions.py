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
"""Exception hierarchy for hookwire.

All library errors inherit from HookwireException. Errors raised by
guards, advice handlers or the wrapped operation are never converted into
this hierarchy: they reach the dispatch caller unchanged.
"""

from __future__ import annotations


class HookwireException(Exception):
    """Base exception for all hookwire errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "HANDLER_INVALID").
        context: Arbitrary key-value pairs describing the failing declaration.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class RegistrationError(HookwireException, TypeError):
    """An advice declaration was rejected at class-definition time.

    Raised when a handler or guard is not a recognized handler shape, or
    when a ``*_defined`` registration names an operation the class does not
    define yet.
    """


HANDLER_INVALID = "HANDLER_INVALID"
HANDLER_UNDEFINED = "HANDLER_UNDEFINED"
OPERATION_UNDEFINED = "OPERATION_UNDEFINED"
