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
"""Accessors whose reads and writes run through the dispatch engine.

A field ``bar`` exposes two operations for advice to target: ``"bar"``
for reads and ``"bar="`` for writes. The raw value lives in the
instance attribute ``_bar``.
"""

from __future__ import annotations

from typing import Any

from hookwire.callbacks.engine import dispatch


class CallbackAttribute:
    """Data descriptor that wraps field access in :func:`dispatch`.

    Usage::

        class Sprite(Callbacks):
            x = callback_attribute()

            @before("x=")
            def invalidate(self, value): ...
    """

    def __init__(self, *, reader: bool = True, writer: bool = True, default: Any = None) -> None:
        if not (reader or writer):
            raise ValueError("a callback attribute needs a reader, a writer, or both")
        self.reader = reader
        self.writer = writer
        self.default = default
        self.name = ""
        self.storage = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.storage = f"_{name}"

    def __repr__(self) -> str:
        return f"CallbackAttribute({self.name!r}, reader={self.reader}, writer={self.writer})"

    @property
    def setter_name(self) -> str:
        return f"{self.name}="

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        if not self.reader:
            raise AttributeError(f"'{type(instance).__name__}' attribute '{self.name}' is not readable")
        return dispatch(self.name, instance, (), lambda: self.read_raw(instance))

    def __set__(self, instance: Any, value: Any) -> None:
        if not self.writer:
            raise AttributeError(f"'{type(instance).__name__}' attribute '{self.name}' is not writable")
        dispatch(self.setter_name, instance, (value,), lambda: self.write_raw(instance, value))

    def read_raw(self, instance: Any) -> Any:
        """Read the stored value without running advice."""
        return getattr(instance, self.storage, self.default)

    def write_raw(self, instance: Any, value: Any) -> None:
        """Store *value* without running advice."""
        setattr(instance, self.storage, value)


def callback_attribute(*, reader: bool = True, writer: bool = True, default: Any = None) -> Any:
    """Declare a dispatched field in a class body."""
    return CallbackAttribute(reader=reader, writer=writer, default=default)


def generate_accessor(
    cls: type,
    field: str,
    *,
    reader: bool = True,
    writer: bool = True,
    default: Any = None,
) -> CallbackAttribute:
    """Install a :class:`CallbackAttribute` named *field* on an existing class."""
    attribute = CallbackAttribute(reader=reader, writer=writer, default=default)
    setattr(cls, field, attribute)
    attribute.__set_name__(cls, field)
    return attribute
