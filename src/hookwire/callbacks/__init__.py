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
"""Before/after callbacks for the operations of a class."""

from hookwire.callbacks.accessors import CallbackAttribute, callback_attribute, generate_accessor
from hookwire.callbacks.decorators import AdviceDeclaration, after, before
from hookwire.callbacks.engine import dispatch, intercepted
from hookwire.callbacks.guard import evaluate_guard
from hookwire.callbacks.mixin import Callbacks
from hookwire.callbacks.registry import AdviceRegistry, registry_for, resolve_registry
from hookwire.callbacks.types import AdviceEntry, HandlerRef, InlineClosure, NamedOperation, Phase, resolve_handler

__all__ = [
    "AdviceDeclaration",
    "AdviceEntry",
    "AdviceRegistry",
    "CallbackAttribute",
    "Callbacks",
    "HandlerRef",
    "InlineClosure",
    "NamedOperation",
    "Phase",
    "after",
    "before",
    "callback_attribute",
    "dispatch",
    "evaluate_guard",
    "generate_accessor",
    "intercepted",
    "registry_for",
    "resolve_handler",
    "resolve_registry",
]
