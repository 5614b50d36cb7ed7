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
"""Process-wide settings for the callbacks engine."""

from __future__ import annotations

from dataclasses import dataclass

from hookwire.core.config import Config, config_properties
from hookwire.logging.port import LoggingPort
from hookwire.logging.structlog_adapter import StructlogAdapter


@config_properties(prefix="hookwire.callbacks")
@dataclass
class CallbackProperties:
    """Tunables read from the ``hookwire.callbacks`` section.

    Attributes:
        validate_handlers: Reject named handlers and guards the class does not
            define at registration time instead of failing at first dispatch.
        trace: Emit debug events for advice registration and for every
            advice entry a dispatch visits.
    """

    validate_handlers: bool = False
    trace: bool = False


_properties = CallbackProperties()


def get_properties() -> CallbackProperties:
    """Return the active callback properties."""
    return _properties


def configure(config: Config, logging_port: LoggingPort | None = None) -> CallbackProperties:
    """Bind *config* and set up logging.

    Configuration is expected to happen once, before any class using the
    callbacks mixin is defined.
    """
    global _properties
    (logging_port or StructlogAdapter()).configure(config)
    _properties = config.bind(CallbackProperties)
    return _properties


def reset() -> None:
    """Restore default properties."""
    global _properties
    _properties = CallbackProperties()
