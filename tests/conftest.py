"""Shared fixtures for the hookwire test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from hookwire.core import settings


@pytest.fixture(autouse=True)
def _default_settings() -> Iterator[None]:
    settings.reset()
    yield
    settings.reset()
