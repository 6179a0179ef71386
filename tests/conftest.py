"""
Shared pytest fixtures for handlerkit tests.

This module provides:
- A recording delegate that captures every dispatcher call
- A single-use response sink
- Settings cache isolation between tests

Test doubles themselves live in ``tests/_support/doubles.py``.
"""

from __future__ import annotations

import pytest

from handlerkit.core.settings import get_settings
from handlerkit.delegates.json_payload import ResponseSink
from tests._support.doubles import RecordingDelegate


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        if "/api/" in str(item.fspath).replace("\\", "/"):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Clear cached settings and HANDLERKIT_ env overrides around each test."""
    for name in ("HANDLERKIT_VALIDATE_OUTPUT", "HANDLERKIT_API_PREFIX", "HANDLERKIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def delegate() -> RecordingDelegate:
    return RecordingDelegate()


@pytest.fixture
def sink() -> ResponseSink:
    return ResponseSink()
