"""Tests for handlerkit.core.logging module."""

import json

import pytest
import structlog

from handlerkit.core.logging import (
    LogContext,
    bind_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)
from handlerkit.core.settings import HandlerKitSettings


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def _last_line(capsys) -> dict:
    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    return json.loads(lines[-1])


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="orders", cache_loggers=False)
        get_logger("tests.logging").info("operation.succeeded", operation="GetWidget")
        entry = _last_line(capsys)
        assert entry["event"] == "operation.succeeded"
        assert entry["service.name"] == "orders"
        assert entry["logger_name"] == "tests.logging"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_level_filtering(self, capsys):
        configure_logging(level="WARNING", json_format=True, cache_loggers=False)
        get_logger("tests.logging").info("hidden")
        assert "hidden" not in capsys.readouterr().out

    def test_exception_rendered(self, capsys):
        configure_logging(level="INFO", json_format=True, cache_loggers=False)
        get_logger().error("operation.internal_error", exc_info=RuntimeError("boom"))
        assert "RuntimeError: boom" in _last_line(capsys)["exception"]

    def test_configure_from_settings(self, capsys):
        configure_from_settings(HandlerKitSettings(service_name="billing", json_logs=True))
        get_logger("tests.logging.settings").warning("operation.output_invalid")
        assert _last_line(capsys)["service.name"] == "billing"


class TestContextBinding:
    def test_bound_context_is_merged(self, capsys):
        configure_logging(json_format=True, cache_loggers=False)
        bind_context(request_id="abc")
        get_logger().info("event")
        assert _last_line(capsys)["request_id"] == "abc"

    def test_log_context_is_scoped(self, capsys):
        configure_logging(json_format=True, cache_loggers=False)
        with LogContext(operation="GetWidget"):
            get_logger().info("inside")
            assert _last_line(capsys)["operation"] == "GetWidget"
        get_logger().info("outside")
        assert "operation" not in _last_line(capsys)
