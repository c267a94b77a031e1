"""Tests for structured logging setup and operation tracing."""

import json
import logging

import pytest

from piimask.core.config import LoggingConfig
from piimask.observability import (
    configure_logging,
    correlation_context,
    get_logger,
    trace_operation,
)
from piimask.observability.logging import correlation_id

pytestmark = pytest.mark.usefixtures("restore_logging")


def _json_lines(text: str) -> list:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestConfigureLogging:
    """Test the structlog/stdlib logging bridge."""

    def test_stdlib_records_rendered_as_json(self, capsys) -> None:
        configure_logging(LoggingConfig(level="INFO", format="json"))

        logging.getLogger("piimask.test").info("Masked %d fields", 3)

        (event,) = _json_lines(capsys.readouterr().err)
        assert event["event"] == "Masked 3 fields"
        assert event["level"] == "info"
        assert event["logger"] == "piimask.test"
        assert "timestamp" in event

    def test_structlog_logger_rendered_as_json(self, capsys) -> None:
        configure_logging(LoggingConfig(level="DEBUG", format="json"))

        get_logger("piimask.test").debug("Structured event", field_count=2)

        (event,) = _json_lines(capsys.readouterr().err)
        assert event["event"] == "Structured event"
        assert event["field_count"] == 2

    def test_level_filtering(self, capsys) -> None:
        configure_logging(LoggingConfig(level="WARNING", format="json"))

        logging.getLogger("piimask.test").info("hidden")
        get_logger("piimask.test").info("also hidden")

        assert capsys.readouterr().err == ""

    def test_console_format(self, capsys) -> None:
        configure_logging(LoggingConfig(level="INFO", format="console"))

        logging.getLogger("piimask.test").warning("Store rejected update")

        assert "Store rejected update" in capsys.readouterr().err

    def test_replaces_root_handlers(self) -> None:
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(logging.getLogger().handlers) == 1


class TestCorrelation:
    """Test correlation id propagation."""

    def test_context_sets_and_resets(self) -> None:
        with correlation_context("req-1") as corr_id:
            assert corr_id == "req-1"
            assert correlation_id.get() == "req-1"
        assert correlation_id.get() == ""

    def test_generated_id(self) -> None:
        with correlation_context() as corr_id:
            assert len(corr_id) == 36

    def test_id_added_to_events(self, capsys) -> None:
        configure_logging(LoggingConfig(level="INFO", format="json"))

        with correlation_context("req-42"):
            logging.getLogger("piimask.test").info("inside")
        logging.getLogger("piimask.test").info("outside")

        inside, outside = _json_lines(capsys.readouterr().err)
        assert inside["correlation_id"] == "req-42"
        assert "correlation_id" not in outside


class TestTraceOperation:
    """Test operation start, completion and failure events."""

    def test_success(self, capsys) -> None:
        configure_logging(LoggingConfig(level="DEBUG", format="json"))

        with trace_operation("mask_fields", category="web") as trace:
            trace["field_count"] = 4

        started, completed = _json_lines(capsys.readouterr().err)
        assert started["event"] == "Operation started"
        assert started["category"] == "web"
        assert completed["event"] == "Operation completed"
        assert completed["operation"] == "mask_fields"
        assert completed["field_count"] == 4
        assert completed["duration_seconds"] >= 0

    def test_failure_is_logged_and_reraised(self, capsys) -> None:
        configure_logging(LoggingConfig(level="DEBUG", format="json"))

        with pytest.raises(KeyError):
            with trace_operation("mask_fields"):
                raise KeyError("missing")

        started, failed = _json_lines(capsys.readouterr().err)
        assert failed["event"] == "Operation failed"
        assert failed["level"] == "error"
        assert failed["error_type"] == "KeyError"
