"""
Unit tests for structured logging and metrics helpers.
"""

import io
import json
import logging

import pytest

from lead_editor.observability import metrics
from lead_editor.observability.logger import (
    CustomJsonFormatter,
    get_logger,
    log_operation,
    setup_logger,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def json_logger():
    """Logger writing JSON lines into a buffer"""
    stream = io.StringIO()
    logger = setup_logger("lead-editor.test", level="DEBUG", format_type="json")
    logger.handlers[0].setStream(stream)
    yield logger, stream
    logger.handlers.clear()


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestLogger:
    """Tests for the JSON logger"""

    def test_json_record_fields(self, json_logger):
        logger, stream = json_logger

        logger.info("Saved room", extra={"record_id": "R001", "fields": ["status"]})

        record = _lines(stream)[0]
        assert record["message"] == "Saved room"
        assert record["level"] == "INFO"
        assert record["logger"] == "lead-editor.test"
        assert record["record_id"] == "R001"
        assert record["fields"] == ["status"]
        assert record["timestamp"]

    def test_text_format(self):
        logger = setup_logger("lead-editor.text", format_type="text")

        assert not isinstance(logger.handlers[0].formatter, CustomJsonFormatter)
        logger.handlers.clear()

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        logger = setup_logger("lead-editor.env")

        assert logger.level == logging.WARNING
        logger.handlers.clear()

    def test_setup_does_not_duplicate_handlers(self):
        setup_logger("lead-editor.dup")
        logger = setup_logger("lead-editor.dup")

        assert len(logger.handlers) == 1
        logger.handlers.clear()

    def test_get_logger_configures_once(self):
        first = get_logger("lead-editor.once")
        second = get_logger("lead-editor.once")

        assert first is second
        assert len(second.handlers) == 1
        second.handlers.clear()


class TestLogOperation:
    """Tests for the log_operation context manager"""

    def test_success(self, json_logger):
        logger, stream = json_logger

        with log_operation("Repair room names", logger=logger, property_id="P001"):
            pass

        started, completed = _lines(stream)
        assert started["message"] == "Starting: Repair room names"
        assert completed["status"] == "success"
        assert completed["property_id"] == "P001"
        assert completed["duration_seconds"] >= 0

    def test_failure_is_logged_and_reraised(self, json_logger):
        logger, stream = json_logger

        with pytest.raises(RuntimeError):
            with log_operation("Repair room names", logger=logger):
                raise RuntimeError("store down")

        failed = _lines(stream)[-1]
        assert failed["level"] == "ERROR"
        assert failed["status"] == "error"
        assert failed["error_type"] == "RuntimeError"
        assert failed["error_message"] == "store down"


class TestMetrics:
    """Tests for metric helpers"""

    def test_record_submission(self):
        labels = {"entity_type": "metrics_test", "status": "success"}
        before = metrics.get_sample_value("lead_editor_submissions_total", labels) or 0

        metrics.record_submission("metrics_test", "success", changed_fields=3)

        assert metrics.get_sample_value("lead_editor_submissions_total", labels) == before + 1
        assert metrics.get_sample_value(
            "lead_editor_changed_fields_per_submission_sum", {"entity_type": "metrics_test"}
        ) >= 3

    def test_noop_submission_has_no_size(self):
        metrics.record_submission("metrics_noop", "noop")

        assert metrics.get_sample_value(
            "lead_editor_changed_fields_per_submission_count", {"entity_type": "metrics_noop"}
        ) is None

    def test_record_validation_failure(self):
        labels = {"entity_type": "room", "rule_type": "metrics_test", "field_name": "room_number"}
        before = metrics.get_sample_value("lead_editor_validation_failures_total", labels) or 0

        metrics.record_validation_failure("room", "metrics_test", "room_number")

        assert metrics.get_sample_value("lead_editor_validation_failures_total", labels) == before + 1

    def test_unlabelled_counter(self):
        before = metrics.get_sample_value("lead_editor_cache_invalidations_total") or 0

        metrics.increment_counter(metrics.cache_invalidations_total, 2)

        assert metrics.get_sample_value("lead_editor_cache_invalidations_total") == before + 2

    def test_exposition(self):
        metrics.record_submission("metrics_test", "failure")

        text = metrics.generate_metrics().decode()

        assert "lead_editor_submissions_total" in text
        assert metrics.get_content_type().startswith("text/plain")
