"""Tests for structured logging."""

import json
import logging
import uuid

from landmark.utils.logging import (
    JsonFormatter,
    TextFormatter,
    configure_logging,
    generate_send_id,
    send_id_var,
)


def _record(msg: str = "Test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_basic_log_format(self):
        """Test basic log formatting."""
        data = json.loads(JsonFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["logger"] == "test"
        assert "timestamp" in data

    def test_timestamp_format(self):
        """Test timestamp is ISO 8601 with Z suffix."""
        data = json.loads(JsonFormatter().format(_record()))

        assert data["timestamp"].endswith("Z")
        from datetime import datetime

        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))

    def test_includes_send_id_from_context(self):
        """Test send id from context variable."""
        token = send_id_var.set("test-send-id")
        try:
            data = json.loads(JsonFormatter().format(_record()))
        finally:
            send_id_var.reset(token)

        assert data["send_id"] == "test-send-id"

    def test_includes_extra_fields(self):
        """Test request fields passed via extra are included."""
        record = _record(
            method="POST",
            url="https://backend.test/api/ai/chat",
            status_code=200,
            duration_ms=42,
            error_code=None,
        )
        data = json.loads(JsonFormatter().format(record))

        assert data["method"] == "POST"
        assert data["url"] == "https://backend.test/api/ai/chat"
        assert data["status_code"] == 200
        assert data["duration_ms"] == 42
        assert "error_code" not in data

    def test_includes_exception(self):
        """Test exception info is included."""
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_prefixes_send_id(self):
        """Test the first eight characters of the send id prefix the message."""
        token = send_id_var.set("abcdef1234567890")
        try:
            output = TextFormatter().format(_record("hello"))
        finally:
            send_id_var.reset(token)

        assert "[abcdef12] hello" in output

    def test_record_not_mutated(self):
        """Test formatting for several handlers prefixes each output once."""
        record = _record("hello")
        token = send_id_var.set("abcdef1234567890")
        try:
            first = TextFormatter().format(record)
            second = TextFormatter().format(record)
        finally:
            send_id_var.reset(token)

        assert record.msg == "hello"
        assert first.count("[abcdef12]") == 1
        assert second.count("[abcdef12]") == 1

    def test_without_send_id(self):
        """Test plain output without a send id."""
        output = TextFormatter().format(_record("hello"))
        assert output.endswith(" - INFO - test - hello")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_handler(self):
        """Test json format installs a JsonFormatter."""
        configure_logging(level="DEBUG", format="json")
        root = logging.getLogger()

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_text_handler(self):
        """Test text format installs a TextFormatter."""
        configure_logging(level="WARNING", format="text")
        root = logging.getLogger()

        assert isinstance(root.handlers[0].formatter, TextFormatter)
        assert root.level == logging.WARNING


def test_generate_send_id_is_uuid():
    """Test send ids are UUID4 strings."""
    assert uuid.UUID(generate_send_id()).version == 4
