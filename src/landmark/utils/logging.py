"""Structured logging with JSON format support."""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

# Correlation id of the chat send currently in progress
send_id_var: ContextVar[str | None] = ContextVar("send_id", default=None)

# Extra fields copied from log records into JSON output
EXTRA_FIELDS = (
    "method",
    "url",
    "status_code",
    "duration_ms",
    "error_type",
    "error_code",
)


def generate_send_id() -> str:
    """Generate a new send correlation id.

    Returns:
        A new UUID4 string.
    """
    return str(uuid.uuid4())


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        send_id = send_id_var.get()
        if send_id:
            log_entry["send_id"] = send_id

        if hasattr(record, "send_id") and record.send_id:
            log_entry["send_id"] = record.send_id

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                value = getattr(record, key)
                if value is not None:
                    log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    """Text log formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text with send id prefix."""
        send_id = send_id_var.get()
        if send_id:
            # Prefix a copy; the record is shared by every handler
            record = logging.makeLogRecord(record.__dict__)
            record.msg = f"[{send_id[:8]}] {record.msg}"
        return super().format(record)


def configure_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: Output format (json or text).
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # stderr keeps stdout free for chat replies
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(getattr(logging, level.upper()))

    if format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

