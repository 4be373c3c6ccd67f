"""Error handling utilities for consistent user-facing error messages."""

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standard error codes for failed chat sends."""

    # Request construction errors
    INVALID_TARGET = "INVALID_TARGET"
    ENCODING_FAILED = "ENCODING_FAILED"

    # Transport errors
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    BAD_STATUS = "BAD_STATUS"
    EMPTY_PAYLOAD = "EMPTY_PAYLOAD"

    # Response errors
    DECODING_FAILED = "DECODING_FAILED"
    INVALID_RESPONSE_SHAPE = "INVALID_RESPONSE_SHAPE"

    # Session errors
    EMPTY_MESSAGE = "EMPTY_MESSAGE"
    SEND_IN_PROGRESS = "SEND_IN_PROGRESS"

    INTERNAL_ERROR = "INTERNAL_ERROR"


# User-friendly error messages by error code
USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_TARGET: "The URL is invalid",
    ErrorCode.ENCODING_FAILED: "Failed to encode request",
    ErrorCode.TRANSPORT_FAILED: "Network error",
    ErrorCode.BAD_STATUS: "Server returned an error status code",
    ErrorCode.EMPTY_PAYLOAD: "No data received from server",
    ErrorCode.DECODING_FAILED: "Failed to parse response",
    ErrorCode.INVALID_RESPONSE_SHAPE: "Invalid response format",
    ErrorCode.EMPTY_MESSAGE: "Message cannot be empty",
    ErrorCode.SEND_IN_PROGRESS: "A message is already being sent",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
}

# Default message for unknown errors
DEFAULT_USER_MESSAGE = "An unexpected error occurred"

# Maximum length for error details
MAX_ERROR_LENGTH = 500


def get_user_message(code: ErrorCode | None, default: str | None = None) -> str:
    """Get user-appropriate error message for an error code.

    Args:
        code: The error code.
        default: Default message if code not found.

    Returns:
        User-friendly error message.
    """
    if code is None:
        return default or DEFAULT_USER_MESSAGE

    return USER_MESSAGES.get(code, default or DEFAULT_USER_MESSAGE)


def truncate_error(error: str, max_length: int = MAX_ERROR_LENGTH) -> str:
    """Truncate error message if too long.

    Args:
        error: The error message.
        max_length: Maximum allowed length.

    Returns:
        Truncated error message.
    """
    if len(error) <= max_length:
        return error

    return error[: max_length - 3] + "..."


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception to an error code.

    Args:
        exc: The exception to classify.

    Returns:
        Appropriate error code.
    """
    # Import here to avoid circular imports
    import httpx
    from pydantic import ValidationError

    from landmark.exceptions import LandmarkError

    if isinstance(exc, LandmarkError):
        return exc.code

    if isinstance(exc, ValidationError):
        return ErrorCode.DECODING_FAILED

    if isinstance(exc, (httpx.TransportError, TimeoutError, ConnectionError)):
        return ErrorCode.TRANSPORT_FAILED

    return ErrorCode.INTERNAL_ERROR


def describe_error(exc: BaseException) -> str:
    """Convert any exception into a single human-readable message.

    Args:
        exc: The exception to describe.

    Returns:
        Message suitable for display in the chat surface.
    """
    from landmark.exceptions import LandmarkError

    if isinstance(exc, LandmarkError):
        return truncate_error(str(exc))

    return truncate_error(f"{DEFAULT_USER_MESSAGE}: {exc}")


def log_error(
    exc: BaseException,
    code: ErrorCode | None = None,
    send_id: str | None = None,
    **context: Any,
) -> None:
    """Log an error with context.

    Args:
        exc: The exception that occurred.
        code: Optional pre-classified error code.
        send_id: Optional send correlation id.
        **context: Additional context to include in log.
    """
    if code is None:
        code = classify_exception(exc)

    log_extra = {
        "error_code": code.value,
        "error_type": type(exc).__name__,
        "send_id": send_id,
        **context,
    }

    # Unclassified failures get a traceback; classified ones are expected
    if code == ErrorCode.INTERNAL_ERROR:
        logger.exception("Internal error occurred", extra=log_extra)
    elif code in (ErrorCode.EMPTY_MESSAGE, ErrorCode.SEND_IN_PROGRESS):
        logger.info(f"Send rejected: {exc}", extra=log_extra)
    else:
        logger.error(f"Send failed: {exc}", extra=log_extra)
