"""Utility functions for logging and error handling."""

from landmark.utils.errors import (
    ErrorCode,
    classify_exception,
    describe_error,
    get_user_message,
    truncate_error,
)

__all__ = [
    "ErrorCode",
    "classify_exception",
    "describe_error",
    "get_user_message",
    "truncate_error",
]
