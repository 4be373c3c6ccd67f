"""Exception hierarchy for the LandMark chat client.

Every exception carries an ``ErrorCode`` and renders as a user-facing
message via ``str()``. Wrapping kinds keep the underlying ``cause``.
"""

from landmark.utils.errors import ErrorCode, get_user_message


class LandmarkError(Exception):
    """Base exception for all classified failures."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or get_user_message(self.code))


class _WrappingError(LandmarkError):
    """Failure that wraps an underlying cause."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"{get_user_message(self.code)}: {cause}")


# Client-level failures


class NetworkError(LandmarkError):
    """Base for failures raised by the API client."""


class InvalidTargetError(NetworkError):
    """Endpoint path and base address do not form a valid absolute URL."""

    code = ErrorCode.INVALID_TARGET

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__()


class EncodingFailedError(_WrappingError, NetworkError):
    """Outbound body could not be serialized."""

    code = ErrorCode.ENCODING_FAILED


class TransportFailedError(_WrappingError, NetworkError):
    """Connection, DNS, TLS or timeout fault."""

    code = ErrorCode.TRANSPORT_FAILED


class BadStatusError(NetworkError):
    """HTTP status outside the 2xx range, or no status at all (0).

    Args:
        status_code: The literal status observed, 0 if none.
        body: Response body text kept for diagnostics only.
    """

    code = ErrorCode.BAD_STATUS

    def __init__(self, status_code: int, body: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server returned status code: {status_code}")


class EmptyPayloadError(NetworkError):
    """Successful status but zero-length body."""

    code = ErrorCode.EMPTY_PAYLOAD


class DecodingFailedError(_WrappingError, NetworkError):
    """Payload did not match the expected contract.

    Attributes:
        fields: Dotted paths of the offending fields, when known.
    """

    code = ErrorCode.DECODING_FAILED

    def __init__(self, cause: BaseException, fields: list[str] | None = None) -> None:
        self.fields = fields or []
        super().__init__(cause)


# Chat-level failures


class ChatError(LandmarkError):
    """Base for failures raised by the chat session."""


class EmptyMessageError(ChatError):
    """User submitted a blank or whitespace-only message."""

    code = ErrorCode.EMPTY_MESSAGE


class InvalidResponseShapeError(ChatError):
    """Response decoded but failed the success/choices check."""

    code = ErrorCode.INVALID_RESPONSE_SHAPE


class SendInProgressError(ChatError):
    """A send was issued while another is still outstanding."""

    code = ErrorCode.SEND_IN_PROGRESS


# Item store failures


class ItemStoreError(LandmarkError):
    """Item store file could not be read or parsed."""

    code = ErrorCode.INTERNAL_ERROR
