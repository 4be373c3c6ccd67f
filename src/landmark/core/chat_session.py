"""Chat session: the single send operation exposed to the chat surface."""

import logging

from pydantic import BaseModel

from landmark.client.api_client import APIClient, get_api_client
from landmark.client.endpoints import ChatEndpoint
from landmark.config import DEFAULT_MODEL, Settings
from landmark.exceptions import (
    EmptyMessageError,
    InvalidResponseShapeError,
    SendInProgressError,
)
from landmark.models.chat import ChatRequest, ChatResponse
from landmark.utils.errors import (
    ErrorCode,
    classify_exception,
    describe_error,
    log_error,
)
from landmark.utils.logging import generate_send_id, send_id_var

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response yet"


class SendResult(BaseModel):
    """Outcome of a send: exactly one of ``reply`` or ``error`` is set."""

    reply: str | None = None
    error: str | None = None
    code: ErrorCode | None = None

    @property
    def ok(self) -> bool:
        return self.reply is not None

    @classmethod
    def failure(cls, exc: BaseException) -> "SendResult":
        return cls(error=describe_error(exc), code=classify_exception(exc))


def extract_reply(response: ChatResponse) -> str:
    """Return the reply text of a decoded response.

    Raises:
        InvalidResponseShapeError: If the backend reported failure or
            returned no choices.
    """
    if not response.is_valid:
        raise InvalidResponseShapeError()
    return response.first_choice.message.content


def preview(text: str, max_length: int) -> str:
    """First ``max_length`` characters of ``text``, with "..." when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ChatSession:
    """State and operations behind one chat surface.

    Only one send may be outstanding at a time; a second send issued while
    the first is pending is rejected without touching session state.

    Args:
        client: API client to use; defaults to the process-wide client.
        model: Model identifier sent with every request.
        preview_length: Character budget of ``response_preview``.
    """

    def __init__(
        self,
        client: APIClient | None = None,
        model: str = DEFAULT_MODEL,
        preview_length: int = 200,
    ) -> None:
        self._client = client
        self.model = model
        self.preview_length = preview_length

        self.is_loading = False
        self.last_response: str | None = None
        self.error_message: str | None = None
        self.is_success = False

    @classmethod
    def from_settings(cls, settings: Settings, client: APIClient | None = None) -> "ChatSession":
        """Create a session using the chat settings and the shared client."""
        return cls(
            client=client or get_api_client(settings),
            model=settings.chat.model,
            preview_length=settings.chat.preview_length,
        )

    @property
    def client(self) -> APIClient:
        if self._client is None:
            self._client = get_api_client()
        return self._client

    async def send(self, message: str) -> SendResult:
        """Send a user message and return the reply or a user-facing error.

        Args:
            message: Free text entered by the user. It is sent as-is; blank
                input is rejected before any request is built.

        Returns:
            SendResult with either the reply or the error message.
        """
        if self.is_loading:
            exc = SendInProgressError()
            log_error(exc)
            return SendResult.failure(exc)

        token = send_id_var.set(generate_send_id())
        try:
            self._clear_state()

            if not message.strip():
                exc = EmptyMessageError()
                log_error(exc)
                self.error_message = str(exc)
                return SendResult.failure(exc)

            self.is_loading = True
            try:
                request = ChatRequest.from_message(message, model=self.model)
                response = await self.client.request(
                    ChatEndpoint.SEND_MESSAGE, ChatResponse, body=request
                )
                reply = extract_reply(response)
            except Exception as e:
                log_error(e, send_id=send_id_var.get())
                result = SendResult.failure(e)
                self.error_message = result.error
                self.is_success = False
                return result
            finally:
                self.is_loading = False

            self.last_response = reply
            self.is_success = True
            self.error_message = None
            logger.info(f"Received reply ({len(reply)} chars)")
            return SendResult(reply=reply)
        finally:
            send_id_var.reset(token)

    def clear(self) -> None:
        """Reset the stored reply and error. No network effect."""
        self._clear_state()
        self.last_response = None

    def _clear_state(self) -> None:
        self.error_message = None
        self.is_success = False

    @property
    def has_data(self) -> bool:
        return self.last_response is not None

    @property
    def has_error(self) -> bool:
        return self.error_message is not None

    @property
    def formatted_response(self) -> str:
        if self.last_response is None:
            return NO_RESPONSE_TEXT
        return self.last_response

    @property
    def response_preview(self) -> str:
        if self.last_response is None:
            return NO_RESPONSE_TEXT
        return preview(self.last_response, self.preview_length)
