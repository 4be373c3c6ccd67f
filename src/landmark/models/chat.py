"""Chat completion request and response models.

Wire names are snake_case; attributes use the camelCase names of the chat
surface. Every model accepts either form on input and serializes with the
wire names when dumped ``by_alias``.
"""

from pydantic import BaseModel, ConfigDict, Field

from landmark.config import DEFAULT_MODEL


class WireModel(BaseModel):
    """Base for models exchanged with the backend."""

    model_config = ConfigDict(populate_by_name=True)


class ReasoningDetail(WireModel):
    """Structured reasoning fragment attached to a reply."""

    type: str
    text: str
    format: str
    index: int


class ChatMessage(WireModel):
    """One turn in a conversation.

    The optional fields only ever come back from the backend; they are
    never sent on a request.
    """

    role: str
    content: str
    refusal: str | None = None
    reasoning: str | None = None
    reasoningDetails: list[ReasoningDetail] | None = Field(
        default=None, alias="reasoning_details"
    )


class ChatRequest(WireModel):
    """Request body for the chat completion endpoint."""

    model: str = Field(..., min_length=1)
    messages: list[ChatMessage]

    @classmethod
    def from_message(cls, message: str, model: str = DEFAULT_MODEL) -> "ChatRequest":
        """Build a single-turn request carrying ``message`` as the user turn."""
        return cls(model=model, messages=[ChatMessage(role="user", content=message)])


class ChatChoice(WireModel):
    """One generated alternative."""

    logprobs: str | None = None
    finishReason: str = Field(..., alias="finish_reason")
    nativeFinishReason: str = Field(..., alias="native_finish_reason")
    index: int
    message: ChatMessage


class ChatUsage(WireModel):
    """Token accounting for a completion."""

    promptTokens: int = Field(..., alias="prompt_tokens")
    completionTokens: int = Field(..., alias="completion_tokens")
    totalTokens: int = Field(..., alias="total_tokens")


class ChatData(WireModel):
    """Completion payload wrapped by the backend envelope."""

    id: str
    provider: str
    model: str
    object: str
    created: int
    choices: list[ChatChoice]
    usage: ChatUsage


class ChatResponse(WireModel):
    """Top-level success envelope returned by the backend."""

    success: bool
    data: ChatData

    @property
    def first_choice(self) -> ChatChoice | None:
        """The canonical choice, or None when the backend returned none."""
        return self.data.choices[0] if self.data.choices else None

    @property
    def is_valid(self) -> bool:
        """Whether the response is usable as a reply."""
        return self.success and self.first_choice is not None
