"""AI companion schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Message to the companion."""

    message: str = Field(..., min_length=1, max_length=4000)
    context: str | None = Field(None, max_length=8000)


class ChatResponse(BaseModel):
    """Companion reply.

    ``is_fallback`` is set when the model could not be reached and the reply
    is a canned one; such exchanges are not stored and the client may retry.
    """

    message: str
    tone: str
    suggestions: list[str] = Field(default_factory=list)
    is_fallback: bool = False


class ConversationResponse(BaseModel):
    """Stored chat exchange."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    message: str
    response: str
    tone: str | None
    created_at: datetime


class QuoteResponse(BaseModel):
    """Motivational quote."""

    quote: str
    author: str
    theme: str
