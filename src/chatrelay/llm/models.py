"""Message types shared by the relay, its client and the providers."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

# "ai" is what clients tag spoken replies with; "assistant" is what the upstream returns
Role = Literal["system", "user", "ai", "assistant"]


class ChatMessage(BaseModel):
    """One turn of a conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class LLMResponse(BaseModel):
    """A provider's answer: the reply turn plus bookkeeping."""

    model_config = ConfigDict(frozen=True)

    message: ChatMessage
    model: str
    usage: dict[str, int] | None = None
