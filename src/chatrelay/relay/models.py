"""Wire models for the relay endpoint."""

from pydantic import BaseModel, Field

from ..llm.models import ChatMessage


class RelayRequest(BaseModel):
    chats: list[ChatMessage] = Field(
        ...,
        description="Conversation so far, oldest first, without the system instruction",
    )


class RelayResponse(BaseModel):
    output: ChatMessage = Field(..., description="First reply choice from the upstream service")
