"""Relay service: prefixes the conversation and forwards it upstream.

Hides how the outbound conversation is assembled from the HTTP layer.
"""

import logging
from collections.abc import Sequence

from ..config import Settings
from ..llm import ChatMessage, LLMProvider, create_llm_provider

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = "Answer the below queries."
SYSTEM_MESSAGE = ChatMessage(role="system", content=SYSTEM_INSTRUCTION)


def build_messages(chats: Sequence[ChatMessage]) -> list[ChatMessage]:
    """Return the outbound conversation: the system message, then ``chats`` in order."""
    return [SYSTEM_MESSAGE, *chats]


class RelayService:
    """Forwards conversations to an upstream completion provider.

    Upstream errors propagate unchanged; there is no retry.
    """

    def __init__(self, llm: LLMProvider, model: str | None = None) -> None:
        self._llm = llm
        self._model = model

    @property
    def llm(self) -> LLMProvider:
        return self._llm

    async def relay(self, chats: Sequence[ChatMessage]) -> ChatMessage:
        """Send ``chats`` upstream and return the reply message."""
        messages = build_messages(chats)
        logger.info("Forwarding %d message(s) upstream", len(messages))
        response = await self._llm.chat_completion(messages, model=self._model)
        logger.info(
            "Upstream replied: model=%s chars=%d usage=%s",
            response.model,
            len(response.message.content),
            response.usage,
        )
        return response.message

    async def close(self) -> None:
        await self._llm.close()


def build_relay_service(settings: Settings) -> RelayService:
    """Create a relay service for the configured OpenAI account.

    Raises:
        TypeError: If no API key is configured
    """
    llm = create_llm_provider(
        "openai",
        api_key=settings.openai_api_key,
        model=settings.chat_model,
        organization=settings.openai_organization,
        base_url=settings.openai_base_url,
    )
    return RelayService(llm, model=settings.chat_model)
