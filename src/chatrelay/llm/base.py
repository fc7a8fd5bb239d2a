"""Interface every upstream completion backend implements."""

from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """A completion backend the relay can forward conversations to.

    The relay only depends on this interface, so the concrete service,
    its client library and its credentials stay behind it. Use it as an
    async context manager to release the underlying HTTP pool:

        async with create_llm_provider("openai", api_key=key) as llm:
            reply = (await llm.chat_completion(messages)).message
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Ask the backend for the next message of ``messages``.

        Args:
            messages: Full outbound conversation, oldest first
            model: Model id for this call only; the provider default otherwise
            **kwargs: Passed through to the backend request

        Returns:
            LLMResponse wrapping the first reply choice

        Errors raised by the backend client propagate unchanged.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the backend client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await self.close()
        except RuntimeError as e:
            # httpx pools can outlive the loop at interpreter shutdown
            if "Event loop is closed" not in str(e):
                raise
