"""OpenAI Chat Completions backend."""

import logging
from typing import Any

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"

# Chat Completions has no "ai" role
_ROLE_ALIASES = {"ai": "assistant"}


def _to_openai_messages(messages: list[ChatMessage]) -> list[dict[str, str]]:
    return [
        {"role": _ROLE_ALIASES.get(m.role, m.role), "content": m.content}
        for m in messages
    ]


def _usage_of(completion: ChatCompletion) -> dict[str, int] | None:
    if completion.usage is None:
        return None
    return completion.usage.model_dump(include={"prompt_tokens", "completion_tokens", "total_tokens"})


class OpenAIProvider(LLMProvider):
    """Talks to OpenAI through ``AsyncOpenAI``.

    Authenticates with the API key and, when given, the organization id.
    Client retries are off by default: a failed call surfaces as the
    SDK's ``openai.APIError`` on the first attempt.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        organization: str | None = None,
        max_retries: int = 0,
        **client_kwargs: Any
    ):
        """
        Args:
            api_key: OpenAI secret key
            model: Model used when a call does not name one
            base_url: Alternative API root (proxies, compatible servers)
            organization: Sent as the ``OpenAI-Organization`` header
            max_retries: Passed to the SDK client
            **client_kwargs: Extra ``AsyncOpenAI`` arguments, e.g. ``http_client``
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            organization=organization,
            base_url=base_url,
            max_retries=max_retries,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        target = model or self._model
        logger.debug("Requesting completion: model=%s messages=%d", target, len(messages))

        completion = await self._client.chat.completions.create(
            model=target,
            messages=_to_openai_messages(messages),
            **kwargs
        )

        first = completion.choices[0].message
        return LLMResponse(
            message=ChatMessage(role=first.role, content=first.content or ""),
            model=completion.model or target,
            usage=_usage_of(completion),
        )

    async def close(self) -> None:
        await self._client.close()
