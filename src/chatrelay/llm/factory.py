"""Provider construction by name."""

from typing import Any

from .base import LLMProvider
from .providers import OpenAIProvider

_PROVIDERS: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Build the provider registered under ``provider``.

    ``config`` goes straight to the provider constructor. For ``"openai"``
    that is ``api_key`` (required), ``model``, ``organization``,
    ``base_url`` and any extra ``AsyncOpenAI`` keyword.

    Raises:
        ValueError: Unknown provider name
        TypeError: ``api_key`` missing or empty

    Example:
        >>> llm = create_llm_provider("openai", api_key="sk-...", organization="org-...")
    """
    provider_cls = _PROVIDERS.get(provider.lower())
    if provider_cls is None:
        supported = ", ".join(repr(name) for name in _PROVIDERS)
        raise ValueError(f"Unsupported provider: {provider}. Supported providers: {supported}")

    if not config.get("api_key"):
        raise TypeError(f"{provider_cls.__name__} requires a non-empty 'api_key'")
    return provider_cls(**config)
