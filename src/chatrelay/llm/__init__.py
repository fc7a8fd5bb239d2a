"""Upstream completion providers behind a common interface."""

from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, Role
from .providers import OpenAIProvider

__all__ = [
    "ChatMessage",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "Role",
    "create_llm_provider",
]
