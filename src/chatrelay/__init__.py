"""
ChatRelay: a chat relay for an OpenAI completion backend, with a
session-controlled chat client.

Each module hides a specific design decision:
- llm: which upstream completion service is called, and how
- relay: the HTTP surface clients talk to
- client: conversation state, relay transport and speech services
- ui / cli: how a person drives a session
"""

__version__ = "0.1.0"

from .client import ChatSession, RelayClient, RelayClientError
from .llm import ChatMessage, LLMProvider, create_llm_provider
from .relay import RelayService, build_messages, create_app

__all__ = [
    "ChatMessage",
    "ChatSession",
    "LLMProvider",
    "RelayClient",
    "RelayClientError",
    "RelayService",
    "build_messages",
    "create_app",
    "create_llm_provider",
]
