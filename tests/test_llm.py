"""Unit tests for the llm module."""
import json

import httpx
import openai
import pytest
from pydantic import ValidationError

from chatrelay.llm import (
    ChatMessage,
    LLMProvider,
    OpenAIProvider,
    create_llm_provider,
)
from chatrelay.llm.providers.openai import DEFAULT_MODEL, _to_openai_messages


def completion_body(content: str = "hi", role: str = "assistant") -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": DEFAULT_MODEL,
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": role, "content": content},
            }
        ],
    }


def mock_provider(handler, **kwargs) -> OpenAIProvider:
    """OpenAIProvider whose HTTP traffic goes to ``handler``."""
    return OpenAIProvider(
        api_key="sk-test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        **kwargs
    )


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestChatMessage:
    def test_message_is_immutable(self):
        message = ChatMessage(role="user", content="hello")
        with pytest.raises(ValidationError):
            message.content = "changed"  # type: ignore[misc]

    @pytest.mark.parametrize("role", ["system", "user", "ai", "assistant"])
    def test_known_roles_accepted(self, role):
        assert ChatMessage(role=role, content="x").role == role

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ChatMessage(role="robot", content="x")  # type: ignore[arg-type]


class TestFactory:
    def test_creates_openai_provider_with_default_model(self):
        provider = create_llm_provider("openai", api_key="sk-test")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-3.5-turbo"

    def test_provider_name_is_case_insensitive(self):
        provider = create_llm_provider("OpenAI", api_key="sk-test", model="gpt-4o-mini")
        assert provider.model == "gpt-4o-mini"

    def test_missing_api_key_raises(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("openai", api_key=None)

    def test_unsupported_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("llamafile", api_key="x")


class TestOpenAIProvider:
    def test_ai_role_sent_as_assistant(self):
        messages = [
            ChatMessage(role="system", content="s"),
            ChatMessage(role="user", content="u"),
            ChatMessage(role="ai", content="a"),
        ]
        assert _to_openai_messages(messages) == [
            {"role": "system", "content": "s"},
            {"role": "user", "content": "u"},
            {"role": "assistant", "content": "a"},
        ]

    async def test_returns_first_choice_message(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=completion_body("hi"))

        provider = mock_provider(handler, organization="org-test")
        try:
            response = await provider.chat_completion([ChatMessage(role="user", content="hello")])
        finally:
            await provider.close()

        assert response.message == ChatMessage(role="assistant", content="hi")
        assert response.model == DEFAULT_MODEL
        assert response.usage is None

        assert len(requests) == 1
        sent = json.loads(requests[0].content)
        assert sent["model"] == "gpt-3.5-turbo"
        assert sent["messages"] == [{"role": "user", "content": "hello"}]
        assert requests[0].headers["OpenAI-Organization"] == "org-test"
        assert requests[0].headers["Authorization"] == "Bearer sk-test"

    async def test_usage_is_reported(self):
        body = completion_body()
        body["usage"] = {"prompt_tokens": 5, "completion_tokens": 1, "total_tokens": 6}

        provider = mock_provider(lambda request: httpx.Response(200, json=body))
        try:
            response = await provider.chat_completion([ChatMessage(role="user", content="x")])
        finally:
            await provider.close()

        assert response.usage == {"prompt_tokens": 5, "completion_tokens": 1, "total_tokens": 6}

    async def test_upstream_error_propagates_without_retry(self):
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(
                429,
                json={"error": {"message": "You exceeded your current quota", "type": "insufficient_quota"}},
            )

        provider = mock_provider(handler)
        try:
            with pytest.raises(openai.RateLimitError):
                await provider.chat_completion([ChatMessage(role="user", content="x")])
        finally:
            await provider.close()

        assert attempts == 1

    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: one round trip against OpenAI."""
        if not api_keys["openai"]:
            pytest.skip("OPENAI_API_KEY not set")

        provider = OpenAIProvider(api_key=api_keys["openai"])
        try:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Reply with the single word: pong")]
            )
        finally:
            await provider.close()

        assert response.message.role == "assistant"
        assert response.message.content
