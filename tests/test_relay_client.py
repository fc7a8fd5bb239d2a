"""Unit tests for the relay HTTP client."""
import json

import httpx
import pytest
from conftest import FakeLLMProvider

from chatrelay.client import ChatSession, RelayClient, RelayClientError
from chatrelay.llm import ChatMessage
from chatrelay.relay import SYSTEM_MESSAGE, RelayService, create_app


def client_for(handler) -> RelayClient:
    return RelayClient("http://relay.test", transport=httpx.MockTransport(handler))


class TestRelayClient:
    async def test_send_posts_chats_and_parses_output(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"output": {"role": "assistant", "content": "hi"}})

        async with client_for(handler) as relay:
            reply = await relay.send([ChatMessage(role="user", content="hello")])

        assert reply == ChatMessage(role="assistant", content="hi")
        assert requests[0].method == "POST"
        assert requests[0].url.path == "/"
        assert json.loads(requests[0].content) == {"chats": [{"role": "user", "content": "hello"}]}

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, json={"detail": "quota exceeded"}),
            httpx.Response(400, json={"detail": []}),
            httpx.Response(200, text="<html>not json</html>"),
            httpx.Response(200, json={"reply": "hi"}),
            httpx.Response(200, json={"output": {"role": "assistant"}}),
        ],
    )
    async def test_unusable_responses_raise(self, response):
        async with client_for(lambda request: response) as relay:
            with pytest.raises(RelayClientError):
                await relay.send([ChatMessage(role="user", content="hello")])

    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with client_for(handler) as relay:
            with pytest.raises(RelayClientError, match="connection refused"):
                await relay.send([ChatMessage(role="user", content="hello")])


class TestClientAgainstRelayApp:
    """Session -> RelayClient -> relay app -> fake upstream, in process."""

    async def test_round_trip(self):
        provider = FakeLLMProvider()
        app = create_app(service=RelayService(provider))
        relay = RelayClient("http://relay.test", transport=httpx.ASGITransport(app=app))
        session = ChatSession(relay)

        try:
            first = await session.submit("hello")
            second = await session.submit("and again")
        finally:
            await relay.close()

        assert first == second == ChatMessage(role="assistant", content="hi")
        assert [m.content for m in session.conversation] == ["hello", "hi", "and again", "hi"]

        # The relay adds the system message; the session never stores it
        assert provider.calls[1] == [SYSTEM_MESSAGE, *session.conversation[:3]]
        assert all(m.role != "system" for m in session.conversation)
