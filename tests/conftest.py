"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import Callable
from typing import Any

import pytest

from chatrelay.client import RecognitionConfig, RecognitionEnd, RelayClientError, Utterance
from chatrelay.llm import ChatMessage, LLMProvider, LLMResponse

ASSISTANT_REPLY = ChatMessage(role="assistant", content="hi")


class FakeLLMProvider(LLMProvider):
    """Records outbound conversations instead of calling an API."""

    def __init__(self, reply: ChatMessage = ASSISTANT_REPLY, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[ChatMessage]] = []
        self.closed = False

    async def chat_completion(self, messages, model=None, **kwargs) -> LLMResponse:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return LLMResponse(message=self.reply, model=model or "fake-model")

    async def close(self) -> None:
        self.closed = True


class FakeRelay:
    """Stands in for RelayClient; replies with ``reply`` or raises ``error``."""

    base_url = "http://relay.test"

    def __init__(self, reply: ChatMessage = ASSISTANT_REPLY, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[ChatMessage]] = []
        self.closed = False

    async def send(self, chats: list[ChatMessage]) -> ChatMessage:
        self.calls.append(list(chats))
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        self.closed = True


class GatedRelay:
    """Relay whose replies arrive only when the test releases them."""

    def __init__(self) -> None:
        self.calls: list[list[ChatMessage]] = []
        self.gates: list[asyncio.Future[ChatMessage]] = []

    async def send(self, chats: list[ChatMessage]) -> ChatMessage:
        self.calls.append(list(chats))
        gate = asyncio.get_running_loop().create_future()
        self.gates.append(gate)
        return await gate

    def release(self, index: int, content: str) -> None:
        self.gates[index].set_result(ChatMessage(role="assistant", content=content))

    def fail(self, index: int, error: Exception) -> None:
        self.gates[index].set_exception(error)


class FakeSynthesizer:
    """Records utterances; call ``finish()`` to end playback."""

    def __init__(self) -> None:
        self.spoken: list[Utterance] = []
        self.cancelled = 0
        self._on_end: Callable[[], None] | None = None

    def speak(self, utterance: Utterance, on_end: Callable[[], None]) -> None:
        self.spoken.append(utterance)
        self._on_end = on_end

    def cancel(self) -> None:
        self.cancelled += 1
        self._on_end = None

    def finish(self) -> None:
        on_end, self._on_end = self._on_end, None
        if on_end is not None:
            on_end()


class FakeRecognizer:
    """Dictation stub driven by the test."""

    def __init__(self) -> None:
        self.configs: list[RecognitionConfig] = []
        self.stops = 0
        self._on_transcript: Callable[[str], None] | None = None
        self._on_end: Callable[[RecognitionEnd], None] | None = None

    def start(self, config, on_transcript, on_end) -> None:
        self.configs.append(config)
        self._on_transcript = on_transcript
        self._on_end = on_end

    def stop(self) -> None:
        self.stops += 1
        self._end(RecognitionEnd.USER_STOPPED)

    def hear(self, transcript: str) -> None:
        assert self._on_transcript is not None
        self._on_transcript(transcript)

    def end_of_speech(self) -> None:
        self._end(RecognitionEnd.END_OF_SPEECH)

    def _end(self, reason: RecognitionEnd) -> None:
        if self._on_end is not None:
            self._on_end(reason)


class RecordingListener:
    """SessionListener that keeps every event."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def __getattr__(self, name: str) -> Callable[[Any], None]:
        if not name.startswith("on_"):
            raise AttributeError(name)
        return lambda value: self.events.append((name, value))

    def of(self, name: str) -> list[Any]:
        return [value for event, value in self.events if event == name]


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {"openai": os.getenv("OPENAI_API_KEY")}


@pytest.fixture
def sample_chats():
    return [
        ChatMessage(role="user", content="What is the capital of France?"),
        ChatMessage(role="assistant", content="Paris."),
        ChatMessage(role="user", content="And of Italy?"),
    ]


@pytest.fixture
def fake_provider():
    return FakeLLMProvider()


@pytest.fixture
def fake_relay():
    return FakeRelay()


@pytest.fixture
def failing_relay():
    return FakeRelay(error=RelayClientError("Relay call failed: connection refused"))


@pytest.fixture
def gated_relay():
    return GatedRelay()


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def listener():
    return RecordingListener()
