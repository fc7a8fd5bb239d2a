"""Chat session controller.

Owns one client's conversation and drives the send/reply/speak cycle:

    IDLE -> COMPOSING -> SENDING -> AWAITING_REPLY -> SPEAKING -> IDLE

Speech capture runs as a parallel sub-state (``capturing``). All mutation
goes through the transition methods below; observers subscribe with a
``SessionListener`` passed at construction.

Speech services may call back from their own threads. Those callbacks are
handed to the session's event loop before any state changes.
"""

import asyncio
import logging
import threading
from collections.abc import Callable, Coroutine, Iterable
from typing import Any, Protocol

from ..llm.models import ChatMessage
from .models import RecognitionConfig, RecognitionEnd, SessionState, Utterance
from .relay_client import RelayClientError
from .speech import SpeechRecognizer, SpeechSynthesizer

logger = logging.getLogger(__name__)

BUSY_STATES = frozenset({SessionState.SENDING, SessionState.AWAITING_REPLY, SessionState.SPEAKING})


class ChatRelay(Protocol):
    async def send(self, chats: list[ChatMessage]) -> ChatMessage: ...


class SessionListener:
    """Receives session events. Override the ones you need."""

    def on_message(self, message: ChatMessage) -> None:
        """A message was appended to the conversation."""

    def on_state_change(self, state: SessionState) -> None:
        """The session moved to a new state."""

    def on_input_change(self, text: str) -> None:
        """The pending input changed (typing, dictation, or cleared on submit)."""

    def on_capture_change(self, capturing: bool) -> None:
        """Speech capture started or ended."""

    def on_pause_change(self, paused: bool) -> None:
        """Speech output was paused or resumed."""

    def on_error(self, error: Exception) -> None:
        """A relay call failed."""


class ChatSession:
    """Conversation state for a single client.

    Args:
        relay: Object with an async ``send(chats)`` returning the reply message
        synthesizer: Optional speech output service; replies are not spoken without one
        recognizer: Optional dictation service used by ``toggle_capture``
        listener: Event subscriber, registered for the session's lifetime
        resubmit_on: Recognition end reasons that auto-submit captured text
        recognition_config: Settings handed to the recognizer on each capture
    """

    def __init__(
        self,
        relay: ChatRelay,
        synthesizer: SpeechSynthesizer | None = None,
        recognizer: SpeechRecognizer | None = None,
        listener: SessionListener | None = None,
        resubmit_on: Iterable[RecognitionEnd] = (
            RecognitionEnd.USER_STOPPED,
            RecognitionEnd.END_OF_SPEECH,
        ),
        recognition_config: RecognitionConfig | None = None,
    ) -> None:
        self._relay = relay
        self._synthesizer = synthesizer
        self._recognizer = recognizer
        self._listener = listener or SessionListener()
        self._resubmit_on = frozenset(resubmit_on)
        self._recognition_config = recognition_config or RecognitionConfig()

        self._conversation: list[ChatMessage] = []
        self._input = ""
        self._state = SessionState.IDLE
        self._paused = False
        self._capturing = False
        self._utterance: Utterance | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._in_flight = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loop_thread: int | None = None
        self.last_error: Exception | None = None

    # --------- Read-only views ---------
    @property
    def conversation(self) -> tuple[ChatMessage, ...]:
        return tuple(self._conversation)

    @property
    def input_text(self) -> str:
        return self._input

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        """True while a reply is pending or being spoken ("Typing...")."""
        return self._state in BUSY_STATES

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def capturing(self) -> bool:
        return self._capturing

    @property
    def current_utterance(self) -> Utterance | None:
        return self._utterance

    @property
    def has_recognizer(self) -> bool:
        return self._recognizer is not None

    # --------- Composing and sending ---------
    def set_input(self, text: str) -> None:
        """Replace the pending input."""
        self._input = text
        self._listener.on_input_change(text)
        if self._state in (SessionState.IDLE, SessionState.COMPOSING):
            self._set_state(SessionState.COMPOSING if text.strip() else SessionState.IDLE)

    async def submit(self, text: str | None = None) -> ChatMessage | None:
        """Send ``text`` (or the pending input) and record the reply.

        Blank text is ignored. A failed relay call keeps the user message,
        stores the error in ``last_error`` and returns None.
        """
        content = (self._input if text is None else text).strip()
        if not content:
            return None

        self._append(ChatMessage(role="user", content=content))
        self._input = ""
        self._listener.on_input_change("")
        self.last_error = None

        self._bind_loop()
        self._set_state(SessionState.SENDING)
        request = self._round_trip(list(self._conversation))
        self._set_state(SessionState.AWAITING_REPLY)
        try:
            reply = await request
        except RelayClientError as exc:
            logger.warning("Relay call failed: %s", exc)
            self.last_error = exc
            self._listener.on_error(exc)
            self._settle()
            return None

        self._append(reply)
        self._speak(reply)
        return reply

    # --------- Speech output ---------
    def toggle_pause(self) -> bool:
        """Pause or resume speech output. Returns the new paused flag."""
        if self._paused:
            self._paused = False
            if (
                self._synthesizer is not None
                and self._utterance is not None
                and not self.is_busy
            ):
                self._set_state(SessionState.SPEAKING)
                self._synthesizer.speak(self._utterance, self._on_utterance_end)
        else:
            self._paused = True
            if self._synthesizer is not None:
                self._synthesizer.cancel()
            if self._state is SessionState.SPEAKING:
                self._settle()
        self._listener.on_pause_change(self._paused)
        return self._paused

    def utterance_finished(self) -> None:
        """Playback of the current utterance ended."""
        if self._state is SessionState.SPEAKING:
            self._settle()

    # --------- Speech capture ---------
    def toggle_capture(self) -> None:
        """Start dictation, or stop the one in progress."""
        if self._recognizer is None:
            raise RuntimeError("No speech recognizer attached to this session")

        if self._capturing:
            logger.debug("Stopping speech capture")
            self._recognizer.stop()
            return

        self._bind_loop()
        self._capturing = True
        self._listener.on_capture_change(True)
        logger.debug("Starting speech capture (%s)", self._recognition_config.lang)
        self._recognizer.start(
            self._recognition_config,
            self._on_transcript,
            self._on_recognition_end,
        )

    async def recognition_ended(self, reason: RecognitionEnd) -> ChatMessage | None:
        """Handle the end of a dictation session.

        Captured text is submitted when ``reason`` is in the session's
        ``resubmit_on`` policy. Ends reported after the first are ignored.
        """
        if not self._capturing:
            return None
        self._capturing = False
        self._listener.on_capture_change(False)
        logger.debug("Speech capture ended: %s", reason.value)

        if reason not in self._resubmit_on:
            return None
        return await self.submit()

    # --------- Speech service callbacks (any thread) ---------
    def _on_transcript(self, text: str) -> None:
        self._call_on_loop(self.set_input, text)

    def _on_recognition_end(self, reason: RecognitionEnd) -> None:
        self._call_on_loop(self._spawn_recognition_end, reason)

    def _on_utterance_end(self) -> None:
        self._call_on_loop(self.utterance_finished)

    def _spawn_recognition_end(self, reason: RecognitionEnd) -> None:
        self._spawn(self.recognition_ended(reason))

    # --------- Lifecycle ---------
    async def wait_pending(self) -> None:
        """Wait for submissions started by recognizer callbacks."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    async def close(self) -> None:
        if self._capturing and self._recognizer is not None:
            self._recognizer.stop()
        if self._synthesizer is not None:
            self._synthesizer.cancel()
        await self.wait_pending()

    # --------- Internals ---------
    async def _round_trip(self, chats: list[ChatMessage]) -> ChatMessage:
        self._in_flight += 1
        try:
            return await self._relay.send(chats)
        finally:
            self._in_flight -= 1

    def _append(self, message: ChatMessage) -> None:
        self._conversation.append(message)
        self._listener.on_message(message)

    def _speak(self, message: ChatMessage) -> None:
        if self._synthesizer is None:
            self._settle()
            return
        self._utterance = Utterance(text=message.content, role="ai")
        if self._paused:
            self._settle()
            return
        self._set_state(SessionState.SPEAKING)
        self._synthesizer.speak(self._utterance, self._on_utterance_end)

    def _settle(self) -> None:
        # Another submit is still waiting on the relay
        if self._in_flight:
            self._set_state(SessionState.AWAITING_REPLY)
        elif self._input.strip():
            self._set_state(SessionState.COMPOSING)
        else:
            self._set_state(SessionState.IDLE)

    def _set_state(self, state: SessionState) -> None:
        if state is not self._state:
            self._state = state
            self._listener.on_state_change(state)

    def _bind_loop(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._loop_thread = threading.get_ident()

    def _call_on_loop(self, func: Callable[..., None], *args: Any) -> None:
        """Run ``func`` on the session's loop, hopping threads when needed."""
        if self._loop is None or threading.get_ident() == self._loop_thread:
            func(*args)
        else:
            self._loop.call_soon_threadsafe(func, *args)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
