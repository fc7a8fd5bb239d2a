"""Main Textual TUI application.

Orchestrates the UI components around a single ChatSession.
"""

import asyncio
from collections.abc import Iterable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..client import (
    ChatSession,
    RecognitionEnd,
    RelayClient,
    SpeechRecognizer,
    SpeechSynthesizer,
)
from .callbacks import TUISessionListener
from .styles import APP_CSS
from .themes import RELAY_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, StatusBar


class ChatRelayApp(App):
    """Textual chat client for a relay."""

    CSS = APP_CSS
    TITLE = "ChatRelay"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_pause", "Pause/Resume"),
        Binding("ctrl+s", "toggle_capture", "Speak/Stop"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
    ]

    def __init__(
        self,
        relay: RelayClient,
        synthesizer: SpeechSynthesizer | None = None,
        recognizer: SpeechRecognizer | None = None,
        resubmit_on: Iterable[RecognitionEnd] | None = None,
    ) -> None:
        super().__init__()
        self._relay = relay
        self._synthesizer = synthesizer
        self._recognizer = recognizer
        self._resubmit_on = resubmit_on
        self._session: ChatSession | None = None

    @property
    def session(self) -> ChatSession:
        if self._session is None:
            raise RuntimeError("Session is created when the app is mounted")
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield StatusBar(id="status-bar")
        yield ChatInputBar(id="chat-input-bar", speech_enabled=self._recognizer is not None)
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(RELAY_DARK)
        self.theme = "relay-dark"
        self.sub_title = self._relay.base_url

        listener = TUISessionListener(
            chat=self.query_one("#chat-history", ChatHistoryWidget),
            input_bar=self.query_one("#chat-input-bar", ChatInputBar),
            status=self.query_one("#status-bar", StatusBar),
            app=self,
        )
        session_kwargs = {}
        if self._resubmit_on is not None:
            session_kwargs["resubmit_on"] = self._resubmit_on
        self._session = ChatSession(
            self._relay,
            synthesizer=self._synthesizer,
            recognizer=self._recognizer,
            listener=listener,
            **session_kwargs,
        )
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_chat_input_bar_edited(self, event: ChatInputBar.Edited) -> None:
        self.session.set_input(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        if not event.value.strip():
            return
        self._send(event.value)

    def on_chat_input_bar_speak_toggled(self, event: ChatInputBar.SpeakToggled) -> None:
        self.action_toggle_capture()

    def on_status_bar_pause_toggled(self, event: StatusBar.PauseToggled) -> None:
        self.action_toggle_pause()

    @work(group="relay")
    async def _send(self, text: str) -> None:
        """Run the relay round trip as a background worker.

        Not exclusive: a new message never cancels one in flight.
        """
        await self.session.submit(text)

    def action_toggle_pause(self) -> None:
        paused = self.session.toggle_pause()
        self.notify("Speech paused" if paused else "Speech resumed", timeout=2)

    def action_toggle_capture(self) -> None:
        if not self.session.has_recognizer:
            self.notify("No speech recognizer configured", severity="warning", timeout=3)
            return
        self.session.toggle_capture()

    def action_copy_last_response(self) -> None:
        """Copy last reply to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    relay: RelayClient,
    synthesizer: SpeechSynthesizer | None = None,
    recognizer: SpeechRecognizer | None = None,
    resubmit_on: Iterable[RecognitionEnd] | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        relay: Client for the relay endpoint
        synthesizer: Optional speech output service
        recognizer: Optional dictation service; enables the Speak button
        resubmit_on: Recognition end reasons that auto-submit dictated text
    """
    app = ChatRelayApp(
        relay=relay,
        synthesizer=synthesizer,
        recognizer=recognizer,
        resubmit_on=resubmit_on,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        try:
            if app._session is not None:
                await app._session.close()
        finally:
            await relay.close()
