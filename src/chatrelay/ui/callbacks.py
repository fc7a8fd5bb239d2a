"""Session listener for the TUI.

Hides the details of how the TUI receives updates from the chat session.
Uses thread-safe calls so a recognizer or synthesizer running on another
thread can still drive the widgets.
"""

import threading
from typing import TYPE_CHECKING, Any

from ..client import BUSY_STATES, SessionListener, SessionState
from ..llm.models import ChatMessage

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import ChatHistoryWidget, ChatInputBar, StatusBar


class TUISessionListener(SessionListener):
    """Mirrors session events onto the chat widgets."""

    def __init__(
        self,
        chat: "ChatHistoryWidget",
        input_bar: "ChatInputBar",
        status: "StatusBar",
        app: "App | None" = None
    ) -> None:
        self.chat = chat
        self.input_bar = input_bar
        self.status = status
        self.app = app

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def on_message(self, message: ChatMessage) -> None:
        self._call_thread_safe(self.chat.add_message, message)

    def on_state_change(self, state: SessionState) -> None:
        self._call_thread_safe(self.status.set_typing, state in BUSY_STATES)

    def on_input_change(self, text: str) -> None:
        self._call_thread_safe(self.input_bar.set_value, text)

    def on_capture_change(self, capturing: bool) -> None:
        self._call_thread_safe(self.input_bar.set_capturing, capturing)

    def on_pause_change(self, paused: bool) -> None:
        self._call_thread_safe(self.status.set_paused, paused)

    def on_error(self, error: Exception) -> None:
        self._call_thread_safe(self.status.show_error, str(error))
        if self.app is not None:
            self._call_thread_safe(
                self.app.notify, f"Error: {str(error)[:50]}", severity="error", timeout=5
            )
