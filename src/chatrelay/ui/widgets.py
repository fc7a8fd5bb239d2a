"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering
- Input bar layout (text entry, Send, Speak/Stop)
- Status line (typing indicator, pause toggle)
"""

from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Static

from ..llm.models import ChatMessage

EMPTY_PLACEHOLDER = "No messages"
INPUT_PLACEHOLDER = "Speak or type a message here and hit Enter..."


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation view."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[ChatMessage] = []

    def on_mount(self) -> None:
        self.mount(Static(EMPTY_PLACEHOLDER, id="chat-empty"))

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def add_message(self, message: ChatMessage) -> None:
        """Append a message and scroll to it."""
        if not self._messages:
            self.query("#chat-empty").remove()
        self._messages.append(message)
        self._render_message(message)
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last non-user message."""
        for msg in reversed(self._messages):
            if msg.role != "user":
                return msg.content
        return None

    def _render_message(self, msg: ChatMessage) -> None:
        border_class = "user-message" if msg.role == "user" else "assistant-message"
        timestamp = datetime.now().strftime("%H:%M:%S")
        header_text = f"{msg.role.upper()} [{timestamp}]"

        container = Vertical(classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header_text, classes="message-header"))
        container.compose_add_child(Static(msg.content, classes="message-content", markup=False))
        self.mount(container)


class ChatInputBar(Horizontal):
    """Text entry with Send and Speak/Stop buttons."""

    class Submitted(Message):
        """User pressed Enter or Send."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Edited(Message):
        """User changed the input text."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class SpeakToggled(Message):
        """User pressed Speak/Stop."""

    def __init__(self, *args, speech_enabled: bool = False, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._speech_enabled = speech_enabled
        # Last value written by the session; its Changed event is not a user edit
        self._synced_value = ""

    def compose(self):
        yield Input(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success")
        speak = Button("Speak", id="speak-btn", variant="primary")
        speak.disabled = not self._speech_enabled
        yield speak

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if event.value != self._synced_value:
            self.post_message(self.Edited(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.query_one("#chat-input", Input).value))
        elif event.button.id == "speak-btn":
            event.stop()
            self.post_message(self.SpeakToggled())

    def set_value(self, value: str) -> None:
        """Show ``value`` without reporting it as a user edit."""
        text_input = self.query_one("#chat-input", Input)
        self._synced_value = value
        if text_input.value != value:
            text_input.value = value
            text_input.cursor_position = len(value)

    def set_capturing(self, capturing: bool) -> None:
        self.query_one("#speak-btn", Button).label = "Stop" if capturing else "Speak"

    def focus_input(self) -> None:
        self.query_one("#chat-input", Input).focus()


class StatusBar(Horizontal):
    """Typing indicator plus the Pause/Resume toggle."""

    class PauseToggled(Message):
        """User pressed Pause/Resume."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._showing_error = False
        self._indicator = ""

    def compose(self):
        yield Static("", id="typing-indicator")
        yield Button("Pause", id="pause-btn")

    @property
    def indicator(self) -> str:
        """Plain text currently shown in the indicator."""
        return self._indicator

    def set_typing(self, typing: bool) -> None:
        # An error stays visible until the next send
        if typing:
            self._showing_error = False
        elif self._showing_error:
            return
        self._indicator = "Typing..." if typing else ""
        self.query_one("#typing-indicator", Static).update(self._indicator)

    def set_paused(self, paused: bool) -> None:
        self.query_one("#pause-btn", Button).label = "Resume" if paused else "Pause"

    def show_error(self, message: str) -> None:
        self._showing_error = True
        self._indicator = f"Error: {message}"
        self.query_one("#typing-indicator", Static).update(Text.assemble(("Error: ", "bold red"), message))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "pause-btn":
            event.stop()
            self.post_message(self.PauseToggled())
