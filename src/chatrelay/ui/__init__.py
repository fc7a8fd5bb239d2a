"""Terminal UI module for chatrelay.

Provides a Textual-based chat client on top of ChatSession.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (chat history, input bar, status line)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- callbacks.py: Session integration (how the TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatRelayApp, run_textual_tui
from .callbacks import TUISessionListener
from .widgets import ChatHistoryWidget, ChatInputBar, StatusBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ChatRelayApp",
    "StatusBar",
    "TUISessionListener",
    "run_textual_tui",
]
