"""Textual CSS for the chat client.

One column, top to bottom: conversation, status line, input bar.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Conversation */
ChatHistoryWidget {
    height: 1fr;
    padding: 0 1;
    background: $panel;
    border: round $border;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    scrollbar-gutter: stable;
}

ChatHistoryWidget:focus-within {
    border: round $primary;
}

#chat-empty {
    padding: 1 2;
    color: $text-muted;
    text-style: italic;
}

.chat-message {
    height: auto;
    margin-bottom: 1;
    padding: 0 1;
}

.chat-message.user-message {
    border-left: outer $success;
}

.chat-message.assistant-message {
    border-left: outer $secondary;
}

.user-message .message-header {
    color: $success;
    text-style: bold;
}

.assistant-message .message-header {
    color: $secondary;
    text-style: bold;
}

.message-content {
    color: $foreground;
}

/* Status line: typing indicator and Pause/Resume */
StatusBar {
    height: 3;
    padding: 0 1;
    background: $surface;
}

#typing-indicator {
    width: 1fr;
    height: 3;
    content-align: left middle;
    color: $accent;
    text-style: italic;
}

#pause-btn {
    min-width: 10;
}

/* Input bar: text entry, Send, Speak/Stop */
ChatInputBar {
    height: 5;
    padding: 0 1;
    background: $panel;
    border: round $border;
}

ChatInputBar:focus-within {
    border: round $primary;
}

#chat-input {
    width: 1fr;
}

#send-btn, #speak-btn {
    min-width: 9;
    margin-left: 1;
}
"""
