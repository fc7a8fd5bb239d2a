"""Theme definitions for the TUI.

This module hides the color palette. To add a theme, define it here and
register it in the app.
"""

from textual.theme import Theme

# Gruvbox-inspired dark palette
RELAY_DARK = Theme(
    name="relay-dark",
    primary="#83a598",      # Aqua blue - main accent
    secondary="#d3869b",    # Purple - assistant messages
    accent="#fabd2f",       # Yellow - typing indicator
    foreground="#ebdbb2",
    background="#1d2021",
    success="#b8bb26",      # Green - user messages, Send
    warning="#fe8019",
    error="#fb4934",
    surface="#282828",
    panel="#32302f",
    dark=True,
    variables={
        "border": "#504945",
        "border-blurred": "#3c3836",
        "scrollbar": "#3c3836",
        "scrollbar-hover": "#504945",
        "scrollbar-active": "#83a598",
        "text-muted": "#928374",
        "input-cursor-background": "#ebdbb2",
        "input-cursor-foreground": "#1d2021",
        "input-selection-background": "#83a598 30%",
        "footer-key-foreground": "#fabd2f",
    },
)
