"""Terminal UI module for assistbot.

Provides a Textual-based TUI over a single chat session.

Module structure (each module hides a design decision):
- config.py: Display constants and log levels
- widgets.py: Transcript, typing indicator, input bar, log panel
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- screens.py: Settings dialog (credential entry)
- app.py: Application orchestration (store subscription, dispatch workers)
"""

from .app import AssistantApp, run_textual_tui
from .config import LogLevel
from .screens import SettingsScreen
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TypingIndicator

__all__ = [
    "AssistantApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "SettingsScreen",
    "TypingIndicator",
    "run_textual_tui",
]
