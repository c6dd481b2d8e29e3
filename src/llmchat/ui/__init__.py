"""Terminal UI module for llmchat.

Provides a Textual-based chat shell around ChatSession.

Module structure (each module hides a design decision):
- config.py: Labels, timeouts and limits
- widgets.py: Custom widgets (input history, chat history, status bar)
- styles.py: CSS styling (layout decisions)
- screens.py: Settings view and save dialog
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .screens import SaveTitleScreen, SettingsScreen
from .widgets import ChatHistoryWidget, MessageInput, MessageView, StatusBar

__all__ = [
    "ChatApp",
    "ChatHistoryWidget",
    "MessageInput",
    "MessageView",
    "SaveTitleScreen",
    "SettingsScreen",
    "StatusBar",
    "run_chat_tui",
]
