"""Terminal UI module for grouptable.

Provides a Textual-based TUI for the group reservation chat.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (language picker, chat history, input, log)
- formatting.py: Rich renderables for messages and the dataset
- styles.py: CSS styling (layout decisions)
- callbacks.py: Session integration (how the TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ReservationApp, run_textual_tui
from .callbacks import SessionBridge
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, LanguagePicker, StatusBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LanguagePicker",
    "LogLevel",
    "ReservationApp",
    "SessionBridge",
    "StatusBar",
    "run_textual_tui",
]
