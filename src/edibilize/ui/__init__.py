"""Terminal UI module for edibilize.

Provides a Textual-based TUI hosting the health assistant.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (prompt keys, message rendering, log panel)
- assistant.py: The assistant panel (binding a conversation to widgets)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: UI constants and log levels
- app.py: Application orchestration (page, bindings, eligibility)
"""

from .app import EdibilizeApp, run_textual_tui
from .assistant import AssistantPanel
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, PromptArea

__all__ = [
    "AssistantPanel",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "EdibilizeApp",
    "LogLevel",
    "PromptArea",
    "run_textual_tui",
]
