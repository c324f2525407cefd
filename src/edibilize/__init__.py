"""Edibilize: a terminal health assistant for the Edibilize nutrition tracker.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import (
    AssistantSession,
    AuthSession,
    ChatMessage,
    ChatTransport,
    Role,
    SubmitOutcome,
    Visibility,
    can_show_assistant,
    create_chat_transport,
)

__all__ = [
    "AssistantSession",
    "AuthSession",
    "ChatMessage",
    "ChatTransport",
    "Role",
    "SubmitOutcome",
    "Visibility",
    "can_show_assistant",
    "create_chat_transport",
]
