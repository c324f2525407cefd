"""Assistant conversation module for edibilize.

Module structure (each module hides one design decision):
- models.py: Message representation and conversation enums
- session.py: Visibility state machine and single-flight request lifecycle
- base.py: Transport interface (how a message reaches the assistant)
- transports/: HTTP endpoint and direct LLM transports
- demo.py: Canned answers for demo mode
- access.py: Who may see the assistant, and where
"""

from .access import AuthSession, can_show_assistant
from .base import ChatTransport
from .errors import MalformedResponseError, RequestFailedError, TransportError
from .factory import create_chat_transport
from .models import (
    FALLBACK_REPLY,
    GREETING,
    ChatMessage,
    Role,
    SubmitOutcome,
    Visibility,
)
from .session import AssistantSession

__all__ = [
    "FALLBACK_REPLY",
    "GREETING",
    "AssistantSession",
    "AuthSession",
    "ChatMessage",
    "ChatTransport",
    "MalformedResponseError",
    "RequestFailedError",
    "Role",
    "SubmitOutcome",
    "TransportError",
    "Visibility",
    "can_show_assistant",
    "create_chat_transport",
]
