"""Data models for the assistant conversation.

Hides the internal representation of chat messages and the small enums that
describe the conversation's state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

GREETING = (
    "Hello! I'm your health assistant. Ask me anything about nutrition, "
    "calories, diet plans, or workout recommendations."
)

FALLBACK_REPLY = (
    "I'm sorry, I'm having trouble connecting right now. Please try again later."
)

FAILURE_NOTICE_TITLE = "Failed to send message"
FAILURE_NOTICE = "Something went wrong reaching the assistant. Please try again."


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Visibility(str, Enum):
    """Visibility of the assistant widget.

    OPENING is a short visual transition; it behaves like OPEN for everything
    except rendering.
    """

    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"


class SubmitOutcome(str, Enum):
    """Result of a submit call."""

    REPLIED = "replied"
    FAILED = "failed"
    REJECTED_EMPTY = "rejected_empty"
    REJECTED_IN_FLIGHT = "rejected_in_flight"
    DISCARDED = "discarded"

    @property
    def accepted(self) -> bool:
        """Whether the submission reached the history."""
        return self not in (SubmitOutcome.REJECTED_EMPTY, SubmitOutcome.REJECTED_IN_FLIGHT)


@dataclass(frozen=True)
class ChatMessage:
    """A chat message in the conversation."""

    role: Role
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


class ChatRequest(BaseModel):
    """Payload sent to the chat endpoint."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="Text submitted by the user")


class ChatReply(BaseModel):
    """Payload returned by the chat endpoint."""

    model_config = ConfigDict(frozen=True)

    response: str = Field(description="Assistant reply text")
