from abc import ABC, abstractmethod
from typing import Any

from ..llm.client import close_quietly


class ChatTransport(ABC):
    """Abstract base class for chat transports.

    This module hides the design decision of how a user message reaches the
    assistant. Implementations must handle:
    - Session credentials
    - Request/response format conversion
    - Mapping failures onto TransportError subclasses

    Supports async context manager protocol for proper resource cleanup:
        async with transport:
            reply = await transport.send("How many calories in an apple?")
    """

    @abstractmethod
    async def send(self, message: str) -> str:
        """Send one user message and return the assistant reply.

        Args:
            message: Text submitted by the user

        Returns:
            Reply text

        Raises:
            RequestFailedError: Endpoint unreachable or non-success status
            MalformedResponseError: Success status without a usable reply
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    @property
    @abstractmethod
    def transport_type(self) -> str:
        """Get the transport type identifier."""

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await close_quietly(self)
