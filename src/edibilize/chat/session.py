"""Conversation controller for the assistant widget.

Owns everything about the conversation that is not rendering:
- Visibility state (closed, opening, open)
- Ordered, append-only message history
- Single-flight request lifecycle
- Recovery from failed requests

The widget only forwards user actions here and re-renders from the callbacks.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from .base import ChatTransport
from .demo import DEMO_NOTICE, DEMO_NOTICE_TITLE, demo_response
from .errors import MalformedResponseError
from .models import (
    FAILURE_NOTICE,
    FAILURE_NOTICE_TITLE,
    FALLBACK_REPLY,
    GREETING,
    ChatMessage,
    Role,
    SubmitOutcome,
    Visibility,
)

DebugCallback = Callable[[str, str, str], None]
MessageCallback = Callable[[ChatMessage], None]
BusyCallback = Callable[[bool], None]
VisibilityCallback = Callable[[Visibility], None]

COMPONENT = "Chat"


class AssistantSession:
    """State machine and request lifecycle of one assistant conversation.

    Example:
        async with create_chat_transport("http", base_url=url) as transport:
            session = AssistantSession(transport)
            session.toggle()                     # seeds the greeting
            await session.submit("How many calories in an apple?")
            session.messages[-1].content         # assistant reply
    """

    def __init__(
        self,
        transport: ChatTransport,
        demo_mode: bool = False,
        greeting: str = GREETING,
        fallback_reply: str = FALLBACK_REPLY,
    ) -> None:
        self._transport = transport
        self._demo_mode = demo_mode
        self._greeting = greeting
        self._fallback_reply = fallback_reply

        self._messages: list[ChatMessage] = []
        self._visibility = Visibility.CLOSED
        self._pending_input = ""
        self._in_flight = False
        self._request: asyncio.Future[str] | None = None
        self._disposed = False

        self._notify: Callable[..., Any] | None = None
        self._debug_callback: DebugCallback | None = None
        self._message_callback: MessageCallback | None = None
        self._busy_callback: BusyCallback | None = None
        self._visibility_callback: VisibilityCallback | None = None

    # -- callbacks ---------------------------------------------------------

    def set_notify_callback(self, callback: Callable[..., Any] | None) -> None:
        """Set the toast surface.

        Called as callback(message, title=..., severity=...), the signature of
        textual.app.App.notify.
        """
        self._notify = callback

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the trace sink, called as callback(level, component, message)."""
        self._debug_callback = callback

    def set_message_callback(self, callback: MessageCallback | None) -> None:
        """Set the callback invoked after every history append."""
        self._message_callback = callback

    def set_busy_callback(self, callback: BusyCallback | None) -> None:
        """Set the callback invoked when the in-flight flag changes."""
        self._busy_callback = callback

    def set_visibility_callback(self, callback: VisibilityCallback | None) -> None:
        """Set the callback invoked on visibility transitions."""
        self._visibility_callback = callback

    # -- state -------------------------------------------------------------

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        """Snapshot of the conversation, oldest first."""
        return tuple(self._messages)

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @property
    def is_open(self) -> bool:
        return self._visibility is not Visibility.CLOSED

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def demo_mode(self) -> bool:
        return self._demo_mode

    @property
    def transport(self) -> ChatTransport:
        return self._transport

    @property
    def pending_input(self) -> str:
        """Text typed but not yet submitted."""
        return self._pending_input

    @pending_input.setter
    def pending_input(self, value: str) -> None:
        self._pending_input = value

    def can_submit(self, text: str | None = None) -> bool:
        """Whether submit(text) would be accepted right now."""
        value = self._pending_input if text is None else text
        return not self._disposed and not self._in_flight and bool(value.strip())

    def get_last_response(self) -> str | None:
        """Get the last assistant message."""
        for msg in reversed(self._messages):
            if msg.role is Role.ASSISTANT:
                return msg.content
        return None

    # -- visibility --------------------------------------------------------

    def toggle(self) -> Visibility:
        """Open if closed, close otherwise. History is never touched."""
        if self._visibility is Visibility.CLOSED:
            self.open()
        else:
            self.close()
        return self._visibility

    def open(self) -> None:
        """Start opening; seeds the greeting when the history is empty."""
        if self._visibility is not Visibility.CLOSED:
            return
        if not self._messages:
            self._append(Role.ASSISTANT, self._greeting)
        self._set_visibility(Visibility.OPENING)

    def finish_opening(self) -> None:
        """Complete the opening transition."""
        if self._visibility is Visibility.OPENING:
            self._set_visibility(Visibility.OPEN)

    def close(self) -> None:
        if self._visibility is not Visibility.CLOSED:
            self._set_visibility(Visibility.CLOSED)

    # -- request lifecycle -------------------------------------------------

    async def submit(self, text: str | None = None) -> SubmitOutcome:
        """Submit text (or the pending input) to the assistant.

        Appends the user message immediately, then exactly one assistant
        message once the request resolves: the reply on success, the fallback
        on failure. Blank text and calls made while a request is in flight
        are ignored.

        Args:
            text: Text to submit; None submits the pending input buffer

        Returns:
            What happened to the submission

        Raises:
            RuntimeError: If the session has been disposed
        """
        if self._disposed:
            raise RuntimeError("Assistant session has been disposed")

        value = self._pending_input if text is None else text
        if not value.strip():
            self._debug("debug", "Ignored blank submission")
            return SubmitOutcome.REJECTED_EMPTY
        if self._in_flight:
            self._debug("debug", "Ignored submission while a request is in flight")
            return SubmitOutcome.REJECTED_IN_FLIGHT

        self._append(Role.USER, value)
        self._pending_input = ""
        self._set_in_flight(True)
        self._debug("info", f"Sending message ({len(value)} chars) via {self._transport.transport_type}")

        self._request = asyncio.ensure_future(self._transport.send(value))
        try:
            reply = await self._request
            if not isinstance(reply, str):
                raise MalformedResponseError(f"Reply is {type(reply).__name__}, not text")
        except asyncio.CancelledError:
            if self._disposed:
                return SubmitOutcome.DISCARDED
            raise
        except Exception as e:
            if self._disposed:
                return SubmitOutcome.DISCARDED
            self._recover(value, e)
            return SubmitOutcome.FAILED
        finally:
            self._request = None
            self._set_in_flight(False)

        if self._disposed:
            self._debug("debug", "Discarded reply for disposed session")
            return SubmitOutcome.DISCARDED
        self._append(Role.ASSISTANT, reply)
        self._debug("info", "Reply received")
        return SubmitOutcome.REPLIED

    def dispose(self) -> None:
        """Detach the session from its widget.

        Cancels the in-flight request; its result is dropped and nothing is
        appended afterwards. Safe to call more than once.
        """
        if self._disposed:
            return
        self._debug("debug", "Session disposed")
        self._disposed = True
        if self._request is not None and not self._request.done():
            self._request.cancel()
        self._notify = None
        self._message_callback = None
        self._busy_callback = None
        self._visibility_callback = None
        self._debug_callback = None

    # -- internals ---------------------------------------------------------

    def _recover(self, text: str, error: Exception) -> None:
        self._debug("error", f"Request failed: {type(error).__name__}: {error}")
        if self._demo_mode:
            self._emit_notice(DEMO_NOTICE, DEMO_NOTICE_TITLE, "information")
            self._append(Role.ASSISTANT, demo_response(text))
        else:
            self._emit_notice(FAILURE_NOTICE, FAILURE_NOTICE_TITLE, "error")
            self._append(Role.ASSISTANT, self._fallback_reply)

    def _append(self, role: Role, content: str) -> None:
        msg = ChatMessage(role=role, content=content)
        self._messages.append(msg)
        if self._message_callback is not None:
            self._message_callback(msg)

    def _set_in_flight(self, value: bool) -> None:
        self._in_flight = value
        if self._busy_callback is not None:
            self._busy_callback(value)

    def _set_visibility(self, value: Visibility) -> None:
        self._debug("debug", f"Visibility {self._visibility.value} -> {value.value}")
        self._visibility = value
        if self._visibility_callback is not None:
            self._visibility_callback(value)

    def _emit_notice(self, message: str, title: str, severity: str) -> None:
        if self._notify is not None:
            self._notify(message, title=title, severity=severity)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, COMPONENT, message)
