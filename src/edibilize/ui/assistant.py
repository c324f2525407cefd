"""The assistant panel: a toggleable chat widget over the current page.

Binds an AssistantSession to its widgets. The session owns all state; this
module only forwards user actions to it and renders what it reports.
"""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Static

from ..chat.base import ChatTransport
from ..chat.models import ChatMessage, Visibility
from ..chat.session import AssistantSession, DebugCallback
from .config import (
    ASSISTANT_DISCLAIMER,
    ASSISTANT_TITLE,
    INPUT_PLACEHOLDER,
    OPEN_TRANSITION_DELAY,
    THINKING_TEXT,
)
from .widgets import ChatHistoryWidget, ChatInputBar


class AssistantPanel(Vertical):
    """Floating health-assistant chat.

    A fresh conversation is created when the panel is constructed and
    dropped when it is unmounted; an in-flight reply is discarded then.
    """

    def __init__(
        self,
        transport: ChatTransport,
        demo_mode: bool = False,
        debug_callback: DebugCallback | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._session = AssistantSession(transport, demo_mode=demo_mode)
        self._session.set_debug_callback(debug_callback)

    @property
    def session(self) -> AssistantSession:
        return self._session

    def compose(self) -> ComposeResult:
        with Horizontal(id="assistant-header"):
            yield Static(ASSISTANT_TITLE, id="assistant-title")
            yield Button("X", id="assistant-close", variant="default")
        yield ChatHistoryWidget(id="chat-history")
        yield Static(THINKING_TEXT, id="thinking")
        yield ChatInputBar(id="chat-input-bar", placeholder=INPUT_PLACEHOLDER)
        yield Static(ASSISTANT_DISCLAIMER, id="assistant-disclaimer")

    def on_mount(self) -> None:
        self._session.set_notify_callback(self.app.notify)
        self._session.set_message_callback(self._render_appended)
        self._session.set_busy_callback(self._render_busy)
        self._session.set_visibility_callback(self._render_visibility)

    def on_unmount(self) -> None:
        self._session.dispose()

    # -- user actions ------------------------------------------------------

    def toggle(self) -> Visibility:
        return self._session.toggle()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "assistant-close":
            event.stop()
            self._session.close()

    def on_chat_input_bar_changed(self, event: ChatInputBar.Changed) -> None:
        self._session.pending_input = event.value

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Hand an accepted submission to a background worker."""
        event.stop()
        if not self._session.can_submit(event.value):
            return
        self.query_one("#chat-input-bar", ChatInputBar).clear()
        self.run_worker(
            self._session.submit(event.value),
            group="assistant-submit",
            exit_on_error=False,
        )

    # -- session callbacks -------------------------------------------------

    def _render_appended(self, msg: ChatMessage) -> None:
        if not self.is_mounted:
            return
        self.query_one("#chat-history", ChatHistoryWidget).add_message(msg)

    def _render_busy(self, busy: bool) -> None:
        if not self.is_mounted:
            return
        self.query_one("#thinking", Static).set_class(busy, "-busy")
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(busy)
        self.query_one("#chat-history", ChatHistoryWidget).scroll_end(animate=False)

    def _render_visibility(self, visibility: Visibility) -> None:
        if visibility is Visibility.CLOSED:
            self.display = False
            self.remove_class("-opening")
            return
        self.display = True
        if visibility is Visibility.OPENING:
            self.add_class("-opening")
            self.set_timer(OPEN_TRANSITION_DELAY, self._session.finish_opening)
        else:
            self.remove_class("-opening")
            self.query_one("#chat-input-bar", ChatInputBar).focus_input()
