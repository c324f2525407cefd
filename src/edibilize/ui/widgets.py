"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Prompt key handling (Enter submits, Shift+Enter breaks the line)
- Chat message rendering and scrolling
- Log rendering
"""

from datetime import datetime

from rich.markup import escape
from textual import events
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..chat.models import ChatMessage, Role
from .config import LOG_TIMESTAMP_FORMAT, MESSAGE_TIMESTAMP_FORMAT, NOTIFY_TIMEOUT_SHORT, LogLevel


class ClickableMessage(Vertical):
    """A chat message container that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        try:
            import pyperclip
            pyperclip.copy(self._content)
            self.app.notify("Copied to clipboard", timeout=NOTIFY_TIMEOUT_SHORT)
        except Exception:
            # No system clipboard; fall back to OSC 52
            self.app.copy_to_clipboard(self._content)
            self.app.notify("Copied (terminal)", timeout=NOTIFY_TIMEOUT_SHORT)


class PromptArea(TextArea):
    """Multi-line prompt where Enter submits and Shift+Enter inserts a newline.

    Ctrl+J also inserts a newline, for terminals that do not report the
    Shift modifier on Enter.
    """

    class SubmitRequested(Message):
        """Posted when the user presses Enter."""

    NEWLINE_KEYS = ("shift+enter", "ctrl+j")

    async def _on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.stop()
            event.prevent_default()
            self.post_message(self.SubmitRequested())
            return
        if event.key in self.NEWLINE_KEYS:
            event.stop()
            event.prevent_default()
            self.insert("\n")
            return
        await super()._on_key(event)


class ChatInputBar(Horizontal):
    """Chat input bar with a prompt area and Send button.

    The bar never clears itself; the owner decides whether a submission was
    accepted and calls clear().
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Changed(Message):
        """Message sent when the pending text changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, placeholder: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._placeholder = placeholder
        self._busy = False

    def compose(self):
        text_area = PromptArea(id="chat-input", show_line_numbers=False, soft_wrap=True)
        text_area.placeholder = self._placeholder
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success", disabled=True).with_tooltip(
            "Send (Enter). Shift+Enter for a new line"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", PromptArea)
        text_area.highlight_cursor_line = False

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", PromptArea).text

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_prompt_area_submit_requested(self, event: PromptArea.SubmitRequested) -> None:
        event.stop()
        self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self._update_send_button()
        self.post_message(self.Changed(event.text_area.text))

    def set_busy(self, busy: bool) -> None:
        """Enable or disable sending while a request is in flight."""
        self._busy = busy
        self._update_send_button()

    def clear(self) -> None:
        self.query_one("#chat-input", PromptArea).text = ""
        self._update_send_button()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", PromptArea).focus()

    def _update_send_button(self) -> None:
        button = self.query_one("#send-btn", Button)
        button.disabled = self._busy or not self.value.strip()

    def _submit(self) -> None:
        self.post_message(self.Submitted(self.value))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history that always follows the newest message."""

    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_count = 0

    @property
    def message_count(self) -> int:
        return self._message_count

    def add_message(self, msg: ChatMessage) -> None:
        """Render a message and scroll to it."""
        self._message_count += 1
        self.mount(self._render_message(msg))
        self.call_after_refresh(self.scroll_end, animate=False)

    def _render_message(self, msg: ChatMessage) -> ClickableMessage:
        if msg.role is Role.USER:
            header_text = f"You [{_format_time(msg.timestamp)}] >"
            border_class = "user-message"
        else:
            header_text = f"< Assistant [{_format_time(msg.timestamp)}]"
            border_class = "assistant-message"

        container = ClickableMessage(content=msg.content, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header_text, classes="message-header", markup=False))
        if msg.role is Role.ASSISTANT:
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        else:
            # User text is shown verbatim, line breaks included
            container.compose_add_child(Static(msg.content, classes="message-content", markup=False))
        return container


def _format_time(timestamp: datetime) -> str:
    return timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT).lstrip("0")


LEVEL_COLORS = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

COMPONENT_COLORS = {
    "TUI": "cyan",
    "Chat": "green",
}


class DebugPanel(RichLog):
    """Trace log docked under the page.

    Hidden until --log-level is given or Ctrl+D is pressed. Entries below
    the level threshold are dropped, not hidden.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, auto_scroll=True, wrap=False, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._refresh_subtitle()

    def on_mount(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def trace(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Append one entry if it meets the threshold."""
        if level < self._log_level:
            return
        stamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = LEVEL_COLORS.get(level, "white")
        comp_color = COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{stamp}[/] [{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def info(self, component: str, message: str) -> None:
        self.trace(component, message, LogLevel.INFO)

    def toggle(self) -> bool:
        """Show or hide the panel. Returns True if it is now shown."""
        self.display = not self.display
        self._refresh_subtitle()
        return self.display

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}" if self.display else "Hidden"
