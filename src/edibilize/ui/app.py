"""Main Textual TUI application.

Hosts a page and, when the session is eligible, the health-assistant panel.
"""

import asyncio
import contextlib

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..chat.access import AuthSession, can_show_assistant, normalize_view
from ..chat.base import ChatTransport
from .assistant import AssistantPanel
from .config import NOTIFY_TIMEOUT_SHORT, LogLevel
from .styles import APP_CSS
from .themes import EDIBILIZE_DARK
from .widgets import DebugPanel

PAGE_TEXT = """\
[b]Edibilize[/b]  {view}

Signed in as {user}.

Press [b]Ctrl+T[/b] to chat with your health assistant about nutrition,
calories, meal plans, or workouts.
"""

SIGNED_OUT_TEXT = """\
[b]Edibilize[/b]  {view}

The health assistant is available to signed-in users inside the app.
"""


class EdibilizeApp(App):
    """Textual TUI hosting the health assistant."""

    CSS = APP_CSS
    TITLE = "Edibilize"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_assistant", "Assistant"),
        Binding("escape", "close_assistant", "Close", show=False),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        transport: ChatTransport,
        auth: AuthSession | None = None,
        view: str = "/dashboard",
        demo_mode: bool = False,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._transport = transport
        self._auth = auth
        self._view = normalize_view(view)
        self._demo_mode = demo_mode
        self._log_level = log_level
        self._assistant_allowed = can_show_assistant(auth, self._view)

    @property
    def assistant_allowed(self) -> bool:
        return self._assistant_allowed

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        if self._assistant_allowed:
            user = (self._auth.username if self._auth else None) or "your account"
            yield Static(PAGE_TEXT.format(view=self._view, user=user), id="page")
            yield AssistantPanel(
                self._transport,
                demo_mode=self._demo_mode,
                debug_callback=self._trace,
                id="assistant",
            )
        else:
            yield Static(SIGNED_OUT_TEXT.format(view=self._view), id="page")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(EDIBILIZE_DARK)
        self.theme = "edibilize-dark"

        mode = "demo" if self._demo_mode else self._transport.transport_type
        self.sub_title = f"{self._view} | {mode}"

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

    def _trace(self, level: str, component: str, message: str) -> None:
        """Route trace messages from the conversation to the log panel."""
        # The panel may already be gone while the app shuts down
        for log_panel in self.query(DebugPanel):
            log_panel.trace(component, message, LogLevel.from_string(level))

    def action_toggle_assistant(self) -> None:
        """Open or close the assistant."""
        if not self._assistant_allowed:
            self.notify("Sign in to chat with the health assistant", severity="warning")
            return
        panel = self.query_one("#assistant", AssistantPanel)
        panel.toggle()

    def action_close_assistant(self) -> None:
        for panel in self.query(AssistantPanel):
            panel.session.close()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_TIMEOUT_SHORT)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = None
        for panel in self.query(AssistantPanel):
            response = panel.session.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied", timeout=NOTIFY_TIMEOUT_SHORT)
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    transport: ChatTransport,
    auth: AuthSession | None = None,
    view: str = "/dashboard",
    demo_mode: bool = False,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        transport: Transport the assistant sends messages through
        auth: Caller's authentication state
        view: Application view the page stands for
        demo_mode: Answer with canned responses when the assistant is unreachable
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = EdibilizeApp(
        transport=transport,
        auth=auth,
        view=view,
        demo_mode=demo_mode,
        log_level=log_level,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await transport.close()
