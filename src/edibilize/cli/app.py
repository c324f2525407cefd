"""Main CLI application using Typer."""
import asyncio
import os

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..chat import AssistantSession, SubmitOutcome
from ..ui.config import LogLevel
from .providers import (
    API_KEY_VARS,
    DEFAULT_API_URL,
    get_auth_session,
    get_request_timeout,
    get_transport,
    is_demo_mode,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="edibilize",
    help="Chat with the Edibilize health assistant from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}


def _console_trace(threshold: int):
    """Build a trace callback that prints to the console."""
    def trace(level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < threshold:
            return
        style = LEVEL_STYLES.get(numeric, "white")
        console.print(f"[{style}]{LogLevel.name(numeric):<5}[/] \\[{component}] {escape(message)}", highlight=False)
    return trace


def _console_notify(message: str, title: str = "", severity: str = "information") -> None:
    style = {"error": "red", "warning": "yellow"}.get(severity, "cyan")
    console.print(Panel(message, title=title or None, border_style=style))


@app.command(name="tui")
def tui_command(
    view: str = typer.Option(
        "/dashboard",
        "--view",
        "-v",
        help="Application view to host the assistant on"
    ),
    transport: str | None = typer.Option(
        None,
        "--transport",
        "-t",
        help="Transport: http (web app) or llm (direct); default from EDIBILIZE_TRANSPORT"
    ),
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Answer with sample responses when the assistant is unreachable"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-L",
        help="Show log panel with level: debug, info, warning, error"
    ),
):
    """Launch the terminal UI with the health assistant (Ctrl+T toggles it)."""
    async def _tui():
        from ..ui import run_textual_tui

        chat_transport = get_transport(console, transport)
        auth = get_auth_session(local=chat_transport.transport_type == "llm")
        await run_textual_tui(
            transport=chat_transport,
            auth=auth,
            view=view,
            demo_mode=demo or is_demo_mode(),
            log_level=log_level,
        )

    asyncio.run(_tui())


@app.command()
def ask(
    message: str = typer.Argument(..., help="Question for the assistant"),
    transport: str | None = typer.Option(
        None,
        "--transport",
        "-t",
        help="Transport: http (web app) or llm (direct); default from EDIBILIZE_TRANSPORT"
    ),
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Answer with sample responses when the assistant is unreachable"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-L",
        help="Print trace messages at or above this level"
    ),
):
    """Ask the assistant a single question and print the reply."""
    async def _ask() -> SubmitOutcome:
        chat_transport = get_transport(console, transport)
        async with chat_transport:
            session = AssistantSession(chat_transport, demo_mode=demo or is_demo_mode())
            session.set_notify_callback(_console_notify)
            if log_level is not None:
                session.set_debug_callback(_console_trace(LogLevel.from_string(log_level)))

            with console.status("[dim]Thinking...[/dim]"):
                outcome = await session.submit(message)

            if outcome.accepted:
                console.print(f"[bold green]Assistant:[/bold green] {escape(session.get_last_response() or '')}")
            return outcome

    outcome = asyncio.run(_ask())
    if outcome is SubmitOutcome.REJECTED_EMPTY:
        console.print("[red]Error: message is empty[/red]")
        raise typer.Exit(code=1)
    if outcome is SubmitOutcome.FAILED:
        raise typer.Exit(code=1)


@app.command()
def health():
    """Show the assistant configuration."""
    transport_kind = os.getenv("EDIBILIZE_TRANSPORT", "http").lower()
    console.print(f"[green]+[/green] Transport: {transport_kind}")

    if transport_kind == "http":
        console.print(f"[green]+[/green] API URL: {os.getenv('EDIBILIZE_API_URL', DEFAULT_API_URL)}")
        auth = get_auth_session()
        if auth.is_authenticated:
            console.print("[green]+[/green] Session credentials: SET")
        else:
            console.print("[yellow]![/yellow] Session credentials: NOT SET (requests will be rejected)")
    else:
        provider = os.getenv("LLM_PROVIDER", "openai").lower()
        key_var = API_KEY_VARS.get(provider)
        if key_var is None:
            console.print(f"[red]x[/red] Unknown LLM provider: {provider}")
            return
        state = "[green]+[/green]" if os.getenv(key_var) else "[yellow]![/yellow]"
        console.print(f"{state} {key_var}: {'SET' if os.getenv(key_var) else 'NOT SET'}")

    timeout = get_request_timeout()
    console.print(f"[green]+[/green] Request timeout: {f'{timeout:g}s' if timeout else 'none'}")
    console.print(f"[green]+[/green] Demo mode: {'on' if is_demo_mode() else 'off'}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
