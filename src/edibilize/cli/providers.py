"""Provider factory functions for CLI.

Centralizes creation of the chat transport, LLM and auth state from
environment variables. Hides configuration details from command
implementations.
"""

import getpass
import os
from typing import Any

from rich.console import Console

from ..chat import AuthSession, ChatTransport, create_chat_transport
from ..llm import PROVIDERS, CompletionClient, create_completion_client

# Default console for output
_console = Console()

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_REQUEST_TIMEOUT = 30.0


def _env_flag(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def is_demo_mode() -> bool:
    """Whether EDIBILIZE_DEMO_MODE is switched on."""
    return _env_flag("EDIBILIZE_DEMO_MODE")


def get_request_timeout() -> float | None:
    """Request timeout in seconds from EDIBILIZE_REQUEST_TIMEOUT (0 disables)."""
    raw = os.getenv("EDIBILIZE_REQUEST_TIMEOUT")
    if raw is None or not raw.strip():
        return DEFAULT_REQUEST_TIMEOUT
    timeout = float(raw)
    return timeout if timeout > 0 else None


def get_auth_session(local: bool = False) -> AuthSession:
    """Build the caller's authentication state.

    Args:
        local: Treat the local OS user as signed in when no credentials are
            set (used with the llm transport, where there is no web app)

    Environment variables:
        EDIBILIZE_SESSION_COOKIE: Session cookie issued by the web app
        EDIBILIZE_API_TOKEN: Bearer token, as an alternative to the cookie
        EDIBILIZE_USERNAME: Display name of the signed-in user
    """
    auth = AuthSession(
        username=os.getenv("EDIBILIZE_USERNAME") or None,
        session_cookie=os.getenv("EDIBILIZE_SESSION_COOKIE") or None,
        api_token=os.getenv("EDIBILIZE_API_TOKEN") or None,
    )
    if local and not auth.is_authenticated:
        return AuthSession(user_id=0, username=auth.username or getpass.getuser())
    return auth


# provider -> environment variable holding its API key
API_KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
}


def get_llm(console: Console | None = None) -> CompletionClient | None:
    """Create the completion client from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Completion client, or None if not configured

    Environment variables:
        LLM_PROVIDER: openai or deepseek (default: openai)
        OPENAI_API_KEY / DEEPSEEK_API_KEY: Key for the chosen provider
        OPENAI_CHAT_MODEL: Model for the openai provider (default: gpt-4o)
    """
    con = console or _console
    provider = os.getenv("LLM_PROVIDER", "openai").lower()
    if provider not in PROVIDERS:
        con.print(f"[red]Error: Unknown LLM provider: {provider}[/red]")
        return None

    key_var = API_KEY_VARS[provider]
    api_key = os.getenv(key_var)
    if not api_key:
        con.print(f"[yellow]Warning: {key_var} not set, LLM transport disabled[/yellow]")
        return None

    # One attempt per request, so the timeout bounds the whole wait
    config: dict[str, Any] = {"api_key": api_key, "timeout": get_request_timeout(), "max_retries": 0}
    if provider == "openai":
        config["model"] = os.getenv("OPENAI_CHAT_MODEL", PROVIDERS["openai"][0])
    return create_completion_client(provider, **config)


def get_transport(console: Console | None = None, kind: str | None = None) -> ChatTransport:
    """Create the chat transport from environment variables.

    Args:
        console: Optional Rich console for output
        kind: Transport type; None reads EDIBILIZE_TRANSPORT (default: http)

    Returns:
        ChatTransport instance

    Raises:
        SystemExit: If the transport cannot be configured

    Environment variables:
        EDIBILIZE_TRANSPORT: http or llm
        EDIBILIZE_API_URL: Web app base URL (default: http://localhost:5000)
        EDIBILIZE_REQUEST_TIMEOUT: Seconds before a request fails (default: 30)
    """
    import typer

    con = console or _console
    transport_kind = (kind or os.getenv("EDIBILIZE_TRANSPORT", "http")).lower()

    if transport_kind == "http":
        auth = get_auth_session()
        return create_chat_transport(
            "http",
            base_url=os.getenv("EDIBILIZE_API_URL", DEFAULT_API_URL),
            session_cookie=auth.session_cookie,
            api_token=auth.api_token,
            timeout=get_request_timeout(),
        )

    if transport_kind == "llm":
        llm = get_llm(con)
        if llm is None:
            con.print("[red]Error: LLM provider not configured[/red]")
            raise typer.Exit(code=1)
        return create_chat_transport("llm", llm=llm)

    con.print(f"[red]Error: Unknown transport: {transport_kind}[/red]")
    raise typer.Exit(code=1)
