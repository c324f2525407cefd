"""Eligibility check for showing the assistant.

The assistant is offered only to signed-in users inside the application.
Marketing and sign-in views never show it.
"""

from pydantic import BaseModel, ConfigDict, Field

# Views that never show the assistant, even to signed-in users.
PUBLIC_VIEWS = frozenset({"/", "/auth"})


class AuthSession(BaseModel):
    """The caller's authentication state as seen by the client."""

    model_config = ConfigDict(frozen=True)

    user_id: int | None = Field(default=None, description="Signed-in user id")
    username: str | None = Field(default=None, description="Signed-in username")
    session_cookie: str | None = Field(default=None, description="Session cookie value")
    api_token: str | None = Field(default=None, description="Bearer token")

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None or bool(self.session_cookie or self.api_token)


def normalize_view(view: str) -> str:
    """Strip query string, fragment and trailing slash from a view path."""
    path = view.split("?", 1)[0].split("#", 1)[0].strip() or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def can_show_assistant(session: AuthSession | None, view: str) -> bool:
    """Return True if the assistant may be shown for this session and view."""
    if session is None or not session.is_authenticated:
        return False
    return normalize_view(view) not in PUBLIC_VIEWS
