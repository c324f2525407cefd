"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from edibilize.chat import AssistantSession, AuthSession, ChatTransport
from edibilize.llm import Completion, CompletionClient


class FakeTransport(ChatTransport):
    """Scriptable transport.

    Set `error` to make send() raise, `gate` to hold replies until the event
    is set.
    """

    def __init__(self, reply: object = "An apple has about 95 calories.") -> None:
        self.reply = reply
        self.error: BaseException | None = None
        self.gate: asyncio.Event | None = None
        self.sent: list[str] = []
        self.cancelled = 0
        self.closed = False

    async def send(self, message: str) -> str:
        self.sent.append(message)
        try:
            if self.gate is not None:
                await self.gate.wait()
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        if self.error is not None:
            raise self.error
        return self.reply  # type: ignore[return-value]

    async def close(self) -> None:
        self.closed = True

    @property
    def transport_type(self) -> str:
        return "fake"


class FakeLLM(CompletionClient):
    """Completion client that records questions and answers with a fixed text."""

    def __init__(self, content: str = "Eat more vegetables.") -> None:
        self.content = content
        self.error: Exception | None = None
        self.calls: list[dict] = []
        self.closed = False

    async def complete(
        self,
        system_prompt: str,
        question: str,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> Completion:
        self.calls.append({
            "system_prompt": system_prompt,
            "question": question,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return Completion(text=self.content, model="fake-model")

    async def close(self) -> None:
        self.closed = True


class NoticeRecorder:
    """Stands in for the toast surface (same signature as App.notify)."""

    def __init__(self) -> None:
        self.notices: list[dict] = []

    def __call__(self, message: str, title: str = "", severity: str = "information") -> None:
        self.notices.append({"message": message, "title": title, "severity": severity})


@pytest.fixture
def transport():
    """Return a transport that replies successfully."""
    return FakeTransport()


@pytest.fixture
def gated_transport():
    """Return a transport that holds its reply until `gate` is set."""
    fake = FakeTransport()
    fake.gate = asyncio.Event()
    return fake


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def notices():
    return NoticeRecorder()


@pytest.fixture
def session(transport, notices):
    """Return a session wired to the fake transport and notice recorder."""
    chat = AssistantSession(transport)
    chat.set_notify_callback(notices)
    return chat


@pytest.fixture
def signed_in():
    return AuthSession(user_id=7, username="sam")


@pytest.fixture(scope="session")
def api_url():
    """Return the web app URL for integration tests."""
    return os.getenv("EDIBILIZE_API_URL", "http://localhost:5000")


@pytest.fixture(scope="session")
def make_transport():
    """Return the FakeTransport class for tests that need several."""
    return FakeTransport
