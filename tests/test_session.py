"""Unit tests for the assistant conversation controller."""
import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from edibilize.chat import (
    FALLBACK_REPLY,
    GREETING,
    AssistantSession,
    MalformedResponseError,
    RequestFailedError,
    Role,
    SubmitOutcome,
    Visibility,
)
from edibilize.chat.demo import DEMO_NOTICE_TITLE, DEMO_RESPONSES

non_blank_text = st.text(min_size=1).filter(lambda s: s.strip())
blank_text = st.text(alphabet=" \t\n\r", max_size=10)


class TestVisibility:
    """Tests for the open/closed state machine."""

    def test_initial_state_is_closed(self, session):
        """Test that a new session is closed and empty."""
        assert session.visibility is Visibility.CLOSED
        assert not session.is_open
        assert session.messages == ()

    def test_first_open_seeds_greeting(self, session):
        """Test that opening an empty conversation adds exactly one greeting."""
        assert session.toggle() is Visibility.OPENING

        assert len(session.messages) == 1
        assert session.messages[0].role is Role.ASSISTANT
        assert session.messages[0].content == GREETING

    def test_opening_completes_to_open(self, session):
        """Test the opening transition."""
        session.toggle()
        session.finish_opening()

        assert session.visibility is Visibility.OPEN
        assert session.is_open

    def test_finish_opening_ignored_when_closed(self, session):
        """Test that a late transition timer does not reopen the widget."""
        session.toggle()
        session.toggle()
        session.finish_opening()

        assert session.visibility is Visibility.CLOSED

    def test_toggle_closes_from_opening(self, session):
        """Test that toggling during the transition closes the widget."""
        session.toggle()
        assert session.toggle() is Visibility.CLOSED

    def test_reopen_preserves_history(self, session):
        """Test that close/open cycles never clear or reseed the history."""
        session.toggle()
        session.finish_opening()
        before = session.messages

        session.toggle()
        assert session.visibility is Visibility.CLOSED
        assert session.messages == before

        session.toggle()
        assert session.messages == before
        assert sum(1 for m in session.messages if m.content == GREETING) == 1

    def test_visibility_callback(self, session):
        """Test that every transition is reported."""
        seen: list[Visibility] = []
        session.set_visibility_callback(seen.append)

        session.toggle()
        session.finish_opening()
        session.toggle()

        assert seen == [Visibility.OPENING, Visibility.OPEN, Visibility.CLOSED]


class TestSubmit:
    """Tests for the submit request lifecycle."""

    @pytest.mark.asyncio
    async def test_success_appends_pair(self, session, transport):
        """Test that a reply produces a user/assistant pair."""
        outcome = await session.submit("How many calories in an apple?")

        assert outcome is SubmitOutcome.REPLIED
        assert [(m.role, m.content) for m in session.messages] == [
            (Role.USER, "How many calories in an apple?"),
            (Role.ASSISTANT, "An apple has about 95 calories."),
        ]
        assert transport.sent == ["How many calories in an apple?"]
        assert not session.in_flight

    @pytest.mark.asyncio
    async def test_user_text_is_kept_literally(self, session, transport):
        """Test that surrounding whitespace is not stripped from the message."""
        await session.submit("  oats\nor eggs?  ")

        assert session.messages[0].content == "  oats\nor eggs?  "
        assert transport.sent == ["  oats\nor eggs?  "]

    @pytest.mark.asyncio
    async def test_reply_timestamped_at_append(self, gated_transport):
        """Test that the reply is timestamped when it arrives, not when sent."""
        session = AssistantSession(gated_transport)
        task = asyncio.create_task(session.submit("protein?"))
        await asyncio.sleep(0.05)
        gated_transport.gate.set()
        await task

        user, assistant = session.messages
        assert (assistant.timestamp - user.timestamp).total_seconds() >= 0.04

    @pytest.mark.asyncio
    async def test_user_message_appended_before_reply(self, gated_transport):
        """Test that the user message is visible while the request is pending."""
        session = AssistantSession(gated_transport)
        task = asyncio.create_task(session.submit("fiber?"))
        await asyncio.sleep(0)

        assert session.in_flight
        assert [m.role for m in session.messages] == [Role.USER]

        gated_transport.gate.set()
        await task
        assert [m.role for m in session.messages] == [Role.USER, Role.ASSISTANT]

    @pytest.mark.asyncio
    async def test_pending_input_is_submitted_and_cleared(self, session, transport):
        """Test that submit() without text sends the pending buffer."""
        session.pending_input = "Is rice healthy?"

        outcome = await session.submit()

        assert outcome is SubmitOutcome.REPLIED
        assert transport.sent == ["Is rice healthy?"]
        assert session.pending_input == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    async def test_blank_submission_is_ignored(self, session, transport, text):
        """Test that blank text neither touches history nor sends a request."""
        session.pending_input = text

        outcome = await session.submit(text)

        assert outcome is SubmitOutcome.REJECTED_EMPTY
        assert not outcome.accepted
        assert session.messages == ()
        assert transport.sent == []
        assert session.pending_input == text

    @pytest.mark.asyncio
    async def test_submit_while_in_flight_is_ignored(self, gated_transport):
        """Test single-flight: a second submit during a request is a no-op."""
        session = AssistantSession(gated_transport)
        first = asyncio.create_task(session.submit("first"))
        await asyncio.sleep(0)

        assert not session.can_submit("second")
        outcome = await session.submit("second")

        assert outcome is SubmitOutcome.REJECTED_IN_FLIGHT
        assert len(session.messages) == 1

        gated_transport.gate.set()
        assert await first is SubmitOutcome.REPLIED
        assert gated_transport.sent == ["first"]
        assert [m.content for m in session.messages] == ["first", "An apple has about 95 calories."]

    @pytest.mark.asyncio
    async def test_submit_allowed_again_after_reply(self, session, transport):
        """Test that the in-flight flag is released after a reply."""
        await session.submit("one")
        await session.submit("two")

        assert transport.sent == ["one", "two"]
        assert len(session.messages) == 4

    @pytest.mark.asyncio
    async def test_busy_callback_brackets_request(self, session):
        """Test that the busy flag is raised and then cleared."""
        states: list[bool] = []
        session.set_busy_callback(states.append)

        await session.submit("water intake?")

        assert states == [True, False]

    @pytest.mark.asyncio
    async def test_message_callback_sees_every_append(self, session):
        """Test that the renderer is told about each new message in order."""
        seen = []
        session.set_message_callback(seen.append)

        session.toggle()
        await session.submit("snacks?")

        assert [m.role for m in seen] == [Role.ASSISTANT, Role.USER, Role.ASSISTANT]
        assert tuple(seen) == session.messages

    @pytest.mark.asyncio
    async def test_debug_callback_traces_request(self, session):
        """Test that the trace sink receives chat component messages."""
        entries: list[tuple[str, str, str]] = []
        session.set_debug_callback(lambda *entry: entries.append(entry))

        await session.submit("")
        await session.submit("sugar?")

        assert all(component == "Chat" for _, component, _ in entries)
        assert any(level == "debug" and "blank" in msg for level, _, msg in entries)
        assert any(level == "info" and "Reply received" in msg for level, _, msg in entries)


class TestFailure:
    """Tests for recovery from failed requests."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        RequestFailedError("connection refused"),
        RequestFailedError("Chat endpoint returned 500", status_code=500),
        MalformedResponseError("missing 'response'"),
        RuntimeError("unexpected"),
    ])
    async def test_failure_appends_fallback_and_notifies(self, session, transport, notices, error):
        """Test that every failure kind yields the fallback and one notice."""
        transport.error = error

        outcome = await session.submit("How much protein do I need?")

        assert outcome is SubmitOutcome.FAILED
        assert [(m.role, m.content) for m in session.messages] == [
            (Role.USER, "How much protein do I need?"),
            (Role.ASSISTANT, FALLBACK_REPLY),
        ]
        assert len(notices.notices) == 1
        assert notices.notices[0]["severity"] == "error"
        assert not session.in_flight

    @pytest.mark.asyncio
    async def test_non_text_reply_is_a_failure(self, session, transport, notices):
        """Test that a reply without text takes the fallback path."""
        transport.reply = None

        outcome = await session.submit("vitamins?")

        assert outcome is SubmitOutcome.FAILED
        assert session.messages[-1].content == FALLBACK_REPLY
        assert len(notices.notices) == 1

    @pytest.mark.asyncio
    async def test_send_enabled_again_after_failure(self, session, transport):
        """Test that the widget stays usable after an error."""
        transport.error = RequestFailedError("down")
        await session.submit("first")

        transport.error = None
        outcome = await session.submit("second")

        assert outcome is SubmitOutcome.REPLIED
        assert len(session.messages) == 4

    @pytest.mark.asyncio
    async def test_failure_without_notify_callback(self, transport):
        """Test that a missing toast surface does not break recovery."""
        transport.error = RequestFailedError("down")
        session = AssistantSession(transport)

        assert await session.submit("hello") is SubmitOutcome.FAILED
        assert session.messages[-1].content == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_demo_mode_answers_by_keyword(self, transport, notices):
        """Test that demo mode substitutes a canned answer for the fallback."""
        transport.error = RequestFailedError("down")
        session = AssistantSession(transport, demo_mode=True)
        session.set_notify_callback(notices)

        outcome = await session.submit("Give me a WORKOUT routine")

        assert outcome is SubmitOutcome.FAILED
        assert session.messages[-1].content == DEMO_RESPONSES["workout"]
        assert notices.notices[0]["title"] == DEMO_NOTICE_TITLE
        assert len(session.messages) == 2

    @pytest.mark.asyncio
    async def test_demo_mode_leaves_successes_alone(self, transport):
        """Test that demo mode only applies when the request fails."""
        session = AssistantSession(transport, demo_mode=True)

        await session.submit("workout?")

        assert session.messages[-1].content == "An apple has about 95 calories."


class TestDispose:
    """Tests for discarding the conversation at unmount."""

    @pytest.mark.asyncio
    async def test_dispose_discards_in_flight_reply(self, gated_transport, notices):
        """Test that a pending reply is dropped without raising."""
        session = AssistantSession(gated_transport)
        session.set_notify_callback(notices)
        task = asyncio.create_task(session.submit("late reply?"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        session.dispose()
        outcome = await task

        assert outcome is SubmitOutcome.DISCARDED
        assert [m.role for m in session.messages] == [Role.USER]
        assert notices.notices == []
        assert not session.in_flight
        assert gated_transport.cancelled == 1

    @pytest.mark.asyncio
    async def test_dispose_is_idempotent(self, session):
        session.dispose()
        session.dispose()

        assert session.disposed

    @pytest.mark.asyncio
    async def test_submit_after_dispose_raises(self, session):
        """Test that a disposed session refuses new work."""
        session.dispose()

        assert not session.can_submit("anything")
        with pytest.raises(RuntimeError, match="disposed"):
            await session.submit("anything")

    @pytest.mark.asyncio
    async def test_outer_cancellation_propagates(self, gated_transport):
        """Test that cancelling the caller is not mistaken for a failure."""
        session = AssistantSession(gated_transport)
        task = asyncio.create_task(session.submit("cancel me"))
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not session.in_flight
        assert [m.role for m in session.messages] == [Role.USER]


class TestProperties:
    """Property tests for the one-reply-per-submission invariant."""

    @given(non_blank_text)
    @settings(max_examples=50)
    def test_success_adds_exactly_two(self, make_transport, text: str):
        """Property test: a successful submit adds user then assistant."""
        session = AssistantSession(make_transport(reply="ok"))
        session.toggle()
        before = len(session.messages)

        asyncio.run(session.submit(text))

        added = session.messages[before:]
        assert [(m.role, m.content) for m in added] == [(Role.USER, text), (Role.ASSISTANT, "ok")]

    @given(non_blank_text)
    @settings(max_examples=50)
    def test_failure_adds_exactly_two(self, make_transport, text: str):
        """Property test: a failed submit adds user then fallback."""
        fake = make_transport()
        fake.error = RequestFailedError("down")
        session = AssistantSession(fake)

        asyncio.run(session.submit(text))

        assert [(m.role, m.content) for m in session.messages] == [
            (Role.USER, text),
            (Role.ASSISTANT, FALLBACK_REPLY),
        ]

    @given(blank_text)
    def test_blank_never_changes_history(self, make_transport, text: str):
        """Property test: blank input is always ignored."""
        fake = make_transport()
        session = AssistantSession(fake)
        session.toggle()

        outcome = asyncio.run(session.submit(text))

        assert outcome is SubmitOutcome.REJECTED_EMPTY
        assert len(session.messages) == 1
        assert fake.sent == []


class TestScenarios:
    """End-to-end conversation scenarios."""

    @pytest.mark.asyncio
    async def test_open_ask_close_reopen(self, session):
        """Test the open/ask/close/reopen walkthrough."""
        session.toggle()
        session.finish_opening()
        assert [m.content for m in session.messages] == [GREETING]

        await session.submit("How many calories in an apple?")
        expected = [
            (Role.ASSISTANT, GREETING),
            (Role.USER, "How many calories in an apple?"),
            (Role.ASSISTANT, "An apple has about 95 calories."),
        ]
        assert [(m.role, m.content) for m in session.messages] == expected

        session.toggle()
        assert not session.is_open
        snapshot = session.messages

        session.toggle()
        assert session.messages == snapshot
        assert session.get_last_response() == "An apple has about 95 calories."

    @pytest.mark.asyncio
    async def test_transport_failure_walkthrough(self, session, transport, notices):
        """Test that a transport failure ends with the apology and a notice."""
        transport.error = RequestFailedError("connection refused")
        session.toggle()

        await session.submit("Suggest a meal plan")

        assert session.messages[-1].role is Role.ASSISTANT
        assert session.messages[-1].content == (
            "I'm sorry, I'm having trouble connecting right now. Please try again later."
        )
        assert len(notices.notices) == 1
