"""Tests for demo-mode canned answers."""
import pytest

from edibilize.chat.demo import DEMO_DEFAULT_RESPONSE, DEMO_RESPONSES, demo_response


class TestDemoResponse:
    """Tests for keyword matching."""

    @pytest.mark.parametrize("keyword", list(DEMO_RESPONSES))
    def test_each_keyword_matches(self, keyword):
        assert demo_response(f"Tell me about {keyword} please") == DEMO_RESPONSES[keyword]

    def test_case_insensitive(self):
        assert demo_response("PROTEIN sources?") == DEMO_RESPONSES["protein"]

    def test_first_keyword_wins(self):
        """Test that calories outranks protein when both appear."""
        assert demo_response("protein and calories in eggs") == DEMO_RESPONSES["calories"]

    def test_default_answer(self):
        assert demo_response("hello there") == DEMO_DEFAULT_RESPONSE
