"""Unit tests for the built-in keyword responder."""
import random
from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from assistbot.dispatch import GENERIC_REPLIES, KeywordResponder, KeywordRule
from assistbot.dispatch.fallback import (
    FAREWELL_REPLY,
    GREETING_REPLY,
    HELP_REPLY,
    IDENTITY_REPLY,
    STATUS_REPLY,
    WEATHER_REPLY,
)

FIXED_NOW = datetime(2024, 5, 17, 14, 30, 5)

ALL_KEYWORDS = (
    "hello", "hi", "hey", "how are you", "name", "who are you", "help",
    "time", "date", "today", "weather", "bye", "goodbye",
)


@pytest.fixture
def responder():
    return KeywordResponder(rng=random.Random(42), clock=lambda: FIXED_NOW)


class TestKeywordResponder:
    """Tests for KeywordResponder."""

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("hello", GREETING_REPLY),
            ("Hi there", GREETING_REPLY),
            ("HEY!", GREETING_REPLY),
            ("how are you", STATUS_REPLY),
            ("What is your name?", IDENTITY_REPLY),
            ("who are you", IDENTITY_REPLY),
            ("I need help", HELP_REPLY),
            ("tell me about the weather", WEATHER_REPLY),
            ("bye", FAREWELL_REPLY),
        ],
    )
    def test_keyword_replies(self, responder, message, expected):
        """Test each keyword rule on a representative message."""
        assert responder.reply(message) == expected

    def test_first_match_wins(self, responder):
        """Test that earlier rules take precedence over later ones."""
        # "hey" (greeting) beats "how are you" (status)
        assert responder.reply("hey, how are you") == GREETING_REPLY
        # "this" contains "hi", so the greeting rule fires first
        assert responder.reply("what is this weather") == GREETING_REPLY
        # "name" is checked before "bye"
        assert responder.reply("goodbye, what's your name") == IDENTITY_REPLY

    def test_time_reply_uses_clock(self, responder):
        """Test that the time rule formats the injected clock."""
        assert responder.reply("what time is it") == f"The current time is {FIXED_NOW.strftime('%X')}."

    def test_date_reply_uses_clock(self, responder):
        """Test that the date rule formats the injected clock."""
        assert responder.reply("what's the date") == f"Today's date is {FIXED_NOW.strftime('%x')}."
        assert responder.reply("today") == f"Today's date is {FIXED_NOW.strftime('%x')}."

    def test_unmatched_message_uses_generic_pool(self, responder):
        """Test that messages without keywords get a generic reply."""
        assert responder.match("tell me a joke") is None
        assert responder.reply("tell me a joke") in GENERIC_REPLIES

    def test_generic_pool_has_at_least_five_replies(self):
        assert len(GENERIC_REPLIES) >= 5

    def test_seeded_rng_pins_generic_reply(self):
        """Test that the injected random source makes the choice reproducible."""
        first = KeywordResponder(rng=random.Random(7)).reply("quantum physics")
        second = KeywordResponder(rng=random.Random(7)).reply("quantum physics")

        assert first == second
        assert first == random.Random(7).choice(GENERIC_REPLIES)

    def test_custom_rules(self):
        """Test that rules and generic replies are replaceable."""
        responder = KeywordResponder(
            rules=(KeywordRule(("ping",), "pong"),),
            generic_replies=("?",),
        )

        assert responder.reply("PING") == "pong"
        assert responder.reply("hello") == "?"

    def test_empty_generic_pool_is_rejected(self):
        with pytest.raises(ValueError):
            KeywordResponder(generic_replies=())

    @given(st.text(alphabet="qwxzjkpvm0123456789 .,!?", max_size=40))
    def test_keyword_free_text_always_generic(self, message: str):
        """Property test: text without any keyword gets a generic reply."""
        responder = KeywordResponder(rng=random.Random(0))
        assert not any(keyword in message.lower() for keyword in ALL_KEYWORDS)
        assert responder.reply(message) in GENERIC_REPLIES
