"""Built-in keyword responder.

Used when no external credential is configured. Replies are chosen by an
ordered list of substring rules evaluated against the lower-cased message;
the first matching rule wins. Messages matching no rule get a random generic
acknowledgement.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

GREETING_REPLY = "Hello! It's great to chat with you. What would you like to know?"
STATUS_REPLY = "I'm functioning well, thank you for asking! How can I assist you today?"
IDENTITY_REPLY = (
    "I'm an AI assistant created to help answer your questions and have conversations with you."
)
HELP_REPLY = (
    "I'm here to help! You can ask me questions, have a conversation, or just chat. "
    "What do you need assistance with?"
)
WEATHER_REPLY = (
    "I don't have access to real-time weather data, but you can check your local weather service!"
)
FAREWELL_REPLY = "Goodbye! Feel free to come back anytime you need assistance!"

GENERIC_REPLIES: tuple[str, ...] = (
    "That's an interesting question! Let me help you with that.",
    "I understand what you're asking. Here's what I think...",
    "Great question! Based on what you're asking, I'd say...",
    "I'm here to help with that. Let me provide some information.",
    "That's a good point. From my perspective...",
    "Interesting topic! I'd be happy to discuss that with you.",
)


def _time_reply(now: datetime) -> str:
    return f"The current time is {now.strftime('%X')}."


def _date_reply(now: datetime) -> str:
    return f"Today's date is {now.strftime('%x')}."


@dataclass(frozen=True)
class KeywordRule:
    """Reply produced when any of ``keywords`` occurs in the message."""

    keywords: tuple[str, ...]
    reply: str | Callable[[datetime], str]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)

    def render(self, now: datetime) -> str:
        if callable(self.reply):
            return self.reply(now)
        return self.reply


# Order matters: "hi" also matches "this", and "time" is checked before "date"
DEFAULT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("hello", "hi", "hey"), GREETING_REPLY),
    KeywordRule(("how are you",), STATUS_REPLY),
    KeywordRule(("name", "who are you"), IDENTITY_REPLY),
    KeywordRule(("help",), HELP_REPLY),
    KeywordRule(("time",), _time_reply),
    KeywordRule(("date", "today"), _date_reply),
    KeywordRule(("weather",), WEATHER_REPLY),
    KeywordRule(("bye", "goodbye"), FAREWELL_REPLY),
)


class KeywordResponder:
    """Deterministic keyword classifier with a random generic fallback.

    The random source and the clock are injectable so tests can pin both.

    Example:
        responder = KeywordResponder(rng=random.Random(0))
        responder.reply("hello there")  # -> GREETING_REPLY
    """

    def __init__(
        self,
        rules: tuple[KeywordRule, ...] = DEFAULT_RULES,
        generic_replies: tuple[str, ...] = GENERIC_REPLIES,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if not generic_replies:
            raise ValueError("KeywordResponder needs at least one generic reply")
        self._rules = rules
        self._generic_replies = generic_replies
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def generic_replies(self) -> tuple[str, ...]:
        return self._generic_replies

    def match(self, message: str) -> KeywordRule | None:
        """Return the first rule matching ``message``, or None."""
        lowered = message.lower()
        for rule in self._rules:
            if rule.matches(lowered):
                return rule
        return None

    def reply(self, message: str) -> str:
        """Compute the reply for ``message``."""
        rule = self.match(message)
        if rule is None:
            return self._rng.choice(self._generic_replies)
        return rule.render(self._clock())
