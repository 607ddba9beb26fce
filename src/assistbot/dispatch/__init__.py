"""Response dispatch module for assistbot.

Decides whether a reply comes from the built-in keyword responder or the
external completion service, and appends the outcome to the session.
"""

from .dispatcher import (
    ERROR_PREFIX,
    GENERIC_FAILURE_REPLY,
    WARNING_MARKER,
    ProviderFactory,
    ResponseDispatcher,
    build_history,
)
from .fallback import DEFAULT_RULES, GENERIC_REPLIES, KeywordResponder, KeywordRule

__all__ = [
    "DEFAULT_RULES",
    "ERROR_PREFIX",
    "GENERIC_FAILURE_REPLY",
    "GENERIC_REPLIES",
    "KeywordResponder",
    "KeywordRule",
    "ProviderFactory",
    "ResponseDispatcher",
    "WARNING_MARKER",
    "build_history",
]
