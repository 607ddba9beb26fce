"""
assistbot: A single-session chat assistant for the terminal.

Replies come from a built-in keyword responder, or from a hosted language
model when an OpenRouter API key is supplied at runtime.
"""

__version__ = "0.1.0"

from .config import ChatSettings
from .dispatch import KeywordResponder, ResponseDispatcher
from .session import Message, Sender, SessionEvent, SessionEventKind, SessionStore

__all__ = [
    "ChatSettings",
    "KeywordResponder",
    "Message",
    "ResponseDispatcher",
    "Sender",
    "SessionEvent",
    "SessionEventKind",
    "SessionStore",
]
