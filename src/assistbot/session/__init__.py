"""Session state module for assistbot.

Holds the transcript, the pending flag and the optional credential of the
single chat session, and pushes change notifications to the view.
"""

from .models import Message, Sender, SessionEvent, SessionEventKind
from .store import GREETING, SessionListener, SessionStore

__all__ = [
    "GREETING",
    "Message",
    "Sender",
    "SessionEvent",
    "SessionEventKind",
    "SessionListener",
    "SessionStore",
]
