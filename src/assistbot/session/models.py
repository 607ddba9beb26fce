"""Data models for the chat session.

Hides the representation of transcript entries and of the change
notifications pushed to subscribers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Who authored a transcript message."""

    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """A single transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, description="Store-wide increasing identifier")
    text: str = Field(description="Message body as shown to the user")
    sender: Sender = Field(description="Author of the message")
    timestamp: datetime = Field(default_factory=datetime.now)


class SessionEventKind(str, Enum):
    """Kinds of change a session store reports to its subscribers."""

    MESSAGE_APPENDED = "message_appended"
    RESET = "reset"
    PENDING_CHANGED = "pending_changed"
    CREDENTIAL_CHANGED = "credential_changed"


@dataclass(frozen=True)
class SessionEvent:
    """A change notification pushed to session subscribers."""

    kind: SessionEventKind
    generation: int
    message: Message | None = None  # set for MESSAGE_APPENDED
    pending: bool = False
