"""In-memory session state store.

This module hides how the transcript, the pending flag and the optional
credential are held, and how changes are pushed to the view. Everything runs
on a single event loop, so mutations need no locking.
"""

from collections.abc import Callable
from datetime import datetime

from .models import Message, Sender, SessionEvent, SessionEventKind

GREETING = "Hello! I'm your AI assistant. How can I help you today?"

SessionListener = Callable[[SessionEvent], None]


class SessionStore:
    """Single-session chat state with subscribe/notify.

    Holds:
    - the ordered transcript (append-only until reset)
    - the pending flag (True while a reply is outstanding)
    - the optional external-service credential
    - a generation counter, bumped on every reset so replies started before a
      reset can be recognised as stale

    Example:
        store = SessionStore()
        unsubscribe = store.subscribe(lambda event: print(event.kind))
        store.append_message("Hi", Sender.USER)
        unsubscribe()
    """

    def __init__(
        self,
        greeting: str = GREETING,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._greeting = greeting
        self._clock = clock
        self._messages: list[Message] = []
        self._next_id = 1
        self._pending = False
        self._credential: str | None = None
        self._generation = 0
        self._listeners: list[SessionListener] = []
        self._seed()

    @property
    def messages(self) -> tuple[Message, ...]:
        """Transcript in append order."""
        return tuple(self._messages)

    @property
    def message_count(self) -> int:
        return len(self._messages)

    @property
    def pending(self) -> bool:
        """True while a dispatch is outstanding."""
        return self._pending

    @property
    def credential(self) -> str | None:
        return self._credential

    @property
    def has_credential(self) -> bool:
        """Whether replies go to the external service."""
        return self._credential is not None

    @property
    def generation(self) -> int:
        """Number of resets since the store was created."""
        return self._generation

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called synchronously with a SessionEvent on every
                append, reset, pending change and credential change

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def append_message(self, text: str, sender: Sender) -> Message:
        """Create a message with a fresh id and timestamp and append it."""
        message = Message(
            id=self._next_id,
            text=text,
            sender=sender,
            timestamp=self._clock(),
        )
        self._next_id += 1
        self._messages.append(message)
        self._notify(SessionEventKind.MESSAGE_APPENDED, message=message)
        return message

    def reset(self) -> None:
        """Drop the transcript back to the seeded greeting and clear pending.

        Ids keep increasing across resets. Bumping the generation marks any
        in-flight dispatch as stale.
        """
        self._generation += 1
        self._messages.clear()
        self._pending = False
        self._seed(notify=False)
        self._notify(SessionEventKind.RESET)

    def set_credential(self, value: str | None) -> None:
        """Replace the credential. Empty or blank means use the local fallback."""
        credential = value.strip() if value else ""
        self._credential = credential or None
        self._notify(SessionEventKind.CREDENTIAL_CHANGED)

    def begin_dispatch(self) -> int:
        """Mark a dispatch as outstanding and return its generation tag."""
        self._set_pending(True)
        return self._generation

    def finish_dispatch(self, generation: int) -> None:
        """Clear pending, unless a reset already superseded this dispatch."""
        if self.is_current(generation):
            self._set_pending(False)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _set_pending(self, value: bool) -> None:
        if self._pending == value:
            return
        self._pending = value
        self._notify(SessionEventKind.PENDING_CHANGED)

    def _seed(self, notify: bool = True) -> None:
        message = Message(
            id=self._next_id,
            text=self._greeting,
            sender=Sender.BOT,
            timestamp=self._clock(),
        )
        self._next_id += 1
        self._messages.append(message)
        if notify:
            self._notify(SessionEventKind.MESSAGE_APPENDED, message=message)

    def _notify(self, kind: SessionEventKind, message: Message | None = None) -> None:
        event = SessionEvent(
            kind=kind,
            generation=self._generation,
            message=message,
            pending=self._pending,
        )
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event)
