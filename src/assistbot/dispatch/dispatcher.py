"""Response dispatch.

Hides the decision of where a reply comes from (built-in responder or the
external completion service) and how the outcome is reconciled into the
session transcript. Every dispatch produces at most one bot message and
always releases the pending flag.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from ..config import ChatSettings
from ..llm import ChatMessage, CompletionError, LLMProvider, create_llm_provider
from ..llm.models import Role
from ..session import Message, Sender, SessionStore
from .fallback import KeywordResponder

WARNING_MARKER = "⚠️"
ERROR_PREFIX = f"{WARNING_MARKER} Error connecting to AI: "
GENERIC_FAILURE_REPLY = "Sorry, something went wrong. Please try again"

SENDER_ROLES: dict[Sender, Role] = {
    Sender.USER: "user",
    Sender.BOT: "assistant",
}

ProviderFactory = Callable[[str], LLMProvider]


def build_history(transcript: Sequence[Message], user_message: str) -> list[ChatMessage]:
    """Convert the transcript into provider history and append the new message.

    Senders without a provider role are left out.

    Args:
        transcript: Messages already in the session, oldest first, not yet
            including ``user_message``
        user_message: The message being dispatched

    Returns:
        Conversation history ending with ``user_message``
    """
    history = [
        ChatMessage(role=SENDER_ROLES[msg.sender], content=msg.text)
        for msg in transcript
        if msg.sender in SENDER_ROLES
    ]
    history.append(ChatMessage(role="user", content=user_message))
    return history


class ResponseDispatcher:
    """Produces the bot reply for each user message.

    Uses the built-in KeywordResponder when the session has no credential,
    otherwise forwards the conversation to the external completion service.
    A dispatch started before a session reset is stale: its reply is dropped
    so it cannot leak into the fresh transcript.

    Example:
        store = SessionStore()
        dispatcher = ResponseDispatcher(store)
        await dispatcher.dispatch("Hi there")
    """

    def __init__(
        self,
        store: SessionStore,
        responder: KeywordResponder | None = None,
        provider_factory: ProviderFactory | None = None,
        settings: ChatSettings | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._responder = responder or KeywordResponder()
        self._settings = settings or ChatSettings()
        self._provider_factory = provider_factory or self._create_provider
        self._sleep = sleep
        self._debug_callback: Callable[[str, str, str], None] | None = None

    @property
    def settings(self) -> ChatSettings:
        return self._settings

    def set_debug_callback(self, callback: Callable[[str, str, str], None] | None) -> None:
        """Set the debug callback for dispatch logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _create_provider(self, credential: str) -> LLMProvider:
        return create_llm_provider(
            "openrouter",
            api_key=credential,
            **self._settings.provider_config()
        )

    async def dispatch(self, user_message: str) -> Message | None:
        """Run one full dispatch cycle for ``user_message``.

        Args:
            user_message: Raw text submitted by the user

        Returns:
            The appended bot message, or None when the input was rejected
            (blank, or another dispatch still pending) or the reply went
            stale because the session was reset meanwhile
        """
        text = user_message.strip()
        if not text:
            self._debug("debug", "Dispatch", "Ignoring blank message")
            return None
        if self._store.pending:
            self._debug("debug", "Dispatch", "Ignoring message while a reply is pending")
            return None

        transcript = self._store.messages
        credential = self._store.credential
        self._store.append_message(text, Sender.USER)
        generation = self._store.begin_dispatch()

        try:
            try:
                if credential:
                    reply = await self._external_reply(transcript, text, credential)
                else:
                    reply = await self._fallback_reply(text)
            except Exception as e:
                self._debug("error", "Dispatch", f"Dispatch failed: {type(e).__name__}: {e}")
                reply = GENERIC_FAILURE_REPLY

            if not self._store.is_current(generation):
                self._debug("warning", "Dispatch", "Session was reset while waiting, reply discarded")
                return None
            return self._store.append_message(reply, Sender.BOT)
        finally:
            self._store.finish_dispatch(generation)

    async def _fallback_reply(self, text: str) -> str:
        self._debug("info", "Dispatch", "No credential set, using built-in responses")
        await self._sleep(self._settings.fallback_delay)
        return self._responder.reply(text)

    async def _external_reply(
        self,
        transcript: Sequence[Message],
        text: str,
        credential: str,
    ) -> str:
        history = build_history(transcript, text)
        self._debug(
            "info",
            "LLM",
            f"Requesting {self._settings.model} with {len(history)} message(s)"
        )

        try:
            async with self._provider_factory(credential) as provider:
                response = await provider.chat_completion(history)
        except CompletionError as e:
            status = f" (HTTP {e.status_code})" if e.status_code else ""
            self._debug("error", "LLM", f"Completion failed{status}: {e.message}")
            return f"{ERROR_PREFIX}{e.message}"

        self._debug("info", "LLM", f"Response received ({len(response.content)} chars)")
        return response.content
