"""Main Textual TUI application.

Binds the session store to the widgets and runs dispatches as background
workers on the app's event loop. The widgets never mutate the session
directly: they render what the store pushes.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import ChatSettings
from ..dispatch import ResponseDispatcher
from ..session import SessionEvent, SessionEventKind, SessionStore
from .config import STATUS_BUILTIN, STATUS_CONNECTED, LogLevel
from .screens import SettingsScreen
from .styles import APP_CSS
from .themes import INDIGO_NIGHT
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TypingIndicator


class AssistantApp(App):
    """Textual chat front end for a single assistant session."""

    CSS = APP_CSS
    TITLE = "AI Assistant"

    # Priority: the focused TextArea binds most ctrl keys itself
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+s", "open_settings", "Settings", priority=True),
        Binding("ctrl+r", "reset_chat", "Reset Chat", priority=True),
        Binding("ctrl+t", "copy_last_response", "Copy Response", priority=True),
        Binding("ctrl+l", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        store: SessionStore | None = None,
        dispatcher: ResponseDispatcher | None = None,
        settings: ChatSettings | None = None,
        log_level: str = "info",
    ) -> None:
        super().__init__()
        self._store = store or SessionStore()
        self._dispatcher = dispatcher or ResponseDispatcher(self._store, settings=settings)
        self._log_level = LogLevel.from_string(log_level)
        self._unsubscribe = None

    @property
    def store(self) -> SessionStore:
        return self._store

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield TypingIndicator(id="typing-indicator")
        yield DebugPanel(id="debug-panel", log_level=self._log_level)
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(INDIGO_NIGHT)
        self.theme = INDIGO_NIGHT.name

        self._dispatcher.set_debug_callback(self._route_debug)
        self._unsubscribe = self._store.subscribe(self._on_session_event)

        self.query_one("#chat-history", ChatHistoryWidget).load(self._store.messages)
        self._update_subtitle()
        self._sync_pending(self._store.pending)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._dispatcher.set_debug_callback(None)

    def _on_session_event(self, event: SessionEvent) -> None:
        """Re-render the part of the view affected by a store change."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)

        if event.kind == SessionEventKind.MESSAGE_APPENDED and event.message is not None:
            chat.add_message(event.message)
        elif event.kind == SessionEventKind.RESET:
            chat.load(self._store.messages)
            self.query_one("#chat-input-bar", ChatInputBar).clear()
            self._sync_pending(event.pending)
        elif event.kind == SessionEventKind.PENDING_CHANGED:
            self._sync_pending(event.pending)
        elif event.kind == SessionEventKind.CREDENTIAL_CHANGED:
            self._update_subtitle()

    def _sync_pending(self, pending: bool) -> None:
        self.query_one("#typing-indicator", TypingIndicator).set_active(pending)
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(pending)

    def _update_subtitle(self) -> None:
        self.sub_title = STATUS_CONNECTED if self._store.has_credential else STATUS_BUILTIN

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route dispatcher debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_entry(LogLevel.from_string(level), component, message)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._store.pending:
            return
        self._run_dispatch(event.value)

    @work(group="dispatch")
    async def _run_dispatch(self, user_input: str) -> None:
        """Run one dispatch as a background async worker.

        Not exclusive: a reset does not cancel an in-flight request, the
        dispatcher discards its stale reply instead.
        """
        await self._dispatcher.dispatch(user_input)

    def action_open_settings(self) -> None:
        """Open the credential dialog."""
        self.push_screen(
            SettingsScreen(self._store.credential or ""),
            callback=self._on_settings_closed,
        )

    def _on_settings_closed(self, credential: str | None) -> None:
        if credential is None:
            return
        self._store.set_credential(credential)
        if self._store.has_credential:
            self.notify("API key saved", timeout=2)
        else:
            self.notify("Using built-in responses", timeout=2)

    def action_reset_chat(self) -> None:
        """Reset the conversation to the greeting."""
        self._store.reset()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()
        self.notify("Chat reset", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    settings: ChatSettings | None = None,
    log_level: str = "info",
) -> None:
    """Run the Textual TUI.

    Args:
        settings: Endpoint and latency settings (defaults to ChatSettings())
        log_level: Threshold for the log panel (debug/info/warning/error)
    """
    app = AssistantApp(settings=settings, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
