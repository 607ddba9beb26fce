"""Tests for the Textual TUI, driven through App.run_test pilots."""
import pytest
from textual.widgets import Input, TextArea

from assistbot.config import ChatSettings
from assistbot.dispatch import ResponseDispatcher
from assistbot.dispatch.fallback import GREETING_REPLY
from assistbot.session import Sender, SessionStore
from assistbot.ui import (
    AssistantApp,
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    LogLevel,
    SettingsScreen,
    TypingIndicator,
)
from assistbot.ui.config import STATUS_BUILTIN, STATUS_CONNECTED


@pytest.fixture
def app_store():
    return SessionStore()


@pytest.fixture
def app(app_store):
    dispatcher = ResponseDispatcher(app_store, settings=ChatSettings(fallback_delay=0.0))
    return AssistantApp(store=app_store, dispatcher=dispatcher)


async def _settle(app, pilot) -> None:
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestLogLevel:
    """Tests for the log panel levels."""

    @pytest.mark.parametrize(
        "name, expected",
        [("debug", LogLevel.DEBUG), ("INFO", LogLevel.INFO), ("Error", LogLevel.ERROR), ("bogus", LogLevel.DEBUG)],
    )
    def test_from_string(self, name, expected):
        assert LogLevel.from_string(name) == expected

    def test_levels_are_ordered(self):
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR


class TestAssistantApp:
    """Tests for AssistantApp."""

    @pytest.mark.asyncio
    async def test_initial_render(self, app):
        """Test that the seed greeting is shown and the fallback path announced."""
        async with app.run_test() as pilot:
            await pilot.pause()

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.message_count == 1
            assert len(app.query(".chat-message")) == 1
            assert app.sub_title == STATUS_BUILTIN
            assert app.query_one("#typing-indicator", TypingIndicator).display is False

    @pytest.mark.asyncio
    async def test_enter_submits_and_renders_reply(self, app, app_store):
        """Test the full cycle from keystrokes to a rendered reply."""
        async with app.run_test() as pilot:
            await pilot.press("h", "e", "l", "l", "o")
            await pilot.press("enter")
            await _settle(app, pilot)

            assert [(msg.sender, msg.text) for msg in app_store.messages[1:]] == [
                (Sender.USER, "hello"),
                (Sender.BOT, GREETING_REPLY),
            ]
            assert len(app.query(".chat-message")) == 3
            assert app.query_one("#chat-input", TextArea).text == ""
            assert app.query_one("#chat-input-bar", ChatInputBar).busy is False
            assert app_store.pending is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("newline_key", ["shift+enter", "ctrl+j"])
    async def test_newline_keys_do_not_submit(self, app, app_store, newline_key):
        """Test that Shift+Enter and Ctrl+J insert a newline instead of sending."""
        async with app.run_test() as pilot:
            await pilot.press("a", newline_key, "b")
            await _settle(app, pilot)

            assert len(app_store.messages) == 1
            assert app.query_one("#chat-input", TextArea).text == "a\nb"
            assert app_store.pending is False

    @pytest.mark.asyncio
    async def test_busy_style_applies(self, app, app_store):
        """Test that the busy class is toggled on the input bar with pending."""
        async with app.run_test() as pilot:
            bar = app.query_one("#chat-input-bar", ChatInputBar)
            assert not bar.has_class("-busy")

            app_store.begin_dispatch()
            await pilot.pause()
            assert bar.has_class("-busy")

            app_store.reset()
            await pilot.pause()
            assert not bar.has_class("-busy")

    @pytest.mark.asyncio
    async def test_blank_input_is_not_sent(self, app, app_store):
        async with app.run_test() as pilot:
            await pilot.press("space", "enter")
            await _settle(app, pilot)

            assert len(app_store.messages) == 1

    @pytest.mark.asyncio
    async def test_pending_blocks_input(self, app, app_store):
        """Test that the input bar is busy while a reply is outstanding."""
        async with app.run_test() as pilot:
            app_store.begin_dispatch()
            await pilot.pause()

            bar = app.query_one("#chat-input-bar", ChatInputBar)
            assert bar.busy is True
            assert app.query_one("#chat-input", TextArea).read_only is True
            assert app.query_one("#typing-indicator", TypingIndicator).display is True

    @pytest.mark.asyncio
    async def test_reset_restores_greeting(self, app, app_store):
        """Test that ctrl+r resets both the store and the rendered transcript."""
        async with app.run_test() as pilot:
            await pilot.press("h", "i", "enter")
            await _settle(app, pilot)
            assert len(app_store.messages) == 3

            await pilot.press("ctrl+r")
            await pilot.pause()

            assert len(app_store.messages) == 1
            assert app.query_one("#chat-history", ChatHistoryWidget).message_count == 1
            assert app.query_one("#chat-input", TextArea).text == ""

    @pytest.mark.asyncio
    async def test_settings_dialog_sets_credential(self, app, app_store):
        """Test that a saved key switches the header to the external path."""
        async with app.run_test() as pilot:
            await pilot.press("ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, SettingsScreen)

            app.screen.query_one("#credential-input", Input).value = "abc123"
            await pilot.click("#btn-save")
            await pilot.pause()

            assert app_store.credential == "abc123"
            assert app.sub_title == STATUS_CONNECTED

    @pytest.mark.asyncio
    async def test_settings_cancel_keeps_credential(self, app, app_store):
        async with app.run_test() as pilot:
            await pilot.press("ctrl+s")
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()

            assert app_store.credential is None
            assert app.sub_title == STATUS_BUILTIN

    @pytest.mark.asyncio
    async def test_debug_panel_toggle_and_entries(self, app):
        """Test that dispatch logging reaches the log panel."""
        async with app.run_test() as pilot:
            panel = app.query_one("#debug-panel", DebugPanel)
            assert panel.display is False

            await pilot.press("ctrl+l")
            await pilot.pause()
            assert panel.display is True

            await pilot.press("h", "i", "enter")
            await _settle(app, pilot)
            assert len(panel.lines) > 0
