"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Transcript rendering and auto-scroll
- Typing indicator animation
- Input submission keys and input history
- Log rendering and level filtering
"""

from collections.abc import Iterable
from datetime import datetime

from rich.text import Text
from textual import events
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..dispatch import WARNING_MARKER
from ..session import Message, Sender
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    TYPING_FRAME_INTERVAL,
    TYPING_FRAMES,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A chat message container that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript view.

    Pure view over the session transcript: messages are rendered as they are
    appended, and the view always scrolls to the newest one.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def add_message(self, message: Message) -> None:
        """Render ``message`` below the existing ones and scroll to it."""
        self._messages.append(message)
        self.mount(self._build_message(message))
        self.border_subtitle = f"{len(self._messages)} messages"
        self.call_after_refresh(self.scroll_end, animate=False)

    def load(self, messages: Iterable[Message]) -> None:
        """Replace the rendered transcript with ``messages``."""
        self._messages.clear()
        self.remove_children()
        self.border_subtitle = "Conversation history"
        for message in messages:
            self.add_message(message)

    def get_last_response(self) -> str | None:
        """Get the last bot response."""
        for msg in reversed(self._messages):
            if msg.sender == Sender.BOT:
                return msg.text
        return None

    def _build_message(self, message: Message) -> ClickableMessage:
        if message.sender == Sender.USER:
            prefix = "You"
            classes = "chat-message user-message"
        else:
            prefix = "Assistant"
            classes = "chat-message bot-message"
            if message.text.startswith(WARNING_MARKER):
                classes += " warning-message"

        timestamp = message.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
        container = ClickableMessage(
            content=message.text,
            id=f"message-{message.id}",
            classes=classes,
        )
        container.compose_add_child(Static(f"{prefix} [{timestamp}]", classes="message-header", markup=False))

        if message.sender == Sender.BOT:
            # Model replies are usually markdown
            container.compose_add_child(Markdown(message.text, classes="message-content"))
        else:
            container.compose_add_child(Static(Text(message.text), classes="message-content"))
        return container


class TypingIndicator(Static):
    """Animated "assistant is typing" line, shown while a reply is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("", *args, **kwargs)
        self._frame = 0
        self._timer = None

    def on_mount(self) -> None:
        self.display = False
        self._timer = self.set_interval(TYPING_FRAME_INTERVAL, self._advance, pause=True)

    def _advance(self) -> None:
        self._frame = (self._frame + 1) % len(TYPING_FRAMES)
        self.update(f"Assistant is typing {TYPING_FRAMES[self._frame]}")

    def set_active(self, active: bool) -> None:
        """Show and animate, or hide and stop."""
        self.display = active
        if self._timer is None:
            return
        if active:
            self._frame = 0
            self.update(f"Assistant is typing {TYPING_FRAMES[0]}")
            self._timer.resume()
        else:
            self._timer.pause()


class ChatTextArea(TextArea):
    """TextArea where Enter submits and Shift+Enter inserts a newline.

    Terminals that cannot report Shift+Enter can use Ctrl+J for a newline.
    """

    class SubmitRequested(TextualMessage):
        """Posted when the user presses Enter."""

    async def _on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.prevent_default()
            event.stop()
            self.post_message(self.SubmitRequested())
        elif event.key in ("shift+enter", "ctrl+j"):
            event.prevent_default()
            event.stop()
            self.insert("\n")


class ChatInputBar(Horizontal):
    """Chat input bar with a multi-line text area and a Send button.

    While busy (a reply is pending) the text area is read-only and Send is
    disabled, so no second message can be submitted.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def compose(self):
        text_area = ChatTextArea(
            id="chat-input",
            show_line_numbers=False,
            placeholder=INPUT_PLACEHOLDER,
        )
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="primary", disabled=True).with_tooltip(
            "Send message (Enter)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", ChatTextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_chat_text_area_submit_requested(self, event: ChatTextArea.SubmitRequested) -> None:
        event.stop()
        self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._sync_send_button()

    def on_key(self, event: events.Key) -> None:
        if event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def set_busy(self, busy: bool) -> None:
        """Block or allow submission while a reply is pending."""
        self._busy = busy
        self.set_class(busy, "-busy")
        self.query_one("#chat-input", ChatTextArea).read_only = busy
        self._sync_send_button()

    def clear(self) -> None:
        """Empty the input buffer."""
        self.query_one("#chat-input", ChatTextArea).text = ""
        self._history_index = -1

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", ChatTextArea).focus()

    def _sync_send_button(self) -> None:
        text = self.query_one("#chat-input", ChatTextArea).text
        self.query_one("#send-btn", Button).disabled = self._busy or not text.strip()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", ChatTextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", ChatTextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history or self._busy:
            return
        text_area = self.query_one("#chat-input", ChatTextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self._busy:
            return
        text_area = self.query_one("#chat-input", ChatTextArea)
        value = text_area.text.strip()
        if not value:
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        text_area.text = ""
        self.post_message(self.Submitted(value))


class DebugPanel(RichLog):
    """Log panel for dispatch tracing with level filtering.

    Hidden by default, toggled with Ctrl+L.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Dispatch": "green",
        "LLM": "magenta",
    }

    def __init__(self, *args, log_level: LogLevel = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._update_subtitle()

    def on_mount(self) -> None:
        self.display = False

    def log_entry(self, level: LogLevel, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT), style="dim")
        line.append(" ")
        line.append(f"{level.name:<7}", style=self.LEVEL_COLORS.get(level, "white"))
        line.append(f"[{component}]", style=self.COMPONENT_COLORS.get(component, "white"))
        line.append(f" {message}")
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {self._log_level.name}"
        else:
            self.border_subtitle = "Hidden"
