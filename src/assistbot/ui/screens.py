"""Modal screens for the TUI.

This module hides the design decisions about:
- How the credential is entered (masked input)
- Dialog appearance and keyboard shortcuts

To change how settings look, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .config import CREDENTIAL_PLACEHOLDER, OPENROUTER_KEYS_URL


class SettingsScreen(ModalScreen[str | None]):
    """Modal dialog for the optional OpenRouter API key.

    Dismisses with the entered key (possibly empty, meaning built-in
    responses) on Save or Enter, and with None on Cancel or Escape.
    """

    CSS = """
    SettingsScreen {
        align: center middle;
        background: $background 70%;
    }

    #settings-dialog {
        width: 64;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #settings-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    .settings-hint {
        color: $text-muted;
        margin-top: 1;
    }

    #settings-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #settings-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, credential: str = "") -> None:
        super().__init__()
        self._credential = credential

    def compose(self) -> ComposeResult:
        with Vertical(id="settings-dialog"):
            yield Static("Settings", id="settings-title")
            yield Static("OpenRouter API Key (Optional)")
            yield Input(
                value=self._credential,
                placeholder=CREDENTIAL_PLACEHOLDER,
                password=True,
                id="credential-input",
            )
            yield Static(
                "Add your OpenRouter API key to use DeepSeek R1. "
                "Leave empty to use built-in responses.",
                classes="settings-hint",
            )
            yield Static(f"Get an API key at {OPENROUTER_KEYS_URL}", classes="settings-hint")
            with Horizontal(id="settings-buttons"):
                yield Button("Save", id="btn-save", variant="primary")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#credential-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self.dismiss(self.query_one("#credential-input", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
