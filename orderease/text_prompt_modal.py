"""Free text entry modal screen."""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

Validator = Callable[[str], str | None]


class TextPromptModal(ModalScreen[str | None]):
    """Prompt for one line of text.

    ``validate`` returns an error message for rejected input, or ``None``.
    Blank input is always rejected.
    """

    CSS = """
    TextPromptModal {
        align: center middle;
        background: $background 60%;
    }

    #text-prompt-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #text-prompt-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #text-prompt-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #text-prompt-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #text-prompt-help {
        color: #dddddd;
    }
    """

    def __init__(self, prompt: str, validate: Validator | None = None, max_length: int = 60) -> None:
        super().__init__()
        self.prompt_text = prompt
        self.validator = validate
        self.max_length = max_length
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="text-prompt-dialog"):
            yield Static(self.prompt_text, id="text-prompt-title")
            yield Static(id="text-prompt-value")
            yield Static(id="text-prompt-error")
            yield Static("Type text, Enter confirm, Esc cancel", id="text-prompt-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if len(self.value) < self.max_length:
                self.value += event.character
            self.error = ""
            self._refresh_content()

        # Ignore all non-text keys while typing.
        event.stop()

    def _confirm(self) -> None:
        normalized = self.value.strip()
        if not normalized:
            self.error = "A value is required."
            self._refresh_content()
            return
        if self.validator is not None:
            error = self.validator(normalized)
            if error:
                self.error = error
                self._refresh_content()
                return
        self.dismiss(normalized)

    def _refresh_content(self) -> None:
        self.query_one("#text-prompt-value", Static).update(f"{self.value}|")
        self.query_one("#text-prompt-error", Static).update(self.error or "")
