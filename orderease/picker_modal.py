"""List picker modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static


class PickerModal(ModalScreen[int | None]):
    """Centered modal to choose one row; dismisses with the row index."""

    CSS = """
    PickerModal {
        align: center middle;
        background: $background 60%;
    }

    #picker-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #picker-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #picker-body {
        margin-bottom: 1;
        color: white;
    }

    #picker-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, title: str, choices: list[str]) -> None:
        super().__init__()
        self.title_text = title
        self.choices = choices

    def compose(self) -> ComposeResult:
        with Container(id="picker-dialog"):
            yield Static(self.title_text, id="picker-title")
            yield Static(id="picker-body")
            yield Static("J/K/↑/↓ move, Enter choose, Esc/q/Ctrl+C close", id="picker-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
        elif event.key in {"j", "down"}:
            self._move_cursor(1)
        elif event.key in {"k", "up"}:
            self._move_cursor(-1)
        elif event.key == "enter" and self.choices:
            self.dismiss(self.cursor_index)
        event.stop()

    def _move_cursor(self, delta: int) -> None:
        if not self.choices:
            return
        self.cursor_index = (self.cursor_index + delta) % len(self.choices)
        self._refresh_content()

    def _refresh_content(self) -> None:
        body = self.query_one("#picker-body", Static)
        if not self.choices:
            body.update(Text("(nothing to choose)", style="dim"))
            return

        content = Text(style="white")
        for idx, row in enumerate(self.choices):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"{pointer}{row}", style=style)
        body.update(content)
