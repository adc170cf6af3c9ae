"""Custom dashboard date range modal screen."""

from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from cafe_pos.errors import ValidationError
from cafe_pos.reporting import parse_date_range


class DateRangeModal(ModalScreen[tuple[date, date] | None]):
    """Ask for an inclusive start and end date for the dashboard."""

    BINDINGS = [
        ("escape", "close", "Close"),
    ]

    CSS = """
    DateRangeModal {
        align: center middle;
        background: $background 60%;
    }

    #range-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #range-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #range-error {
        color: #ffb3b3;
        margin-top: 1;
    }

    #range-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, start: date, end: date) -> None:
        super().__init__()
        self.start = start
        self.end = end

    def compose(self) -> ComposeResult:
        with Container(id="range-dialog"):
            yield Static("Période personnalisée", id="range-title")
            yield Input(value=self.start.isoformat(), placeholder="Début AAAA-MM-JJ", id="range-start")
            yield Input(value=self.end.isoformat(), placeholder="Fin AAAA-MM-JJ", id="range-end")
            yield Static(id="range-error")
            yield Static("Tab next field. Enter apply. Esc cancel.", id="range-help")

    def on_mount(self) -> None:
        self.query_one("#range-start", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        start_text = self.query_one("#range-start", Input).value
        end_text = self.query_one("#range-end", Input).value
        try:
            bounds = parse_date_range(start_text, end_text)
        except ValidationError as exc:
            self.query_one("#range-error", Static).update(str(exc))
            return
        self.dismiss(bounds)

    def action_close(self) -> None:
        self.dismiss(None)
