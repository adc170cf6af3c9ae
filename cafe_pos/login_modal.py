"""Waiter selection and PIN entry modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_pos.session import Session


class LoginModal(ModalScreen[str | None]):
    """Pick a waiter and type their PIN; dismisses with the waiter id."""

    CSS = """
    LoginModal {
        align: center middle;
        background: $background 60%;
    }

    #login-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #login-waiters {
        margin-bottom: 1;
    }

    #login-pin {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
    }

    #login-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #login-help {
        color: $text-muted;
    }
    """

    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session
        self.selected_index = 0
        self.pin = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("Connexion", id="login-title")
            yield Static(id="login-waiters")
            yield Static(id="login-pin")
            yield Static(id="login-error")
            yield Static("↑/↓ choose waiter. Digits PIN. Enter confirm. Backspace delete. Esc clear.", id="login-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        waiters = self.session.waiters
        if event.key in {"up", "down"} and waiters:
            delta = -1 if event.key == "up" else 1
            self.selected_index = (self.selected_index + delta) % len(waiters)
            self.pin = ""
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "escape":
            self.pin = ""
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.pin:
                self.pin = self.pin[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character and event.character.isdigit():
            if len(self.pin) < self._pin_length():
                self.pin += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def _pin_length(self) -> int:
        waiters = self.session.waiters
        if not waiters:
            return 0
        return len(waiters[self.selected_index].pin)

    def _confirm(self) -> None:
        waiters = self.session.waiters
        if not waiters or not self.pin:
            return
        waiter = waiters[self.selected_index]
        if self.session.login(waiter.waiter_id, self.pin):
            self.dismiss(waiter.waiter_id)
            return
        self.pin = ""
        self.error = "Code PIN incorrect. Réessayez."
        self._refresh_content()

    def _refresh_content(self) -> None:
        waiters_widget = self.query_one("#login-waiters", Static)
        pin_widget = self.query_one("#login-pin", Static)
        error_widget = self.query_one("#login-error", Static)

        listing = Text()
        for idx, waiter in enumerate(self.session.waiters):
            if idx > 0:
                listing.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            listing.append(f"{pointer}{waiter.name}", style="bold" if idx == self.selected_index else "")
        waiters_widget.update(listing)

        dots = "●" * len(self.pin) + "○" * max(0, self._pin_length() - len(self.pin))
        pin_widget.update(f"PIN  {dots}")
        error_widget.update(self.error or "")
