"""Receipt preview modal shown after checkout."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_pos.debug_log import log_debug
from cafe_pos.models import Order
from cafe_pos.printer import print_receipt
from cafe_pos.receipt import receipt_lines


class ReceiptModal(ModalScreen[None]):
    """Show the receipt; `p` sends it to the thermal printer."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("p", "print_receipt", "Print"),
    ]

    CSS = """
    ReceiptModal {
        align: center middle;
        background: $background 60%;
    }

    #receipt-dialog {
        width: 40;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #receipt-status {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, order: Order) -> None:
        super().__init__()
        self.order = order

    def compose(self) -> ComposeResult:
        with Container(id="receipt-dialog"):
            yield Static("\n".join(receipt_lines(self.order)), id="receipt-body")
            yield Static("P print. Esc/q close.", id="receipt-status")

    def action_print_receipt(self) -> None:
        status = self.query_one("#receipt-status", Static)
        try:
            print_receipt(self.order)
        except Exception as exc:
            log_debug(f"receipt_print_failed order_id={self.order.order_id} error={exc!r}")
            status.update(f"Print failed: {exc}")
            return
        log_debug(f"receipt_printed order_id={self.order.order_id}")
        status.update("Printed.")

    def action_close(self) -> None:
        self.dismiss()
