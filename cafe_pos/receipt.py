"""Plain-text customer receipt for a finalized order."""

from __future__ import annotations

from datetime import datetime, tzinfo
from decimal import Decimal

from cafe_pos.config import CURRENCY_SYMBOL, PRINTER_CHARS_PER_LINE
from cafe_pos.constant import CAFE_ADDRESS, CAFE_NAME, CAFE_PHONE, RECEIPT_FAREWELL, UNKNOWN_WAITER_LABEL
from cafe_pos.models import Order


def format_price(value: Decimal) -> str:
    return f"{value:.2f}{CURRENCY_SYMBOL}"


def format_receipt_date(moment: datetime, tz: tzinfo | None = None) -> str:
    local = moment.astimezone(tz) if moment.tzinfo is not None else moment
    return local.strftime("%d/%m/%Y %H:%M:%S")


def _two_columns(left: str, right: str, width: int) -> str:
    room = max(1, width - len(right) - 1)
    if len(left) > room:
        left = left[: max(1, room - 1)] + "…"
    return f"{left}{' ' * (width - len(left) - len(right))}{right}"


def receipt_lines(order: Order, width: int = PRINTER_CHARS_PER_LINE, tz: tzinfo | None = None) -> list[str]:
    """Lay out the receipt as fixed-width lines, header to farewell."""
    dashes = "-" * width
    lines = [
        CAFE_NAME.center(width).rstrip(),
        CAFE_ADDRESS.center(width).rstrip(),
        CAFE_PHONE.center(width).rstrip(),
        dashes,
        _two_columns("Commande #:", str(order.order_number), width),
        _two_columns("Date:", format_receipt_date(order.created_at, tz), width),
        _two_columns("Serveur:", order.waiter_name or UNKNOWN_WAITER_LABEL, width),
        dashes,
        _two_columns("Article  Qté", "Prix", width),
    ]
    for line in order.items:
        lines.append(_two_columns(f"{line.name} x{line.quantity}", format_price(line.price), width))
    lines.append(dashes)
    lines.append(_two_columns("TOTAL", format_price(order.total), width))
    lines.append("")
    lines.extend(text.center(width).rstrip() for text in RECEIPT_FAREWELL)
    return lines
