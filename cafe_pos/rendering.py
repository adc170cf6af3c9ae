"""Rendering helpers for the terminal views."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from cafe_pos.models import CartLine, Order, OrderStatus
from cafe_pos.receipt import format_price

_STATUS_STYLES = {
    OrderStatus.PENDING: "bold #0b1f0f on #c9c9c9",
    OrderStatus.PAID: "bold #ffffff on #d9822b",
    OrderStatus.PREPARED: "bold #0b1f0f on #5fbf72",
    OrderStatus.DELIVERED: "bold #ffffff on #2f6db5",
}


def badge_style(status: OrderStatus) -> str:
    """Return a consistent badge style for status tags."""
    return _STATUS_STYLES.get(status, "bold")


def format_status(status: OrderStatus) -> Text:
    return Text(f" {status.value} ", style=badge_style(status))


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(f"{line.quantity}x ", style="bold")
    text.append(line.name)
    text.append(f"  {format_price(line.line_total)}", style="dim")
    return text


def format_order_card(order: Order, minutes: int | None = None) -> Text:
    """Ticket header plus one row per line, as shown on the kitchen boards."""
    text = Text()
    text.append(f"#{order.order_number}", style="bold")
    text.append(" ")
    text.append_text(format_status(order.status))
    text.append(f"  {order.created_at.astimezone().strftime('%H:%M')}", style="dim")
    if minutes is not None:
        text.append(f"  il y a {minutes} min", style="dim")
    text.append(f"\n    {order.waiter_name}", style="italic")
    for line in order.items:
        text.append(f"\n    {line.quantity}x {line.name}")
    return text


def format_bar(label: str, value: Decimal, maximum: Decimal, width: int = 20) -> Text:
    """Horizontal bar scaled against ``maximum``."""
    filled = 0
    if maximum > 0:
        filled = int((value / maximum) * width)
    text = Text()
    text.append(f"{label:<14.14} ")
    text.append("█" * filled, style="#2563eb")
    text.append("·" * (width - filled), style="dim")
    text.append(f" {format_price(value)}")
    return text
