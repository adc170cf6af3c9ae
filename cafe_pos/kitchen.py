"""Kitchen status workflow over ledger orders."""

from __future__ import annotations

from datetime import datetime, timezone

from cafe_pos.config import READY_BOARD_LIMIT
from cafe_pos.errors import IllegalTransition
from cafe_pos.ledger import OrderLedger
from cafe_pos.models import Order, OrderStatus

ALLOWED_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PAID},
    OrderStatus.PAID: {OrderStatus.PREPARED},
    OrderStatus.PREPARED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
}


class KitchenWorkflow:
    """Enforces forward-only status changes and builds the kitchen boards."""

    def __init__(self, ledger: OrderLedger, ready_limit: int = READY_BOARD_LIMIT) -> None:
        self.ledger = ledger
        self.ready_limit = ready_limit

    def transition(self, order_id: str, new_status: OrderStatus) -> Order | None:
        order = self.ledger.get(order_id)
        if order is None:
            return None
        allowed = ALLOWED_TRANSITIONS.get(order.status, set())
        if new_status not in allowed:
            raise IllegalTransition(order.status.value, new_status.value)
        return self.ledger.set_status(order_id, new_status)

    def mark_ready(self, order_id: str) -> Order | None:
        return self.transition(order_id, OrderStatus.PREPARED)

    def archive(self, order_id: str) -> Order | None:
        return self.transition(order_id, OrderStatus.DELIVERED)

    def active_board(self) -> list[Order]:
        """Paid orders waiting for the kitchen, oldest first."""
        active = [o for o in self.ledger.list_orders() if o.status == OrderStatus.PAID]
        return sorted(active, key=lambda o: o.created_at)

    def ready_board(self) -> list[Order]:
        """Prepared orders, last marked ready first, cut to the display window."""
        ready = [o for o in self.ledger.list_orders() if o.status == OrderStatus.PREPARED]
        ready.sort(key=lambda o: o.status_changed_at or o.created_at, reverse=True)
        return ready[: max(0, self.ready_limit)]


def minutes_waiting(order: Order, now: datetime | None = None) -> int:
    """Whole minutes since the order was created, never negative."""
    if now is None:
        now = datetime.now(timezone.utc) if order.created_at.tzinfo else datetime.now()
    elapsed = (now - order.created_at).total_seconds()
    return max(0, int(elapsed // 60))
