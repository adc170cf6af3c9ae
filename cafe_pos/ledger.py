"""Ledger of finalized orders, newest first."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable
from uuid import uuid4

from cafe_pos.cart import Cart
from cafe_pos.config import ORDER_NUMBER_BASE, ORDERS_KEY
from cafe_pos.debug_log import log_debug
from cafe_pos.errors import InvalidCheckout
from cafe_pos.models import Order, OrderStatus, PaymentMethod, Waiter
from cafe_pos.persistence import SnapshotStore


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def check_checkout(cart: Cart, waiter: Waiter | None) -> Waiter:
    """Return the waiter to bill, or raise InvalidCheckout when the cart cannot become an order."""
    if waiter is None:
        raise InvalidCheckout("No waiter is logged in")
    if cart.is_empty:
        raise InvalidCheckout("Cart is empty")
    return waiter


class OrderLedger:
    """Finalized orders. Status overwrites are unconditional here."""

    def __init__(
        self,
        snapshots: SnapshotStore | None = None,
        order_number_base: int = ORDER_NUMBER_BASE,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.snapshots = snapshots
        self.order_number_base = order_number_base
        self.clock = clock
        self._orders: list[Order] = []

    def load(self) -> None:
        """Replace in-memory orders with the stored snapshot, or start empty."""
        raw = self.snapshots.load(ORDERS_KEY) if self.snapshots is not None else None
        if raw is None:
            self._orders = []
            return
        try:
            self._orders = [Order.from_snapshot(item) for item in raw]
        except (KeyError, TypeError, ValueError) as exc:
            log_debug(f"ledger_snapshot_invalid error={exc!r}")
            self._orders = []

    def reset(self) -> None:
        self._orders = []

    def list_orders(self) -> list[Order]:
        return list(self._orders)

    def get(self, order_id: str) -> Order | None:
        for order in self._orders:
            if order.order_id == order_id:
                return order
        return None

    def next_order_number(self) -> int:
        # Ledger length keeps numbering stable; the max() guard covers imported gaps.
        candidate = self.order_number_base + len(self._orders) + 1
        if self._orders:
            candidate = max(candidate, max(o.order_number for o in self._orders) + 1)
        return candidate

    def finalize(
        self,
        cart: Cart,
        waiter: Waiter | None,
        payment_method: PaymentMethod = PaymentMethod.GENERIC,
    ) -> Order | None:
        """Turn the cart into a PAID order, clear the cart and persist.

        Returns None, leaving cart and ledger untouched, when the cart is
        empty or no waiter is bound.
        """
        try:
            cashier = check_checkout(cart, waiter)
        except InvalidCheckout as exc:
            log_debug(f"checkout_refused reason={exc}")
            return None

        items = cart.lines
        now = self.clock()
        order = Order(
            order_id=uuid4().hex,
            order_number=self.next_order_number(),
            items=items,
            total=sum((line.line_total for line in items), Decimal("0")),
            status=OrderStatus.PAID,
            created_at=now,
            payment_method=payment_method,
            waiter_id=cashier.waiter_id,
            waiter_name=cashier.name,
        )
        self._orders.insert(0, order)
        cart.clear()
        self._persist()
        log_debug(
            f"checkout_saved order_id={order.order_id} number={order.order_number} "
            f"total={order.total} rows={len(order.items)}"
        )
        return order

    def set_status(self, order_id: str, status: OrderStatus) -> Order | None:
        """Overwrite an order's status; unknown ids are ignored."""
        order = self.get(order_id)
        if order is None:
            return None
        order.status = status
        order.status_changed_at = self.clock()
        self._persist()
        log_debug(f"order_status order_id={order_id} status={status.value}")
        return order

    def _persist(self) -> None:
        if self.snapshots is None:
            return
        self.snapshots.save(ORDERS_KEY, [o.to_snapshot() for o in self._orders])
