"""Single in-process store wiring the POS components together."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from cafe_pos.cart import Cart
from cafe_pos.catalog import Catalog
from cafe_pos.config import READY_BOARD_LIMIT
from cafe_pos.kitchen import KitchenWorkflow
from cafe_pos.ledger import OrderLedger, utc_now
from cafe_pos.models import Order, PaymentMethod
from cafe_pos.persistence import SnapshotStore
from cafe_pos.session import Session


class PosStore:
    """Owns catalog, cart, session, ledger and kitchen for one terminal."""

    def __init__(
        self,
        snapshots: SnapshotStore | None = None,
        session: Session | None = None,
        ready_limit: int = READY_BOARD_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.snapshots = snapshots
        self.catalog = Catalog(snapshots)
        self.cart = Cart()
        self.session = session or Session()
        self.ledger = OrderLedger(snapshots, clock=clock)
        self.kitchen = KitchenWorkflow(self.ledger, ready_limit=ready_limit)

    def initialize(self) -> None:
        """Load persisted catalog and ledger, falling back to seed/empty state."""
        self.catalog.load()
        self.ledger.load()

    def reset(self) -> None:
        """Return to the pristine in-memory state without touching storage."""
        self.cart.clear()
        self.session.logout()
        self.catalog.reset()
        self.ledger.reset()

    def checkout(self, payment_method: PaymentMethod = PaymentMethod.GENERIC) -> Order | None:
        return self.ledger.finalize(self.cart, self.session.active, payment_method)
