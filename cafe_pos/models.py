"""Domain models for the café POS."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


class OrderStatus(str, Enum):
    """Kitchen progress of an order."""

    PENDING = "PENDING"
    PAID = "PAID"
    PREPARED = "PREPARED"
    DELIVERED = "DELIVERED"


class PaymentMethod(str, Enum):
    """Payment label recorded on an order; no transaction is made."""

    CASH = "CASH"
    CARD = "CARD"
    GENERIC = "GENERIC"


def to_money(value: Any) -> Decimal:
    """Parse a price from a Decimal, int, float or string."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a price: {value!r}")
    try:
        # str() first so legacy float snapshots keep their printed value.
        parsed = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation as exc:
        raise ValueError(f"Not a price: {value!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"Not a price: {value!r}")
    return parsed


def parse_instant(value: str) -> datetime:
    """ISO-8601 timestamp; values stored without an offset are read as UTC."""
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class Product:
    """A purchasable catalog entry."""

    product_id: str
    name: str
    category: str
    price: Decimal

    def to_snapshot(self) -> dict[str, str]:
        return {
            "id": self.product_id,
            "name": self.name,
            "category": self.category,
            "price": str(self.price),
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> Product:
        return cls(
            product_id=str(data["id"]),
            name=str(data["name"]),
            category=str(data.get("category", "")),
            price=to_money(data["price"]),
        )


@dataclass(frozen=True)
class CartLine:
    """A product copied into a cart or an order, with its quantity."""

    product_id: str
    name: str
    category: str
    price: Decimal
    quantity: int = 1

    @classmethod
    def from_product(cls, product: Product) -> CartLine:
        return cls(
            product_id=product.product_id,
            name=product.name,
            category=product.category,
            price=product.price,
            quantity=1,
        )

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> CartLine:
        return replace(self, quantity=quantity)

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "id": self.product_id,
            "name": self.name,
            "category": self.category,
            "price": str(self.price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> CartLine:
        return cls(
            product_id=str(data["id"]),
            name=str(data["name"]),
            category=str(data.get("category", "")),
            price=to_money(data["price"]),
            quantity=max(1, int(data.get("quantity", 1))),
        )


@dataclass(frozen=True)
class Waiter:
    """A staff member from the static roster."""

    waiter_id: str
    name: str
    pin: str

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> Waiter:
        return cls(waiter_id=str(data["id"]), name=str(data["name"]), pin=str(data["pin"]))


@dataclass
class Order:
    """A finalized order. Only `status` and `status_changed_at` change after creation."""

    order_id: str
    order_number: int
    items: tuple[CartLine, ...]
    total: Decimal
    status: OrderStatus
    created_at: datetime
    payment_method: PaymentMethod
    waiter_id: str
    waiter_name: str
    status_changed_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.status_changed_at is None:
            self.status_changed_at = self.created_at

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "id": self.order_id,
            "order_number": self.order_number,
            "items": [line.to_snapshot() for line in self.items],
            "total": str(self.total),
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "status_changed_at": self.status_changed_at.isoformat() if self.status_changed_at else None,
            "payment_method": self.payment_method.value,
            "waiter_id": self.waiter_id,
            "waiter_name": self.waiter_name,
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> Order:
        changed_raw = data.get("status_changed_at")
        return cls(
            order_id=str(data["id"]),
            order_number=int(data["order_number"]),
            items=tuple(CartLine.from_snapshot(item) for item in data.get("items", [])),
            total=to_money(data["total"]),
            status=OrderStatus(data["status"]),
            created_at=parse_instant(data["created_at"]),
            payment_method=PaymentMethod(data.get("payment_method", PaymentMethod.GENERIC.value)),
            waiter_id=str(data.get("waiter_id", "")),
            waiter_name=str(data.get("waiter_name", "")),
            status_changed_at=parse_instant(changed_raw) if changed_raw else None,
        )
