"""In-progress order for the active staff member."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from cafe_pos.config import TAX_RATE
from cafe_pos.models import CartLine, Product

_CENT = Decimal("0.01")


def tax_amount(total: Decimal, rate: Decimal = TAX_RATE) -> Decimal:
    """Tax shown on top of the cart total, rounded to the cent."""
    return (total * rate).quantize(_CENT, rounding=ROUND_HALF_UP)


def grand_total(total: Decimal, rate: Decimal = TAX_RATE) -> Decimal:
    return (total + total * rate).quantize(_CENT, rounding=ROUND_HALF_UP)


class Cart:
    """Ephemeral list of cart lines, one per product id."""

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def _index_of(self, product_id: str) -> int | None:
        for idx, line in enumerate(self._lines):
            if line.product_id == product_id:
                return idx
        return None

    def add_item(self, product: Product) -> CartLine:
        """Add one unit; the product's fields are copied at this moment."""
        idx = self._index_of(product.product_id)
        if idx is None:
            line = CartLine.from_product(product)
            self._lines.append(line)
            return line
        line = self._lines[idx].with_quantity(self._lines[idx].quantity + 1)
        self._lines[idx] = line
        return line

    def remove_item(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.product_id != product_id]

    def set_quantity_delta(self, product_id: str, delta: int) -> CartLine | None:
        """Shift a line's quantity by ``delta``, never below 1."""
        idx = self._index_of(product_id)
        if idx is None:
            return None
        line = self._lines[idx].with_quantity(max(1, self._lines[idx].quantity + delta))
        self._lines[idx] = line
        return line

    def clear(self) -> None:
        self._lines = []

    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0"))
