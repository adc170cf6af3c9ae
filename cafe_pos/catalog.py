"""Product catalog with snapshot-on-change persistence."""

from __future__ import annotations

from typing import Any, Iterable
from uuid import uuid4

from cafe_pos.config import PRODUCTS_KEY
from cafe_pos.constant import INITIAL_PRODUCTS
from cafe_pos.debug_log import log_debug
from cafe_pos.errors import ValidationError
from cafe_pos.models import Product, to_money
from cafe_pos.persistence import SnapshotStore


def seed_products() -> list[Product]:
    return [Product.from_snapshot(raw) for raw in INITIAL_PRODUCTS]


class Catalog:
    """Ordered list of purchasable products."""

    def __init__(self, snapshots: SnapshotStore | None = None, seed: Iterable[Product] | None = None) -> None:
        self.snapshots = snapshots
        self._seed = list(seed) if seed is not None else seed_products()
        self._products: list[Product] = list(self._seed)

    def load(self) -> None:
        """Replace in-memory products with the stored snapshot, or the seed catalog."""
        raw = self.snapshots.load(PRODUCTS_KEY) if self.snapshots is not None else None
        if raw is None:
            self._products = list(self._seed)
            return
        try:
            self._products = [Product.from_snapshot(item) for item in raw]
        except (KeyError, TypeError, ValueError) as exc:
            log_debug(f"catalog_snapshot_invalid error={exc!r}")
            self._products = list(self._seed)

    def reset(self) -> None:
        self._products = list(self._seed)

    def list_products(self) -> list[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.product_id == product_id:
                return product
        return None

    def categories(self) -> list[str]:
        """Distinct categories in catalog order."""
        seen: list[str] = []
        for product in self._products:
            if product.category not in seen:
                seen.append(product.category)
        return seen

    def add_product(self, name: str, category: str, price: Any) -> Product:
        """Validate and append a new product with a fresh id."""
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Product name is required")
        try:
            parsed_price = to_money(price)
        except ValueError as exc:
            raise ValidationError(f"Invalid price: {price!r}") from exc
        if parsed_price < 0:
            raise ValidationError("Price must not be negative")

        product = Product(
            product_id=uuid4().hex,
            name=clean_name,
            category=(category or "").strip(),
            price=parsed_price,
        )
        self._products.append(product)
        self._persist()
        log_debug(f"catalog_add id={product.product_id} name={product.name!r} price={product.price}")
        return product

    def remove_product(self, product_id: str) -> None:
        """Remove a product by id; unknown ids are ignored."""
        remaining = [p for p in self._products if p.product_id != product_id]
        if len(remaining) == len(self._products):
            return
        self._products = remaining
        self._persist()
        log_debug(f"catalog_remove id={product_id}")

    def _persist(self) -> None:
        if self.snapshots is None:
            return
        self.snapshots.save(PRODUCTS_KEY, [p.to_snapshot() for p in self._products])
