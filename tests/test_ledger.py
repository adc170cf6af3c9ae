from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from cafe_pos.cart import Cart
from cafe_pos.config import ORDERS_KEY
from cafe_pos.errors import InvalidCheckout
from cafe_pos.ledger import OrderLedger, check_checkout
from cafe_pos.models import Order, OrderStatus, PaymentMethod, Waiter
from cafe_pos.store import PosStore

JEAN = Waiter(waiter_id="w1", name="Jean Dupont", pin="123")


def _cart_with(*products):
    cart = Cart()
    for product in products:
        cart.add_item(product)
    return cart


def test_finalize_snapshots_cart_into_paid_order(snapshots, clock, espresso, croissant):
    ledger = OrderLedger(snapshots, clock=clock)
    cart = _cart_with(espresso, espresso, croissant)
    expected_total = cart.total()

    order = ledger.finalize(cart, JEAN)

    assert order is not None
    assert order.total == expected_total == Decimal("7.00")
    assert order.status == OrderStatus.PAID
    assert [(line.name, line.quantity) for line in order.items] == [("Espresso", 2), ("Croissant", 1)]
    assert order.waiter_id == "w1"
    assert order.waiter_name == "Jean Dupont"
    assert order.payment_method == PaymentMethod.GENERIC
    assert order.created_at == clock.now
    assert order.order_number == 1001
    assert cart.is_empty


def test_finalize_refuses_empty_cart(snapshots):
    ledger = OrderLedger(snapshots)

    assert ledger.finalize(Cart(), JEAN) is None
    assert ledger.list_orders() == []
    assert snapshots.load(ORDERS_KEY) is None


def test_finalize_refuses_without_waiter(snapshots, espresso):
    ledger = OrderLedger(snapshots)
    cart = _cart_with(espresso)

    assert ledger.finalize(cart, None) is None
    assert ledger.list_orders() == []
    assert [line.product_id for line in cart.lines] == ["1"]


def test_orders_are_listed_newest_first_with_increasing_numbers(snapshots, clock, espresso):
    ledger = OrderLedger(snapshots, clock=clock)
    numbers = []
    for _ in range(3):
        order = ledger.finalize(_cart_with(espresso), JEAN)
        numbers.append(order.order_number)
        clock.advance(minutes=1)

    assert numbers == [1001, 1002, 1003]
    assert [o.order_number for o in ledger.list_orders()] == [1003, 1002, 1001]


def test_order_number_stays_above_loaded_numbers(snapshots, clock, espresso):
    ledger = OrderLedger(snapshots, clock=clock)
    first = ledger.finalize(_cart_with(espresso), JEAN)
    first.order_number = 1500
    ledger._persist()

    reloaded = OrderLedger(snapshots, clock=clock)
    reloaded.load()
    nxt = reloaded.finalize(_cart_with(espresso), JEAN)

    assert nxt.order_number == 1501


def test_set_status_overwrites_without_validation(snapshots, clock, espresso):
    ledger = OrderLedger(snapshots, clock=clock)
    order = ledger.finalize(_cart_with(espresso), JEAN)
    clock.advance(minutes=5)

    updated = ledger.set_status(order.order_id, OrderStatus.DELIVERED)

    assert updated is order
    assert order.status == OrderStatus.DELIVERED
    assert order.status_changed_at == clock.now
    assert order.total == Decimal("2.50")


def test_set_status_unknown_order_is_noop(snapshots):
    ledger = OrderLedger(snapshots)

    assert ledger.set_status("nope", OrderStatus.PREPARED) is None


def test_ledger_round_trips_through_storage(snapshots, clock, espresso, croissant):
    ledger = OrderLedger(snapshots, clock=clock)
    order = ledger.finalize(_cart_with(espresso, croissant), JEAN, PaymentMethod.CARD)
    ledger.set_status(order.order_id, OrderStatus.PREPARED)

    reloaded = OrderLedger(snapshots)
    reloaded.load()
    [restored] = reloaded.list_orders()

    assert restored == order
    assert restored.created_at == order.created_at
    assert restored.created_at.tzinfo is not None


def test_created_at_survives_microseconds(snapshots, clock, espresso):
    clock.now = clock.now.replace(microsecond=123456)
    ledger = OrderLedger(snapshots, clock=clock)
    order = ledger.finalize(_cart_with(espresso), JEAN)

    restored = Order.from_snapshot(order.to_snapshot())

    assert restored.created_at == order.created_at


def test_corrupt_ledger_snapshot_starts_empty(snapshots):
    snapshots.save(ORDERS_KEY, [{"id": "x"}])
    ledger = OrderLedger(snapshots)
    ledger.load()

    assert ledger.list_orders() == []


def test_legacy_float_prices_are_accepted(snapshots):
    snapshots.save(
        ORDERS_KEY,
        [
            {
                "id": "legacy",
                "order_number": 1001,
                "items": [{"id": "1", "name": "Espresso", "category": "Café", "price": 2.5, "quantity": 2}],
                "total": 5.0,
                "status": "PAID",
                "created_at": "2024-01-01T10:00:00+00:00",
                "payment_method": "GENERIC",
                "waiter_id": "w1",
                "waiter_name": "Jean Dupont",
            }
        ],
    )
    ledger = OrderLedger(snapshots)
    ledger.load()

    [order] = ledger.list_orders()
    assert order.total == Decimal("5.0")
    assert order.items[0].price == Decimal("2.5")
    assert order.status_changed_at == order.created_at


def test_timestamps_without_offset_load_as_utc(snapshots, clock, espresso):
    snapshots.save(
        ORDERS_KEY,
        [
            {
                "id": "legacy",
                "order_number": 1001,
                "items": [{"id": "1", "name": "Espresso", "category": "Café", "price": "2.50", "quantity": 1}],
                "total": "2.50",
                "status": "PAID",
                "created_at": "2024-01-01T08:00:00",
                "status_changed_at": "2024-01-01T08:05:00",
                "payment_method": "GENERIC",
                "waiter_id": "w1",
                "waiter_name": "Jean Dupont",
            }
        ],
    )
    store = PosStore(snapshots, clock=clock)
    store.initialize()
    assert store.session.login("w1", "123")
    store.cart.add_item(espresso)
    fresh = store.checkout()

    legacy = store.ledger.get("legacy")
    assert legacy.created_at == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    assert legacy.status_changed_at == datetime(2024, 1, 1, 8, 5, tzinfo=timezone.utc)
    assert store.kitchen.active_board() == [legacy, fresh]

    store.kitchen.mark_ready("legacy")
    clock.advance(minutes=1)
    store.kitchen.mark_ready(fresh.order_id)
    assert store.kitchen.ready_board() == [fresh, legacy]


def test_check_checkout_returns_the_billed_waiter(espresso):
    assert check_checkout(_cart_with(espresso), JEAN) is JEAN

    with pytest.raises(InvalidCheckout, match="No waiter"):
        check_checkout(_cart_with(espresso), None)
    with pytest.raises(InvalidCheckout, match="Cart is empty"):
        check_checkout(Cart(), JEAN)
