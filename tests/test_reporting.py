from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from cafe_pos.errors import ValidationError
from cafe_pos.models import CartLine, Order, OrderStatus, PaymentMethod
from cafe_pos.reporting import (
    ALL_WAITERS,
    build_report,
    days_spanned,
    default_range,
    filter_orders,
    parse_date_range,
)

UTC = timezone.utc


def _order(order_id, created_at, lines, waiter_id="w1", waiter_name="Jean Dupont"):
    items = tuple(
        CartLine(product_id=name, name=name, category=category, price=Decimal(price), quantity=qty)
        for name, category, price, qty in lines
    )
    return Order(
        order_id=order_id,
        order_number=1000 + len(order_id),
        items=items,
        total=sum((line.line_total for line in items), Decimal("0")),
        status=OrderStatus.PAID,
        created_at=created_at,
        payment_method=PaymentMethod.GENERIC,
        waiter_id=waiter_id,
        waiter_name=waiter_name,
    )


def test_two_day_scenario():
    orders = [
        _order("b", datetime(2024, 1, 2, 15, 0, tzinfo=UTC), [("Tarte", "Dessert", "20", 1)]),
        _order("a", datetime(2024, 1, 1, 9, 30, tzinfo=UTC), [("Toast", "Nourriture", "10", 1)]),
    ]

    report = build_report(orders, date(2024, 1, 1), date(2024, 1, 2), ALL_WAITERS, tz=UTC)

    assert report.total_revenue == Decimal("30")
    assert report.total_orders == 2
    assert report.avg_order_value == Decimal("15")
    assert report.revenue_per_day == Decimal("30")
    assert [(p.label, p.value) for p in report.daily_sales] == [("01/01", Decimal("10")), ("02/01", Decimal("20"))]


def test_range_bounds_are_inclusive_whole_days():
    orders = [
        _order("start", datetime(2024, 3, 1, 0, 0, 0, tzinfo=UTC), [("A", "Café", "1", 1)]),
        _order("end", datetime(2024, 3, 3, 23, 59, 59, tzinfo=UTC), [("B", "Café", "2", 1)]),
        _order("before", datetime(2024, 2, 29, 23, 59, 59, tzinfo=UTC), [("C", "Café", "4", 1)]),
        _order("after", datetime(2024, 3, 4, 0, 0, 0, tzinfo=UTC), [("D", "Café", "8", 1)]),
    ]

    selected = filter_orders(orders, date(2024, 3, 1), date(2024, 3, 3), tz=UTC)

    assert sorted(o.order_id for o in selected) == ["end", "start"]


def test_waiter_filter():
    day = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)
    orders = [
        _order("a", day, [("A", "Café", "3", 1)], waiter_id="w1", waiter_name="Jean Dupont"),
        _order("b", day, [("B", "Café", "5", 1)], waiter_id="w2", waiter_name="Sarah Martin"),
    ]

    report = build_report(orders, date(2024, 5, 10), date(2024, 5, 10), "w2", tz=UTC)

    assert [o.order_id for o in report.orders] == ["b"]
    assert report.total_revenue == Decimal("5")
    assert [(e.name, e.value) for e in report.waiter_sales] == [("Sarah Martin", Decimal("5"))]


def test_empty_selection_has_zero_average():
    report = build_report([], date(2024, 1, 1), date(2024, 1, 7), tz=UTC)

    assert report.total_orders == 0
    assert report.total_revenue == Decimal("0")
    assert report.avg_order_value == Decimal("0")
    assert report.revenue_per_day == Decimal("0")
    assert report.daily_sales == ()
    assert report.category_sales == ()


def test_revenue_per_day_uses_whole_days_spanned():
    orders = [_order("a", datetime(2024, 1, 1, 8, 0, tzinfo=UTC), [("A", "Café", "70", 1)])]

    same_day = build_report(orders, date(2024, 1, 1), date(2024, 1, 1), tz=UTC)
    week = build_report(orders, date(2024, 1, 1), date(2024, 1, 8), tz=UTC)

    assert same_day.revenue_per_day == Decimal("70")
    assert week.revenue_per_day == Decimal("10")
    assert days_spanned(date(2024, 1, 1), date(2024, 1, 1)) == 1


def test_category_breakdown_sums_to_revenue():
    day = datetime(2024, 6, 1, 10, 0, tzinfo=UTC)
    orders = [
        _order("a", day, [("Espresso", "Café", "2.50", 2), ("Croissant", "Boulangerie", "2.00", 1)]),
        _order("b", day, [("Latte", "Café", "4.00", 1), ("Cheesecake", "Dessert", "5.00", 1)]),
    ]

    report = build_report(orders, date(2024, 6, 1), date(2024, 6, 1), tz=UTC)
    breakdown = {e.name: e.value for e in report.category_sales}

    assert breakdown == {"Café": Decimal("9.00"), "Boulangerie": Decimal("2.00"), "Dessert": Decimal("5.00")}
    assert sum(breakdown.values()) == report.total_revenue == sum(o.total for o in orders)


def test_waiter_breakdown_labels_blank_names():
    day = datetime(2024, 6, 1, 10, 0, tzinfo=UTC)
    orders = [
        _order("a", day, [("A", "Café", "1", 1)], waiter_name=""),
        _order("b", day, [("B", "Café", "2", 1)], waiter_name="Michel Roux"),
        _order("c", day, [("C", "Café", "3", 1)], waiter_name="Michel Roux"),
    ]

    report = build_report(orders, date(2024, 6, 1), date(2024, 6, 1), tz=UTC)

    assert [(e.name, e.value) for e in report.waiter_sales] == [
        ("Inconnu", Decimal("1")),
        ("Michel Roux", Decimal("5")),
    ]


def test_daily_series_is_chronological_across_years():
    orders = [
        _order("new", datetime(2024, 1, 1, 12, tzinfo=UTC), [("A", "Café", "1", 1)]),
        _order("old", datetime(2023, 12, 31, 12, tzinfo=UTC), [("B", "Café", "2", 1)]),
    ]

    report = build_report(orders, date(2023, 12, 30), date(2024, 1, 2), tz=UTC)

    assert [p.label for p in report.daily_sales] == ["31/12", "01/01"]


def test_calendar_day_follows_requested_zone():
    paris_winter = timezone(timedelta(hours=1))
    late_utc = datetime(2024, 1, 1, 23, 30, tzinfo=UTC)
    orders = [_order("a", late_utc, [("A", "Café", "1", 1)])]

    assert filter_orders(orders, date(2024, 1, 2), date(2024, 1, 2), tz=paris_winter) == orders
    assert filter_orders(orders, date(2024, 1, 2), date(2024, 1, 2), tz=UTC) == []


def test_default_range_covers_last_week():
    assert default_range(date(2024, 1, 10)) == (date(2024, 1, 3), date(2024, 1, 10))


def test_parse_date_range_accepts_iso_dates():
    assert parse_date_range(" 2024-01-01", "2024-01-02 ") == (date(2024, 1, 1), date(2024, 1, 2))
    assert parse_date_range("2024-01-01", "2024-01-01") == (date(2024, 1, 1), date(2024, 1, 1))


@pytest.mark.parametrize(
    ("start", "end", "message"),
    [
        ("", "2024-01-02", "Invalid start date"),
        ("2024-01-01", "02/01/2024", "Invalid end date"),
        ("2024-02-30", "2024-03-01", "Invalid start date"),
        ("2024-01-03", "2024-01-02", "on or before"),
    ],
)
def test_parse_date_range_rejects_bad_input(start, end, message):
    with pytest.raises(ValidationError, match=message):
        parse_date_range(start, end)
