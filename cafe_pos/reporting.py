"""Dashboard aggregates over the order ledger.

Every figure is recomputed from the filtered orders; nothing is cached
between calls, so changing the date range or the waiter filter is just
another call to :func:`build_report`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from decimal import Decimal
from typing import Iterable

from cafe_pos.config import DASHBOARD_DEFAULT_DAYS
from cafe_pos.constant import UNKNOWN_WAITER_LABEL
from cafe_pos.errors import ValidationError
from cafe_pos.models import Order

ALL_WAITERS = "all"

_ZERO = Decimal("0")


@dataclass(frozen=True)
class BreakdownEntry:
    """One labelled bucket of a breakdown or time series."""

    name: str
    value: Decimal


@dataclass(frozen=True)
class DailySales:
    day: date
    value: Decimal

    @property
    def label(self) -> str:
        return self.day.strftime("%d/%m")


@dataclass(frozen=True)
class SalesReport:
    """All dashboard figures for one filter selection."""

    start: date
    end: date
    waiter_filter: str
    orders: tuple[Order, ...]
    total_revenue: Decimal
    total_orders: int
    avg_order_value: Decimal
    revenue_per_day: Decimal
    daily_sales: tuple[DailySales, ...]
    category_sales: tuple[BreakdownEntry, ...]
    waiter_sales: tuple[BreakdownEntry, ...]


def local_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of ``moment`` in ``tz`` (machine local zone when None)."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()


def default_range(today: date | None = None, days: int = DASHBOARD_DEFAULT_DAYS) -> tuple[date, date]:
    today = today or date.today()
    return (today - timedelta(days=days), today)


def parse_date_range(start_text: str, end_text: str) -> tuple[date, date]:
    """Parse ISO dates (YYYY-MM-DD) typed by the user into an inclusive range."""
    bounds = []
    for label, text in (("start", start_text), ("end", end_text)):
        try:
            bounds.append(date.fromisoformat(text.strip()))
        except ValueError as exc:
            raise ValidationError(f"Invalid {label} date: {text.strip() or '(empty)'}") from exc
    start, end = bounds
    if start > end:
        raise ValidationError("Start date must be on or before end date")
    return (start, end)


def days_spanned(start: date, end: date) -> int:
    """Whole days between the range bounds, at least 1."""
    return max(1, (end - start).days)


def filter_orders(
    orders: Iterable[Order],
    start: date,
    end: date,
    waiter_filter: str = ALL_WAITERS,
    tz: tzinfo | None = None,
) -> list[Order]:
    """Orders created on a day in [start, end] by the selected waiter."""
    selected = []
    for order in orders:
        if not (start <= local_day(order.created_at, tz) <= end):
            continue
        if waiter_filter != ALL_WAITERS and order.waiter_id != waiter_filter:
            continue
        selected.append(order)
    return selected


def total_revenue(orders: Iterable[Order]) -> Decimal:
    return sum((order.total for order in orders), _ZERO)


def average_order_value(orders: list[Order]) -> Decimal:
    if not orders:
        return _ZERO
    return total_revenue(orders) / len(orders)


def daily_sales(orders: Iterable[Order], tz: tzinfo | None = None) -> list[DailySales]:
    """Revenue summed per calendar day, oldest day first."""
    buckets: dict[date, Decimal] = {}
    for order in orders:
        day = local_day(order.created_at, tz)
        buckets[day] = buckets.get(day, _ZERO) + order.total
    return [DailySales(day=day, value=buckets[day]) for day in sorted(buckets)]


def category_sales(orders: Iterable[Order]) -> list[BreakdownEntry]:
    """Line revenue (price x quantity) per product category, first-seen order."""
    buckets: dict[str, Decimal] = {}
    for order in orders:
        for line in order.items:
            buckets[line.category] = buckets.get(line.category, _ZERO) + line.line_total
    return [BreakdownEntry(name, value) for name, value in buckets.items()]


def waiter_sales(orders: Iterable[Order]) -> list[BreakdownEntry]:
    """Order totals per waiter name, first-seen order."""
    buckets: dict[str, Decimal] = {}
    for order in orders:
        name = order.waiter_name or UNKNOWN_WAITER_LABEL
        buckets[name] = buckets.get(name, _ZERO) + order.total
    return [BreakdownEntry(name, value) for name, value in buckets.items()]


def build_report(
    orders: Iterable[Order],
    start: date,
    end: date,
    waiter_filter: str = ALL_WAITERS,
    tz: tzinfo | None = None,
) -> SalesReport:
    selected = filter_orders(orders, start, end, waiter_filter, tz)
    revenue = total_revenue(selected)
    return SalesReport(
        start=start,
        end=end,
        waiter_filter=waiter_filter,
        orders=tuple(selected),
        total_revenue=revenue,
        total_orders=len(selected),
        avg_order_value=average_order_value(selected),
        revenue_per_day=revenue / days_spanned(start, end),
        daily_sales=tuple(daily_sales(selected, tz)),
        category_sales=tuple(category_sales(selected)),
        waiter_sales=tuple(waiter_sales(selected)),
    )
