"""Domain service: sales analytics over the order log.

Every figure in a report is derived from one list (the orders whose
local creation date falls inside the reporting window), so the daily
series, rollups and totals always agree with each other.  The service
reads an order snapshot and the catalog and never mutates either.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from enum import Enum

from foodops.domain.exceptions import ValidationError
from foodops.domain.model.order import Order
from foodops.domain.model.status import OrderStatus
from foodops.domain.model.value_objects import Money
from foodops.domain.repository.catalog_registry import CatalogRegistry

TOP_PRODUCTS_LIMIT = 10
TOP_CUSTOMERS_LIMIT = 10


class ReportPeriod(Enum):
    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]

    @staticmethod
    def parse(raw: str | ReportPeriod | None) -> ReportPeriod:
        if raw is None:
            return ReportPeriod.WEEK
        if isinstance(raw, ReportPeriod):
            return raw
        try:
            return ReportPeriod(str(raw).strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Period must be one of 7d, 30d, 90d, got {raw!r}", field="period"
            ) from exc


_PERIOD_DAYS = {
    ReportPeriod.WEEK: 7,
    ReportPeriod.MONTH: 30,
    ReportPeriod.QUARTER: 90,
}


# ---------------------------------------------------------------------------
# Report types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DailySales:
    date: date
    order_count: int
    revenue: Money
    unique_customers: int


@dataclass(frozen=True)
class CategoryStats:
    category_id: str
    name: str
    order_lines: int
    revenue: Money
    items: int


@dataclass(frozen=True)
class ProductStats:
    name: str
    order_lines: int
    revenue: Money
    quantity: int


@dataclass(frozen=True)
class CustomerSummary:
    phone: str
    name: str
    order_count: int
    total_spent: Money
    first_order_at: datetime
    last_order_at: datetime

    @property
    def is_returning(self) -> bool:
        return self.order_count > 1


@dataclass(frozen=True)
class CustomerStats:
    total: int
    new_customers: int
    returning_customers: int
    average_orders: float
    top_customers: list[CustomerSummary]


@dataclass(frozen=True)
class StatusCount:
    status: OrderStatus
    count: int

    @property
    def label(self) -> str:
        return self.status.label


@dataclass(frozen=True)
class AnalyticsReport:
    period: ReportPeriod
    sales: list[DailySales]
    categories: list[CategoryStats]
    top_products: list[ProductStats]
    customers: CustomerStats
    order_status_histogram: list[StatusCount]
    total_orders: int
    total_revenue: Money


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class AnalyticsAggregator:
    """Builds reports for a reporting timezone against an injected catalog."""

    def __init__(self, catalog: CatalogRegistry, tz: tzinfo = timezone.utc) -> None:
        self._catalog = catalog
        self._tz = tz

    def generate(
        self,
        orders: list[Order],
        period: ReportPeriod,
        today: date,
    ) -> AnalyticsReport:
        days = self.window(period, today)
        in_window = self.orders_in_window(orders, days)

        revenue = sum((o.subtotal.amount for o in in_window), Decimal("0"))
        return AnalyticsReport(
            period=period,
            sales=self.daily_sales(in_window, days),
            categories=self.category_stats(in_window),
            top_products=self.top_products(in_window),
            customers=self.customer_stats(in_window),
            order_status_histogram=self.status_histogram(in_window),
            total_orders=len(in_window),
            total_revenue=Money(revenue),
        )

    # --- Window ---------------------------------------------------------------

    @staticmethod
    def window(period: ReportPeriod, today: date) -> list[date]:
        """The calendar days of the window, oldest first, ending with *today*."""
        start = today - timedelta(days=period.days - 1)
        return [start + timedelta(days=offset) for offset in range(period.days)]

    def orders_in_window(self, orders: list[Order], days: list[date]) -> list[Order]:
        first, last = days[0], days[-1]
        return [o for o in orders if first <= self.local_date(o.created_at) <= last]

    def local_date(self, moment: datetime) -> date:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self._tz).date()

    # --- Views ----------------------------------------------------------------

    def daily_sales(self, orders: list[Order], days: list[date]) -> list[DailySales]:
        by_day: dict[date, list[Order]] = {day: [] for day in days}
        for order in orders:
            bucket = by_day.get(self.local_date(order.created_at))
            if bucket is not None:
                bucket.append(order)

        return [
            DailySales(
                date=day,
                order_count=len(day_orders),
                revenue=Money(sum((o.subtotal.amount for o in day_orders), Decimal("0"))),
                unique_customers=len({o.customer_phone for o in day_orders}),
            )
            for day, day_orders in by_day.items()
        ]

    def category_stats(self, orders: list[Order]) -> list[CategoryStats]:
        categories = self._catalog.list_categories()
        lines = {c.id: 0 for c in categories}
        revenue = {c.id: Decimal("0") for c in categories}
        items = {c.id: 0 for c in categories}

        for order in orders:
            for line in order.items:
                category = self._catalog.lookup_category(line.product_name)
                # Dishes no longer on the menu are left out of the rollup.
                if category is None or category.id not in lines:
                    continue
                lines[category.id] += 1
                revenue[category.id] += line.line_total.amount
                items[category.id] += line.quantity.value

        return [
            CategoryStats(
                category_id=c.id,
                name=c.name,
                order_lines=lines[c.id],
                revenue=Money(revenue[c.id]),
                items=items[c.id],
            )
            for c in categories
        ]

    @staticmethod
    def top_products(orders: list[Order]) -> list[ProductStats]:
        """Most frequently ordered dishes; ties go to the alphabetically first name."""
        lines: Counter[str] = Counter()
        revenue: dict[str, Decimal] = {}
        quantity: Counter[str] = Counter()

        for order in orders:
            for line in order.items:
                name = line.product_name
                lines[name] += 1
                revenue[name] = revenue.get(name, Decimal("0")) + line.line_total.amount
                quantity[name] += line.quantity.value

        ranked = sorted(lines, key=lambda name: (-lines[name], name))
        return [
            ProductStats(
                name=name,
                order_lines=lines[name],
                revenue=Money(revenue[name]),
                quantity=quantity[name],
            )
            for name in ranked[:TOP_PRODUCTS_LIMIT]
        ]

    @staticmethod
    def customer_stats(orders: list[Order]) -> CustomerStats:
        groups: dict[str, list[Order]] = {}
        for order in orders:
            groups.setdefault(order.customer_phone, []).append(order)

        summaries = []
        for phone, placed in groups.items():
            latest = max(placed, key=lambda o: o.created_at)
            summaries.append(
                CustomerSummary(
                    phone=phone,
                    name=latest.customer_name,
                    order_count=len(placed),
                    total_spent=Money(sum((o.subtotal.amount for o in placed), Decimal("0"))),
                    first_order_at=min(o.created_at for o in placed),
                    last_order_at=latest.created_at,
                )
            )

        returning = sum(1 for s in summaries if s.is_returning)
        ranked = sorted(summaries, key=lambda s: (-s.total_spent.amount, s.phone))
        return CustomerStats(
            total=len(summaries),
            new_customers=len(summaries) - returning,
            returning_customers=returning,
            average_orders=len(orders) / len(summaries) if summaries else 0.0,
            top_customers=ranked[:TOP_CUSTOMERS_LIMIT],
        )

    @staticmethod
    def status_histogram(orders: list[Order]) -> list[StatusCount]:
        counts = Counter(o.status for o in orders)
        return [
            StatusCount(status=status, count=counts[status])
            for status in OrderStatus
            if counts[status]
        ]
