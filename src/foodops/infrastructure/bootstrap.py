"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  One ``Container`` owns
the process's order log; build it once and share it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

from foodops.application.create_order import CreateOrderHandler
from foodops.application.generate_report import GenerateReportHandler
from foodops.application.list_orders import ListOrdersHandler
from foodops.application.notifications import OrderNotifier
from foodops.application.show_order import ShowOrderHandler
from foodops.application.update_order_status import UpdateOrderStatusHandler
from foodops.domain.repository.catalog_registry import CatalogRegistry
from foodops.domain.repository.order_repository import OrderRepository
from foodops.domain.service.analytics import AnalyticsAggregator
from foodops.infrastructure.config import Settings, get_settings
from foodops.infrastructure.notifications import LoggingOrderNotifier
from foodops.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from foodops.infrastructure.persistence.json_catalog_registry import JsonCatalogRegistry
from foodops.infrastructure.persistence.json_order_log import JsonOrderLog


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Container:
    order_repo: OrderRepository
    catalog: CatalogRegistry
    aggregator: AnalyticsAggregator
    notifier: OrderNotifier | None = None
    clock: Callable[[], datetime] = field(default=_utcnow)

    # --- Use cases ------------------------------------------------------------

    def create_order(self) -> CreateOrderHandler:
        return CreateOrderHandler(self.order_repo, self.notifier, self.clock)

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.order_repo)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.order_repo)

    def update_order_status(self) -> UpdateOrderStatusHandler:
        return UpdateOrderStatusHandler(self.order_repo, self.clock)

    def generate_report(self) -> GenerateReportHandler:
        return GenerateReportHandler(self.order_repo, self.aggregator, self.clock)


def catalog_registry(settings: Settings) -> JsonCatalogRegistry:
    return JsonCatalogRegistry(settings.catalog_path)


def order_repository(seed_path: Path | None = None) -> InMemoryOrderRepository:
    """A fresh, process-local order log, optionally seeded from a snapshot file."""
    orders = JsonOrderLog(seed_path).load() if seed_path is not None else []
    return InMemoryOrderRepository(orders)


def build_container(
    settings: Settings | None = None,
    order_repo: OrderRepository | None = None,
) -> Container:
    settings = settings or get_settings()
    catalog = catalog_registry(settings)
    return Container(
        order_repo=(
            order_repo if order_repo is not None
            else order_repository(settings.seed_orders_path)
        ),
        catalog=catalog,
        aggregator=AnalyticsAggregator(catalog, ZoneInfo(settings.report_timezone)),
        notifier=LoggingOrderNotifier(),
    )
