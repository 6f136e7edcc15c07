"""Application service: Generate Analytics Report use case (query)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from foodops.domain.repository.order_repository import OrderRepository
from foodops.domain.service.analytics import AnalyticsAggregator, AnalyticsReport, ReportPeriod

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GenerateReportHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        aggregator: AnalyticsAggregator,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._aggregator = aggregator
        self._clock = clock

    def handle(self, period: str | ReportPeriod | None = None) -> AnalyticsReport:
        """Build the report for the window ending today in the reporting timezone."""
        resolved = ReportPeriod.parse(period)
        today = self._aggregator.local_date(self._clock())

        report = self._aggregator.generate(self._order_repo.snapshot(), resolved, today)

        logger.info(
            "report_generated",
            period=resolved.value,
            today=today.isoformat(),
            total_orders=report.total_orders,
        )
        return report
