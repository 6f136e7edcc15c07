"""Application service: Update Order Status use case.

The lookup, the transition check and the write happen under the
repository's mutation lock, so two operators clicking at once cannot both
move the same order and no report sees a half-applied change.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from foodops.application.dto import OrderDTO, order_to_dto
from foodops.domain.exceptions import NotFoundError
from foodops.domain.model.status import OrderStatus
from foodops.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, order_id: str, status: str | OrderStatus) -> OrderDTO:
        requested = OrderStatus.parse(status)

        with self._order_repo.mutation():
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise NotFoundError(order_id)

            previous = order.status
            order.apply_status(requested, now=self._clock())
            self._order_repo.save(order)

        logger.info(
            "order_status_changed",
            order_id=order_id,
            previous=previous.value,
            status=order.status.value,
        )
        return order_to_dto(order)
