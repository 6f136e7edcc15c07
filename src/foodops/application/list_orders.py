"""Application service: List Orders use case (query).

Backs the operations console order table: status tab, search box and a
page-size limit.
"""

from __future__ import annotations

from foodops.application.dto import ALL_STATUSES, OrderDTO, OrderFilter, order_to_dto
from foodops.domain.model.order import Order
from foodops.domain.model.status import OrderStatus
from foodops.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_filter: OrderFilter | None = None) -> list[OrderDTO]:
        order_filter = order_filter or OrderFilter()
        orders = self._order_repo.list_all()

        wanted = self._status_value(order_filter.status)
        if wanted is not None:
            orders = [o for o in orders if o.status.value == wanted]

        if order_filter.search:
            orders = [o for o in orders if self._matches(o, order_filter.search)]

        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [order_to_dto(o) for o in orders[: max(order_filter.limit, 0)]]

    @staticmethod
    def _status_value(status: OrderStatus | str | None) -> str | None:
        if isinstance(status, OrderStatus):
            return status.value
        if status is None or status.strip().lower() == ALL_STATUSES:
            return None
        return status.strip().lower()

    @staticmethod
    def _matches(order: Order, search: str) -> bool:
        """Name and ID match case-insensitively; the phone matches verbatim."""
        needle = search.lower()
        return (
            needle in order.customer_name.lower()
            or search in order.customer_phone
            or needle in (order.id or "").lower()
        )
