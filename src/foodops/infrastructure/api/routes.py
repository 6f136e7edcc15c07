"""FastAPI routes for orders and analytics.

Handlers are plain ``def`` functions, so FastAPI runs them in its
threadpool and the order log's lock is what serialises writers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from foodops.application.dto import ALL_STATUSES, DEFAULT_LIST_LIMIT, OrderFilter
from foodops.infrastructure.api.schemas import (
    AnalyticsResponse,
    CreateOrderRequest,
    OrderResponse,
    UpdateStatusRequest,
)
from foodops.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
def create_order(
    body: CreateOrderRequest,
    container: Container = Depends(get_container),
) -> OrderResponse:
    dto = container.create_order().handle(body.to_spec())
    return OrderResponse.from_dto(dto)


@order_router.get("", response_model=list[OrderResponse])
def list_orders(
    status: str = Query(ALL_STATUSES),
    search: str | None = Query(None),
    limit: int = Query(DEFAULT_LIST_LIMIT),
    container: Container = Depends(get_container),
) -> list[OrderResponse]:
    order_filter = OrderFilter(
        status=status,
        search=search,
        limit=limit,
    )
    return [OrderResponse.from_dto(dto) for dto in container.list_orders().handle(order_filter)]


@order_router.get("/{order_id}", response_model=OrderResponse)
def show_order(
    order_id: str,
    container: Container = Depends(get_container),
) -> OrderResponse:
    return OrderResponse.from_dto(container.show_order().handle(order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    container: Container = Depends(get_container),
) -> OrderResponse:
    dto = container.update_order_status().handle(order_id, body.status)
    return OrderResponse.from_dto(dto)


# ---------------------------------------------------------------------------
# Analytics Router
# ---------------------------------------------------------------------------
analytics_router = APIRouter(prefix="/analytics", tags=["analytics"])


@analytics_router.get("", response_model=AnalyticsResponse)
def get_report(
    period: str = Query("7d"),
    container: Container = Depends(get_container),
) -> AnalyticsResponse:
    report = container.generate_report().handle(period)
    return AnalyticsResponse.from_report(report)
