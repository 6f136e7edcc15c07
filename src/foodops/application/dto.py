"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from foodops.domain.model.order import Order
from foodops.domain.model.status import OrderStatus
from foodops.domain.model.transitions import allowed_next

DEFAULT_LIST_LIMIT = 50
ALL_STATUSES = "all"


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one cart line as submitted at checkout."""

    product_name: str
    price: str | int | float | Decimal
    quantity: int


@dataclass(frozen=True)
class AddressSpec:
    city: str
    street: str
    building: str
    apartment: str | None = None
    entrance: str | None = None
    floor: str | None = None


@dataclass(frozen=True)
class CreateOrderSpec:
    """Input: everything the checkout form sends."""

    customer_name: str
    customer_phone: str
    address: AddressSpec
    payment_method: str
    items: list[OrderItemSpec]
    subtotal: str | int | float | Decimal
    delivery_fee: str | int | float | Decimal = 0
    comment: str | None = None


@dataclass(frozen=True)
class OrderFilter:
    """Input: admin order list filter.

    ``status`` is a status or its raw name; ``None`` and ``"all"`` mean all
    statuses, and a name that is no status matches no orders.
    """

    status: OrderStatus | str | None = None
    search: str | None = None
    limit: int = DEFAULT_LIST_LIMIT


@dataclass(frozen=True)
class OrderLineDTO:
    product_name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the operator."""

    id: str
    customer_name: str
    customer_phone: str
    address: str
    payment_method: str
    status: str
    status_label: str
    items: list[OrderLineDTO]
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime
    comment: str | None = None
    next_statuses: list[str] = field(default_factory=list)


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        address=order.address,
        payment_method=order.payment_method.value,
        status=order.status.value,
        status_label=order.status.label,
        items=[
            OrderLineDTO(
                product_name=item.product_name,
                unit_price=item.unit_price.amount,
                quantity=item.quantity.value,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        subtotal=order.subtotal.amount,
        delivery_fee=order.delivery_fee.amount,
        total=order.total.amount,
        created_at=order.created_at,
        updated_at=order.updated_at,
        comment=order.comment,
        next_statuses=[s.value for s in OrderStatus if s in allowed_next(order.status)],
    )
