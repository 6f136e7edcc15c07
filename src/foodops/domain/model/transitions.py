"""Order lifecycle transition rules.

A pure lookup: the table below is the whole state machine.  Orders only
move forward along the kitchen/delivery pipeline or drop to CANCELLED
before they leave with a courier.  DELIVERED and CANCELLED have no
outbound edges.
"""

from __future__ import annotations

from foodops.domain.exceptions import InvalidTransitionError
from foodops.domain.model.status import OrderStatus

INITIAL_STATUS = OrderStatus.PENDING

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERING, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERING: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def allowed_next(status: OrderStatus) -> frozenset[OrderStatus]:
    return ALLOWED_TRANSITIONS[status]


def is_terminal(status: OrderStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


def validate_transition(current: OrderStatus, requested: OrderStatus) -> None:
    """Raise InvalidTransitionError unless *requested* is an edge from *current*.

    Staying in the same status is not an edge, so re-applying the current
    status is rejected too.
    """
    if not can_transition(current, requested):
        raise InvalidTransitionError(current, requested)
