"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from foodops.domain.model.status import OrderStatus


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or a business rule was violated."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(DomainException):
    """A requested order does not exist."""

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class InvalidTransitionError(DomainException):
    """The requested status change is not an edge of the lifecycle graph."""

    def __init__(self, current: OrderStatus, requested: OrderStatus) -> None:
        super().__init__(
            f"Cannot change status from {current.label} to {requested.label} "
            f"({current.value} -> {requested.value})"
        )
        self.current = current
        self.requested = requested


class StorageError(DomainException):
    """Unexpected fault while reading or writing order or catalog data."""


class NotificationError(DomainException):
    """The downstream order notification could not be delivered."""
