"""Order fulfillment statuses."""

from __future__ import annotations

from enum import Enum

from foodops.domain.exceptions import ValidationError


class OrderStatus(Enum):
    """Lifecycle states, declared in the order an order moves through them."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        """Display label shown in the operations console."""
        return _LABELS[self]

    @staticmethod
    def parse(raw: str | OrderStatus) -> OrderStatus:
        if isinstance(raw, OrderStatus):
            return raw
        try:
            return OrderStatus(str(raw).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown order status: {raw!r}", field="status") from exc


_LABELS = {
    OrderStatus.PENDING: "Ожидает",
    OrderStatus.CONFIRMED: "Подтвержден",
    OrderStatus.PREPARING: "Готовится",
    OrderStatus.READY: "Готов",
    OrderStatus.DELIVERING: "Доставляется",
    OrderStatus.DELIVERED: "Доставлен",
    OrderStatus.CANCELLED: "Отменен",
}
