"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.  Everything
except ``status`` and ``updated_at`` is frozen once the order is placed;
status changes go through the transition table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from foodops.domain.exceptions import ValidationError
from foodops.domain.model.status import OrderStatus
from foodops.domain.model.transitions import INITIAL_STATUS, validate_transition
from foodops.domain.model.value_objects import DeliveryAddress, Money, Quantity


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"

    @staticmethod
    def parse(raw: str | PaymentMethod | None) -> PaymentMethod:
        if isinstance(raw, PaymentMethod):
            return raw
        try:
            return PaymentMethod(str(raw).strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Payment method must be 'cash' or 'card', got {raw!r}",
                field="payment_method",
            ) from exc


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderLine:
    """A dish as it was ordered.

    ``product_name`` is free text matched against the catalog by exact
    name; ``unit_price`` is the price the customer saw at checkout.
    """

    product_name: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for food orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so snapshot
    files can be loaded back without re-validating.
    """

    id: str | None
    customer_name: str
    customer_phone: str
    address: str
    payment_method: PaymentMethod
    items: list[OrderLine]
    subtotal: Money
    delivery_fee: Money
    status: OrderStatus = INITIAL_STATUS
    comment: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        customer_phone: str,
        address: DeliveryAddress,
        payment_method: str | PaymentMethod,
        items: list[OrderLine],
        subtotal: Money,
        delivery_fee: Money,
        comment: str | None = None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required", field="customer_name")

        if not customer_phone or not customer_phone.strip():
            raise ValidationError("Customer phone is required", field="customer_phone")

        if not items:
            raise ValidationError("Order must contain at least one item", field="items")

        method = PaymentMethod.parse(payment_method)
        placed_at = now or _utcnow()

        return Order(
            id=None,
            customer_name=customer_name.strip(),
            customer_phone=customer_phone.strip(),
            address=address.compose(),
            payment_method=method,
            items=list(items),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            status=INITIAL_STATUS,
            comment=comment.strip() if comment and comment.strip() else None,
            created_at=placed_at,
            updated_at=placed_at,
        )

    # --- State transitions ----------------------------------------------------

    def apply_status(self, requested: OrderStatus, now: datetime | None = None) -> None:
        """Move the order to *requested* if the lifecycle allows it.

        On rejection nothing on the order changes.
        """
        validate_transition(self.status, requested)
        self.status = requested
        self.updated_at = max(now or _utcnow(), self.created_at)

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        """What the customer pays: subtotal plus delivery."""
        return self.subtotal + self.delivery_fee

    @property
    def items_total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def subtotal_matches_items(self) -> bool:
        """False when the checkout-supplied subtotal disagrees with the lines."""
        return self.subtotal == self.items_total
