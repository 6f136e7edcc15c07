"""Application service: Create Order use case.

Turns the checkout payload into an Order, stores it and then hands it to
the notifier.  The notification is best-effort: once the order is in the
log it stays there even if the notifier fails.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from foodops.application.dto import CreateOrderSpec, OrderDTO, OrderItemSpec, order_to_dto
from foodops.application.notifications import OrderNotifier
from foodops.domain.exceptions import NotificationError, ValidationError
from foodops.domain.model.order import Order, OrderLine
from foodops.domain.model.value_objects import DeliveryAddress, Money, Quantity
from foodops.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifier: OrderNotifier | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = notifier
        self._clock = clock

    def handle(self, spec: CreateOrderSpec) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Build the address and line items (value objects validate).
        2. Let the Order aggregate validate the remaining rules.
        3. Store it at the head of the log.
        4. Notify, logging but never propagating a notifier failure.
        """
        address = DeliveryAddress(
            city=spec.address.city,
            street=spec.address.street,
            building=spec.address.building,
            apartment=spec.address.apartment,
            entrance=spec.address.entrance,
            floor=spec.address.floor,
        )
        lines = [self._build_line(index, item) for index, item in enumerate(spec.items)]

        order = Order.create(
            customer_name=spec.customer_name,
            customer_phone=spec.customer_phone,
            address=address,
            payment_method=spec.payment_method,
            items=lines,
            subtotal=Money.of(spec.subtotal, field="subtotal"),
            delivery_fee=Money.of(spec.delivery_fee, field="delivery_fee"),
            comment=spec.comment,
            now=self._clock(),
        )
        self._order_repo.add(order)

        logger.info(
            "order_created",
            order_id=order.id,
            lines=len(order.items),
            subtotal=str(order.subtotal.amount),
            payment_method=order.payment_method.value,
        )
        if not order.subtotal_matches_items:
            # Checkout totals are stored as sent; flag the drift for the operator.
            logger.warning(
                "order_subtotal_mismatch",
                order_id=order.id,
                subtotal=str(order.subtotal.amount),
                items_total=str(order.items_total.amount),
            )

        self._notify(order)
        return order_to_dto(order)

    # --- Helpers --------------------------------------------------------------

    def _notify(self, order: Order) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.order_placed(order)
        except NotificationError as exc:
            logger.warning("order_notification_failed", order_id=order.id, error=str(exc))
        except Exception:
            # The order is already stored; a crashed notifier must not fail the call.
            logger.warning("order_notification_failed", order_id=order.id, exc_info=True)

    @staticmethod
    def _build_line(index: int, item: OrderItemSpec) -> OrderLine:
        prefix = f"items[{index}]"
        if not item.product_name or not item.product_name.strip():
            raise ValidationError("Item name is required", field=f"{prefix}.name")
        try:
            quantity = Quantity(item.quantity)
        except ValidationError as exc:
            raise ValidationError(str(exc), field=f"{prefix}.quantity") from exc
        return OrderLine(
            product_name=item.product_name.strip(),
            unit_price=Money.of(item.price, field=f"{prefix}.price"),
            quantity=quantity,
        )
