"""Notifier that records new orders in the application log.

The storefront's e-mail formatting is not part of this service; this
implementation only makes every new order visible to whoever tails the
logs.
"""

from __future__ import annotations

import structlog

from foodops.application.notifications import OrderNotifier
from foodops.domain.model.order import Order

logger = structlog.get_logger(__name__)


class LoggingOrderNotifier(OrderNotifier):

    def order_placed(self, order: Order) -> None:
        logger.info(
            "new_order_notification",
            order_id=order.id,
            customer=order.customer_name,
            phone=order.customer_phone,
            address=order.address,
            total=str(order.total),
            payment_method=order.payment_method.value,
        )
