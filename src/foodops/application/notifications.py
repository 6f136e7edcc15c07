"""Port for the order-confirmation notification sent to the kitchen.

Formatting and delivery (e-mail, messenger) live outside the core.
Implementations raise NotificationError on failure; the order itself
is already stored by then and stays stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from foodops.domain.model.order import Order


class OrderNotifier(ABC):

    @abstractmethod
    def order_placed(self, order: Order) -> None:
        """Tell the business a new order arrived."""
