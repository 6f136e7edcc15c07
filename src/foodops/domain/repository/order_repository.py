"""Abstract repository for the Order aggregate (the order log)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from foodops.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique, time-ordered order ID."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Assign an ID if needed and put the order at the head of the log."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Replace a stored order with an updated copy."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, most recent first."""

    @abstractmethod
    def snapshot(self) -> list[Order]:
        """Return a consistent copy of the log for read-only analysis."""

    @abstractmethod
    def mutation(self) -> AbstractContextManager[None]:
        """Hold exclusive access to the log for a read-modify-write."""
