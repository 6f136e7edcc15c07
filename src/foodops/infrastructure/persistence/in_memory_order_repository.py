"""In-process implementation of OrderRepository: the order log.

The log lives in this object only.  Nothing is written to disk, so every
order is gone when the process exits; use ``JsonOrderLog`` to export a
snapshot explicitly.  One instance is created by the composition root and
shared by all request handlers.
"""

from __future__ import annotations

import copy
import secrets
import string
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

from foodops.domain.exceptions import NotFoundError, StorageError
from foodops.domain.model.order import Order
from foodops.domain.repository.order_repository import OrderRepository

_ID_ALPHABET = string.digits + string.ascii_uppercase
_ID_SUFFIX_LENGTH = 5
_MAX_ID_ATTEMPTS = 10


class InMemoryOrderRepository(OrderRepository):
    """Lock-guarded list of orders, most recent first.

    Every read hands out deep copies so callers can never change the log
    behind the lock.
    """

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._lock = threading.RLock()
        self._orders: list[Order] = []
        # Replay oldest first so the newest ends up at the head.
        for order in sorted(orders or [], key=lambda o: o.created_at):
            self.add(order)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        """Millisecond timestamp plus a random base-36 suffix."""
        with self._lock:
            for _ in range(_MAX_ID_ATTEMPTS):
                suffix = "".join(
                    secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH)
                )
                candidate = f"{time.time_ns() // 1_000_000}{suffix}"
                if self._index_of(candidate) is None:
                    return candidate
        raise StorageError("Could not generate a unique order ID")

    def add(self, order: Order) -> None:
        with self._lock:
            if order.id is None:
                order.id = self.next_id()
            elif self._index_of(order.id) is not None:
                raise StorageError(f"Order #{order.id} already exists")
            self._orders.insert(0, copy.deepcopy(order))

    def get_by_id(self, order_id: str) -> Order | None:
        with self._lock:
            index = self._index_of(order_id)
            if index is None:
                return None
            return copy.deepcopy(self._orders[index])

    def save(self, order: Order) -> None:
        with self._lock:
            index = self._index_of(order.id) if order.id is not None else None
            if index is None:
                raise NotFoundError(str(order.id))
            self._orders[index] = copy.deepcopy(order)

    def list_all(self) -> list[Order]:
        with self._lock:
            return copy.deepcopy(self._orders)

    def snapshot(self) -> list[Order]:
        return self.list_all()

    @contextmanager
    def mutation(self) -> Iterator[None]:
        with self._lock:
            yield

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, order_id: str) -> int | None:
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                return index
        return None
