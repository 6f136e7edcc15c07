"""JSON snapshot files of the order log.

Used by the CLI to export what a running process holds and to seed or
report on a saved snapshot.  This is an explicit import/export format,
not a storage backend: the live log stays in memory.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from foodops.domain.exceptions import StorageError, ValidationError
from foodops.domain.model.order import Order, OrderLine, PaymentMethod
from foodops.domain.model.status import OrderStatus
from foodops.domain.model.value_objects import Money, Quantity


class JsonOrderLog:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[Order]:
        """Read every order in the file; a missing file is an empty log."""
        if not self._file_path.exists():
            return []
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return [self._to_domain(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
            raise StorageError(
                f"Cannot read order snapshot {self._file_path}: {exc}"
            ) from exc

    def dump(self, orders: list[Order]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps([self._to_raw(o) for o in orders], indent=2, ensure_ascii=False)
                + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise StorageError(
                f"Cannot write order snapshot {self._file_path}: {exc}"
            ) from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customerName": order.customer_name,
            "customerPhone": order.customer_phone,
            "address": order.address,
            "comment": order.comment,
            "paymentMethod": order.payment_method.value,
            "items": [
                {
                    "name": item.product_name,
                    "price": str(item.unit_price.amount),
                    "quantity": item.quantity.value,
                }
                for item in order.items
            ],
            "subtotal": str(order.subtotal.amount),
            "deliveryFee": str(order.delivery_fee.amount),
            "status": order.status.value,
            "createdAt": order.created_at.isoformat(),
            "updatedAt": order.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLine(
                product_name=i["name"],
                unit_price=Money(Decimal(str(i["price"]))),
                quantity=Quantity(i["quantity"]),
            )
            for i in raw["items"]
        ]
        created_at = _parse_timestamp(raw["createdAt"])
        return Order(
            id=raw["id"],
            customer_name=raw["customerName"],
            customer_phone=raw["customerPhone"],
            address=raw["address"],
            comment=raw.get("comment"),
            payment_method=PaymentMethod(raw["paymentMethod"]),
            items=items,
            subtotal=Money(Decimal(str(raw["subtotal"]))),
            delivery_fee=Money(Decimal(str(raw.get("deliveryFee", "0")))),
            status=OrderStatus(raw["status"]),
            created_at=created_at,
            updated_at=_parse_timestamp(raw.get("updatedAt", raw["createdAt"])),
        )


def _parse_timestamp(raw: str) -> datetime:
    """Read an ISO timestamp; one written without an offset is taken as UTC."""
    moment = datetime.fromisoformat(raw)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment
