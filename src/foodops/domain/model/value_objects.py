"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from foodops.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "UAH"
_CURRENCY_SIGNS = {"UAH": "₴"}


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal so that revenue sums over thousands of orders never
    drift the way float sums do.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        sign = _CURRENCY_SIGNS.get(self.currency, self.currency)
        return f"{self.amount:.2f} {sign}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, field: str | None = None) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}", field=field)
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}", field=field) from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}", field=field)
        if value < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {value}", field=field
            )
        return Money(value)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DeliveryAddress:
    """Address parts as entered at checkout.

    City, street and building are required; the rest are optional and
    dropped from the composed string when blank.
    """

    city: str
    street: str
    building: str
    apartment: str | None = None
    entrance: str | None = None
    floor: str | None = None

    def __post_init__(self) -> None:
        for name in ("city", "street", "building"):
            value = getattr(self, name)
            if not value or not str(value).strip():
                raise ValidationError(
                    f"Address {name} is required", field=f"address.{name}"
                )

    def compose(self) -> str:
        """Join the non-empty parts in the order couriers read them."""
        parts = [
            self.city.strip(),
            f"вул. {self.street.strip()}",
            f"буд. {self.building.strip()}",
            _labelled("кв.", self.apartment),
            _labelled("під'їзд", self.entrance),
            _labelled("поверх", self.floor),
        ]
        return ", ".join(part for part in parts if part)


def _labelled(label: str, value: str | None) -> str | None:
    if value is None or not str(value).strip():
        return None
    return f"{label} {str(value).strip()}"
