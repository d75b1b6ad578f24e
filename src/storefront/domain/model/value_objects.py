"""Prices, discounts and quantities.

All three are frozen dataclasses that reject bad input in
``__post_init__``, so a constructed instance is always valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import ValidationError

CENTS = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Amounts keep whatever precision they were given; only discounting
    rounds, to whole cents.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(f"Expected a Decimal amount, got {type(self.amount).__name__}")
        if self.amount < 0:
            raise ValidationError(f"Amount cannot be negative: {self.amount}")

    def __add__(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, times: int) -> Money:
        if not isinstance(times, int):
            raise TypeError(f"Money can only be multiplied by an int, not {type(times).__name__}")
        return Money(self.amount * times, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._same_currency(other)
        return self.amount < other.amount

    def quantize(self) -> Money:
        """Round to whole cents, half-up."""
        return Money(self.amount.quantize(CENTS, rounding=ROUND_HALF_UP), self.currency)

    def apply_discount(self, discount: DiscountPercentage) -> Money:
        """Return ``price - price * pct / 100`` rounded to cents.

        A zero discount returns the amount unchanged (no re-rounding), so a
        catalog price is captured exactly as it was entered.
        """
        if discount.is_zero:
            return self
        reduction = self.amount * (discount.value / Decimal("100"))
        return Money(self.amount - reduction, self.currency).quantize()

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def _same_currency(self, other: Money) -> None:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} and {other.currency} amounts")

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Build from anything Decimal can parse; floats go through ``str``."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

@dataclass(frozen=True)
class DiscountPercentage:
    """A discount between 0 and 100 percent inclusive."""

    value: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Discount must be a Decimal, got {type(self.value).__name__}"
            )
        if self.value < 0 or self.value > 100:
            raise ValidationError(
                f"Discount percentage must be between 0 and 100, got {self.value}"
            )

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def __str__(self) -> str:
        return f"{self.value.normalize():f}%"

    @staticmethod
    def of(value: str | float | int | Decimal | None) -> DiscountPercentage:
        if value is None:
            return DiscountPercentage()
        try:
            return DiscountPercentage(Decimal(str(value)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid discount percentage: {value!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """Units of one product on a cart line; always at least 1."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(f"Quantity must be an integer, got {self.value!r}")
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
