"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from kiosk.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount in the kiosk's single currency unit.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal

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
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


_SAME_DIGITS = re.compile(r"^(\d)\1{10}$")


class TaxId:
    """Brazilian CPF helpers.

    Customers register with a validated CPF; orders may carry a free-form
    one, so validation and normalization are separate steps.
    """

    @staticmethod
    def normalize(raw: str | None) -> str | None:
        """Strip the usual ``123.456.789-09`` punctuation."""
        if not raw:
            return None
        return re.sub(r"[.\-]", "", raw.strip())

    @staticmethod
    def is_valid(raw: str | None) -> bool:
        if not raw:
            return False
        digits = re.sub(r"\D", "", raw)
        if len(digits) != 11 or _SAME_DIGITS.match(digits):
            return False
        for position in (9, 10):
            total = sum(
                int(digits[i]) * (position + 1 - i) for i in range(position)
            )
            check = 11 - (total % 11)
            if check > 9:
                check = 0
            if check != int(digits[position]):
                return False
        return True

    @classmethod
    def parse(cls, raw: str | None) -> str:
        normalized = cls.normalize(raw)
        if normalized is None or not cls.is_valid(normalized):
            raise ValidationError("Invalid CPF")
        return normalized
