"""
Fixed-precision money arithmetic.

All amounts are ``Decimal`` quantized to the minimal currency unit; binary
floating point never enters a calculation.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger.core.exceptions import InvalidCurrency

MINOR_UNIT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, str]


def to_decimal(value: Number) -> Decimal:
    """Convert an int, str or Decimal to Decimal. Floats are rejected."""
    if isinstance(value, float):
        raise TypeError("Money values must not be floats; pass a Decimal or string")
    if isinstance(value, Decimal):
        return value
    return Decimal(value)


def round2(value: Number) -> Decimal:
    """Round to 2 decimal places using round-half-up."""
    return to_decimal(value).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


class Money(BaseModel):
    """A non-negative decimal amount in a single currency."""
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(ge=0)
    currency: str = Field(pattern=r"^[A-Z]{3}$")

    @field_validator("amount")
    @classmethod
    def check_precision(cls, v: Decimal) -> Decimal:
        """Amounts carry at most two decimal places."""
        if v != v.quantize(MINOR_UNIT):
            raise ValueError(f"Amount {v} has more precision than the minimal currency unit")
        return v

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        """Accept lower-case currency codes."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def of(cls, amount: Number, currency: str) -> "Money":
        """Build a Money value rounded to the minimal unit."""
        return cls(amount=round2(amount), currency=currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(amount=ZERO, currency=currency)

    def ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise InvalidCurrency(
                f"Cannot combine {self.currency} with {other.currency} without conversion"
            )

    def __add__(self, other: "Money") -> "Money":
        self.ensure_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __lt__(self, other: "Money") -> bool:
        self.ensure_same_currency(other)
        return self.amount < other.amount

    def __gt__(self, other: "Money") -> bool:
        self.ensure_same_currency(other)
        return self.amount > other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


def subtract_floor_zero(minuend: Money, subtrahend: Money) -> Money:
    """``max(0, minuend - subtrahend)`` in the shared currency."""
    minuend.ensure_same_currency(subtrahend)
    return Money(amount=max(ZERO, minuend.amount - subtrahend.amount), currency=minuend.currency)


def money_sum(values: Iterable[Money], currency: Optional[str] = None) -> Money:
    """
    Exact sum of Money values.

    If ``currency`` is given every value must be in that currency; otherwise the
    first value fixes the currency. An empty sum needs an explicit currency.
    """
    total = ZERO
    for value in values:
        if currency is None:
            currency = value.currency
        elif value.currency != currency:
            raise InvalidCurrency(f"Cannot sum {value.currency} into a {currency} total")
        total += value.amount
    if currency is None:
        raise InvalidCurrency("Currency is required to sum an empty sequence")
    return Money(amount=total, currency=currency)


def check_supported(currency: str, supported: Iterable[str]) -> str:
    """Return the upper-cased code if it is supported, else raise InvalidCurrency."""
    code = currency.upper()
    if code not in set(supported):
        raise InvalidCurrency(f"Unsupported currency: {currency}")
    return code
