"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self
from uuid import UUID


class MemberStatus(Enum):
    """Lifecycle status of a member."""

    LEAD = "LEAD"
    ATIVO = "ATIVO"
    BLOQUEADO = "BLOQUEADO"
    PAUSADO = "PAUSADO"
    CANCELADO = "CANCELADO"


class AccessType(Enum):
    """How a member pays for facility access."""

    SUBSCRIPTION = "SUBSCRIPTION"
    CREDITS = "CREDITS"
    DAILY_PASS = "DAILY_PASS"


class DiscountCategory(Enum):
    COMMITMENT = "commitment"
    PROMO = "promo"


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CheckinResult(Enum):
    """Outcome recorded for every check-in attempt."""

    ALLOWED = "ALLOWED"
    BLOCKED = "BLOCKED"
    EXPIRED = "EXPIRED"
    NO_CREDITS = "NO_CREDITS"


@dataclass(frozen=True)
class MemberId:
    """Unique identifier for a Member."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PlanId:
    """Unique identifier for a Plan."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DiscountId:
    """Unique identifier for a Discount."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "BRL": "R$",
}


def format_currency(cents: int, currency: str = "EUR") -> str:
    """Render integer cents as a display string.

    The format is fixed and locale independent: symbol prefix, comma
    thousands separator, dot decimal separator, always two decimals.

    >>> format_currency(6000)
    '€60.00'
    >>> format_currency(123456, "USD")
    '$1,234.56'
    """
    sign = "-" if cents < 0 else ""
    units, remainder = divmod(abs(int(cents)), 100)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    return f"{sign}{symbol}{units:,}.{remainder:02d}"


def format_discount(pct: int | float | Decimal) -> str:
    return f"-{Decimal(str(pct)).normalize():f}%"


def clamp_percentage(pct: int | float | Decimal | None) -> Decimal:
    """Coerce a percentage into [0, 100]; None means no discount."""
    if pct is None:
        return Decimal(0)
    value = Decimal(str(pct))
    return min(max(value, Decimal(0)), Decimal(100))


def apply_percentage(cents: int, pct: int | float | Decimal | None) -> int:
    """Return cents reduced by pct percent, rounded half-up to a whole cent."""
    factor = 1 - clamp_percentage(pct) / 100
    return int((Decimal(cents) * factor).quantize(Decimal(1), rounding=ROUND_HALF_UP))
