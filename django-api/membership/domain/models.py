"""Domain models representing persisted state and calculation results.

These are pure domain objects with no API input rules.
Django ORM models are in membership/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Literal, Self

from membership.domain.errors import ErrorCode
from membership.domain.value_objects import (
    AccessType,
    CheckinResult,
    DiscountCategory,
    DiscountId,
    DiscountType,
    MemberId,
    MemberStatus,
    PlanId,
)


@dataclass(frozen=True)
class PricingConfig:
    """Studio-wide price list, stored as a singleton."""

    base_price_cents: int = 6000
    extra_modality_price_cents: int = 3000
    enrollment_fee_cents: int = 1500
    single_class_price_cents: int = 1500
    day_pass_price_cents: int = 2500
    currency: str = "EUR"

    def __post_init__(self) -> None:
        for name in (
            "base_price_cents",
            "extra_modality_price_cents",
            "enrollment_fee_cents",
            "single_class_price_cents",
            "day_pass_price_cents",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")


@dataclass(frozen=True)
class PlanPricingOverride:
    """Partial per-plan replacement of the config prices. None falls back."""

    base_price_cents: int | None = None
    extra_modality_price_cents: int | None = None
    enrollment_fee_cents: int | None = None


@dataclass(frozen=True)
class ResolvedPrices:
    base_price_cents: int
    extra_modality_price_cents: int
    enrollment_fee_cents: int


@dataclass(frozen=True)
class Discount:
    """Commitment tier or promo code."""

    id: DiscountId | None
    code: str
    name: str
    category: DiscountCategory
    discount_type: DiscountType
    discount_value: Decimal | int
    min_commitment_months: int | None = None
    valid_from: date | None = None
    valid_until: date | None = None
    max_uses: int | None = None
    current_uses: int = 0
    new_members_only: bool = False
    active: bool = True


@dataclass(frozen=True)
class PromoDiscount:
    """Promo reduction fed into the price calculator."""

    type: DiscountType
    value: Decimal | int

    @classmethod
    def from_discount(cls, discount: Discount) -> Self:
        return cls(type=discount.discount_type, value=discount.discount_value)


@dataclass(frozen=True)
class PricingBreakdown:
    """Result of a single price calculation. Never persisted as-is."""

    base_price_cents: int
    extra_modalities_count: int
    extra_modalities_cents: int
    subtotal_cents: int
    commitment_months: int
    commitment_discount_pct: Decimal
    commitment_discount_cents: int
    promo_discount_pct: Decimal
    promo_discount_cents: int
    monthly_price_cents: int
    enrollment_fee_cents: int
    total_first_payment_cents: int


@dataclass(frozen=True)
class MemberAccess:
    """The part of a member record that decides facility access."""

    status: MemberStatus
    access_type: AccessType | None = None
    access_expires_at: date | None = None
    credits_remaining: int | None = None


@dataclass(frozen=True)
class FreezePeriod:
    """One completed or in-progress subscription freeze."""

    frozen_at: date
    frozen_until: date

    def __post_init__(self) -> None:
        if self.frozen_until < self.frozen_at:
            raise ValueError("frozen_until cannot be before frozen_at")

    @property
    def days(self) -> int:
        return (self.frozen_until - self.frozen_at).days


@dataclass(frozen=True)
class Member:
    """Domain representation of a Member."""

    id: MemberId
    name: str
    status: MemberStatus
    access_type: AccessType | None = None
    access_expires_at: date | None = None
    credits_remaining: int | None = None
    frozen_at: date | None = None
    frozen_until: date | None = None

    @property
    def access(self) -> MemberAccess:
        return MemberAccess(
            status=self.status,
            access_type=self.access_type,
            access_expires_at=self.access_expires_at,
            credits_remaining=self.credits_remaining,
        )


@dataclass(frozen=True)
class Plan:
    """Domain representation of a sellable Plan."""

    id: PlanId
    name: str
    access_type: AccessType
    commitment_months: int = 1
    duration_days: int | None = None
    credits: int | None = None
    pricing_override: PlanPricingOverride | None = None
    active: bool = True


# Tagged results. Callers branch on `valid`/`allowed` or on the class.


@dataclass(frozen=True)
class CommitmentDiscountResult:
    discount: Discount | None
    percentage: Decimal | int


@dataclass(frozen=True)
class PromoCodeAccepted:
    discount: Discount
    valid: Literal[True] = True


@dataclass(frozen=True)
class PromoCodeRejected:
    code: ErrorCode
    error: str
    valid: Literal[False] = False


PromoCodeValidation = PromoCodeAccepted | PromoCodeRejected


@dataclass(frozen=True)
class PricingQuote:
    breakdown: PricingBreakdown
    commitment_discount_id: DiscountId | None = None
    promo_discount_id: DiscountId | None = None
    success: Literal[True] = True


@dataclass(frozen=True)
class PricingRejected:
    code: ErrorCode
    error: str
    success: Literal[False] = False


PricingResult = PricingQuote | PricingRejected


@dataclass(frozen=True)
class AccessDecision:
    result: CheckinResult
    message: str

    @property
    def allowed(self) -> bool:
        return self.result is CheckinResult.ALLOWED


@dataclass(frozen=True)
class FreezeAccepted:
    remaining_days: int
    valid: Literal[True] = True


@dataclass(frozen=True)
class FreezeRejected:
    code: ErrorCode
    error: str
    remaining_days: int
    valid: Literal[False] = False


FreezeValidationResult = FreezeAccepted | FreezeRejected
