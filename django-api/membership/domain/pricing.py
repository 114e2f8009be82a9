"""Pricing engine.

Formula, applied in this exact order:

    subtotal   = B + (M - 1) * E
    commitment = round(subtotal * (1 - Dp / 100))
    monthly    = round(commitment * (1 - Dpromo / 100))   # or minus a fixed amount

B is the base price (first modality), E the extra modality price, M the
modality count, Dp the commitment discount and Dpromo the promo discount.
Roundings are half-up to a whole cent. Discounts compound; they are never
summed.
"""

import calendar
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from membership.domain.discounts import find_commitment_discount, validate_promo_code
from membership.domain.errors import ErrorCode
from membership.domain.models import (
    Discount,
    PlanPricingOverride,
    PricingBreakdown,
    PricingConfig,
    PricingQuote,
    PricingRejected,
    PricingResult,
    PromoCodeRejected,
    PromoDiscount,
    ResolvedPrices,
)
from membership.domain.value_objects import (
    DiscountType,
    MemberStatus,
    apply_percentage,
    clamp_percentage,
)


def resolve_prices(
    config: PricingConfig, override: PlanPricingOverride | None = None
) -> ResolvedPrices:
    """Merge a plan override over the config, field by field."""
    if override is None:
        override = PlanPricingOverride()

    def pick(name: str) -> int:
        value = getattr(override, name)
        return getattr(config, name) if value is None else value

    return ResolvedPrices(
        base_price_cents=pick("base_price_cents"),
        extra_modality_price_cents=pick("extra_modality_price_cents"),
        enrollment_fee_cents=pick("enrollment_fee_cents"),
    )


def calculate_price(
    config: PricingConfig,
    *,
    modality_count: int,
    commitment_months: int = 1,
    commitment_discount_pct: Decimal | int | float = 0,
    promo_discount: PromoDiscount | None = None,
    is_first_time: bool = False,
    plan_override: PlanPricingOverride | None = None,
) -> PricingBreakdown:
    """Compute the monthly price and first payment for a selection.

    Never raises for business input: modality counts below one bill as one,
    percentages are clamped to [0, 100] and a fixed promo larger than the
    remaining amount is capped so the price never goes negative.
    """
    prices = resolve_prices(config, plan_override)

    modalities = max(modality_count, 1)
    extra_count = modalities - 1
    extra_cents = extra_count * prices.extra_modality_price_cents
    subtotal = prices.base_price_cents + extra_cents

    commitment_pct = clamp_percentage(commitment_discount_pct)
    after_commitment = apply_percentage(subtotal, commitment_pct)
    commitment_cents = subtotal - after_commitment

    promo_pct = Decimal(0)
    if promo_discount is None:
        promo_cents = 0
    elif promo_discount.type is DiscountType.PERCENTAGE:
        promo_pct = clamp_percentage(promo_discount.value)
        promo_cents = after_commitment - apply_percentage(after_commitment, promo_pct)
    else:
        promo_cents = min(max(int(promo_discount.value), 0), after_commitment)
    monthly = after_commitment - promo_cents

    enrollment_fee = prices.enrollment_fee_cents if is_first_time else 0

    return PricingBreakdown(
        base_price_cents=prices.base_price_cents,
        extra_modalities_count=extra_count,
        extra_modalities_cents=extra_cents,
        subtotal_cents=subtotal,
        commitment_months=commitment_months,
        commitment_discount_pct=commitment_pct,
        commitment_discount_cents=commitment_cents,
        promo_discount_pct=promo_pct,
        promo_discount_cents=promo_cents,
        monthly_price_cents=monthly,
        enrollment_fee_cents=enrollment_fee,
        total_first_payment_cents=monthly + enrollment_fee,
    )


def process_pricing(
    config: PricingConfig,
    discounts: Sequence[Discount],
    *,
    modality_ids: Sequence[str],
    commitment_months: int,
    member_status: MemberStatus,
    today: date,
    promo_code: str | None = None,
    plan_override: PlanPricingOverride | None = None,
) -> PricingResult:
    """Full quote: commitment tier lookup, promo validation, then calculation."""
    if not modality_ids:
        return PricingRejected(
            ErrorCode.NO_MODALITIES_SELECTED, "Select at least one modality"
        )

    commitment = find_commitment_discount(discounts, commitment_months)

    promo: Discount | None = None
    if promo_code and promo_code.strip():
        validation = validate_promo_code(promo_code, discounts, member_status, today)
        if isinstance(validation, PromoCodeRejected):
            return PricingRejected(validation.code, validation.error)
        promo = validation.discount

    breakdown = calculate_price(
        config,
        modality_count=len(modality_ids),
        commitment_months=commitment_months,
        commitment_discount_pct=commitment.percentage,
        promo_discount=PromoDiscount.from_discount(promo) if promo else None,
        is_first_time=member_status is MemberStatus.LEAD,
        plan_override=plan_override,
    )
    return PricingQuote(
        breakdown=breakdown,
        commitment_discount_id=commitment.discount.id if commitment.discount else None,
        promo_discount_id=promo.id if promo else None,
    )


def calculate_expires_at(start: date, commitment_months: int) -> date:
    """Add calendar months, clamping to the last day of a shorter month."""
    month_index = start.month - 1 + commitment_months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
