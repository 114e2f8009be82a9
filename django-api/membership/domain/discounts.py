"""Discount selection and promo code validation.

Both functions are pure: they read discount records and return a result,
they never touch `current_uses`. Redeeming a code is the store's job.
"""

from collections.abc import Iterable
from datetime import date

from membership.domain.errors import ErrorCode
from membership.domain.models import (
    CommitmentDiscountResult,
    Discount,
    PromoCodeAccepted,
    PromoCodeRejected,
    PromoCodeValidation,
)
from membership.domain.value_objects import DiscountCategory, DiscountType, MemberStatus


def find_commitment_discount(
    discounts: Iterable[Discount], commitment_months: int
) -> CommitmentDiscountResult:
    """Return the highest active commitment tier the commitment qualifies for.

    The largest percentage wins, not the longest matching tier. Ties keep
    the first record seen.
    """
    best: Discount | None = None
    for discount in discounts:
        if discount.category is not DiscountCategory.COMMITMENT:
            continue
        if not discount.active or discount.discount_type is not DiscountType.PERCENTAGE:
            continue
        if (discount.min_commitment_months or 0) > commitment_months:
            continue
        if best is None or discount.discount_value > best.discount_value:
            best = discount

    if best is None:
        return CommitmentDiscountResult(discount=None, percentage=0)
    return CommitmentDiscountResult(discount=best, percentage=best.discount_value)


def validate_promo_code(
    code: str,
    discounts: Iterable[Discount],
    member_status: MemberStatus,
    today: date,
) -> PromoCodeValidation:
    """Check a user-entered promo code. The first failing rule wins."""
    wanted = code.strip().upper()
    discount = next(
        (
            d
            for d in discounts
            if d.category is DiscountCategory.PROMO
            and d.active
            and d.code.upper() == wanted
        ),
        None,
    )

    if discount is None:
        return PromoCodeRejected(ErrorCode.PROMO_CODE_INVALID, "Invalid promo code")

    if discount.valid_from is not None and today < discount.valid_from:
        return PromoCodeRejected(
            ErrorCode.PROMO_CODE_NOT_YET_VALID, "Promo code not yet valid"
        )

    if discount.valid_until is not None and today > discount.valid_until:
        return PromoCodeRejected(ErrorCode.PROMO_CODE_EXPIRED, "Promo code expired")

    if discount.max_uses is not None and discount.current_uses >= discount.max_uses:
        return PromoCodeRejected(ErrorCode.PROMO_CODE_EXHAUSTED, "Promo code exhausted")

    if discount.new_members_only and member_status is not MemberStatus.LEAD:
        return PromoCodeRejected(
            ErrorCode.PROMO_CODE_NEW_MEMBERS_ONLY,
            "Promo code valid for new members only",
        )

    return PromoCodeAccepted(discount=discount)
