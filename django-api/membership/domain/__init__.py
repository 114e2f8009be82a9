from membership.domain.models import (
    AccessDecision,
    Discount,
    FreezePeriod,
    Member,
    MemberAccess,
    Plan,
    PlanPricingOverride,
    PricingBreakdown,
    PricingConfig,
    PromoDiscount,
)
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

__all__ = [
    "AccessDecision",
    "Discount",
    "FreezePeriod",
    "Member",
    "MemberAccess",
    "Plan",
    "PlanPricingOverride",
    "PricingBreakdown",
    "PricingConfig",
    "PromoDiscount",
    "AccessType",
    "CheckinResult",
    "DiscountCategory",
    "DiscountId",
    "DiscountType",
    "MemberId",
    "MemberStatus",
    "PlanId",
]
