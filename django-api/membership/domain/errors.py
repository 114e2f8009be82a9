"""Domain error codes for the membership module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_MEMBER_ID = "INVALID_MEMBER_ID"
    INVALID_PLAN_ID = "INVALID_PLAN_ID"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    MEMBER_BLOCKED = "MEMBER_BLOCKED"
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    PRICING_CONFIG_MISSING = "PRICING_CONFIG_MISSING"
    NO_MODALITIES_SELECTED = "NO_MODALITIES_SELECTED"
    PROMO_CODE_INVALID = "PROMO_CODE_INVALID"
    PROMO_CODE_NOT_YET_VALID = "PROMO_CODE_NOT_YET_VALID"
    PROMO_CODE_EXPIRED = "PROMO_CODE_EXPIRED"
    PROMO_CODE_EXHAUSTED = "PROMO_CODE_EXHAUSTED"
    PROMO_CODE_NEW_MEMBERS_ONLY = "PROMO_CODE_NEW_MEMBERS_ONLY"
    FREEZE_PERIOD_INVALID = "FREEZE_PERIOD_INVALID"
    FREEZE_BUDGET_EXCEEDED = "FREEZE_BUDGET_EXCEEDED"
    FREEZE_MEMBER_NOT_ACTIVE = "FREEZE_MEMBER_NOT_ACTIVE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidMemberIdError(DomainError):
    """Raised when a member ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_MEMBER_ID,
            message="Invalid member ID format",
        )


class InvalidPlanIdError(DomainError):
    """Raised when a plan ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PLAN_ID,
            message="Invalid plan ID format",
        )


class MemberNotFoundError(DomainError):
    """Raised when a member is not found."""

    def __init__(self, member_id: str) -> None:
        super().__init__(
            code=ErrorCode.MEMBER_NOT_FOUND,
            message="Member not found",
        )
        object.__setattr__(self, "member_id", member_id)


class MemberBlockedError(DomainError):
    """Raised when a blocked member is sold a plan before staff unblock them."""

    def __init__(self, member_id: str) -> None:
        super().__init__(
            code=ErrorCode.MEMBER_BLOCKED,
            message="Member is blocked. Please contact the front desk.",
        )
        object.__setattr__(self, "member_id", member_id)


class PlanNotFoundError(DomainError):
    """Raised when a plan is not found or inactive."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(
            code=ErrorCode.PLAN_NOT_FOUND,
            message="Plan not found",
        )
        object.__setattr__(self, "plan_id", plan_id)


class PricingConfigMissingError(DomainError):
    """Raised when the pricing configuration singleton has not been created."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PRICING_CONFIG_MISSING,
            message="Pricing is not configured",
        )


class PricingRejectedError(DomainError):
    """Raised when a quote cannot be produced for the given selection."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(code=code, message=message)


class PromoCodeExhaustedError(DomainError):
    """Raised when a promo code hit its usage cap between quote and redemption."""

    def __init__(self, code: str) -> None:
        super().__init__(
            code=ErrorCode.PROMO_CODE_EXHAUSTED,
            message="Promo code exhausted",
        )
        object.__setattr__(self, "promo_code", code)


class FreezeRejectedError(DomainError):
    """Raised when a freeze request is not allowed."""

    def __init__(self, code: ErrorCode, message: str, remaining_days: int) -> None:
        super().__init__(code=code, message=message)
        object.__setattr__(self, "remaining_days", remaining_days)
