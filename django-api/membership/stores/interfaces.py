"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import date

from membership.domain import (
    CheckinResult,
    Discount,
    DiscountCategory,
    DiscountId,
    FreezePeriod,
    Member,
    MemberId,
    MemberStatus,
    Plan,
    PlanId,
    PricingBreakdown,
    PricingConfig,
)


class MembershipStore(ABC):
    """Interface for membership persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager that makes the enclosed writes all-or-nothing."""
        ...

    @abstractmethod
    def get_pricing_config(self) -> PricingConfig | None:
        """Return the pricing config singleton, or None if not configured."""
        ...

    @abstractmethod
    def get_plan(self, plan_id: PlanId) -> Plan | None:
        """Return an active plan by ID, or None if not found."""
        ...

    @abstractmethod
    def list_discounts(
        self, category: DiscountCategory | None = None
    ) -> list[Discount]:
        """Return active discounts, optionally restricted to one category."""
        ...

    @abstractmethod
    def filter_active_modalities(self, modality_ids: Sequence[str]) -> list[str]:
        """Return the subset of modality_ids that exist and are active."""
        ...

    @abstractmethod
    def get_member(self, member_id: MemberId) -> Member | None:
        """Return a member by ID, or None if not found."""
        ...

    @abstractmethod
    def consume_credit(self, member_id: MemberId) -> bool:
        """Decrement credits by one only while still positive.

        Returns False when no row matched the guard.
        """
        ...

    @abstractmethod
    def redeem_discount(self, discount_id: DiscountId) -> bool:
        """Increment current_uses only while under max_uses.

        Returns False when the cap was reached.
        """
        ...

    @abstractmethod
    def record_checkin(
        self, member_id: MemberId, result: CheckinResult, message: str
    ) -> None:
        """Append a check-in log row."""
        ...

    @abstractmethod
    def list_freeze_history(self, member_id: MemberId) -> list[FreezePeriod]:
        """Return all freeze periods for a member, newest first."""
        ...

    @abstractmethod
    def apply_freeze(
        self,
        member_id: MemberId,
        period: FreezePeriod,
        new_expires_at: date | None,
        staff_override: bool,
    ) -> None:
        """Record a freeze period, pause the member and move its expiry."""
        ...

    @abstractmethod
    def list_members_frozen_before(self, today: date) -> list[Member]:
        """Return paused members whose freeze ended before today."""
        ...

    @abstractmethod
    def set_member_status(self, member_id: MemberId, status: MemberStatus) -> None:
        """Set a member's status and clear its freeze window."""
        ...

    @abstractmethod
    def activate_subscription(
        self,
        member_id: MemberId,
        plan: Plan,
        breakdown: PricingBreakdown,
        modality_ids: Sequence[str],
        commitment_discount_id: DiscountId | None,
        promo_discount_id: DiscountId | None,
        starts_at: date,
        expires_at: date | None,
        credits_remaining: int | None,
    ) -> None:
        """Store the price snapshot and give the member access."""
        ...
