"""Pricing service - quotes and enrollment.

Services:
- Depend only on interfaces (stores)
- Delegate calculations to the pure domain functions
- Apply side effects through the store
- Return domain models or raise domain errors
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date, timedelta

from django.utils import timezone

from membership.domain import AccessType, MemberId, MemberStatus, Plan, PlanId
from membership.domain.errors import (
    InvalidMemberIdError,
    InvalidPlanIdError,
    MemberBlockedError,
    MemberNotFoundError,
    PlanNotFoundError,
    PricingConfigMissingError,
    PricingRejectedError,
    PromoCodeExhaustedError,
)
from membership.domain.models import Member, PricingQuote, PricingRejected
from membership.domain.pricing import calculate_expires_at, process_pricing
from membership.stores.interfaces import MembershipStore

logger = logging.getLogger(__name__)


def parse_member_id(member_id: str) -> MemberId:
    try:
        return MemberId.from_string(member_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidMemberIdError() from exc


def parse_plan_id(plan_id: str) -> PlanId:
    try:
        return PlanId.from_string(plan_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidPlanIdError() from exc


def access_expires_at(plan: Plan, start: date, commitment_months: int) -> date | None:
    """First expiry date granted by buying plan on start."""
    if plan.duration_days is not None:
        return start + timedelta(days=plan.duration_days)
    if plan.access_type is AccessType.SUBSCRIPTION:
        return calculate_expires_at(start, commitment_months)
    if plan.access_type is AccessType.DAILY_PASS:
        return start
    return None


def renewal_start(member: Member, today: date) -> date:
    """Unexpired access is extended, lapsed access restarts today."""
    if member.access_expires_at is not None and member.access_expires_at > today:
        return member.access_expires_at
    return today


def renewed_credits(member: Member, plan: Plan) -> int | None:
    """Credits after buying plan. Unused credits carry over."""
    if plan.access_type is not AccessType.CREDITS:
        return None
    return (member.credits_remaining or 0) + (plan.credits or 0)


class PricingService:
    """Service for price quotes and enrollment."""

    def __init__(
        self, store: MembershipStore, clock: Callable[[], date] = timezone.localdate
    ) -> None:
        self._store = store
        self._clock = clock

    def quote(
        self,
        modality_ids: Sequence[str],
        commitment_months: int,
        promo_code: str | None = None,
        member_id: str | None = None,
        member_status: MemberStatus = MemberStatus.LEAD,
        plan_id: str | None = None,
    ) -> PricingQuote:
        """Price a selection for a member (or a prospective one).

        Raises:
            PricingConfigMissingError: If no pricing config exists.
            InvalidMemberIdError, MemberNotFoundError: For a bad member_id.
            InvalidPlanIdError, PlanNotFoundError: For a bad plan_id.
            PricingRejectedError: If the selection or promo code is rejected.
        """
        if member_id is not None:
            member_status = self._get_member(member_id).status
        plan = self._get_plan(plan_id) if plan_id is not None else None
        return self._quote(
            modality_ids, commitment_months, promo_code, member_status, plan
        )

    def enroll(
        self,
        member_id: str,
        plan_id: str,
        modality_ids: Sequence[str],
        commitment_months: int | None = None,
        promo_code: str | None = None,
    ) -> PricingQuote:
        """Sell a plan to a member and give them access.

        Enrolling a member who still has access is a renewal: the new period
        starts at the current expiry and unused credits are kept.

        The promo code usage counter is incremented with a guarded update;
        losing the race for the last use raises PromoCodeExhaustedError and
        nothing is written.

        Raises:
            MemberBlockedError: If the member is blocked.
        """
        member = self._get_member(member_id)
        if member.status is MemberStatus.BLOQUEADO:
            raise MemberBlockedError(member_id)
        plan = self._get_plan(plan_id)
        months = commitment_months or plan.commitment_months
        quote = self._quote(modality_ids, months, promo_code, member.status, plan)

        today = self._clock()
        expires_at = access_expires_at(plan, renewal_start(member, today), months)
        modalities = self._store.filter_active_modalities(_unique(modality_ids))

        with self._store.atomic():
            if quote.promo_discount_id is not None:
                if not self._store.redeem_discount(quote.promo_discount_id):
                    logger.warning(
                        "Promo code %s exhausted during enrollment of member %s",
                        promo_code,
                        member.id,
                    )
                    raise PromoCodeExhaustedError(promo_code or "")
            self._store.activate_subscription(
                member.id,
                plan,
                quote.breakdown,
                modalities,
                quote.commitment_discount_id,
                quote.promo_discount_id,
                starts_at=today,
                expires_at=expires_at,
                credits_remaining=renewed_credits(member, plan),
            )

        logger.info(
            "Member %s enrolled in plan %s: %s cents monthly, %s cents first payment",
            member.id,
            plan.id,
            quote.breakdown.monthly_price_cents,
            quote.breakdown.total_first_payment_cents,
        )
        return quote

    def _quote(
        self,
        modality_ids: Sequence[str],
        commitment_months: int,
        promo_code: str | None,
        member_status: MemberStatus,
        plan: Plan | None,
    ) -> PricingQuote:
        config = self._store.get_pricing_config()
        if config is None:
            raise PricingConfigMissingError()

        result = process_pricing(
            config,
            self._store.list_discounts(),
            modality_ids=self._store.filter_active_modalities(_unique(modality_ids)),
            commitment_months=commitment_months,
            member_status=member_status,
            today=self._clock(),
            promo_code=promo_code,
            plan_override=plan.pricing_override if plan else None,
        )
        if isinstance(result, PricingRejected):
            logger.info("Quote rejected: %s", result.code.value)
            raise PricingRejectedError(result.code, result.error)
        return result

    def _get_member(self, member_id: str) -> Member:
        member = self._store.get_member(parse_member_id(member_id))
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

    def _get_plan(self, plan_id: str) -> Plan:
        plan = self._store.get_plan(parse_plan_id(plan_id))
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan


def _unique(values: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(str(v) for v in values))
