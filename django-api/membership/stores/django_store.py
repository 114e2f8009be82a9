"""Django ORM implementation of the MembershipStore.

The pricing config and discount list are read on every quote, so they are
cached and invalidated by the signal handlers in membership/signals.py.
Credit and promo counters are updated with guarded single-row UPDATEs so
concurrent requests cannot overshoot them.
"""

import logging
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import date

from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from django.db.models import F, Q

from membership import models
from membership.domain import (
    AccessType,
    CheckinResult,
    Discount,
    DiscountCategory,
    DiscountId,
    DiscountType,
    FreezePeriod,
    Member,
    MemberId,
    MemberStatus,
    Plan,
    PlanId,
    PlanPricingOverride,
    PricingBreakdown,
    PricingConfig,
)
from membership.stores.interfaces import MembershipStore

logger = logging.getLogger(__name__)

PRICING_CONFIG_CACHE_KEY = "membership:pricing_config"
DISCOUNTS_CACHE_KEY = "membership:discounts"


def _to_pricing_config(row: models.PricingConfig) -> PricingConfig:
    return PricingConfig(
        base_price_cents=row.base_price_cents,
        extra_modality_price_cents=row.extra_modality_price_cents,
        enrollment_fee_cents=row.enrollment_fee_cents,
        single_class_price_cents=row.single_class_price_cents,
        day_pass_price_cents=row.day_pass_price_cents,
        currency=row.currency,
    )


def _to_plan(row: models.Plan) -> Plan:
    return Plan(
        id=PlanId(row.id),
        name=row.name,
        access_type=AccessType(row.access_type),
        commitment_months=row.commitment_months,
        duration_days=row.duration_days,
        credits=row.credits,
        pricing_override=PlanPricingOverride(
            base_price_cents=row.base_price_cents,
            extra_modality_price_cents=row.extra_modality_price_cents,
            enrollment_fee_cents=row.enrollment_fee_cents,
        ),
        active=row.active,
    )


def _to_discount(row: models.Discount) -> Discount:
    return Discount(
        id=DiscountId(row.id),
        code=row.code,
        name=row.name,
        category=DiscountCategory(row.category),
        discount_type=DiscountType(row.discount_type),
        discount_value=row.discount_value,
        min_commitment_months=row.min_commitment_months,
        valid_from=row.valid_from,
        valid_until=row.valid_until,
        max_uses=row.max_uses,
        current_uses=row.current_uses,
        new_members_only=row.new_members_only,
        active=row.active,
    )


def _to_member(row: models.Member) -> Member:
    return Member(
        id=MemberId(row.id),
        name=row.name,
        status=MemberStatus(row.status),
        access_type=AccessType(row.access_type) if row.access_type else None,
        access_expires_at=row.access_expires_at,
        credits_remaining=row.credits_remaining,
        frozen_at=row.frozen_at,
        frozen_until=row.frozen_until,
    )


class DjangoMembershipStore(MembershipStore):
    """Relational store using Django ORM."""

    def __init__(self, cache_timeout: int | None = None) -> None:
        self._cache_timeout = (
            settings.MEMBERSHIP_PRICING_CACHE_TIMEOUT
            if cache_timeout is None
            else cache_timeout
        )

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def get_pricing_config(self) -> PricingConfig | None:
        config = cache.get(PRICING_CONFIG_CACHE_KEY)
        if config is not None:
            return config
        row = models.PricingConfig.objects.filter(
            pk=models.PricingConfig.SINGLETON_PK
        ).first()
        if row is None:
            return None
        config = _to_pricing_config(row)
        cache.set(PRICING_CONFIG_CACHE_KEY, config, self._cache_timeout)
        return config

    def get_plan(self, plan_id: PlanId) -> Plan | None:
        row = models.Plan.objects.filter(pk=plan_id.value, active=True).first()
        return _to_plan(row) if row else None

    def list_discounts(
        self, category: DiscountCategory | None = None
    ) -> list[Discount]:
        discounts = cache.get(DISCOUNTS_CACHE_KEY)
        if discounts is None:
            rows = models.Discount.objects.filter(active=True)
            discounts = [_to_discount(row) for row in rows]
            cache.set(DISCOUNTS_CACHE_KEY, discounts, self._cache_timeout)
        if category is None:
            return list(discounts)
        return [d for d in discounts if d.category is category]

    def filter_active_modalities(self, modality_ids: Sequence[str]) -> list[str]:
        found = set(
            models.Modality.objects.filter(
                pk__in=modality_ids, active=True
            ).values_list("pk", flat=True)
        )
        return [str(pk) for pk in found]

    def get_member(self, member_id: MemberId) -> Member | None:
        row = models.Member.objects.filter(pk=member_id.value).first()
        return _to_member(row) if row else None

    def consume_credit(self, member_id: MemberId) -> bool:
        updated = models.Member.objects.filter(
            pk=member_id.value, credits_remaining__gt=0
        ).update(credits_remaining=F("credits_remaining") - 1)
        return updated == 1

    def redeem_discount(self, discount_id: DiscountId) -> bool:
        updated = (
            models.Discount.objects.filter(pk=discount_id.value)
            .filter(Q(max_uses__isnull=True) | Q(current_uses__lt=F("max_uses")))
            .update(current_uses=F("current_uses") + 1)
        )
        # .update() bypasses post_save; drop the cached usage counts once committed
        transaction.on_commit(lambda: cache.delete(DISCOUNTS_CACHE_KEY))
        return updated == 1

    def record_checkin(
        self, member_id: MemberId, result: CheckinResult, message: str
    ) -> None:
        models.CheckinLog.objects.create(
            member_id=member_id.value, result=result.value, message=message[:255]
        )

    def list_freeze_history(self, member_id: MemberId) -> list[FreezePeriod]:
        rows = models.FreezeRecord.objects.filter(member_id=member_id.value)
        return [
            FreezePeriod(frozen_at=r.frozen_at, frozen_until=r.frozen_until)
            for r in rows
        ]

    def apply_freeze(
        self,
        member_id: MemberId,
        period: FreezePeriod,
        new_expires_at: date | None,
        staff_override: bool,
    ) -> None:
        with transaction.atomic():
            models.FreezeRecord.objects.create(
                member_id=member_id.value,
                frozen_at=period.frozen_at,
                frozen_until=period.frozen_until,
                staff_override=staff_override,
            )
            changes = {
                "status": models.MemberStatus.PAUSADO,
                "frozen_at": period.frozen_at,
                "frozen_until": period.frozen_until,
            }
            if new_expires_at is not None:
                changes["access_expires_at"] = new_expires_at
            models.Member.objects.filter(pk=member_id.value).update(**changes)

    def list_members_frozen_before(self, today: date) -> list[Member]:
        rows = models.Member.objects.filter(
            status=models.MemberStatus.PAUSADO, frozen_until__lt=today
        )
        return [_to_member(row) for row in rows]

    def set_member_status(self, member_id: MemberId, status: MemberStatus) -> None:
        models.Member.objects.filter(pk=member_id.value).update(
            status=status.value, frozen_at=None, frozen_until=None
        )

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
        with transaction.atomic():
            subscription = models.Subscription.objects.create(
                member_id=member_id.value,
                plan_id=plan.id.value,
                commitment_months=breakdown.commitment_months,
                commitment_discount_id=(
                    commitment_discount_id.value if commitment_discount_id else None
                ),
                promo_discount_id=(
                    promo_discount_id.value if promo_discount_id else None
                ),
                calculated_price_cents=breakdown.subtotal_cents,
                commitment_discount_pct=breakdown.commitment_discount_pct,
                promo_discount_pct=breakdown.promo_discount_pct,
                promo_discount_cents=breakdown.promo_discount_cents,
                final_price_cents=breakdown.monthly_price_cents,
                enrollment_fee_cents=breakdown.enrollment_fee_cents,
                starts_at=starts_at,
                expires_at=expires_at,
            )
            subscription.modalities.set(modality_ids)
            models.Member.objects.filter(pk=member_id.value).update(
                status=models.MemberStatus.ATIVO,
                access_type=plan.access_type.value,
                access_expires_at=expires_at,
                credits_remaining=credits_remaining,
            )
        logger.info("Subscription %s stored for member %s", subscription.pk, member_id)
