"""Freeze service - pausing subscriptions within the annual budget."""

import logging
from collections.abc import Callable
from datetime import date

from django.utils import timezone

from membership.domain import FreezePeriod, Member, MemberStatus
from membership.domain.errors import ErrorCode, FreezeRejectedError, MemberNotFoundError
from membership.domain.freeze import (
    calculate_new_expires_at,
    format_freeze_period,
    get_remaining_freeze_days,
    is_currently_frozen,
    validate_freeze_request,
)
from membership.domain.models import FreezeRejected
from membership.services.pricing_service import parse_member_id
from membership.stores.interfaces import MembershipStore

logger = logging.getLogger(__name__)


class FreezeService:
    """Service for subscription freezes."""

    def __init__(
        self, store: MembershipStore, clock: Callable[[], date] = timezone.localdate
    ) -> None:
        self._store = store
        self._clock = clock

    def remaining_days(self, member_id: str) -> int:
        member = self._get_member(member_id)
        history = self._store.list_freeze_history(member.id)
        return get_remaining_freeze_days(history, self._clock())

    def freeze(
        self, member_id: str, frozen_until: date, staff_override: bool = False
    ) -> Member:
        """Pause a member's subscription from today until frozen_until.

        The access expiry is pushed out by the frozen duration.

        Raises:
            InvalidMemberIdError: If the member_id is not a valid UUID.
            MemberNotFoundError: If the member does not exist.
            FreezeRejectedError: If the member is not active, the period is
                empty or the annual budget would be exceeded.
        """
        member = self._get_member(member_id)
        today = self._clock()
        history = self._store.list_freeze_history(member.id)

        if member.status is not MemberStatus.ATIVO:
            raise FreezeRejectedError(
                ErrorCode.FREEZE_MEMBER_NOT_ACTIVE,
                "Only active members can be frozen.",
                get_remaining_freeze_days(history, today),
            )

        requested_days = (frozen_until - today).days
        validation = validate_freeze_request(
            history, requested_days, today, staff_override
        )
        if isinstance(validation, FreezeRejected):
            raise FreezeRejectedError(
                validation.code, validation.error, validation.remaining_days
            )

        new_expires_at = None
        if member.access_expires_at is not None:
            new_expires_at = date.fromisoformat(
                calculate_new_expires_at(member.access_expires_at, frozen_until, today)
            )

        self._store.apply_freeze(
            member.id,
            FreezePeriod(frozen_at=today, frozen_until=frozen_until),
            new_expires_at,
            staff_override,
        )
        logger.info(
            "Member %s frozen %s%s",
            member.id,
            format_freeze_period(today, frozen_until),
            " (staff override)" if staff_override else "",
        )
        return self._get_member(member_id)

    def unfreeze_expired(self) -> int:
        """Reactivate members whose freeze window has ended. Returns the count."""
        today = self._clock()
        count = 0
        for member in self._store.list_members_frozen_before(today):
            if is_currently_frozen(member.frozen_at, member.frozen_until, today):
                continue
            self._store.set_member_status(member.id, MemberStatus.ATIVO)
            count += 1
        if count:
            logger.info("Reactivated %d members after freeze", count)
        return count

    def _get_member(self, member_id: str) -> Member:
        member = self._store.get_member(parse_member_id(member_id))
        if member is None:
            raise MemberNotFoundError(member_id)
        return member
