"""Check-in service - access decision plus its side effects."""

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from django.utils import timezone

from membership.domain import AccessDecision, AccessType, CheckinResult, Member
from membership.domain.access import validate_member_access
from membership.domain.errors import MemberNotFoundError
from membership.services.pricing_service import parse_member_id
from membership.stores.interfaces import MembershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckinOutcome:
    member: Member
    decision: AccessDecision


class CheckinService:
    """Service for front-desk and kiosk check-ins."""

    def __init__(
        self, store: MembershipStore, clock: Callable[[], date] = timezone.localdate
    ) -> None:
        self._store = store
        self._clock = clock

    def check_in(self, member_id: str) -> CheckinOutcome:
        """Decide access for a member and record the attempt.

        An allowed credits check-in consumes exactly one credit. If another
        check-in took the last credit first, the outcome becomes NO_CREDITS.

        Raises:
            InvalidMemberIdError: If the member_id is not a valid UUID.
            MemberNotFoundError: If the member does not exist.
        """
        parsed_id = parse_member_id(member_id)
        member = self._store.get_member(parsed_id)
        if member is None:
            raise MemberNotFoundError(member_id)

        decision = validate_member_access(member.access, self._clock())

        if decision.allowed and member.access_type is AccessType.CREDITS:
            if self._store.consume_credit(member.id):
                member = dataclasses.replace(
                    member, credits_remaining=(member.credits_remaining or 1) - 1
                )
            else:
                logger.warning("Credit for member %s consumed concurrently", member.id)
                decision = AccessDecision(
                    CheckinResult.NO_CREDITS,
                    "No credits left. Please purchase more credits.",
                )

        self._store.record_checkin(member.id, decision.result, decision.message)
        logger.info("Check-in for member %s: %s", member.id, decision.result.value)
        return CheckinOutcome(member=member, decision=decision)
