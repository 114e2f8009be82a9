"""Check-in rules.

Evaluated once per attempt against the member's current snapshot; the first
matching rule wins:

1. BLOQUEADO -> BLOCKED
2. CANCELADO -> BLOCKED
3. PAUSADO -> BLOCKED
4. LEAD or no access type -> EXPIRED
5. SUBSCRIPTION/DAILY_PASS past its expiry date -> EXPIRED
6. CREDITS with none left -> NO_CREDITS
7. otherwise ALLOWED

Consuming a credit and logging the attempt are left to the caller.
"""

from datetime import date

from membership.domain.models import AccessDecision, MemberAccess
from membership.domain.value_objects import AccessType, CheckinResult, MemberStatus

_BLOCKING_STATUSES = {
    MemberStatus.BLOQUEADO: "Member blocked. Please contact the front desk.",
    MemberStatus.CANCELADO: "Membership cancelled. Please contact the front desk.",
    MemberStatus.PAUSADO: (
        "Subscription paused. Please contact the front desk to reactivate."
    ),
}

_DATED_ACCESS = (AccessType.SUBSCRIPTION, AccessType.DAILY_PASS)


def validate_member_access(member: MemberAccess, today: date) -> AccessDecision:
    blocked_message = _BLOCKING_STATUSES.get(member.status)
    if blocked_message is not None:
        return AccessDecision(CheckinResult.BLOCKED, blocked_message)

    if member.status is MemberStatus.LEAD or member.access_type is None:
        return AccessDecision(
            CheckinResult.EXPIRED, "No active plan. Please renew your membership."
        )

    if member.access_type in _DATED_ACCESS:
        expires_at = member.access_expires_at
        # same-day expiry still lets the member in
        if expires_at is not None and expires_at < today:
            return AccessDecision(
                CheckinResult.EXPIRED,
                f"Access expired on {expires_at:%d/%m/%Y}. Please renew.",
            )

    if member.access_type is AccessType.CREDITS:
        if member.credits_remaining is None or member.credits_remaining <= 0:
            return AccessDecision(
                CheckinResult.NO_CREDITS,
                "No credits left. Please purchase more credits.",
            )

    return AccessDecision(CheckinResult.ALLOWED, "Access granted!")
