"""Subscription freeze accounting.

Each member may freeze up to MAX_FREEZE_DAYS_PER_YEAR days per calendar
year, counted on the year a freeze starts. Staff can override the cap.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from membership.domain.errors import ErrorCode
from membership.domain.models import (
    FreezeAccepted,
    FreezePeriod,
    FreezeRejected,
    FreezeValidationResult,
)

MAX_FREEZE_DAYS_PER_YEAR = 30

# Notice members must give for a self-service freeze. Staff-driven freezes
# are not subject to it.
MIN_FREEZE_ADVANCE_DAYS = 7


def used_freeze_days(history: Iterable[FreezePeriod], today: date) -> int:
    return sum(period.days for period in history if period.frozen_at.year == today.year)


def get_remaining_freeze_days(history: Iterable[FreezePeriod], today: date) -> int:
    """Days still available this year. Never negative."""
    return max(0, MAX_FREEZE_DAYS_PER_YEAR - used_freeze_days(history, today))


def validate_freeze_request(
    history: Iterable[FreezePeriod],
    requested_days: int,
    today: date,
    is_staff_override: bool = False,
) -> FreezeValidationResult:
    remaining = get_remaining_freeze_days(history, today)

    if requested_days <= 0:
        return FreezeRejected(
            ErrorCode.FREEZE_PERIOD_INVALID, "Invalid freeze period.", remaining
        )

    if requested_days > remaining and not is_staff_override:
        return FreezeRejected(
            ErrorCode.FREEZE_BUDGET_EXCEEDED,
            f"Only {remaining} freeze days available this year. "
            f"Maximum: {MAX_FREEZE_DAYS_PER_YEAR} days.",
            remaining,
        )

    return FreezeAccepted(remaining_days=remaining)


def calculate_new_expires_at(
    current_expires_at: date | str, freeze_until: date, today: date
) -> str:
    """Push the expiry out by the days between today and the end of the freeze.

    Returns an ISO date string (YYYY-MM-DD).
    """
    if isinstance(current_expires_at, str):
        current_expires_at = date.fromisoformat(current_expires_at)
    freeze_days = (freeze_until - today).days
    return (current_expires_at + timedelta(days=freeze_days)).isoformat()


def is_currently_frozen(
    frozen_at: date | None, frozen_until: date | None, today: date
) -> bool:
    if frozen_at is None or frozen_until is None:
        return False
    return frozen_at <= today <= frozen_until


def format_freeze_period(frozen_at: date, frozen_until: date) -> str:
    days = (frozen_until - frozen_at).days
    return f"{frozen_at:%d/%m/%Y} até {frozen_until:%d/%m/%Y} ({days} dias)"
