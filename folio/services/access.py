"""Subscription access-state classification."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from folio.models.domain import Subscription

DEFAULT_GRACE_DAYS = 3


class AccessState(str, Enum):
    """Coarse gate on the dashboard and public views."""

    ACTIVE = "active"
    TRIAL = "trial"
    GRACE = "grace"
    BLOCKED = "blocked"


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored as UTC by the backend
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def classify_access(
    subscription: Optional[Subscription] = None,
    now: Optional[datetime] = None,
    default_grace_days: int = DEFAULT_GRACE_DAYS,
) -> AccessState:
    """
    Classify the access state of a subscription.

    Precedence, first match wins:
        1. no subscription -> active
        2. status "blocked" -> blocked, before any date check
        3. now <= trial end -> trial
        4. now <= period end -> active
        5. now <= period end + grace days -> grace
        6. period end and grace both passed -> blocked
        7. only a trial end, already passed -> blocked
        8. otherwise -> active

    A missing grace_days uses default_grace_days (3 unless configured); an
    explicit 0 means no grace period.

    Args:
        subscription: Subscription record, or None
        now: Evaluation time (defaults to the current UTC time)
        default_grace_days: Grace period used when the subscription has none

    Returns:
        AccessState: The derived access state
    """
    if subscription is None:
        return AccessState.ACTIVE

    if subscription.status == AccessState.BLOCKED.value:
        return AccessState.BLOCKED

    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    trial_ends = _as_utc(subscription.trial_ends_at) if subscription.trial_ends_at else None
    period_ends = (
        _as_utc(subscription.current_period_end) if subscription.current_period_end else None
    )
    grace_days = (
        subscription.grace_days if subscription.grace_days is not None else default_grace_days
    )

    if trial_ends is not None and now <= trial_ends:
        return AccessState.TRIAL

    if period_ends is not None:
        if now <= period_ends:
            return AccessState.ACTIVE
        if now <= period_ends + timedelta(days=grace_days):
            return AccessState.GRACE
        return AccessState.BLOCKED

    if trial_ends is not None and now > trial_ends:
        return AccessState.BLOCKED

    return AccessState.ACTIVE
