"""
Try-on quota rules, as pure functions of the stored profile state and "now".

Free tier: a weekly allowance counted in a 7-day window that starts on first
use after the previous window has ended. Plus/Pro tiers: a credit balance.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ...models import CustomerTier

WEEKLY_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    weekly_try_ons_used: int
    weekly_reset_date: Optional[datetime]
    try_on_credits: int
    remaining: int


def roll_weekly_window(
    weekly_used: int, weekly_reset_date: Optional[datetime], now: datetime
) -> tuple[int, datetime]:
    """Return the (used, reset_date) pair that applies at `now`.

    A missing or elapsed reset date opens a fresh window ending 7 days from now.
    Idempotent: rolling an already-current window returns it unchanged.
    """
    if weekly_reset_date is None or now >= weekly_reset_date:
        return 0, now + WEEKLY_WINDOW
    return weekly_used, weekly_reset_date


def evaluate_quota(
    tier: str,
    try_on_credits: int,
    weekly_used: int,
    weekly_reset_date: Optional[datetime],
    now: datetime,
    free_weekly_limit: int,
) -> QuotaDecision:
    """Decide whether one more try-on may be consumed and describe the resulting state"""
    if tier == CustomerTier.FREE.value:
        used, reset_date = roll_weekly_window(weekly_used, weekly_reset_date, now)
        if used >= free_weekly_limit:
            return QuotaDecision(False, used, reset_date, try_on_credits, 0)
        return QuotaDecision(True, used + 1, reset_date, try_on_credits, free_weekly_limit - used - 1)

    if try_on_credits <= 0:
        return QuotaDecision(False, weekly_used, weekly_reset_date, try_on_credits, 0)
    return QuotaDecision(True, weekly_used, weekly_reset_date, try_on_credits - 1, try_on_credits - 1)


def remaining_try_ons(
    tier: str,
    try_on_credits: int,
    weekly_used: int,
    weekly_reset_date: Optional[datetime],
    now: datetime,
    free_weekly_limit: int,
) -> tuple[int, Optional[datetime]]:
    """Read-only view of the allowance left at `now`, with the window end for free users"""
    if tier == CustomerTier.FREE.value:
        used, reset_date = roll_weekly_window(weekly_used, weekly_reset_date, now)
        if weekly_reset_date is None:
            # No window opened yet
            reset_date = None
        return max(free_weekly_limit - used, 0), reset_date
    return max(try_on_credits, 0), None
