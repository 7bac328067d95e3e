"""
Urgency classification of deadline dates.

The day delta is rounded up (toward the future) so a deadline falling later
today counts as 0 days remaining, not as already elapsed.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time

from asnwatch.config import SOON_WINDOW_DAYS
from asnwatch.schedule.models import UrgencyStatus

SECONDS_PER_DAY = 24 * 60 * 60


def day_delta(target: date, now: datetime) -> int:
    """
    Signed whole days from now to the start of the target date.

    The target is taken at 00:00 in now's timezone (naive stays naive).

    Side Effects: None (pure function)
    """
    target_start = datetime.combine(target, time.min, tzinfo=now.tzinfo)
    seconds = (target_start - now).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


def classify_delta(delta: int, soon_window_days: int = SOON_WINDOW_DAYS) -> UrgencyStatus:
    """Map a day delta to its bucket; the soon window is inclusive at both ends."""
    if delta < 0:
        return UrgencyStatus.OVERDUE
    if delta <= soon_window_days:
        return UrgencyStatus.SOON
    return UrgencyStatus.OK


def classify(target: date | None, now: datetime) -> tuple[int | None, UrgencyStatus]:
    """
    Classify a target date relative to now.

    Returns:
        (day_delta, status); (None, UNKNOWN) when there is no target date
    """
    if target is None:
        return None, UrgencyStatus.UNKNOWN
    delta = day_delta(target, now)
    return delta, classify_delta(delta)
