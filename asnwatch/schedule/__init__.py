"""
Deadline engine: schedule calculation, urgency classification, aggregation.
"""

from asnwatch.schedule.aggregator import DeadlineOverview, aggregate, items_for_kind
from asnwatch.schedule.calculator import add_years, next_occurrence, parse_anchor_date
from asnwatch.schedule.models import (
    DEADLINE_KINDS,
    DeadlineKind,
    ScheduleItem,
    Subject,
    UrgencyStatus,
)
from asnwatch.schedule.urgency import classify, classify_delta, day_delta

__all__ = [
    "DEADLINE_KINDS",
    "DeadlineKind",
    "DeadlineOverview",
    "ScheduleItem",
    "Subject",
    "UrgencyStatus",
    "add_years",
    "aggregate",
    "classify",
    "classify_delta",
    "day_delta",
    "items_for_kind",
    "next_occurrence",
    "parse_anchor_date",
]
