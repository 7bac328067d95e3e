"""
Schedule calculator: anchor date + fixed cycle -> next occurrence.

Pure functions only. An unusable anchor yields None instead of raising so a
single bad record never aborts a roster scan.

Rollover rule: an anniversary on Feb 29 that lands in a non-leap year moves
to Mar 1 (what the record-entry application's date facility produces).
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

from asnwatch.schedule.models import DeadlineKind

# "2020-03-15", "2020-3-5" or "2020-03-15T00:00:00.000Z": year-month-day
_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:$|[T ])")

# dateutil fills missing parts from its default; parsing against two
# defaults that differ in every part exposes incomplete dates
_SENTINEL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_anchor_date(value: Any) -> date | None:
    """
    Parse an anchor value into a calendar date.

    Accepts date/datetime objects, ISO dates, ISO timestamps (time part is
    ignored) and, as a last resort, free-form dates read day-first
    ("15/03/2020", "15 Mar 2020").

    Returns:
        The calendar date, or None when the value is missing or unparseable.

    Side Effects: None (pure function)
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _ISO_DATE_PREFIX.match(text)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None

    try:
        first, second = (
            date_parser.parse(text, dayfirst=True, default=default).date()
            for default in _SENTINEL_DEFAULTS
        )
    except (ValueError, OverflowError):
        return None
    # "2020" or "15" alone is not a date
    if first != second:
        return None
    return first


def add_years(anchor: date, years: int) -> date:
    """Advance a date by whole years, keeping month and day.

    Feb 29 on a non-leap result year rolls over to Mar 1.

    Raises:
        ValueError: The result year is outside the supported range (1..9999)
    """
    try:
        return anchor.replace(year=anchor.year + years)
    except ValueError:
        return date(anchor.year + years, 3, 1)


def next_occurrence(anchor_value: Any, kind: DeadlineKind) -> date | None:
    """
    Target date of the deadline that follows an anchor date.

    Args:
        anchor_value: Raw anchor from the subject record
        kind: Deadline kind (provides the cycle length)

    Returns:
        anchor + kind.cycle_years, or None when the anchor is unusable or
        the result falls past the last representable year
    """
    anchor = parse_anchor_date(anchor_value)
    if anchor is None:
        return None
    try:
        return add_years(anchor, kind.cycle_years)
    except (ValueError, OverflowError):
        return None
