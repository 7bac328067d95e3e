"""
Digest formatter: DeadlineOverview -> Telegram-ready text.

The output uses Telegram's HTML parse mode and only the <b> and <u> tags.
This is a contract with the delivery channel: the dispatcher always sends
with parse_mode=HTML, so anything taken from roster records is escaped.

Every (bucket, kind) subdivision is rendered even when empty, with an
explicit placeholder, so a recipient can tell "checked, nothing due" from a
missing section.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from html import escape

from asnwatch.config import SOON_WINDOW_DAYS
from asnwatch.schedule.aggregator import DeadlineOverview, items_for_kind
from asnwatch.schedule.models import DEADLINE_KINDS, ScheduleItem


@dataclass(frozen=True)
class DigestWording:
    """Fixed wording and date rendering for one locale."""

    title: str
    soon_heading: str
    overdue_heading: str
    empty_placeholder: str
    remaining: str  # format string with {days}
    overdue: str  # format string with {days}
    months: tuple[str, ...]
    timestamp_format: str  # str.format template, see format_timestamp

    def format_date(self, value: date) -> str:
        return f"{value.day:02d} {self.months[value.month - 1]} {value.year}"

    def format_timestamp(self, value: datetime) -> str:
        # Day and month are unpadded in the Indonesian form
        return self.timestamp_format.format(
            day=value.day,
            month=value.month,
            month_name=self.months[value.month - 1],
            year=value.year,
            hour=value.hour,
            minute=value.minute,
            second=value.second,
        )

    def relative(self, day_delta: int) -> str:
        if day_delta < 0:
            return self.overdue.format(days=abs(day_delta))
        return self.remaining.format(days=day_delta)


WORDINGS: dict[str, DigestWording] = {
    "id": DigestWording(
        title="🔔 Ringkasan Notifikasi ASN",
        soon_heading=f"Segera (≤ {SOON_WINDOW_DAYS} hari)",
        overdue_heading="Terlewat",
        empty_placeholder="(tidak ada)",
        remaining="sisa {days} hari",
        overdue="terlewat {days} hari",
        months=("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"),
        timestamp_format="{day}/{month}/{year}, {hour:02d}.{minute:02d}.{second:02d}",
    ),
    "en": DigestWording(
        title="🔔 Deadline digest",
        soon_heading=f"Due soon (≤ {SOON_WINDOW_DAYS} days)",
        overdue_heading="Overdue",
        empty_placeholder="(none)",
        remaining="{days} days remaining",
        overdue="{days} days overdue",
        months=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        timestamp_format="{day:02d} {month_name} {year} {hour:02d}:{minute:02d}",
    ),
}


class UnsupportedLocaleError(ValueError):
    """No wording table exists for the requested locale."""


def get_wording(locale: str) -> DigestWording:
    try:
        return WORDINGS[locale]
    except KeyError:
        supported = ", ".join(sorted(WORDINGS))
        raise UnsupportedLocaleError(
            f"Unsupported digest locale '{locale}' (supported: {supported})"
        ) from None


def format_item(item: ScheduleItem, locale: str = "id") -> str:
    """One bullet line: name, registration number, kind, date, relative days."""
    wording = get_wording(locale)
    registration = escape(item.registration_number) if item.registration_number else "-"
    return (
        f"• <b>{escape(item.subject_name)}</b> ({registration}) — "
        f"{item.kind.label(locale)}: <b>{wording.format_date(item.target_date)}</b> "
        f"({wording.relative(item.day_delta)})"
    )


def _section(heading: str, items: Sequence[ScheduleItem], locale: str) -> list[str]:
    wording = get_wording(locale)
    lines = [f"<b>{heading}</b>"]
    for kind in DEADLINE_KINDS:
        lines.append(f"• <u>{kind.label(locale)}</u>")
        kind_items = items_for_kind(items, kind)
        if not kind_items:
            lines.append(wording.empty_placeholder)
            continue
        lines.extend(format_item(item, locale) for item in kind_items)
    return lines


def format_digest(
    overview: DeadlineOverview,
    generated_at: datetime,
    locale: str = "id",
) -> str:
    """
    Render the digest body.

    Args:
        overview: Aggregator output (soon/overdue already sorted)
        generated_at: Timestamp printed under the title
        locale: Wording table ("id" or "en")

    Returns:
        Text for Telegram's HTML parse mode

    Raises:
        UnsupportedLocaleError: Unknown locale

    Side Effects: None (pure function)
    """
    wording = get_wording(locale)
    lines = [
        f"<b>{wording.title}</b>",
        wording.format_timestamp(generated_at),
        "",
    ]
    lines.extend(_section(wording.soon_heading, overview.soon, locale))
    lines.append("")
    lines.extend(_section(wording.overdue_heading, overview.overdue, locale))
    return "\n".join(lines)
