"""
Roster aggregation: subjects -> classified, ordered deadline items.

Re-running aggregate() with the same subjects and the same "now" gives the
same result. Items are sorted by target date with a stable sort, so ties keep
roster order (and within a subject, salary before rank).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from asnwatch.observability.logging import get_logger
from asnwatch.observability.telemetry import counter, log_event
from asnwatch.schedule.calculator import next_occurrence
from asnwatch.schedule.models import (
    DEADLINE_KINDS,
    DeadlineKind,
    ScheduleItem,
    Subject,
    UrgencyStatus,
)
from asnwatch.schedule.urgency import classify

logger = get_logger(__name__)


@dataclass
class DeadlineOverview:
    """Result of one aggregation pass."""

    soon: list[ScheduleItem] = field(default_factory=list)
    overdue: list[ScheduleItem] = field(default_factory=list)
    ok_count: int = 0
    unknown_count: int = 0
    subject_count: int = 0
    skipped_records: int = 0

    def summary(self) -> dict[str, int]:
        """Scalar counts for dashboard display."""
        return {
            "total": self.subject_count,
            "soon": len(self.soon),
            "overdue": len(self.overdue),
            "ok": self.ok_count,
            "unknown": self.unknown_count,
        }

    def to_dict(self, locale: str = "id") -> dict[str, Any]:
        return {
            "summary": self.summary(),
            "soon": [item.to_dict(locale) for item in self.soon],
            "overdue": [item.to_dict(locale) for item in self.overdue],
        }


def schedule_item(subject: Subject, kind: DeadlineKind, now: datetime) -> ScheduleItem | None:
    """Classified item for one subject and kind, or None if the anchor is unusable."""
    target = next_occurrence(subject.anchor_for(kind), kind)
    delta, status = classify(target, now)
    if target is None or delta is None:
        return None
    return ScheduleItem(
        subject_id=subject.id,
        subject_name=subject.name,
        registration_number=subject.registration_number,
        kind=kind,
        target_date=target,
        day_delta=delta,
        status=status,
    )


def _as_subject(record: Subject | dict[str, Any]) -> Subject:
    if isinstance(record, Subject):
        return record
    return Subject.model_validate(record)


def aggregate(
    subjects: Iterable[Subject | dict[str, Any]],
    now: datetime,
) -> DeadlineOverview:
    """
    Scan the roster and bucket every deadline.

    Args:
        subjects: Roster snapshot; Subject models or raw records
        now: Reference instant for classification

    Returns:
        DeadlineOverview with soon/overdue sorted earliest first; ok items
        are only counted, unknown (missing/malformed anchors) counted too

    Side Effects:
        - Logs skipped records via logger.warning() and log_event()
    """
    overview = DeadlineOverview()
    soon: list[ScheduleItem] = []
    overdue: list[ScheduleItem] = []

    for position, record in enumerate(subjects):
        try:
            subject = _as_subject(record)
        except ValidationError as e:
            overview.skipped_records += 1
            counter("aggregate.skipped_records")
            logger.warning("Skipping roster record #%d (%d validation errors)", position, e.error_count())
            continue

        try:
            items = [schedule_item(subject, kind, now) for kind in DEADLINE_KINDS]
        except (ValueError, OverflowError) as e:
            overview.skipped_records += 1
            counter("aggregate.skipped_records")
            logger.warning("Skipping roster record #%d (%s)", position, type(e).__name__)
            continue

        overview.subject_count += 1
        for item in items:
            if item is None:
                overview.unknown_count += 1
                continue
            if item.status is UrgencyStatus.SOON:
                soon.append(item)
            elif item.status is UrgencyStatus.OVERDUE:
                overdue.append(item)
            else:
                overview.ok_count += 1

    overview.soon = sorted(soon, key=lambda item: item.target_date)
    overview.overdue = sorted(overdue, key=lambda item: item.target_date)

    log_event(
        "aggregate.complete",
        subjects=overview.subject_count,
        soon=len(overview.soon),
        overdue=len(overview.overdue),
        ok=overview.ok_count,
        unknown=overview.unknown_count,
        skipped=overview.skipped_records,
    )
    return overview


def items_for_kind(items: Iterable[ScheduleItem], kind: DeadlineKind) -> list[ScheduleItem]:
    """Items of one kind, order preserved."""
    return [item for item in items if item.kind is kind]
