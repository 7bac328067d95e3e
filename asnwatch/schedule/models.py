"""
Domain models for deadline tracking.

A Subject is one tracked civil servant as read from the roster store. The
deadline engine never mutates subjects; it derives ScheduleItems from them
on every read so urgency is always relative to the current clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class DeadlineKind(str, Enum):
    """Recurring deadline tracked per subject.

    The cycle length belongs to the kind, never to the subject.
    """

    SALARY_INCREMENT = "salary_increment"
    RANK_INCREMENT = "rank_increment"

    @property
    def cycle_years(self) -> int:
        return _CYCLE_YEARS[self]

    def label(self, locale: str = "id") -> str:
        """Display name used in digests and API payloads."""
        return _LABELS[locale][self]


_CYCLE_YEARS: dict[DeadlineKind, int] = {
    DeadlineKind.SALARY_INCREMENT: 2,
    DeadlineKind.RANK_INCREMENT: 4,
}

_LABELS: dict[str, dict[DeadlineKind, str]] = {
    "id": {
        DeadlineKind.SALARY_INCREMENT: "Kenaikan Gaji Berikutnya",
        DeadlineKind.RANK_INCREMENT: "Kenaikan Pangkat Berikutnya",
    },
    "en": {
        DeadlineKind.SALARY_INCREMENT: "Next salary increment",
        DeadlineKind.RANK_INCREMENT: "Next rank increment",
    },
}

# Fixed processing order; ties in the aggregator fall back to this order.
DEADLINE_KINDS: tuple[DeadlineKind, ...] = (
    DeadlineKind.SALARY_INCREMENT,
    DeadlineKind.RANK_INCREMENT,
)


class UrgencyStatus(str, Enum):
    """Urgency bucket of a deadline relative to "now"."""

    OVERDUE = "overdue"  # day delta < 0
    SOON = "soon"  # 0 <= day delta <= 90
    OK = "ok"  # day delta > 90
    UNKNOWN = "unknown"  # anchor missing or unparseable


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Subject(BaseModel):
    """
    One tracked person, as stored by the record-entry application.

    Accepts both the Python field names and the keys of the original
    roster export (nama, nip, telegramChatId, riwayatTmtKgb, ...). Anchor
    dates stay raw here: a malformed date must not reject the whole record,
    it only removes that deadline from the schedule.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None)
    name: str = Field(..., validation_alias=AliasChoices("name", "nama"))
    registration_number: str = Field(
        default="", validation_alias=AliasChoices("registration_number", "nip")
    )
    phone: str | None = Field(default=None, validation_alias=AliasChoices("phone", "telp"))
    notification_address: str | None = Field(
        default=None,
        validation_alias=AliasChoices("notification_address", "telegramChatId"),
    )
    appointment_date: Any = Field(
        default=None, validation_alias=AliasChoices("appointment_date", "tmtPns")
    )
    salary_anchor: Any = Field(
        default=None, validation_alias=AliasChoices("salary_anchor", "riwayatTmtKgb")
    )
    rank_anchor: Any = Field(
        default=None, validation_alias=AliasChoices("rank_anchor", "riwayatTmtPangkat")
    )

    @field_validator("id", "phone", "notification_address", mode="before")
    @classmethod
    def _coerce_identifier(cls, v: Any) -> Any:
        # Auto-increment ids and Telegram chat ids arrive as numbers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return _blank_to_none(v)

    @field_validator("registration_number", mode="before")
    @classmethod
    def _coerce_registration(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()

    @field_validator("appointment_date", "salary_anchor", "rank_anchor", mode="before")
    @classmethod
    def _blank_anchor(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def anchor_for(self, kind: DeadlineKind) -> Any:
        """Raw anchor value for a deadline kind (may be None or malformed)."""
        if kind is DeadlineKind.SALARY_INCREMENT:
            return self.salary_anchor
        return self.rank_anchor


@dataclass(frozen=True)
class ScheduleItem:
    """A classified deadline occurrence derived from one subject and one kind.

    Holds a snapshot of the subject's identity, not a live link.
    """

    subject_id: str | None
    subject_name: str
    registration_number: str
    kind: DeadlineKind
    target_date: date
    day_delta: int
    status: UrgencyStatus

    def to_dict(self, locale: str = "id") -> dict[str, Any]:
        return {
            "subject_id": self.subject_id,
            "name": self.subject_name,
            "registration_number": self.registration_number,
            "kind": self.kind.value,
            "kind_label": self.kind.label(locale),
            "target_date": self.target_date.isoformat(),
            "day_delta": self.day_delta,
            "status": self.status.value,
        }
