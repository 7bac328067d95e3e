"""
Subject record stores.

The roster is owned by the record-entry application; this side only reads
it, one full scan per invocation. JsonRosterStore reads the JSON export of
that application (a list of records). Records are returned raw so the
aggregator applies the skip-bad-records policy in one place.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from asnwatch.observability.logging import get_logger

logger = get_logger(__name__)


class RosterUnavailableError(RuntimeError):
    """The roster source could not be read at all."""


class SubjectStore(Protocol):
    def list_records(self) -> list[dict[str, Any]]:
        """Snapshot of every subject record."""
        ...


class InMemorySubjectStore:
    """Store backed by a list, for tests and embedding."""

    def __init__(self, records: Sequence[dict[str, Any]] | None = None):
        self._records = [dict(r) for r in records or []]

    def list_records(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._records]


class JsonRosterStore:
    """Store backed by a roster export file (JSON array of records)."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def list_records(self) -> list[dict[str, Any]]:
        """
        Read the whole roster file.

        Raises:
            RosterUnavailableError: File missing, unreadable, or not a JSON array

        Side Effects:
            - Reads self.path from the filesystem
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise RosterUnavailableError(f"Roster file not found: {self.path}") from e
        except OSError as e:
            raise RosterUnavailableError(f"Roster file unreadable: {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RosterUnavailableError(f"Roster file is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise RosterUnavailableError("Roster file must contain a JSON array of records")

        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(
                "Ignoring %d non-object entries in %s", len(data) - len(records), self.path
            )
        return records
