"""
Read-only access to the subject roster.
"""

from asnwatch.roster.store import (
    InMemorySubjectStore,
    JsonRosterStore,
    RosterUnavailableError,
    SubjectStore,
)

__all__ = [
    "InMemorySubjectStore",
    "JsonRosterStore",
    "RosterUnavailableError",
    "SubjectStore",
]
