"""ASN Watch - Track salary and rank increment deadlines for civil servants"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so the CLI and tests can load the schedule core without FastAPI
def __getattr__(name: str):
    """
    Lazy imports to avoid loading heavy dependencies when only importing lightweight modules.
    """
    if name in ("DeadlineKind", "ScheduleItem", "Subject", "UrgencyStatus"):
        from asnwatch.schedule import models

        return getattr(models, name)

    if name in ("aggregate", "DeadlineOverview"):
        from asnwatch.schedule import aggregator

        return getattr(aggregator, name)

    if name == "format_digest":
        from asnwatch.digest.formatter import format_digest

        return format_digest

    if name == "NotificationDispatcher":
        from asnwatch.delivery.dispatcher import NotificationDispatcher

        return NotificationDispatcher

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "DeadlineKind",
    "DeadlineOverview",
    "NotificationDispatcher",
    "ScheduleItem",
    "Subject",
    "UrgencyStatus",
    "aggregate",
    "format_digest",
]
