"""Digest service - one externally triggered digest run.

Reads a roster snapshot, aggregates, formats and (optionally) dispatches.
There is no scheduler here: the API endpoint or the CLI decides when to run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from asnwatch.config import DIGEST_LOCALE, TIMEZONE
from asnwatch.delivery.dispatcher import NotificationDispatcher
from asnwatch.delivery.outcomes import DeliveryOutcome
from asnwatch.digest.formatter import format_digest, get_wording
from asnwatch.observability.logging import get_logger
from asnwatch.observability.telemetry import log_event
from asnwatch.roster.store import SubjectStore
from asnwatch.schedule.aggregator import DeadlineOverview, aggregate

logger = get_logger(__name__)


def resolve_timezone(name: str = TIMEZONE) -> ZoneInfo | type[UTC]:
    """IANA zone for digest timestamps; unknown names fall back to UTC."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", name)
        return UTC


def local_now() -> datetime:
    return datetime.now(resolve_timezone())


@dataclass
class DigestRun:
    """Everything one run produced; never persisted."""

    overview: DeadlineOverview
    text: str
    generated_at: datetime
    outcome: DeliveryOutcome | None = None


class DigestService:
    """Builds digests from a store and hands them to the dispatcher."""

    def __init__(
        self,
        store: SubjectStore,
        dispatcher: NotificationDispatcher | None = None,
        locale: str = DIGEST_LOCALE,
        clock: Callable[[], datetime] = local_now,
    ):
        get_wording(locale)  # fail fast on an unsupported locale
        self.store = store
        self._dispatcher = dispatcher
        self.locale = locale
        self.clock = clock

    @property
    def dispatcher(self) -> NotificationDispatcher:
        # Built lazily so previews work on a server without a bot token
        if self._dispatcher is None:
            self._dispatcher = NotificationDispatcher()
        return self._dispatcher

    def overview(self, now: datetime | None = None) -> DeadlineOverview:
        """Aggregate the current roster snapshot.

        Raises:
            RosterUnavailableError: The store cannot be read
        """
        return aggregate(self.store.list_records(), now or self.clock())

    def build(self, now: datetime | None = None) -> DigestRun:
        """Aggregate and format without sending."""
        generated_at = now or self.clock()
        overview = self.overview(generated_at)
        text = format_digest(overview, generated_at, self.locale)
        log_event(
            "digest.built",
            soon=len(overview.soon),
            overdue=len(overview.overdue),
            length=len(text),
            locale=self.locale,
        )
        return DigestRun(overview=overview, text=text, generated_at=generated_at)

    def send(self, recipient: str, now: datetime | None = None) -> DigestRun:
        """
        Build a digest and make one delivery attempt.

        Raises:
            GatewayNotConfiguredError: Missing bot token
            RosterUnavailableError: The store cannot be read
        """
        run = self.build(now)
        run.outcome = self.dispatcher.send(recipient, run.text)
        return run
