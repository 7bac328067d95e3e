"""Dependency wiring for the API routers.

Tests (or an embedding application) inject collaborators with the set_*
functions. Otherwise each request builds fresh defaults from the
environment, so a bot token added to the environment is picked up without
a restart; the HTTP session (and its connection pool) is shared.
"""

from __future__ import annotations

import requests

from asnwatch.config import DIGEST_LOCALE, ROSTER_PATH
from asnwatch.delivery.dispatcher import NotificationDispatcher
from asnwatch.delivery.telegram import TelegramGateway
from asnwatch.digest.service import DigestService
from asnwatch.roster.store import JsonRosterStore

# Module-level storage for dependencies injected at startup
_dispatcher: NotificationDispatcher | None = None
_digest_service: DigestService | None = None
_http_session: requests.Session | None = None


def set_dispatcher(dispatcher: NotificationDispatcher | None) -> None:
    """Inject the notification dispatcher (None restores the default).

    Side Effects:
        - Sets module-level _dispatcher variable
    """
    global _dispatcher
    _dispatcher = dispatcher


def set_digest_service(service: DigestService | None) -> None:
    """Inject the digest service (None restores the default).

    Side Effects:
        - Sets module-level _digest_service variable
    """
    global _digest_service
    _digest_service = service


def get_http_session() -> requests.Session:
    """Shared session for the default gateway, created on first use."""
    global _http_session
    if _http_session is None:
        _http_session = requests.Session()
    return _http_session


def close_http_session() -> None:
    """Close the shared session (called on application shutdown).

    Side Effects:
        - Resets module-level _http_session variable
    """
    global _http_session
    if _http_session is not None:
        _http_session.close()
        _http_session = None


def get_dispatcher() -> NotificationDispatcher:
    if _dispatcher is not None:
        return _dispatcher
    return NotificationDispatcher(TelegramGateway(session=get_http_session()))


def get_digest_service() -> DigestService:
    """
    Raises:
        UnsupportedLocaleError: ASNWATCH_DIGEST_LOCALE names no wording table
    """
    if _digest_service is not None:
        return _digest_service
    return DigestService(
        JsonRosterStore(ROSTER_PATH),
        dispatcher=get_dispatcher(),
        locale=DIGEST_LOCALE,
    )
