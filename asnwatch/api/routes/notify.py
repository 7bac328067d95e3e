"""Notification endpoints.

- POST /notify/send        - deliver caller-supplied text to a recipient
- POST /notify/digest      - build the current digest and deliver it
- GET  /notify/diagnostics - gateway configuration / reachability report

Failure status mapping (the error string is always the literal reason):
- 400 malformed request or recipient rejected by the gateway
- 500 server misconfiguration (no bot token, roster unreadable, bad locale)
- 502 upstream gateway failure
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from asnwatch.api.dependencies import get_digest_service, get_dispatcher
from asnwatch.api.models import DigestRequest, SendRequest
from asnwatch.config import default_recipient
from asnwatch.delivery.outcomes import (
    Delivered,
    DeliveryOutcome,
    GatewayNotConfiguredError,
    Rejected,
)
from asnwatch.digest.formatter import UnsupportedLocaleError
from asnwatch.observability.logging import get_logger
from asnwatch.observability.telemetry import counter
from asnwatch.roster.store import RosterUnavailableError

router = APIRouter(prefix="/notify", tags=["notify"])
logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def outcome_response(outcome: DeliveryOutcome, extra: dict[str, Any] | None = None) -> JSONResponse:
    """Translate a delivery outcome into the HTTP contract."""
    if isinstance(outcome, Delivered):
        return JSONResponse(status_code=status.HTTP_200_OK, content={"ok": True, **(extra or {})})
    if isinstance(outcome, Rejected):
        return _error(status.HTTP_400_BAD_REQUEST, outcome.reason)
    return _error(status.HTTP_502_BAD_GATEWAY, outcome.reason)


@router.post("/send")
def send_notification(payload: SendRequest | None = None) -> JSONResponse:
    """Deliver text to a recipient in one attempt.

    Side Effects:
        - One HTTP call to the Telegram Bot API
        - Logs telemetry events via log_event()
    """
    payload = payload or SendRequest()
    missing = payload.missing_fields()
    if missing:
        counter("api.notify.send.invalid")
        return _error(
            status.HTTP_400_BAD_REQUEST,
            f"recipient and text are required (missing: {', '.join(missing)})",
        )

    try:
        outcome = get_dispatcher().send(payload.recipient or "", payload.text or "")
    except GatewayNotConfiguredError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return outcome_response(outcome)


@router.post("/digest")
def send_digest(payload: DigestRequest | None = None) -> JSONResponse:
    """Build the digest from the roster and deliver it.

    Side Effects:
        - Reads the roster store
        - One HTTP call to the Telegram Bot API
    """
    recipient = (payload.recipient if payload else None) or default_recipient()
    if not recipient:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "recipient is required (or set ASNWATCH_DEFAULT_RECIPIENT)",
        )

    try:
        run = get_digest_service().send(recipient)
    except GatewayNotConfiguredError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except (RosterUnavailableError, UnsupportedLocaleError) as e:
        logger.error("Digest aborted: %s", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    assert run.outcome is not None
    return outcome_response(
        run.outcome,
        extra={
            "soon": len(run.overview.soon),
            "overdue": len(run.overview.overdue),
            "length": len(run.text),
        },
    )


@router.get("/diagnostics")
def diagnostics() -> dict[str, Any]:
    """Gateway configuration and reachability, for operator troubleshooting.

    Side Effects:
        - May make one HTTP GET (getMe) to the Telegram Bot API
    """
    return get_dispatcher().diagnostics()
