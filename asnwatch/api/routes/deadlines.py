"""Read-only deadline views: the aggregated overview and a digest preview."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query

from asnwatch.api.dependencies import get_digest_service
from asnwatch.config import TELEGRAM_MAX_MESSAGE_LENGTH
from asnwatch.digest.formatter import WORDINGS, UnsupportedLocaleError
from asnwatch.roster.store import RosterUnavailableError

router = APIRouter(prefix="/api", tags=["deadlines"])


@router.get("/deadlines")
def list_deadlines(
    locale: str = Query(default="id", description="Label language (id or en)"),
) -> dict[str, Any]:
    """Soon/overdue items (earliest first) with summary counts."""
    if locale not in WORDINGS:
        raise HTTPException(status_code=400, detail=f"Unsupported locale '{locale}'")

    try:
        service = get_digest_service()
        now = service.clock()
        overview = service.overview(now)
    except (RosterUnavailableError, UnsupportedLocaleError) as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {"generated_at": now.isoformat(), **overview.to_dict(locale)}


@router.get("/digest/preview")
def preview_digest() -> dict[str, Any]:
    """The digest text exactly as it would be sent, without sending it."""
    try:
        run = get_digest_service().build()
    except (RosterUnavailableError, UnsupportedLocaleError) as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {
        "generated_at": run.generated_at.isoformat(),
        "text": run.text,
        "length": len(run.text),
        "within_limit": len(run.text) <= TELEGRAM_MAX_MESSAGE_LENGTH,
        "summary": run.overview.summary(),
    }
