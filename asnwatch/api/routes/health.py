"""Health check endpoint for ASN Watch API.

Provides a liveness probe; reports credential presence without calling the
gateway (use /notify/diagnostics for a live probe).
"""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from asnwatch.config import APP_VERSION, ROSTER_PATH

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "ASN Watch API",
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "gateway": {"telegram_token": bool(os.getenv("TELEGRAM_BOT_TOKEN"))},
        "roster": {"path": str(ROSTER_PATH), "exists": ROSTER_PATH.exists()},
    }
