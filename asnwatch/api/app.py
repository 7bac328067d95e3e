"""FastAPI server for ASN Watch"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from asnwatch.api.dependencies import close_http_session
from asnwatch.api.routes.deadlines import router as deadlines_router
from asnwatch.api.routes.health import router as health_router
from asnwatch.api.routes.notify import router as notify_router
from asnwatch.config import API_HOST, API_PORT, APP_VERSION, allowed_origins
from asnwatch.observability.logging import get_logger
from asnwatch.observability.telemetry import counter, log_event

app = FastAPI(title="ASN Watch API", version=APP_VERSION)

logger = get_logger(__name__)


# Malformed bodies use the same {"error": ...} shape and 400 status as the
# explicit field checks in the notify routes
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Side Effects:
        - Logs validation errors for debugging
        - Increments validation error counter for monitoring
    """
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    counter("api.validation_errors")

    invalid_fields = [str(err["loc"][-1]) for err in exc.errors() if err.get("loc")]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request body. Expected JSON with recipient and text.",
            "invalid_fields": invalid_fields,
        },
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(health_router)
app.include_router(notify_router)
app.include_router(deadlines_router)

log_event("api.startup", service="asnwatch", version=APP_VERSION)


@app.on_event("shutdown")
async def release_http_session() -> None:
    """Close the shared Telegram HTTP session.

    Side Effects:
        - Closes pooled connections held by asnwatch.api.dependencies
    """
    close_http_session()


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": "ASN Watch API",
        "version": APP_VERSION,
        "status": "running",
        "endpoints": {
            "send": "/notify/send",
            "digest": "/notify/digest",
            "diagnostics": "/notify/diagnostics",
            "deadlines": "/api/deadlines",
            "digest_preview": "/api/digest/preview",
            "health": "/health",
        },
    }


def main() -> None:
    """Run the API with uvicorn (console script: asnwatch-api)."""
    import uvicorn

    uvicorn.run("asnwatch.api.app:app", host=API_HOST, port=API_PORT)
