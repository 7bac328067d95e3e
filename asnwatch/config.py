"""Centralized configuration for the ASN Watch backend.

Typed constants for the deadline engine, the Telegram gateway, the roster
store, and the API. Environment variable overrides use safe defaults so the
app starts without extra env configuration. The bot token is deliberately
not resolved here: the dispatcher reads it when it is constructed so a
missing credential surfaces on the request that needs it.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- App ---
APP_VERSION: str = "1.0.0"
ENV: str = os.getenv("ASNWATCH_ENV", "development")
PROJECT_ROOT = Path(__file__).parent.parent

# --- Deadline engine ---
SOON_WINDOW_DAYS: int = 90
TIMEZONE: str = os.getenv("ASNWATCH_TIMEZONE", "Asia/Jakarta")

# --- Digest ---
DIGEST_LOCALE: str = os.getenv("ASNWATCH_DIGEST_LOCALE", "id")

# --- Telegram gateway ---
TELEGRAM_API_BASE: str = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org").rstrip("/")
TELEGRAM_MAX_MESSAGE_LENGTH: int = 4096
GATEWAY_TIMEOUT_SECONDS: float = float(os.getenv("ASNWATCH_GATEWAY_TIMEOUT", "10"))
DIAGNOSTICS_TIMEOUT_SECONDS: float = 5.0

# --- Roster ---
ROSTER_PATH: Path = Path(os.getenv("ASNWATCH_ROSTER_PATH", str(PROJECT_ROOT / "data" / "roster.json")))

# --- API ---
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))


def default_recipient() -> str | None:
    """Recipient used when a digest trigger does not name one."""
    value = os.getenv("ASNWATCH_DEFAULT_RECIPIENT", "").strip()
    return value or None


def allowed_origins() -> list[str]:
    """CORS origins for the browser front-end, comma separated in the env."""
    raw = os.getenv("ASNWATCH_ALLOWED_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if ENV == "development":
        origins.extend(
            [
                "http://localhost:3000",
                "http://localhost:5173",
                "http://127.0.0.1:3000",
                "http://127.0.0.1:5173",
            ]
        )
    return origins


def is_production() -> bool:
    """Check if running in production"""
    return ENV == "production"
