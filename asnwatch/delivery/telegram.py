"""
Telegram Bot API client.

One HTTP call per send, no retries; retry policy belongs to the caller.
Response mapping:
- 2xx with ok=true             -> Delivered
- 400 / 403 (bad chat, blocked) -> Rejected, gateway description verbatim
- anything else (401/404 bad token, 429, 5xx, timeouts, bad JSON)
                               -> UpstreamFailure
"""

from __future__ import annotations

import os
from typing import Any

import requests

from asnwatch.config import (
    DIAGNOSTICS_TIMEOUT_SECONDS,
    GATEWAY_TIMEOUT_SECONDS,
    TELEGRAM_API_BASE,
)
from asnwatch.delivery.outcomes import (
    Delivered,
    DeliveryOutcome,
    GatewayNotConfiguredError,
    Rejected,
    UpstreamFailure,
)
from asnwatch.observability.logging import get_logger
from asnwatch.utils.redaction import mask_token

logger = get_logger(__name__)

# Telegram answers these when the chat id or the message is at fault
RECIPIENT_ERROR_STATUSES = frozenset({400, 403})


class TelegramGateway:
    """Thin wrapper over sendMessage / getMe."""

    def __init__(
        self,
        token: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the gateway client

        Environment variables (if params not provided):
        - TELEGRAM_BOT_TOKEN: bot credential
        - TELEGRAM_API_BASE: API root (default: https://api.telegram.org)
        """
        self.token = token or os.getenv("TELEGRAM_BOT_TOKEN") or None
        self.api_base = (api_base or TELEGRAM_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else GATEWAY_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.token)

    def _url(self, method: str) -> str:
        if not self.token:
            raise GatewayNotConfiguredError("TELEGRAM_BOT_TOKEN is not set on the server")
        return f"{self.api_base}/bot{self.token}/{method}"

    def send_message(self, chat_id: str, text: str) -> DeliveryOutcome:
        """
        Send one HTML-formatted message.

        Raises:
            GatewayNotConfiguredError: No bot token

        Side Effects:
            - Makes one HTTP POST to the Telegram Bot API
        """
        url = self._url("sendMessage")
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout:
            return UpstreamFailure(f"Telegram did not respond within {self.timeout:g}s")
        except requests.exceptions.RequestException as e:
            # The exception text may embed the URL, which carries the token
            return UpstreamFailure(f"Telegram unreachable: {type(e).__name__}")

        return interpret_response(response.status_code, _json_or_none(response))

    def get_me(self) -> dict[str, Any]:
        """
        Probe the bot identity for diagnostics. Never raises on network errors.

        Side Effects:
            - Makes one HTTP GET to the Telegram Bot API
        """
        url = self._url("getMe")
        try:
            response = self.session.get(url, timeout=DIAGNOSTICS_TIMEOUT_SECONDS)
        except requests.exceptions.RequestException as e:
            return {"reachable": False, "error": type(e).__name__}

        data = _json_or_none(response)
        if data is None:
            return {"reachable": True, "ok": False, "status_code": response.status_code}

        result: dict[str, Any] = {
            "reachable": True,
            "ok": bool(data.get("ok")),
            "status_code": response.status_code,
        }
        if data.get("ok"):
            bot = data.get("result") or {}
            result["bot_username"] = bot.get("username")
            result["bot_id"] = bot.get("id")
        else:
            result["error"] = data.get("description")
        return result

    def describe(self) -> dict[str, Any]:
        """Static configuration report; the token is masked."""
        return {
            "token_set": self.configured,
            "token": mask_token(self.token),
            "api_base": self.api_base,
            "timeout_seconds": self.timeout,
        }


def _json_or_none(response: requests.Response) -> dict[str, Any] | None:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def interpret_response(status_code: int, data: dict[str, Any] | None) -> DeliveryOutcome:
    """Map a sendMessage HTTP response to a delivery outcome."""
    if data is None:
        return UpstreamFailure(
            f"Telegram returned a non-JSON response (HTTP {status_code})", status_code
        )

    description = data.get("description") or f"HTTP {status_code}"

    if 200 <= status_code < 300 and data.get("ok"):
        message = data.get("result") or {}
        return Delivered(message_id=message.get("message_id"))

    if status_code in RECIPIENT_ERROR_STATUSES:
        return Rejected(description)

    logger.warning("Telegram upstream error (status=%d): %s", status_code, description)
    return UpstreamFailure(description, status_code)
