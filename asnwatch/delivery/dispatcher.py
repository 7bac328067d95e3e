"""
Notification dispatcher: one delivery attempt per call.

The recipient is always an explicit argument; nothing is remembered between
calls. Boundary validation happens before the gateway is touched: a blank
recipient, blank text, or text over Telegram's message limit is Rejected
without a network call. Long digests are not split or truncated.
"""

from __future__ import annotations

from typing import Any

from asnwatch.config import TELEGRAM_MAX_MESSAGE_LENGTH
from asnwatch.delivery.outcomes import (
    Delivered,
    DeliveryOutcome,
    GatewayNotConfiguredError,
    Rejected,
    UpstreamFailure,
)
from asnwatch.delivery.telegram import TelegramGateway
from asnwatch.observability.logging import get_logger
from asnwatch.observability.telemetry import counter, log_event, time_block
from asnwatch.utils.redaction import redact

logger = get_logger(__name__)


class NotificationDispatcher:
    """Sends digest text through the Telegram gateway and reports the outcome."""

    def __init__(
        self,
        gateway: TelegramGateway | None = None,
        max_length: int = TELEGRAM_MAX_MESSAGE_LENGTH,
    ):
        self.gateway = gateway or TelegramGateway()
        self.max_length = max_length

    def send(self, recipient: str, text: str) -> DeliveryOutcome:
        """
        Deliver text to a recipient.

        Returns:
            Delivered, Rejected(reason) or UpstreamFailure(reason)

        Raises:
            GatewayNotConfiguredError: Missing credential, checked before any attempt

        Side Effects:
            - One HTTP call to the gateway (unless boundary validation rejects)
            - Logs the outcome via log_event() with the recipient redacted
        """
        if not self.gateway.configured:
            counter("delivery.not_configured")
            logger.error("Delivery attempted without TELEGRAM_BOT_TOKEN")
            raise GatewayNotConfiguredError("TELEGRAM_BOT_TOKEN is not set on the server")

        recipient = (recipient or "").strip()
        rejection = self._validate(recipient, text)
        if rejection is not None:
            self._record(recipient, rejection)
            return rejection

        with time_block("delivery.send"):
            outcome = self.gateway.send_message(recipient, text)
        self._record(recipient, outcome)
        return outcome

    def _validate(self, recipient: str, text: str) -> Rejected | None:
        if not recipient:
            return Rejected("recipient is required")
        if not text or not text.strip():
            return Rejected("text is required")
        if len(text) > self.max_length:
            return Rejected(
                f"message text is {len(text)} characters; "
                f"the gateway limit is {self.max_length}"
            )
        return None

    def _record(self, recipient: str, outcome: DeliveryOutcome) -> None:
        if isinstance(outcome, Delivered):
            counter("delivery.delivered")
            log_event("delivery.delivered", recipient=redact(recipient))
        elif isinstance(outcome, Rejected):
            counter("delivery.rejected")
            log_event("delivery.rejected", recipient=redact(recipient), reason=outcome.reason)
        elif isinstance(outcome, UpstreamFailure):
            counter("delivery.upstream_failure")
            log_event(
                "delivery.upstream_failure",
                recipient=redact(recipient),
                reason=outcome.reason,
                status=outcome.status_code,
            )

    def diagnostics(self) -> dict[str, Any]:
        """Configuration and reachability report for operators."""
        report: dict[str, Any] = {
            "gateway": "telegram",
            **self.gateway.describe(),
            "max_message_length": self.max_length,
        }
        if not self.gateway.configured:
            report["probe"] = {"skipped": "TELEGRAM_BOT_TOKEN is not set"}
            return report
        report["probe"] = self.gateway.get_me()
        return report
