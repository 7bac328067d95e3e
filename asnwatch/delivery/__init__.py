"""
Delivery of digests through the Telegram Bot API.
"""

from asnwatch.delivery.dispatcher import NotificationDispatcher
from asnwatch.delivery.outcomes import (
    Delivered,
    DeliveryOutcome,
    GatewayNotConfiguredError,
    Rejected,
    UpstreamFailure,
)
from asnwatch.delivery.telegram import TelegramGateway

__all__ = [
    "Delivered",
    "DeliveryOutcome",
    "GatewayNotConfiguredError",
    "NotificationDispatcher",
    "Rejected",
    "TelegramGateway",
    "UpstreamFailure",
]
