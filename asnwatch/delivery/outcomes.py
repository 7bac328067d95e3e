"""
Delivery outcomes and errors.

Caller-attributable and gateway-attributable failures are separate types so
retry policy can be attached by type: a Rejected send will fail the same way
again, an UpstreamFailure may succeed on a later attempt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Delivered:
    """The gateway accepted the whole message."""

    message_id: int | None = None

    ok = True
    retryable = False


@dataclass(frozen=True)
class Rejected:
    """The gateway (or boundary validation) refused the input itself."""

    reason: str

    ok = False
    retryable = False


@dataclass(frozen=True)
class UpstreamFailure:
    """The gateway was unreachable or failed on its side."""

    reason: str
    status_code: int | None = None

    ok = False
    retryable = True


DeliveryOutcome = Union[Delivered, Rejected, UpstreamFailure]


class GatewayNotConfiguredError(RuntimeError):
    """The delivery credential is missing; no attempt was possible."""
