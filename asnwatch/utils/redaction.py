"""
Redaction helpers for log lines.

Telegram chat ids identify people and the bot token grants full control of
the bot, so neither is written to logs or diagnostics in clear text.
"""

from __future__ import annotations

from hashlib import sha256


def redact(value: str | None) -> str:
    """
    Return a stable hash representation of a sensitive string.
    """
    if not value:
        return "hash:missing"
    digest = sha256(value.encode("utf-8")).hexdigest()[:12]
    return f"hash:{digest}"


def mask_token(token: str | None, visible: int = 4) -> str | None:
    """
    Mask a credential, keeping only its last characters for identification.

    Example:
        "123456:ABC-DEF" -> "**********-DEF"
    """
    if not token:
        return None
    if len(token) <= visible:
        return "*" * len(token)
    return "*" * (len(token) - visible) + token[-visible:]
