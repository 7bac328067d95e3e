"""Pydantic request models for the ASN Watch API."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _normalize_recipient(value: Any) -> Any:
    # Telegram chat ids are numeric; the front-end may send either form
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return value


class SendRequest(BaseModel):
    """Body of POST /notify/send. Field presence is checked by the route."""

    model_config = ConfigDict(populate_by_name=True)

    recipient: str | None = Field(
        default=None, validation_alias=AliasChoices("recipient", "chatId")
    )
    text: str | None = None

    @field_validator("recipient", mode="before")
    @classmethod
    def _recipient(cls, v: Any) -> Any:
        return _normalize_recipient(v)

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.recipient:
            missing.append("recipient")
        if not self.text or not self.text.strip():
            missing.append("text")
        return missing


class DigestRequest(BaseModel):
    """Body of POST /notify/digest; recipient falls back to the configured default."""

    model_config = ConfigDict(populate_by_name=True)

    recipient: str | None = Field(
        default=None, validation_alias=AliasChoices("recipient", "chatId")
    )

    @field_validator("recipient", mode="before")
    @classmethod
    def _recipient(cls, v: Any) -> Any:
        return _normalize_recipient(v)
