"""
Pytest configuration for ASN Watch tests

Provides a fixed clock, sample roster records and a fake HTTP session so no
test ever talks to the real Telegram Bot API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from asnwatch.api.dependencies import close_http_session, set_digest_service, set_dispatcher
from asnwatch.delivery.dispatcher import NotificationDispatcher
from asnwatch.delivery.telegram import TelegramGateway
from asnwatch.observability.telemetry import reset_counters

TEST_TOKEN = "123456:TEST-TOKEN-abcdefghijklmnop"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records calls and answers with a canned response (or raises)."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response or FakeResponse(200, {"ok": True, "result": {"message_id": 1}})
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def _answer(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url: str, json: Any = None, timeout: float | None = None) -> FakeResponse:
        return self._answer("POST", url, json=json, timeout=timeout)

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        return self._answer("GET", url, timeout=timeout)


@pytest.fixture
def now():
    """Fixed 'now' for deterministic tests."""
    return datetime(2022, 1, 15, 9, 30, 0)


@pytest.fixture
def roster_records():
    """Three subjects in the record-entry application's export shape.

    Against 2022-01-15:
    - Andi: salary 2022-03-15 (soon, 59d), rank 2022-02-01 (soon, 17d)
    - Budi: salary 2021-12-01 (overdue, 45d), rank missing (unknown)
    - Citra: salary malformed (unknown), rank 2023-01-01 (ok)
    """
    return [
        {
            "id": "a1",
            "nama": "Andi",
            "nip": "198501012010011001",
            "telegramChatId": "1001",
            "tmtPns": "2010-01-01",
            "riwayatTmtKgb": "2020-03-15",
            "riwayatTmtPangkat": "2018-02-01",
        },
        {
            "id": "b2",
            "nama": "Budi",
            "nip": "199002022015021002",
            "riwayatTmtKgb": "2019-12-01",
            "riwayatTmtPangkat": "",
        },
        {
            "id": "c3",
            "nama": "Citra",
            "nip": "",
            "riwayatTmtKgb": "bukan tanggal",
            "riwayatTmtPangkat": "2019-01-01",
        },
    ]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer machine settings out of the tests."""
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    monkeypatch.delenv("ASNWATCH_DEFAULT_RECIPIENT", raising=False)
    reset_counters()
    yield
    set_dispatcher(None)
    set_digest_service(None)
    close_http_session()


@pytest.fixture
def telegram_response():
    """Factory for canned Bot API responses: telegram_response(status, payload)."""
    return FakeResponse


@pytest.fixture
def make_gateway():
    """Factory: TelegramGateway wired to a FakeSession."""

    def _make(response=None, error=None, token=TEST_TOKEN):
        session = FakeSession(response=response, error=error)
        gateway = TelegramGateway(
            token=token,
            api_base="https://telegram.test",
            timeout=3,
            session=session,
        )
        return gateway, session

    return _make


@pytest.fixture
def make_dispatcher(make_gateway):
    """Factory: NotificationDispatcher over a fake gateway session."""

    def _make(response=None, error=None, token=TEST_TOKEN, max_length=None):
        gateway, session = make_gateway(response=response, error=error, token=token)
        if max_length is None:
            return NotificationDispatcher(gateway), session
        return NotificationDispatcher(gateway, max_length=max_length), session

    return _make
