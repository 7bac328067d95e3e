"""
Tests for the asnwatch-digest command

Exit codes: 0 delivered/printed, 2 rejected, 3 upstream failure,
4 configuration error.
"""

import json

import pytest
import requests

from asnwatch import cli


@pytest.fixture
def roster_file(tmp_path, roster_records):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(roster_records), encoding="utf-8")
    return path


@pytest.fixture
def fake_session(monkeypatch, make_gateway):
    """Route the CLI's default gateway through a fake session."""

    def _install(response=None, error=None):
        _, session = make_gateway(response=response, error=error)
        monkeypatch.setattr(requests, "Session", lambda: session)
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123456:cli-token")
        return session

    return _install


def test_dry_run_prints_digest(roster_file, capsys):
    exit_code = cli.main(["--roster", str(roster_file), "--dry-run"])

    assert exit_code == cli.EXIT_DELIVERED
    out = capsys.readouterr().out
    assert "<b>🔔 Ringkasan Notifikasi ASN</b>" in out
    assert "Kenaikan Pangkat Berikutnya" in out


def test_dry_run_english(roster_file, capsys):
    assert cli.main(["--roster", str(roster_file), "--locale", "en", "--dry-run"]) == 0
    assert "Deadline digest" in capsys.readouterr().out


def test_missing_recipient(roster_file, capsys):
    assert cli.main(["--roster", str(roster_file)]) == cli.EXIT_CONFIGURATION
    assert "no recipient" in capsys.readouterr().err


def test_missing_token(roster_file, capsys):
    exit_code = cli.main(["--roster", str(roster_file), "--recipient", "1001"])

    assert exit_code == cli.EXIT_CONFIGURATION
    assert "TELEGRAM_BOT_TOKEN" in capsys.readouterr().err


def test_missing_roster(tmp_path, capsys):
    exit_code = cli.main(["--roster", str(tmp_path / "nope.json"), "--dry-run"])

    assert exit_code == cli.EXIT_CONFIGURATION
    assert "Roster file not found" in capsys.readouterr().err


def test_delivered(roster_file, fake_session, capsys):
    session = fake_session()

    exit_code = cli.main(["--roster", str(roster_file), "--recipient", "1001"])

    assert exit_code == cli.EXIT_DELIVERED
    assert capsys.readouterr().out.startswith("Digest delivered (")
    assert session.calls[0]["json"]["chat_id"] == "1001"


def test_default_recipient_from_environment(roster_file, fake_session, monkeypatch):
    session = fake_session()
    monkeypatch.setenv("ASNWATCH_DEFAULT_RECIPIENT", "2002")

    assert cli.main(["--roster", str(roster_file)]) == cli.EXIT_DELIVERED
    assert session.calls[0]["json"]["chat_id"] == "2002"


def test_rejected(roster_file, fake_session, telegram_response, capsys):
    fake_session(
        response=telegram_response(400, {"ok": False, "description": "Bad Request: chat not found"})
    )

    exit_code = cli.main(["--roster", str(roster_file), "--recipient", "999"])

    assert exit_code == cli.EXIT_REJECTED
    assert "chat not found" in capsys.readouterr().err


def test_upstream_failure(roster_file, fake_session):
    fake_session(error=requests.exceptions.ConnectionError("down"))

    exit_code = cli.main(["--roster", str(roster_file), "--recipient", "1001"])

    assert exit_code == cli.EXIT_UPSTREAM_FAILURE


def test_unsupported_configured_locale(roster_file, monkeypatch, capsys):
    monkeypatch.setattr(cli, "DIGEST_LOCALE", "xx")

    exit_code = cli.main(["--roster", str(roster_file), "--dry-run"])

    assert exit_code == cli.EXIT_CONFIGURATION
    assert "Unsupported digest locale" in capsys.readouterr().err
