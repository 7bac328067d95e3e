"""
Tests for the digest formatter

The digest is rendered with Telegram's HTML parse mode; all four
(bucket, kind) subdivisions appear even when empty.
"""

from datetime import datetime

import pytest

from asnwatch.digest.formatter import WORDINGS, format_digest, format_item, get_wording
from asnwatch.schedule.aggregator import DeadlineOverview, aggregate

EXPECTED_ID_DIGEST = "\n".join(
    [
        "<b>🔔 Ringkasan Notifikasi ASN</b>",
        "15/1/2022, 09.30.00",
        "",
        "<b>Segera (≤ 90 hari)</b>",
        "• <u>Kenaikan Gaji Berikutnya</u>",
        "• <b>Andi</b> (198501012010011001) — Kenaikan Gaji Berikutnya: "
        "<b>15 Mar 2022</b> (sisa 59 hari)",
        "• <u>Kenaikan Pangkat Berikutnya</u>",
        "• <b>Andi</b> (198501012010011001) — Kenaikan Pangkat Berikutnya: "
        "<b>01 Feb 2022</b> (sisa 17 hari)",
        "",
        "<b>Terlewat</b>",
        "• <u>Kenaikan Gaji Berikutnya</u>",
        "• <b>Budi</b> (199002022015021002) — Kenaikan Gaji Berikutnya: "
        "<b>01 Des 2021</b> (terlewat 45 hari)",
        "• <u>Kenaikan Pangkat Berikutnya</u>",
        "(tidak ada)",
    ]
)


@pytest.fixture
def overview(roster_records, now):
    return aggregate(roster_records, now)


def test_indonesian_digest_layout(overview, now):
    assert format_digest(overview, now) == EXPECTED_ID_DIGEST


def test_english_digest(overview, now):
    text = format_digest(overview, now, locale="en")

    assert text.startswith("<b>🔔 Deadline digest</b>\n15 Jan 2022 09:30\n")
    assert "<b>Due soon (≤ 90 days)</b>" in text
    assert "<b>Overdue</b>" in text
    assert "(59 days remaining)" in text
    assert "(45 days overdue)" in text
    assert "<b>01 Dec 2021</b>" in text
    assert text.endswith("• <u>Next rank increment</u>\n(none)")


def test_empty_overview_shows_every_placeholder(now):
    text = format_digest(DeadlineOverview(), now)

    assert text.count("(tidak ada)") == 4
    assert text.count("<u>Kenaikan Gaji Berikutnya</u>") == 2
    assert text.count("<u>Kenaikan Pangkat Berikutnya</u>") == 2


def test_roster_text_is_escaped(now):
    overview = aggregate(
        [{"nama": "Ana & <Bela>", "nip": "<1>", "riwayatTmtKgb": "2020-03-15"}], now
    )

    line = format_item(overview.soon[0])

    assert "<b>Ana &amp; &lt;Bela&gt;</b> (&lt;1&gt;)" in line
    assert "<Bela>" not in line


def test_missing_registration_number_renders_dash(roster_records, now):
    records = [dict(roster_records[0], nip="")]
    line = format_item(aggregate(records, now).soon[0])
    assert line.startswith("• <b>Andi</b> (-) — ")


def test_only_bold_and_underline_tags(overview, now):
    text = format_digest(overview, now)
    stripped = (
        text.replace("<b>", "").replace("</b>", "").replace("<u>", "").replace("</u>", "")
    )
    assert "<" not in stripped
    assert ">" not in stripped


def test_unknown_locale_raises(overview, now):
    with pytest.raises(ValueError, match="Unsupported digest locale"):
        format_digest(overview, now, locale="fr")


def test_wording_relative_days():
    wording = get_wording("id")
    assert wording.relative(0) == "sisa 0 hari"
    assert wording.relative(-3) == "terlewat 3 hari"
    assert set(WORDINGS) == {"id", "en"}


def test_indonesian_timestamp_is_unpadded():
    wording = get_wording("id")
    assert wording.format_timestamp(datetime(2022, 11, 5, 7, 4, 3)) == "5/11/2022, 07.04.03"
    assert wording.format_timestamp(datetime(2022, 1, 15, 9, 30, 0)) == "15/1/2022, 09.30.00"


def test_english_timestamp():
    wording = get_wording("en")
    assert wording.format_timestamp(datetime(2022, 11, 5, 7, 4, 3)) == "05 Nov 2022 07:04"
