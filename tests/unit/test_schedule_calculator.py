"""
Tests for the schedule calculator

Tests cover:
- Anchor parsing (ISO dates, ISO timestamps, day-first free form, garbage)
- Whole-year arithmetic with the Feb 29 -> Mar 1 rollover
- Cycle lengths per deadline kind
"""

from datetime import date, datetime

import pytest

from asnwatch.schedule.calculator import add_years, next_occurrence, parse_anchor_date
from asnwatch.schedule.models import DeadlineKind


class TestParseAnchorDate:
    def test_iso_date(self):
        assert parse_anchor_date("2020-03-15") == date(2020, 3, 15)

    def test_iso_timestamp_keeps_calendar_part(self):
        """Timezone suffix must not shift the date."""
        assert parse_anchor_date("2020-03-15T23:00:00.000Z") == date(2020, 3, 15)

    def test_date_and_datetime_objects(self):
        assert parse_anchor_date(date(2019, 7, 1)) == date(2019, 7, 1)
        assert parse_anchor_date(datetime(2019, 7, 1, 18, 45)) == date(2019, 7, 1)

    def test_day_first_free_form(self):
        assert parse_anchor_date("15/03/2020") == date(2020, 3, 15)

    def test_unpadded_iso_date_is_year_month_day(self):
        assert parse_anchor_date("2020-3-5") == date(2020, 3, 5)
        assert parse_anchor_date("2020-3-5T08:00:00Z") == date(2020, 3, 5)

    @pytest.mark.parametrize("value", ["2020", "15", "Mar 2020", "15 Mar", "15/03"])
    def test_partial_dates_are_rejected(self, value):
        """Missing parts must not be filled in from the current date."""
        assert parse_anchor_date(value) is None

    def test_full_free_form_date(self):
        assert parse_anchor_date("15 Mar 2020") == date(2020, 3, 15)

    def test_surrounding_whitespace(self):
        assert parse_anchor_date("  2020-03-15 ") == date(2020, 3, 15)

    @pytest.mark.parametrize("value", [None, "", "   ", "bukan tanggal", "2020-02-30", 12345, []])
    def test_unusable_values_return_none(self, value):
        assert parse_anchor_date(value) is None


class TestAddYears:
    def test_keeps_month_and_day(self):
        assert add_years(date(2020, 3, 15), 2) == date(2022, 3, 15)

    def test_leap_day_rolls_to_march_first(self):
        assert add_years(date(2020, 2, 29), 2) == date(2022, 3, 1)
        assert add_years(date(2020, 2, 29), 3) == date(2023, 3, 1)

    def test_past_last_year_raises(self):
        with pytest.raises(ValueError):
            add_years(date(9999, 1, 1), 2)

    def test_leap_day_into_leap_year_stays(self):
        assert add_years(date(2020, 2, 29), 4) == date(2024, 2, 29)

    def test_month_and_day_preserved_for_ordinary_dates(self):
        for anchor in [date(2001, 1, 31), date(2010, 6, 30), date(2015, 12, 31), date(2019, 2, 28)]:
            result = add_years(anchor, 4)
            assert (result.month, result.day) == (anchor.month, anchor.day)
            assert result.year == anchor.year + 4


class TestNextOccurrence:
    def test_salary_cycle_is_two_years(self):
        assert next_occurrence("2020-03-15", DeadlineKind.SALARY_INCREMENT) == date(2022, 3, 15)

    def test_rank_cycle_is_four_years(self):
        assert next_occurrence("2020-03-15", DeadlineKind.RANK_INCREMENT) == date(2024, 3, 15)

    def test_leap_day_anchor(self):
        assert next_occurrence("2020-02-29", DeadlineKind.SALARY_INCREMENT) == date(2022, 3, 1)

    def test_missing_anchor(self):
        assert next_occurrence(None, DeadlineKind.RANK_INCREMENT) is None

    def test_malformed_anchor(self):
        assert next_occurrence("not-a-date", DeadlineKind.SALARY_INCREMENT) is None

    def test_result_past_year_9999_is_unusable(self):
        assert next_occurrence("9999-01-01", DeadlineKind.SALARY_INCREMENT) is None
        assert next_occurrence("9997-05-05", DeadlineKind.RANK_INCREMENT) is None
        assert next_occurrence("9995-05-05", DeadlineKind.RANK_INCREMENT) == date(9999, 5, 5)
