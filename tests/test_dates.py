"""Tests for skylight_mcp.dates."""

from datetime import date, timedelta

import pytest

from skylight_mcp import dates
from skylight_mcp.dates import add_days, format_date_for_display, parse_date, parse_time

# a Wednesday
TODAY = date(2025, 6, 11)


@pytest.fixture
def frozen_today(monkeypatch):
    monkeypatch.setattr(dates, "_current_date", lambda timezone=None: TODAY)
    return TODAY


class TestParseDate:
    def test_relative_words(self, frozen_today):
        assert parse_date("today") == "2025-06-11"
        assert parse_date("Tomorrow") == "2025-06-12"
        assert parse_date("  yesterday ") == "2025-06-10"

    @pytest.mark.parametrize("iso", ["2025-06-15", "1999-12-31", "2024-02-29"])
    def test_iso_passthrough(self, iso):
        assert parse_date(iso) == iso

    @pytest.mark.parametrize(
        "name", ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
    )
    def test_weekday_is_next_occurrence(self, frozen_today, name):
        result = date.fromisoformat(parse_date(name.capitalize()))
        delta = (result - frozen_today).days
        assert 1 <= delta <= 7
        assert result.strftime("%A").lower() == name

    def test_same_weekday_advances_a_full_week(self, frozen_today):
        assert parse_date("wednesday") == (frozen_today + timedelta(days=7)).isoformat()

    @pytest.mark.parametrize("abbrev", ["Wed", "wed", "WED", "Wednes"])
    def test_abbreviated_weekday_skips_today(self, frozen_today, abbrev):
        assert parse_date(abbrev) == (frozen_today + timedelta(days=7)).isoformat()

    def test_abbreviation_matches_full_name(self, frozen_today):
        assert parse_date("Fri") == parse_date("Friday") == "2025-06-13"
        assert parse_date("thurs") == "2025-06-12"

    def test_missing_year_comes_from_household_today(self, frozen_today):
        assert parse_date("Jun 20") == "2025-06-20"

    def test_us_format(self):
        assert parse_date("6/5/2025") == "2025-06-05"
        assert parse_date("12/25/2025") == "2025-12-25"

    def test_generic_fallback(self):
        assert parse_date("June 15, 2025") == "2025-06-15"

    def test_unparseable_returned_unchanged(self):
        assert parse_date("the day after payday") == "the day after payday"

    def test_timezone_is_passed_through(self, monkeypatch):
        seen = []

        def fake(timezone=None):
            seen.append(timezone)
            return TODAY

        monkeypatch.setattr(dates, "_current_date", fake)
        parse_date("today", "Europe/London")
        assert seen == ["Europe/London"]


class TestParseTime:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12:00 AM", "00:00"),
            ("12:00 PM", "12:00"),
            ("9:30 AM", "09:30"),
            ("11:59 PM", "23:59"),
            ("2:15pm", "14:15"),
            ("7:05", "07:05"),
            ("14:30", "14:30"),
        ],
    )
    def test_conversions(self, raw, expected):
        assert parse_time(raw) == expected

    def test_unknown_format_passes_through(self):
        assert parse_time("noon") == "noon"


class TestHelpers:
    def test_add_days_crosses_month(self):
        assert add_days("2025-06-30", 1) == "2025-07-01"

    def test_add_days_leaves_non_iso_alone(self):
        assert add_days("next week", 1) == "next week"

    def test_format_for_display(self):
        assert format_date_for_display("2025-06-15") == "Sun, Jun 15"
        assert format_date_for_display(None) == "N/A"
        assert format_date_for_display("soon") == "soon"
