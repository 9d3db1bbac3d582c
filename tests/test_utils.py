"""Tests for shared utility functions."""

from datetime import date

import pytest

from cleanbook.utils import (
    add_hours_to_time,
    date_key,
    display_date,
    display_hour,
    is_weekend,
    normalize_phone,
    parse_date_key,
    round_money,
    round_up_to_half,
    time_to_minutes,
    to_pence,
    weekday_name,
)


class TestNormalizePhone:
    def test_uk_mobile_with_leading_zero(self):
        assert normalize_phone("07123456789") == "+447123456789"

    def test_uk_mobile_with_spaces(self):
        assert normalize_phone("07123 456 789") == "+447123456789"

    def test_country_code_without_plus(self):
        assert normalize_phone("442071234567") == "+442071234567"

    def test_international_kept_trimmed(self):
        assert normalize_phone("  +1 212 555 0100 ") == "+1 212 555 0100"

    def test_plus_44_reformatted(self):
        assert normalize_phone("+44 7123 456789") == "+447123456789"

    def test_bare_digits_get_plus(self):
        assert normalize_phone("12125550100") == "+12125550100"

    def test_empty(self):
        assert normalize_phone("") == ""
        assert normalize_phone(None) == ""


class TestDates:
    def test_date_key_zero_pads(self):
        assert date_key(date(2026, 3, 5)) == "2026-03-05"

    def test_parse_date_key(self):
        assert parse_date_key(" 2026-10-21 ") == date(2026, 10, 21)

    def test_parse_date_key_invalid(self):
        with pytest.raises(ValueError):
            parse_date_key("21/10/2026")

    def test_weekday_name_lower_case(self):
        assert weekday_name(date(2026, 10, 19)) == "monday"

    def test_is_weekend(self):
        assert is_weekend(date(2026, 10, 24))
        assert is_weekend(date(2026, 10, 25))
        assert not is_weekend(date(2026, 10, 23))
        assert not is_weekend(None)

    def test_display_date(self):
        assert display_date(date(2026, 10, 20)) == "20 October 2026"
        assert display_date(None) == "No date selected"


class TestClockArithmetic:
    def test_time_to_minutes(self):
        assert time_to_minutes("9") == 540
        assert time_to_minutes("09:30") == 570
        assert time_to_minutes("10:00:00") == 600

    def test_add_whole_and_half_hours(self):
        assert add_hours_to_time("09:00", 2) == "11:00"
        assert add_hours_to_time("09:00", 2.5) == "11:30"

    def test_add_hours_rounds_to_minute(self):
        assert add_hours_to_time("14:00", 1 / 3) == "14:20"

    def test_add_hours_runs_past_midnight(self):
        assert add_hours_to_time("20:00", 5.5) == "25:30"

    @pytest.mark.parametrize("hour,expected", [
        ("9", "9:00 AM"),
        ("12", "12:00 PM"),
        ("14", "2:00 PM"),
        ("20", "8:00 PM"),
    ])
    def test_display_hour(self, hour, expected):
        assert display_hour(hour) == expected


class TestRounding:
    @pytest.mark.parametrize("value,expected", [
        (0, 0),
        (2.0, 2.0),
        (2.01, 2.5),
        (2.5, 2.5),
        (2.51, 3.0),
    ])
    def test_round_up_to_half(self, value, expected):
        assert round_up_to_half(value) == expected

    @pytest.mark.parametrize("value", [0.1, 1.0, 1.26, 3.333, 4.75, 7.0001])
    def test_round_up_to_half_idempotent(self, value):
        once = round_up_to_half(value)
        assert round_up_to_half(once) == once

    def test_round_money(self):
        assert round_money(56.0) == 56.0
        assert round_money(1.234) == 1.23
        assert round_money(0.125) == 0.13

    def test_to_pence_rounds_halves_up(self):
        assert to_pence(98.5) == 9850
        assert to_pence(0.125) == 13
        assert to_pence(0.005) == 1
