"""
Tests for time string parsing and formatting.
"""

import pytest

from streamtune.utils import (
    InvalidDurationError,
    InvalidFormatError,
    TimeCodecError,
    format_time_string,
    is_valid_time_string,
    parse_time_string,
)


class TestParseTimeString:
    """Test parse_time_string."""

    def test_hours_minutes_seconds(self):
        """Test H:M:S input."""
        assert parse_time_string("1:30:45") == 5445
        assert parse_time_string("0:00:30") == 30
        assert parse_time_string("01:01:01") == 3661

    def test_hours_minutes(self):
        """Test two fields are read as hours and minutes."""
        assert parse_time_string("2:30") == 9000
        assert parse_time_string("0:30") == 1800
        assert parse_time_string("1:00") == 3600

    def test_seconds_only(self):
        """Test a single field is seconds."""
        assert parse_time_string("45") == 45
        assert parse_time_string("0") == 0
        assert parse_time_string("7325") == 7325

    def test_fields_are_not_range_checked(self):
        """Test overflowing sub-fields are accepted arithmetically."""
        assert parse_time_string("1:75") == 3600 + 75 * 60
        assert parse_time_string("0:0:90") == 90
        assert parse_time_string("0:61:61") == 61 * 60 + 61

    def test_negative_fields_pass_through(self):
        """Test negative fields are not rejected."""
        assert parse_time_string("-5") == -5
        assert parse_time_string("1:-30:00") == 1800

    def test_surrounding_whitespace(self):
        """Test whitespace around fields is tolerated."""
        assert parse_time_string(" 45 ") == 45
        assert parse_time_string("1: 30: 45") == 5445

    def test_empty_string(self):
        """Test empty input is rejected."""
        with pytest.raises(InvalidFormatError):
            parse_time_string("")

    def test_too_many_fields(self):
        """Test more than three fields is rejected."""
        with pytest.raises(InvalidFormatError):
            parse_time_string("1:2:3:4")

    def test_non_numeric_fields(self):
        """Test non-numeric fields are rejected."""
        with pytest.raises(InvalidFormatError):
            parse_time_string("a:b:c")
        with pytest.raises(InvalidFormatError):
            parse_time_string("1:xx")
        with pytest.raises(InvalidFormatError):
            parse_time_string("1::3")

    def test_non_ascii_digits_rejected(self):
        """Test digits outside ASCII 0-9 are not numbers."""
        with pytest.raises(InvalidFormatError):
            parse_time_string("\u0664\u0665")
        with pytest.raises(InvalidFormatError):
            parse_time_string("\uff11:\uff13\uff10")
        assert not is_valid_time_string("\u0664\u0665")

    def test_decimal_fields_rejected(self):
        """Test fractional fields are rejected."""
        with pytest.raises(InvalidFormatError):
            parse_time_string("1.5")

    def test_error_keeps_input(self):
        """Test the error carries the offending text."""
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_time_string("ab:cd")

        assert exc_info.value.text == "ab:cd"
        assert isinstance(exc_info.value, TimeCodecError)


class TestFormatTimeString:
    """Test format_time_string."""

    def test_under_one_hour(self):
        """Test MM:SS output below one hour."""
        assert format_time_string(0) == "00:00"
        assert format_time_string(30) == "00:30"
        assert format_time_string(90) == "01:30"
        assert format_time_string(3599) == "59:59"

    def test_one_hour_and_over(self):
        """Test HH:MM:SS output from one hour."""
        assert format_time_string(3600) == "01:00:00"
        assert format_time_string(3661) == "01:01:01"
        assert format_time_string(7325) == "02:02:05"
        assert format_time_string(356399) == "98:59:59"

    def test_hours_wider_than_two_digits(self):
        """Test hours are not truncated past 99."""
        assert format_time_string(360000) == "100:00:00"

    def test_integral_float(self):
        """Test whole-number floats are accepted."""
        assert format_time_string(90.0) == "01:30"

    def test_negative_rejected(self):
        """Test negative durations are rejected."""
        with pytest.raises(InvalidDurationError) as exc_info:
            format_time_string(-1)

        assert exc_info.value.value == -1

    def test_fractional_rejected(self):
        """Test fractional seconds are rejected."""
        with pytest.raises(InvalidDurationError):
            format_time_string(1.5)

    def test_non_finite_rejected(self):
        """Test NaN and infinity are rejected."""
        with pytest.raises(InvalidDurationError):
            format_time_string(float("nan"))
        with pytest.raises(InvalidDurationError):
            format_time_string(float("inf"))

    def test_bool_rejected(self):
        """Test booleans are not treated as durations."""
        with pytest.raises(InvalidDurationError):
            format_time_string(True)


class TestRoundTrip:
    """Test parse and format together."""

    def test_canonical_form(self):
        """Test formatting a parsed string gives its canonical form."""
        assert format_time_string(parse_time_string("1:30:45")) == "01:30:45"
        assert format_time_string(parse_time_string("0:00:30")) == "00:30"
        assert format_time_string(parse_time_string("2:30")) == "02:30:00"
        assert format_time_string(parse_time_string("45")) == "00:45"

    def test_parse_formatted_hours(self):
        """Test durations of an hour or more survive a round trip."""
        for seconds in range(3600, 356400):
            assert parse_time_string(format_time_string(seconds)) == seconds

    def test_short_form_reads_as_hours_minutes(self):
        """Test MM:SS output re-parses with the H:M rule."""
        assert format_time_string(90) == "01:30"
        assert parse_time_string("01:30") == 5400


class TestIsValidTimeString:
    """Test is_valid_time_string."""

    def test_valid(self):
        """Test accepted shapes."""
        assert is_valid_time_string("1:30:45")
        assert is_valid_time_string("2:30")
        assert is_valid_time_string("45")

    def test_invalid(self):
        """Test rejected shapes."""
        assert not is_valid_time_string("")
        assert not is_valid_time_string("1:2:3:4")
        assert not is_valid_time_string("a:b:c")
