"""Tests for moment-style date formatting and strict parsing."""

from datetime import datetime

import pytest

from timelog.dateformat import DateFormatError, format_datetime, is_after, parse_strict, tokenize


def test_format_time_pattern():
    """Test zero-padded hour and minute formatting."""
    assert format_datetime("HH:mm", datetime(2024, 5, 11, 9, 5)) == "09:05"


def test_format_date_pattern():
    assert format_datetime("YYYY-MM-DD", datetime(2024, 5, 11)) == "2024-05-11"


def test_format_names_and_ordinals():
    """Test weekday names, month names and ordinal days."""
    result = format_datetime("dddd, MMMM Do YYYY", datetime(2024, 5, 11))
    assert result == "Saturday, May 11th 2024"


def test_format_twelve_hour_clock():
    assert format_datetime("h:mm A", datetime(2024, 5, 11, 15, 7)) == "3:07 PM"
    assert format_datetime("hh:mm a", datetime(2024, 5, 11, 0, 30)) == "12:30 am"


def test_format_bracketed_literal():
    """Test that bracketed text is copied verbatim."""
    assert format_datetime("[Week of] YYYY", datetime(2024, 5, 11)) == "Week of 2024"


def test_empty_pattern_raises():
    with pytest.raises(DateFormatError):
        tokenize("")
    with pytest.raises(DateFormatError):
        format_datetime("", datetime(2024, 5, 11))
    with pytest.raises(DateFormatError):
        parse_strict("09:00", "")


def test_parse_strict_valid_date():
    assert parse_strict("2024-05-11", "YYYY-MM-DD") == datetime(2024, 5, 11)


def test_parse_strict_rejects_missing_zero_padding():
    """Test that fixed-width tokens require exact digit counts."""
    assert parse_strict("2024-5-11", "YYYY-MM-DD") is None


def test_parse_strict_rejects_trailing_text():
    assert parse_strict("2024-05-11 standup", "YYYY-MM-DD") is None
    assert parse_strict("2024-05-11", "YYYY-MM") is None


def test_parse_strict_rejects_impossible_dates():
    assert parse_strict("2024-02-30", "YYYY-MM-DD") is None
    assert parse_strict("25:00", "HH:mm") is None


def test_parse_strict_time_uses_reference_date():
    """Test that a pattern without date tokens lands on the reference day."""
    parsed = parse_strict("12:34", "HH:mm", now=datetime(2024, 5, 11, 8, 0))
    assert parsed == datetime(2024, 5, 11, 12, 34)


def test_parse_strict_checks_weekday_and_ordinal():
    pattern = "dddd, MMMM Do YYYY"
    assert parse_strict("Saturday, May 11th 2024", pattern) == datetime(2024, 5, 11)
    assert parse_strict("Friday, May 11th 2024", pattern) is None
    assert parse_strict("Saturday, May 11nd 2024", pattern) is None


def test_parse_strict_twelve_hour_clock():
    assert parse_strict("3:07 PM", "h:mm A", now=datetime(2024, 5, 11)) == datetime(2024, 5, 11, 15, 7)
    assert parse_strict("12:15 AM", "h:mm A", now=datetime(2024, 5, 11)) == datetime(2024, 5, 11, 0, 15)
    assert parse_strict("13:07 PM", "h:mm A") is None


def test_parse_strict_two_digit_year():
    assert parse_strict("24-05-11", "YY-MM-DD") == datetime(2024, 5, 11)
    assert parse_strict("99-05-11", "YY-MM-DD") == datetime(1999, 5, 11)


def test_is_after():
    assert is_after(datetime(2024, 5, 12), datetime(2024, 5, 11))
    assert not is_after(datetime(2024, 5, 11), datetime(2024, 5, 11))
