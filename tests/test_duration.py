"""Tests for duration formatting and parsing."""

from datetime import timedelta

import pytest

from tempokit import (
    DAY,
    HOUR,
    MINUTE,
    SECOND,
    FormatError,
    ParseError,
    format_duration,
    parse_duration,
)


def test_format_duration_standard_units():
    """Test that whole units are emitted largest first without separators."""
    assert format_duration(SECOND * 5 + 500) == "5s500ms"
    assert format_duration(HOUR + MINUTE * 30) == "1h30m"
    assert format_duration(DAY * 2 + HOUR * 3 + SECOND) == "2d3h1s"


def test_format_duration_zero():
    """Test that zero renders as the zero-millisecond literal."""
    assert format_duration(0) == "0ms"
    assert format_duration(0.0) == "0ms"


def test_format_duration_below_threshold():
    """Test that magnitudes under 0.001ms collapse to zero."""
    assert format_duration(0.0001) == "0ms"
    assert format_duration(0.000999) == "0ms"


def test_format_duration_negative():
    """Test that negative values get a leading minus sign."""
    assert format_duration(-5000) == "-5s"
    assert format_duration(-(HOUR + MINUTE * 30)) == "-1h30m"
    assert format_duration(-0.5) == "-" + format_duration(0.5)


def test_format_duration_fractional_milliseconds():
    """Test that leftover milliseconds keep up to three decimals."""
    assert format_duration(0.5) == "0.5ms"
    assert format_duration(1.25) == "1.25ms"
    assert format_duration(SECOND + 0.001) == "1s0.001ms"
    assert format_duration(12.3456) == "12.346ms"


def test_format_duration_float_noise():
    """Test that binary float noise does not produce extra terms."""
    assert format_duration(1.9999999999) == "2ms"
    assert format_duration(MINUTE - 1e-9) == "1m"
    assert format_duration(0.1 + 0.2) == "0.3ms"


def test_format_duration_skips_zero_units():
    """Test that empty buckets between nonzero ones are omitted."""
    assert format_duration(DAY + SECOND) == "1d1s"
    assert format_duration(HOUR) == "1h"


def test_format_duration_accepts_timedelta():
    """Test that timedelta values are converted to milliseconds."""
    assert format_duration(timedelta(hours=1, minutes=30)) == "1h30m"
    assert format_duration(timedelta(milliseconds=1500)) == "1s500ms"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_format_duration_rejects_non_finite(value):
    """Test that NaN and infinities raise ValueError."""
    with pytest.raises(ValueError, match="non-finite"):
        format_duration(value)


def test_parse_duration_basic():
    """Test parsing of human-readable strings into milliseconds."""
    assert parse_duration("1h 30m") == 5400000
    assert parse_duration("500ms") == 500
    assert parse_duration("1.5s") == 1500
    assert parse_duration("2d") == 2 * DAY


def test_parse_duration_ignores_whitespace_and_case():
    """Test that whitespace anywhere and unit case do not matter."""
    assert parse_duration("  1 h\t30 M ") == 5400000
    assert parse_duration("1H30M") == 5400000
    assert parse_duration("500MS") == 500


def test_parse_duration_fraction_and_sign():
    """Test fractional and signed numbers."""
    assert parse_duration(".5s") == 500
    assert parse_duration("-5s") == -5000
    assert parse_duration("+2m") == 2 * MINUTE
    assert parse_duration("1.1s") == 1100
    assert parse_duration("0.5ms") == 0.5


def test_parse_duration_return_types():
    """Test that whole totals are ints and fractional totals are floats."""
    assert isinstance(parse_duration("1.5s"), int)
    assert isinstance(parse_duration("0.25ms"), float)


def test_parse_duration_ms_is_not_minutes():
    """Test that 'ms' is read as milliseconds, not minutes plus seconds."""
    assert parse_duration("5ms") == 5
    assert parse_duration("5m5s") == 5 * MINUTE + 5 * SECOND


@pytest.mark.parametrize("text", ["invalid", "", "   ", "100xyz", "abc"])
def test_parse_duration_invalid_raises(text):
    """Test that invalid strings raise FormatError in exception mode."""
    with pytest.raises(FormatError):
        parse_duration(text)


@pytest.mark.parametrize("text", ["invalid", "", "100xyz", "abc"])
def test_parse_duration_invalid_silent(text):
    """Test that invalid strings return None in silent mode."""
    assert parse_duration(text, silent=True) is None


@pytest.mark.parametrize(
    "text", ["x5s", "5s x", "5s10", "1h..30m", "5", "\u0661s", "\uff15s", "1h\u0663m"]
)
def test_parse_duration_rejects_unmatched_text(text):
    """Test that any uncovered character invalidates the whole string."""
    assert parse_duration(text, silent=True) is None
    with pytest.raises(FormatError, match="Invalid duration format"):
        parse_duration(text)


def test_parse_duration_error_details():
    """Test that the error carries the input and is a ValueError."""
    with pytest.raises(ParseError) as exc_info:
        parse_duration("100xyz")

    assert exc_info.value.text == "100xyz"
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.parametrize(
    "ms",
    [0, 1, 500, 1500, 5400000, 90061001, 0.5, 1.25, 12.345, DAY * 400 + 7],
)
def test_duration_round_trip(ms):
    """Test that parsing a formatted duration gives back the value."""
    assert parse_duration(format_duration(ms)) == round(ms, 3)
