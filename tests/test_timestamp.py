"""Tests for timestamp parsing utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from sdswatch.utils.timestamp import parse_to_datetime


class TestParseToDatetime:
    """Tests for parse_to_datetime function."""

    def test_datetime_input_returns_as_is(self) -> None:
        """datetime input should be returned as-is if timezone-aware."""
        dt = datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)
        assert parse_to_datetime(dt) == dt

    def test_datetime_naive_gets_utc(self) -> None:
        """Naive datetime should get UTC timezone."""
        result = parse_to_datetime(datetime(2024, 1, 15, 12, 30, 45))
        assert result.tzinfo == timezone.utc
        assert result.day == 15

    def test_int_unix_ms(self) -> None:
        """Integer should be treated as UNIX milliseconds."""
        result = parse_to_datetime(1705321845123)
        assert result == datetime(2024, 1, 15, 12, 30, 45, 123000, tzinfo=timezone.utc)

    def test_sds_string_with_z_suffix(self) -> None:
        """SDS DateTime strings end with Z and are parsed as UTC."""
        result = parse_to_datetime("2024-01-15T12:30:45Z")
        assert result == datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

    def test_seven_fractional_digits(self) -> None:
        """.NET 100ns precision is cut to microseconds."""
        result = parse_to_datetime("2024-01-15T12:30:45.1234567Z")
        assert result.microsecond == 123456

    def test_short_fraction(self) -> None:
        """Fractions shorter than microseconds are padded."""
        result = parse_to_datetime("2024-01-15T12:30:45.5Z")
        assert result.microsecond == 500000

    def test_offset_is_converted_to_utc(self) -> None:
        """DateTimeOffset values are normalized to UTC."""
        result = parse_to_datetime("2024-01-15T14:30:45.25+02:00")
        assert result == datetime(2024, 1, 15, 12, 30, 45, 250000, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    def test_naive_string_gets_utc(self) -> None:
        result = parse_to_datetime("2024-01-15T12:30:45")
        assert result.tzinfo == timezone.utc

    def test_none_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot be None"):
            parse_to_datetime(None)  # type: ignore[arg-type]

    def test_empty_string_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            parse_to_datetime("   ")

    def test_bool_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_to_datetime(True)

    def test_invalid_string_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid timestamp format"):
            parse_to_datetime("last")

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported timestamp type"):
            parse_to_datetime([2024])  # type: ignore[arg-type]
