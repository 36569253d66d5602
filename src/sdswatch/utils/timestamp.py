"""Timestamp parsing utilities.

Index values of date/time keyed streams arrive as ISO 8601 strings. The
functions here raise ValueError for invalid input and do not accept None.
"""

from __future__ import annotations

from datetime import datetime, timezone


def parse_to_datetime(ts_value: str | int | float | datetime) -> datetime:
    """Parse an index value to a UTC datetime.

    Args:
        ts_value: Timestamp in one of:
            - datetime: returned as-is (UTC ensured)
            - int/float: Unix timestamp in milliseconds
            - str: ISO 8601 format string, with up to 7 fractional digits

    Returns:
        datetime object in UTC timezone.

    Raises:
        ValueError: If input is None, empty string, or invalid format.
    """
    if ts_value is None:
        raise ValueError("Timestamp cannot be None")

    if isinstance(ts_value, datetime):
        if ts_value.tzinfo is None:
            return ts_value.replace(tzinfo=timezone.utc)
        return ts_value

    if isinstance(ts_value, bool):
        raise ValueError("Boolean is not a timestamp")

    if isinstance(ts_value, (int, float)):
        return datetime.fromtimestamp(ts_value / 1000, tz=timezone.utc)

    if isinstance(ts_value, str):
        ts_str = ts_value.strip()
        if not ts_str:
            raise ValueError("Timestamp string cannot be empty")

        # Handle ISO 8601 format with 'Z' suffix
        if ts_str.endswith("Z"):
            ts_str = ts_str[:-1] + "+00:00"

        ts_str = _normalize_fraction(ts_str)

        try:
            parsed = datetime.fromisoformat(ts_str)
        except ValueError as exc:
            raise ValueError("Invalid timestamp format. Expected ISO 8601 string or UNIX milliseconds.") from exc

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    raise ValueError(f"Unsupported timestamp type: {type(ts_value)}. Expected datetime, int, float, or ISO 8601 string.")


def _normalize_fraction(ts_str: str) -> str:
    """Pad or cut fractional seconds to exactly six digits.

    .NET serializes DateTime with up to 7 fractional digits, which datetime
    cannot hold, and older fromisoformat only accepts 3 or 6 digits.
    """
    dot = ts_str.find(".")
    if dot == -1:
        return ts_str
    end = dot + 1
    while end < len(ts_str) and ts_str[end].isdigit():
        end += 1
    digits = ts_str[dot + 1 : end]
    if not digits:
        return ts_str
    return ts_str[: dot + 1] + digits[:6].ljust(6, "0") + ts_str[end:]
