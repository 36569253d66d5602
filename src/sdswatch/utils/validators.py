"""Input validators for SDS Watch.

Values typed into the UI arrive as text. These helpers turn them into numbers
and return None for anything that is not usable, so callers can ignore the
input and keep their previous state.
"""

from __future__ import annotations

import math
from typing import Any

__all__ = ["parse_positive_int", "parse_positive_number"]


def parse_positive_number(value: Any) -> float | None:
    """Parse a strictly positive, finite number.

    Args:
        value: Number or text from user input

    Returns:
        The parsed number, or None if the value is not numeric, not finite, or <= 0

    Examples:
        >>> parse_positive_number("5000")
        5000.0
        >>> parse_positive_number("test") is None
        True
        >>> parse_positive_number(-5) is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_positive_int(value: Any) -> int | None:
    """Parse a strictly positive whole number.

    Fractional input is truncated; anything below 1 after truncation is rejected.

    Args:
        value: Number or text from user input

    Returns:
        The parsed integer, or None if not usable
    """
    number = parse_positive_number(value)
    if number is None:
        return None
    result = int(number)
    return result if result > 0 else None
