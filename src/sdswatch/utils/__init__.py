"""Utility modules for sdswatch."""

from sdswatch.utils.timestamp import parse_to_datetime
from sdswatch.utils.validators import parse_positive_int, parse_positive_number

__all__ = [
    "parse_positive_int",
    "parse_positive_number",
    "parse_to_datetime",
]
