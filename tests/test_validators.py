"""Tests for input validators."""

import pytest

from sdswatch.utils.validators import parse_positive_int, parse_positive_number


class TestParsePositiveNumber:
    """Tests for parse_positive_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("5000", 5000.0),
            (" 250 ", 250.0),
            ("0.5", 0.5),
            (3000, 3000.0),
            (12.5, 12.5),
        ],
    )
    def test_accepts_positive_numbers(self, value, expected) -> None:
        assert parse_positive_number(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["test", "", "  ", "0", "-5", 0, -1, float("nan"), float("inf"), "inf", None, True, [1]],
    )
    def test_rejects_unusable_values(self, value) -> None:
        assert parse_positive_number(value) is None


class TestParsePositiveInt:
    """Tests for parse_positive_int."""

    def test_parses_text(self) -> None:
        assert parse_positive_int("100") == 100

    def test_truncates_fraction(self) -> None:
        assert parse_positive_int("12.9") == 12

    def test_rejects_fraction_below_one(self) -> None:
        assert parse_positive_int("0.5") is None

    def test_rejects_text(self) -> None:
        assert parse_positive_int("abc") is None
