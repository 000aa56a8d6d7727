"""Tests for number parsing utilities."""

import pytest

from screener_engine.utils.number_parsing import format_number, parse_number, stringify_answer


class TestParseNumber:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (145, 145.0),
            (6.5, 6.5),
            ("145", 145.0),
            (" 145 ", 145.0),
            ("-3.25", -3.25),
            ("1e2", 100.0),
            (0, 0.0),
        ],
    )
    def test_numbers(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "12abc", True, False, "nan", "inf", float("nan"), [1], {"a": 1}],
    )
    def test_not_numbers(self, value):
        assert parse_number(value) is None


class TestFormatting:

    def test_format_number(self):
        assert format_number(300) == "300"
        assert format_number(300.0) == "300"
        assert format_number(0.0) == "0"
        assert format_number(4.5) == "4.5"

    def test_stringify_answer(self):
        assert stringify_answer(True) == "true"
        assert stringify_answer(False) == "false"
        assert stringify_answer(2.0) == "2"
        assert stringify_answer(7) == "7"
        assert stringify_answer("never") == "never"
