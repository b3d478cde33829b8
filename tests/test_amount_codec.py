"""
Tests for the fixed-point amount codec.
"""
import pytest

from chainscope.core.exceptions import FormatError
from chainscope.core.use_cases.amount_codec import parse_amount, sanitize_amount, to_number, to_whole_units


@pytest.mark.parametrize(
    "raw",
    ["0", "1", "999999999999999999", "1000000000000000000", "5000000000000000000",
     "1999999999999999999", "123456789012345678901234567890"],
)
def test_whole_units_truncates(raw):
    assert to_whole_units(raw) == str(int(raw) // 10 ** 18)


def test_stake_amount_scales_to_five():
    assert to_whole_units("5000000000000000000") == "5"


def test_large_amounts_are_not_grouped():
    assert to_whole_units("1234567000000000000000000") == "1234567"


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12.5", "-1000000000000000000", "0x10", "1e18", None, [], {}])
def test_malformed_amounts_are_zero(raw):
    assert to_whole_units(raw) == "0"
    assert to_number(raw) == 0


def test_parse_amount_raises_format_error():
    with pytest.raises(FormatError):
        parse_amount("not-a-number")
    with pytest.raises(FormatError):
        parse_amount(-5)
    with pytest.raises(FormatError):
        parse_amount(True)


def test_parse_amount_accepts_ints_and_padding():
    assert parse_amount(42) == 42
    assert parse_amount(" 007 ") == 7


def test_sanitize_amount_canonical_form():
    assert sanitize_amount("0005") == "5"
    assert sanitize_amount(None) == "0"
    assert sanitize_amount("-3") == "0"


def test_to_number_beyond_float_precision_is_exact():
    raw = str((2 ** 60 + 1) * 10 ** 18)
    assert to_number(raw) == 2 ** 60 + 1


def test_custom_decimals():
    assert to_whole_units("12345", decimals=2) == "123"
