"""
Fixed-point amount helpers.

The indexer reports every amount as a base-10 integer string scaled by
10**18. Display code only ever needs whole units, so the fractional part is
truncated.
"""
import logging
import re
from typing import Any

from chainscope.core.exceptions import FormatError

logger = logging.getLogger(__name__)

DECIMALS = 18

_INTEGER = re.compile(r"[0-9]+")


def parse_amount(value: Any) -> int:
    """
    Parse an unscaled amount into an int.

    :raises FormatError: for None, empty, signed, fractional or non-numeric input.
    """
    if isinstance(value, bool):
        raise FormatError(f"Amount must not be a boolean: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise FormatError(f"Amount must not be negative: {value}")
        return value
    if not isinstance(value, str):
        raise FormatError(f"Amount must be a string, got {type(value).__name__}")

    text = value.strip()
    if not _INTEGER.fullmatch(text):
        raise FormatError(f"Amount is not a non-negative integer: {value!r}")
    return int(text)


def sanitize_amount(value: Any) -> str:
    """Canonical unscaled amount string, or "0" when the input is unusable."""
    try:
        return str(parse_amount(value))
    except FormatError:
        return "0"


def to_number(value: Any, decimals: int = DECIMALS) -> int:
    """Whole units as a native int (chart values)."""
    try:
        amount = parse_amount(value)
    except FormatError as e:
        logger.debug(f"Treating malformed amount as zero: {e}")
        return 0
    return amount // 10 ** decimals


def to_whole_units(value: Any, decimals: int = DECIMALS) -> str:
    """
    Whole units as a decimal string with no grouping.

    >>> to_whole_units("5000000000000000000")
    '5'
    """
    return str(to_number(value, decimals))
