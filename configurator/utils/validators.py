"""
Input validation for wizard text fields.
"""

import re
from typing import Union

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

NOT_A_NUMBER = "must be a number"


def _parse_int(text: str) -> int:
    """Parse a signed base-10 integer that fits in 64 bits.

    Stricter than int(): no surrounding whitespace, no underscores.
    """
    if not isinstance(text, str) or not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def validate_is_int(text: str) -> Union[bool, str]:
    """questionary validator: True if text is an integer, else the error message."""
    try:
        _parse_int(text)
    except ValueError:
        return NOT_A_NUMBER
    return True


def parse_int_or_zero(text: str) -> int:
    """Convert a validated field back to an int, treating anything unparseable as 0."""
    try:
        return _parse_int(text)
    except ValueError:
        return 0
