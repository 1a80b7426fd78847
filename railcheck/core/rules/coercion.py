"""
Loose value coercion shared by the numeric rules.

Row values arrive as whatever the entry form or the persisted record holds:
numbers, numeric strings, free text, or nothing at all.
"""

import math
import re
from typing import Any

# Decimal literal as accepted by a generic numeric parse: no underscores,
# no "nan"/"inf" spellings, ASCII digits only.
_DECIMAL_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def is_empty(value: Any) -> bool:
    """Return True for values that count as "not filled in" (None, "" or whitespace only)."""
    return value is None or (isinstance(value, str) and not value.strip())


def to_number(value: Any) -> float:
    """
    Coerce a row value to a float.

    Numbers pass through (booleans count as 0/1), strings are parsed after
    stripping whitespace, a blank string is 0. Anything that cannot be
    parsed yields NaN rather than raising.

    Examples:
        >>> to_number("6.5")
        6.5
        >>> to_number("0x10")
        16.0
        >>> math.isnan(to_number("abc"))
        True
    """
    if isinstance(value, bool):
        return float(value)

    if isinstance(value, int | float):
        return float(value)

    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if text == "":
        return 0.0

    if text in _INFINITY:
        return _INFINITY[text]

    prefix = text[:2].lower()
    if prefix in _RADIX_PREFIXES:
        digits = text[2:]
        if not (digits.isascii() and digits.isalnum()):
            return math.nan
        try:
            return float(int(digits, _RADIX_PREFIXES[prefix]))
        except ValueError:
            return math.nan

    if not _DECIMAL_RE.match(text):
        return math.nan

    return float(text)


def is_number(value: float) -> bool:
    return not math.isnan(value)


def format_number(value: float) -> str:
    """Render a number the way it reads in a message ("139", not "139.0")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def type_name(value: Any) -> str:
    """Name the runtime kind of a row value: number, string, boolean or object."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"
