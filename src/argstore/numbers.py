# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Permissive numeric prefix parsing.

Both parsers consume as much of a leading number as they can and ignore
the rest of the string. Text without a numeric prefix parses to zero.
The second element of each returned tuple tells whether the whole string
(modulo surrounding whitespace) was consumed.
"""

import re

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
# No integer with more significant digits fits into INT_MIN..INT_MAX.
INT_DIGITS = 10

# str.strip() and str.isdigit() are Unicode aware, C's isspace()/isdigit() are not.
_WHITESPACE = " \t\n\v\f\r"

_INT_PREFIX = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"""
    [+-]?
    (?:
        (?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
        | infinity | inf | nan
    )
    """,
    re.ASCII | re.IGNORECASE | re.VERBOSE,
)


def is_ascii_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def starts_with_digit(value: str) -> bool:
    return is_ascii_digit(value[:1])


def parse_int_prefix(value: str) -> tuple[int, bool]:
    """Parses the leading integer of ``value``.

    Values outside the signed 32 bit range yield 0.
    """
    text = value.lstrip(_WHITESPACE)
    if (m := _INT_PREFIX.match(text)) is None:
        return 0, False

    number = m.group(0)
    digits = number.lstrip("+-").lstrip("0")
    if len(digits) > INT_DIGITS:
        return 0, False

    result = int(digits or "0")
    if number.startswith("-"):
        result = -result
    if not INT_MIN <= result <= INT_MAX:
        return 0, False
    return result, m.end() == len(text.rstrip(_WHITESPACE))


def parse_float_prefix(value: str) -> tuple[float, bool]:
    """Parses the longest leading floating point number of ``value``."""
    text = value.lstrip(_WHITESPACE)
    if (m := _FLOAT_PREFIX.match(text)) is None:
        return 0.0, False
    return float(m.group(0)), m.end() == len(text.rstrip(_WHITESPACE))
