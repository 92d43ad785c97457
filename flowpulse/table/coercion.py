"""Per-cell coercion of raw field text into typed values.

The numeric check runs before the quote strip. Swapping the two steps
would turn ``'"42"'`` into ``42`` when coerced directly, which changes
output for existing files, so the order is kept as is.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Union

from ..domain.models import CellValue

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_LITERAL = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}


def parse_literal(text: str) -> Optional[Union[int, float]]:
    """Parse ``text`` as a finite numeric literal.

    Accepts signed decimals with optional fraction and exponent, and
    unsigned ``0x``/``0o``/``0b`` literals. Integral decimals without a
    fraction or exponent come back as ``int``.

    Returns:
        The number, or None when the text is empty, not a literal, or
        overflows to infinity.
    """
    s = text.strip()
    if not s:
        return None

    if _RADIX_LITERAL.fullmatch(s):
        number = int(s[2:], _RADIX_BASES[s[1].lower()])
        return number if _fits_float(number) else None

    if not _DECIMAL_LITERAL.fullmatch(s):
        return None

    # Digit strings past float range stay text; int() would also hit
    # the interpreter's digit limit on very long ones.
    value = float(s)
    if not math.isfinite(value):
        return None
    if "." not in s and "e" not in s and "E" not in s:
        return int(s)
    return value


def _fits_float(number: int) -> bool:
    try:
        float(number)
    except OverflowError:
        return False
    return True


def parse_number(value: Optional[CellValue]) -> Optional[float]:
    """Read a cell as a finite float, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    parsed = parse_literal(value)
    return None if parsed is None else float(parsed)


def coerce_value(raw: str) -> CellValue:
    """Coerce one raw field into a number or a string.

    Args:
        raw: Field text as accumulated by the parser.

    Returns:
        The number when the trimmed text is a finite numeric literal;
        otherwise the trimmed text with one outer pair of double quotes
        removed if present. An empty field stays ``""``.
    """
    value = raw.strip()

    number = parse_literal(value)
    if number is not None:
        return number

    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return value
