"""Parsing of delimited flow tables.

The first non-blank line is the header. Data lines are scanned with a
quote-aware tokenizer so commas inside double quotes stay part of the
field; quoted newlines are not supported.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from ..domain.models import RawRow
from .coercion import coerce_value

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")

DELIMITER = ","
QUOTE = '"'


def split_lines(text: str) -> List[str]:
    """Split text into lines, dropping lines that are blank."""
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def parse_header(line: str) -> List[str]:
    """Split the header line into stripped column names.

    The header is split on every comma; quoting is not honoured here.
    """
    return [name.strip() for name in line.split(DELIMITER)]


def parse_line(line: str, headers: Sequence[str]) -> RawRow:
    """Tokenize one data line into a row keyed by ``headers``.

    Fields beyond the header width are dropped. Headers past the last
    field are left out of the row entirely.
    """
    row: RawRow = {}
    buffer: List[str] = []
    within_quotes = False
    column = 0

    for char in line:
        if char == QUOTE:
            within_quotes = not within_quotes
        elif char == DELIMITER and not within_quotes:
            if column < len(headers):
                row[headers[column]] = coerce_value("".join(buffer))
            column += 1
            buffer = []
        else:
            buffer.append(char)

    if column < len(headers):
        row[headers[column]] = coerce_value("".join(buffer))

    return row


def parse_table(text: str) -> List[RawRow]:
    """Parse delimited text into header-keyed rows.

    Args:
        text: Whole table as text.

    Returns:
        One row per non-blank data line, in input order. Empty when the
        text holds no non-blank line.
    """
    lines = split_lines(text)
    if not lines:
        logger.debug("No non-blank lines in input")
        return []

    headers = parse_header(lines[0])
    rows = [parse_line(line, headers) for line in lines[1:]]

    logger.debug(
        "Parsed table",
        extra={"columns": len(headers), "rows": len(rows)},
    )
    return rows
