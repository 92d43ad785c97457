"""Filtering and ranking of parsed rows into flow records."""

from __future__ import annotations

import logging
from operator import attrgetter
from types import MappingProxyType
from typing import Iterable, List, Optional

from ..domain.models import (
    BUSINESS_COLUMN,
    DESTINATION_NAME_COLUMN,
    LEISURE_COLUMN,
    ORIGIN_NAME_COLUMN,
    TOTAL_COLUMN,
    YEAR_COLUMN,
    CellValue,
    FilterConfig,
    FlowRecord,
    Purpose,
    RawRow,
)
from ..table.coercion import parse_number

logger = logging.getLogger(__name__)


def _magnitude(value: Optional[CellValue]) -> float:
    number = parse_number(value)
    return 0.0 if number is None else number


def _year(value: Optional[CellValue]) -> Optional[int]:
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _name(value: Optional[CellValue]) -> str:
    if value is None:
        return ""
    return str(value)


def to_flow_record(row: RawRow, purpose: Purpose) -> FlowRecord:
    """Build the flow record of one row for the given purpose."""
    return FlowRecord(
        year=_year(row.get(YEAR_COLUMN)),
        origin_name=_name(row.get(ORIGIN_NAME_COLUMN)),
        destination_name=_name(row.get(DESTINATION_NAME_COLUMN)),
        leisure_volume=_magnitude(row.get(LEISURE_COLUMN)),
        business_volume=_magnitude(row.get(BUSINESS_COLUMN)),
        total_volume=_magnitude(row.get(TOTAL_COLUMN)),
        display_value=_magnitude(row.get(purpose.column)),
        display_type=purpose,
        columns=MappingProxyType(dict(row)),
    )


def _name_matches(name: str, query: str) -> bool:
    # Blank names are not filtered out.
    if not query or not name:
        return True
    return query.lower() in name.lower()


def matches(record: FlowRecord, filters: FilterConfig) -> bool:
    """Check a record against the year and name filters."""
    if filters.year is not None and record.year != filters.year:
        return False
    if not _name_matches(record.origin_name, filters.origin_query):
        return False
    return _name_matches(record.destination_name, filters.destination_query)


def select_flows(rows: Iterable[RawRow], filters: FilterConfig) -> List[FlowRecord]:
    """Filter rows and rank them by the purpose's magnitude.

    Args:
        rows: Parsed rows in input order.
        filters: Active filter configuration.

    Returns:
        Records with a positive display value, sorted descending. Equal
        values keep their input order.
    """
    selected: List[FlowRecord] = []
    seen = 0
    for row in rows:
        seen += 1
        record = to_flow_record(row, filters.purpose)
        if not matches(record, filters):
            continue
        if record.display_value <= 0:
            continue
        selected.append(record)

    ranked = sorted(selected, key=attrgetter("display_value"), reverse=True)
    logger.debug(
        "Selected flows",
        extra={
            "rows": seen,
            "selected": len(ranked),
            "purpose": filters.purpose.value,
        },
    )
    return ranked
