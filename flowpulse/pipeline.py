"""Pure pipeline orchestration for flow tables.

The pipeline is organized in several stages:

1. Parsing (text to header-keyed rows).
2. Selection (filter, pick the purpose's magnitude, rank).
3. Coordinate repair (validate and sign-correct endpoints).
4. Weighting (stroke weights over the top-N coordinate-valid slice).

Each stage takes an immutable input and returns a new sequence. Nothing
is retained between calls, so the host can rerun the whole pipeline on
every filter change.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .adapters.repair import WesternHemisphereRepair
from .domain.errors import ConfigurationError
from .domain.models import (
    DESTINATION_LAT_COLUMN,
    DESTINATION_LON_COLUMN,
    ORIGIN_LAT_COLUMN,
    ORIGIN_LON_COLUMN,
    FilterConfig,
    FlowRecord,
    FlowView,
    RawRow,
)
from .flows.selector import select_flows
from .flows.weights import WeightScale, assign_weights
from .ports.repair import CoordinateRepairPort
from .table.parser import parse_table

logger = logging.getLogger(__name__)


def repair_coordinates(
    record: FlowRecord, repair: CoordinateRepairPort
) -> FlowRecord:
    """Return the record with repaired coordinates, or none if invalid."""
    columns = record.columns
    pair = repair.repair(
        columns.get(ORIGIN_LAT_COLUMN),
        columns.get(ORIGIN_LON_COLUMN),
        columns.get(DESTINATION_LAT_COLUMN),
        columns.get(DESTINATION_LON_COLUMN),
    )
    return record.with_coordinates(pair)


def validate_top_n(top_n: int) -> int:
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n <= 0:
        raise ConfigurationError(
            f"top_n must be a positive integer, got {top_n!r}",
            setting_name="top_n",
            expected_type="int > 0",
        )
    return top_n


def build_flow_view(
    rows: Sequence[RawRow],
    filters: FilterConfig,
    top_n: int = 50,
    *,
    repair: Optional[CoordinateRepairPort] = None,
    scale: Optional[WeightScale] = None,
) -> FlowView:
    """Run selection, repair and weighting over parsed rows.

    Args:
        rows: Rows produced by ``parse_table``.
        filters: Active filter configuration.
        top_n: Size of the ranked slice considered for rendering.
        repair: Coordinate policy; western-hemisphere repair by default.
        scale: Weight range and curve; defaults to the standard scale.

    Returns:
        A FlowView with every ranked record and the weighted subset.

    Raises:
        ConfigurationError: If ``top_n`` is not a positive integer.
    """
    validate_top_n(top_n)
    repair = repair or WesternHemisphereRepair()
    scale = scale or WeightScale()

    ranked = select_flows(rows, filters)
    records = tuple(repair_coordinates(record, repair) for record in ranked)

    drawable = [record for record in records[:top_n] if record.has_coordinates]
    rendered = tuple(assign_weights(drawable, scale))

    logger.info(
        "Flow view built",
        extra={
            "rows": len(rows),
            "records": len(records),
            "rendered": len(rendered),
            "top_n": top_n,
        },
    )

    return FlowView(
        records=records,
        rendered=rendered,
        top_n=top_n,
        row_count=len(rows),
    )


def run_pipeline(
    text: str,
    filters: Optional[FilterConfig] = None,
    top_n: int = 50,
    *,
    repair: Optional[CoordinateRepairPort] = None,
    scale: Optional[WeightScale] = None,
) -> FlowView:
    """Parse ``text`` and build its flow view in one call.

    Returns an empty FlowView when the text holds no data.
    """
    rows = parse_table(text)
    return build_flow_view(
        rows,
        filters or FilterConfig(),
        top_n,
        repair=repair,
        scale=scale,
    )
