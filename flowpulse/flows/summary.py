"""Derived views over ranked flows for charts, tables and markers."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..domain.models import FlowPoint, FlowRecord, RouteBar

ROUTE_ARROW = " → "


def short_name(name: str) -> str:
    """Place name up to its first comma ("Boston, MA" -> "Boston")."""
    return name.split(",")[0]


def route_label(record: FlowRecord) -> str:
    return f"{short_name(record.origin_name)}{ROUTE_ARROW}{short_name(record.destination_name)}"


def top_routes(records: Sequence[FlowRecord], limit: int = 15) -> List[RouteBar]:
    """Bars of the busiest routes, in ranking order."""
    return [
        RouteBar(label=route_label(record), value=record.display_value)
        for record in records[:limit]
    ]


def unique_points(records: Iterable[FlowRecord]) -> List[FlowPoint]:
    """Distinct origin and destination endpoints of the given flows.

    Origins and destinations are keyed separately by name; a later
    record's coordinates replace an earlier one's for the same key.
    """
    points: Dict[str, FlowPoint] = {}
    for record in records:
        if record.origin_coords is not None:
            points[f"o:{record.origin_name}"] = FlowPoint(
                record.origin_name, record.origin_coords
            )
        if record.destination_coords is not None:
            points[f"d:{record.destination_name}"] = FlowPoint(
                record.destination_name, record.destination_coords
            )
    return list(points.values())


def format_volume(value: float) -> str:
    """Format a volume with thousands separators and no decimals."""
    return f"{value:,.0f}"
