"""Flow selection, weighting and summaries."""

from .selector import select_flows, to_flow_record
from .summary import format_volume, top_routes, unique_points
from .weights import WeightScale, assign_weights

__all__ = [
    "select_flows",
    "to_flow_record",
    "assign_weights",
    "WeightScale",
    "top_routes",
    "unique_points",
    "format_volume",
]
