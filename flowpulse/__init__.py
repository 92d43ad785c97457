"""Flow Pulse - ingestion and normalization of travel-flow tables.

Turns a delimited table of origin-destination flows into a ranked
sequence of flow records with validated coordinates and perceptual
stroke weights, ready for maps, charts and tables.
"""

from .domain import FilterConfig, FlowRecord, FlowView, Purpose
from .pipeline import build_flow_view, run_pipeline
from .table import parse_table

__all__ = [
    "FilterConfig",
    "FlowRecord",
    "FlowView",
    "Purpose",
    "build_flow_view",
    "parse_table",
    "run_pipeline",
]
