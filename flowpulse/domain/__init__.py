"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    EmptyTableError,
    FlowPulseError,
    RenderingError,
    SourceUnavailableError,
)
from .models import (
    ALL_YEARS,
    CellValue,
    CoordinatePair,
    FilterConfig,
    FlowPoint,
    FlowRecord,
    FlowView,
    GeoPoint,
    Purpose,
    RawRow,
    RouteBar,
)

__all__ = [
    # Models
    "ALL_YEARS",
    "CellValue",
    "RawRow",
    "Purpose",
    "FilterConfig",
    "GeoPoint",
    "CoordinatePair",
    "FlowRecord",
    "FlowView",
    "FlowPoint",
    "RouteBar",
    # Errors
    "FlowPulseError",
    "ConfigurationError",
    "SourceUnavailableError",
    "EmptyTableError",
    "RenderingError",
]
