"""Immutable domain models for Flow Pulse.

All models are frozen dataclasses with slots. A pipeline run never
mutates a record; derivations such as attaching coordinates or a render
weight return a new instance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError

# A coerced table cell. The Python type is the tag: int/float for numeric
# literals, str for everything else. A header a row never reached is
# simply absent from that row's mapping.
CellValue = Union[int, float, str]
RawRow = Dict[str, CellValue]

YEAR_COLUMN = "year"
ORIGIN_NAME_COLUMN = "origin_name"
DESTINATION_NAME_COLUMN = "destination_name"
ORIGIN_LAT_COLUMN = "lat_o"
ORIGIN_LON_COLUMN = "lon_o"
DESTINATION_LAT_COLUMN = "lat_d"
DESTINATION_LON_COLUMN = "lon_d"
LEISURE_COLUMN = "total_wt_l_all"
BUSINESS_COLUMN = "total_wt_b_all"
TOTAL_COLUMN = "total_wt_t_all"

ALL_YEARS = "All"


class Purpose(Enum):
    """Trip purpose selecting which magnitude column is displayed."""

    LEISURE = "leisure"
    BUSINESS = "business"
    TOTAL = "total"

    @property
    def column(self) -> str:
        """Name of the magnitude column this purpose reads."""
        return _PURPOSE_COLUMNS[self]

    @classmethod
    def parse(cls, value: Union[str, "Purpose"]) -> "Purpose":
        """Parse a host-provided purpose, case-insensitively.

        Raises:
            ConfigurationError: If the value names no purpose.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown purpose: {value!r}",
                setting_name="purpose",
                expected_type="leisure|business|total",
                cause=e,
            )


_PURPOSE_COLUMNS = {
    Purpose.LEISURE: LEISURE_COLUMN,
    Purpose.BUSINESS: BUSINESS_COLUMN,
    Purpose.TOTAL: TOTAL_COLUMN,
}


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Filter configuration owned by the host and passed into the pipeline.

    Attributes:
        year: Exact year to keep, or None for all years
        purpose: Which magnitude becomes the display value
        origin_query: Case-insensitive substring for origin names
        destination_query: Case-insensitive substring for destination names
    """

    year: Optional[int] = None
    purpose: Purpose = Purpose.TOTAL
    origin_query: str = ""
    destination_query: str = ""

    @classmethod
    def from_values(
        cls,
        year: Union[str, int, None] = ALL_YEARS,
        purpose: Union[str, Purpose] = Purpose.TOTAL,
        origin_query: Optional[str] = "",
        destination_query: Optional[str] = "",
    ) -> "FilterConfig":
        """Build a configuration from loosely-typed host values.

        ``year`` accepts "All", None, an int or a digit string.

        Raises:
            ConfigurationError: If the year or purpose is invalid.
        """
        parsed_year: Optional[int]
        if year is None or (isinstance(year, str) and year.strip() in ("", ALL_YEARS)):
            parsed_year = None
        elif isinstance(year, bool):
            raise ConfigurationError(
                f"Invalid year: {year!r}", setting_name="year", expected_type="int"
            )
        elif isinstance(year, int):
            parsed_year = year
        else:
            try:
                parsed_year = int(str(year).strip())
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid year: {year!r}",
                    setting_name="year",
                    expected_type="'All' or an integer year",
                    cause=e,
                )

        return cls(
            year=parsed_year,
            purpose=Purpose.parse(purpose),
            origin_query=origin_query or "",
            destination_query=destination_query or "",
        )


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate values."""
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(
                f"Coordinates must be finite, got ({self.latitude}, {self.longitude})"
            )
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )

    def as_tuple(self) -> Tuple[float, float]:
        """Return ``(lat, lon)``, the order map libraries expect."""
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class CoordinatePair:
    """Validated origin and destination locations of one flow."""

    origin: GeoPoint
    destination: GeoPoint


@dataclass(frozen=True, slots=True)
class FlowRecord:
    """A typed origin-destination flow ready for ranking and display.

    Attributes:
        year: Record year, None when the cell is not an integral number
        origin_name: Origin label (not unique across years/purposes)
        destination_name: Destination label
        leisure_volume: Leisure magnitude, 0 when absent or unparseable
        business_volume: Business magnitude, 0 when absent or unparseable
        total_volume: Total magnitude, 0 when absent or unparseable
        display_value: Magnitude selected by the active purpose
        display_type: The active purpose
        coordinates: Repaired coordinates, None if repair failed
        display_weight: Stroke weight, set only inside the rendered subset
        columns: Read-only view of every parsed cell of the source row
    """

    year: Optional[int]
    origin_name: str
    destination_name: str
    leisure_volume: float
    business_volume: float
    total_volume: float
    display_value: float
    display_type: Purpose
    coordinates: Optional[CoordinatePair] = None
    display_weight: Optional[float] = None
    columns: Mapping[str, CellValue] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None

    @property
    def origin_coords(self) -> Optional[Tuple[float, float]]:
        if self.coordinates is None:
            return None
        return self.coordinates.origin.as_tuple()

    @property
    def destination_coords(self) -> Optional[Tuple[float, float]]:
        if self.coordinates is None:
            return None
        return self.coordinates.destination.as_tuple()

    def with_coordinates(self, coordinates: Optional[CoordinatePair]) -> "FlowRecord":
        """Return a copy carrying the given coordinates."""
        return replace(self, coordinates=coordinates)

    def with_weight(self, weight: float) -> "FlowRecord":
        """Return a copy carrying the given display weight."""
        return replace(self, display_weight=weight)

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation handed to rendering collaborators."""
        return {
            "year": self.year,
            "origin_name": self.origin_name,
            "destination_name": self.destination_name,
            "leisure_volume": self.leisure_volume,
            "business_volume": self.business_volume,
            "total_volume": self.total_volume,
            "display_value": self.display_value,
            "display_type": self.display_type.value,
            "origin_coords": self.origin_coords,
            "destination_coords": self.destination_coords,
            "display_weight": self.display_weight,
        }


@dataclass(frozen=True, slots=True)
class FlowView:
    """Output of one pipeline run.

    Attributes:
        records: Every filtered record, ranked by display value
        rendered: Coordinate-valid records of the top-N slice, weighted
        top_n: Size of the slice the rendered subset was drawn from
        row_count: Number of parsed input rows
    """

    records: Tuple[FlowRecord, ...] = ()
    rendered: Tuple[FlowRecord, ...] = ()
    top_n: int = 0
    row_count: int = 0

    @property
    def total_volume(self) -> float:
        """Sum of display values over all filtered records."""
        return sum(record.display_value for record in self.records)

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0


@dataclass(frozen=True, slots=True)
class FlowPoint:
    """A distinct flow endpoint drawn as a marker."""

    name: str
    coords: Tuple[float, float]


@dataclass(frozen=True, slots=True)
class RouteBar:
    """One bar of the busiest-routes chart."""

    label: str
    value: float
