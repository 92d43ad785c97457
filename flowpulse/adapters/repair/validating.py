"""Coordinate validation without sign repair.

Suitable for datasets whose longitudes already carry their sign.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import CellValue, CoordinatePair, GeoPoint
from ...table.coercion import parse_number

QUOTE = '"'


def parse_coordinate(value: Optional[CellValue]) -> Optional[float]:
    """Parse a coordinate cell permissively.

    Strings are stripped of whitespace and surrounding double quotes
    before parsing. Quotes inside the value are left in place, so a cell
    such as ``4"2.1`` is invalid. Missing, empty, garbled and non-finite
    values give None.
    """
    if isinstance(value, str):
        value = value.strip().strip(QUOTE)
    return parse_number(value)


@dataclass
class ValidatingRepair:
    """Validate the four coordinate cells, all-or-nothing.

    This adapter implements CoordinateRepairPort. Subclasses adjust
    parsed longitudes through ``fix_longitude``.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def fix_longitude(self, lon: float) -> float:
        return lon

    def repair(
        self,
        lat_o: Optional[CellValue],
        lon_o: Optional[CellValue],
        lat_d: Optional[CellValue],
        lon_d: Optional[CellValue],
    ) -> Optional[CoordinatePair]:
        """Validate and repair one record's coordinates.

        Returns:
            The validated pair, or None if any cell is unusable.
        """
        values = [parse_coordinate(v) for v in (lat_o, lon_o, lat_d, lon_d)]
        if any(v is None for v in values):
            self._logger.debug(
                "Dropping coordinates: unparseable cell",
                extra={"cells": [lat_o, lon_o, lat_d, lon_d]},
            )
            return None

        lat_o_f, lon_o_f, lat_d_f, lon_d_f = values
        try:
            return CoordinatePair(
                origin=GeoPoint(lat_o_f, self.fix_longitude(lon_o_f)),
                destination=GeoPoint(lat_d_f, self.fix_longitude(lon_d_f)),
            )
        except ValueError as e:
            self._logger.debug(
                "Dropping coordinates: out of range",
                extra={"error": str(e)},
            )
            return None
