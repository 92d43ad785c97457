"""Coordinate repair port - Validation and correction of flow endpoints.

The longitude sign rule is specific to the dataset, so it lives behind
this protocol and can be swapped per deployment without touching the
parser or the selector.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import CellValue, CoordinatePair


class CoordinateRepairPort(Protocol):
    """Port for coordinate validation and repair.

    Implementations:
    - adapters/repair/western_hemisphere.py (WesternHemisphereRepair)
    - adapters/repair/validating.py (ValidatingRepair)
    """

    def repair(
        self,
        lat_o: Optional[CellValue],
        lon_o: Optional[CellValue],
        lat_d: Optional[CellValue],
        lon_d: Optional[CellValue],
    ) -> Optional[CoordinatePair]:
        """Validate and repair the four coordinate cells of a record.

        Args:
            lat_o: Origin latitude cell (None when missing).
            lon_o: Origin longitude cell.
            lat_d: Destination latitude cell.
            lon_d: Destination longitude cell.

        Returns:
            The validated pair, or None if any of the four cells is not
            a usable finite coordinate.
        """
        ...
