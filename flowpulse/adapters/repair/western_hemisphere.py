"""Longitude sign repair for western-hemisphere datasets.

Some source files record western longitudes without their minus sign.
Every positive longitude is negated; magnitude is not checked.
"""

from __future__ import annotations

from dataclasses import dataclass

from .validating import ValidatingRepair


def fix_longitude(lon: float) -> float:
    """Negate a positive longitude, leave others unchanged."""
    return -lon if lon > 0 else lon


@dataclass
class WesternHemisphereRepair(ValidatingRepair):
    """Validation plus unconditional longitude sign repair."""

    def fix_longitude(self, lon: float) -> float:
        return fix_longitude(lon)
