"""Coordinate repair adapters - Implementations of CoordinateRepairPort.

Available implementations:
- WesternHemisphereRepair: Validation plus longitude sign repair (default)
- ValidatingRepair: Validation only
"""

from .validating import ValidatingRepair, parse_coordinate
from .western_hemisphere import WesternHemisphereRepair, fix_longitude

REPAIR_POLICIES = {
    "western_hemisphere": WesternHemisphereRepair,
    "validate_only": ValidatingRepair,
}

__all__ = [
    "REPAIR_POLICIES",
    "ValidatingRepair",
    "WesternHemisphereRepair",
    "fix_longitude",
    "parse_coordinate",
]
