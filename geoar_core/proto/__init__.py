"""
Protocol Module: Value types exchanged between the core and its host.

- Geodetic and local coordinates, location fixes
- Placement decisions (Place / Skip)
- Diagnostic records and tracking state
"""

from .geo_coordinate import (
    GeoCoordinate,
    LocalOffset,
    LocationFix,
)
from .placement_decision import (
    PlacementDecision,
    SkipReason,
)
from .diagnostics import (
    DiagnosticRecord,
    TrackingState,
)

__all__ = [
    'GeoCoordinate',
    'LocalOffset',
    'LocationFix',
    'PlacementDecision',
    'SkipReason',
    'DiagnosticRecord',
    'TrackingState',
]
