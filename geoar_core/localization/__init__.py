"""
Localization Module: geodetic transforms, origin fixing, fix quality.

Key pieces:
- geo_transform: geodetic -> local tangent-plane offset, bearing, distance
- OriginTracker: first-fix-wins AR-world origin
- FixQuality: accuracy classification and gating for location fixes
"""

from .geo_transform import (
    EARTH_RADIUS_M,
    MEAN_EARTH_RADIUS_M,
    convert_to_local_offset,
    local_offset_to_geo,
    planar_distance,
    bearing_to,
    distance_between,
)
from .origin_tracker import OriginTracker
from .fix_quality import (
    FixQuality,
    FixQualityLevel,
)

__all__ = [
    'EARTH_RADIUS_M',
    'MEAN_EARTH_RADIUS_M',
    'convert_to_local_offset',
    'local_offset_to_geo',
    'planar_distance',
    'bearing_to',
    'distance_between',
    'OriginTracker',
    'FixQuality',
    'FixQualityLevel',
]
