"""
Geodetic transforms: local tangent-plane offsets, bearing, great-circle distance.

Two distance notions live here on purpose:
- convert_to_local_offset() is a local equirectangular projection on the WGS84
  equatorial radius. It decides where the anchor is placed. Accurate to a few
  kilometres from the origin, invalid near the poles or across the antimeridian.
- distance_between() is haversine on the mean Earth radius. It feeds
  diagnostics only.
The two are not expected to agree exactly, and the gap grows with range.
"""

import math
import logging
from typing import Optional

import numpy as np

from geoar_core.errors import InputValidationError, PreconditionError
from geoar_core.proto.geo_coordinate import GeoCoordinate, LocalOffset

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6378137.0           # WGS84 equatorial radius (spherical approximation)
MEAN_EARTH_RADIUS_M = 6371008.8      # IUGG mean radius, used by haversine


def convert_to_local_offset(
    origin: Optional[GeoCoordinate],
    point: GeoCoordinate,
) -> LocalOffset:
    """
    Project a geodetic point into the AR ground plane around the origin.

    Args:
        origin: AR-world origin (first fix of the session)
        point: Point to project

    Returns:
        LocalOffset with +x east (world right) and -z north (world forward)

    Raises:
        PreconditionError: If origin is not yet established
    """
    if origin is None:
        raise PreconditionError("Origin not set; cannot compute local offset")

    d_lat = math.radians(point.latitude - origin.latitude)
    d_lng = math.radians(point.longitude - origin.longitude)

    x = d_lng * EARTH_RADIUS_M * math.cos(math.radians(origin.latitude))
    z = d_lat * EARTH_RADIUS_M

    # North-positive displacement becomes -z (AR forward)
    return LocalOffset(x=x, z=-z)


def local_offset_to_geo(
    origin: Optional[GeoCoordinate],
    offset: LocalOffset,
) -> GeoCoordinate:
    """
    Inverse of convert_to_local_offset().

    Args:
        origin: AR-world origin
        offset: Local offset from the origin

    Returns:
        GeoCoordinate the offset corresponds to

    Raises:
        PreconditionError: If origin is not yet established
        InputValidationError: If the origin sits on a pole or the result is out of range
    """
    if origin is None:
        raise PreconditionError("Origin not set; cannot compute geodetic position")

    cos_lat0 = math.cos(math.radians(origin.latitude))
    if abs(cos_lat0) < 1e-12:
        raise InputValidationError("Planar projection undefined at the poles")

    d_lat = -offset.z / EARTH_RADIUS_M
    d_lng = offset.x / (EARTH_RADIUS_M * cos_lat0)

    return GeoCoordinate(
        latitude=origin.latitude + math.degrees(d_lat),
        longitude=origin.longitude + math.degrees(d_lng),
    )


def planar_distance(offset: LocalOffset) -> float:
    """Euclidean distance of a local offset from the AR origin (m)."""
    return float(np.hypot(offset.x, offset.z))


def bearing_to(start: GeoCoordinate, end: GeoCoordinate) -> float:
    """
    Initial bearing (forward azimuth) from start to end on a sphere.

    Args:
        start: Observer position
        end: Target position

    Returns:
        Bearing in degrees, [0, 360), 0 = north, 90 = east
    """
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    d_lon = math.radians(end.longitude - start.longitude)

    y = math.sin(d_lon) * math.cos(lat2)
    x = (math.cos(lat1) * math.sin(lat2)
         - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon))

    angle = math.degrees(math.atan2(y, x))
    if angle < 0:
        angle += 360.0

    # -1e-15 + 360.0 rounds to 360.0
    if angle >= 360.0:
        angle = 0.0

    return angle


def distance_between(start: GeoCoordinate, end: GeoCoordinate) -> float:
    """
    Great-circle distance using the haversine formula.

    Args:
        start: First point
        end: Second point

    Returns:
        Distance in metres
    """
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(end.longitude - start.longitude)

    h = (math.sin(d_lat / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2)
    h = min(1.0, max(0.0, h))

    return 2 * MEAN_EARTH_RADIUS_M * math.asin(math.sqrt(h))
