"""
Geodetic and local-frame coordinate schemas.

GeoCoordinate is validated on construction, so any instance reaching the
transform layer is finite and in range. LocalOffset carries float32-precision
metres in the AR ground plane (+x right, -z forward).
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from geoar_core.errors import InputValidationError


def _check_finite_number(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating, np.integer)):
        raise InputValidationError(f"{name} must be a number: {value!r}")
    if not math.isfinite(value):
        raise InputValidationError(f"{name} must be finite: {value}")


@dataclass(frozen=True)
class GeoCoordinate:
    """
    Latitude/longitude pair in decimal degrees (WGS84).

    Attributes:
        latitude: Latitude in degrees, [-90, 90]
        longitude: Longitude in degrees, [-180, 180]

    Raises:
        InputValidationError: NaN, infinite or out-of-range values
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinate range."""
        for name in ("latitude", "longitude"):
            _check_finite_number(name, getattr(self, name))

        if not -90.0 <= self.latitude <= 90.0:
            raise InputValidationError(f"Latitude out of range [-90, 90]: {self.latitude}")

        if not -180.0 <= self.longitude <= 180.0:
            raise InputValidationError(f"Longitude out of range [-180, 180]: {self.longitude}")

        # Normalise numpy scalars and ints to plain floats
        object.__setattr__(self, "latitude", float(self.latitude))
        object.__setattr__(self, "longitude", float(self.longitude))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {'latitude': self.latitude, 'longitude': self.longitude}


@dataclass(frozen=True)
class LocalOffset:
    """
    Planar offset from the AR origin in metres.

    Values are quantised to float32, the precision of an AR pose translation.
    The vertical axis is omitted; placement is 2D on the ground plane.

    Attributes:
        x: World right (m)
        z: World backward (m); forward is -z
    """

    x: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(np.float32(self.x)))
        object.__setattr__(self, "z", float(np.float32(self.z)))

    @property
    def distance_m(self) -> float:
        """Planar distance from the AR origin (m)."""
        return float(np.hypot(self.x, self.z))

    def as_translation(self, y: float = 0.0) -> tuple:
        """Get (x, y, z) translation for an AR pose."""
        return (self.x, y, self.z)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {'x': self.x, 'z': self.z}


@dataclass(frozen=True)
class LocationFix:
    """
    One location fix delivered by the device location service.

    Attributes:
        coordinate: Validated geodetic position
        timestamp: Fix time in seconds (None if the provider gave none)
        accuracy_m: Horizontal accuracy radius in metres (None if unknown)
    """

    coordinate: GeoCoordinate
    timestamp: Optional[float] = None
    accuracy_m: Optional[float] = None

    def __post_init__(self):
        """Validate metadata."""
        if self.timestamp is not None:
            _check_finite_number("timestamp", self.timestamp)

        if self.accuracy_m is not None:
            _check_finite_number("accuracy_m", self.accuracy_m)
            if self.accuracy_m < 0:
                raise InputValidationError(f"Accuracy must be >= 0: {self.accuracy_m}")

    @classmethod
    def from_raw(
        cls,
        lat: float,
        lng: float,
        timestamp: Optional[float] = None,
        accuracy: Optional[float] = None,
    ) -> "LocationFix":
        """
        Build a fix from raw callback values.

        Raises:
            InputValidationError: If any value is malformed
        """
        return cls(
            coordinate=GeoCoordinate(lat, lng),
            timestamp=timestamp,
            accuracy_m=accuracy,
        )

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'latitude': self.latitude,
            'longitude': self.longitude,
            'timestamp': self.timestamp,
            'accuracy_m': self.accuracy_m,
        }
