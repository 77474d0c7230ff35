"""
AR-world origin tracker.

The AR session's local frame has no inherent relation to geodetic
coordinates; the first fix received pins that mapping for the rest of the
session. State machine: Empty -> Set, with no transition out of Set.
"""

import logging
import threading
from typing import Optional

from geoar_core.proto.geo_coordinate import GeoCoordinate
from geoar_core.metrics import get_metrics

logger = logging.getLogger(__name__)


class OriginTracker:
    """
    Holds the first observed geodetic fix as the AR-world origin.

    Usage:
        tracker = OriginTracker()
        tracker.set_if_absent(fix.coordinate)   # first call wins
        origin = tracker.get()
    """

    def __init__(self):
        self._origin: Optional[GeoCoordinate] = None
        self._lock = threading.Lock()
        self.metrics = get_metrics()

    def set_if_absent(self, coordinate: GeoCoordinate) -> bool:
        """
        Store coordinate as origin if none is set yet.

        Args:
            coordinate: Candidate origin

        Returns:
            True if this call set the origin, False if it was already set
        """
        with self._lock:
            if self._origin is not None:
                return False
            self._origin = coordinate

        self.metrics.increment('origin_set')
        logger.info(f"Origin set: lat={coordinate.latitude:.6f}, lon={coordinate.longitude:.6f}")
        return True

    def get(self) -> Optional[GeoCoordinate]:
        """Get the origin, or None before the first fix."""
        with self._lock:
            return self._origin

    @property
    def is_set(self) -> bool:
        return self.get() is not None
