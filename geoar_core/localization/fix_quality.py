"""
Location fix quality assessment.

Classifies a fix by its reported horizontal accuracy radius (metres, ~68%
confidence as reported by phone location providers) and applies the optional
accuracy gate used before a fix may influence the origin or placement.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from geoar_core.proto.geo_coordinate import LocationFix


class FixQualityLevel(Enum):
    """Coarse quality buckets for a location fix."""

    UNKNOWN = 0      # Provider reported no accuracy
    EXCELLENT = 1    # <= 3 m (dual-band GNSS, open sky)
    GOOD = 2         # <= 10 m
    FAIR = 3         # <= 25 m
    POOR = 4         # > 25 m (network / cell-based)


@dataclass(frozen=True)
class FixQuality:
    """
    Quality of one location fix.

    Attributes:
        accuracy_m: Horizontal accuracy radius (m), None if unknown
    """

    accuracy_m: Optional[float] = None

    EXCELLENT_M = 3.0
    GOOD_M = 10.0
    FAIR_M = 25.0

    @classmethod
    def from_fix(cls, fix: LocationFix) -> "FixQuality":
        return cls(accuracy_m=fix.accuracy_m)

    @property
    def level(self) -> FixQualityLevel:
        if self.accuracy_m is None:
            return FixQualityLevel.UNKNOWN
        if self.accuracy_m <= self.EXCELLENT_M:
            return FixQualityLevel.EXCELLENT
        if self.accuracy_m <= self.GOOD_M:
            return FixQualityLevel.GOOD
        if self.accuracy_m <= self.FAIR_M:
            return FixQualityLevel.FAIR
        return FixQualityLevel.POOR

    def is_degraded(self) -> bool:
        """True if the fix is worse than FAIR."""
        return self.level == FixQualityLevel.POOR

    def is_within(self, max_accuracy_m: Optional[float]) -> bool:
        """
        Check the fix against an accuracy threshold.

        Args:
            max_accuracy_m: Largest acceptable accuracy radius, None disables the check

        Returns:
            True if acceptable. Fixes without accuracy pass, since many
            providers omit it.
        """
        if max_accuracy_m is None or self.accuracy_m is None:
            return True
        return self.accuracy_m <= max_accuracy_m

