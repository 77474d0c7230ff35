"""
Placement Decision Output Schema.

Result of one placement evaluation: either place an anchor at a local
offset, or skip with a reason. Skips are expected and frequent (every fix
after the anchor exists yields one) and are never raised as exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .geo_coordinate import LocalOffset


class SkipReason(Enum):
    """Why a fix did not produce a placement request."""

    ANCHOR_EXISTS = "anchor already exists"
    ORIGIN_NOT_SET = "origin not yet established"
    ALREADY_PLACED = "already placed this session"
    TOO_CLOSE = "target too close to camera origin"

    # Boundary rejections (fix never reached the gate)
    NO_FIX = "no location in callback"
    INVALID_FIX = "malformed location fix"
    OUT_OF_ORDER = "fix older than last processed fix"
    POOR_ACCURACY = "fix accuracy worse than threshold"


@dataclass(frozen=True)
class PlacementDecision:
    """
    Place(offset) or Skip(reason).

    Attributes:
        offset: Local offset to place at (only for Place)
        skip_reason: Reason for skipping (only for Skip)
        distance_m: Planar distance origin -> target, when it was computed
    """

    offset: Optional[LocalOffset] = None
    skip_reason: Optional[SkipReason] = None
    distance_m: Optional[float] = None

    def __post_init__(self):
        if (self.offset is None) == (self.skip_reason is None):
            raise ValueError("PlacementDecision needs exactly one of offset or skip_reason")

    @classmethod
    def place(cls, offset: LocalOffset) -> "PlacementDecision":
        return cls(offset=offset, distance_m=offset.distance_m)

    @classmethod
    def skip(cls, reason: SkipReason, distance_m: Optional[float] = None) -> "PlacementDecision":
        return cls(skip_reason=reason, distance_m=distance_m)

    @property
    def should_place(self) -> bool:
        """True for a Place decision."""
        return self.offset is not None

    @property
    def reason_text(self) -> Optional[str]:
        """Human-readable skip reason."""
        return self.skip_reason.value if self.skip_reason else None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'decision': 'place' if self.should_place else 'skip',
            'offset': self.offset.to_dict() if self.offset else None,
            'skip_reason': self.skip_reason.name if self.skip_reason else None,
            'distance_m': self.distance_m,
        }
