"""
Diagnostic record schema.

Flat per-fix record for a host UI overlay: current fix, target, distance,
bearing, anchor readback. Recomputed on every fix, never persisted.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple


class TrackingState(IntEnum):
    """AR subsystem tracking state, as reported by the anchor sink."""

    UNKNOWN = 0
    TRACKING = 1
    PAUSED = 2
    STOPPED = 3


@dataclass(frozen=True)
class DiagnosticRecord:
    """
    Per-fix diagnostics.

    Attributes:
        fix_latitude: Current fix latitude (deg)
        fix_longitude: Current fix longitude (deg)
        target_latitude: Target latitude (deg)
        target_longitude: Target longitude (deg)
        distance_m: Great-circle distance fix -> target (m)
        bearing_deg: Initial bearing fix -> target, [0, 360)
        tracking_state: Last tracking state from the AR subsystem
        anchor_count: Anchors currently placed
        anchor_position: Anchor world translation (x, y, z), if an anchor exists
        fix_accuracy_m: Horizontal accuracy of the fix (m), if known
        origin_set: True once the AR origin is fixed
        placed: True once placement was requested this session
    """

    fix_latitude: float
    fix_longitude: float
    target_latitude: float
    target_longitude: float
    distance_m: float
    bearing_deg: float
    tracking_state: TrackingState
    anchor_count: int
    anchor_position: Optional[Tuple[float, float, float]] = None
    fix_accuracy_m: Optional[float] = None
    origin_set: bool = False
    placed: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'fix': {'latitude': self.fix_latitude, 'longitude': self.fix_longitude},
            'target': {'latitude': self.target_latitude, 'longitude': self.target_longitude},
            'distance_m': self.distance_m,
            'bearing_deg': self.bearing_deg,
            'tracking_state': self.tracking_state.name,
            'anchor_count': self.anchor_count,
            'anchor_position': self.anchor_position,
            'fix_accuracy_m': self.fix_accuracy_m,
            'origin_set': self.origin_set,
            'placed': self.placed,
        }

    def format_line(self) -> str:
        """Single-line summary for logs."""
        pos = self.anchor_position
        anchor = f"({pos[0]:.2f}, {pos[1]:.2f}, {pos[2]:.2f})" if pos else "none"
        return (f"fix=({self.fix_latitude:.6f}, {self.fix_longitude:.6f}) "
                f"dist={self.distance_m:.1f}m bearing={self.bearing_deg:.1f}deg "
                f"anchors={self.anchor_count} anchor={anchor} "
                f"tracking={self.tracking_state.name}")
