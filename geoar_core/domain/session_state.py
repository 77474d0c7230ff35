"""
Session-scoped placement state.

Created at AR session start and discarded with the session. Nothing in here
is ever reset; a new session gets a new SessionState.
"""

from dataclasses import dataclass, field
from typing import Optional

from geoar_core.proto.geo_coordinate import LocalOffset
from geoar_core.localization.origin_tracker import OriginTracker


@dataclass
class PlacementState:
    """
    One-way placement flag.

    Attributes:
        placed: False until placement is requested, then True for the session
        offset: Offset the anchor was requested at
    """

    placed: bool = False
    offset: Optional[LocalOffset] = None

    def mark_placed(self, offset: LocalOffset) -> bool:
        """
        Flip the flag.

        Returns:
            True if this call flipped it, False if already placed
        """
        if self.placed:
            return False
        self.placed = True
        self.offset = offset
        return True


@dataclass
class SessionState:
    """
    Everything the placement core remembers across fixes.

    Attributes:
        origin: First-fix-wins origin tracker
        placement: One-way placement flag
        fixes_processed: Fixes that passed boundary validation
        last_fix_time: Timestamp of the last processed fix (ordering check)
        closed: True once the session has ended
    """

    origin: OriginTracker = field(default_factory=OriginTracker)
    placement: PlacementState = field(default_factory=PlacementState)
    fixes_processed: int = 0
    last_fix_time: Optional[float] = None
    closed: bool = False

    @property
    def placed(self) -> bool:
        return self.placement.placed
