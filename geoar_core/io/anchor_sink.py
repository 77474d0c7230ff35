"""
Anchor sink boundary.

The AR subsystem owns anchor creation and tracking. The core only asks for a
placement at a local offset and reads back the anchor count, tracking state
and anchor world position; it never mutates anchors directly.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from geoar_core.proto.geo_coordinate import LocalOffset
from geoar_core.proto.diagnostics import TrackingState
from geoar_core.metrics import get_metrics

logger = logging.getLogger(__name__)


class AnchorSink(ABC):
    """
    Interface the host's AR layer implements.

    request_anchor_placement() is fire-and-forget: creation success or failure
    is only visible to the core through anchor_count().
    """

    @abstractmethod
    def request_anchor_placement(self, offset: LocalOffset) -> None:
        """Ask the AR layer to create an anchor at offset on the ground plane."""

    @abstractmethod
    def anchor_count(self) -> int:
        """Number of anchors currently placed."""

    @abstractmethod
    def last_tracking_state(self) -> TrackingState:
        """Tracking state from the most recent AR frame."""

    def anchor_world_position(self) -> Optional[Tuple[float, float, float]]:
        """World translation (x, y, z) of the first anchor, if any."""
        return None


class InMemoryAnchorSink(AnchorSink):
    """
    Anchor sink that keeps anchors in memory.

    Serves headless hosts, replay tools and tests. With auto_create=True a
    request immediately materialises an anchor at (x, ground_y, z); with
    auto_create=False requests are only recorded, mimicking an AR layer
    that creates the anchor on a later frame (see complete_pending()).

    Usage:
        sink = InMemoryAnchorSink()
        session = PlacementSession(target, sink)
        ...
        sink.requests        # offsets the core asked for
        sink.anchor_count()  # 1 after placement
    """

    def __init__(
        self,
        auto_create: bool = True,
        ground_y: float = 0.0,
        tracking_state: TrackingState = TrackingState.TRACKING,
    ):
        """
        Initialize sink.

        Args:
            auto_create: Create anchors synchronously on request
            ground_y: Height assigned to created anchors (m)
            tracking_state: Initial tracking state
        """
        self.auto_create = auto_create
        self.ground_y = ground_y
        self._tracking_state = tracking_state
        self._lock = threading.Lock()
        self._anchors: List[Tuple[float, float, float]] = []
        self._pending: List[LocalOffset] = []
        self.requests: List[LocalOffset] = []
        self.metrics = get_metrics()

    def request_anchor_placement(self, offset: LocalOffset) -> None:
        with self._lock:
            self.requests.append(offset)
            if self.auto_create:
                self._anchors.append(offset.as_translation(self.ground_y))
            else:
                self._pending.append(offset)

        self.metrics.increment('anchor_sink_requests')
        logger.debug(f"Anchor requested at x={offset.x:.2f}, z={offset.z:.2f}")

    def complete_pending(self) -> int:
        """
        Create anchors for all recorded requests (a later AR frame).

        Returns:
            Number of anchors created
        """
        with self._lock:
            created = len(self._pending)
            for offset in self._pending:
                self._anchors.append(offset.as_translation(self.ground_y))
            self._pending.clear()
        return created

    def add_external_anchor(self, position: Tuple[float, float, float]):
        """Register an anchor created outside the placement core (e.g. a tap)."""
        with self._lock:
            self._anchors.append(tuple(position))

    def clear(self):
        """Detach all anchors."""
        with self._lock:
            self._anchors.clear()
            self._pending.clear()

    def set_tracking_state(self, state: TrackingState):
        with self._lock:
            self._tracking_state = state

    def anchor_count(self) -> int:
        with self._lock:
            return len(self._anchors)

    def last_tracking_state(self) -> TrackingState:
        with self._lock:
            return self._tracking_state

    def anchor_world_position(self) -> Optional[Tuple[float, float, float]]:
        with self._lock:
            return self._anchors[0] if self._anchors else None
