"""
Placement Gate.

Decides, from the current session state, whether a target should be placed
as the session's one anchor. The gate is pure: it reads only its arguments
and keeps no state, so the caller owns the read-decide-mutate sequence and
the gate can be tested without any AR or location machinery.
"""

from typing import Optional
from dataclasses import dataclass

from geoar_core import config
from geoar_core.errors import InputValidationError
from geoar_core.proto.geo_coordinate import GeoCoordinate
from geoar_core.proto.placement_decision import PlacementDecision, SkipReason
from geoar_core.localization.geo_transform import convert_to_local_offset


@dataclass
class PlacementGateConfig:
    """
    Configuration for the placement gate.

    Attributes:
        min_distance_m: Targets at or within this planar distance of the
            AR origin are skipped (anchor would sit inside the viewer)
    """

    min_distance_m: float = 1.0

    def __post_init__(self):
        """Validate configuration."""
        assert self.min_distance_m >= 0, "min_distance must be non-negative"


class PlacementGate:
    """
    At-most-one-anchor placement gate.

    Checks, in order:
    1. Anchor count: any existing anchor blocks placement
    2. Origin: no origin, no local frame
    3. Placement flag: one placement per session
    4. Distance: target must be farther than min_distance_m from the origin

    Usage:
        gate = PlacementGate(config)
        decision = gate.evaluate(target, origin, state.placed, sink.anchor_count())

        if decision.should_place:
            sink.request_anchor_placement(decision.offset)
            state.mark_placed(decision.offset)
        else:
            print(f"Skipped: {decision.reason_text}")
    """

    def __init__(self, config: Optional[PlacementGateConfig] = None):
        """
        Initialize placement gate.

        Args:
            config: Gate configuration (uses defaults if None)
        """
        self.config = config or PlacementGateConfig()

    def evaluate(
        self,
        target: GeoCoordinate,
        origin: Optional[GeoCoordinate],
        already_placed: bool,
        current_anchor_count: int,
    ) -> PlacementDecision:
        """
        Decide whether to request placement of the target anchor.

        Args:
            target: Real-world point to anchor
            origin: AR-world origin, None until the first fix
            already_placed: Placement already requested this session
            current_anchor_count: Anchors the AR subsystem currently holds

        Returns:
            PlacementDecision.place(offset) or PlacementDecision.skip(reason)

        Raises:
            InputValidationError: If current_anchor_count is negative
        """
        if current_anchor_count < 0:
            raise InputValidationError(f"Anchor count cannot be negative: {current_anchor_count}")

        # Checked before the flag so anchors created outside this core also block
        if current_anchor_count > 0:
            return PlacementDecision.skip(SkipReason.ANCHOR_EXISTS)

        if origin is None:
            return PlacementDecision.skip(SkipReason.ORIGIN_NOT_SET)

        if already_placed:
            return PlacementDecision.skip(SkipReason.ALREADY_PLACED)

        offset = convert_to_local_offset(origin, target)
        distance = offset.distance_m

        if distance <= self.config.min_distance_m:
            return PlacementDecision.skip(SkipReason.TOO_CLOSE, distance_m=distance)

        return PlacementDecision.place(offset)


def create_default_gate() -> PlacementGate:
    """
    Create placement gate from PLACEMENT_CONFIG.

    Returns:
        Configured PlacementGate instance
    """
    gate_config = PlacementGateConfig(
        min_distance_m=config.PLACEMENT_CONFIG["min_distance_m"],
    )

    return PlacementGate(gate_config)
