"""
Placement Session: GPS-driven one-time anchor placement.

Consumes location fixes in delivery order and turns them into at most one
anchor placement request at the configured target. Per fix:

1. Boundary validation (malformed / missing / out-of-order / inaccurate fixes
   become Skip outcomes and drop counters, never exceptions)
2. Diagnostics projection
3. Origin capture (first fix wins)
4. Placement gate evaluation
5. Placement request, then the placement flag flips

Steps 1-5 run under one lock so origin capture and the read-decide-mutate
sequence stay serialised even if fixes arrive from several threads. The
diagnostics listener is called once the lock is released; its failures are
logged and counted, never propagated.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from geoar_core import config
from geoar_core.errors import InputValidationError, PreconditionError
from geoar_core.proto.geo_coordinate import GeoCoordinate, LocationFix
from geoar_core.proto.placement_decision import PlacementDecision, SkipReason
from geoar_core.proto.diagnostics import DiagnosticRecord
from geoar_core.localization.fix_quality import FixQuality
from geoar_core.localization.geo_transform import local_offset_to_geo
from geoar_core.domain.placement_gate import PlacementGate, PlacementGateConfig
from geoar_core.domain.session_state import SessionState
from geoar_core.domain.diagnostics import build_diagnostics
from geoar_core.io.anchor_sink import AnchorSink
from geoar_core.metrics import get_metrics

logger = logging.getLogger(__name__)

DiagnosticsListener = Callable[[DiagnosticRecord], None]


@dataclass
class PlacementSessionConfig:
    """
    Configuration for a placement session.

    Attributes:
        gate_config: Placement gate configuration
        max_fix_accuracy_m: Drop fixes with a worse accuracy radius (None disables)
        reject_out_of_order: Drop fixes whose timestamp precedes the last processed fix
    """

    gate_config: PlacementGateConfig = None
    max_fix_accuracy_m: Optional[float] = None
    reject_out_of_order: bool = True

    def __post_init__(self):
        """Validate and set defaults."""
        if self.gate_config is None:
            self.gate_config = PlacementGateConfig()
        if self.max_fix_accuracy_m is not None:
            assert self.max_fix_accuracy_m > 0, "max_fix_accuracy must be positive"


class PlacementSession:
    """
    Session-scoped owner of origin, placement flag and fix sequencing.

    Usage:
        sink = MyArAnchorSink(renderer)
        session = PlacementSession(GeoCoordinate(22.294502, 73.359828), sink)

        # From the location callback
        decision = session.on_location_fix(lat, lng, timestamp, accuracy)

        # At AR session end
        session.close()
    """

    def __init__(
        self,
        target: GeoCoordinate,
        anchor_sink: AnchorSink,
        config: Optional[PlacementSessionConfig] = None,
        on_diagnostics: Optional[DiagnosticsListener] = None,
    ):
        """
        Start a placement session.

        Args:
            target: Real-world point to anchor
            anchor_sink: AR layer boundary
            config: Session configuration (uses defaults if None)
            on_diagnostics: Called with a DiagnosticRecord for every accepted fix
        """
        self.target = target
        self.anchor_sink = anchor_sink
        self.config = config or PlacementSessionConfig()
        self.gate = PlacementGate(self.config.gate_config)
        self.on_diagnostics = on_diagnostics
        self.state = SessionState()
        self.metrics = get_metrics()
        self._lock = threading.Lock()

        logger.info(f"Placement session started, target: lat={target.latitude:.6f}, "
                    f"lon={target.longitude:.6f}")

    @property
    def origin(self) -> Optional[GeoCoordinate]:
        return self.state.origin.get()

    @property
    def placed(self) -> bool:
        return self.state.placed

    @property
    def is_closed(self) -> bool:
        return self.state.closed

    def on_location_fix(
        self,
        lat: Optional[float],
        lng: Optional[float],
        timestamp: Optional[float] = None,
        accuracy: Optional[float] = None,
    ) -> PlacementDecision:
        """
        Inbound event handler for one raw location fix.

        Args:
            lat: Latitude (deg); None together with lng means "no location"
            lng: Longitude (deg)
            timestamp: Fix time (s), optional
            accuracy: Horizontal accuracy radius (m), optional

        Returns:
            PlacementDecision for this fix

        Raises:
            PreconditionError: If the session is closed
        """
        if lat is None and lng is None:
            return self.process_fix(None)

        try:
            fix = LocationFix.from_raw(lat, lng, timestamp, accuracy)
        except InputValidationError as e:
            return self._reject_invalid(e)

        return self.process_fix(fix)

    def process_fix(self, fix: Optional[LocationFix]) -> PlacementDecision:
        """
        Process one validated fix (or None when the callback had no location).

        Args:
            fix: Location fix

        Returns:
            PlacementDecision for this fix

        Raises:
            PreconditionError: If the session is closed
        """
        with self._lock:
            decision, record = self._evaluate_fix(fix)

        # Listener runs outside the lock so it may call back into the session
        if record is not None:
            self._notify_diagnostics(record)

        return decision

    def _evaluate_fix(self, fix: Optional[LocationFix]):
        """
        Read-decide-mutate sequence for one fix. Caller holds the lock.

        Returns:
            (decision, diagnostic record or None for rejected fixes)
        """
        self._check_open()
        self.metrics.increment('fixes_in')

        if fix is None:
            logger.debug("Location callback without a location, skipping")
            self.metrics.increment_drop('no_fix')
            return PlacementDecision.skip(SkipReason.NO_FIX), None

        rejection = self._check_boundary(fix)
        if rejection is not None:
            return rejection, None

        self.state.fixes_processed += 1
        if fix.timestamp is not None:
            self.state.last_fix_time = fix.timestamp
        self.metrics.increment('fixes_processed')
        if fix.accuracy_m is not None:
            self.metrics.record_histogram('fix_accuracy_m', fix.accuracy_m)

        # Snapshot before origin capture so the first record shows origin_set=False
        record = self.diagnostics(fix)
        self.metrics.record_histogram('target_distance_m', record.distance_m)
        logger.debug(record.format_line())

        self.state.origin.set_if_absent(fix.coordinate)

        decision = self.gate.evaluate(
            self.target,
            self.state.origin.get(),
            self.state.placed,
            self.anchor_sink.anchor_count(),
        )

        if decision.should_place:
            self._place(decision)
        else:
            self.metrics.increment('placement_skips')
            self.metrics.increment(f'placement_skipped_{decision.skip_reason.name.lower()}')
            if decision.skip_reason is SkipReason.TOO_CLOSE:
                logger.warning(f"Skipping anchor, target too close: {decision.distance_m:.2f} m")
            else:
                logger.debug(f"Placement skipped: {decision.reason_text}")

        return decision, record

    def diagnostics(self, fix: LocationFix) -> DiagnosticRecord:
        """Diagnostic record for fix against the current state."""
        return build_diagnostics(fix, self.target, self.state, self.anchor_sink)

    def close(self):
        """End the session. Later fixes raise PreconditionError; state stays readable."""
        with self._lock:
            if self.state.closed:
                return
            self.state.closed = True
        logger.info(f"Placement session closed after {self.state.fixes_processed} fixes "
                    f"(placed={self.state.placed})")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def get_statistics(self) -> dict:
        """Get session statistics for diagnostics."""
        origin = self.origin
        offset = self.state.placement.offset
        snapshot = self.metrics.snapshot()

        # Where the requested anchor lands on the map, for comparison with the target
        placed_position = None
        if offset is not None:
            placed_position = local_offset_to_geo(origin, offset).to_dict()

        return {
            'fixes_processed': self.state.fixes_processed,
            'origin': origin.to_dict() if origin else None,
            'placed': self.state.placed,
            'placed_offset': offset.to_dict() if offset else None,
            'placed_position': placed_position,
            'placement_requests': snapshot.counters.get('placement_requests', 0),
            'placement_skips': snapshot.counters.get('placement_skips', 0),
            'fixes_dropped': snapshot.total_dropped(),
            'drops_by_reason': {k: v for k, v in snapshot.drop_reasons.items() if v},
        }

    def _check_open(self):
        if self.state.closed:
            raise PreconditionError("Placement session is closed")

    def _reject_invalid(self, error: InputValidationError) -> PlacementDecision:
        with self._lock:
            self._check_open()
            self.metrics.increment('fixes_in')
            self.metrics.increment_drop('invalid_fix')
        logger.warning(f"Rejected malformed location fix: {error}")
        return PlacementDecision.skip(SkipReason.INVALID_FIX)

    def _check_boundary(self, fix: LocationFix) -> Optional[PlacementDecision]:
        """Ordering and accuracy checks. Returns a Skip, or None to continue."""
        last_time = self.state.last_fix_time
        if (self.config.reject_out_of_order and fix.timestamp is not None
                and last_time is not None and fix.timestamp < last_time):
            logger.warning(f"Out-of-order fix (dt={fix.timestamp - last_time:.3f}s), skipping")
            self.metrics.increment_drop('out_of_order')
            return PlacementDecision.skip(SkipReason.OUT_OF_ORDER)

        quality = FixQuality.from_fix(fix)
        if not quality.is_within(self.config.max_fix_accuracy_m):
            logger.warning(f"Fix accuracy {fix.accuracy_m:.1f} m exceeds "
                           f"{self.config.max_fix_accuracy_m:.1f} m, skipping")
            self.metrics.increment_drop('poor_accuracy')
            return PlacementDecision.skip(SkipReason.POOR_ACCURACY)

        if quality.is_degraded():
            logger.debug(f"Degraded fix accepted (accuracy {fix.accuracy_m:.1f} m)")

        return None

    def _notify_diagnostics(self, record: DiagnosticRecord):
        if self.on_diagnostics is None:
            return
        try:
            self.on_diagnostics(record)
        except Exception:
            logger.exception("Diagnostics listener failed")
            self.metrics.increment('diagnostics_errors')

    def _place(self, decision: PlacementDecision):
        # Flag flips only once the sink accepted the request
        self.anchor_sink.request_anchor_placement(decision.offset)
        self.state.placement.mark_placed(decision.offset)
        self.metrics.increment('placement_requests')
        logger.info(f"Placed target anchor: {decision.distance_m:.2f} m away "
                    f"(x={decision.offset.x:.2f}, z={decision.offset.z:.2f})")


def create_default_session(
    anchor_sink: AnchorSink,
    on_diagnostics: Optional[DiagnosticsListener] = None,
) -> PlacementSession:
    """
    Create a placement session from TARGET_CONFIG and PLACEMENT_CONFIG.

    Args:
        anchor_sink: AR layer boundary
        on_diagnostics: Optional diagnostics listener

    Returns:
        Configured PlacementSession
    """
    target = GeoCoordinate(
        latitude=config.TARGET_CONFIG["latitude"],
        longitude=config.TARGET_CONFIG["longitude"],
    )

    session_config = PlacementSessionConfig(
        gate_config=PlacementGateConfig(
            min_distance_m=config.PLACEMENT_CONFIG["min_distance_m"],
        ),
        max_fix_accuracy_m=config.PLACEMENT_CONFIG["max_fix_accuracy_m"],
        reject_out_of_order=config.PLACEMENT_CONFIG["reject_out_of_order"],
    )

    return PlacementSession(target, anchor_sink, session_config, on_diagnostics)
