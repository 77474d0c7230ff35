"""
Diagnostics projection.

Builds the per-fix DiagnosticRecord from the fix, the target, the session
state and the anchor sink readback. Pure: nothing is cached between fixes.
"""

from geoar_core.proto.geo_coordinate import GeoCoordinate, LocationFix
from geoar_core.proto.diagnostics import DiagnosticRecord
from geoar_core.localization.geo_transform import bearing_to, distance_between
from geoar_core.domain.session_state import SessionState
from geoar_core.io.anchor_sink import AnchorSink


def build_diagnostics(
    fix: LocationFix,
    target: GeoCoordinate,
    state: SessionState,
    anchor_sink: AnchorSink,
) -> DiagnosticRecord:
    """
    Project current state into a diagnostic record.

    Args:
        fix: Current location fix
        target: Target coordinate
        state: Session state (origin, placement flag)
        anchor_sink: AR readback

    Returns:
        DiagnosticRecord for this fix
    """
    return DiagnosticRecord(
        fix_latitude=fix.latitude,
        fix_longitude=fix.longitude,
        target_latitude=target.latitude,
        target_longitude=target.longitude,
        distance_m=distance_between(fix.coordinate, target),
        bearing_deg=bearing_to(fix.coordinate, target),
        tracking_state=anchor_sink.last_tracking_state(),
        anchor_count=anchor_sink.anchor_count(),
        anchor_position=anchor_sink.anchor_world_position(),
        fix_accuracy_m=fix.accuracy_m,
        origin_set=state.origin.is_set,
        placed=state.placed,
    )
