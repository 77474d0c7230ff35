"""
Domain Module: placement decisions and session sequencing.

Implements:
- Placement gate (at most one anchor, minimum distance from origin)
- Session state (origin + placement flag, session-scoped)
- Per-fix sequencing and diagnostics projection
"""

from .placement_gate import (
    PlacementGate,
    PlacementGateConfig,
    create_default_gate,
)
from .session_state import (
    PlacementState,
    SessionState,
)
from .diagnostics import build_diagnostics
from .placement_session import (
    PlacementSession,
    PlacementSessionConfig,
    create_default_session,
)

__all__ = [
    'PlacementGate',
    'PlacementGateConfig',
    'create_default_gate',
    'PlacementState',
    'SessionState',
    'build_diagnostics',
    'PlacementSession',
    'PlacementSessionConfig',
    'create_default_session',
]
