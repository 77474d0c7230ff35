"""
GeoAR Core Package.

Anchors one virtual object in an AR scene at a fixed real-world coordinate,
driven by streamed device location fixes.

Package structure:
- io: Location stream adapter, anchor sink boundary
- proto: Coordinates, placement decisions, diagnostic records
- localization: Geodetic transforms, origin tracking, fix quality
- domain: Placement gate, session state and sequencing
- metrics: Diagnostics, counters, histograms
"""

__version__ = "0.1.0"

from .errors import GeoARError, PreconditionError, InputValidationError
from .proto import GeoCoordinate, LocalOffset, LocationFix, PlacementDecision, SkipReason
from .domain import PlacementSession, create_default_session
from .io import InMemoryAnchorSink, LocationStream
