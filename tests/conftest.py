"""
Pytest configuration and shared fixtures for GeoAR core tests.

Provides the reference origin/target pair, helpers to build coordinates at a
known metric offset, and fresh sinks and sessions per test.
"""

import sys
import math
from pathlib import Path
from typing import List, Optional

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from geoar_core.metrics import reset_metrics
from geoar_core.proto import GeoCoordinate, DiagnosticRecord
from geoar_core.localization import EARTH_RADIUS_M
from geoar_core.io import InMemoryAnchorSink
from geoar_core.domain import PlacementSession, PlacementSessionConfig


# =============================================================================
# Metrics isolation
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Give every test its own global metrics collector."""
    reset_metrics()
    yield
    reset_metrics()


# =============================================================================
# Coordinate Fixtures
# =============================================================================


@pytest.fixture
def origin_coordinate() -> GeoCoordinate:
    """Reference device position (first fix) used across scenarios."""
    return GeoCoordinate(22.292008, 73.363306)


@pytest.fixture
def target_coordinate() -> GeoCoordinate:
    """Reference target, roughly 450 m north-west of the origin."""
    return GeoCoordinate(22.294502, 73.359828)


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def anchor_sink() -> InMemoryAnchorSink:
    """Sink that creates anchors synchronously."""
    return InMemoryAnchorSink()


@pytest.fixture
def deferred_sink() -> InMemoryAnchorSink:
    """Sink that records requests but creates anchors only on complete_pending()."""
    return InMemoryAnchorSink(auto_create=False)


@pytest.fixture
def diagnostics_log() -> List[DiagnosticRecord]:
    return []


@pytest.fixture
def session(target_coordinate, anchor_sink, diagnostics_log) -> PlacementSession:
    """Session targeting the reference target with default config."""
    return PlacementSession(
        target_coordinate,
        anchor_sink,
        PlacementSessionConfig(),
        on_diagnostics=diagnostics_log.append,
    )


# =============================================================================
# Helper Functions
# =============================================================================


def offset_coordinate(
    origin: GeoCoordinate,
    east_m: float,
    north_m: float,
    radius_m: Optional[float] = None,
) -> GeoCoordinate:
    """
    Coordinate at a metric offset from origin, using the planar projection.

    Args:
        origin: Reference coordinate
        east_m: Offset east (m)
        north_m: Offset north (m)
        radius_m: Earth radius to use (default: projection radius)

    Returns:
        GeoCoordinate east_m / north_m away from origin
    """
    radius = radius_m or EARTH_RADIUS_M
    d_lat = math.degrees(north_m / radius)
    d_lon = math.degrees(east_m / (radius * math.cos(math.radians(origin.latitude))))
    return GeoCoordinate(origin.latitude + d_lat, origin.longitude + d_lon)
