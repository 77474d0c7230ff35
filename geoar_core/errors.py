"""
Error taxonomy for the GeoAR core.

Skip outcomes from the placement gate are NOT errors; they travel as
PlacementDecision values. Exceptions are reserved for:

- PreconditionError: an operation was invoked before the state it needs
  exists (offset requested with no origin, fix delivered to a closed session).
- InputValidationError: malformed geodetic input (NaN, infinity, latitude or
  longitude out of range). Rejected at the inbound event handler, fatal to
  that single fix only.
"""


class GeoARError(Exception):
    """Base class for all GeoAR core errors."""


class PreconditionError(GeoARError, RuntimeError):
    """Operation invoked before its required state exists."""


class InputValidationError(GeoARError, ValueError):
    """Malformed geodetic or readback input."""
