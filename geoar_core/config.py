"""
GeoAR core configuration.

Plain dictionaries read by the create_default_* factories. Hosts that need
different values build the per-component config dataclasses directly.
"""

import logging

# Target the virtual object is anchored to (WGS84 degrees)
TARGET_CONFIG = {
    "latitude": 22.294502,
    "longitude": 73.359828,
}

# Placement gating
PLACEMENT_CONFIG = {
    "min_distance_m": 1.0,            # Targets this close to the AR origin are skipped
    "max_fix_accuracy_m": None,       # None disables the accuracy gate
    "reject_out_of_order": True,      # Drop fixes whose timestamp goes backwards
}

# Location stream adapter
STREAM_CONFIG = {
    "max_queue_size": 64,             # Bounded queue, roughly a minute of 1 Hz fixes
    "poll_timeout_s": 0.5,            # Worker wake-up interval while idle
}

# Logging
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def configure_logging(level: str = None):
    """
    Configure root logging from LOGGING_CONFIG.

    Args:
        level: Optional level name overriding LOGGING_CONFIG["level"]
    """
    logging.basicConfig(
        level=getattr(logging, (level or LOGGING_CONFIG["level"]).upper()),
        format=LOGGING_CONFIG["format"],
    )
