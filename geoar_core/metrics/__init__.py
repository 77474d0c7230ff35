"""
Metrics Module: Diagnostics, counters, histograms.

Every dropped location fix is counted under a reason code (no silent
failures). Placement skips are ordinary outcomes and are counted as plain
counters, not drops.

Usage:
    from geoar_core.metrics import get_metrics

    metrics = get_metrics()
    metrics.increment('fixes_in')
    metrics.increment_drop('invalid_fix')
    metrics.record_histogram('target_distance_m', 452.8)
"""

from .counters import MetricsCollector

# Global singleton for easy access
_global_metrics = None


def get_metrics() -> MetricsCollector:
    """
    Get the global metrics collector singleton.

    Returns:
        MetricsCollector instance
    """
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = MetricsCollector()
    return _global_metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _global_metrics
    _global_metrics = MetricsCollector()


__all__ = ['MetricsCollector', 'get_metrics', 'reset_metrics']
