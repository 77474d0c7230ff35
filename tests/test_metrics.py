"""
Unit tests for the metrics collector.

Tests cover:
- Standard counters and drop reason codes
- Histogram statistics
- Snapshots and reset
- Concurrent updates
- Global singleton
"""

import logging
import threading

import pytest

from geoar_core.metrics import MetricsCollector, get_metrics, reset_metrics
from geoar_core.metrics.counters import CounterSnapshot


# =============================================================================
# Test Counters
# =============================================================================


class TestCounters:
    """Tests for plain and drop counters."""

    @pytest.mark.parametrize("name", [
        'fixes_in',
        'fixes_processed',
        'origin_set',
        'placement_requests',
        'placement_skips',
        'handler_errors',
        'diagnostics_errors',
    ])
    def test_standard_counters_start_at_zero(self, name):
        collector = MetricsCollector()

        assert name in collector.snapshot().counters
        assert collector.get_counter(name) == 0

    def test_missing_counter_reads_zero(self):
        assert MetricsCollector().get_counter('placement_skipped_too_close') == 0

    def test_increment(self):
        collector = MetricsCollector()

        collector.increment('fixes_in')
        collector.increment('fixes_in', 4)

        assert collector.get_counter('fixes_in') == 5

    def test_drop_reasons_cover_boundary_rejections(self):
        reasons = set(MetricsCollector.DROP_REASONS)

        assert reasons == {
            'invalid_fix',
            'no_fix',
            'out_of_order',
            'poor_accuracy',
            'stream_paused',
            'queue_full',
        }

    def test_drop_updates_reason_and_total(self):
        collector = MetricsCollector()

        collector.increment_drop('invalid_fix')
        collector.increment_drop('invalid_fix')
        collector.increment_drop('queue_full', 3)

        assert collector.get_drop_count('invalid_fix') == 2
        assert collector.get_drop_count('queue_full') == 3
        assert collector.get_drop_count('no_fix') == 0
        assert collector.get_counter('fixes_dropped') == 5

    def test_unknown_drop_reason_warns_but_counts(self, caplog):
        collector = MetricsCollector()

        with caplog.at_level(logging.WARNING, logger='geoar_core.metrics.counters'):
            collector.increment_drop('gremlins')

        assert "Unknown drop reason 'gremlins'" in caplog.text
        assert collector.get_drop_count('gremlins') == 1
        assert collector.get_counter('fixes_dropped') == 1

    def test_known_drop_reason_is_silent(self, caplog):
        collector = MetricsCollector()

        with caplog.at_level(logging.WARNING, logger='geoar_core.metrics.counters'):
            collector.increment_drop('out_of_order')

        assert caplog.records == []


# =============================================================================
# Test Histograms
# =============================================================================


class TestHistograms:
    """Tests for histogram statistics."""

    def test_empty_histogram(self):
        assert MetricsCollector().get_histogram_stats('target_distance_m') is None

    def test_stats(self):
        collector = MetricsCollector()
        for value in [4.0, 1.0, 3.0, 2.0, 5.0]:
            collector.record_histogram('fix_accuracy_m', value)

        stats = collector.get_histogram_stats('fix_accuracy_m')

        assert stats['count'] == 5
        assert stats['min'] == 1.0
        assert stats['max'] == 5.0
        assert stats['mean'] == pytest.approx(3.0)
        assert stats['median'] == pytest.approx(3.0)

    def test_percentiles(self):
        collector = MetricsCollector()
        for value in range(1, 101):
            collector.record_histogram('target_distance_m', float(value))

        stats = collector.get_histogram_stats('target_distance_m')

        assert 94.0 <= stats['p95'] <= 96.0
        assert 98.0 <= stats['p99'] <= 100.0
        assert isinstance(stats['p95'], float)

    def test_samples_bounded(self):
        collector = MetricsCollector()
        for value in range(25):
            collector.record_histogram('fix_accuracy_m', float(value), max_samples=10)

        stats = collector.get_histogram_stats('fix_accuracy_m')

        assert stats['count'] <= 10
        assert stats['max'] == 24.0


# =============================================================================
# Test Snapshot and Reset
# =============================================================================


class TestSnapshot:
    """Tests for snapshots and reset."""

    def test_snapshot_is_a_copy(self):
        collector = MetricsCollector()
        collector.increment('fixes_in')
        collector.record_histogram('fix_accuracy_m', 3.0)

        snapshot = collector.snapshot()
        collector.increment('fixes_in')
        collector.record_histogram('fix_accuracy_m', 9.0)

        assert isinstance(snapshot, CounterSnapshot)
        assert snapshot.counters['fixes_in'] == 1
        assert snapshot.histograms['fix_accuracy_m'] == [3.0]

    def test_total_dropped(self):
        collector = MetricsCollector()
        collector.increment_drop('invalid_fix')
        collector.increment_drop('no_fix')

        snapshot = collector.snapshot()

        assert snapshot.total_dropped() == 2
        assert snapshot.drop_reasons['no_fix'] == 1

    def test_reset(self):
        collector = MetricsCollector()
        collector.increment('placement_requests')
        collector.increment('placement_skipped_already_placed', 7)
        collector.increment_drop('poor_accuracy')
        collector.record_histogram('target_distance_m', 12.0)

        collector.reset()

        assert collector.get_counter('placement_requests') == 0
        assert collector.get_counter('placement_skipped_already_placed') == 0
        assert collector.get_drop_count('poor_accuracy') == 0
        assert collector.get_histogram_stats('target_distance_m') is None
        assert 'placement_requests' in collector.snapshot().counters


# =============================================================================
# Test Thread Safety
# =============================================================================


class TestThreadSafety:
    """Concurrent updates must not lose counts."""

    def test_concurrent_updates(self):
        collector = MetricsCollector()
        num_threads = 8
        per_thread = 500

        def worker():
            for i in range(per_thread):
                collector.increment('fixes_in')
                collector.increment_drop('queue_full')
                collector.record_histogram('fix_accuracy_m', float(i))

        threads = [threading.Thread(target=worker) for _ in range(num_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        total = num_threads * per_thread
        assert collector.get_counter('fixes_in') == total
        assert collector.get_drop_count('queue_full') == total
        assert collector.get_counter('fixes_dropped') == total
        assert collector.get_histogram_stats('fix_accuracy_m')['count'] == total


# =============================================================================
# Test Global Singleton
# =============================================================================


class TestGlobalSingleton:
    """Tests for the process-wide collector."""

    def test_same_instance(self):
        assert get_metrics() is get_metrics()

    def test_reset_metrics_replaces_instance(self):
        before = get_metrics()
        before.increment('origin_set')

        reset_metrics()

        assert get_metrics() is not before
        assert get_metrics().get_counter('origin_set') == 0
