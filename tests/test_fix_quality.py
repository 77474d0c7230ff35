"""
Unit tests for fix quality classification and configuration helpers.
"""

import logging

import pytest

from geoar_core import config
from geoar_core.proto import LocationFix
from geoar_core.localization import FixQuality, FixQualityLevel


class TestFixQualityLevel:
    """Tests for accuracy buckets."""

    @pytest.mark.parametrize("accuracy_m,expected", [
        (None, FixQualityLevel.UNKNOWN),
        (0.0, FixQualityLevel.EXCELLENT),
        (3.0, FixQualityLevel.EXCELLENT),
        (3.1, FixQualityLevel.GOOD),
        (10.0, FixQualityLevel.GOOD),
        (18.0, FixQualityLevel.FAIR),
        (25.0, FixQualityLevel.FAIR),
        (120.0, FixQualityLevel.POOR),
    ])
    def test_levels(self, accuracy_m, expected):
        assert FixQuality(accuracy_m).level is expected

    def test_from_fix(self):
        fix = LocationFix.from_raw(22.29, 73.36, timestamp=1.0, accuracy=7.5)

        quality = FixQuality.from_fix(fix)

        assert quality.accuracy_m == 7.5
        assert quality.level is FixQualityLevel.GOOD

    def test_only_poor_is_degraded(self):
        assert FixQuality(40.0).is_degraded()
        assert not FixQuality(20.0).is_degraded()
        assert not FixQuality(None).is_degraded()


class TestAccuracyThreshold:
    """Tests for the optional accuracy gate."""

    def test_disabled_threshold_accepts_everything(self):
        assert FixQuality(500.0).is_within(None)

    def test_unknown_accuracy_passes(self):
        assert FixQuality(None).is_within(5.0)

    def test_boundary_is_inclusive(self):
        assert FixQuality(5.0).is_within(5.0)
        assert not FixQuality(5.01).is_within(5.0)


class TestConfigureLogging:
    """Tests for config.configure_logging."""

    def test_uses_configured_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

        config.configure_logging()

        assert calls == [{
            'level': logging.INFO,
            'format': config.LOGGING_CONFIG['format'],
        }]

    def test_level_override(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

        config.configure_logging('debug')

        assert calls[0]['level'] == logging.DEBUG

    def test_default_placement_config(self):
        assert config.PLACEMENT_CONFIG['min_distance_m'] == 1.0
        assert config.PLACEMENT_CONFIG['max_fix_accuracy_m'] is None
