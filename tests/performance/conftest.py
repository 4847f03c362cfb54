"""
Performance test fixtures and configuration.
"""

import numpy as np
import pytest

from zone_grading.core.types import ZoneType
from zone_grading.imaging.grader import PixelBuffer
from zone_grading.zones.presets import get_preset


def pytest_configure(config):
    """Add performance test markers."""
    config.addinivalue_line("markers", "benchmark: mark test as a benchmark test")


@pytest.fixture
def busy_zones():
    """Every zone active, so no zone is skipped."""
    zones = get_preset("vintage_film")
    for zone_id in (ZoneType.DARK, ZoneType.SHADOW, ZoneType.LIGHT, ZoneType.SPECULAR):
        zones = zones.update(zone_id, exposure=0.25)
    return zones


@pytest.fixture
def preview_buffer():
    """Random RGBA buffer at the preview width (1200x800)."""
    rng = np.random.default_rng(42)
    return PixelBuffer(rng.integers(0, 256, size=(800, 1200, 4), dtype=np.uint8))


@pytest.fixture
def large_buffer():
    """Random RGB buffer of a 12 MP photo (4000x3000)."""
    rng = np.random.default_rng(43)
    return PixelBuffer(rng.integers(0, 256, size=(3000, 4000, 3), dtype=np.uint8))
