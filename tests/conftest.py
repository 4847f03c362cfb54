"""
Shared fixtures for zone grading tests.
"""

import numpy as np
import pytest
from PIL import Image

from zone_grading.config import configure
from zone_grading.core.models import ZoneConfig, ZoneSet
from zone_grading.core.types import ZoneDirection, ZoneType
from zone_grading.imaging.grader import PixelBuffer


@pytest.fixture(autouse=True)
def fresh_settings():
    """Give every test default settings."""
    settings = configure()
    yield settings
    configure()


@pytest.fixture
def default_zones():
    """Factory zone layout."""
    return ZoneSet.default()


@pytest.fixture
def make_zone():
    """Factory for single zones with neutral defaults."""

    def _make(
        zone_id=ZoneType.LIGHT,
        range_end=0.0,
        falloff=1.0,
        direction=ZoneDirection.LOW,
        exposure=0.0,
        saturation=1.0,
        is_enabled=True,
    ):
        return ZoneConfig(
            id=zone_id,
            range_end=range_end,
            falloff=falloff,
            direction=direction,
            exposure=exposure,
            saturation=saturation,
            is_enabled=is_enabled,
        )

    return _make


@pytest.fixture
def full_range_zone(make_zone):
    """A low-pass zone at full weight for every pixel luminance."""

    def _make(exposure=0.0, saturation=1.0):
        return make_zone(
            range_end=8.0,
            falloff=0.01,
            direction=ZoneDirection.LOW,
            exposure=exposure,
            saturation=saturation,
        )

    return _make


@pytest.fixture
def gray_ramp_buffer():
    """RGB buffer holding every 8-bit gray level, 4 rows tall."""
    row = np.arange(256, dtype=np.uint8)
    data = np.repeat(row[np.newaxis, :, np.newaxis], 3, axis=2)
    data = np.repeat(data, 4, axis=0)
    return PixelBuffer(np.ascontiguousarray(data))


@pytest.fixture
def random_rgba_buffer():
    """Random RGBA buffer with a varied alpha channel."""
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(37, 53, 4), dtype=np.uint8)
    return PixelBuffer(data)


@pytest.fixture
def sample_image_path(tmp_path):
    """Small RGB gradient saved as PNG."""
    x = np.linspace(0, 255, 64).astype(np.uint8)
    img = np.zeros((32, 64, 3), dtype=np.uint8)
    img[..., 0] = x
    img[..., 1] = x[::-1]
    img[..., 2] = 128

    path = tmp_path / "gradient.png"
    Image.fromarray(img).save(path)
    return path
