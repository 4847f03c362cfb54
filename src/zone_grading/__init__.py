"""
Zone Grading - zone-based tone and color grading engine.

Six overlapping luminance zones (Black, Dark, Shadow, Light, Highlight,
Specular) each contribute a weighted exposure and saturation adjustment to
an image, with influence computed from per-pixel luminance in stops relative
to middle gray. This package provides:

- The smooth falloff weighting model for zones
- Tone curve generation for visualization
- Pixel transforms between 8-bit gamma, linear light and stops
- Image grading over RGB/RGBA buffers
- Zone presets, curve export and image I/O helpers
- A command-line interface
"""

__version__ = "0.1.0"

# Configuration
from zone_grading.config import (
    CurveSettings,
    GradingSettings,
    ImageSettings,
    Settings,
    configure,
    get_settings,
)

# Core models
from zone_grading.core.models import CurvePoint, ZoneConfig, ZoneSet
from zone_grading.core.types import MAX_STOP, MIN_STOP, ZoneDirection, ZoneType

# Curves
from zone_grading.curves import CurveGenerator, generate_curve, save_curve

# Imaging
from zone_grading.imaging import (
    ImageGrader,
    ImageProcessor,
    PixelBuffer,
    gamma_to_linear,
    grade,
    grade_image,
    linear_to_gamma,
    linear_to_stop,
    luminance,
    stop_to_linear,
)

# Zones
from zone_grading.zones import (
    DEFAULT_ZONES,
    get_preset,
    list_presets,
    load_zones,
    save_zones,
    smoothstep,
    zone_weight,
    zone_weights,
)

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "GradingSettings",
    "CurveSettings",
    "ImageSettings",
    "get_settings",
    "configure",
    # Core
    "ZoneConfig",
    "ZoneSet",
    "CurvePoint",
    "ZoneType",
    "ZoneDirection",
    "MIN_STOP",
    "MAX_STOP",
    # Zones
    "DEFAULT_ZONES",
    "smoothstep",
    "zone_weight",
    "zone_weights",
    "get_preset",
    "list_presets",
    "load_zones",
    "save_zones",
    # Curves
    "CurveGenerator",
    "generate_curve",
    "save_curve",
    # Imaging
    "gamma_to_linear",
    "linear_to_gamma",
    "luminance",
    "linear_to_stop",
    "stop_to_linear",
    "PixelBuffer",
    "ImageGrader",
    "ImageProcessor",
    "grade",
    "grade_image",
]
