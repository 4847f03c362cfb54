"""
Luminance zones: weighting model, factory layout and presets.
"""

from zone_grading.zones.defaults import DEFAULT_ZONES, ZONE_DESCRIPTIONS, default_zone
from zone_grading.zones.presets import (
    BUILTIN_PRESETS,
    get_preset,
    list_presets,
    load_zones,
    save_zones,
)
from zone_grading.zones.weights import (
    exposure_offset,
    smooth_falloff,
    smoothstep,
    zone_weight,
    zone_weights,
)

__all__ = [
    # Weights
    "smoothstep",
    "smooth_falloff",
    "zone_weight",
    "zone_weights",
    "exposure_offset",
    # Defaults
    "DEFAULT_ZONES",
    "ZONE_DESCRIPTIONS",
    "default_zone",
    # Presets
    "BUILTIN_PRESETS",
    "get_preset",
    "list_presets",
    "load_zones",
    "save_zones",
]
