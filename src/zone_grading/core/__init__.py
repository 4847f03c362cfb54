"""
Core data models, types and logging for zone grading.
"""

from zone_grading.core.models import CurvePoint, ZoneConfig, ZoneSet
from zone_grading.core.types import (
    FALLOFF_EPSILON,
    MAX_STOP,
    MIDDLE_GRAY,
    MIN_STOP,
    SLIDER_MAX,
    SLIDER_MIN,
    STOP_FLOOR,
    ZONE_ORDER,
    ZoneDirection,
    ZoneType,
)

__all__ = [
    # Models
    "CurvePoint",
    "ZoneConfig",
    "ZoneSet",
    # Types
    "ZoneDirection",
    "ZoneType",
    "ZONE_ORDER",
    # Constants
    "FALLOFF_EPSILON",
    "MAX_STOP",
    "MIDDLE_GRAY",
    "MIN_STOP",
    "SLIDER_MAX",
    "SLIDER_MIN",
    "STOP_FLOOR",
]
