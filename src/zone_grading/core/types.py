"""
Domain-specific types, enumerations and constants for zone grading.
"""

from enum import Enum

# Visualization domain for tone curves (stops relative to middle gray)
MIN_STOP = -8.0
MAX_STOP = 8.0

# Global limits for the zone cutoff when a zone's range is unlocked
SLIDER_MIN = -6.0
SLIDER_MAX = 6.0

# Smallest usable falloff width (stops)
FALLOFF_EPSILON = 0.01

# Linear reflectance of middle gray, the 0 EV reference
MIDDLE_GRAY = 0.18

# Display gamma used for 8-bit encode/decode
DISPLAY_GAMMA = 2.2

# Linear luminance at or below this maps to STOP_FLOOR
LUMINANCE_FLOOR = 1e-6
STOP_FLOOR = -10.0

# Rec. 709 luma coefficients
REC709_WEIGHTS = (0.2126, 0.7152, 0.0722)


class ZoneType(str, Enum):
    """The six luminance zones, darkest first."""

    BLACK = "Black"
    DARK = "Dark"
    SHADOW = "Shadow"
    LIGHT = "Light"
    HIGHLIGHT = "Highlight"
    SPECULAR = "Specular"


class ZoneDirection(str, Enum):
    """Which side of the cutoff a zone passes."""

    LOW = "low"  # Full weight below the cutoff
    HIGH = "high"  # Full weight above the cutoff

    @property
    def opposite(self) -> "ZoneDirection":
        """The mirrored direction."""
        return ZoneDirection.HIGH if self is ZoneDirection.LOW else ZoneDirection.LOW


ZONE_ORDER: tuple[ZoneType, ...] = tuple(ZoneType)
