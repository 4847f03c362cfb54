"""
Factory zone layout.

Three low-pass zones cover the dark end and three high-pass zones cover the
bright end, with cutoffs staggered so neighboring bands overlap:

- Black:     below -4 EV, deepest blacks
- Dark:      below -1.5 EV, dark tones
- Shadow:    below +1 EV, shadows through lower midtones
- Light:     above -1 EV, midtones and up
- Highlight: above +1.5 EV, bright tones
- Specular:  above +4 EV, specular highlights

All grading values start neutral (exposure 0, saturation 1).
"""

from zone_grading.core.models import ZoneConfig
from zone_grading.core.types import ZoneDirection, ZoneType

DEFAULT_ZONES: tuple[ZoneConfig, ...] = (
    # Low range group (low pass)
    ZoneConfig(
        id=ZoneType.BLACK,
        label="Black",
        color="#ef4444",
        range_end=-4.0,
        min_range=-6.0,
        max_range=-1.5,
        falloff=0.1,
        direction=ZoneDirection.LOW,
    ),
    ZoneConfig(
        id=ZoneType.DARK,
        label="Dark",
        color="#f97316",
        range_end=-1.5,
        min_range=-4.0,
        max_range=1.0,
        falloff=0.2,
        direction=ZoneDirection.LOW,
    ),
    ZoneConfig(
        id=ZoneType.SHADOW,
        label="Shadow",
        color="#eab308",
        range_end=1.0,
        min_range=-1.5,
        max_range=6.0,
        falloff=0.22,
        direction=ZoneDirection.LOW,
    ),
    # High range group (high pass)
    ZoneConfig(
        id=ZoneType.LIGHT,
        label="Light",
        color="#22c55e",
        range_end=-1.0,
        min_range=-6.0,
        max_range=1.5,
        falloff=0.22,
        direction=ZoneDirection.HIGH,
    ),
    ZoneConfig(
        id=ZoneType.HIGHLIGHT,
        label="Highlight",
        color="#3b82f6",
        range_end=1.5,
        min_range=-1.0,
        max_range=4.0,
        falloff=0.2,
        direction=ZoneDirection.HIGH,
    ),
    ZoneConfig(
        id=ZoneType.SPECULAR,
        label="Specular",
        color="#a855f7",
        range_end=4.0,
        min_range=1.5,
        max_range=6.0,
        falloff=0.1,
        direction=ZoneDirection.HIGH,
    ),
)

ZONE_DESCRIPTIONS = {
    ZoneType.BLACK: "Deepest blacks, below the darkest shadow detail",
    ZoneType.DARK: "Dark tones with faint texture",
    ZoneType.SHADOW: "Shadows through the lower midtones",
    ZoneType.LIGHT: "Midtones and everything brighter, skin tones live here",
    ZoneType.HIGHLIGHT: "Bright tones with texture",
    ZoneType.SPECULAR: "Specular highlights and light sources",
}


def default_zone(zone_id: ZoneType | str) -> ZoneConfig:
    """Factory configuration for one zone."""
    zone_id = ZoneType(zone_id)
    for zone in DEFAULT_ZONES:
        if zone.id is zone_id:
            return zone
    raise KeyError(zone_id)
