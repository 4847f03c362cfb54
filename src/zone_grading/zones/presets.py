"""
Zone presets: built-in looks and JSON persistence.

A preset file is a JSON object ``{"name": ..., "zones": [...]}`` whose zone
records use camelCase keys. A bare list of zone records is accepted on load.
"""

import json
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Optional

from zone_grading.core.logging import get_logger
from zone_grading.core.models import ZoneConfig, ZoneSet
from zone_grading.core.types import ZoneType

logger = get_logger(__name__)


def _neutral() -> ZoneSet:
    return ZoneSet.default()


def _cyberpunk() -> ZoneSet:
    """Crushed, saturated blacks with hot, punchy highlights."""
    return (
        ZoneSet.default()
        .update(ZoneType.BLACK, exposure=-1.0, saturation=1.2)
        .update(ZoneType.HIGHLIGHT, exposure=0.8, saturation=1.3)
    )


def _vintage_film() -> ZoneSet:
    """Lifted blacks, held-back highlights and muted color."""
    zones = (
        ZoneSet.default()
        .update(ZoneType.BLACK, exposure=0.8, range_end=-5.0)
        .update(ZoneType.HIGHLIGHT, exposure=-0.5)
    )
    for zone_id in (ZoneType.DARK, ZoneType.SHADOW, ZoneType.LIGHT, ZoneType.SPECULAR):
        zones = zones.update(zone_id, saturation=0.85)
    return zones


BUILTIN_PRESETS: dict[str, Callable[[], ZoneSet]] = {
    "neutral": _neutral,
    "cyberpunk": _cyberpunk,
    "vintage_film": _vintage_film,
}


def list_presets() -> list[str]:
    """Names of the built-in presets."""
    return sorted(BUILTIN_PRESETS)


def get_preset(name: str) -> ZoneSet:
    """Build a built-in preset by name.

    Raises:
        KeyError: If no preset has that name.
    """
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    if key not in BUILTIN_PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(list_presets())}")
    return BUILTIN_PRESETS[key]()


def save_zones(zones: Iterable[ZoneConfig], path: Path, name: Optional[str] = None) -> Path:
    """
    Save zones to a JSON preset file.

    Args:
        zones: Zones to save (a ZoneSet or any iterable of ZoneConfig).
        path: Output file path.
        name: Preset name; defaults to the file stem.

    Returns:
        Path written.
    """
    path = Path(path)
    data = {
        "name": name or path.stem,
        "zones": [zone.to_dict() for zone in zones],
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)

    logger.debug(f"Saved {len(data['zones'])} zones", extra={"path": str(path)})
    return path


def load_zones(path: Path) -> ZoneSet:
    """
    Load a zone preset from a JSON file.

    Args:
        path: Path to preset file.

    Returns:
        Validated ZoneSet.

    Raises:
        ValueError: If the file does not hold a zone list or the zones are
            incomplete or duplicated.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, dict):
        records = data.get("zones")
    else:
        records = data

    if not isinstance(records, list):
        raise ValueError(f"No zone list found in {path}")

    zones = ZoneSet.from_records(records)
    logger.debug(f"Loaded {len(zones)} zones", extra={"path": str(path)})
    return zones
