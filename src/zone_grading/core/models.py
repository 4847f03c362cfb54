"""
Core data models for zone grading.

Zone records use Pydantic for validation and serialization. Field names are
snake_case in Python and camelCase on the wire (``rangeEnd``, ``isEnabled``),
so zone records round-trip through plain JSON objects.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from zone_grading.core.types import (
    SLIDER_MAX,
    SLIDER_MIN,
    ZONE_ORDER,
    ZoneDirection,
    ZoneType,
)


class ZoneConfig(BaseModel):
    """A single grading zone: where it applies and what it does."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: ZoneType = Field(..., description="Zone identity")
    label: str = Field(default="", description="Display name")
    color: str = Field(default="#808080", description="Display color (hex)")

    # Positioning (stops relative to middle gray)
    range_end: float = Field(..., description="Cutoff stop where influence reaches zero")
    min_range: Optional[float] = Field(default=None, description="Lower limit for range_end")
    max_range: Optional[float] = Field(default=None, description="Upper limit for range_end")
    falloff: float = Field(default=0.2, ge=0.0, description="Transition width in stops")
    direction: ZoneDirection = Field(default=ZoneDirection.LOW)

    # Grading values
    exposure: float = Field(default=0.0, description="Stop offset at full weight")
    saturation: float = Field(default=1.0, ge=0.0, description="Saturation multiplier")

    # Interaction state
    is_enabled: bool = Field(default=True)
    is_range_unlocked: bool = Field(
        default=False, description="Widen range limits to the global slider limits"
    )

    @model_validator(mode="after")
    def validate_range_limits(self) -> "ZoneConfig":
        """Ensure min_range does not exceed max_range."""
        if (
            self.min_range is not None
            and self.max_range is not None
            and self.min_range > self.max_range
        ):
            raise ValueError(
                f"min_range ({self.min_range}) must not exceed max_range ({self.max_range})"
            )
        return self

    @property
    def is_neutral(self) -> bool:
        """True when the zone would not change any pixel."""
        return self.exposure == 0 and self.saturation == 1

    @property
    def is_active(self) -> bool:
        """True when the zone is enabled and has a non-neutral adjustment."""
        return self.is_enabled and not self.is_neutral

    def range_limits(self) -> tuple[float, float]:
        """Allowed interval for range_end given the lock state."""
        if self.is_range_unlocked:
            return SLIDER_MIN, SLIDER_MAX
        lo = self.min_range if self.min_range is not None else SLIDER_MIN
        hi = self.max_range if self.max_range is not None else SLIDER_MAX
        return lo, hi

    def clamp_range_end(self, value: float) -> float:
        """Clamp a proposed cutoff into this zone's allowed interval."""
        lo, hi = self.range_limits()
        return max(lo, min(hi, value))

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready record with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class CurvePoint(BaseModel):
    """One sample of the combined tone curve."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    input_stop: float
    output_stop: float
    weights: dict[ZoneType, float] = Field(default_factory=dict)


@dataclass(frozen=True)
class ZoneSet:
    """Immutable snapshot of the six grading zones.

    Zones are kept in canonical order (Black through Specular) and can be
    looked up by ``ZoneType``. Editing operations return a new snapshot, so a
    single instance can be shared between curve generation and image grading.
    """

    zones: tuple[ZoneConfig, ...]

    def __post_init__(self) -> None:
        zones = tuple(self.zones)
        ids = [z.id for z in zones]

        duplicates = sorted({z.value for z in ids if ids.count(z) > 1})
        if duplicates:
            raise ValueError(f"Duplicate zone ids: {', '.join(duplicates)}")

        missing = [z.value for z in ZONE_ORDER if z not in ids]
        if missing:
            raise ValueError(f"Missing zones: {', '.join(missing)}")

        ordered = tuple(sorted(zones, key=lambda z: ZONE_ORDER.index(z.id)))
        object.__setattr__(self, "zones", ordered)

    @classmethod
    def default(cls) -> "ZoneSet":
        """The factory zone layout."""
        # Import here to avoid circular imports
        from zone_grading.zones.defaults import DEFAULT_ZONES

        return cls(DEFAULT_ZONES)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "ZoneSet":
        """Build from JSON-style records (camelCase or snake_case keys)."""
        return cls(tuple(ZoneConfig.model_validate(r) for r in records))

    def __iter__(self) -> Iterator[ZoneConfig]:
        return iter(self.zones)

    def __len__(self) -> int:
        return len(self.zones)

    def __getitem__(self, zone_id: ZoneType | str) -> ZoneConfig:
        zone_id = ZoneType(zone_id)
        for zone in self.zones:
            if zone.id is zone_id:
                return zone
        raise KeyError(zone_id)

    def update(self, zone_id: ZoneType | str, **changes: Any) -> "ZoneSet":
        """Return a new snapshot with one zone's fields replaced.

        Changes are validated and may use field names or their camelCase
        aliases; a ``range_end`` change is not clamped here, use
        :meth:`ZoneConfig.clamp_range_end` for slider-style edits.

        Raises:
            ValueError: If a change names an unknown field.
        """
        names = {}
        for name, info in ZoneConfig.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name

        unknown = sorted(key for key in changes if key not in names)
        if unknown:
            raise ValueError(f"Unknown zone fields: {', '.join(unknown)}")

        target = self[zone_id]
        fields = target.model_dump()
        fields.update({names[key]: value for key, value in changes.items()})
        updated = ZoneConfig.model_validate(fields)
        return ZoneSet(tuple(updated if z.id is target.id else z for z in self.zones))

    def reset(self, zone_id: ZoneType | str) -> "ZoneSet":
        """Restore a zone's placement and grade to factory values."""
        from zone_grading.zones.defaults import default_zone

        initial = default_zone(zone_id)
        return self.update(
            zone_id,
            range_end=initial.range_end,
            falloff=initial.falloff,
            exposure=initial.exposure,
            saturation=initial.saturation,
            direction=initial.direction,
            is_enabled=True,
            is_range_unlocked=False,
        )

    def toggle_direction(self, zone_id: ZoneType | str) -> "ZoneSet":
        """Flip a zone between low-pass and high-pass."""
        zone = self[zone_id]
        return self.update(zone_id, direction=zone.direction.opposite)

    def active(self) -> list[ZoneConfig]:
        """Zones that would change at least one pixel."""
        return [z for z in self.zones if z.is_active]

    def to_list(self) -> list[dict[str, Any]]:
        """JSON-ready list of zone records."""
        return [z.to_dict() for z in self.zones]
