"""
Zone weighting model.

Each zone is a low-pass or high-pass band over input luminance (in stops).
Its influence is 1 well inside the band, 0 outside, and eases between the
two across ``falloff`` stops with a cubic Hermite smoothstep, which has zero
slope at both ends of the transition so neighboring samples never show a kink.

The scalar and array forms here are the single source of truth for zone
influence; the tone curve and the image grader both evaluate through them.
"""

from collections.abc import Iterable

import numpy as np

from zone_grading.core.models import ZoneConfig
from zone_grading.core.types import FALLOFF_EPSILON, ZoneDirection


def smoothstep(t):
    """Cubic Hermite ease ``t^2 (3 - 2t)`` for t in [0, 1].

    Works on floats and numpy arrays.
    """
    return t * t * (3.0 - 2.0 * t)


def smooth_falloff(
    value: float,
    edge: float,
    falloff: float,
    direction: ZoneDirection,
    epsilon: float = FALLOFF_EPSILON,
) -> float:
    """Weight of a single band edge at ``value``.

    Args:
        value: Input luminance in stops.
        edge: Cutoff stop. Weight is 0 at the edge.
        falloff: Transition width in stops; clamped to ``epsilon``.
        direction: LOW passes values below the edge, HIGH passes values above.
        epsilon: Smallest usable falloff.

    Returns:
        Weight in [0, 1].
    """
    f = max(falloff, epsilon)

    if direction == ZoneDirection.LOW:
        if value >= edge:
            return 0.0
        if value <= edge - f:
            return 1.0
        t = (value - (edge - f)) / f
        return 1.0 - smoothstep(t)

    if value <= edge:
        return 0.0
    if value >= edge + f:
        return 1.0
    t = (value - edge) / f
    return smoothstep(t)


def zone_weight(stop: float, zone: ZoneConfig, epsilon: float = FALLOFF_EPSILON) -> float:
    """Influence (0..1) of ``zone`` on a pixel whose luminance is ``stop`` EV."""
    if not zone.is_enabled:
        return 0.0
    return smooth_falloff(stop, zone.range_end, zone.falloff, zone.direction, epsilon)


def zone_weights(
    stops: np.ndarray,
    zone: ZoneConfig,
    epsilon: float = FALLOFF_EPSILON,
) -> np.ndarray:
    """Vectorized :func:`zone_weight` over an array of stops.

    Breakpoints are selected explicitly rather than through clipping alone
    so the result matches the scalar form exactly at and beyond the edges.
    """
    stops = np.asarray(stops, dtype=np.float64)
    if not zone.is_enabled:
        return np.zeros_like(stops)

    f = max(zone.falloff, epsilon)
    edge = zone.range_end

    if zone.direction == ZoneDirection.LOW:
        t = np.clip((stops - (edge - f)) / f, 0.0, 1.0)
        return np.select(
            [stops >= edge, stops <= edge - f],
            [0.0, 1.0],
            default=1.0 - smoothstep(t),
        )

    t = np.clip((stops - edge) / f, 0.0, 1.0)
    return np.select(
        [stops <= edge, stops >= edge + f],
        [0.0, 1.0],
        default=smoothstep(t),
    )


def exposure_offset(
    stop: float,
    zones: Iterable[ZoneConfig],
    epsilon: float = FALLOFF_EPSILON,
) -> float:
    """Total stop offset at ``stop``: the weighted sum of zone exposures."""
    return sum(zone.exposure * zone_weight(stop, zone, epsilon) for zone in zones)
