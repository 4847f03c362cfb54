"""
Tone curve generation.

Samples the combined effect of all zones across the visualization domain.
Exposure offsets stack additively in stop space, which is the same as
multiplying linear light, so the curve maps input stops to output stops as

    output = input + sum(zone.exposure * weight(input, zone))
"""

from collections.abc import Iterable
from typing import Optional

import numpy as np

from zone_grading.config import CurveSettings, GradingSettings, get_settings
from zone_grading.core.logging import LoggingMixin, log_operation
from zone_grading.core.models import CurvePoint, ZoneConfig
from zone_grading.core.types import FALLOFF_EPSILON, MAX_STOP, MIN_STOP, ZONE_ORDER
from zone_grading.zones.weights import zone_weight

DEFAULT_STEPS = 200


def generate_curve(
    zones: Iterable[ZoneConfig],
    steps: int = DEFAULT_STEPS,
    min_stop: float = MIN_STOP,
    max_stop: float = MAX_STOP,
    epsilon: float = FALLOFF_EPSILON,
) -> list[CurvePoint]:
    """
    Sample the zone tone curve.

    Args:
        zones: Zones to combine. Disabled zones are recorded with weight 0.
        steps: Number of intervals; ``steps + 1`` points are returned.
        min_stop: First input stop.
        max_stop: Last input stop.
        epsilon: Smallest usable falloff.

    Returns:
        Points in increasing input order, each with per-zone weights.
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    zones = list(zones)
    step_size = (max_stop - min_stop) / steps
    points: list[CurvePoint] = []

    for i in range(steps + 1):
        input_stop = min_stop + i * step_size
        output_stop = input_stop
        weights = {}

        for zone in zones:
            w = zone_weight(input_stop, zone, epsilon)
            weights[zone.id] = w
            output_stop += zone.exposure * w

        points.append(
            CurvePoint(input_stop=input_stop, output_stop=output_stop, weights=weights)
        )

    return points


def curve_arrays(points: list[CurvePoint]) -> dict[str, np.ndarray]:
    """
    Columnar view of a curve for plotting.

    Returns:
        Dict with ``input`` and ``output`` arrays plus one weight array per
        zone present in the curve, keyed by zone name.
    """
    arrays = {
        "input": np.array([p.input_stop for p in points], dtype=np.float64),
        "output": np.array([p.output_stop for p in points], dtype=np.float64),
    }
    present = [z for z in ZONE_ORDER if points and z in points[0].weights]
    for zone_id in present:
        arrays[zone_id.value] = np.array([p.weights[zone_id] for p in points], dtype=np.float64)
    return arrays


class CurveGenerator(LoggingMixin):
    """
    Generates zone tone curves with configured sampling.

    The curve is always fully regenerated; there is no incremental update
    when a single zone changes.
    """

    def __init__(
        self,
        settings: CurveSettings | None = None,
        grading: GradingSettings | None = None,
    ):
        """
        Initialize the curve generator.

        Args:
            settings: Curve sampling settings.
            grading: Weighting settings (falloff epsilon).
        """
        self.settings = settings or get_settings().curves
        self.grading = grading or get_settings().grading

    def generate(
        self,
        zones: Iterable[ZoneConfig],
        steps: Optional[int] = None,
    ) -> list[CurvePoint]:
        """
        Generate the tone curve for a zone snapshot.

        Args:
            zones: Zones to combine.
            steps: Override the configured number of intervals.

        Returns:
            ``steps + 1`` curve points.
        """
        steps = steps if steps is not None else self.settings.steps
        with log_operation(self.logger, "generate_curve", steps=steps):
            return generate_curve(
                zones,
                steps=steps,
                min_stop=self.settings.min_stop,
                max_stop=self.settings.max_stop,
                epsilon=self.grading.falloff_epsilon,
            )
