"""
Tests for tone curve generation and export.
"""

import csv
import json

import numpy as np
import pytest

from zone_grading.config import CurveSettings
from zone_grading.core.types import MAX_STOP, MIN_STOP, ZONE_ORDER, ZoneType
from zone_grading.curves.export import (
    CSVExporter,
    JSONExporter,
    load_curve,
    save_curve,
)
from zone_grading.curves.generator import CurveGenerator, curve_arrays, generate_curve
from zone_grading.zones.weights import zone_weight


@pytest.fixture
def graded_zones(default_zones):
    """Default layout with a lifted shadow and a pulled highlight."""
    return default_zones.update(ZoneType.SHADOW, exposure=0.5).update(
        ZoneType.HIGHLIGHT, exposure=-1.0
    )


class TestGenerateCurve:
    """Tests for generate_curve."""

    def test_point_count(self, default_zones):
        assert len(generate_curve(default_zones)) == 201
        assert len(generate_curve(default_zones, steps=10)) == 11
        assert len(generate_curve(default_zones, steps=1)) == 2

    def test_domain(self, default_zones):
        points = generate_curve(default_zones)

        assert points[0].input_stop == MIN_STOP
        assert points[-1].input_stop == pytest.approx(MAX_STOP)
        inputs = [p.input_stop for p in points]
        assert inputs == sorted(inputs)

    def test_custom_domain(self, default_zones):
        points = generate_curve(default_zones, steps=4, min_stop=-2.0, max_stop=2.0)
        assert [p.input_stop for p in points] == pytest.approx([-2.0, -1.0, 0.0, 1.0, 2.0])

    def test_neutral_zones_give_identity(self, default_zones):
        for p in generate_curve(default_zones):
            assert p.output_stop == p.input_stop

    def test_no_zones_gives_identity(self):
        points = generate_curve([], steps=8)

        assert all(p.output_stop == p.input_stop for p in points)
        assert all(p.weights == {} for p in points)

    def test_weights_recorded_for_every_zone(self, default_zones):
        for p in generate_curve(default_zones, steps=20):
            assert set(p.weights) == set(ZONE_ORDER)
            assert all(0.0 <= w <= 1.0 for w in p.weights.values())

    def test_output_matches_weighted_exposure(self, graded_zones):
        """Each output equals the input plus every zone's weighted exposure."""
        for p in generate_curve(graded_zones):
            expected = p.input_stop + sum(
                zone.exposure * zone_weight(p.input_stop, zone) for zone in graded_zones
            )
            assert p.output_stop == pytest.approx(expected, abs=1e-12)

    def test_weights_match_zone_weight(self, graded_zones):
        for p in generate_curve(graded_zones, steps=50):
            for zone in graded_zones:
                assert p.weights[zone.id] == zone_weight(p.input_stop, zone)

    def test_disabled_zone_has_zero_weight(self, graded_zones):
        zones = graded_zones.update(ZoneType.SHADOW, is_enabled=False)

        for p in generate_curve(zones, steps=40):
            assert p.weights[ZoneType.SHADOW] == 0.0

    def test_all_disabled_gives_identity(self, graded_zones):
        """Disabled zones contribute nothing even with non-zero exposure."""
        zones = graded_zones
        for zone in graded_zones:
            zones = zones.update(zone.id, is_enabled=False)

        for p in generate_curve(zones):
            assert p.output_stop == p.input_stop
            assert all(w == 0.0 for w in p.weights.values())

    def test_shadow_lift_raises_low_end(self, graded_zones):
        points = generate_curve(graded_zones, steps=16)

        # Deep shadows get the full Shadow lift, bright end the Highlight cut
        assert points[0].output_stop == pytest.approx(MIN_STOP + 0.5)
        assert points[-1].output_stop == pytest.approx(MAX_STOP - 1.0)

    def test_invalid_steps(self, default_zones):
        with pytest.raises(ValueError):
            generate_curve(default_zones, steps=0)


class TestCurveArrays:
    """Tests for the columnar curve view."""

    def test_columns(self, graded_zones):
        points = generate_curve(graded_zones, steps=10)
        arrays = curve_arrays(points)

        assert set(arrays) == {"input", "output", *[z.value for z in ZONE_ORDER]}
        assert arrays["input"].shape == (11,)
        np.testing.assert_allclose(arrays["output"], [p.output_stop for p in points])
        np.testing.assert_allclose(
            arrays["Shadow"], [p.weights[ZoneType.SHADOW] for p in points]
        )

    def test_empty(self):
        arrays = curve_arrays([])
        assert set(arrays) == {"input", "output"}
        assert arrays["input"].size == 0


class TestCurveGenerator:
    """Tests for CurveGenerator."""

    def test_uses_configured_steps(self, default_zones):
        generator = CurveGenerator(settings=CurveSettings(steps=8))
        assert len(generator.generate(default_zones)) == 9

    def test_steps_override(self, default_zones):
        generator = CurveGenerator(settings=CurveSettings(steps=8))
        assert len(generator.generate(default_zones, steps=3)) == 4

    def test_configured_domain(self, default_zones):
        generator = CurveGenerator(settings=CurveSettings(steps=4, min_stop=-4.0, max_stop=4.0))
        points = generator.generate(default_zones)

        assert points[0].input_stop == -4.0
        assert points[-1].input_stop == pytest.approx(4.0)

    def test_matches_function(self, graded_zones):
        assert CurveGenerator().generate(graded_zones) == generate_curve(graded_zones)

    def test_invalid_steps_propagate(self, default_zones):
        with pytest.raises(ValueError):
            CurveGenerator().generate(default_zones, steps=0)


class TestCurveExport:
    """Tests for curve export."""

    def test_json_export(self, graded_zones, tmp_path):
        points = generate_curve(graded_zones, steps=10)
        path = tmp_path / "curve.json"
        JSONExporter().export(points, path)

        with open(path) as f:
            data = json.load(f)

        assert data["num_points"] == 11
        assert "generated" in data
        first = data["points"][0]
        assert set(first) == {"inputStop", "outputStop", "weights"}
        assert set(first["weights"]) == {z.value for z in ZONE_ORDER}

    def test_json_round_trip(self, graded_zones, tmp_path):
        points = generate_curve(graded_zones, steps=10)
        path = tmp_path / "curve.json"
        save_curve(points, path)

        assert load_curve(path) == points

    def test_csv_export(self, graded_zones, tmp_path):
        points = generate_curve(graded_zones, steps=10)
        path = tmp_path / "nested" / "curve.csv"
        save_curve(points, path)

        with open(path, newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["input_stop", "output_stop", *[z.value for z in ZONE_ORDER]]
        assert len(rows) == 12
        assert float(rows[1][0]) == pytest.approx(MIN_STOP)
        assert float(rows[1][1]) == pytest.approx(points[0].output_stop, abs=1e-6)

    def test_explicit_format_overrides_suffix(self, default_zones, tmp_path):
        points = generate_curve(default_zones, steps=2)
        path = tmp_path / "curve.txt"
        save_curve(points, path, format="CSV")

        assert path.read_text().startswith("input_stop,output_stop")

    def test_unsupported_format(self, default_zones, tmp_path):
        points = generate_curve(default_zones, steps=2)
        with pytest.raises(ValueError, match="Unsupported"):
            save_curve(points, tmp_path / "curve.qtr", format="qtr")

    def test_format_names(self):
        assert CSVExporter().get_format_name() == "CSV"
        assert JSONExporter().get_format_name() == "JSON"
