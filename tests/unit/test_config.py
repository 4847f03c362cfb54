"""
Tests for configuration management.
"""

import pytest
from pydantic import ValidationError

from zone_grading.config import (
    CurveSettings,
    GradingSettings,
    ImageSettings,
    Settings,
    configure,
    get_settings,
)


class TestDefaults:
    """Default values match the grading model constants."""

    def test_grading_defaults(self):
        settings = GradingSettings()

        assert settings.falloff_epsilon == 0.01
        assert settings.gamma == 2.2
        assert settings.middle_gray == 0.18
        assert settings.stop_floor == -10.0
        assert settings.clamp_saturation is False
        assert settings.chunk_rows == 512

    def test_curve_defaults(self):
        settings = CurveSettings()

        assert settings.steps == 200
        assert settings.min_stop == -8.0
        assert settings.max_stop == 8.0

    def test_image_defaults(self):
        settings = ImageSettings()

        assert settings.max_preview_width == 1200
        assert settings.jpeg_quality == 90

    def test_settings_aggregate(self):
        settings = Settings()

        assert settings.app_name == "Zone Grading"
        assert isinstance(settings.grading, GradingSettings)
        assert isinstance(settings.curves, CurveSettings)
        assert isinstance(settings.image, ImageSettings)


class TestValidation:
    """Invalid settings are rejected."""

    def test_empty_curve_domain(self):
        with pytest.raises(ValidationError):
            CurveSettings(min_stop=0.0, max_stop=0.0)

    def test_zero_steps(self):
        with pytest.raises(ValidationError):
            CurveSettings(steps=0)

    def test_zero_epsilon(self):
        with pytest.raises(ValidationError):
            GradingSettings(falloff_epsilon=0.0)

    def test_zero_chunk_rows(self):
        with pytest.raises(ValidationError):
            GradingSettings(chunk_rows=0)

    def test_jpeg_quality_range(self):
        with pytest.raises(ValidationError):
            ImageSettings(jpeg_quality=101)


class TestEnvironment:
    """Settings read ZONE_GRADING_ environment variables."""

    def test_curve_steps_from_env(self, monkeypatch):
        monkeypatch.setenv("ZONE_GRADING_CURVE_STEPS", "50")
        assert CurveSettings().steps == 50

    def test_clamp_saturation_from_env(self, monkeypatch):
        monkeypatch.setenv("ZONE_GRADING_GRADING_CLAMP_SATURATION", "true")
        assert Settings().grading.clamp_saturation is True

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("ZONE_GRADING_LOG_LEVEL", "DEBUG")
        assert Settings().log_level == "DEBUG"


class TestGlobalSettings:
    """Tests for get_settings and configure."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_configure_with_overrides(self):
        settings = configure(debug=True)

        assert settings.debug is True
        assert get_settings() is settings

    def test_configure_with_instance(self):
        custom = Settings(curves=CurveSettings(steps=12))
        configure(custom)

        assert get_settings().curves.steps == 12

    def test_configured_settings_reach_generator(self, default_zones):
        from zone_grading.curves.generator import CurveGenerator

        configure(Settings(curves=CurveSettings(steps=6)))
        assert len(CurveGenerator().generate(default_zones)) == 7
