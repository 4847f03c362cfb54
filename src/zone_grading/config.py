"""
Configuration management for zone grading.

Uses pydantic-settings for environment-based configuration with validation.
All settings can be overridden via environment variables with the
ZONE_GRADING_ prefix.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zone_grading.core.types import (
    DISPLAY_GAMMA,
    FALLOFF_EPSILON,
    LUMINANCE_FLOOR,
    MAX_STOP,
    MIDDLE_GRAY,
    MIN_STOP,
    STOP_FLOOR,
)

load_dotenv()


class GradingSettings(BaseSettings):
    """Settings for the weighting model and pixel transform."""

    model_config = SettingsConfigDict(env_prefix="ZONE_GRADING_GRADING_")

    falloff_epsilon: float = Field(default=FALLOFF_EPSILON, gt=0.0, le=1.0)
    gamma: float = Field(default=DISPLAY_GAMMA, ge=1.0, le=3.0)
    middle_gray: float = Field(default=MIDDLE_GRAY, gt=0.0, lt=1.0)
    luminance_floor: float = Field(default=LUMINANCE_FLOOR, gt=0.0, le=1e-2)
    stop_floor: float = Field(default=STOP_FLOOR, le=MIN_STOP)

    # Overlapping zones can drive the summed saturation below zero
    clamp_saturation: bool = Field(
        default=False,
        description="Clamp the aggregated saturation multiplier to >= 0",
    )

    # Rows graded per numpy pass
    chunk_rows: int = Field(default=512, ge=1, le=65536)


class CurveSettings(BaseSettings):
    """Settings for tone curve sampling."""

    model_config = SettingsConfigDict(env_prefix="ZONE_GRADING_CURVE_")

    steps: int = Field(default=200, ge=1, le=10000)
    min_stop: float = Field(default=MIN_STOP, ge=-16.0, le=0.0)
    max_stop: float = Field(default=MAX_STOP, ge=0.0, le=16.0)

    @model_validator(mode="after")
    def validate_domain(self) -> "CurveSettings":
        """Ensure the sampled domain is not empty."""
        if self.min_stop >= self.max_stop:
            raise ValueError(
                f"min_stop ({self.min_stop}) must be less than max_stop ({self.max_stop})"
            )
        return self


class ImageSettings(BaseSettings):
    """Settings for image loading and export."""

    model_config = SettingsConfigDict(env_prefix="ZONE_GRADING_IMAGE_")

    max_preview_width: int = Field(default=1200, ge=16, le=16384)
    jpeg_quality: int = Field(default=90, ge=1, le=100)


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings."""

    model_config = SettingsConfigDict(
        env_prefix="ZONE_GRADING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Zone Grading")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    grading: GradingSettings = Field(default_factory=GradingSettings)
    curves: CurveSettings = Field(default_factory=CurveSettings)
    image: ImageSettings = Field(default_factory=ImageSettings)


# Global settings instance - lazy loaded
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Optional[Settings] = None, **kwargs) -> Settings:
    """
    Configure the global settings.

    Args:
        settings: Optional Settings instance to use directly
        **kwargs: Settings overrides

    Returns:
        The configured Settings instance
    """
    global _settings
    if settings is not None:
        _settings = settings
    elif kwargs:
        _settings = Settings(**kwargs)
    else:
        _settings = Settings()
    return _settings
