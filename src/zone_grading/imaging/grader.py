"""
Zone-based image grading.

Applies the zone weighting model to every pixel of an 8-bit RGB(A) buffer:

1. Decode R, G, B to linear light.
2. Take Rec. 709 luminance and express it in stops from middle gray.
3. Weight every active zone at that stop and sum the exposure offsets and
   saturation deltas.
4. Scale the linear channels by ``2 ** exposure``. Working multiplicatively
   in linear light keeps per-channel ratios, and so hue, intact.
5. Push each channel toward or away from the post-exposure luminance by the
   saturation factor.
6. Re-encode with clamping to [0, 255]. Alpha is untouched.

Pixels are independent, so the buffer is processed as whole numpy arrays in
horizontal strips.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

import numpy as np

from zone_grading.config import GradingSettings, get_settings
from zone_grading.core.logging import LoggingMixin, log_operation
from zone_grading.core.models import ZoneConfig
from zone_grading.imaging.transform import (
    decode_lut,
    encode_channels,
    linear_to_stop,
    luminance,
)
from zone_grading.zones.weights import zone_weights

SUPPORTED_CHANNELS = (3, 4)

# Bound on the summed exposure so 2 ** exposure stays finite
EXPOSURE_LIMIT = 256.0


@dataclass(eq=False)
class PixelBuffer:
    """Interleaved 8-bit RGB or RGBA pixels, row-major.

    ``data`` has shape ``(height, width, channels)`` and dtype uint8. The
    buffer is mutable; graders copy it unless told to work in place.
    """

    data: np.ndarray

    def __post_init__(self) -> None:
        if not isinstance(self.data, np.ndarray):
            raise TypeError(f"Pixel data must be a numpy array, got {type(self.data)}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"Pixel data must be uint8, got {self.data.dtype}")
        if self.data.ndim != 3 or self.data.shape[2] not in SUPPORTED_CHANNELS:
            raise ValueError(f"Unsupported pixel array shape: {self.data.shape}")

    @classmethod
    def from_bytes(
        cls,
        raw: Union[bytes, bytearray, memoryview, np.ndarray],
        width: int,
        height: int,
        channels: int = 4,
    ) -> "PixelBuffer":
        """Wrap a flat interleaved sample sequence.

        Args:
            raw: width * height * channels samples.
            width: Pixels per row.
            height: Number of rows.
            channels: 3 (RGB) or 4 (RGBA).

        Raises:
            ValueError: On an unsupported channel count or a length mismatch.
        """
        if channels not in SUPPORTED_CHANNELS:
            raise ValueError(f"channels must be 3 or 4, got {channels}")

        if isinstance(raw, np.ndarray):
            flat = np.array(raw, dtype=np.uint8).ravel()
        else:
            flat = np.frombuffer(raw, dtype=np.uint8).copy()

        expected = width * height * channels
        if flat.size != expected:
            raise ValueError(
                f"Buffer holds {flat.size} samples, expected {expected} "
                f"({width}x{height}x{channels})"
            )
        return cls(flat.reshape(height, width, channels))

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def channels(self) -> int:
        return self.data.shape[2]

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.data.copy())

    def to_bytes(self) -> bytes:
        """Flat interleaved samples."""
        return self.data.tobytes()


def _grade_strip(
    strip: np.ndarray,
    zones: list[ZoneConfig],
    settings: GradingSettings,
) -> None:
    """Grade a (rows, width, channels) view in place."""
    rgb = decode_lut(settings.gamma)[strip[..., :3]]

    y = luminance(rgb[..., 0], rgb[..., 1], rgb[..., 2])
    ev = linear_to_stop(
        y,
        middle_gray=settings.middle_gray,
        floor=settings.luminance_floor,
        stop_floor=settings.stop_floor,
    )

    total_exposure = np.zeros_like(ev)
    total_saturation = np.ones_like(ev)
    for zone in zones:
        w = zone_weights(ev, zone, settings.falloff_epsilon)
        if zone.exposure != 0:
            total_exposure += zone.exposure * w
        if zone.saturation != 1:
            total_saturation += (zone.saturation - 1.0) * w

    if settings.clamp_saturation:
        np.maximum(total_saturation, 0.0, out=total_saturation)

    np.clip(total_exposure, -EXPOSURE_LIMIT, EXPOSURE_LIMIT, out=total_exposure)
    rgb *= np.exp2(total_exposure)[..., np.newaxis]

    needs_saturation = total_saturation != 1.0
    if needs_saturation.any():
        y_out = luminance(rgb[..., 0], rgb[..., 1], rgb[..., 2])[..., np.newaxis]
        saturated = y_out + (rgb - y_out) * total_saturation[..., np.newaxis]
        rgb = np.where(needs_saturation[..., np.newaxis], saturated, rgb)

    strip[..., :3] = encode_channels(rgb, settings.gamma)


def grade(
    buffer: PixelBuffer,
    zones: Iterable[ZoneConfig],
    *,
    in_place: bool = False,
    settings: GradingSettings | None = None,
    chunk_rows: int | None = None,
) -> PixelBuffer:
    """
    Grade an 8-bit RGB(A) buffer with a zone snapshot.

    Args:
        buffer: Source pixels.
        zones: Zones to apply. Disabled and neutral zones are skipped.
        in_place: Write into ``buffer`` instead of a copy.
        settings: Weighting and transfer settings.
        chunk_rows: Rows processed per strip; bounds temporary memory.

    Returns:
        Graded buffer with the same shape. When no zone is active the pixel
        values are identical to the input.

    Raises:
        ValueError: If ``chunk_rows`` is less than 1.
    """
    settings = settings or get_settings().grading
    chunk_rows = settings.chunk_rows if chunk_rows is None else chunk_rows
    if chunk_rows < 1:
        raise ValueError(f"chunk_rows must be at least 1, got {chunk_rows}")

    active = [z for z in zones if z.is_active]
    result = buffer if in_place else buffer.copy()
    if not active:
        return result

    data = result.data
    for start in range(0, result.height, chunk_rows):
        _grade_strip(data[start : start + chunk_rows], active, settings)

    return result


class ImageGrader(LoggingMixin):
    """
    Grades pixel buffers with configured settings and logs each pass.

    Holds no per-image state; one instance can grade any number of buffers.
    """

    def __init__(self, settings: GradingSettings | None = None):
        """
        Initialize the grader.

        Args:
            settings: Grading settings. Defaults to the global settings.
        """
        self.settings = settings or get_settings().grading

    def grade(
        self,
        buffer: PixelBuffer,
        zones: Iterable[ZoneConfig],
        in_place: bool = False,
    ) -> PixelBuffer:
        """Grade ``buffer``; see :func:`grade`."""
        zones = list(zones)
        active = sum(1 for z in zones if z.is_active)

        if not active:
            self.logger.debug("No active zones, returning pixels unchanged")
            return buffer if in_place else buffer.copy()

        with log_operation(
            self.logger,
            "grade",
            pixels=buffer.pixel_count,
            active_zones=active,
        ):
            return grade(buffer, zones, in_place=in_place, settings=self.settings)
