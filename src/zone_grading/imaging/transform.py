"""
Pixel transform primitives.

Conversions between gamma-encoded 8-bit channels, linear light, luminance
and stops. A plain 2.2 power law stands in for the sRGB transfer curve.
Every function accepts Python floats or numpy arrays; scalar input gives a
float back.
"""

import functools

import numpy as np

from zone_grading.core.types import (
    DISPLAY_GAMMA,
    LUMINANCE_FLOOR,
    MIDDLE_GRAY,
    REC709_WEIGHTS,
    STOP_FLOOR,
)


def _like_input(value, result):
    """Return a float for scalar input, the array otherwise."""
    return float(result) if np.ndim(value) == 0 else result


def gamma_to_linear(channel, gamma: float = DISPLAY_GAMMA):
    """Decode an 8-bit channel value (0..255) to linear light (0..1)."""
    result = (np.asarray(channel, dtype=np.float64) / 255.0) ** gamma
    return _like_input(channel, result)


def linear_to_gamma(value, gamma: float = DISPLAY_GAMMA):
    """Encode linear light to an 8-bit channel value, clamped to [0, 255].

    Negative linear values (possible after saturation extrapolation) encode
    to 0. The result is not rounded.
    """
    linear = np.maximum(np.asarray(value, dtype=np.float64), 0.0)
    result = np.clip(linear ** (1.0 / gamma) * 255.0, 0.0, 255.0)
    return _like_input(value, result)


def luminance(r, g, b):
    """Rec. 709 luminance of linear RGB."""
    wr, wg, wb = REC709_WEIGHTS
    return wr * r + wg * g + wb * b


def linear_to_stop(
    y,
    middle_gray: float = MIDDLE_GRAY,
    floor: float = LUMINANCE_FLOOR,
    stop_floor: float = STOP_FLOOR,
):
    """Stops relative to middle gray; near-black maps to ``stop_floor``."""
    arr = np.asarray(y, dtype=np.float64)
    stops = np.where(
        arr <= floor,
        stop_floor,
        np.log2(np.maximum(arr, floor) / middle_gray),
    )
    return _like_input(y, stops)


def stop_to_linear(ev, middle_gray: float = MIDDLE_GRAY):
    """Linear value at ``ev`` stops from middle gray. Inverse of linear_to_stop."""
    result = middle_gray * np.power(2.0, np.asarray(ev, dtype=np.float64))
    return _like_input(ev, result)


@functools.lru_cache(maxsize=8)
def decode_lut(gamma: float = DISPLAY_GAMMA) -> np.ndarray:
    """256-entry table of :func:`gamma_to_linear` for every 8-bit code.

    The returned array is read-only and shared between callers.
    """
    lut = gamma_to_linear(np.arange(256, dtype=np.float64), gamma)
    lut.setflags(write=False)
    return lut


def encode_channels(linear: np.ndarray, gamma: float = DISPLAY_GAMMA) -> np.ndarray:
    """Encode linear channels to uint8, rounding half to even.

    NaN encodes to 0 and infinities clamp to the ends of the range.
    """
    finite = np.nan_to_num(
        linear, nan=0.0, posinf=np.finfo(np.float64).max, neginf=0.0
    )
    return np.rint(linear_to_gamma(finite, gamma)).astype(np.uint8)
