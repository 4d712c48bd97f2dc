"""
Color pipeline for turning path traced radiance into display values.

Implements:
- ACES Filmic tone mapping (Narkowicz curve fit)
- Linear <-> sRGB transfer functions
- The exposure -> ACES -> sRGB pipeline used by the renderer
- 8-bit quantization

Every function accepts either a Vec3 color or a numpy array whose last
axis holds RGB, and returns the same kind.
"""

from __future__ import annotations
from typing import Union

import numpy as np

from .vec3 import Color

ColorLike = Union[Color, np.ndarray]

# ACES approximation constants
ACES_A = 2.51
ACES_B = 0.03
ACES_C = 2.43
ACES_D = 0.59
ACES_E = 0.14

SRGB_ENCODE_THRESHOLD = 0.0031308
SRGB_DECODE_THRESHOLD = 0.04045


def _as_array(value: ColorLike) -> np.ndarray:
    if isinstance(value, Color):
        return value.to_array()
    return np.asarray(value, dtype=np.float64)


def _like(template: ColorLike, result: np.ndarray) -> ColorLike:
    if isinstance(template, Color):
        return Color.from_array(result)
    return result


def aces_film(x: ColorLike) -> ColorLike:
    """Apply ACES filmic tone mapping.

    Uses the fitted curve approximation:
    (x * (a*x + b)) / (x * (c*x + d) + e)
    clamped to [0, 1].
    """
    arr = _as_array(x)
    result = (arr * (arr * ACES_A + ACES_B)) / (arr * (arr * ACES_C + ACES_D) + ACES_E)
    return _like(x, np.clip(result, 0.0, 1.0))


def linear_to_srgb(rgb: ColorLike) -> ColorLike:
    """Convert linear RGB to sRGB with the exact piecewise curve.

    - Linear for small values: 12.92 * x
    - Power curve for larger: 1.055 * x^(1/2.4) - 0.055

    Input is clamped to [0, 1] first.
    """
    if isinstance(rgb, Color):
        c = rgb.clamp(0.0, 1.0)
        curve = c.pow(1.0 / 2.4) * 1.055 - 0.055
        return curve.mix(c * 12.92, c.less_than(SRGB_ENCODE_THRESHOLD))

    arr = np.clip(_as_array(rgb), 0.0, 1.0)
    srgb = np.where(
        arr < SRGB_ENCODE_THRESHOLD,
        arr * 12.92,
        np.power(arr, 1.0 / 2.4) * 1.055 - 0.055,
    )
    return _like(rgb, srgb)


def srgb_to_linear(rgb: ColorLike) -> ColorLike:
    """Convert sRGB to linear RGB (inverse of linear_to_srgb)."""
    if isinstance(rgb, Color):
        c = rgb.clamp(0.0, 1.0)
        curve = ((c + 0.055) / 1.055).pow(2.4)
        return curve.mix(c / 12.92, c.less_than(SRGB_DECODE_THRESHOLD))

    arr = np.clip(_as_array(rgb), 0.0, 1.0)
    linear = np.where(
        arr < SRGB_DECODE_THRESHOLD,
        arr / 12.92,
        np.power((arr + 0.055) / 1.055, 2.4),
    )
    return _like(rgb, linear)


def apply_color_pipeline(radiance: ColorLike, exposure: float = 0.5) -> ColorLike:
    """Exposure scale, then ACES tone map, then sRGB encode.

    Args:
        radiance: Linear radiance (non-negative)
        exposure: Multiplicative scale applied before tone mapping

    Returns:
        Display-encoded color with components in [0, 1]
    """
    exposed = _like(radiance, _as_array(radiance) * exposure)
    return linear_to_srgb(aces_film(exposed))


def to_byte(x: float) -> int:
    """Map a channel in [0, 1] to 0..255 with rounding (clamps first)."""
    return int(min(max(x, 0.0), 1.0) * 255 + 0.5)


def quantize(image: ColorLike) -> np.ndarray:
    """Convert display values in [0, 1] to uint8, rounding to nearest."""
    arr = np.clip(_as_array(image), 0.0, 1.0)
    return np.floor(arr * 255 + 0.5).astype(np.uint8)
