"""
core/color/conversions.py — Color math shared by every analysis component.

Covers sRGB linearisation, WCAG relative luminance and contrast ratio,
RGB↔HSL and RGB↔hex. Scalar functions operate on 0–255 channels; the
`linearize()` / `luminance()` twins are vectorised for pixel arrays.

Design:
    - Pure functions, no state.
    - HSL math is delegated to stdlib `colorsys` (which orders it H-L-S);
      this module exposes the conventional (hue°, saturation, lightness)
      ordering with hue in [0, 360).
"""

from __future__ import annotations

import colorsys
import string

import numpy as np

RGB = tuple[int, int, int]

# Rec. 709 / sRGB luminance weights
_LUMA_WEIGHTS: tuple[float, float, float] = (0.2126, 0.7152, 0.0722)

_SRGB_KNEE = 0.04045

_HEX_DIGITS = frozenset(string.hexdigits)


def _clamp_byte(value: float) -> int:
    return int(max(0, min(255, round(value))))


# ---------------------------------------------------------------------------
# Luminance and contrast
# ---------------------------------------------------------------------------


def srgb_to_linear(channel: float) -> float:
    """Decode one gamma-encoded sRGB channel in [0, 1] to linear light."""
    if channel <= _SRGB_KNEE:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def linearize(values: np.ndarray) -> np.ndarray:
    """Vectorised `srgb_to_linear` over an array of [0, 1] channels."""
    v = np.asarray(values, dtype=np.float64)
    return np.where(v <= _SRGB_KNEE, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)


def relative_luminance(r: float, g: float, b: float) -> float:
    """WCAG relative luminance of an sRGB color given as 0–255 channels.

    Returns:
        Luminance in [0, 1]. Black → 0.0, white → 1.0.
    """
    wr, wg, wb = _LUMA_WEIGHTS
    return (
        wr * srgb_to_linear(r / 255.0)
        + wg * srgb_to_linear(g / 255.0)
        + wb * srgb_to_linear(b / 255.0)
    )


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Relative luminance for an (..., 3) array of 0–255 channels.

    Returns:
        Float array with the trailing channel axis removed.
    """
    linear = linearize(np.asarray(rgb, dtype=np.float64) / 255.0)
    return linear @ np.array(_LUMA_WEIGHTS)


def contrast_ratio(l1: float, l2: float) -> float:
    """WCAG contrast ratio between two relative luminances.

    Symmetric in its arguments. Ranges from 1.0 (identical) to 21.0
    (black on white). The +0.05 flare term keeps the denominator positive.
    """
    bright = max(l1, l2)
    dark = min(l1, l2)
    return (bright + 0.05) / (dark + 0.05)


def contrast_ratio_rgb(a: RGB, b: RGB) -> float:
    """Contrast ratio between two 0–255 RGB colors."""
    return contrast_ratio(relative_luminance(*a), relative_luminance(*b))


# ---------------------------------------------------------------------------
# HSL
# ---------------------------------------------------------------------------


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 0–255 RGB to (hue in degrees [0, 360), saturation, lightness)."""
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (h * 360.0) % 360.0, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert (hue°, saturation, lightness) back to rounded 0–255 RGB.

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 1].
    """
    s = max(0.0, min(1.0, s))
    l = max(0.0, min(1.0, l))
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l, s)
    return _clamp_byte(r * 255.0), _clamp_byte(g * 255.0), _clamp_byte(b * 255.0)


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Encode channels as a lowercase '#rrggbb' string (rounded, byte-clamped)."""
    return f"#{_clamp_byte(r):02x}{_clamp_byte(g):02x}{_clamp_byte(b):02x}"


def hex_to_rgb(value: str) -> RGB:
    """Decode '#rgb', '#rrggbb' (the '#' is optional) into an RGB triple.

    Raises:
        ValueError: If the string is not 3 or 6 hexadecimal digits.
    """
    digits = value.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6 or any(c not in _HEX_DIGITS for c in digits):
        raise ValueError(f"Invalid hex color {value!r}: expected 3 or 6 hex digits")
    packed = int(digits, 16)
    return (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF
