"""
core/cover_analysis/mood.py — Whole-image brightness, saturation, warmth and complexity.

Unlike the region metrics this pass covers every pixel (the decode step
caps the image at 512 px on its longest side) and ignores alpha.

    brightness  mean gamma-encoded luminance 0.2126R + 0.7152G + 0.0722B
    saturation  mean HSV saturation (max - min) / max
    warmth      mean clamp01(1 - min(|h - 30|, |h - 390|) / 180), peaking
                at orange and wrapping through red
    complexity  share of interior pixels whose central-difference gradient
                |L[x+1] - L[x-1]| + |L[y+1] - L[y-1]| exceeds 0.22,
                times 2.2, clamped to [0, 1]
"""

from __future__ import annotations

import numpy as np

from core.config import DEFAULT_IMAGE_CONFIG, ImageAnalysisConfig
from core.cover_analysis.types import CoverMood, PixelBuffer

_LUMA = np.array([0.2126, 0.7152, 0.0722])


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


def hsv_hue_saturation(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised HSV hue (degrees [0, 360)) and saturation for [0, 1] RGB.

    Args:
        rgb: (..., 3) float array in [0, 1].

    Returns:
        (hue, saturation) arrays shaped like rgb[..., 0]. Achromatic pixels
        get hue 0.
    """
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    cmax = rgb.max(axis=-1)
    cmin = rgb.min(axis=-1)
    delta = cmax - cmin
    safe_delta = np.where(delta == 0, 1.0, delta)

    hue = np.where(
        cmax == r,
        np.mod((g - b) / safe_delta, 6.0),
        np.where(cmax == g, (b - r) / safe_delta + 2.0, (r - g) / safe_delta + 4.0),
    )
    hue = np.where(delta == 0, 0.0, hue * 60.0)
    hue = np.mod(hue, 360.0)

    saturation = np.where(cmax == 0, 0.0, delta / np.where(cmax == 0, 1.0, cmax))
    return hue, saturation


def warmth(hue: np.ndarray) -> np.ndarray:
    """Per-pixel warmth in [0, 1] from hue in degrees."""
    dist = np.minimum(np.abs(hue - 30.0), np.abs(hue - 390.0))
    return np.clip(1.0 - dist / 180.0, 0.0, 1.0)


def edge_share(luma: np.ndarray, threshold: float) -> float:
    """Fraction of interior pixels whose central-difference gradient exceeds threshold.

    Images narrower or shorter than 3 px have no interior and return 0.0.
    """
    if luma.shape[0] < 3 or luma.shape[1] < 3:
        return 0.0
    dx = np.abs(luma[1:-1, 2:] - luma[1:-1, :-2])
    dy = np.abs(luma[2:, 1:-1] - luma[:-2, 1:-1])
    edges = np.count_nonzero(dx + dy > threshold)
    return edges / max(1, dx.size)


def compute_cover_mood(
    buffer: PixelBuffer,
    *,
    config: ImageAnalysisConfig = DEFAULT_IMAGE_CONFIG,
) -> CoverMood:
    """Summarise the whole cover's tone and visual busyness.

    Args:
        buffer: Decoded cover image.
        config: Edge threshold and complexity gain.

    Returns:
        CoverMood with all fields in [0, 1].
    """
    rgb = buffer.rgba[..., :3].astype(np.float64) / 255.0
    luma = rgb @ _LUMA
    hue, saturation = hsv_hue_saturation(rgb)

    share = edge_share(luma, config.mood_edge_threshold)
    return CoverMood(
        brightness=_clamp01(float(luma.mean())),
        saturation=_clamp01(float(saturation.mean())),
        warmth=_clamp01(float(warmth(hue).mean())),
        complexity=_clamp01(share * config.mood_complexity_gain),
    )
