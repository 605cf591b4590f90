"""
core/cover_analysis/metrics.py — Contrast and clutter scoring for a text region.

Contrast:
    Percentile luminance spread (p10 vs p90) rather than min/max, so a
    single specular highlight or dust speck does not inflate the score.
    The ratio range [1, 7] maps linearly onto [0, 100].

Clutter:
    Mean edge magnitude from right/down luminance differences at strided
    sample points. The score is a cleanliness measure:

        clutter_score = clamp(100 - edge_mean * 520, 0, 100)

    edge_mean ≈ 0.02 reads as very clean, ≈ 0.15+ as busy. The 520 gain
    is empirical (see core/config.py).

Each pass samples with its own budget (8k contrast, 9k clutter).
"""

from __future__ import annotations

import math

import numpy as np

from core.color.conversions import contrast_ratio, luminance
from core.config import DEFAULT_IMAGE_CONFIG, ImageAnalysisConfig
from core.cover_analysis.sampling import RegionSample, sample_region
from core.cover_analysis.types import NormalizedRect, PixelBuffer, RegionMetrics


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def percentile_luminance(sample: RegionSample) -> tuple[float, float]:
    """Return (p10, p90) relative luminance of the sampled pixels.

    Indices are floor(n * 0.10) and floor(n * 0.90) into the sorted values.
    An empty sample yields (0.0, 0.0), which gives a neutral ratio of 1.
    """
    n = sample.count
    if n == 0:
        return 0.0, 0.0
    ordered = np.sort(luminance(sample.rgb))
    return float(ordered[math.floor(n * 0.10)]), float(ordered[math.floor(n * 0.90)])


def contrast_score(ratio: float, *, ratio_ceiling: float = 7.0) -> float:
    """Map a contrast ratio from [1, ratio_ceiling] onto [0, 100]."""
    return _clamp((ratio - 1.0) / (ratio_ceiling - 1.0) * 100.0, 0.0, 100.0)


def edge_mean(buffer: PixelBuffer, sample: RegionSample) -> float:
    """Mean |ΔL_right| + |ΔL_down| at each sampled point.

    Neighbours are clamped to the buffer, so points on the last row or
    column compare against themselves on that axis.
    """
    if sample.count == 0:
        return 0.0
    rgb = buffer.rgba[..., :3]
    xs, ys = sample.xs, sample.ys
    right = np.minimum(xs + 1, buffer.width - 1)
    down = np.minimum(ys + 1, buffer.height - 1)

    here = luminance(rgb[ys, xs])
    total = np.abs(luminance(rgb[ys, right]) - here) + np.abs(luminance(rgb[down, xs]) - here)
    return float(total.sum() / max(1, sample.count))


def clutter_score(mean_edge: float, *, edge_gain: float = 520.0) -> float:
    """Map mean edge magnitude to a 0–100 cleanliness score."""
    return _clamp(100.0 - mean_edge * edge_gain, 0.0, 100.0)


def compute_region_metrics(
    buffer: PixelBuffer,
    rect: NormalizedRect,
    *,
    config: ImageAnalysisConfig = DEFAULT_IMAGE_CONFIG,
) -> RegionMetrics:
    """Compute contrast and clutter for a region of the image.

    Args:
        buffer: Decoded image.
        rect: Region in image-normalised coordinates.
        config: Sampling budgets and calibration constants.

    Returns:
        RegionMetrics. A fully transparent region yields ratio 1.0,
        contrast score 0 and clutter score 100.
    """
    contrast_sample = sample_region(
        buffer,
        rect,
        max_samples=config.contrast_max_samples,
        alpha_threshold=config.alpha_threshold,
    )
    p10, p90 = percentile_luminance(contrast_sample)
    ratio = contrast_ratio(p10, p90)

    clutter_sample = sample_region(
        buffer,
        rect,
        max_samples=config.clutter_max_samples,
        alpha_threshold=config.alpha_threshold,
    )
    mean_edge = edge_mean(buffer, clutter_sample)

    return RegionMetrics(
        contrast_ratio=ratio,
        contrast_score=contrast_score(ratio, ratio_ceiling=config.contrast_ratio_ceiling),
        clutter_score=clutter_score(mean_edge, edge_gain=config.clutter_edge_gain),
        p10=p10,
        p90=p90,
        edge_mean=mean_edge,
        sample_count=contrast_sample.count,
    )
