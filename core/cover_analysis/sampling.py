"""
core/cover_analysis/sampling.py — Budgeted strided sampling of a pixel region.

The stride is chosen so the number of visited pixels stays near
`max_samples` regardless of region size:

    stride = max(1, floor(sqrt(area / max_samples)))

The budget bounds CPU cost on large images; it is not a statistical
requirement. Transparent pixels (alpha below the threshold) are dropped
and never reach any statistic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from core.cover_analysis.geometry import rect_to_pixel_bounds
from core.cover_analysis.types import NormalizedRect, PixelBounds, PixelBuffer

DEFAULT_ALPHA_THRESHOLD: int = 10


@dataclass(frozen=True, eq=False)
class RegionSample:
    """Opaque pixels collected by one strided walk.

    `xs`, `ys` and `rgb` are aligned: sample i sits at (xs[i], ys[i]) with
    color rgb[i]. Order is row-major.
    """

    bounds: PixelBounds
    stride: int
    visited: int
    """Grid points walked, opaque or not. Always >= 1."""

    xs: np.ndarray
    ys: np.ndarray
    rgb: np.ndarray
    """(n, 3) uint8 colors of the opaque samples."""

    @property
    def count(self) -> int:
        return int(self.rgb.shape[0])


def sampling_stride(area: int, max_samples: int) -> int:
    """Stride that keeps a strided walk over `area` pixels near the budget."""
    return max(1, int(math.floor(math.sqrt(area / max(1, max_samples)))))


def sample_region(
    buffer: PixelBuffer,
    rect: NormalizedRect,
    *,
    max_samples: int,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
) -> RegionSample:
    """Walk `rect` with a budget-derived stride and keep opaque pixels.

    Args:
        buffer: Decoded image.
        rect: Region in image-normalised coordinates.
        max_samples: Target number of visited points.
        alpha_threshold: Minimum alpha for a pixel to count as opaque.

    Returns:
        RegionSample with aligned coordinate and color arrays. The arrays
        are empty when every visited pixel is transparent.
    """
    bounds = rect_to_pixel_bounds(rect, buffer.width, buffer.height)
    stride = sampling_stride(bounds.area, max_samples)

    ys = np.arange(bounds.y0, bounds.y1, stride)
    xs = np.arange(bounds.x0, bounds.x1, stride)
    grid = buffer.rgba[ys[:, None], xs[None, :]]  # (len(ys), len(xs), 4)
    opaque = grid[..., 3] >= alpha_threshold

    yy, xx = np.meshgrid(ys, xs, indexing="ij")
    return RegionSample(
        bounds=bounds,
        stride=stride,
        visited=int(ys.size * xs.size),
        xs=xx[opaque],
        ys=yy[opaque],
        rgb=grid[..., :3][opaque],
    )
