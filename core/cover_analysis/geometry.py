"""
core/cover_analysis/geometry.py — Rectangle math for regions, crops and safe areas.

No pixel access. Everything operates on normalised [0, 1] coordinates
except `rect_to_pixel_bounds`, which converts to integer buffer indices.

Safe area:
    The safe rectangle is the frame minus `inset` on every side. A region's
    safe score is the share of its area inside that rectangle; 95% or more
    passes. This models platform cropping, rounded corners and UI overlays
    on streaming-service thumbnails.
"""

from __future__ import annotations

import math

from core.cover_analysis.types import CropState, NormalizedRect, PixelBounds, SafeMarginResult

USER_MIN_SIZE: float = 0.02
"""Smallest width/height of a user-drawn region."""

MAPPED_MIN_SIZE: float = 0.0005
"""Smallest width/height of a region mapped from crop to image coordinates."""

MAX_ZOOM: float = 4.0

_AREA_EPS = 1e-9


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def clamp_rect(rect: NormalizedRect, min_size: float = USER_MIN_SIZE) -> NormalizedRect:
    """Force a rectangle inside the unit square with a minimum size.

    The rectangle is shifted (not shrunk) when it overhangs the right or
    bottom edge.
    """
    w = max(min_size, min(1.0, rect.w))
    h = max(min_size, min(1.0, rect.h))
    x = _clamp(rect.x, 0.0, 1.0)
    y = _clamp(rect.y, 0.0, 1.0)
    if x + w > 1.0:
        x = 1.0 - w
    if y + h > 1.0:
        y = 1.0 - h
    return NormalizedRect(x=_clamp(x, 0.0, 1.0), y=_clamp(y, 0.0, 1.0), w=w, h=h)


def rect_to_pixel_bounds(rect: NormalizedRect, width: int, height: int) -> PixelBounds:
    """Convert a normalised rectangle to integer pixel bounds inside the buffer.

    The start edge is floored and the end edge ceiled, both clamped to the
    buffer. The result always covers at least one pixel, even for zero-area
    or out-of-frame rectangles.
    """
    x0 = int(_clamp(math.floor(rect.x * width), 0, width - 1))
    y0 = int(_clamp(math.floor(rect.y * height), 0, height - 1))
    x1 = int(_clamp(math.ceil((rect.x + rect.w) * width), x0 + 1, width))
    y1 = int(_clamp(math.ceil((rect.y + rect.h) * height), y0 + 1, height))
    return PixelBounds(x0=x0, y0=y0, x1=x1, y1=y1)


def intersection_area(a: NormalizedRect, b: NormalizedRect) -> float:
    """Area of the overlap of two rectangles (0.0 when disjoint)."""
    overlap_w = max(0.0, min(a.right, b.right) - max(a.x, b.x))
    overlap_h = max(0.0, min(a.bottom, b.bottom) - max(a.y, b.y))
    return overlap_w * overlap_h


def safe_rect(inset: float) -> NormalizedRect:
    """The frame minus `inset` on all four sides."""
    return NormalizedRect(x=inset, y=inset, w=1.0 - 2.0 * inset, h=1.0 - 2.0 * inset)


def compute_safe_margin(
    region: NormalizedRect,
    inset: float = 0.08,
    *,
    pass_score: float = 95.0,
) -> SafeMarginResult:
    """Score how much of `region` lies inside the inset safe area.

    Args:
        region: Region in viewport coordinates.
        inset: Fraction trimmed from each side (default 0.08).
        pass_score: Minimum score that passes (default 95).

    Returns:
        SafeMarginResult with score (0–100 inside), outside_pct and pass_.
    """
    inside = intersection_area(region, safe_rect(inset)) / max(_AREA_EPS, region.area)
    score = _clamp(inside * 100.0, 0.0, 100.0)
    return SafeMarginResult(
        inset=inset,
        score=score,
        outside_pct=100.0 - score,
        pass_=score >= pass_score,
    )


def clamp_crop(crop: CropState, width: int, height: int) -> CropState:
    """Keep the square crop viewport inside the image.

    Zoom is clamped to [1, 4]; the centre is pulled in so that the
    viewport (side = min(width, height) / zoom) never leaves the image.
    """
    zoom = _clamp(crop.zoom, 1.0, MAX_ZOOM)
    half = min(width, height) / zoom / 2.0
    cx = _clamp(crop.cx * width, half, width - half)
    cy = _clamp(crop.cy * height, half, height - half)
    return CropState(cx=cx / width, cy=cy / height, zoom=zoom)


def map_crop_region(
    region: NormalizedRect,
    crop: CropState,
    width: int,
    height: int,
) -> NormalizedRect:
    """Map a region drawn inside the crop viewport onto image coordinates.

    Args:
        region: Region normalised to the square crop viewport.
        crop: Viewport centre and zoom.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Image-normalised rectangle, clamped with MAPPED_MIN_SIZE.
    """
    safe = clamp_crop(crop, width, height)
    side = min(width, height) / safe.zoom
    left = safe.cx * width - side / 2.0
    top = safe.cy * height - side / 2.0

    x1 = (left + region.x * side) / width
    y1 = (top + region.y * side) / height
    x2 = (left + region.right * side) / width
    y2 = (top + region.bottom * side) / height
    return clamp_rect(NormalizedRect(x=x1, y=y1, w=x2 - x1, h=y2 - y1), MAPPED_MIN_SIZE)
