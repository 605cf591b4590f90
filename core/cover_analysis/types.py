"""
core/cover_analysis/types.py — Frozen data types for cover-image analysis.

All types are frozen dataclasses — immutable value objects recomputed on
every analysis pass and never mutated.

Design principles:
    - No I/O, no state, no side effects.
    - `PixelBuffer` is the only type that validates at construction: every
      downstream component indexes into it without further checks.
    - Array-holding types use eq=False (numpy arrays have no scalar equality).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from core.color.types import PaletteResult

# ---------------------------------------------------------------------------
# Pixel data
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Decoded image pixels, row-major RGBA, one byte per channel.

    The stored array is a read-only view; analysis code cannot write
    through it.

    Invariants:
        rgba.shape == (height, width, 4), dtype uint8
        width * height * 4 == rgba.size
    """

    width: int
    height: int
    rgba: np.ndarray

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image must be at least 1x1, got {self.width}x{self.height}")
        arr = np.asarray(self.rgba)
        if arr.dtype != np.uint8:
            raise ValueError(f"rgba must be uint8, got {arr.dtype}")
        if arr.shape != (self.height, self.width, 4):
            raise ValueError(
                f"rgba shape {arr.shape} does not match {self.height}x{self.width}x4"
            )
        view = arr.view()
        view.flags.writeable = False
        object.__setattr__(self, "rgba", view)

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """Build from an (H, W, 3) or (H, W, 4) uint8 array.

        RGB input gets a fully opaque alpha channel.
        """
        arr = np.asarray(array, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected (H, W, 3) or (H, W, 4) array, got shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(width=arr.shape[1], height=arr.shape[0], rgba=np.ascontiguousarray(arr))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> PixelBuffer:
        """Build from raw row-major RGBA bytes.

        Raises:
            ValueError: If len(data) != width * height * 4.
        """
        if len(data) != width * height * 4:
            raise ValueError(
                f"Expected {width * height * 4} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        return cls(width=width, height=height, rgba=arr)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NormalizedRect:
    """Rectangle in [0, 1] coordinates relative to an image or crop viewport.

    Invariants (after clamp_rect):
        0 <= x, y
        x + w <= 1, y + h <= 1
        w, h >= minimum size (0.02 for user regions)
    """

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def area(self) -> float:
        return self.w * self.h


FULL_FRAME = NormalizedRect(x=0.0, y=0.0, w=1.0, h=1.0)
"""The whole image."""


@dataclass(frozen=True)
class PixelBounds:
    """Half-open integer pixel bounds [x0, x1) × [y0, y1). Always at least 1×1."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class CropState:
    """Square crop viewport over an image.

    Invariants:
        0 <= cx, cy <= 1 (viewport centre, image-normalised)
        1 <= zoom <= 4 (1 = largest square that fits the image)
    """

    cx: float = 0.5
    cy: float = 0.5
    zoom: float = 1.0


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegionMetrics:
    """Contrast and clutter measurements for one region.

    Invariants:
        contrast_ratio >= 1.0
        0 <= contrast_score, clutter_score <= 100
        0 <= p10 <= p90 <= 1
    """

    contrast_ratio: float
    """WCAG-style ratio between the 90th and 10th percentile luminance."""

    contrast_score: float
    """contrast_ratio mapped linearly from [1, 7] onto [0, 100]."""

    clutter_score: float
    """Edge-density cleanliness. 100 = flat background, 0 = very busy."""

    p10: float = 0.0
    """10th percentile relative luminance of the region."""

    p90: float = 0.0
    """90th percentile relative luminance of the region."""

    edge_mean: float = 0.0
    """Mean |ΔL_right| + |ΔL_down| over the clutter samples."""

    sample_count: int = 0
    """Opaque pixels used for the contrast statistics."""


@dataclass(frozen=True)
class SafeMarginResult:
    """How much of a region lies inside the inset safe area.

    Invariants:
        score + outside_pct == 100
        pass_ iff score >= 95 (default threshold)
    """

    inset: float
    score: float
    outside_pct: float
    pass_: bool


@dataclass(frozen=True)
class Suggestion:
    """A human-readable recommendation derived from the metrics."""

    title: str
    why: str
    try_: str
    target: str | None = None


@dataclass(frozen=True)
class RegionAnalysis:
    """Everything one analysis pass produces for a selected region."""

    region: NormalizedRect
    """The region as drawn (viewport coordinates)."""

    mapped_region: NormalizedRect
    """The region in image coordinates (equal to `region` without a crop)."""

    image_size: tuple[int, int]
    """(width, height) of the analysed buffer."""

    metrics: RegionMetrics
    safe_margin: SafeMarginResult
    palette: PaletteResult
    suggestions: tuple[Suggestion, ...]


@dataclass(frozen=True)
class CoverMood:
    """Whole-image color and edge summary. All fields in [0, 1]."""

    brightness: float
    saturation: float
    warmth: float
    """Closeness of hues to orange/red."""

    complexity: float
    """Edge-density proxy."""


@dataclass(frozen=True)
class MatchResult:
    """Alignment between a track's audio features and its cover mood."""

    score: int
    """0–100, higher = better aligned."""

    label: str
    """'Aligned', 'Mixed' or 'Mismatch'."""

    notes: tuple[str, ...]
