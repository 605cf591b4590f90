"""
core/cover_analysis — Thumbnail legibility analysis for album covers.

Provides pure functions for region sampling, contrast/clutter scoring,
safe-area geometry, whole-cover mood and audio/cover matching.

All functions are pure: PixelBuffer / NormalizedRect in → frozen dataclasses
out. No file I/O in this package (image decoding lives in
ingestion/image_loader.py).

Public API:
    Types:       PixelBuffer, NormalizedRect, PixelBounds, CropState,
                 RegionMetrics, SafeMarginResult, Suggestion, RegionAnalysis,
                 CoverMood, MatchResult
    Geometry:    clamp_rect, rect_to_pixel_bounds, compute_safe_margin,
                 map_crop_region
    Sampling:    sample_region
    Metrics:     compute_region_metrics
    Mood:        compute_cover_mood
    Suggestions: build_suggestions, score_label
    Match:       compute_match

The single-pass orchestrator `analyze_region` lives in
core/cover_analysis/pipeline.py (it pulls in core.color.palette).
"""

from core.cover_analysis.geometry import (
    clamp_rect,
    compute_safe_margin,
    map_crop_region,
    rect_to_pixel_bounds,
)
from core.cover_analysis.match import compute_match
from core.cover_analysis.metrics import compute_region_metrics
from core.cover_analysis.mood import compute_cover_mood
from core.cover_analysis.sampling import RegionSample, sample_region
from core.cover_analysis.suggestions import build_suggestions, score_label
from core.cover_analysis.types import (
    FULL_FRAME,
    CoverMood,
    CropState,
    MatchResult,
    NormalizedRect,
    PixelBounds,
    PixelBuffer,
    RegionAnalysis,
    RegionMetrics,
    SafeMarginResult,
    Suggestion,
)

__all__ = [
    # Types
    "PixelBuffer",
    "NormalizedRect",
    "PixelBounds",
    "CropState",
    "RegionMetrics",
    "SafeMarginResult",
    "Suggestion",
    "RegionAnalysis",
    "CoverMood",
    "MatchResult",
    "RegionSample",
    "FULL_FRAME",
    # Analysis functions
    "clamp_rect",
    "rect_to_pixel_bounds",
    "compute_safe_margin",
    "map_crop_region",
    "sample_region",
    "compute_region_metrics",
    "compute_cover_mood",
    "build_suggestions",
    "score_label",
    "compute_match",
]
