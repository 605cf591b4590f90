"""
core/cover_analysis/pipeline.py — One complete analysis pass for a selected region.

    region (viewport coords) ──┬─ compute_safe_margin()      [geometry.py]
                               │
              map_crop_region() (when a crop viewport is active)
                               │
    mapped region (image) ─────┼─ compute_region_metrics()   [metrics.py]
                               ├─ compute_palette()          [core/color/palette.py]
                               └─ build_suggestions()        [suggestions.py]

The safe area is judged in viewport coordinates, since it models what the
thumbnail frame clips. Pixel statistics use the mapped image coordinates.
Nothing is cached between calls: every pass recomputes from the buffer.
"""

from __future__ import annotations

from core.color.palette import compute_palette
from core.config import DEFAULT_IMAGE_CONFIG, ImageAnalysisConfig
from core.cover_analysis.geometry import compute_safe_margin, map_crop_region
from core.cover_analysis.metrics import compute_region_metrics
from core.cover_analysis.suggestions import build_suggestions
from core.cover_analysis.types import CropState, NormalizedRect, PixelBuffer, RegionAnalysis


def analyze_region(
    buffer: PixelBuffer,
    region: NormalizedRect,
    *,
    crop: CropState | None = None,
    config: ImageAnalysisConfig = DEFAULT_IMAGE_CONFIG,
) -> RegionAnalysis:
    """Run metrics, safe margin, palette and suggestions for one region.

    Args:
        buffer: Decoded image.
        region: Selected region. Normalised to the crop viewport when `crop`
            is given, otherwise to the full image.
        crop: Optional square crop viewport the region was drawn in.
        config: Sampling budgets and calibration constants.

    Returns:
        RegionAnalysis bundle for the pass.
    """
    mapped = region
    if crop is not None:
        mapped = map_crop_region(region, crop, buffer.width, buffer.height)

    metrics = compute_region_metrics(buffer, mapped, config=config)
    safe = compute_safe_margin(region, config.safe_inset, pass_score=config.safe_pass_score)
    palette = compute_palette(buffer, mapped, config=config)

    return RegionAnalysis(
        region=region,
        mapped_region=mapped,
        image_size=(buffer.width, buffer.height),
        metrics=metrics,
        safe_margin=safe,
        palette=palette,
        suggestions=build_suggestions(region, metrics, safe, palette),
    )
