"""
core/color/palette.py — Dominant colors, average color and text recommendations.

Dominant colors:
    Each opaque sample is quantised to 4 bits per channel (r >> 4), giving
    a 4096-bin histogram keyed by (rq << 8) | (gq << 4) | bq. Bins are
    ranked by count (ties broken by bin index, so output is deterministic)
    and de-quantised to the bin centre q * 16 + 8. A candidate is kept only
    if its summed absolute channel distance to every kept color exceeds the
    similarity threshold, which collapses neighbouring bins around one
    dominant hue.

Text colors:
    Primary/secondary are pure white and black ordered by contrast against
    the region average. The accent is the palette color with the highest
    contrast against that average.
"""

from __future__ import annotations

import numpy as np

from core.color.conversions import RGB, contrast_ratio_rgb, hex_to_rgb, rgb_to_hex
from core.color.harmony import derive_harmony
from core.color.types import PaletteResult, TextColors
from core.config import DEFAULT_IMAGE_CONFIG, ImageAnalysisConfig
from core.cover_analysis.sampling import sample_region
from core.cover_analysis.types import FULL_FRAME, NormalizedRect, PixelBuffer

FALLBACK_AVERAGE: str = "#777777"
"""Region average reported when there is nothing opaque to average."""

FALLBACK_ACCENT: str = "#ffc400"
"""Accent used when no palette color is available."""

_WHITE: RGB = (255, 255, 255)
_BLACK: RGB = (0, 0, 0)

_N_BINS = 4096


def extract_dominant_colors(
    rgb: np.ndarray,
    *,
    count: int = 6,
    similarity: int = 90,
) -> tuple[str, ...]:
    """Return up to `count` visually distinct dominant colors, most frequent first.

    Args:
        rgb: (n, 3) uint8 array of opaque samples.
        count: Maximum number of colors to return.
        similarity: Candidates within this summed channel distance of an
            already kept color are skipped.

    Returns:
        Tuple of lowercase hex strings. Empty for empty input.
    """
    if rgb.size == 0:
        return ()

    q = np.asarray(rgb, dtype=np.int64) >> 4
    bins = (q[:, 0] << 8) | (q[:, 1] << 4) | q[:, 2]
    counts = np.bincount(bins, minlength=_N_BINS)

    ranked = np.argsort(-counts, kind="stable")
    ranked = ranked[counts[ranked] > 0]

    kept: list[np.ndarray] = []
    for bin_index in ranked:
        centre = np.array(
            [(bin_index >> 8) & 15, (bin_index >> 4) & 15, bin_index & 15], dtype=np.int64
        ) * 16 + 8
        if all(int(np.abs(centre - other).sum()) > similarity for other in kept):
            kept.append(centre)
            if len(kept) >= count:
                break

    return tuple(rgb_to_hex(*c) for c in kept)


def average_color(rgb: np.ndarray) -> RGB | None:
    """Arithmetic mean RGB of the samples, rounded. None for empty input."""
    if rgb.size == 0:
        return None
    mean = np.asarray(rgb, dtype=np.float64).mean(axis=0)
    return hex_to_rgb(rgb_to_hex(*mean))


def recommend_text_colors(background: RGB, palette: tuple[str, ...]) -> TextColors:
    """Pick primary/secondary text colors and an accent for a background.

    Args:
        background: Region average color.
        palette: Candidate accent colors (hex).

    Returns:
        TextColors with contrast ratios recorded for every choice.
    """
    on_white = contrast_ratio_rgb(background, _WHITE)
    on_black = contrast_ratio_rgb(background, _BLACK)
    if on_white >= on_black:
        primary, primary_ratio, secondary, secondary_ratio = "#ffffff", on_white, "#000000", on_black
    else:
        primary, primary_ratio, secondary, secondary_ratio = "#000000", on_black, "#ffffff", on_white

    accent = palette[0] if palette else FALLBACK_ACCENT
    accent_ratio = contrast_ratio_rgb(background, hex_to_rgb(accent))
    for candidate in palette[1:]:
        ratio = contrast_ratio_rgb(background, hex_to_rgb(candidate))
        if ratio > accent_ratio:
            accent, accent_ratio = candidate, ratio

    return TextColors(
        primary=primary,
        primary_ratio=primary_ratio,
        secondary=secondary,
        secondary_ratio=secondary_ratio,
        accent=accent,
        accent_ratio=accent_ratio,
    )


def compute_palette(
    buffer: PixelBuffer,
    region: NormalizedRect | None,
    *,
    config: ImageAnalysisConfig = DEFAULT_IMAGE_CONFIG,
) -> PaletteResult:
    """Extract image and region palettes, text colors and harmony colors.

    Args:
        buffer: Decoded image.
        region: Region in image-normalised coordinates, or None to skip the
            region palette.
        config: Palette budget, size and similarity threshold.

    Returns:
        PaletteResult. Deterministic for a given buffer and region.
    """
    image_sample = sample_region(
        buffer,
        FULL_FRAME,
        max_samples=config.palette_max_samples,
        alpha_threshold=config.alpha_threshold,
    )
    image_colors = extract_dominant_colors(
        image_sample.rgb, count=config.palette_size, similarity=config.palette_similarity
    )

    region_colors: tuple[str, ...] = ()
    avg: RGB | None = None
    if region is not None:
        region_sample = sample_region(
            buffer,
            region,
            max_samples=config.palette_max_samples,
            alpha_threshold=config.alpha_threshold,
        )
        region_colors = extract_dominant_colors(
            region_sample.rgb, count=config.palette_size, similarity=config.palette_similarity
        )
        avg = average_color(region_sample.rgb)

    background = avg if avg is not None else hex_to_rgb(FALLBACK_AVERAGE)
    return PaletteResult(
        region_avg=rgb_to_hex(*background),
        region=region_colors,
        image=image_colors,
        text=recommend_text_colors(background, region_colors or image_colors),
        compatible=derive_harmony(background),
    )
