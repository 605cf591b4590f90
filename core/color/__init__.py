"""
core/color — Color math, harmony generation and palette extraction.

Public API:
    Types:       TextColors, HarmonySet, PaletteResult
    Conversions: srgb_to_linear, relative_luminance, contrast_ratio,
                 contrast_ratio_rgb, rgb_to_hsl, hsl_to_rgb, rgb_to_hex,
                 hex_to_rgb
    Harmony:     derive_harmony

Palette extraction samples pixel buffers, so it depends on
core.cover_analysis; import it from core.color.palette directly.
"""

from core.color.conversions import (
    contrast_ratio,
    contrast_ratio_rgb,
    hex_to_rgb,
    hsl_to_rgb,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
    srgb_to_linear,
)
from core.color.harmony import derive_harmony
from core.color.types import HarmonySet, PaletteResult, TextColors

__all__ = [
    "TextColors",
    "HarmonySet",
    "PaletteResult",
    "srgb_to_linear",
    "relative_luminance",
    "contrast_ratio",
    "contrast_ratio_rgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hex",
    "hex_to_rgb",
    "derive_harmony",
]
