"""
core/color/harmony.py — Harmony colors derived from a base color.

Hue rotations keep the base saturation and lightness; tints and shades keep
hue and saturation and shift lightness by fixed steps, clamped to [0, 1].
"""

from __future__ import annotations

from core.color.conversions import RGB, hsl_to_rgb, rgb_to_hex, rgb_to_hsl
from core.color.types import HarmonySet

ANALOGOUS_STEP: float = 30.0
TRIADIC_STEP: float = 120.0
SPLIT_COMPLEMENT_STEP: float = 150.0
LIGHTNESS_STEP: float = 0.12


def _hex_from_hsl(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def rotate_hue(base: RGB, degrees: float) -> str:
    """Rotate the hue of `base` by `degrees`, keeping saturation and lightness."""
    h, s, l = rgb_to_hsl(*base)
    return _hex_from_hsl(h + degrees, s, l)


def shift_lightness(base: RGB, delta: float) -> str:
    """Shift the lightness of `base` by `delta`, clamped to [0, 1]."""
    h, s, l = rgb_to_hsl(*base)
    return _hex_from_hsl(h, s, max(0.0, min(1.0, l + delta)))


def derive_harmony(base: RGB) -> HarmonySet:
    """Build complement, analogous, triadic, split-complement, tints and shades.

    Args:
        base: 0–255 RGB base color (usually the region average).

    Returns:
        HarmonySet of lowercase hex colors. Achromatic bases (s == 0) give
        gray rotations equal to the base, since hue has no effect.
    """
    return HarmonySet(
        complement=rotate_hue(base, 180.0),
        analogous=(rotate_hue(base, ANALOGOUS_STEP), rotate_hue(base, -ANALOGOUS_STEP)),
        triadic=(rotate_hue(base, TRIADIC_STEP), rotate_hue(base, -TRIADIC_STEP)),
        split_complement=(
            rotate_hue(base, SPLIT_COMPLEMENT_STEP),
            rotate_hue(base, -SPLIT_COMPLEMENT_STEP),
        ),
        tints=(shift_lightness(base, LIGHTNESS_STEP), shift_lightness(base, 2 * LIGHTNESS_STEP)),
        shades=(
            shift_lightness(base, -LIGHTNESS_STEP),
            shift_lightness(base, -2 * LIGHTNESS_STEP),
        ),
    )
