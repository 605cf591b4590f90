"""
Tests for core/color/harmony.py and core/color/palette.py.

Quantisation reminder: a channel value v lands in bin v >> 4 and is
reported at the bin centre (v >> 4) * 16 + 8, so pure red reads #f80808.
"""

import re

import numpy as np
import pytest

from core.color.conversions import hex_to_rgb, relative_luminance
from core.color.harmony import derive_harmony, rotate_hue
from core.color.palette import (
    FALLBACK_ACCENT,
    FALLBACK_AVERAGE,
    average_color,
    compute_palette,
    extract_dominant_colors,
    recommend_text_colors,
)
from core.config import ImageAnalysisConfig
from core.cover_analysis.types import NormalizedRect, PixelBuffer

_HEX = re.compile(r"^#[0-9a-f]{6}$")


def _samples(*groups: tuple[tuple[int, int, int], int]) -> np.ndarray:
    """Stack (color, count) groups into an (n, 3) uint8 sample array."""
    return np.concatenate(
        [np.tile(np.array(color, dtype=np.uint8), (n, 1)) for color, n in groups]
    )


# ---------------------------------------------------------------------------
# Harmony
# ---------------------------------------------------------------------------


class TestDeriveHarmony:
    def test_red_complement_and_triad(self):
        harmony = derive_harmony((255, 0, 0))
        assert harmony.complement == "#00ffff"
        assert harmony.triadic == ("#00ff00", "#0000ff")

    def test_all_colors_are_lowercase_hex(self):
        harmony = derive_harmony((37, 142, 201))
        colors = [
            harmony.complement,
            *harmony.analogous,
            *harmony.triadic,
            *harmony.split_complement,
            *harmony.tints,
            *harmony.shades,
        ]
        assert all(_HEX.match(c) for c in colors)

    def test_tints_lighten_and_shades_darken(self):
        base = (40, 120, 180)
        harmony = derive_harmony(base)
        lum = [relative_luminance(*hex_to_rgb(c)) for c in (
            harmony.shades[1], harmony.shades[0], "#2878b4", harmony.tints[0], harmony.tints[1],
        )]
        assert lum == sorted(lum)
        assert len(set(lum)) == 5

    def test_achromatic_base_rotations_stay_gray(self):
        harmony = derive_harmony((128, 128, 128))
        assert harmony.complement == "#808080"
        assert set(harmony.analogous) == {"#808080"}
        assert set(harmony.triadic) == {"#808080"}

    def test_full_rotation_is_identity(self):
        assert rotate_hue((200, 40, 90), 360.0) == "#c8285a"


# ---------------------------------------------------------------------------
# Dominant colors
# ---------------------------------------------------------------------------


class TestExtractDominantColors:
    def test_most_frequent_first(self):
        rgb = _samples(((0, 0, 255), 30), ((255, 0, 0), 70))
        assert extract_dominant_colors(rgb) == ("#f80808", "#0808f8")

    def test_similar_bins_collapse(self):
        """Neighbouring shades within the similarity threshold count once."""
        rgb = _samples(((255, 0, 0), 50), ((220, 0, 0), 40), ((0, 200, 0), 10))
        assert extract_dominant_colors(rgb) == ("#f80808", "#08c808")

    def test_zero_similarity_keeps_every_bin(self):
        rgb = _samples(((255, 0, 0), 50), ((220, 0, 0), 40))
        assert extract_dominant_colors(rgb, similarity=0) == ("#f80808", "#d80808")

    def test_count_limit(self):
        rng = np.random.default_rng(11)
        rgb = rng.integers(0, 256, size=(5000, 3), dtype=np.uint8)
        assert len(extract_dominant_colors(rgb, count=4)) == 4

    def test_ties_break_by_bin_index(self):
        rgb = _samples(((255, 0, 0), 10), ((0, 0, 255), 10))
        assert extract_dominant_colors(rgb) == ("#0808f8", "#f80808")

    def test_deterministic(self):
        rng = np.random.default_rng(5)
        rgb = rng.integers(0, 256, size=(3000, 3), dtype=np.uint8)
        assert extract_dominant_colors(rgb) == extract_dominant_colors(rgb.copy())

    def test_empty_input(self):
        assert extract_dominant_colors(np.zeros((0, 3), dtype=np.uint8)) == ()


# ---------------------------------------------------------------------------
# Average and text colors
# ---------------------------------------------------------------------------


class TestAverageColor:
    def test_mean_is_rounded(self):
        rgb = _samples(((0, 0, 0), 1), ((255, 255, 255), 1))
        assert average_color(rgb) == (128, 128, 128)

    def test_empty_is_none(self):
        assert average_color(np.zeros((0, 3), dtype=np.uint8)) is None


class TestRecommendTextColors:
    def test_dark_background_gets_white(self):
        text = recommend_text_colors((20, 20, 20), ("#202020", "#f0f0f0"))
        assert text.primary == "#ffffff"
        assert text.secondary == "#000000"
        assert text.primary_ratio > text.secondary_ratio

    def test_light_background_gets_black(self):
        text = recommend_text_colors((235, 235, 220), ())
        assert text.primary == "#000000"

    def test_accent_has_highest_contrast(self):
        text = recommend_text_colors((20, 20, 20), ("#202020", "#f0f0f0", "#808080"))
        assert text.accent == "#f0f0f0"
        assert text.accent_ratio > 10

    def test_empty_palette_uses_fallback_accent(self):
        text = recommend_text_colors((20, 20, 20), ())
        assert text.accent == FALLBACK_ACCENT


# ---------------------------------------------------------------------------
# compute_palette
# ---------------------------------------------------------------------------


class TestComputePalette:
    def test_gray_cover(self, gray_cover):
        palette = compute_palette(gray_cover, NormalizedRect(0.1, 0.1, 0.3, 0.2))
        assert palette.region_avg == "#808080"
        assert palette.region == ("#888888",)
        assert palette.image == ("#888888",)
        # mid-gray has more contrast against black than white
        assert palette.text.primary == "#000000"

    def test_region_colors_differ_from_image(self):
        arr = np.zeros((100, 100, 3), dtype=np.uint8)
        arr[:, :20] = (255, 0, 0)
        buffer = PixelBuffer.from_array(arr)
        palette = compute_palette(buffer, NormalizedRect(0.0, 0.0, 0.2, 1.0))
        assert palette.region == ("#f80808",)
        assert palette.image[0] == "#080808"
        assert palette.region_avg == "#ff0000"

    def test_no_region(self, gray_cover):
        palette = compute_palette(gray_cover, None)
        assert palette.region == ()
        assert palette.region_avg == FALLBACK_AVERAGE
        assert palette.image == ("#888888",)

    def test_transparent_image_falls_back(self, solid_buffer):
        buffer = solid_buffer(40, 40, (255, 0, 0), alpha=0)
        palette = compute_palette(buffer, NormalizedRect(0.0, 0.0, 1.0, 1.0))
        assert palette.image == ()
        assert palette.region == ()
        assert palette.region_avg == FALLBACK_AVERAGE
        assert palette.text.accent == FALLBACK_ACCENT

    def test_repeatable(self, noise_buffer):
        region = NormalizedRect(0.2, 0.3, 0.5, 0.4)
        assert compute_palette(noise_buffer, region) == compute_palette(noise_buffer, region)

    def test_palette_size_from_config(self, noise_buffer):
        config = ImageAnalysisConfig(palette_size=3, palette_similarity=10)
        palette = compute_palette(noise_buffer, NormalizedRect(0, 0, 1, 1), config=config)
        assert len(palette.image) == 3
        assert len(palette.region) == 3

    def test_harmony_from_region_average(self, gray_cover):
        palette = compute_palette(gray_cover, NormalizedRect(0.1, 0.1, 0.3, 0.2))
        assert palette.compatible.complement == "#808080"

    @pytest.mark.parametrize("region", [NormalizedRect(0.0, 0.0, 0.0, 0.0), NormalizedRect(1.0, 1.0, 0.1, 0.1)])
    def test_degenerate_regions_sample_one_pixel(self, gray_cover, region):
        palette = compute_palette(gray_cover, region)
        assert palette.region_avg == "#808080"
