"""
Tests for core/color/conversions.py — luminance, contrast, HSL and hex.
"""

import numpy as np
import pytest

from core.color.conversions import (
    contrast_ratio,
    contrast_ratio_rgb,
    hex_to_rgb,
    hsl_to_rgb,
    linearize,
    luminance,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
    srgb_to_linear,
)

# ---------------------------------------------------------------------------
# Luminance
# ---------------------------------------------------------------------------


class TestLuminance:
    def test_black_is_zero(self):
        assert relative_luminance(0, 0, 0) == 0.0

    def test_white_is_one(self):
        assert relative_luminance(255, 255, 255) == pytest.approx(1.0)

    def test_green_dominates(self):
        """Green carries the largest weight in the luminance sum."""
        assert relative_luminance(0, 255, 0) > relative_luminance(255, 0, 0)
        assert relative_luminance(255, 0, 0) > relative_luminance(0, 0, 255)

    def test_linear_segment_below_knee(self):
        assert srgb_to_linear(0.04) == pytest.approx(0.04 / 12.92)

    def test_power_segment_endpoint(self):
        assert srgb_to_linear(1.0) == pytest.approx(1.0)

    def test_vectorised_matches_scalar(self):
        values = np.linspace(0.0, 1.0, 37)
        expected = [srgb_to_linear(float(v)) for v in values]
        np.testing.assert_allclose(linearize(values), expected)

    def test_array_luminance_matches_scalar(self):
        rgb = np.array([[0, 0, 0], [128, 64, 200], [255, 255, 255]], dtype=np.uint8)
        expected = [relative_luminance(*map(int, c)) for c in rgb]
        np.testing.assert_allclose(luminance(rgb), expected)


# ---------------------------------------------------------------------------
# Contrast
# ---------------------------------------------------------------------------


class TestContrastRatio:
    def test_black_on_white_is_21(self):
        assert contrast_ratio(0.0, 1.0) == pytest.approx(21.0)

    def test_identical_is_one(self):
        assert contrast_ratio(0.3, 0.3) == pytest.approx(1.0)

    def test_symmetric(self):
        rng = np.random.default_rng(42)
        for l1, l2 in rng.random((200, 2)):
            assert contrast_ratio(l1, l2) == contrast_ratio(l2, l1)

    def test_bounded_for_random_colors(self):
        rng = np.random.default_rng(3)
        for a, b in rng.integers(0, 256, size=(300, 2, 3)):
            ratio = contrast_ratio_rgb(tuple(map(int, a)), tuple(map(int, b)))
            assert 1.0 <= ratio <= 21.0 + 1e-9

    def test_rgb_variant(self):
        assert contrast_ratio_rgb((0, 0, 0), (255, 255, 255)) == pytest.approx(21.0)


# ---------------------------------------------------------------------------
# HSL
# ---------------------------------------------------------------------------


class TestHsl:
    def test_red(self):
        h, s, l = rgb_to_hsl(255, 0, 0)
        assert h == pytest.approx(0.0)
        assert s == pytest.approx(1.0)
        assert l == pytest.approx(0.5)

    def test_blue_hue_in_degrees(self):
        h, _, _ = rgb_to_hsl(0, 0, 255)
        assert h == pytest.approx(240.0)

    def test_gray_has_zero_saturation(self):
        _, s, l = rgb_to_hsl(128, 128, 128)
        assert s == 0.0
        assert l == pytest.approx(128 / 255)

    def test_hue_wraps(self):
        assert hsl_to_rgb(480.0, 1.0, 0.5) == hsl_to_rgb(120.0, 1.0, 0.5)
        assert hsl_to_rgb(-240.0, 1.0, 0.5) == hsl_to_rgb(120.0, 1.0, 0.5)

    def test_out_of_range_saturation_is_clamped(self):
        assert hsl_to_rgb(0.0, 2.0, 0.5) == (255, 0, 0)

    def test_lightness_extremes(self):
        assert hsl_to_rgb(200.0, 0.7, 1.0) == (255, 255, 255)
        assert hsl_to_rgb(200.0, 0.7, 0.0) == (0, 0, 0)

    def test_round_trip_random_colors(self):
        """1,000 seeded random colors survive RGB → HSL → RGB unchanged."""
        rng = np.random.default_rng(2024)
        for c in rng.integers(0, 256, size=(1000, 3)):
            rgb = tuple(int(v) for v in c)
            assert hsl_to_rgb(*rgb_to_hsl(*rgb)) == rgb


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------


class TestHex:
    def test_encode_lowercase(self):
        assert rgb_to_hex(255, 196, 0) == "#ffc400"

    def test_encode_rounds_and_clamps(self):
        assert rgb_to_hex(127.6, -4, 300) == "#8000ff"

    def test_decode_six_digits(self):
        assert hex_to_rgb("#ffc400") == (255, 196, 0)

    def test_decode_uppercase_without_hash(self):
        assert hex_to_rgb("ABC123") == (0xAB, 0xC1, 0x23)

    def test_decode_shorthand(self):
        assert hex_to_rgb("#fff") == (255, 255, 255)
        assert hex_to_rgb("#0a8") == (0x00, 0xAA, 0x88)

    @pytest.mark.parametrize("bad", ["", "#12345", "#1234567", "#gggggg", "zz"])
    def test_invalid_raises(self, bad):
        with pytest.raises(ValueError, match="Invalid hex color"):
            hex_to_rgb(bad)

    def test_round_trip(self):
        for rgb in [(0, 0, 0), (255, 255, 255), (18, 52, 86), (200, 100, 50)]:
            assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb
