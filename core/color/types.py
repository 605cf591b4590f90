"""
core/color/types.py — Frozen data types for palette extraction results.

Colors are stored as lowercase '#rrggbb' strings: the form reports and
UI layers consume. Sequences are tuples so results stay hashable.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TextColors:
    """Text color recommendation against a region's average background.

    Invariants:
        primary, secondary in {"#ffffff", "#000000"} and primary != secondary
        primary_ratio >= secondary_ratio >= 1.0
        accent_ratio >= 1.0
    """

    primary: str
    """Pure white or black, whichever contrasts more with the background."""

    primary_ratio: float

    secondary: str
    """The other of white/black."""

    secondary_ratio: float

    accent: str
    """Palette color with the highest contrast against the background."""

    accent_ratio: float


@dataclass(frozen=True)
class HarmonySet:
    """Hue-rotated and lightness-shifted derivatives of a base color."""

    complement: str
    """Base hue + 180°."""

    analogous: tuple[str, str]
    """Base hue +30° and −30°."""

    triadic: tuple[str, str]
    """Base hue +120° and −120°."""

    split_complement: tuple[str, str]
    """Base hue +150° and −150°."""

    tints: tuple[str, str]
    """Lightness +0.12 and +0.24, clamped to 1."""

    shades: tuple[str, str]
    """Lightness −0.12 and −0.24, clamped to 0."""


@dataclass(frozen=True)
class PaletteResult:
    """Palette bundle for one analysis pass."""

    region_avg: str
    """Arithmetic mean color of the region's opaque pixels.
    Mid-gray '#777777' when the region has no opaque samples."""

    region: tuple[str, ...]
    """Dominant colors inside the region, most frequent first."""

    image: tuple[str, ...]
    """Dominant colors over the whole image, most frequent first."""

    text: TextColors

    compatible: HarmonySet
    """Harmony colors derived from `region_avg`."""
