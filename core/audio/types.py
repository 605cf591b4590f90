"""
core/audio/types.py — Frozen data types for audio analysis results.

All types are frozen dataclasses — immutable value objects that can be
safely passed between layers.

Design principles:
    - No I/O, no state, no side effects.
    - Invariants are documented but NOT enforced at construction time —
      validation happens at the creation site (features.py).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AudioFeatures:
    """Coarse loudness, spectral-balance and tempo features of a track.

    Invariants:
        0.0 <= energy, brightness, bass, dynamics <= 1.0
        duration_sec >= analyzed_sec >= 0.0
        bpm is None or 50 <= bpm <= 220
    """

    duration_sec: float
    """Full duration of the decoded audio in seconds."""

    bpm: int | None
    """Autocorrelation tempo estimate. None when the signal is too short,
    silent, or the estimate falls outside the sanity band."""

    energy: float
    """Overall RMS scaled by 2.2 and clamped. Typical program RMS 0.1–0.3."""

    brightness: float
    """High-pass residual RMS relative to overall RMS."""

    bass: float
    """One-pole low-pass RMS relative to overall RMS."""

    dynamics: float
    """(peak - rms) / 0.9, clamped. Spiky material scores high."""

    sample_rate: int = 0
    """Sample rate of the analysed signal in Hz."""

    analyzed_sec: float = 0.0
    """Seconds actually analysed (capped at 60 s)."""
