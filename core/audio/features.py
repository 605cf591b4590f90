"""
core/audio/features.py — Pure DSP feature extraction from audio signals.

All functions accept numpy arrays and return plain numbers or frozen
dataclasses. File decoding lives in ingestion/audio_loader.py.

Design:
    - Only the first channel and the first 60 s are analysed (bounded cost).
    - Spectral balance is a two-band proxy, not an FFT analysis: a one-pole
      low-pass (y[n] = (1-a)·x[n] + a·y[n-1], a = 0.995) gives the "bass"
      band and the residual x - lowpass gives the "brightness" band.
    - Tempo: frame RMS envelope (1024 window / 512 hop) → positive first
      difference (onset emphasis) → mean-centred autocorrelation over the
      lags of 60–200 BPM. The first strict maximum wins.
    - Short or silent input degrades to zeros and bpm=None; it never raises.

scipy and numpy are treated as pure computation libraries (no I/O).
"""

from __future__ import annotations

import math

import numpy as np
from scipy import signal as scipy_signal

from core.audio.types import AudioFeatures
from core.config import DEFAULT_AUDIO_CONFIG, AudioAnalysisConfig

_EPS = 1e-6


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


# ---------------------------------------------------------------------------
# Signal helpers
# ---------------------------------------------------------------------------


def first_channel(y: np.ndarray) -> np.ndarray:
    """Return the first channel as a 1-D float64 array.

    Args:
        y: Shape (N,) for mono or (C, N) for multi-channel.
    """
    arr = np.asarray(y, dtype=np.float64)
    if arr.ndim == 1:
        return arr
    return arr[0]


def rms(x: np.ndarray) -> float:
    """Root mean square. 0.0 for an empty array."""
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(x))))


def peak_abs(x: np.ndarray) -> float:
    """Largest absolute sample value. 0.0 for an empty array."""
    if x.size == 0:
        return 0.0
    return float(np.max(np.abs(x)))


def one_pole_lowpass(x: np.ndarray, coeff: float = 0.995) -> np.ndarray:
    """One-pole IIR low-pass: y[n] = (1 - coeff) * x[n] + coeff * y[n-1], y[-1] = 0."""
    if x.size == 0:
        return np.zeros(0, dtype=np.float64)
    return scipy_signal.lfilter([1.0 - coeff], [1.0, -coeff], x)


def highpass_residual(x: np.ndarray, coeff: float = 0.995) -> np.ndarray:
    """High-pass complement of `one_pole_lowpass`: x - lowpass(x)."""
    return x - one_pole_lowpass(x, coeff)


def frame_rms(x: np.ndarray, frame_length: int = 1024, hop_length: int = 512) -> np.ndarray:
    """RMS of each full frame. Trailing partial frames are dropped.

    Returns:
        1-D array of length floor((N - frame_length) / hop_length) + 1,
        or empty when N < frame_length.
    """
    if x.size < frame_length:
        return np.zeros(0, dtype=np.float64)
    # prefix sums of x²: each frame energy is the difference of two entries
    csum = np.concatenate(([0.0], np.cumsum(np.square(x, dtype=np.float64))))
    starts = np.arange(0, x.size - frame_length + 1, hop_length)
    energy = np.maximum(csum[starts + frame_length] - csum[starts], 0.0)
    return np.sqrt(energy / frame_length)


def onset_strength(envelope: np.ndarray) -> np.ndarray:
    """Positive first difference of an energy envelope (rises only)."""
    if envelope.size < 2:
        return np.zeros(0, dtype=np.float64)
    return np.maximum(np.diff(envelope), 0.0)


# ---------------------------------------------------------------------------
# Tempo
# ---------------------------------------------------------------------------


def estimate_bpm_from_envelope(
    envelope: np.ndarray,
    envelope_rate: float,
    *,
    min_bpm: float = 60.0,
    max_bpm: float = 200.0,
    sanity_min_bpm: float = 50.0,
    sanity_max_bpm: float = 220.0,
) -> int | None:
    """Estimate tempo from an onset envelope by autocorrelation.

    Lags are searched from floor(rate*60/max_bpm) to floor(rate*60/min_bpm);
    the lag with the largest autocorrelation sum (first one on ties) is
    converted back with bpm = 60 * rate / lag.

    Args:
        envelope: Onset-strength signal, one value per envelope frame.
        envelope_rate: Envelope frames per second (sample_rate / hop).

    Returns:
        Rounded BPM, or None when the envelope is shorter than the lag
        range, no lag correlates positively, or the result falls outside
        [sanity_min_bpm, sanity_max_bpm].
    """
    env = np.asarray(envelope, dtype=np.float64)
    if envelope_rate <= 0:
        return None
    min_lag = max(1, math.floor(envelope_rate * 60.0 / max_bpm))
    max_lag = math.floor(envelope_rate * 60.0 / min_bpm)
    if env.size < max_lag + 2 or max_lag < min_lag:
        return None

    centred = env - env.mean()
    best_lag = -1
    best = 0.0
    for lag in range(min_lag, max_lag + 1):
        score = float(np.dot(centred[:-lag], centred[lag:]))
        if score > best:
            best = score
            best_lag = lag

    if best_lag <= 0:
        return None
    bpm = 60.0 * envelope_rate / best_lag
    if not math.isfinite(bpm) or bpm < sanity_min_bpm or bpm > sanity_max_bpm:
        return None
    return int(round(bpm))


def estimate_bpm(
    x: np.ndarray,
    sr: int,
    *,
    config: AudioAnalysisConfig = DEFAULT_AUDIO_CONFIG,
) -> int | None:
    """Tempo of a mono signal via frame RMS envelope and onset autocorrelation."""
    envelope = frame_rms(x, config.frame_length, config.hop_length)
    return estimate_bpm_from_envelope(
        onset_strength(envelope),
        sr / config.hop_length,
        min_bpm=config.min_bpm,
        max_bpm=config.max_bpm,
        sanity_min_bpm=config.sanity_min_bpm,
        sanity_max_bpm=config.sanity_max_bpm,
    )


# ---------------------------------------------------------------------------
# Full extraction
# ---------------------------------------------------------------------------


def extract_audio_features(
    y: np.ndarray,
    sr: int,
    *,
    duration_sec: float | None = None,
    config: AudioAnalysisConfig = DEFAULT_AUDIO_CONFIG,
) -> AudioFeatures:
    """Compute energy, spectral balance, dynamics and tempo of a waveform.

    Pipeline:
        1. First channel, truncated to config.max_duration_sec
        2. RMS and peak → energy, dynamics
        3. One-pole low-pass / residual → bass, brightness
        4. Frame RMS → onset envelope → autocorrelation BPM

    Args:
        y: Audio samples, mono (N,) or multi-channel (C, N), float in [-1, 1].
        sr: Sample rate in Hz.
        duration_sec: Full duration of the source when `y` was already
            truncated by the loader. Defaults to len(y) / sr.
        config: Calibration constants.

    Returns:
        AudioFeatures. Silent or empty input gives zeros and bpm=None.

    Raises:
        ValueError: If sr <= 0.
    """
    if sr <= 0:
        raise ValueError(f"Sample rate must be positive, got {sr}")

    mono = first_channel(y)
    full_duration = duration_sec if duration_sec is not None else mono.size / sr
    x = mono[: int(math.floor(sr * config.max_duration_sec))]

    x_rms = rms(x)
    x_peak = peak_abs(x)
    low_rms = rms(one_pole_lowpass(x, config.lowpass_coeff))
    high_rms = rms(highpass_residual(x, config.lowpass_coeff))

    return AudioFeatures(
        duration_sec=float(full_duration),
        bpm=estimate_bpm(x, sr, config=config),
        energy=_clamp01(x_rms * config.energy_gain),
        brightness=_clamp01(high_rms / (x_rms + _EPS)),
        bass=_clamp01(low_rms / (x_rms + _EPS)),
        dynamics=_clamp01((x_peak - x_rms) / config.dynamics_span),
        sample_rate=int(sr),
        analyzed_sec=x.size / sr,
    )
