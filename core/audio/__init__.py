"""
core/audio — Pure audio feature extraction.

Provides DSP functions for coarse loudness, spectral-balance and tempo
features. All functions are pure: they take (y: np.ndarray, sr: int) and
return structured data. No file I/O — that lives in ingestion/audio_loader.py.

Public API:
    Types:      AudioFeatures
    Features:   extract_audio_features, estimate_bpm, estimate_bpm_from_envelope
"""

from core.audio.features import (
    estimate_bpm,
    estimate_bpm_from_envelope,
    extract_audio_features,
)
from core.audio.types import AudioFeatures

__all__ = [
    "AudioFeatures",
    "extract_audio_features",
    "estimate_bpm",
    "estimate_bpm_from_envelope",
]
