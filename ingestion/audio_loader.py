"""
ingestion/audio_loader.py — File I/O boundary for audio loading.

This is the ONLY module in the audio pipeline that reads audio files from
disk. core/audio/features.py takes pre-loaded (y, sr) arrays — never paths.

Only the leading DEFAULT_DURATION seconds are decoded; the file's full
length is read separately with get_duration() so reports can show it.

Usage:
    from ingestion.audio_loader import get_duration, load_audio
    y, sr = load_audio("/path/to/track.mp3")
    total = get_duration("/path/to/track.mp3")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np

from ingestion.errors import DecodeError

logger = logging.getLogger(__name__)

# Supported audio file extensions (must be loadable by librosa / soundfile)
AUDIO_EXTENSIONS: frozenset[str] = frozenset(
    {".mp3", ".wav", ".flac", ".aiff", ".aif", ".ogg", ".m4a", ".opus"}
)

# Feature extraction never looks past the first minute
DEFAULT_DURATION: float = 60.0


def _check_path(path: str | Path) -> Path:
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Audio file not found: {file_path}")

    if file_path.suffix.lower() not in AUDIO_EXTENSIONS:
        raise ValueError(
            f"Unsupported audio format {file_path.suffix!r}. "
            f"Supported: {sorted(AUDIO_EXTENSIONS)}"
        )
    return file_path


def load_audio(
    path: str | Path,
    *,
    duration: float | None = DEFAULT_DURATION,
    sr: int | None = None,
    mono: bool = False,
    librosa: Any = None,
) -> tuple[np.ndarray, int]:
    """Load an audio file and return (y, sr).

    Args:
        path: Absolute or relative path to an audio file.
              Supported formats: mp3, wav, flac, aiff, ogg, m4a, opus.
        duration: Maximum seconds to load (default 60 s).
                  Pass None to load the entire file.
        sr: Target sample rate in Hz. None preserves the native rate.
        mono: Mix down to mono when True. The default keeps channels
              separate; feature extraction reads the first one.
        librosa: Injected librosa module (a MagicMock in tests).
                 None = import lazily.

    Returns:
        (y, sr) — float32 samples, shape (N,) or (channels, N), and the
        sample rate as a Python int.

    Raises:
        FileNotFoundError: File does not exist at the given path.
        ValueError: File extension is not a supported audio format.
        DecodeError: librosa/soundfile could not decode the file
                     (corrupted, truncated, DRM-protected, etc.).
    """
    file_path = _check_path(path)

    if librosa is None:
        import librosa  # deferred to allow testing without audio backend

    try:
        y, loaded_sr = librosa.load(
            file_path,
            sr=sr,
            mono=mono,
            duration=duration,
            offset=0.0,
        )
    except Exception as exc:
        raise DecodeError(f"Failed to decode audio file {file_path.name!r}: {exc}") from exc

    logger.debug("Loaded %s: %d samples @ %d Hz", file_path.name, np.shape(y)[-1], int(loaded_sr))
    return y, int(loaded_sr)


def get_duration(path: str | Path, *, librosa: Any = None) -> float:
    """Return the full duration of an audio file in seconds.

    Raises:
        FileNotFoundError, ValueError: as load_audio().
        DecodeError: The file header could not be read.
    """
    file_path = _check_path(path)

    if librosa is None:
        import librosa  # deferred to allow testing without audio backend

    try:
        seconds = librosa.get_duration(path=file_path)
    except Exception as exc:
        raise DecodeError(f"Failed to read duration of {file_path.name!r}: {exc}") from exc

    return float(seconds)
