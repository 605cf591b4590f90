"""
ingestion/cover_engine.py — High-level orchestrator for cover and audio analysis.

CoverAnalysisEngine wires the decode boundary to the pure analysis core:

    image file
        │
        ├─ load_image()              [ingestion/image_loader.py — I/O boundary]
        │       ↓
        ├─ analyze_region()          [core/cover_analysis/pipeline.py]
        │       ↓
        └─ CoverReport               [schemas/report.py — JSON output]

    image file ── load_image(512) ── compute_cover_mood() ─┐
                                                           ├─ compute_match()
    audio file ── load_audio(60 s) ── extract_audio_features() ─┘

This module is in `ingestion/` because it decodes files and logs; all the
numbers come from pure functions in `core/`.

Usage:
    engine = CoverAnalysisEngine()
    report = engine.build_report("cover.png", NormalizedRect(0.1, 0.7, 0.8, 0.2))
    print(report.to_json())

    result = engine.match("cover.png", "track.mp3")
    print(result.match.score, result.match.label)
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.audio.features import extract_audio_features
from core.audio.types import AudioFeatures
from core.config import (
    DEFAULT_AUDIO_CONFIG,
    DEFAULT_IMAGE_CONFIG,
    AudioAnalysisConfig,
    ImageAnalysisConfig,
)
from core.cover_analysis.geometry import USER_MIN_SIZE, clamp_crop, clamp_rect
from core.cover_analysis.match import compute_match
from core.cover_analysis.mood import compute_cover_mood
from core.cover_analysis.pipeline import analyze_region
from core.cover_analysis.types import (
    CoverMood,
    CropState,
    MatchResult,
    NormalizedRect,
    PixelBuffer,
    RegionAnalysis,
)
from ingestion.audio_loader import get_duration, load_audio
from ingestion.config_loader import load_config
from ingestion.image_loader import load_image
from schemas.report import CoverReport

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CoverAudioMatch: output of CoverAnalysisEngine.match()
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CoverAudioMatch:
    """Cover mood, audio features and their alignment score.

    Attributes:
        mood:  Whole-cover mood summary.
        audio: Features of the first 60 s of the track.
        match: Alignment score, label and notes.
    """

    mood: CoverMood
    audio: AudioFeatures
    match: MatchResult


# ---------------------------------------------------------------------------
# CoverAnalysisEngine
# ---------------------------------------------------------------------------


class CoverAnalysisEngine:
    """Single integration point between file decoding and the analysis core.

    The engine holds configuration only. Every call decodes, analyses and
    returns fresh values; nothing is cached between calls.

    librosa is imported lazily on first audio use (or injected for testing).
    """

    def __init__(
        self,
        image_config: ImageAnalysisConfig = DEFAULT_IMAGE_CONFIG,
        audio_config: AudioAnalysisConfig = DEFAULT_AUDIO_CONFIG,
        librosa: Any = None,
    ) -> None:
        """Initialise the engine.

        Args:
            image_config: Sampling budgets and calibration for image analysis.
            audio_config: Window sizes and calibration for audio analysis.
            librosa: Injected librosa module. Pass a MagicMock in tests to avoid
                     loading the audio stack. None = import lazily on first use.
        """
        self.image_config = image_config
        self.audio_config = audio_config
        self._librosa = librosa

    @classmethod
    def from_config_file(cls, path: str | Path | None, librosa: Any = None) -> CoverAnalysisEngine:
        """Build an engine from a YAML config file (None = defaults)."""
        image_config, audio_config = load_config(path)
        return cls(image_config, audio_config, librosa=librosa)

    def _get_librosa(self) -> Any:
        """Return librosa, importing it lazily if not already injected."""
        if self._librosa is None:
            import librosa as _lib  # deferred so tests run without the audio backend

            self._librosa = _lib
        return self._librosa

    def _image_config(self, inset: float | None) -> ImageAnalysisConfig:
        if inset is None:
            return self.image_config
        return dataclasses.replace(self.image_config, safe_inset=inset)

    # ------------------------------------------------------------------
    # Region analysis
    # ------------------------------------------------------------------

    def analyze_buffer(
        self,
        buffer: PixelBuffer,
        region: NormalizedRect,
        *,
        crop: CropState | None = None,
        inset: float | None = None,
    ) -> RegionAnalysis:
        """Analyse a region of an already-decoded image.

        Args:
            buffer: Decoded image.
            region: Selected region; clamped to the frame with a 2% minimum size.
            crop:   Optional crop viewport the region was drawn in.
            inset:  Safe-area inset override (default from image_config).

        Returns:
            RegionAnalysis for the pass.
        """
        config = self._image_config(inset)
        region = clamp_rect(region, USER_MIN_SIZE)
        if crop is not None:
            crop = clamp_crop(crop, buffer.width, buffer.height)

        t0 = time.perf_counter()
        analysis = analyze_region(buffer, region, crop=crop, config=config)
        logger.debug(
            "Region analysis on %dx%d took %.1f ms",
            buffer.width,
            buffer.height,
            (time.perf_counter() - t0) * 1000,
        )
        return analysis

    def analyze_image(
        self,
        path: str | Path,
        region: NormalizedRect,
        *,
        crop: CropState | None = None,
        inset: float | None = None,
    ) -> RegionAnalysis:
        """Decode an image file (longest side capped at max_image_dim) and analyse a region.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file extension is not a supported format.
            DecodeError: If the image cannot be decoded.
        """
        buffer = load_image(path, max_dim=self.image_config.max_image_dim)
        return self.analyze_buffer(buffer, region, crop=crop, inset=inset)

    def build_report(
        self,
        path: str | Path,
        region: NormalizedRect,
        *,
        crop: CropState | None = None,
        inset: float | None = None,
    ) -> CoverReport:
        """Analyse a region of an image file and wrap the result in a CoverReport.

        Raises:
            FileNotFoundError, ValueError, DecodeError: from load_image.
        """
        buffer = load_image(path, max_dim=self.image_config.max_image_dim)
        analysis = self.analyze_buffer(buffer, region, crop=crop, inset=inset)
        if crop is not None:
            crop = clamp_crop(crop, buffer.width, buffer.height)

        report = CoverReport.from_analysis(analysis, crop=crop, source=Path(path).name)
        logger.info(
            "Analysed %s: contrast %.2f:1, clutter %.0f, safe %.0f%%",
            Path(path).name,
            analysis.metrics.contrast_ratio,
            analysis.metrics.clutter_score,
            analysis.safe_margin.score,
        )
        return report

    # ------------------------------------------------------------------
    # Cover mood and audio match
    # ------------------------------------------------------------------

    def cover_mood(self, path: str | Path) -> CoverMood:
        """Decode an image at mood resolution and summarise it.

        Raises:
            FileNotFoundError, ValueError, DecodeError: from load_image.
        """
        buffer = load_image(path, max_dim=self.image_config.mood_image_dim)
        return compute_cover_mood(buffer, config=self.image_config)

    def audio_features(self, path: str | Path) -> AudioFeatures:
        """Load the first max_duration_sec of an audio file and extract features.

        The reported duration is the full file length even though only the
        leading window is analysed.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file extension is not a supported format.
            DecodeError: If the audio cannot be decoded.
        """
        lib = self._get_librosa()
        y, sr = load_audio(path, duration=self.audio_config.max_duration_sec, librosa=lib)
        total = get_duration(path, librosa=lib)

        features = extract_audio_features(y, sr, duration_sec=total, config=self.audio_config)
        logger.info(
            "Audio %s: %.1fs (analysed %.1fs), bpm=%s",
            Path(path).name,
            features.duration_sec,
            features.analyzed_sec,
            features.bpm,
        )
        return features

    def match(self, cover_path: str | Path, audio_path: str | Path) -> CoverAudioMatch:
        """Compare a cover's mood with a track's audio features.

        Raises:
            FileNotFoundError, ValueError, DecodeError: from either loader.
        """
        mood = self.cover_mood(cover_path)
        audio = self.audio_features(audio_path)
        return CoverAudioMatch(mood=mood, audio=audio, match=compute_match(audio, mood))
