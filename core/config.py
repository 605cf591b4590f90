"""
Configuration dataclasses for the cover and audio analysis passes.

These immutable config objects hold every tunable constant used by the
pure analysis layer, so callers can swap calibrations without touching
function signatures. Values can be overridden from YAML through
ingestion/config_loader.py.

Calibration note:
    The clutter and complexity constants (edge gain 520, mood threshold
    0.22, mood gain 2.2) are empirical. They were tuned by eye against
    thumbnail legibility and should be recalibrated before reuse with a
    different image pipeline.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageAnalysisConfig:
    """
    Configuration for region metrics, palette extraction and cover mood.

    Attributes:
        contrast_max_samples: Sample budget for the contrast pass.
        clutter_max_samples: Sample budget for the edge-density pass.
        palette_max_samples: Sample budget for dominant-color extraction.
        alpha_threshold: Pixels with alpha below this value are treated as
            transparent and excluded from every statistic.
        contrast_ratio_ceiling: Contrast ratio mapped to a score of 100.
        clutter_edge_gain: Multiplier from mean edge magnitude to score loss.
        palette_size: Number of distinct colors kept per palette.
        palette_similarity: Minimum summed channel distance between two
            kept palette colors.
        safe_inset: Fraction trimmed from each side to form the safe area.
        safe_pass_score: Minimum safe-margin score that counts as a pass.
        mood_edge_threshold: Gradient magnitude counted as an edge by the
            cover mood pass.
        mood_complexity_gain: Multiplier from edge share to complexity.
        max_image_dim: Longest side of decoded images for region analysis.
        mood_image_dim: Longest side of decoded images for the mood pass.

    Example:
        >>> config = ImageAnalysisConfig(safe_inset=0.1)
        >>> result = compute_safe_margin(region, config.safe_inset)
    """

    contrast_max_samples: int = 8_000
    clutter_max_samples: int = 9_000
    palette_max_samples: int = 80_000
    alpha_threshold: int = 10
    contrast_ratio_ceiling: float = 7.0
    clutter_edge_gain: float = 520.0
    palette_size: int = 6
    palette_similarity: int = 90
    safe_inset: float = 0.08
    safe_pass_score: float = 95.0
    mood_edge_threshold: float = 0.22
    mood_complexity_gain: float = 2.2
    max_image_dim: int = 1024
    mood_image_dim: int = 512

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        for name in ("contrast_max_samples", "clutter_max_samples", "palette_max_samples"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if not 0 <= self.alpha_threshold <= 255:
            raise ValueError(f"alpha_threshold must be in [0, 255], got {self.alpha_threshold}")
        if self.contrast_ratio_ceiling <= 1.0:
            raise ValueError(
                f"contrast_ratio_ceiling must be greater than 1, got {self.contrast_ratio_ceiling}"
            )
        if self.clutter_edge_gain <= 0:
            raise ValueError(f"clutter_edge_gain must be positive, got {self.clutter_edge_gain}")
        if self.palette_size <= 0:
            raise ValueError(f"palette_size must be positive, got {self.palette_size}")
        if self.palette_similarity < 0:
            raise ValueError(
                f"palette_similarity must be non-negative, got {self.palette_similarity}"
            )
        if not 0.0 <= self.safe_inset < 0.5:
            raise ValueError(f"safe_inset must be in [0, 0.5), got {self.safe_inset}")
        if not 0.0 <= self.safe_pass_score <= 100.0:
            raise ValueError(f"safe_pass_score must be in [0, 100], got {self.safe_pass_score}")
        if self.mood_edge_threshold <= 0:
            raise ValueError(
                f"mood_edge_threshold must be positive, got {self.mood_edge_threshold}"
            )
        if self.mood_complexity_gain <= 0:
            raise ValueError(
                f"mood_complexity_gain must be positive, got {self.mood_complexity_gain}"
            )
        if self.max_image_dim <= 0 or self.mood_image_dim <= 0:
            raise ValueError("image dimension caps must be positive")


@dataclass(frozen=True)
class AudioAnalysisConfig:
    """
    Configuration for the audio feature extractor.

    Attributes:
        max_duration_sec: Only this many leading seconds are analysed.
        lowpass_coeff: Feedback coefficient of the one-pole low-pass filter.
        frame_length: RMS envelope window in samples.
        hop_length: RMS envelope hop in samples.
        min_bpm: Slowest tempo searched by the autocorrelation.
        max_bpm: Fastest tempo searched by the autocorrelation.
        sanity_min_bpm: Estimates below this are rejected.
        sanity_max_bpm: Estimates above this are rejected.
        energy_gain: Multiplier from RMS to the energy ratio.
        dynamics_span: Peak-minus-RMS distance mapped to dynamics 1.0.
    """

    max_duration_sec: float = 60.0
    lowpass_coeff: float = 0.995
    frame_length: int = 1024
    hop_length: int = 512
    min_bpm: float = 60.0
    max_bpm: float = 200.0
    sanity_min_bpm: float = 50.0
    sanity_max_bpm: float = 220.0
    energy_gain: float = 2.2
    dynamics_span: float = 0.9

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_duration_sec <= 0:
            raise ValueError(f"max_duration_sec must be positive, got {self.max_duration_sec}")
        if not 0.0 < self.lowpass_coeff < 1.0:
            raise ValueError(f"lowpass_coeff must be in (0, 1), got {self.lowpass_coeff}")
        if self.frame_length <= 0 or self.hop_length <= 0:
            raise ValueError("frame_length and hop_length must be positive")
        if self.hop_length > self.frame_length:
            raise ValueError(
                f"hop_length ({self.hop_length}) must not exceed frame_length ({self.frame_length})"
            )
        if not 0 < self.min_bpm < self.max_bpm:
            raise ValueError(
                f"min_bpm ({self.min_bpm}) must be positive and below max_bpm ({self.max_bpm})"
            )
        if self.sanity_min_bpm >= self.sanity_max_bpm:
            raise ValueError("sanity_min_bpm must be below sanity_max_bpm")
        if self.energy_gain <= 0 or self.dynamics_span <= 0:
            raise ValueError("energy_gain and dynamics_span must be positive")


DEFAULT_IMAGE_CONFIG = ImageAnalysisConfig()
"""Default image calibration: 8k/9k/80k sample budgets, 8% safe inset."""

DEFAULT_AUDIO_CONFIG = AudioAnalysisConfig()
"""Default audio calibration: first 60 s, 1024/512 envelope, 60–200 BPM search."""
