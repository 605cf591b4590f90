"""
core/cover_analysis/match.py — Does the cover look like the track sounds?

Audio features define a target mood; the score is a weighted distance
between that target and the measured cover mood.

Targets (all clamped to [0, 1]):
    brightness  0.25 + 0.60·audio.brightness + 0.20·energy
    saturation  0.15 + 0.70·energy
    warmth      0.25 + 0.60·bass - 0.25·audio.brightness
    complexity  0.15 + 0.55·energy + 0.35·dynamics

score = round(100 - 100 · (0.32·Δbright + 0.26·Δsat + 0.22·Δwarm + 0.20·Δcomp))
"""

from __future__ import annotations

from core.audio.types import AudioFeatures
from core.cover_analysis.types import CoverMood, MatchResult

NOTE_THRESHOLD: float = 0.22

_WEIGHTS: dict[str, float] = {
    "brightness": 0.32,
    "saturation": 0.26,
    "warmth": 0.22,
    "complexity": 0.20,
}

# (cover below target, cover above target)
_NOTES: dict[str, tuple[str, str]] = {
    "brightness": (
        "Your track reads brighter than the cover. Consider lifting exposure, adding a "
        "lighter background, or using a high-contrast title color.",
        "Your cover is brighter than the track’s tone. Consider deeper shadows, a darker "
        "vignette, or a more muted title treatment.",
    ),
    "saturation": (
        "The track feels more energetic than the cover palette. Try a stronger accent "
        "color, higher saturation, or bolder typography.",
        "The cover is very saturated compared to the track’s energy. Try fewer accents, "
        "softer saturation, or calmer type weight.",
    ),
    "warmth": (
        "The audio feels bass/warm, but the cover reads cool. Try warmer accents "
        "(orange/red), warmer grading, or cream/amber type.",
        "The cover reads very warm compared to the track. Try cooler accents (cyan/blue) "
        "or a more neutral/gray base.",
    ),
    "complexity": (
        "The track has more movement than the cover. Consider adding texture, motion "
        "cues (diagonal layout), or more layered elements.",
        "The cover is visually busy relative to the track. Consider simplifying the "
        "background behind title text, reducing texture, or adding clean panels.",
    ),
}

_ALIGNED_NOTE = (
    "Overall alignment looks strong. Next: use Analyze to confirm "
    "contrast/clutter/safe-area for your title region."
)


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def match_label(score: float) -> str:
    if score >= 75:
        return "Aligned"
    if score >= 55:
        return "Mixed"
    return "Mismatch"


def target_mood(audio: AudioFeatures) -> CoverMood:
    """The cover mood a track with these features would ideally have."""
    return CoverMood(
        brightness=_clamp01(0.25 + 0.6 * audio.brightness + 0.2 * audio.energy),
        saturation=_clamp01(0.15 + 0.7 * audio.energy),
        warmth=_clamp01(0.25 + 0.6 * audio.bass - 0.25 * audio.brightness),
        complexity=_clamp01(0.15 + 0.55 * audio.energy + 0.35 * audio.dynamics),
    )


def compute_match(audio: AudioFeatures, cover: CoverMood) -> MatchResult:
    """Score how well a cover's mood fits a track's audio features.

    Returns:
        MatchResult with a 0–100 score, a label, and one note per dimension
        that is more than 0.22 away from its target.
    """
    target = target_mood(audio)
    weighted = 0.0
    notes: list[str] = []
    for name, weight in _WEIGHTS.items():
        actual = getattr(cover, name)
        wanted = getattr(target, name)
        delta = abs(actual - wanted)
        weighted += weight * delta
        if delta > NOTE_THRESHOLD:
            below, above = _NOTES[name]
            notes.append(below if actual < wanted else above)

    if not notes:
        notes.append(_ALIGNED_NOTE)

    score = int(max(0, min(100, round(100.0 - weighted * 100.0))))
    return MatchResult(score=score, label=match_label(score), notes=tuple(notes))
