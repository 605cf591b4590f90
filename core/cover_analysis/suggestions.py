"""
core/cover_analysis/suggestions.py — Threshold rules that turn metrics into advice.

Rule table (evaluated in order, at most MAX_SUGGESTIONS records):
    1. Safe area      — fail → "Move text inward", pass → "Placement is safe"
    2. Region size    — area < 0.04 → small-region warning
    3. Contrast       — < 3.0 low, < 4.5 borderline, else strong
    4. Clutter        — < 40 busy, < 60 some clutter, else manageable
    5. Text color     — always: recommended text and accent colors
"""

from __future__ import annotations

from core.color.types import PaletteResult
from core.cover_analysis.types import NormalizedRect, RegionMetrics, SafeMarginResult, Suggestion

MAX_SUGGESTIONS: int = 10

SMALL_REGION_AREA: float = 0.04
LOW_CONTRAST: float = 3.0
GOOD_CONTRAST: float = 4.5
BUSY_CLUTTER: float = 40.0
CLEAN_CLUTTER: float = 60.0


def score_label(score: float) -> str:
    """Map a 0–100 score to a short verdict."""
    if score >= 80.0:
        return "Excellent"
    if score >= 60.0:
        return "Good"
    if score >= 40.0:
        return "Needs work"
    return "Poor"


def _safe_area_rule(safe: SafeMarginResult) -> Suggestion:
    if not safe.pass_:
        return Suggestion(
            title="Move text inward (crop risk)",
            why=f"{safe.outside_pct:.0f}% of your region is outside the safe area.",
            try_=(
                "Move title/artist toward the center. "
                "Keep critical text inside the dashed safe box."
            ),
            target="Safe score ≥ 95%",
        )
    return Suggestion(
        title="Placement is safe",
        why="Your selected region stays inside the safe area.",
        try_="Keep small type/logos inside this box too (rounded corners + UI overlays can clip edges).",
    )


def _contrast_rule(metrics: RegionMetrics, palette: PaletteResult) -> Suggestion:
    why = f"Estimated contrast ≈ {metrics.contrast_ratio:.2f}."
    if metrics.contrast_ratio < LOW_CONTRAST:
        return Suggestion(
            title="Contrast is very low",
            why=why,
            try_=(
                f"Use “Best text” ({palette.text.primary}) + add a 20–40% overlay behind text. "
                "Add 1–2px stroke if needed."
            ),
            target="Contrast ≥ 4.5 (best), ≥ 3.0 (large text)",
        )
    if metrics.contrast_ratio < GOOD_CONTRAST:
        return Suggestion(
            title="Contrast is borderline",
            why=why,
            try_="Add a subtle gradient overlay behind the title, or increase font weight one step.",
            target="Contrast ≥ 4.5",
        )
    return Suggestion(
        title="Contrast is strong",
        why=why,
        try_="Next: crop safety + clutter (busy backgrounds still kill readability).",
    )


def _clutter_rule(metrics: RegionMetrics) -> Suggestion:
    if metrics.clutter_score < BUSY_CLUTTER:
        return Suggestion(
            title="Background is busy behind text",
            why="High edge density means letters fight with texture/detail.",
            try_=(
                "Move text to a calmer area, blur/simplify behind it, "
                "or add a panel shape behind the title."
            ),
            target="Clutter ≥ 60/100",
        )
    if metrics.clutter_score < CLEAN_CLUTTER:
        return Suggestion(
            title="Some clutter behind text",
            why="May read at 256px but fail at 64px.",
            try_="Add a soft overlay or move text to a quieter zone.",
            target="Clutter ≥ 60/100",
        )
    return Suggestion(
        title="Clutter looks manageable",
        why="The region is relatively clean.",
        try_="Sanity-check your type at 128px.",
    )


def build_suggestions(
    region: NormalizedRect,
    metrics: RegionMetrics,
    safe: SafeMarginResult,
    palette: PaletteResult,
) -> tuple[Suggestion, ...]:
    """Apply the rule table to one analysis pass.

    Args:
        region: The region as drawn (its area drives the size rule).
        metrics: Contrast and clutter for the mapped region.
        safe: Safe-margin result for the drawn region.
        palette: Palette result (text colors are quoted in the advice).

    Returns:
        Ordered suggestions, highest-level placement advice first.
    """
    out: list[Suggestion] = [_safe_area_rule(safe)]

    if region.area < SMALL_REGION_AREA:
        out.append(
            Suggestion(
                title="Region is very small for tiny thumbnails",
                why="Small type disappears quickly at 64–128px.",
                try_="Increase size/weight or reserve more space for the title area.",
                target="Title area typically ≥ ~20% width",
            )
        )

    out.append(_contrast_rule(metrics, palette))
    out.append(_clutter_rule(metrics))
    out.append(
        Suggestion(
            title="Use recommended text color",
            why=f"Best text chip maximizes contrast vs region average ({palette.region_avg}).",
            try_=f"Try {palette.text.primary} for main text. Accent: {palette.text.accent}.",
            target="Contrast ≥ 4.5",
        )
    )
    return tuple(out[:MAX_SUGGESTIONS])
