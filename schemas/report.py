"""
schemas/report.py — Pydantic model for persisted cover analysis reports.

The JSON layout uses camelCase keys:

    {createdAt, source?, imageSize: {w, h}, viewMode, crop?, region,
     mappedRegion, regionMetrics, safeMargin, palette, suggestions}

Python attributes stay snake_case; `pass` and `try` are reserved words, so
those two fields are `pass_` / `try_` with explicit aliases.

Reports are read back only through CoverReport.model_validate_json(), so a
hand-edited or truncated file fails with a ValidationError instead of
producing a half-populated object.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from core.cover_analysis.types import CropState, RegionAnalysis

HexColor = Annotated[str, StringConstraints(pattern=r"^#[0-9a-f]{6}$")]
"""Lowercase #rrggbb."""

Unit = Annotated[float, Field(ge=0.0, le=1.0)]
Percent = Annotated[float, Field(ge=0.0, le=100.0)]


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ImageSize(_ReportModel):
    w: int = Field(..., ge=1)
    h: int = Field(..., ge=1)


class RectModel(_ReportModel):
    """Normalised rectangle, all components in [0, 1]."""

    x: Unit
    y: Unit
    w: Unit
    h: Unit


class CropModel(_ReportModel):
    """Square crop viewport the region was drawn in."""

    cx: Unit = 0.5
    cy: Unit = 0.5
    zoom: float = Field(1.0, ge=1.0, le=4.0)


class RegionMetricsModel(_ReportModel):
    contrast_ratio: float = Field(..., ge=1.0)
    contrast_score: Percent
    clutter_score: Percent
    p10: float = Field(0.0, ge=0.0)
    p90: float = Field(0.0, ge=0.0)
    edge_mean: float = Field(0.0, ge=0.0)
    sample_count: int = Field(0, ge=0)


class SafeMarginModel(_ReportModel):
    inset: float = Field(..., ge=0.0, lt=0.5)
    score: Percent
    outside_pct: Percent
    pass_: bool = Field(..., alias="pass")


class TextColorsModel(_ReportModel):
    primary: HexColor
    primary_ratio: float = Field(..., ge=1.0)
    secondary: HexColor
    secondary_ratio: float = Field(..., ge=1.0)
    accent: HexColor
    accent_ratio: float = Field(..., ge=1.0)


class HarmonyModel(_ReportModel):
    complement: HexColor
    analogous: tuple[HexColor, HexColor]
    triadic: tuple[HexColor, HexColor]
    split_complement: tuple[HexColor, HexColor]
    tints: tuple[HexColor, HexColor]
    shades: tuple[HexColor, HexColor]


class PaletteModel(_ReportModel):
    region_avg: HexColor
    region: list[HexColor]
    image: list[HexColor]
    text: TextColorsModel
    compatible: HarmonyModel


class SuggestionModel(_ReportModel):
    title: str = Field(..., min_length=1)
    why: str
    try_: str = Field(..., alias="try")
    target: str | None = None


class CoverReport(_ReportModel):
    """One saved analysis pass."""

    created_at: datetime
    source: str | None = Field(default=None, description="Image file name the report was made from")
    image_size: ImageSize
    view_mode: Literal["crop", "full"]
    crop: CropModel | None = None
    region: RectModel
    mapped_region: RectModel
    region_metrics: RegionMetricsModel
    safe_margin: SafeMarginModel
    palette: PaletteModel
    suggestions: list[SuggestionModel] = Field(default_factory=list)

    @classmethod
    def from_analysis(
        cls,
        analysis: RegionAnalysis,
        *,
        crop: CropState | None = None,
        source: str | None = None,
        created_at: datetime | None = None,
    ) -> CoverReport:
        """Build a report from a RegionAnalysis.

        `view_mode` is "crop" when a crop viewport was used, otherwise "full".
        """
        w, h = analysis.image_size
        return cls(
            created_at=created_at or datetime.now(timezone.utc),
            source=source,
            image_size=ImageSize(w=w, h=h),
            view_mode="crop" if crop is not None else "full",
            crop=CropModel(**asdict(crop)) if crop is not None else None,
            region=RectModel(**asdict(analysis.region)),
            mapped_region=RectModel(**asdict(analysis.mapped_region)),
            region_metrics=RegionMetricsModel(**asdict(analysis.metrics)),
            safe_margin=SafeMarginModel(**asdict(analysis.safe_margin)),
            palette=PaletteModel.model_validate(asdict(analysis.palette)),
            suggestions=[SuggestionModel(**asdict(s)) for s in analysis.suggestions],
        )

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialise with camelCase keys; absent optional fields are omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
