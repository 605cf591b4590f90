"""
Tests for schemas/report.py and ingestion/report_store.py.
"""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.cover_analysis.pipeline import analyze_region
from core.cover_analysis.types import CropState, NormalizedRect
from ingestion.report_store import load_report, save_report
from schemas.report import CoverReport

_FIXED_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def report(gray_cover) -> CoverReport:
    analysis = analyze_region(gray_cover, NormalizedRect(0.1, 0.7, 0.8, 0.2))
    return CoverReport.from_analysis(analysis, source="cover.png", created_at=_FIXED_TIME)


class TestCoverReportSchema:
    def test_camel_case_keys(self, report):
        data = json.loads(report.to_json())
        assert set(data) == {
            "createdAt",
            "source",
            "imageSize",
            "viewMode",
            "region",
            "mappedRegion",
            "regionMetrics",
            "safeMargin",
            "palette",
            "suggestions",
        }
        assert data["imageSize"] == {"w": 512, "h": 512}
        assert data["viewMode"] == "full"
        assert "contrastRatio" in data["regionMetrics"]
        assert "outsidePct" in data["safeMargin"]
        assert "regionAvg" in data["palette"]
        assert "splitComplement" in data["palette"]["compatible"]

    def test_reserved_word_aliases(self, report):
        data = json.loads(report.to_json())
        assert isinstance(data["safeMargin"]["pass"], bool)
        assert all("try" in s for s in data["suggestions"])

    def test_optional_fields_omitted(self, report):
        data = json.loads(report.to_json())
        assert "crop" not in data
        # the "placement is safe" record has no target
        assert "target" not in data["suggestions"][0]

    def test_crop_sets_view_mode(self, gray_cover):
        crop = CropState(0.5, 0.5, 2.0)
        analysis = analyze_region(gray_cover, NormalizedRect(0.2, 0.2, 0.5, 0.5), crop=crop)
        report = CoverReport.from_analysis(analysis, crop=crop)
        data = json.loads(report.to_json())
        assert data["viewMode"] == "crop"
        assert data["crop"] == {"cx": 0.5, "cy": 0.5, "zoom": 2.0}

    def test_json_round_trip(self, report):
        assert CoverReport.model_validate_json(report.to_json()) == report

    def test_rejects_uppercase_hex(self, report):
        data = json.loads(report.to_json())
        data["palette"]["regionAvg"] = "#ABCDEF"
        with pytest.raises(ValidationError):
            CoverReport.model_validate(data)

    def test_rejects_unknown_view_mode(self, report):
        data = json.loads(report.to_json())
        data["viewMode"] = "zoomed"
        with pytest.raises(ValidationError):
            CoverReport.model_validate(data)

    def test_rejects_region_outside_unit_square(self, report):
        data = json.loads(report.to_json())
        data["region"]["w"] = 1.5
        with pytest.raises(ValidationError):
            CoverReport.model_validate(data)

    def test_harmony_pairs_have_two_colors(self, report):
        data = json.loads(report.to_json())
        data["palette"]["compatible"]["tints"] = ["#ffffff"]
        with pytest.raises(ValidationError):
            CoverReport.model_validate(data)


class TestReportStore:
    def test_save_and_load(self, report, tmp_path):
        path = save_report(report, tmp_path / "reports" / "cover.json")
        assert path.exists()
        assert load_report(path) == report

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_report(tmp_path / "missing.json")

    def test_load_truncated(self, report, tmp_path):
        path = tmp_path / "cover.json"
        path.write_text(report.to_json()[:100])
        with pytest.raises(ValidationError):
            load_report(path)

    def test_load_missing_field(self, report, tmp_path):
        data = json.loads(report.to_json())
        del data["safeMargin"]
        path = tmp_path / "cover.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ValidationError):
            load_report(path)
