"""
Tests for ingestion/cover_engine.py — CoverAnalysisEngine orchestration.

Images are real PNGs written to tmp_path; librosa is always the mock from
conftest, injected through the constructor.
"""

import pytest

from core.audio.types import AudioFeatures
from core.config import AudioAnalysisConfig, ImageAnalysisConfig
from core.cover_analysis.types import CoverMood, CropState, NormalizedRect
from ingestion.cover_engine import CoverAnalysisEngine, CoverAudioMatch
from ingestion.errors import DecodeError
from schemas.report import CoverReport


@pytest.fixture
def engine(mock_librosa) -> CoverAnalysisEngine:
    return CoverAnalysisEngine(librosa=mock_librosa)


@pytest.fixture
def track(tmp_path):
    path = tmp_path / "track.wav"
    path.write_bytes(b"fake wav")
    return path


# ---------------------------------------------------------------------------
# Region analysis
# ---------------------------------------------------------------------------


class TestAnalyzeBuffer:
    def test_overhanging_region_is_shifted_inside(self, engine, gray_cover):
        analysis = engine.analyze_buffer(gray_cover, NormalizedRect(0.9, 0.9, 0.5, 0.5))
        assert analysis.region == NormalizedRect(0.5, 0.5, 0.5, 0.5)

    def test_tiny_region_gets_minimum_size(self, engine, gray_cover):
        analysis = engine.analyze_buffer(gray_cover, NormalizedRect(0.4, 0.4, 0.001, 0.0))
        assert analysis.region.w == pytest.approx(0.02)
        assert analysis.region.h == pytest.approx(0.02)

    def test_inset_override(self, engine, gray_cover):
        region = NormalizedRect(0.05, 0.05, 0.9, 0.9)
        assert not engine.analyze_buffer(gray_cover, region).safe_margin.pass_

        relaxed = engine.analyze_buffer(gray_cover, region, inset=0.0)
        assert relaxed.safe_margin.inset == 0.0
        assert relaxed.safe_margin.score == pytest.approx(100.0)
        assert relaxed.safe_margin.pass_

    def test_inset_override_leaves_engine_config(self, engine, gray_cover):
        engine.analyze_buffer(gray_cover, NormalizedRect(0.2, 0.2, 0.5, 0.5), inset=0.2)
        assert engine.image_config.safe_inset == 0.08

    def test_crop_maps_region(self, engine, gray_cover):
        analysis = engine.analyze_buffer(
            gray_cover, NormalizedRect(0.0, 0.0, 1.0, 1.0), crop=CropState(0.5, 0.5, 2.0)
        )
        assert analysis.mapped_region == NormalizedRect(0.25, 0.25, 0.5, 0.5)


class TestBuildReport:
    def test_report_fields(self, engine, write_png):
        path = write_png("cover.png", 600, 300, (128, 128, 128))
        report = engine.build_report(path, NormalizedRect(0.1, 0.7, 0.8, 0.2))
        assert isinstance(report, CoverReport)
        assert report.source == "cover.png"
        assert report.view_mode == "full"
        assert report.crop is None
        assert (report.image_size.w, report.image_size.h) == (600, 300)
        assert report.palette.region_avg == "#808080"

    def test_report_records_clamped_crop(self, engine, write_png):
        path = write_png("wide.png", 600, 300, (128, 128, 128))
        report = engine.build_report(
            path, NormalizedRect(0.2, 0.2, 0.5, 0.5), crop=CropState(0.0, 0.0, 10.0)
        )
        assert report.view_mode == "crop"
        assert report.crop.zoom == 4.0
        assert report.crop.cx == pytest.approx(0.0625)
        assert report.crop.cy == pytest.approx(0.125)

    def test_large_image_is_capped(self, mock_librosa, write_png):
        engine = CoverAnalysisEngine(ImageAnalysisConfig(max_image_dim=256), librosa=mock_librosa)
        report = engine.build_report(
            write_png("big.png", 1024, 512, (0, 0, 0)), NormalizedRect(0.1, 0.1, 0.5, 0.5)
        )
        assert (report.image_size.w, report.image_size.h) == (256, 128)

    def test_missing_image(self, engine, tmp_path):
        with pytest.raises(FileNotFoundError):
            engine.build_report(tmp_path / "missing.png", NormalizedRect(0.1, 0.1, 0.5, 0.5))

    def test_corrupt_image(self, engine, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not a png")
        with pytest.raises(DecodeError):
            engine.build_report(path, NormalizedRect(0.1, 0.1, 0.5, 0.5))


# ---------------------------------------------------------------------------
# Mood and audio
# ---------------------------------------------------------------------------


class TestCoverMood:
    def test_gray_cover(self, engine, write_png):
        mood = engine.cover_mood(write_png("gray.png", 64, 64, (128, 128, 128)))
        assert isinstance(mood, CoverMood)
        assert mood.brightness == pytest.approx(128 / 255, abs=1e-6)
        assert mood.saturation == 0.0
        assert mood.complexity == 0.0


class TestAudioFeatures:
    def test_reports_full_duration(self, engine, track):
        features = engine.audio_features(track)
        assert isinstance(features, AudioFeatures)
        assert features.duration_sec == 180.0
        assert features.analyzed_sec == pytest.approx(5.0)
        assert features.sample_rate == 22050

    def test_loads_configured_window(self, mock_librosa, track):
        engine = CoverAnalysisEngine(audio_config=AudioAnalysisConfig(max_duration_sec=30.0), librosa=mock_librosa)
        engine.audio_features(track)
        assert mock_librosa.load.call_args[1]["duration"] == 30.0

    def test_default_window_is_one_minute(self, engine, mock_librosa, track):
        engine.audio_features(track)
        assert mock_librosa.load.call_args[1]["duration"] == 60.0

    def test_tone_has_energy(self, engine, track):
        features = engine.audio_features(track)
        assert 0.0 < features.energy <= 1.0


class TestMatch:
    def test_returns_bundle(self, engine, write_png, track):
        result = engine.match(write_png("cover.png", 64, 64, (200, 80, 20)), track)
        assert isinstance(result, CoverAudioMatch)
        assert 0 <= result.match.score <= 100
        assert result.match.label in {"Aligned", "Mixed", "Mismatch"}
        assert result.match.notes
        assert result.audio.duration_sec == 180.0

    def test_missing_audio(self, engine, write_png, tmp_path):
        with pytest.raises(FileNotFoundError):
            engine.match(write_png("cover.png", 8, 8, (0, 0, 0)), tmp_path / "missing.mp3")


class TestFromConfigFile:
    def test_none_uses_defaults(self, mock_librosa):
        engine = CoverAnalysisEngine.from_config_file(None, librosa=mock_librosa)
        assert engine.image_config == ImageAnalysisConfig()
        assert engine.audio_config == AudioAnalysisConfig()

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("image:\n  safe_inset: 0.12\naudio:\n  max_duration_sec: 20\n")
        engine = CoverAnalysisEngine.from_config_file(path)
        assert engine.image_config.safe_inset == 0.12
        assert engine.audio_config.max_duration_sec == 20
