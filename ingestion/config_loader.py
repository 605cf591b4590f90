"""
ingestion/config_loader.py — YAML overrides for the analysis configuration.

File format (both sections optional, every key optional):

    image:
      contrast_max_samples: 8000
      safe_inset: 0.1
    audio:
      max_duration_sec: 30

Keys map 1:1 onto the fields of ImageAnalysisConfig / AudioAnalysisConfig in
core/config.py. Validation is the dataclasses' own __post_init__.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml  # PyYAML

from core.config import (
    DEFAULT_AUDIO_CONFIG,
    DEFAULT_IMAGE_CONFIG,
    AudioAnalysisConfig,
    ImageAnalysisConfig,
)

logger = logging.getLogger(__name__)

_SECTIONS = ("image", "audio")

_C = TypeVar("_C", ImageAnalysisConfig, AudioAnalysisConfig)


def _apply_overrides(base: _C, overrides: Any, section: str) -> _C:
    """Return `base` with the keys of `overrides` replaced."""
    if overrides is None:
        return base
    if not isinstance(overrides, dict):
        raise ValueError(f"Config section {section!r} must be a mapping")

    known = {f.name for f in dataclasses.fields(base)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown {section} config keys: {unknown}. Known: {sorted(known)}")

    try:
        return dataclasses.replace(base, **overrides)
    except TypeError as exc:
        raise ValueError(f"Invalid value in {section} config: {exc}") from exc


def parse_config(data: Any) -> tuple[ImageAnalysisConfig, AudioAnalysisConfig]:
    """Build configs from an already-parsed YAML document.

    Args:
        data: Parsed YAML. None (empty file) gives the defaults.

    Returns:
        (image_config, audio_config)

    Raises:
        ValueError: Wrong document shape, unknown section or key, or a value
            rejected by the config dataclass.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        raise ValueError(f"Unknown config sections: {unknown}. Known: {list(_SECTIONS)}")

    image = _apply_overrides(DEFAULT_IMAGE_CONFIG, data.get("image"), "image")
    audio = _apply_overrides(DEFAULT_AUDIO_CONFIG, data.get("audio"), "audio")
    return image, audio


def load_config(path: str | Path | None = None) -> tuple[ImageAnalysisConfig, AudioAnalysisConfig]:
    """Read a YAML config file.

    Args:
        path: YAML file path. None returns the default presets.

    Returns:
        (image_config, audio_config)

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: The YAML is malformed or holds invalid settings.
    """
    if path is None:
        return DEFAULT_IMAGE_CONFIG, DEFAULT_AUDIO_CONFIG

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed YAML in {file_path.name!r}: {exc}") from exc

    image, audio = parse_config(data)
    logger.info("Loaded analysis config from %s", file_path)
    return image, audio
