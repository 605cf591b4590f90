"""
Shared fixtures for the test suite.

Synthetic images are built directly as numpy arrays so core tests never
touch the filesystem. Factories are exposed as fixtures returning callables.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import numpy as np
import pytest
from PIL import Image

from core.cover_analysis.types import PixelBuffer

# ---------------------------------------------------------------------------
# Pixel buffer factories
# ---------------------------------------------------------------------------


def _solid(width: int, height: int, color: tuple[int, int, int], alpha: int = 255) -> PixelBuffer:
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., :3] = color
    arr[..., 3] = alpha
    return PixelBuffer.from_array(arr)


def _checkerboard(width: int, height: int) -> PixelBuffer:
    """1-px black/white checkerboard, white where (x + y) is odd."""
    yy, xx = np.mgrid[0:height, 0:width]
    value = (((xx + yy) % 2) * 255).astype(np.uint8)
    return PixelBuffer.from_array(np.repeat(value[..., None], 3, axis=2))


@pytest.fixture
def solid_buffer() -> Callable[..., PixelBuffer]:
    """Factory: solid_buffer(width, height, (r, g, b), alpha=255)."""
    return _solid


@pytest.fixture
def checkerboard_buffer() -> Callable[[int, int], PixelBuffer]:
    """Factory: checkerboard_buffer(width, height)."""
    return _checkerboard


@pytest.fixture
def gray_cover() -> PixelBuffer:
    """512×512 opaque #808080."""
    return _solid(512, 512, (128, 128, 128))


@pytest.fixture
def noise_buffer() -> PixelBuffer:
    """Seeded 120×80 random RGB image."""
    rng = np.random.default_rng(7)
    return PixelBuffer.from_array(rng.integers(0, 256, size=(80, 120, 3), dtype=np.uint8))


# ---------------------------------------------------------------------------
# Files on disk
# ---------------------------------------------------------------------------


@pytest.fixture
def write_png(tmp_path) -> Callable[..., str]:
    """Factory: write_png(name, width, height, (r, g, b)) → path of a solid PNG."""

    def _write(name: str, width: int, height: int, color: tuple[int, int, int]) -> str:
        path = tmp_path / name
        Image.new("RGB", (width, height), color).save(path)
        return str(path)

    return _write


# ---------------------------------------------------------------------------
# Mock librosa
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_librosa() -> MagicMock:
    """librosa stand-in: 5 s of a 220 Hz tone at 22050 Hz, 180 s total duration."""
    sr = 22050
    t = np.arange(sr * 5) / sr
    y = (0.3 * np.sin(2 * np.pi * 220.0 * t)).astype(np.float32)

    mock = MagicMock()
    mock.load.return_value = (y, sr)
    mock.get_duration.return_value = 180.0
    return mock
