"""
ingestion/image_loader.py — File I/O boundary for cover images.

This is the ONLY module in the image pipeline that decodes image files.
Everything downstream (core/cover_analysis/, core/color/) takes a
PixelBuffer — never file paths.

Usage:
    from ingestion.image_loader import load_image
    buffer = load_image("/path/to/cover.png", max_dim=1024)
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from core.cover_analysis.types import PixelBuffer
from ingestion.errors import DecodeError

logger = logging.getLogger(__name__)

# Formats Pillow decodes without optional plugins
IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".tif", ".tiff"}
)

# Longest side after decoding; caps analysis cost on huge artwork
DEFAULT_MAX_DIM: int = 1024


def _fit_within(image: Image.Image, max_dim: int) -> Image.Image:
    """Downscale so the longest side is at most max_dim. Never upscales."""
    w0, h0 = image.size
    scale = min(1.0, max_dim / max(w0, h0))
    if scale >= 1.0:
        return image
    size = (max(1, round(w0 * scale)), max(1, round(h0 * scale)))
    return image.resize(size, Image.Resampling.BILINEAR)


def decode_image(data: bytes, *, max_dim: int = DEFAULT_MAX_DIM, name: str = "<bytes>") -> PixelBuffer:
    """Decode encoded image bytes into an RGBA PixelBuffer.

    Args:
        data: Encoded image (PNG, JPEG, WebP, ...).
        max_dim: Longest side of the returned buffer.
        name: Label used in error messages.

    Returns:
        PixelBuffer, row-major RGBA.

    Raises:
        DecodeError: Pillow could not identify or decode the data, or the
            image exceeds Pillow's decompression-bomb pixel limit.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            rgba = _fit_within(img.convert("RGBA"), max_dim)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image {name!r}: {exc}") from exc

    buffer = PixelBuffer.from_array(np.asarray(rgba, dtype=np.uint8))
    logger.debug("Decoded %s → %dx%d", name, buffer.width, buffer.height)
    return buffer


def load_image(path: str | Path, *, max_dim: int = DEFAULT_MAX_DIM) -> PixelBuffer:
    """Load an image file and return a PixelBuffer.

    Args:
        path: Path to an image file (png, jpg, webp, gif, bmp, tiff).
        max_dim: Longest side of the returned buffer (default 1024).

    Returns:
        PixelBuffer with at most max_dim pixels on its longest side.

    Raises:
        FileNotFoundError: File does not exist at the given path.
        ValueError: File extension is not a supported image format.
        DecodeError: The file could not be decoded (corrupt, truncated, ...).
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Image file not found: {file_path}")

    if file_path.suffix.lower() not in IMAGE_EXTENSIONS:
        raise ValueError(
            f"Unsupported image format {file_path.suffix!r}. "
            f"Supported: {sorted(IMAGE_EXTENSIONS)}"
        )

    return decode_image(file_path.read_bytes(), max_dim=max_dim, name=file_path.name)


# ---------------------------------------------------------------------------
# Square thumbnail previews
# ---------------------------------------------------------------------------

# Streaming-service thumbnail sizes the previews are rendered at
THUMB_SIZES: tuple[int, ...] = (256, 128, 64)


def make_thumbnails(buffer: PixelBuffer, sizes: tuple[int, ...] = THUMB_SIZES) -> dict[int, Image.Image]:
    """Centre-crop the largest square of `buffer` and scale it to each size.

    Returns:
        {size: RGBA Pillow image of size x size}, in the order of `sizes`.

    Raises:
        ValueError: If any size is not positive.
    """
    if any(s <= 0 for s in sizes):
        raise ValueError(f"Thumbnail sizes must be positive, got {sizes}")

    side = min(buffer.width, buffer.height)
    x0 = round((buffer.width - side) / 2)
    y0 = round((buffer.height - side) / 2)
    square = Image.fromarray(buffer.rgba[y0 : y0 + side, x0 : x0 + side].copy())
    return {s: square.resize((s, s), Image.Resampling.BILINEAR) for s in sizes}


def save_thumbnails(
    thumbs: dict[int, Image.Image],
    out_dir: str | Path,
    stem: str,
) -> list[Path]:
    """Write each thumbnail as `<stem>_<size>.png` under out_dir (created if missing)."""
    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for size, image in thumbs.items():
        path = directory / f"{stem}_{size}.png"
        image.save(path, format="PNG")
        written.append(path)
    logger.info("Wrote %d thumbnails to %s", len(written), directory)
    return written
