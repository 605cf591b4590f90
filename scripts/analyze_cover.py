"""
Thumbnail legibility report for one region of an album cover.

CLI entry point::

    python -m scripts.analyze_cover cover.png --region 0.1,0.7,0.8,0.2
    python -m scripts.analyze_cover cover.png --region 0.1,0.1,0.5,0.3 \\
        --crop 0.5,0.5,2 --inset 0.1 --out report.json
    python -m scripts.analyze_cover cover.png --region 0.1,0.7,0.8,0.2 --thumbs previews/

The region is normalised to the image, or to the square crop viewport when
--crop is given. The report JSON is printed to stdout.

Exit codes
----------
    0  — report written
    1  — the image or config file could not be processed
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from core.cover_analysis.suggestions import score_label
from core.cover_analysis.types import CropState, NormalizedRect
from ingestion.cover_engine import CoverAnalysisEngine
from ingestion.errors import DecodeError
from ingestion.image_loader import load_image, make_thumbnails, save_thumbnails
from ingestion.report_store import save_report

logger = logging.getLogger(__name__)


def _floats(text: str, count: int, name: str) -> list[float]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != count:
        raise argparse.ArgumentTypeError(f"{name} needs {count} comma-separated numbers, got {text!r}")
    try:
        return [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"{name} must be numeric, got {text!r}") from None


def parse_region(text: str) -> NormalizedRect:
    """Parse 'x,y,w,h' into a NormalizedRect."""
    x, y, w, h = _floats(text, 4, "region")
    return NormalizedRect(x=x, y=y, w=w, h=h)


def parse_crop(text: str) -> CropState:
    """Parse 'cx,cy,zoom' into a CropState."""
    cx, cy, zoom = _floats(text, 3, "crop")
    return CropState(cx=cx, cy=cy, zoom=zoom)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score how legible a region of an album cover stays as a thumbnail.",
    )
    parser.add_argument("image", help="Cover image (png, jpg, webp, ...).")
    parser.add_argument(
        "--region",
        type=parse_region,
        required=True,
        help="Text region as normalised x,y,w,h (e.g. 0.1,0.7,0.8,0.2).",
    )
    parser.add_argument(
        "--crop",
        type=parse_crop,
        default=None,
        help="Square crop viewport as cx,cy,zoom; the region is then relative to it.",
    )
    parser.add_argument(
        "--inset",
        type=float,
        default=None,
        help="Safe-area inset fraction (default: 0.08 or the config value).",
    )
    parser.add_argument("--config", default=None, help="YAML file overriding analysis settings.")
    parser.add_argument("--out", default=None, help="Also save the report JSON to this path.")
    parser.add_argument(
        "--thumbs",
        default=None,
        help="Also write centre-cropped 256/128/64 px PNG previews to this directory.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, analyse the region and print the report."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        engine = CoverAnalysisEngine.from_config_file(args.config)
        report = engine.build_report(args.image, args.region, crop=args.crop, inset=args.inset)
        if args.thumbs:
            buffer = load_image(args.image, max_dim=engine.image_config.max_image_dim)
            save_thumbnails(make_thumbnails(buffer), args.thumbs, Path(args.image).stem)
    except (FileNotFoundError, ValueError, DecodeError) as exc:
        logger.error("%s", exc)
        print("Failed to process image.", file=sys.stderr)
        return 1

    if args.out:
        save_report(report, args.out)

    print(report.to_json())
    metrics = report.region_metrics
    logger.info(
        "Contrast: %s · Clutter: %s · Safe area: %s",
        score_label(metrics.contrast_score),
        score_label(metrics.clutter_score),
        "pass" if report.safe_margin.pass_ else "at risk",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
