"""
Compare an album cover's mood with its track's audio features.

CLI entry point::

    python -m scripts.match_cover_audio cover.jpg track.mp3
    python -m scripts.match_cover_audio cover.jpg track.mp3 --config settings.yaml

Only the first 60 seconds of audio are analysed.

Exit codes
----------
    0  — match printed
    1  — the image, audio or config file could not be processed
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from ingestion.cover_engine import CoverAnalysisEngine
from ingestion.errors import DecodeError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score how well a cover's look matches its track's sound.",
    )
    parser.add_argument("cover", help="Cover image (png, jpg, webp, ...).")
    parser.add_argument("audio", help="Audio file (mp3, wav, flac, ...).")
    parser.add_argument("--config", default=None, help="YAML file overriding analysis settings.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run both analyses and print the match as JSON."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        engine = CoverAnalysisEngine.from_config_file(args.config)
        result = engine.match(args.cover, args.audio)
    except (FileNotFoundError, ValueError, DecodeError) as exc:
        logger.error("%s", exc)
        print("Failed to process image/audio.", file=sys.stderr)
        return 1

    print(json.dumps(asdict(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
