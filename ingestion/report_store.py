"""
ingestion/report_store.py — Save and load analysis reports as JSON files.

Reports are written with camelCase keys (see schemas/report.py) and parsed
back through the pydantic model, so malformed files raise
pydantic.ValidationError rather than returning partial data.
"""

from __future__ import annotations

import logging
from pathlib import Path

from schemas.report import CoverReport

logger = logging.getLogger(__name__)


def save_report(report: CoverReport, path: str | Path) -> Path:
    """Write `report` to `path` as indented JSON. Parent dirs are created.

    Returns:
        The path written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(report.to_json() + "\n", encoding="utf-8")
    logger.info("Saved report to %s", file_path)
    return file_path


def load_report(path: str | Path) -> CoverReport:
    """Read and validate a report written by save_report().

    Raises:
        FileNotFoundError: The file does not exist.
        pydantic.ValidationError: The JSON is malformed or fails validation.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Report file not found: {file_path}")
    return CoverReport.model_validate_json(file_path.read_text(encoding="utf-8"))
