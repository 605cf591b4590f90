"""
schemas — Pydantic models for data that crosses the file boundary.
"""

from schemas.report import CoverReport

__all__ = ["CoverReport"]
