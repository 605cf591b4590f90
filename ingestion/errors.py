"""
ingestion/errors.py — Exceptions raised at the file I/O boundary.
"""


class DecodeError(RuntimeError):
    """An image or audio file exists but could not be decoded.

    Subclasses RuntimeError so callers that already catch decode failures
    as RuntimeError keep working.
    """
