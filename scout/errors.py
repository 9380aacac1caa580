"""
Exceptions raised by the scouting pipeline.
"""
from __future__ import annotations


class ScoutError(Exception):
    """Base exception for scouting failures."""


class FetchError(ScoutError):
    """Raised when a team page cannot be fetched. Fatal only to that team."""

    def __init__(self, source_name: str, cause: object):
        self.source_name = source_name
        self.cause = cause
        super().__init__(f"{source_name}: {cause}")


class WriteError(ScoutError):
    """Raised when the result file cannot be serialized or written."""

    def __init__(self, path: object, cause: object):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to write {path}: {cause}")
