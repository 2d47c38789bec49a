"""Error types shared across the package.

``MimeTableError`` is the only exception that crosses the public API. Parsing
anomalies are absorbed by the parser; anything that would leave callers with
an empty or stale table is raised with a code describing what broke.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
    SOURCE_EMPTY = "SOURCE_EMPTY"
    ARTIFACT_WRITE_FAILED = "ARTIFACT_WRITE_FAILED"
    ARTIFACT_MISSING = "ARTIFACT_MISSING"
    ARTIFACT_INVALID = "ARTIFACT_INVALID"
    REGISTRY_NOT_FOUND = "REGISTRY_NOT_FOUND"
    REGISTRY_FETCH_FAILED = "REGISTRY_FETCH_FAILED"
    REGISTRY_WRITE_FAILED = "REGISTRY_WRITE_FAILED"


class MimeTableError(Exception):
    """Failure that aborts a generation run or a lookup."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
