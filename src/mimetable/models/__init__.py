from __future__ import annotations

from mimetable.models.registry import (
    DataLocation,
    DuplicatePolicy,
    ExtensionIndex,
    MimeTypeIndexes,
    Record,
    TypeIndex,
)

__all__ = [
    # registry
    "Record",
    "MimeTypeIndexes",
    "TypeIndex",
    "ExtensionIndex",
    "DuplicatePolicy",
    # lookup
    "DataLocation",
]
