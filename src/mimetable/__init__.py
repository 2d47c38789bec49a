"""Bidirectional MIME type <-> file extension table built from the Apache
``mime.types`` registry."""

from __future__ import annotations

from mimetable.errors import ErrorCode, MimeTableError
from mimetable.lookup import (
    ArtifactCache,
    MimeTypeLookup,
    extensions_for_type,
    get_location,
    types_for_extension,
)
from mimetable.updater import regenerate

__all__ = [
    "ArtifactCache",
    "ErrorCode",
    "MimeTableError",
    "MimeTypeLookup",
    "extensions_for_type",
    "get_location",
    "regenerate",
    "types_for_extension",
]
