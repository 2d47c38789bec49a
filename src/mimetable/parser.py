"""Parser for the Apache ``mime.types`` registry format.

Each data line holds a content type, one or more tab characters, and a
space-separated list of extensions::

    application/json\t\t\t\tjson
    text/html\t\t\t\t\thtml htm

Lines starting with ``#`` are comments. Only the first and the last
tab-delimited fields are kept; anything in between is discarded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mimetable.errors import ErrorCode, MimeTableError
from mimetable.models.registry import Record

if TYPE_CHECKING:
    from os import PathLike

log = structlog.get_logger()

COMMENT_PREFIX = "#"


def parse_line(line: str) -> Record | None:
    """Split one data line into a record.

    Returns ``None`` for lines that carry no content type, so callers can skip
    them without aborting the run. A line without a tab is its own extension
    column.
    """
    fields = line.split("\t")
    mime_type = fields[0].strip()
    if not mime_type:
        return None

    column = fields[-1].strip()
    extensions = column.split(" ") if column else []
    return Record(mime_type=mime_type, extensions=extensions)


def parse_registry(path: str | PathLike[str]) -> list[Record]:
    """Read the registry at *path* and return its records in source order."""
    records: list[Record] = []
    try:
        with open(path, encoding="utf-8") as handle:
            for lineno, raw in enumerate(handle, start=1):
                line = raw.rstrip("\r\n")
                if line.startswith(COMMENT_PREFIX) or not line.strip():
                    continue

                record = parse_line(line)
                if record is None:
                    log.warning("registry_line_skipped", path=str(path), lineno=lineno)
                    continue
                records.append(record)
    except (OSError, UnicodeDecodeError) as exc:
        raise MimeTableError(
            ErrorCode.SOURCE_UNREADABLE,
            f"Registry file does not exist or is not readable: {path} ({exc})",
        ) from exc

    log.debug("registry_parsed", path=str(path), records=len(records))
    return records
