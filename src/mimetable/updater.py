"""Regeneration of the MIME types artifact.

``regenerate`` runs the parse -> index -> write pipeline over a local registry
file. ``update`` wraps it with the download step and is what ``python -m
mimetable update`` calls after an install or upgrade.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from mimetable.errors import ErrorCode, MimeTableError
from mimetable.fetcher import RegistryFetcher, build_http_client
from mimetable.indexes import build_indexes
from mimetable.lookup import ARTIFACT_SUFFIX, SOURCE_SUFFIX, get_location
from mimetable.parser import parse_registry
from mimetable.serializer import write_artifact

if TYPE_CHECKING:
    from os import PathLike

    from mimetable.config import Settings
    from mimetable.models.registry import MimeTypeIndexes

log = structlog.get_logger()


def regenerate(
    registry_path: str | PathLike[str],
    artifact_path: str | PathLike[str],
    *,
    discard_source: bool = True,
) -> MimeTypeIndexes:
    """Rebuild the artifact at *artifact_path* from the registry file.

    Nothing is written if the registry cannot be read or holds no data lines,
    and the registry file is only removed once the new artifact is in place.
    """
    registry_path = Path(registry_path)
    artifact_path = Path(artifact_path)

    log.info("registry_parse_started", path=str(registry_path))
    records = parse_registry(registry_path)
    if not records:
        raise MimeTableError(
            ErrorCode.SOURCE_EMPTY,
            f"Registry file contains no MIME type definitions: {registry_path}",
        )

    log.info("indexes_build_started", records=len(records))
    indexes = build_indexes(records)

    log.info("artifact_write_started", path=str(artifact_path))
    write_artifact(indexes, artifact_path)

    if discard_source:
        log.info("registry_source_removed", path=str(registry_path))
        registry_path.unlink(missing_ok=True)

    return indexes


async def update(settings: Settings, location: str | PathLike[str] | None = None) -> Path:
    """Download the registry and regenerate the artifact next to it.

    *location* is the data path without suffix; defaults to the package's
    bundled data location.
    """
    base = Path(location) if location is not None else get_location()
    registry_path = base.with_name(base.name + SOURCE_SUFFIX)
    artifact_path = base.with_name(base.name + ARTIFACT_SUFFIX)

    try:
        base.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise MimeTableError(
            ErrorCode.ARTIFACT_WRITE_FAILED, f"Cannot create data directory {base.parent}: {exc}"
        ) from exc

    log.info("registry_fetch_started", url=settings.registry.url)
    async with build_http_client(settings.registry) as client:
        await RegistryFetcher(client).download(settings.registry.url, registry_path)

    try:
        regenerate(registry_path, artifact_path)
    finally:
        # a failed run must not leave the raw registry behind either
        registry_path.unlink(missing_ok=True)

    log.info("mime_types_updated", path=str(artifact_path))
    return artifact_path
