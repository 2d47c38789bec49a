"""Runtime lookups against the generated MIME types artifact.

The artifact is loaded on the first query and kept for the lifetime of the
process. There is no invalidation: a regenerated artifact is picked up by
starting a new process.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, overload

from mimetable.models.registry import DataLocation
from mimetable.serializer import load_artifact

if TYPE_CHECKING:
    from collections.abc import Callable
    from os import PathLike

    from mimetable.models.registry import MimeTypeIndexes

DATA_FOLDER = "data"
DATA_FILENAME = "mime-types"
SOURCE_SUFFIX = ".txt"
ARTIFACT_SUFFIX = ".py"

_PACKAGE_ROOT = Path(__file__).resolve().parent


@overload
def get_location(structured: Literal[False] = ...) -> Path: ...


@overload
def get_location(structured: Literal[True]) -> DataLocation: ...


def get_location(structured: bool = False) -> Path | DataLocation:
    """Location of the data files, without suffix.

    Append ``SOURCE_SUFFIX`` for the raw registry or ``ARTIFACT_SUFFIX`` for
    the generated artifact.
    """
    location = DataLocation(folder=_PACKAGE_ROOT / DATA_FOLDER, filename=DATA_FILENAME)
    if not structured:
        return location.path
    return location


def default_artifact_path() -> Path:
    return get_location().with_suffix(ARTIFACT_SUFFIX)


class ArtifactCache:
    """Loads the artifact at most once and hands out the same copy afterwards.

    Concurrent first calls serialize on a lock; only one of them loads. A
    failed load leaves the cache empty and the error propagates.
    """

    def __init__(
        self,
        path: str | PathLike[str] | None = None,
        loader: Callable[[Path], MimeTypeIndexes] = load_artifact,
    ) -> None:
        self.path = Path(path) if path is not None else default_artifact_path()
        self._loader = loader
        self._lock = threading.Lock()
        self._indexes: MimeTypeIndexes | None = None

    @property
    def loaded(self) -> bool:
        return self._indexes is not None

    def get(self) -> MimeTypeIndexes:
        indexes = self._indexes
        if indexes is None:
            with self._lock:
                if self._indexes is None:
                    self._indexes = self._loader(self.path)
                indexes = self._indexes
        return indexes


class MimeTypeLookup:
    """Point queries in both directions over one :class:`ArtifactCache`."""

    def __init__(self, cache: ArtifactCache | None = None) -> None:
        self.cache = cache if cache is not None else ArtifactCache()

    def types_for_extension(self, extension: str, fallback: Any = False) -> list[str] | Any:
        """MIME types registered for *extension*, or *fallback* if it is unknown."""
        mime_types = self.cache.get().extensions.get(extension)
        if mime_types is None:
            return fallback
        return list(mime_types)

    def extensions_for_type(self, mime_type: str, fallback: Any = False) -> list[str] | Any:
        """Extensions registered for *mime_type*, or *fallback* if it is unknown."""
        extensions = self.cache.get().mime_types.get(mime_type)
        if extensions is None:
            return fallback
        return list(extensions)


_default = MimeTypeLookup()


def types_for_extension(extension: str, fallback: Any = False) -> list[str] | Any:
    return _default.types_for_extension(extension, fallback)


def extensions_for_type(mime_type: str, fallback: Any = False) -> list[str] | Any:
    return _default.extensions_for_type(mime_type, fallback)
