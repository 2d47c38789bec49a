from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DATA_KEY_MIME_TYPES = "mime-types"
DATA_KEY_EXTENSIONS = "extensions"

# content type -> extensions, extension -> content types
TypeIndex = dict[str, list[str]]
ExtensionIndex = dict[str, list[str]]


class DuplicatePolicy(StrEnum):
    """How an index treats a key that appears on more than one registry line."""

    LAST_WINS = "last-wins"
    ALL_OCCURRENCES = "all-occurrences"


class Record(BaseModel):
    """Single data line of the mime.types registry."""

    mime_type: str = Field(min_length=1)
    extensions: list[str] = []


class MimeTypeIndexes(BaseModel):
    """Content of the generated artifact: both lookup directions."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    mime_types: TypeIndex = Field(alias=DATA_KEY_MIME_TYPES)
    extensions: ExtensionIndex = Field(alias=DATA_KEY_EXTENSIONS)


class DataLocation(BaseModel):
    """Artifact location split into folder and base filename (no suffix)."""

    folder: Path
    filename: str

    @property
    def path(self) -> Path:
        return self.folder / self.filename
