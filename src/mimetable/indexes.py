"""Builds the two lookup indexes from parsed registry records.

By default the type index keeps the *last* definition of a content type while
the extension index keeps *every* content type that lists an extension, in
source order and with repeats. Both behaviours can be selected per index with
:class:`~mimetable.models.registry.DuplicatePolicy`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mimetable.models.registry import DuplicatePolicy, MimeTypeIndexes

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from mimetable.models.registry import ExtensionIndex, Record, TypeIndex


def sort_index(index: Mapping[str, list[str]]) -> dict[str, list[str]]:
    """Return a copy of *index* ordered by key, values untouched."""
    return {key: index[key] for key in sorted(index)}


def build_type_index(
    records: Iterable[Record],
    policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS,
) -> TypeIndex:
    index: TypeIndex = {}
    for record in records:
        if policy is DuplicatePolicy.LAST_WINS or record.mime_type not in index:
            index[record.mime_type] = list(record.extensions)
        else:
            index[record.mime_type].extend(record.extensions)
    return index


def build_extension_index(
    records: Iterable[Record],
    policy: DuplicatePolicy = DuplicatePolicy.ALL_OCCURRENCES,
) -> ExtensionIndex:
    index: ExtensionIndex = {}
    for record in records:
        for extension in record.extensions:
            if policy is DuplicatePolicy.LAST_WINS or extension not in index:
                index[extension] = [record.mime_type]
            else:
                index[extension].append(record.mime_type)
    return index


def build_indexes(
    records: Sequence[Record],
    *,
    type_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS,
    extension_policy: DuplicatePolicy = DuplicatePolicy.ALL_OCCURRENCES,
) -> MimeTypeIndexes:
    """Build both indexes in one call, each sorted by key."""
    return MimeTypeIndexes(
        mime_types=sort_index(build_type_index(records, type_policy)),
        extensions=sort_index(build_extension_index(records, extension_policy)),
    )
