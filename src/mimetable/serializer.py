"""Renders the indexes as a generated Python data module and reads it back.

The artifact is a single ``DATA = {...}`` assignment of nothing but string
literals, lists and dicts. It is loaded by walking its syntax tree, never by
importing or executing it::

    # DO NOT EDIT! ...
    DATA = {
        'mime-types': {
            'application/json': ['json'],
        },
        'extensions': {
            'json': ['application/json'],
        },
    }
"""

from __future__ import annotations

import ast
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import structlog
from pydantic import ValidationError

from mimetable.errors import ErrorCode, MimeTableError
from mimetable.escaping import quote, unquote
from mimetable.models.registry import DATA_KEY_EXTENSIONS, DATA_KEY_MIME_TYPES, MimeTypeIndexes

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from os import PathLike

log = structlog.get_logger()

T = TypeVar("T")

HEADER = (
    "# DO NOT EDIT! This file has been automatically generated. "
    'Run "python -m mimetable update" to fetch a new version.'
)
DATA_NAME = "DATA"
_INDENT = "    "


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_list(values: Sequence[str]) -> str:
    return "[" + ", ".join(quote(value) for value in values) + "]"


def _render_index(name: str, index: Mapping[str, Sequence[str]]) -> list[str]:
    lines = [f"{_INDENT}{quote(name)}: {{"]
    for key in sorted(index):
        lines.append(f"{_INDENT * 2}{quote(key)}: {_render_list(index[key])},")
    lines.append(f"{_INDENT}}},")
    return lines


def render_artifact(indexes: MimeTypeIndexes) -> str:
    """Return the artifact source. Equal indexes always render identically."""
    lines = [
        HEADER,
        f"{DATA_NAME} = {{",
        *_render_index(DATA_KEY_MIME_TYPES, indexes.mime_types),
        *_render_index(DATA_KEY_EXTENSIONS, indexes.extensions),
        "}",
    ]
    return "\n".join(lines) + "\n"


def write_artifact(indexes: MimeTypeIndexes, path: str | PathLike[str]) -> Path:
    """Atomically replace the artifact at *path*.

    The content goes to a temporary file in the same directory first, so a
    reader sees either the previous artifact or the new one, never a partial
    write.
    """
    path = Path(path)
    content = render_artifact(indexes)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise MimeTableError(
            ErrorCode.ARTIFACT_WRITE_FAILED,
            f"Cannot write MIME types artifact to {path}: {exc}",
        ) from exc

    log.info(
        "artifact_written",
        path=str(path),
        mime_types=len(indexes.mime_types),
        extensions=len(indexes.extensions),
    )
    return path


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class _Decoder:
    """Turns the ``DATA`` literal's syntax tree back into Python values.

    String nodes are decoded from their exact source text with ``unquote``,
    so anything ``quote`` would not have produced is rejected.
    """

    def __init__(self, source: str) -> None:
        # ast column offsets are UTF-8 byte offsets
        self._lines = source.encode("utf-8").splitlines()

    def string(self, node: ast.expr) -> str:
        if not isinstance(node, ast.Constant) or not isinstance(node.value, str):
            raise ValueError(f"line {node.lineno}: expected a string literal")
        if node.end_lineno != node.lineno or node.end_col_offset is None:
            raise ValueError(f"line {node.lineno}: string literal spans several lines")
        text = self._lines[node.lineno - 1][node.col_offset : node.end_col_offset]
        return unquote(text.decode("utf-8"))

    def strings(self, node: ast.expr) -> list[str]:
        if not isinstance(node, ast.List):
            raise ValueError(f"line {node.lineno}: expected a list of strings")
        return [self.string(element) for element in node.elts]

    def mapping(self, node: ast.expr, value: Callable[[ast.expr], T]) -> dict[str, T]:
        if not isinstance(node, ast.Dict):
            raise ValueError(f"line {node.lineno}: expected a dict")
        result: dict[str, T] = {}
        for key_node, value_node in zip(node.keys, node.values, strict=True):
            if key_node is None:
                raise ValueError(f"line {value_node.lineno}: dict unpacking is not allowed")
            key = self.string(key_node)
            if key in result:
                raise ValueError(f"line {key_node.lineno}: duplicate key {key!r}")
            result[key] = value(value_node)
        return result


def _decode_module(source: str, filename: str) -> dict[str, dict[str, list[str]]]:
    tree = ast.parse(source, filename=filename)
    statement = tree.body[0] if len(tree.body) == 1 else None
    if not isinstance(statement, ast.Assign) or len(statement.targets) != 1:
        raise ValueError(f"expected a single {DATA_NAME} assignment")
    target = statement.targets[0]
    if not isinstance(target, ast.Name) or target.id != DATA_NAME:
        raise ValueError(f"expected a single {DATA_NAME} assignment")

    decoder = _Decoder(source)
    return decoder.mapping(
        statement.value,
        lambda section: decoder.mapping(section, decoder.strings),
    )


def load_artifact(path: str | PathLike[str]) -> MimeTypeIndexes:
    """Read an artifact written by :func:`write_artifact`."""
    try:
        source = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise MimeTableError(
            ErrorCode.ARTIFACT_MISSING,
            f"MIME types artifact does not exist or is not readable: {path} "
            '(run "python -m mimetable update")',
        ) from exc
    except UnicodeDecodeError as exc:
        raise MimeTableError(
            ErrorCode.ARTIFACT_INVALID, f"MIME types artifact is not UTF-8: {path}"
        ) from exc

    try:
        data = _decode_module(source, str(path))
        indexes = MimeTypeIndexes.model_validate(data)
    except (SyntaxError, ValueError, ValidationError) as exc:
        raise MimeTableError(
            ErrorCode.ARTIFACT_INVALID, f"MIME types artifact is malformed: {path} ({exc})"
        ) from exc

    log.debug(
        "artifact_loaded",
        path=str(path),
        mime_types=len(indexes.mime_types),
        extensions=len(indexes.extensions),
    )
    return indexes
