"""Shared fixtures: small registry files in the Apache mime.types format."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mimetable.indexes import build_indexes
from mimetable.parser import parse_registry

if TYPE_CHECKING:
    from pathlib import Path

    from mimetable.models.registry import MimeTypeIndexes

SAMPLE_REGISTRY = (
    "# This file maps Internet media types to unique file extension(s).\n"
    "#\n"
    "# MIME type (lowercased)\t\t\tExtensions\n"
    "# ============================================\t==========\n"
    "application/json\t\t\t\tjson\n"
    "application/octet-stream\tbin dms lrf mar so dist distz pkg bpk dump elc deploy\n"
    "# application/pdf\n"
    "application/vnd.ms-excel\t\t\txls xlm xla xlc xlt xlw\n"
    "image/jpeg\t\t\t\t\tjpeg jpg jpe\n"
    "text/html\t\t\t\t\thtml htm\n"
    "text/plain\t\t\t\t\ttxt text conf def list log in\n"
    "text/x-c\t\t\t\t\tc cc cxx cpp h hh dic\n"
    "video/x-ms-asf\t\t\t\t\tasf asx\n"
    "application/vnd.ms-asf\t\t\t\t\tasf\n"
)

DUPLICATE_TYPE_REGISTRY = "# comment\ntext/html\thtm html\napplication/json\tjson\ntext/html\thtm\n"


@pytest.fixture()
def registry_file(tmp_path: Path) -> Path:
    path = tmp_path / "mime-types.txt"
    path.write_text(SAMPLE_REGISTRY, encoding="utf-8")
    return path


@pytest.fixture()
def duplicate_type_registry_file(tmp_path: Path) -> Path:
    """Registry where text/html is defined twice."""
    path = tmp_path / "example.txt"
    path.write_text(DUPLICATE_TYPE_REGISTRY, encoding="utf-8")
    return path


@pytest.fixture()
def sample_indexes(registry_file: Path) -> MimeTypeIndexes:
    return build_indexes(parse_registry(registry_file))
