"""End-to-end runs of ``python -m mimetable`` in a subprocess."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path


def _run(env: dict[str, str], *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "mimetable", *args],
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        timeout=30,
        env=env,
    )


class TestGenerateAndQuery:
    def test_generate_then_lookup(
        self, tmp_path: Path, registry_file: Path, subprocess_env: dict[str, str]
    ) -> None:
        artifact = tmp_path / "out.py"

        result = _run(subprocess_env, "generate", str(registry_file), "--output", str(artifact))
        assert result.returncode == 0, result.stderr
        assert artifact.exists()
        assert not registry_file.exists()

        result = _run(subprocess_env, "types", "asf", "--artifact", str(artifact))
        assert result.returncode == 0, result.stderr
        assert result.stdout.splitlines() == ["video/x-ms-asf", "application/vnd.ms-asf"]

        result = _run(subprocess_env, "extensions", "text/html", "--artifact", str(artifact))
        assert result.returncode == 0, result.stderr
        assert result.stdout.splitlines() == ["html", "htm"]

    def test_generate_keep_source(
        self, tmp_path: Path, registry_file: Path, subprocess_env: dict[str, str]
    ) -> None:
        result = _run(
            subprocess_env,
            "generate",
            str(registry_file),
            "--output",
            str(tmp_path / "out.py"),
            "--keep-source",
        )
        assert result.returncode == 0, result.stderr
        assert registry_file.exists()

    def test_progress_logged_as_json(
        self, tmp_path: Path, registry_file: Path, subprocess_env: dict[str, str]
    ) -> None:
        result = _run(
            subprocess_env, "generate", str(registry_file), "--output", str(tmp_path / "o.py")
        )
        events = [json.loads(line)["event"] for line in result.stderr.splitlines() if line]
        assert events[0] == "registry_parse_started"
        assert "indexes_build_started" in events
        assert "artifact_written" in events

    def test_unknown_extension_exits_nonzero(
        self, tmp_path: Path, registry_file: Path, subprocess_env: dict[str, str]
    ) -> None:
        artifact = tmp_path / "out.py"
        _run(subprocess_env, "generate", str(registry_file), "--output", str(artifact))

        result = _run(subprocess_env, "types", "doesnotexist", "--artifact", str(artifact))
        assert result.returncode == 1
        assert result.stdout == ""
        assert "unknown extension" in result.stderr


class TestFailures:
    def test_missing_registry(self, tmp_path: Path, subprocess_env: dict[str, str]) -> None:
        artifact = tmp_path / "out.py"
        result = _run(
            subprocess_env, "generate", str(tmp_path / "missing.txt"), "--output", str(artifact)
        )
        assert result.returncode == 1
        assert "not readable" in result.stderr
        assert not artifact.exists()

    def test_missing_artifact(self, tmp_path: Path, subprocess_env: dict[str, str]) -> None:
        result = _run(subprocess_env, "types", "json", "--artifact", str(tmp_path / "none.py"))
        assert result.returncode == 1
        assert "does not exist" in result.stderr

    def test_bad_config_crashes(self, subprocess_env: dict[str, str]) -> None:
        env = {**subprocess_env, "MIMETABLE__REGISTRY__TIMEOUT_SECONDS": "soon"}
        result = _run(env, "location")
        assert result.returncode != 0


class TestLocation:
    def test_plain(self, subprocess_env: dict[str, str]) -> None:
        result = _run(subprocess_env, "location")
        assert result.returncode == 0
        assert Path(result.stdout.strip()).parts[-2:] == ("data", "mime-types")

    def test_structured(self, subprocess_env: dict[str, str]) -> None:
        result = _run(subprocess_env, "location", "--structured")
        assert result.returncode == 0
        lines = result.stdout.splitlines()
        assert lines[0].startswith("folder: ")
        assert lines[1] == "filename: mime-types"
