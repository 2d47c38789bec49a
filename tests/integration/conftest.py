"""Integration test fixtures: environment for ``python -m mimetable`` runs."""

from __future__ import annotations

import os

import pytest


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    env = os.environ.copy()
    for key in list(env):
        if key.startswith("MIMETABLE__"):
            del env[key]
    env["MIMETABLE__LOGGING__FORMAT"] = "json"
    return env
