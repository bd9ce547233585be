"""pwsetup test configuration — shared fixtures for unit tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep host env vars and config files out of settings, and clear the cache."""
    from pwsetup.settings.config import get_settings

    for key in list(os.environ):
        if key.startswith(("PWSETUP_", "INPUT_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PWSETUP_CONFIG_FILE", str(tmp_path / "no-such-pwsetup.toml"))

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------


def make_script(base: Path, relative: str) -> Path:
    """Create an empty ``playwright.ps1`` at *base* / *relative*."""
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("# generated by Microsoft.Playwright\n")
    return path


@pytest.fixture()
def dotnet_project(tmp_path: Path) -> Path:
    """A built project with ``bin/Debug/net8.0/playwright.ps1`` and a global.json."""
    project = tmp_path / "project"
    make_script(project, "bin/Debug/net8.0/playwright.ps1")
    (project / "global.json").write_text('{"sdk": {"version": "8.0.100", "rollForward": "latestFeature"}}')
    return project
