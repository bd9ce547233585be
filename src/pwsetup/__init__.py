"""pwsetup — install Playwright browsers for .NET projects in CI."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("pwsetup")
except Exception:
    __version__ = "0.0.0"
