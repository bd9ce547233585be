"""Locate the ``playwright.ps1`` script generated by ``dotnet build``.

Microsoft.Playwright drops the installer script into the project's build
output, e.g. ``bin/Debug/net8.0/playwright.ps1``. Starting from a root
directory, the locator checks the conventional output paths and then walks
down into subdirectories (bounded by depth) so that repositories with the
test project in a subfolder also work.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

logger = logging.getLogger(__name__)

SCRIPT_NAME = "playwright.ps1"
FRAMEWORK_PREFIX = "net"
BUILD_CONFIGURATIONS = ("Debug", "Release")
DEFAULT_MAX_DEPTH = 3

SKIPPED_DIRECTORIES = frozenset({
    "node_modules",
    ".git",
    ".vs",
    ".vscode",
    "obj",
    "packages",
    ".nuget",
    "dist",
    "build",
})


def should_skip_directory(name: str) -> bool:
    """Return True for hidden, dependency and intermediate-output directories."""
    return name.startswith(".") or name in SKIPPED_DIRECTORIES


def candidate_paths(version: str) -> list[str]:
    """Return the relative script paths to probe for *version*, in priority order.

    Both ``net8.0`` and ``net8.0.0`` style framework folders are tried, Debug
    before Release.
    """
    return [
        f"bin/{configuration}/{FRAMEWORK_PREFIX}{framework}/{SCRIPT_NAME}"
        for framework in (version, f"{version}.0")
        for configuration in BUILD_CONFIGURATIONS
    ]


def default_script_path(version: str) -> str:
    """Return the conventional Debug output path for *version*."""
    return candidate_paths(version)[0]


def _find_in_directory(directory: str, candidates: list[str]) -> str | None:
    for candidate in candidates:
        path = os.path.join(directory, candidate)
        if os.path.isfile(path):
            return path
    return None


def _list_subdirectories(directory: str, skip: Callable[[str], bool]) -> list[str]:
    """Return non-skipped child directories of *directory*, sorted by name.

    Listing errors (permissions, races with deletion) make the subtree look
    empty.
    """
    try:
        with os.scandir(directory) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if entry.is_dir(follow_symlinks=False) and not skip(entry.name)
            )
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return []
    return [os.path.join(directory, name) for name in names]


def locate_playwright_script(
    root_dir: str | os.PathLike[str],
    version: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    skip: Callable[[str], bool] = should_skip_directory,
) -> str | None:
    """Search *root_dir* for the Playwright script built for *version*.

    The root is depth 0. Candidates are checked at each directory before its
    children; a candidate only counts when it is a regular file (or a symlink
    to one), so a directory that happens to carry the script name is ignored.
    Children are only visited while their depth stays below
    *max_depth*. Directories are visited depth-first in sorted name order.

    Args:
        root_dir: Directory to start from.
        version: ``major.minor`` .NET version, e.g. ``"8.0"``.
        max_depth: Depth bound for descent.
        skip: Predicate on a directory name; matching directories are not entered.

    Returns:
        Path of the first script found, or ``None`` if there is none within range.
    """
    candidates = candidate_paths(version)
    stack: list[tuple[str, int]] = [(os.fspath(root_dir), 0)]
    while stack:
        directory, depth = stack.pop()
        found = _find_in_directory(directory, candidates)
        if found is not None:
            logger.debug("Found Playwright script at %s", found)
            return found
        if depth + 1 >= max_depth:
            continue
        children = _list_subdirectories(directory, skip)
        stack.extend((child, depth + 1) for child in reversed(children))

    logger.debug("No Playwright script for net%s under %s (max_depth=%d)", version, root_dir, max_depth)
    return None
