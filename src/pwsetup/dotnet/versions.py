"""Normalization of user-supplied .NET version strings.

Inputs such as ``8.0.x`` or ``8.0.100`` are reduced to the ``major.minor``
form used in target framework monikers (``net8.0``).
"""

from __future__ import annotations

import re

# Anything outside digits, dots and a lowercase ``x`` wildcard is dropped
# before the value can reach a command line.
_UNSAFE_CHARS = re.compile(r"[^0-9.x]")
_WILDCARD_SUFFIX = ".x"


def normalize_version(raw: str) -> str:
    """Reduce *raw* to at most ``major.minor``.

    Never raises; garbage input degrades to an empty or partial result.

    >>> normalize_version("8.0.x")
    '8.0'
    >>> normalize_version("8.0.100")
    '8.0'
    >>> normalize_version("8")
    '8'
    """
    sanitized = _UNSAFE_CHARS.sub("", raw)
    if sanitized.endswith(_WILDCARD_SUFFIX):
        sanitized = sanitized[: -len(_WILDCARD_SUFFIX)]
    parts = sanitized.split(".")
    if len(parts) >= 2:
        return f"{parts[0]}.{parts[1]}"
    return sanitized


def major_minor(version: str) -> str:
    """Return the first two dot-separated components of *version*, unsanitized."""
    parts = version.split(".")
    return ".".join(parts[:2])
