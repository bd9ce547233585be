"""``global.json`` loading — SDK version and roll-forward policy.

``global.json`` is read with the JSON5 grammar because the .NET SDK tolerates
comments and trailing commas in it. Only ``sdk.version`` and
``sdk.rollForward`` are interpreted; everything else is ignored.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import json5
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pwsetup.dotnet.versions import major_minor
from pwsetup.exceptions import GlobalJsonNotFoundError, GlobalJsonParseError

logger = logging.getLogger(__name__)

ROLL_FORWARD_LATEST_FEATURE = "latestFeature"

# JSON5 turns unquoted tokens like ``8.0`` into numbers; these keys are
# always consumed as strings.
_STRING_KEYS = frozenset({"version", "rollForward"})


class SdkSection(BaseModel):
    """The ``sdk`` object of a ``global.json`` document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version: str | None = None
    roll_forward: str | None = Field(default=None, alias="rollForward")


class GlobalJson(BaseModel):
    """Parsed ``global.json`` document."""

    model_config = ConfigDict(extra="ignore")

    sdk: SdkSection | None = None

    def effective_version(self) -> str:
        """Return the SDK version after applying the roll-forward policy.

        ``latestFeature`` accepts any patch within the same feature band, so
        only ``major.minor`` is kept. Any other policy leaves the version
        untouched. Returns ``""`` when no version is pinned.
        """
        if self.sdk is None or not self.sdk.version:
            return ""
        version = self.sdk.version
        if self.sdk.roll_forward == ROLL_FORWARD_LATEST_FEATURE:
            version = major_minor(version)
        return version


def _stringify(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: _stringify(value) if key in _STRING_KEYS else value for key, value in pairs}


def load_global_json(path: str | os.PathLike[str]) -> GlobalJson:
    """Load and validate a ``global.json`` file.

    Args:
        path: Location of the file.

    Returns:
        The parsed document. Non-object documents yield an empty ``GlobalJson``.

    Raises:
        GlobalJsonNotFoundError: If no file exists at *path*.
        GlobalJsonParseError: If the file cannot be read or decoded as UTF-8,
            is not valid JSON5, or ``sdk`` has the wrong shape.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise GlobalJsonNotFoundError(str(path))

    try:
        # utf-8-sig drops a leading BOM that some editors write
        text = file_path.read_text(encoding="utf-8-sig").strip().lstrip("\ufeff")
    except (UnicodeDecodeError, OSError) as exc:
        raise GlobalJsonParseError(str(path), str(exc)) from exc

    try:
        data = json5.loads(text, object_pairs_hook=_coerce_pairs)
    except ValueError as exc:
        raise GlobalJsonParseError(str(path), str(exc)) from exc

    if not isinstance(data, dict):
        logger.debug("%s is not a JSON object; ignoring its content", path)
        return GlobalJson()

    try:
        return GlobalJson.model_validate(data)
    except ValidationError as exc:
        raise GlobalJsonParseError(str(path), str(exc)) from exc


def resolve_global_json_version(path: str | os.PathLike[str]) -> str:
    """Return the effective SDK version pinned by the ``global.json`` at *path*.

    Returns ``""`` when the file pins no version.
    """
    document = load_global_json(path)
    version = document.effective_version()
    logger.debug("Resolved SDK version %r from %s", version, path)
    return version
