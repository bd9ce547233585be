"""Configuration loader for pwsetup using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. GitHub Actions inputs (INPUT_* env vars, see ``inputs_from_environment``)
  3. Environment variables (PWSETUP_* with __ for nesting)
  4. pwsetup.toml in the working directory (or PWSETUP_CONFIG_FILE)
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

CONFIG_FILE_ENV_VAR = "PWSETUP_CONFIG_FILE"
DEFAULT_CONFIG_FILE = "pwsetup.toml"


def config_file_path() -> Path:
    """Return the TOML config location (``$PWSETUP_CONFIG_FILE`` or ``pwsetup.toml``)."""
    return Path(os.getenv(CONFIG_FILE_ENV_VAR) or DEFAULT_CONFIG_FILE)


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class InstallSettings(BaseSettings):
    """Browser installation options."""

    model_config = SettingsConfigDict(env_prefix="PWSETUP_INSTALL__")

    browsers: str = "all"
    with_deps: bool = False
    install_powershell: bool = False
    timeout_sec: int = 1800


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root pwsetup settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="PWSETUP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    global_json_file: str = "global.json"
    dotnet_version: str = ""
    project_dir: str = "."
    search_depth: int = Field(default=3, ge=0)
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    install: InstallSettings = Field(default_factory=InstallSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_file(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer the TOML config file beneath env vars and explicit values."""
        file_values = _load_toml(config_file_path())

        merged: dict[str, Any] = {}
        for layer in (file_values, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    def to_action_config(self) -> ActionConfig:
        """Freeze the resolved settings into the value passed to the runner."""
        return ActionConfig(
            global_json_file=self.global_json_file,
            dotnet_version=self.dotnet_version,
            project_dir=self.project_dir,
            search_depth=self.search_depth,
            browsers=self.install.browsers,
            with_deps=self.install.with_deps,
            install_powershell=self.install.install_powershell,
            timeout_sec=self.install.timeout_sec,
        )


class ActionConfig(BaseModel):
    """Immutable inputs for a single setup run."""

    model_config = ConfigDict(frozen=True)

    global_json_file: str = "global.json"
    dotnet_version: str = ""
    project_dir: str = "."
    search_depth: int = 3
    browsers: str = "all"
    with_deps: bool = False
    install_powershell: bool = False
    timeout_sec: int = 1800


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()


# ---------------------------------------------------------------------------
# GitHub Actions inputs
# ---------------------------------------------------------------------------


def read_action_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input the way the Actions toolkit does.

    ``with-deps`` is read from ``INPUT_WITH-DEPS``; the value is stripped and
    missing inputs read as ``""``.
    """
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def inputs_from_environment(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Map the action's declared inputs onto ``Settings`` overrides.

    Inputs left empty are omitted so lower-precedence layers still apply.
    Boolean inputs are only true for the exact string ``"true"``.
    """
    overrides: dict[str, Any] = {}
    install: dict[str, Any] = {}

    if global_json_file := read_action_input("global-json-file", environ):
        overrides["global_json_file"] = global_json_file
    if dotnet_version := read_action_input("dotnet-version", environ):
        overrides["dotnet_version"] = dotnet_version
    if browsers := read_action_input("browsers", environ):
        install["browsers"] = browsers
    if with_deps := read_action_input("with-deps", environ):
        install["with_deps"] = with_deps == "true"
    if install_powershell := read_action_input("install-powershell", environ):
        install["install_powershell"] = install_powershell == "true"

    if install:
        overrides["install"] = install
    return overrides
