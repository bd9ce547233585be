"""pwsetup GitHub Action runner.

Runs the full setup: make sure PowerShell is present, work out the .NET
version, find the generated ``playwright.ps1`` and install the browsers.

Action inputs (read from ``INPUT_*`` environment variables):
    global-json-file:    Path to global.json (default: global.json).
    dotnet-version:      Explicit .NET version; takes precedence over global.json.
    browsers:            Space-separated browser names, or ``all`` (default).
    with-deps:           ``true`` to also install OS dependencies.
    install-powershell:  ``true`` to install pwsh when it is missing.
"""

from __future__ import annotations

import json as _json
import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

from pydantic import ValidationError

from pwsetup.dotnet.global_json import resolve_global_json_version
from pwsetup.dotnet.locator import default_script_path, locate_playwright_script
from pwsetup.dotnet.versions import normalize_version
from pwsetup.exceptions import PwSetupError, ScriptNotFoundError, VersionNotDeterminedError
from pwsetup.installer import build_install_args, install_browsers
from pwsetup.powershell import ensure_powershell
from pwsetup.settings.config import ActionConfig, Settings, inputs_from_environment

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """What a successful setup run resolved and executed."""

    dotnet_version: str
    script_path: str
    install_args: list[str] = field(default_factory=list)


def resolve_dotnet_version(config: ActionConfig) -> str:
    """Return the .NET version to target; an explicit version wins over global.json.

    Raises:
        GlobalJsonNotFoundError: If global.json is needed but missing.
        GlobalJsonParseError: If global.json is malformed.
        VersionNotDeterminedError: If global.json pins no version.
    """
    if config.dotnet_version:
        version = normalize_version(config.dotnet_version)
        logger.info("Using .NET version from input: %s", version)
        return version

    logger.info("Reading .NET version from: %s", config.global_json_file)
    version = resolve_global_json_version(config.global_json_file)
    if not version:
        raise VersionNotDeterminedError(
            "Unable to determine .NET version from global.json and no dotnet-version provided"
        )
    logger.info("Detected .NET version from global.json: %s", version)
    return version


def find_script(config: ActionConfig, dotnet_version: str) -> str:
    """Locate ``playwright.ps1`` under ``config.project_dir``.

    Raises:
        ScriptNotFoundError: If nothing is found within ``config.search_depth``.
    """
    script_path = locate_playwright_script(config.project_dir, dotnet_version, config.search_depth)
    if script_path is None:
        raise ScriptNotFoundError(default_script_path(dotnet_version))
    logger.info("Using Playwright script path: %s", script_path)
    return script_path


def run_setup(config: ActionConfig) -> InstallResult:
    """Run the whole setup for *config*.

    Raises:
        PwSetupError: Any failure along the way, including failed commands.
    """
    ensure_powershell(config.install_powershell)

    dotnet_version = resolve_dotnet_version(config)
    script_path = find_script(config, dotnet_version)

    install_args = build_install_args(config.browsers, config.with_deps)
    install_browsers(script_path, install_args, timeout=config.timeout_sec)
    logger.info("Playwright browsers installed successfully!")

    return InstallResult(dotnet_version=dotnet_version, script_path=script_path, install_args=install_args)


def main(environ: Mapping[str, str] | None = None) -> int:
    """GitHub Action entry point.

    Returns:
        Exit code: 0 for success, 1 for failure.
    """
    try:
        settings = Settings(**inputs_from_environment(environ))
    except ValidationError as exc:
        set_failed(f"Invalid configuration: {exc}")
        return 1
    configure_logging(settings.log_level, settings.log_format)

    try:
        run_setup(settings.to_action_config())
    except PwSetupError as exc:
        logger.debug("Setup failed", exc_info=True)
        set_failed(str(exc))
        return 1
    except Exception as exc:
        logger.debug("Setup failed unexpectedly", exc_info=True)
        set_failed(str(exc) or "Unknown error occurred")
        return 1
    return 0


def set_failed(message: str) -> None:
    """Report *message* as a workflow error annotation."""
    # Workflow commands are single-line; newlines must be escaped.
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error::{escaped}", flush=True)


def configure_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Configure the root logger for CI output on stderr.

    ``json`` emits one JSON object per line for log collectors; ``text`` is
    the human-readable default.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":

        class _JsonFormatter(logging.Formatter):
            """Emit JSON log lines."""

            def format(self, record: logging.LogRecord) -> str:
                entry = {
                    "severity": record.levelname,
                    "message": record.getMessage(),
                    "logger": record.name,
                    "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
                }
                if record.exc_info and record.exc_info[1]:
                    entry["exception"] = self.formatException(record.exc_info)
                return _json.dumps(entry, default=str)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonFormatter())
        logging.root.handlers.clear()
        logging.root.addHandler(handler)
        logging.root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            stream=sys.stderr,
        )


if __name__ == "__main__":
    sys.exit(main())
