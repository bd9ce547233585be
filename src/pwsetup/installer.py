"""Invocation of the generated ``playwright.ps1 install`` command."""

from __future__ import annotations

import logging
import re

from pwsetup.shell import CommandResult, format_command, run_command

logger = logging.getLogger(__name__)

ALL_BROWSERS = "all"
_UNSAFE_BROWSER_CHARS = re.compile(r"[^a-zA-Z0-9 ]")


def build_install_args(browsers: str, with_deps: bool) -> list[str]:
    """Build the arguments passed to ``playwright.ps1``.

    ``browsers`` is a space-separated list such as ``"chromium firefox"``, or
    ``"all"`` to let Playwright install its default set.
    """
    args = ["install"]
    if browsers != ALL_BROWSERS:
        sanitized = _UNSAFE_BROWSER_CHARS.sub("", browsers)
        args.extend(name for name in sanitized.split(" ") if name)
    if with_deps:
        args.append("--with-deps")
    return args


def install_browsers(script_path: str, args: list[str], timeout: float | None = None) -> CommandResult:
    """Run ``pwsh <script_path> <args>``, streaming output to the job log."""
    command = ["pwsh", script_path, *args]
    logger.info("Installing Playwright browsers...")
    logger.info("Command: %s", format_command(command))
    return run_command(command, timeout=timeout)
