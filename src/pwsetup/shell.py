"""Thin wrapper around ``subprocess`` for the external tools pwsetup drives.

Commands are always passed as argument vectors, never through a shell.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from pwsetup.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a completed command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""


def format_command(args: Sequence[str]) -> str:
    """Render *args* as a copy-pasteable command line for logs."""
    return shlex.join(args)


def run_command(
    args: Sequence[str],
    *,
    check: bool = True,
    capture: bool = False,
    timeout: float | None = None,
) -> CommandResult:
    """Run *args* and wait for it to finish.

    Args:
        args: Program and arguments.
        check: Raise ``CommandError`` on a non-zero exit status.
        capture: Capture stdout/stderr as text instead of streaming them to
            the job log.
        timeout: Seconds before the process is killed.

    Raises:
        CommandError: If the program is missing, times out, or (with
            ``check``) exits non-zero.
    """
    argv = list(args)
    logger.debug("Running: %s", format_command(argv))
    try:
        completed = subprocess.run(
            argv,
            capture_output=capture,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CommandError(argv, None, f"{argv[0]} not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandError(argv, None, f"timed out after {timeout}s") from exc
    except OSError as exc:
        raise CommandError(argv, None, str(exc)) from exc

    result = CommandResult(
        args=argv,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    if check and result.returncode != 0:
        raise CommandError(argv, result.returncode, result.stderr.strip())
    return result
