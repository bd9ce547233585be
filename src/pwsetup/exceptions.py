"""pwsetup-specific exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence


class PwSetupError(Exception):
    """Base exception for all pwsetup errors."""


class GlobalJsonNotFoundError(PwSetupError, FileNotFoundError):
    """Raised when the configured ``global.json`` does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Global.json file not found at: {path}")


class GlobalJsonParseError(PwSetupError, ValueError):
    """Raised when ``global.json`` content is not valid JSON5."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")


class VersionNotDeterminedError(PwSetupError):
    """Raised when neither an explicit version nor ``global.json`` yields a .NET version."""


class PowerShellUnavailableError(PwSetupError):
    """Raised when ``pwsh`` is missing and could not (or may not) be installed."""


class UnsupportedPlatformError(PwSetupError):
    """Raised when PowerShell installation is requested on an unknown platform."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class ScriptNotFoundError(PwSetupError):
    """Raised when no generated ``playwright.ps1`` can be located.

    Attributes:
        expected_path: The conventional Debug output path for the version.
    """

    def __init__(self, expected_path: str) -> None:
        self.expected_path = expected_path
        super().__init__(
            f"Playwright script not found at: {expected_path}\n"
            "Make sure you have built your project first with 'dotnet build'"
        )


class CommandError(PwSetupError):
    """Raised when an external command cannot be started or exits non-zero.

    Attributes:
        command: The argument vector that was executed.
        returncode: Process exit status, or ``None`` if it never ran to completion.
    """

    def __init__(self, command: Sequence[str], returncode: int | None, detail: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        rendered = " ".join(self.command)
        if returncode is None:
            message = f"Command failed to run: {rendered}"
        else:
            message = f"Command exited with code {returncode}: {rendered}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
