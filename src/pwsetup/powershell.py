"""PowerShell detection and installation.

``playwright.ps1`` needs ``pwsh``. GitHub-hosted Windows and most Ubuntu
runners ship it, but self-hosted and container runners often do not, so it
can be installed on demand from Microsoft's package feed (Linux) or Homebrew
(macOS).
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

from pwsetup.exceptions import CommandError, PowerShellUnavailableError, UnsupportedPlatformError
from pwsetup.shell import run_command

logger = logging.getLogger(__name__)

DEFAULT_UBUNTU_VERSION = "20.04"
OS_RELEASE_PATH = Path("/etc/os-release")
MICROSOFT_PACKAGES_DEB = "packages-microsoft-prod.deb"

_VERSION_ID_RE = re.compile(r'VERSION_ID="([^"]+)"')
_UNSAFE_VERSION_ID_CHARS = re.compile(r"[^0-9.]")


def check_powershell() -> bool:
    """Return True if ``pwsh --version`` runs successfully."""
    try:
        run_command(["pwsh", "--version"], capture=True)
    except CommandError:
        return False
    return True


def sanitize_version_id(version_id: str) -> str:
    """Keep only digits and dots; the value is interpolated into a download URL."""
    return _UNSAFE_VERSION_ID_CHARS.sub("", version_id)


def _version_from_os_release(path: Path) -> str:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return ""
    match = _VERSION_ID_RE.search(content)
    return match.group(1) if match else ""


def detect_ubuntu_version(os_release: Path = OS_RELEASE_PATH) -> str:
    """Detect the Ubuntu release, e.g. ``"22.04"``.

    Tries ``lsb_release -rs``, then ``VERSION_ID`` in ``/etc/os-release``,
    then falls back to ``DEFAULT_UBUNTU_VERSION``.
    """
    try:
        version_id = run_command(["lsb_release", "-rs"], capture=True).stdout.strip()
    except CommandError:
        logger.debug("lsb_release unavailable; reading %s", os_release)
        version_id = _version_from_os_release(os_release)
    return version_id or DEFAULT_UBUNTU_VERSION


def _install_on_linux() -> None:
    logger.info("Installing PowerShell on Linux...")
    run_command(["sudo", "apt-get", "update"])
    run_command([
        "sudo", "apt-get", "install", "-y",
        "wget", "apt-transport-https", "software-properties-common",
    ])

    version_id = detect_ubuntu_version()
    logger.info("Detected Ubuntu version: %s", version_id)

    deb_url = (
        f"https://packages.microsoft.com/config/ubuntu/{sanitize_version_id(version_id)}/"
        f"{MICROSOFT_PACKAGES_DEB}"
    )
    run_command(["wget", "-q", deb_url])
    run_command(["sudo", "dpkg", "-i", MICROSOFT_PACKAGES_DEB])
    run_command(["rm", MICROSOFT_PACKAGES_DEB])

    run_command(["sudo", "apt-get", "update"])
    run_command(["sudo", "apt-get", "install", "-y", "powershell"])
    logger.info("PowerShell installed successfully!")


def install_powershell(platform: str | None = None) -> None:
    """Install PowerShell for *platform* (defaults to ``sys.platform``).

    Raises:
        UnsupportedPlatformError: For platforms other than linux, win32 and darwin.
        CommandError: If any installation step fails.
    """
    platform = platform or sys.platform
    if platform.startswith("linux"):
        _install_on_linux()
    elif platform == "win32":
        logger.info("PowerShell should be available on Windows runners")
    elif platform == "darwin":
        logger.info("Installing PowerShell on macOS...")
        run_command(["brew", "install", "--cask", "powershell"])
    else:
        raise UnsupportedPlatformError(platform)


def ensure_powershell(install_if_missing: bool, platform: str | None = None) -> None:
    """Make sure ``pwsh`` is usable, installing it when allowed.

    Raises:
        PowerShellUnavailableError: If ``pwsh`` is missing and installation is
            disabled, or installation did not make it available.
    """
    if check_powershell():
        logger.info("PowerShell is already available")
        return

    if not install_if_missing:
        raise PowerShellUnavailableError(
            "PowerShell is required but not found. Set install-powershell to true to auto-install."
        )

    logger.info("PowerShell not found. Installing PowerShell...")
    install_powershell(platform)
    if not check_powershell():
        raise PowerShellUnavailableError("Failed to install PowerShell")
