"""Resolution of the target .NET version and the generated Playwright script."""

from pwsetup.dotnet.global_json import GlobalJson, SdkSection, load_global_json, resolve_global_json_version
from pwsetup.dotnet.locator import (
    SCRIPT_NAME,
    candidate_paths,
    locate_playwright_script,
    should_skip_directory,
)
from pwsetup.dotnet.versions import normalize_version

__all__ = [
    "GlobalJson",
    "SCRIPT_NAME",
    "SdkSection",
    "candidate_paths",
    "load_global_json",
    "locate_playwright_script",
    "normalize_version",
    "resolve_global_json_version",
    "should_skip_directory",
]
