"""CLI commands that run the Playwright browser setup."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

console = Console()


def _cli_overrides(
    dotnet_version: Optional[str],
    global_json_file: Optional[Path],
    project_dir: Optional[Path],
    search_depth: Optional[int],
    browsers: Optional[str],
    with_deps: Optional[bool],
    install_powershell: Optional[bool],
) -> dict[str, Any]:
    """Collect the flags that were actually given into ``Settings`` overrides."""
    overrides: dict[str, Any] = {}
    install: dict[str, Any] = {}
    if dotnet_version is not None:
        overrides["dotnet_version"] = dotnet_version
    if global_json_file is not None:
        overrides["global_json_file"] = str(global_json_file)
    if project_dir is not None:
        overrides["project_dir"] = str(project_dir)
    if search_depth is not None:
        overrides["search_depth"] = search_depth
    if browsers is not None:
        install["browsers"] = browsers
    if with_deps is not None:
        install["with_deps"] = with_deps
    if install_powershell is not None:
        install["install_powershell"] = install_powershell
    if install:
        overrides["install"] = install
    return overrides


def install(
    dotnet_version: Optional[str] = typer.Option(
        None, "--dotnet-version", "-v", help="Target .NET version (e.g. 8.0.x); overrides global.json."
    ),
    global_json_file: Optional[Path] = typer.Option(None, "--global-json-file", "-g", help="Path to global.json."),
    project_dir: Optional[Path] = typer.Option(
        None, "--project-dir", "-p", help="Directory to search for the built playwright.ps1."
    ),
    search_depth: Optional[int] = typer.Option(None, "--search-depth", min=0, help="How deep to search below --project-dir."),
    browsers: Optional[str] = typer.Option(
        None, "--browsers", "-b", help="Space-separated browsers to install, or 'all'."
    ),
    with_deps: Optional[bool] = typer.Option(
        None, "--with-deps/--no-with-deps", help="Also install operating system dependencies."
    ),
    install_powershell: Optional[bool] = typer.Option(
        None, "--install-powershell/--no-install-powershell", help="Install pwsh if it is missing."
    ),
) -> None:
    """Install Playwright browsers using the project's generated playwright.ps1.

    Run after ``dotnet build``. Settings not given on the command line come
    from PWSETUP_* env vars and pwsetup.toml.
    """
    from pydantic import ValidationError

    from pwsetup.exceptions import PwSetupError
    from pwsetup.runner.action import configure_logging, run_setup
    from pwsetup.settings import Settings

    try:
        settings = Settings(
            **_cli_overrides(
                dotnet_version, global_json_file, project_dir, search_depth, browsers, with_deps, install_powershell
            )
        )
    except ValidationError as exc:
        console.print(f"[red]✗[/red] Invalid configuration: {escape(str(exc))}")
        raise typer.Exit(code=1)
    configure_logging(settings.log_level, settings.log_format)

    try:
        result = run_setup(settings.to_action_config())
    except PwSetupError as exc:
        console.print(f"[red]✗[/red] Setup failed: {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Playwright browsers installed for .NET {result.dotnet_version}")
    console.print(f"  Script: {escape(result.script_path)}")


def action() -> None:
    """Run as a GitHub Action, reading INPUT_* environment variables."""
    from pwsetup.runner.action import main

    exit_code = main()
    if exit_code != 0:
        raise typer.Exit(code=exit_code)


def locate(
    dotnet_version: str = typer.Argument(..., help="Target .NET version, e.g. 8.0 or 8.0.x."),
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-p", help="Directory to search."),
    search_depth: int = typer.Option(3, "--search-depth", min=0, help="How deep to search below --project-dir."),
) -> None:
    """Print the path of the generated playwright.ps1 for a .NET version."""
    from pwsetup.dotnet.locator import locate_playwright_script
    from pwsetup.dotnet.versions import normalize_version

    version = normalize_version(dotnet_version)
    script_path = locate_playwright_script(project_dir, version, search_depth)
    if script_path is None:
        console.print(f"[red]✗[/red] playwright.ps1 for net{version} not found under {escape(str(project_dir))}")
        raise typer.Exit(code=1)
    typer.echo(script_path)
