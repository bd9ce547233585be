"""CLI commands for working out the target .NET version."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

version_app = typer.Typer(help="Resolve and normalize .NET versions.")
console = Console()


@version_app.command("normalize")
def version_normalize(raw: str = typer.Argument(..., help="Version string such as 8.0.x or 8.0.100.")) -> None:
    """Print RAW reduced to major.minor."""
    from pwsetup.dotnet.versions import normalize_version

    typer.echo(normalize_version(raw))


@version_app.command("resolve")
def version_resolve(
    dotnet_version: Optional[str] = typer.Option(
        None, "--dotnet-version", "-v", help="Explicit version; takes precedence over global.json."
    ),
    global_json_file: Path = typer.Option(Path("global.json"), "--global-json-file", "-g", help="Path to global.json."),
) -> None:
    """Print the .NET version a setup run would target."""
    from pwsetup.exceptions import PwSetupError
    from pwsetup.runner.action import resolve_dotnet_version
    from pwsetup.settings import ActionConfig

    config = ActionConfig(dotnet_version=dotnet_version or "", global_json_file=str(global_json_file))
    try:
        version = resolve_dotnet_version(config)
    except PwSetupError as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    typer.echo(version)
