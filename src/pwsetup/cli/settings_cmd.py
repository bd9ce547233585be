"""``pwsetup settings`` — show where configuration comes from and what it resolves to."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table

settings_app = typer.Typer(help="Inspect the resolved pwsetup configuration.")
console = Console()


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, prefix=f"{name}."))
        else:
            rows.append((name, str(value)))
    return rows


@settings_app.command("show")
def show_settings(
    table: bool = typer.Option(False, "--table", "-t", help="Render as a table instead of JSON."),
) -> None:
    """Print the effective settings (JSON by default)."""
    from pwsetup.settings import get_settings

    data = get_settings().model_dump(mode="json")
    if not table:
        typer.echo(json.dumps(data, indent=2))
        return

    grid = Table(title="pwsetup settings")
    grid.add_column("Key", style="cyan")
    grid.add_column("Value")
    for key, value in _flatten(data):
        grid.add_row(key, value)
    console.print(grid)


@settings_app.command("validate")
def validate_settings() -> None:
    """Check that env vars and pwsetup.toml produce valid settings."""
    from pydantic import ValidationError

    from pwsetup.settings import get_settings
    from pwsetup.settings.config import config_file_path

    config_file = config_file_path()
    source = str(config_file) if config_file.is_file() else f"{config_file} (not present, defaults used)"
    try:
        settings = get_settings()
    except ValidationError as exc:
        console.print(f"[red]✗[/red] Invalid configuration from {source}:\n{exc}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Configuration OK ({source})")
    if settings.dotnet_version:
        console.print(f"  .NET version: {settings.dotnet_version}")
    else:
        console.print(f"  .NET version: from {settings.global_json_file}")
    console.print(f"  Search: {settings.project_dir} (depth {settings.search_depth})")
