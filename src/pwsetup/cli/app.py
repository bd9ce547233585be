"""Unified CLI entry point for pwsetup.

Settings resolve from pwsetup.toml, then PWSETUP_* env vars (``__`` for
nested keys), then the flags of the command being run.
"""

from __future__ import annotations

import os

import typer

from pwsetup import __version__
from pwsetup.cli.settings_cmd import settings_app
from pwsetup.cli.setup_cmd import action, install, locate
from pwsetup.cli.version_cmd import version_app

app = typer.Typer(
    add_completion=True,
    help="Install Playwright browsers for .NET projects using the playwright.ps1 generated by dotnet build.",
)

app.command("install")(install)
app.command("action")(action)
app.command("locate")(locate)
app.add_typer(version_app, name="version")
app.add_typer(settings_app, name="settings")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level (sets PWSETUP_LOG_LEVEL)."),
) -> None:
    """pwsetup — Playwright browser setup for .NET in CI."""
    if show_version:
        typer.echo(f"pwsetup {__version__}")
        raise typer.Exit()
    if verbose:
        # Commands build their own Settings, so the override travels via env.
        os.environ["PWSETUP_LOG_LEVEL"] = "DEBUG"
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
