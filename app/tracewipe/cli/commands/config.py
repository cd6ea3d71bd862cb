"""Settings commands.

Show the effective settings or write a default settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from tracewipe.core.paths import get_settings_path
from tracewipe.core.settings import (
    Settings,
    SettingsError,
    load_settings,
    save_settings,
    settings_to_dict,
)
from tracewipe.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize tracewipe settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    path = get_settings_path()
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Value")

    for key, value in settings_to_dict(settings).items():
        if isinstance(value, list):
            display = ", ".join(str(v) for v in value) or "-"
        else:
            display = str(value)
        table.add_row(key, display)

    console.print(table)
    source = path if path.exists() else f"{path} (not found, using defaults)"
    console.print(f"\n[dim]Source: {source}[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings already exist: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
