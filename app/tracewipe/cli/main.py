"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from tracewipe import __version__
from tracewipe.cli.commands import config, targets, wipe

app = typer.Typer(
    name="tracewipe",
    help="Locate and destroy shell history and log artifacts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tracewipe version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """tracewipe - erase shell history, application history and system logs.

    Overwriting is best-effort and does not defeat forensic recovery on
    journaling, copy-on-write or SSD storage.
    """


app.add_typer(wipe.app, name="wipe")
app.add_typer(targets.app, name="targets")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
