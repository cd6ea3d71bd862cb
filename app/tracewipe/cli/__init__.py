"""CLI package for tracewipe.

This package contains the Typer application and all subcommands.
"""

from tracewipe.cli.main import app

__all__ = ["app"]
