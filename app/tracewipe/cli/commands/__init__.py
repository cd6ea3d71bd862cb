"""CLI commands for tracewipe.

This package contains all subcommand implementations.
"""

from tracewipe.cli.commands import config, targets, wipe

__all__ = ["config", "targets", "wipe"]
