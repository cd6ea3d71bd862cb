"""Wipe command implementation.

Enumerates history and log artifacts, erases them, then rotates the
journal, cleans temporary directories and drops filesystem caches.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from tracewipe.cli.display import print_run
from tracewipe.core.settings import Settings, SettingsError, load_settings
from tracewipe.erasure.engine import ErasureEngine
from tracewipe.erasure.models import WipeConfig
from tracewipe.runner.orchestrator import RunOrchestrator
from tracewipe.runner.system import default_actions
from tracewipe.targets.enumerator import TargetEnumerator
from tracewipe.utils.formatting import print_error, print_info, print_warning, setup_logging

app = typer.Typer(
    help="Erase shell history, application history and system logs.",
    invoke_without_command=True,
)

# Exit status after SIGINT, as a shell reports it
INTERRUPTED_EXIT_CODE = 130


def is_privileged() -> bool:
    """Check whether the process runs with an effective UID of 0."""
    return os.geteuid() == 0


def build_config(
    settings: Settings,
    *,
    dry_run: bool,
    verbose: bool,
    backup: bool,
    backup_dir: Path | None,
) -> WipeConfig:
    """Combine settings and command-line flags into the run configuration.

    Args:
        settings: Loaded settings file.
        dry_run: --dry-run flag.
        verbose: --verbose flag.
        backup: --backup flag.
        backup_dir: --backup-dir option, overrides settings when given.

    Returns:
        Immutable WipeConfig for this run.
    """
    return WipeConfig(
        dry_run=dry_run,
        verbose=verbose,
        backup_enabled=backup,
        backup_directory=backup_dir or settings.backup_directory,
        overwrite_passes=settings.overwrite_passes,
        extra_protected=tuple(settings.extra_protected),
    )


def _confirm_wipe(count: int, backup: bool) -> bool:
    """Ask the user to confirm an irreversible wipe."""
    note = "" if backup else " No backups will be kept."
    return typer.confirm(
        f"\nIrreversibly erase up to {count} target(s) and clean system logs?{note}",
        default=False,
    )


@app.callback(invoke_without_command=True)
def wipe(
    ctx: typer.Context,
    backup: Annotated[
        bool,
        typer.Option(
            "--backup",
            "-b",
            help="Copy each file to the backup directory before erasing it.",
        ),
    ] = False,
    backup_dir: Annotated[
        Path | None,
        typer.Option(
            "--backup-dir",
            help="Backup directory (default from settings).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be erased without changing anything.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Report every target, including missing and empty ones.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
    skip_temp: Annotated[
        bool,
        typer.Option("--skip-temp", help="Leave /tmp and /var/tmp alone."),
    ] = False,
    skip_journal: Annotated[
        bool,
        typer.Option("--skip-journal", help="Do not rotate and vacuum the systemd journal."),
    ] = False,
    skip_cache: Annotated[
        bool,
        typer.Option("--skip-cache", help="Do not drop filesystem caches."),
    ] = False,
) -> None:
    """Erase history and log artifacts for every user on this host.

    Overwriting is best-effort: on journaling, copy-on-write or SSD
    storage old data may survive elsewhere on the device.

    Examples:
        sudo tracewipe wipe --dry-run      # Preview
        sudo tracewipe wipe --backup       # Keep copies before erasing
        sudo tracewipe wipe --yes          # No confirmation prompt
    """
    if ctx.invoked_subcommand is not None:
        return

    if not is_privileged():
        print_error("tracewipe wipe must run as root (try: sudo tracewipe wipe).")
        raise typer.Exit(code=1)

    try:
        settings = load_settings()
    except SettingsError as e:
        print_warning(f"Ignoring settings file, using defaults: {e}")
        settings = Settings()

    setup_logging(verbose=verbose)
    config = build_config(
        settings,
        dry_run=dry_run,
        verbose=verbose,
        backup=backup,
        backup_dir=backup_dir,
    )

    try:
        candidates = TargetEnumerator(
            settings, backup_directory=config.backup_directory
        ).enumerate()

        if not dry_run and not yes and not _confirm_wipe(len(candidates), backup):
            print_info("Aborted.")
            raise typer.Exit(code=0)

        if backup and not dry_run:
            print_info(f"Backups go to {config.backup_directory}")

        engine = ErasureEngine(config)
        actions = default_actions(
            temp=not skip_temp,
            journal=not skip_journal,
            caches=not skip_cache,
        )
        summary = RunOrchestrator(engine, actions).run(candidates)
    except KeyboardInterrupt as e:
        print_warning("Interrupted. Files already erased stay erased.")
        raise typer.Exit(code=INTERRUPTED_EXIT_CODE) from e

    print_run(summary, dry_run=dry_run, verbose=verbose)
