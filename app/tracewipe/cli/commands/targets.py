"""Targets command implementation.

Lists the candidate paths a wipe run would consider, without touching
anything.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.table import Table

from tracewipe.core.settings import SettingsError, load_settings
from tracewipe.erasure.protected import is_protected_path
from tracewipe.erasure.resolver import PathResolver
from tracewipe.targets.enumerator import TargetEnumerator
from tracewipe.utils.formatting import console, format_size, print_error, print_success

app = typer.Typer(
    help="List candidate history and log files.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _describe(
    candidate: str, resolver: PathResolver, extra: tuple[str, ...] = ()
) -> dict[str, object]:
    """Inspect a candidate without modifying it."""
    canonical = resolver.canonicalize(candidate)
    if canonical is None:
        return {"path": candidate, "canonical": None, "state": "unresolved", "size_bytes": 0}
    if is_protected_path(canonical, extra):
        return {"path": candidate, "canonical": canonical, "state": "protected", "size_bytes": 0}
    target = resolver.inspect(canonical)
    if target is None:
        return {"path": candidate, "canonical": canonical, "state": "unresolved", "size_bytes": 0}
    return {
        "path": candidate,
        "canonical": canonical,
        "state": target.kind.value,
        "size_bytes": target.size_bytes,
    }


@app.callback(invoke_without_command=True)
def list_targets(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    show_missing: Annotated[
        bool,
        typer.Option("--all", "-a", help="Include candidates that do not exist."),
    ] = False,
) -> None:
    """List candidate paths that a wipe run would process."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e

    resolver = PathResolver()
    extra = tuple(settings.extra_protected)
    rows = [_describe(c, resolver, extra) for c in TargetEnumerator(settings).enumerate()]
    if not show_missing:
        rows = [r for r in rows if r["state"] != "missing"]

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(rows))
        return

    if not rows:
        print_success("No history or log artifacts found.")
        return

    table = Table(
        title="Wipe Candidates",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("State", width=10)
    table.add_column("Size", justify="right", width=10)

    for row in rows:
        size = row["size_bytes"]
        size_str = format_size(size) if isinstance(size, int) and size else "-"
        table.add_row(str(row["path"]), str(row["state"]), size_str)

    console.print(table)
    console.print(f"\n[dim]{len(rows)} candidate(s)[/dim]")
