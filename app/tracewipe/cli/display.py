"""Rich display functions for wipe runs.

Provides table builders and the summary printer used by the wipe and
targets commands.
"""

from rich.table import Table

from tracewipe.erasure.models import EraseOutcome, OutcomeKind, SkipReason
from tracewipe.runner.orchestrator import RunSummary
from tracewipe.runner.system import SystemActionResult
from tracewipe.utils.formatting import console, print_info, print_success, print_warning

# Skip reasons that are the normal steady state on repeated runs
QUIET_SKIP_REASONS: frozenset[SkipReason] = frozenset(
    {
        SkipReason.EMPTY_INPUT,
        SkipReason.UNRESOLVED,
        SkipReason.MISSING,
        SkipReason.EMPTY_FILE,
    }
)


def _status_markup(outcome: EraseOutcome) -> str:
    if outcome.kind == OutcomeKind.BACKED_UP_AND_ERASED:
        return "[erased]erased+backup[/]"
    if outcome.kind == OutcomeKind.ERASED:
        return "[erased]erased[/]"
    if outcome.kind == OutcomeKind.DRY_RUN:
        return "[dry_run]dry-run[/]"
    if outcome.kind == OutcomeKind.FAILED:
        return "[error]failed[/]"
    if outcome.skip_reason == SkipReason.PROTECTED:
        return "[protected]protected[/]"
    return "[skipped]skipped[/]"


def _detail(outcome: EraseOutcome) -> str:
    if outcome.kind == OutcomeKind.DRY_RUN:
        return "Would erase"
    if outcome.kind == OutcomeKind.BACKED_UP_AND_ERASED:
        return f"{outcome.method}, backup: {outcome.backup_path}"
    if outcome.kind == OutcomeKind.ERASED:
        return outcome.method or ""
    return outcome.reason or ""


def visible_outcomes(outcomes: list[EraseOutcome], verbose: bool = False) -> list[EraseOutcome]:
    """Filter outcomes down to those worth showing.

    Missing and empty targets are expected on every run after the first,
    so they are hidden unless verbose output was requested.

    Args:
        outcomes: All outcomes of a run.
        verbose: Show every outcome.

    Returns:
        Outcomes to display, in processing order.
    """
    if verbose:
        return list(outcomes)
    return [o for o in outcomes if o.skip_reason not in QUIET_SKIP_REASONS]


def create_outcomes_table(outcomes: list[EraseOutcome], dry_run: bool = False) -> Table:
    """Create a Rich table displaying per-target outcomes.

    Args:
        outcomes: Outcomes to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for outcome display.
    """
    title = "Wipe Results (Dry Run)" if dry_run else "Wipe Results"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=14)
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Details", style="muted", overflow="fold")

    for outcome in outcomes:
        path = outcome.path
        if outcome.canonical_path and outcome.canonical_path != outcome.path:
            path = f"{outcome.path} -> {outcome.canonical_path}"
        table.add_row(_status_markup(outcome), path, _detail(outcome))

    return table


def create_actions_table(results: list[SystemActionResult]) -> Table:
    """Create a Rich table displaying system action results.

    Args:
        results: System action results to display.

    Returns:
        Rich Table configured for system action display.
    """
    table = Table(
        title="System Actions",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Action", no_wrap=True)
    table.add_column("Details", style="muted")

    for result in results:
        if not result.success:
            status = "[error]FAIL[/]"
            detail = result.error or "Unknown error"
        elif result.dry_run:
            status = "[dry_run]DRY[/]"
            detail = result.detail
        else:
            status = "[success]OK[/]"
            detail = result.detail
        table.add_row(status, result.name, detail)

    return table


def print_summary(summary: RunSummary, dry_run: bool = False) -> None:
    """Print the run summary line.

    Failures are reported as a warning; they never change the exit code.

    Args:
        summary: Aggregated run results.
        dry_run: Whether the run was a dry-run.
    """
    if dry_run:
        print_info(
            f"Dry-run: {summary.dry_run} target(s) would be erased, "
            f"{summary.skipped} skipped."
        )
        return

    message = f"{summary.erased} erased ({summary.backed_up} backed up), {summary.skipped} skipped"
    if summary.has_failures:
        print_warning(
            f"{message}, {len(summary.failed)} failed, "
            f"{len(summary.failed_actions)} system action(s) failed"
        )
    else:
        print_success(f"{message}. Nothing failed.")


def print_run(summary: RunSummary, *, dry_run: bool = False, verbose: bool = False) -> None:
    """Print outcome and action tables followed by the summary.

    Args:
        summary: Aggregated run results.
        dry_run: Whether the run was a dry-run.
        verbose: Include missing and empty targets in the table.
    """
    shown = visible_outcomes(summary.outcomes, verbose=verbose)
    if shown:
        console.print(create_outcomes_table(shown, dry_run=dry_run))
    else:
        print_info("No history or log artifacts found.")

    if summary.actions:
        console.print(create_actions_table(summary.actions))

    print_summary(summary, dry_run=dry_run)
