"""Auxiliary system actions run after the per-target sweep.

Each action is a blocking call without a timeout and honors dry-run.
Failures are reported in a SystemActionResult and never raised.
"""

import fnmatch
import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from tracewipe.erasure.engine import ErasureEngine
from tracewipe.erasure.models import EraseOutcome, OutcomeKind
from tracewipe.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

TEMP_DIRECTORIES: tuple[str, ...] = ("/tmp", "/var/tmp")

# Runtime socket directories and service sandboxes that live sessions need
TEMP_KEEP_PATTERNS: tuple[str, ...] = (
    ".X11-unix",
    ".ICE-unix",
    ".font-unix",
    ".XIM-unix",
    ".Test-unix",
    "systemd-private-*",
)

DROP_CACHES_PATH = "/proc/sys/vm/drop_caches"


@dataclass(frozen=True, slots=True)
class SystemActionResult:
    """Result of one auxiliary system action.

    Attributes:
        name: Action identifier.
        success: Whether the action completed.
        dry_run: Whether the action only reported what it would do.
        detail: Short description of what happened.
        error: Error message if the action failed, None otherwise.
    """

    name: str
    success: bool
    dry_run: bool = False
    detail: str = ""
    error: str | None = None


class SystemAction(ABC):
    """Abstract base class for auxiliary system actions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier shown in the summary."""

    @abstractmethod
    def run(self, engine: ErasureEngine) -> SystemActionResult:
        """Perform the action.

        Args:
            engine: The run's erasure engine, which carries the configuration.

        Returns:
            SystemActionResult describing what happened.
        """


class TempCleanupAction(SystemAction):
    """Erase the contents of the temporary directories.

    Every top-level entry is handed to the erasure engine, so the safety
    guard, dry-run and backup settings apply exactly as for any other
    target. Runtime socket directories are left alone.

    Args:
        directories: Temporary directories to clean.
    """

    def __init__(self, directories: tuple[str, ...] = TEMP_DIRECTORIES) -> None:
        self._directories = directories
        self.outcomes: list[EraseOutcome] = []

    @property
    def name(self) -> str:
        return "temp-cleanup"

    def run(self, engine: ErasureEngine) -> SystemActionResult:
        self.outcomes = []
        errors: list[str] = []

        for directory in self._directories:
            try:
                entries = sorted(Path(directory).iterdir())
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning("Cannot list %s: %s", directory, e)
                errors.append(f"{directory}: {e}")
                continue

            for entry in entries:
                if self._is_kept(entry.name):
                    continue
                self.outcomes.append(engine.process(str(entry)))

        failed = [o for o in self.outcomes if o.kind == OutcomeKind.FAILED]
        erased = sum(1 for o in self.outcomes if o.is_erased)
        pending = sum(1 for o in self.outcomes if o.kind == OutcomeKind.DRY_RUN)

        if engine.config.dry_run:
            detail = f"would remove {pending} entr{'y' if pending == 1 else 'ies'}"
        else:
            detail = f"removed {erased} entr{'y' if erased == 1 else 'ies'}"
        if failed:
            errors.append(f"{len(failed)} entries could not be removed")

        return SystemActionResult(
            name=self.name,
            success=not errors,
            dry_run=engine.config.dry_run,
            detail=detail,
            error="; ".join(errors) or None,
        )

    @staticmethod
    def _is_kept(name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in TEMP_KEEP_PATTERNS)


class JournalRotateAction(SystemAction):
    """Rotate the systemd journal and vacuum all archived files."""

    COMMANDS: tuple[tuple[str, ...], ...] = (
        ("journalctl", "--rotate"),
        ("journalctl", "--vacuum-time=1s"),
    )

    @property
    def name(self) -> str:
        return "journal-rotate"

    def run(self, engine: ErasureEngine) -> SystemActionResult:
        if not command_exists("journalctl"):
            return SystemActionResult(
                name=self.name,
                success=True,
                dry_run=engine.config.dry_run,
                detail="journalctl not found, skipped",
            )

        if engine.config.dry_run:
            return SystemActionResult(
                name=self.name,
                success=True,
                dry_run=True,
                detail="would rotate and vacuum the journal",
            )

        for cmd in self.COMMANDS:
            try:
                result = run_command(list(cmd), timeout=None)
            except (OSError, subprocess.SubprocessError) as e:
                logger.warning("%s failed: %s", " ".join(cmd), e)
                return SystemActionResult(name=self.name, success=False, error=str(e))
            if not result.success:
                logger.warning("%s failed: %s", " ".join(cmd), result.failure_detail)
                return SystemActionResult(
                    name=self.name, success=False, error=result.failure_detail
                )

        return SystemActionResult(name=self.name, success=True, detail="journal rotated and vacuumed")


class DropCachesAction(SystemAction):
    """Flush dirty pages and drop the page, dentry and inode caches.

    Args:
        drop_caches_path: Kernel interface to write to.
    """

    def __init__(self, drop_caches_path: str = DROP_CACHES_PATH) -> None:
        self._path = drop_caches_path

    @property
    def name(self) -> str:
        return "drop-caches"

    def run(self, engine: ErasureEngine) -> SystemActionResult:
        if engine.config.dry_run:
            return SystemActionResult(
                name=self.name,
                success=True,
                dry_run=True,
                detail="would sync and drop filesystem caches",
            )

        try:
            os.sync()
            Path(self._path).write_text("3\n")
        except OSError as e:
            logger.warning("Cannot drop caches: %s", e)
            return SystemActionResult(name=self.name, success=False, error=str(e))

        return SystemActionResult(name=self.name, success=True, detail="caches dropped")


def default_actions(
    *,
    temp: bool = True,
    journal: bool = True,
    caches: bool = True,
) -> list[SystemAction]:
    """Build the standard action list in execution order."""
    actions: list[SystemAction] = []
    if temp:
        actions.append(TempCleanupAction())
    if journal:
        actions.append(JournalRotateAction())
    if caches:
        actions.append(DropCachesAction())
    return actions
