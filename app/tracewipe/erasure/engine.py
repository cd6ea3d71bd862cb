"""Erasure engine.

Drives one candidate path at a time through validate, protect, inspect,
back up and destroy. ``process`` is total: whatever the input and whatever
the filesystem does, it returns an EraseOutcome and never raises, so one
bad target can never abort a sweep halfway through.

Per path::

    candidate -> empty input?        -> Skipped(empty input)
              -> canonicalize        -> Skipped(unresolved)
              -> protected?          -> Skipped(protected path)
              -> inspect             -> Skipped(unresolved | missing)
              -> directory?          -> rmtree, or DryRunReported
              -> not a regular file? -> Skipped(not a regular file)
              -> zero size?          -> Skipped(empty)
              -> dry-run?            -> DryRunReported
              -> backup (best-effort)
              -> destroy             -> Erased | BackedUpAndErased | Failed
"""

import logging
import os
import shutil
from collections.abc import Iterable

from tracewipe.erasure.backup import BackupWriter
from tracewipe.erasure.models import (
    EraseOutcome,
    OutcomeKind,
    ResolvedTarget,
    SkipReason,
    TargetKind,
    WipeConfig,
)
from tracewipe.erasure.protected import is_protected_path
from tracewipe.erasure.resolver import PathResolver
from tracewipe.erasure.strategies import StrategySelector, default_strategies

logger = logging.getLogger(__name__)


class ErasureEngine:
    """Validates, backs up and destroys individual targets.

    Args:
        config: Immutable run configuration.
        resolver: Path resolver; injectable for tests.
        selector: Erasure strategy selector. Defaults to shred then truncate
            using the configured pass count.
        backup_writer: Backup writer; injectable for tests.
    """

    def __init__(
        self,
        config: WipeConfig,
        *,
        resolver: PathResolver | None = None,
        selector: StrategySelector | None = None,
        backup_writer: BackupWriter | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver or PathResolver()
        self._selector = selector or StrategySelector(default_strategies(config.overwrite_passes))
        self._backup_writer = backup_writer or BackupWriter()
        self._backup_root = os.path.realpath(config.backup_directory)
        self._protected = (*config.extra_protected, self._backup_root)

    @property
    def config(self) -> WipeConfig:
        """The run configuration."""
        return self._config

    def process_all(self, candidates: Iterable[str]) -> list[EraseOutcome]:
        """Process candidates sequentially in the given order.

        Args:
            candidates: Candidate path strings.

        Returns:
            One EraseOutcome per candidate, in input order.
        """
        return [self.process(candidate) for candidate in candidates]

    def process(self, candidate: str) -> EraseOutcome:
        """Run one candidate path through the erasure pipeline.

        Args:
            candidate: Candidate path string, possibly empty, missing or
                a symlink.

        Returns:
            EraseOutcome describing the terminal state reached.
        """
        if not candidate or not candidate.strip():
            return EraseOutcome.skipped(candidate, SkipReason.EMPTY_INPUT)

        canonical = self._resolver.canonicalize(candidate)
        if canonical is None:
            logger.debug("Skipping unresolvable path: %s", candidate)
            return EraseOutcome.skipped(candidate, SkipReason.UNRESOLVED)

        if self.is_protected(canonical):
            logger.warning("Refusing to touch protected path: %s (-> %s)", candidate, canonical)
            return EraseOutcome.skipped(candidate, SkipReason.PROTECTED, canonical)

        target = self._resolver.inspect(canonical, via_symlink=self._resolver.is_link(candidate))
        if target is None:
            logger.debug("Skipping path that cannot be inspected: %s", canonical)
            return EraseOutcome.skipped(candidate, SkipReason.UNRESOLVED, canonical)

        if not target.exists:
            if self._config.verbose:
                logger.info("Not present: %s", canonical)
            return EraseOutcome.skipped(candidate, SkipReason.MISSING, canonical)

        if target.is_dir:
            return self._process_directory(candidate, target)

        if target.kind != TargetKind.FILE:
            logger.debug("Skipping non-regular file: %s", canonical)
            return EraseOutcome.skipped(candidate, SkipReason.NOT_REGULAR, canonical)

        if target.size_bytes == 0:
            if self._config.verbose:
                logger.info("Already empty: %s", canonical)
            return EraseOutcome.skipped(candidate, SkipReason.EMPTY_FILE, canonical)

        if self._config.dry_run:
            logger.info("Dry-run: would erase %s (%d bytes)", canonical, target.size_bytes)
            return EraseOutcome(path=candidate, kind=OutcomeKind.DRY_RUN, canonical_path=canonical)

        return self._destroy_file(candidate, target)

    def is_protected(self, canonical: str) -> bool:
        """Check a canonical path against the run's protected set.

        Args:
            canonical: Canonical absolute path.

        Returns:
            True if the path must not be touched.
        """
        return is_protected_path(canonical, self._protected)

    def _destroy_file(self, candidate: str, target: ResolvedTarget) -> EraseOutcome:
        backup_path: str | None = None
        if self._config.backup_enabled:
            backup = self._backup_writer.backup(target, self._config)
            backup_path = backup.backup_path

        selection = self._selector.erase(target.path)
        if not selection.success:
            logger.warning("Could not erase %s: %s", target.path, selection.error)
            return EraseOutcome(
                path=candidate,
                kind=OutcomeKind.FAILED,
                reason=f"io-error: {selection.error}",
                canonical_path=target.path,
                backup_path=backup_path,
            )

        if self._config.verbose:
            logger.info("Erased %s using %s", target.path, selection.method)

        kind = OutcomeKind.BACKED_UP_AND_ERASED if backup_path else OutcomeKind.ERASED
        return EraseOutcome(
            path=candidate,
            kind=kind,
            canonical_path=target.path,
            backup_path=backup_path,
            method=selection.method,
        )

    def _process_directory(self, candidate: str, target: ResolvedTarget) -> EraseOutcome:
        # A link must never redirect recursive removal somewhere else
        if target.via_symlink:
            logger.warning("Not following symlink to directory: %s -> %s", candidate, target.path)
            return EraseOutcome.skipped(candidate, SkipReason.SYMLINKED_DIRECTORY, target.path)

        if self._holds_backups(target.path):
            logger.warning("Not removing %s: it contains the backup directory", target.path)
            return EraseOutcome.skipped(candidate, SkipReason.PROTECTED, target.path)

        if self._config.dry_run:
            logger.info("Dry-run: would remove directory %s", target.path)
            return EraseOutcome(path=candidate, kind=OutcomeKind.DRY_RUN, canonical_path=target.path)

        try:
            shutil.rmtree(target.path)
        except OSError as e:
            logger.warning("Could not remove directory %s: %s", target.path, e)
            return EraseOutcome.failed(candidate, f"io-error: {e}", target.path)

        if self._config.verbose:
            logger.info("Removed directory %s", target.path)

        return EraseOutcome(
            path=candidate,
            kind=OutcomeKind.ERASED,
            canonical_path=target.path,
            method="rmtree",
        )

    def _holds_backups(self, directory: str) -> bool:
        # Backups from this or earlier runs are never erasure targets
        return self._backup_root == directory or self._backup_root.startswith(
            directory.rstrip("/") + "/"
        )
