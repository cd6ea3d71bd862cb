"""Best-effort backup of file contents before erasure.

Backups are flat: every file lands directly in the configured backup
directory under a name derived from its canonical path, with each "/"
replaced by "_" and a ".backup" suffix. Recovery is manual.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from tracewipe.core.paths import ensure_backup_dir
from tracewipe.erasure.models import ResolvedTarget, WipeConfig

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


@dataclass(frozen=True, slots=True)
class BackupResult:
    """Result of a single backup attempt.

    Attributes:
        source: Canonical path that was backed up.
        backup_path: Backup file written, None if skipped or failed.
        error: Error message if the backup failed, None otherwise.
    """

    source: str
    backup_path: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Whether a backup file was written."""
        return self.backup_path is not None


def backup_name(canonical: str) -> str:
    """Build the flat backup file name for a canonical path.

    Example:
        ``/home/alice/.bash_history`` becomes
        ``_home_alice_.bash_history.backup``.
    """
    return canonical.replace("/", "_") + BACKUP_SUFFIX


class BackupWriter:
    """Copies file bytes into the backup directory."""

    def backup(self, target: ResolvedTarget, config: WipeConfig) -> BackupResult:
        """Copy a file's bytes verbatim into the backup directory.

        Zero-size files are never backed up. Failures are logged and
        reported in the result, never raised.

        Args:
            target: Existing regular file to back up.
            config: Run configuration supplying the backup directory.

        Returns:
            BackupResult with the backup path or the error.
        """
        if target.size_bytes == 0:
            return BackupResult(source=target.path)

        try:
            backup_dir = ensure_backup_dir(Path(config.backup_directory))
        except RuntimeError as e:
            logger.warning("Backup skipped for %s: %s", target.path, e)
            return BackupResult(source=target.path, error=str(e))

        dest = backup_dir / backup_name(target.path)
        try:
            shutil.copyfile(target.path, dest)
        except OSError as e:
            logger.warning("Backup failed for %s: %s", target.path, e)
            return BackupResult(source=target.path, error=str(e))

        logger.debug("Backed up %s to %s", target.path, dest)
        return BackupResult(source=target.path, backup_path=str(dest))
