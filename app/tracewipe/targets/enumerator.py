"""Candidate path enumeration.

Produces the ordered list of candidate paths handed to the erasure engine:
well-known per-user history files and session directories for every home
directory on the host, system log files, files found by a name-pattern
search, and any extra targets from settings. Duplicates are dropped while
keeping first-seen order.

Enumeration never decides whether a path is safe to destroy; that is the
erasure engine's job.
"""

import fnmatch
import logging
import os
import pwd
from collections.abc import Iterable, Iterator
from pathlib import Path

from tracewipe.core.settings import Settings
from tracewipe.erasure.protected import is_protected_path
from tracewipe.targets.catalog import (
    ROOT_HOME,
    SYSTEM_LOG_FILES,
    USER_HISTORY_FILES,
    USER_SESSION_DIRS,
)

logger = logging.getLogger(__name__)


def discover_homes() -> list[Path]:
    """List existing home directories from the password database.

    The superuser's home is always included when it exists. System
    accounts pointing at shared directories such as / are dropped.

    Returns:
        Sorted, de-duplicated list of home directories.
    """
    homes: set[Path] = set()

    for entry in pwd.getpwall():
        home = entry.pw_dir
        if not home or home == "/" or is_protected_path(home):
            continue
        path = Path(home)
        if path.is_dir():
            homes.add(path)

    root = Path(ROOT_HOME)
    if root.is_dir():
        homes.add(root)

    return sorted(homes)


class TargetEnumerator:
    """Builds the candidate list for a wipe run.

    Args:
        settings: Settings supplying search roots, patterns and extra targets.
        homes: Explicit home directories. Defaults to discover_homes().
        system_logs: Explicit system log paths. Defaults to SYSTEM_LOG_FILES.
        backup_directory: Backup directory of the run, never searched.
            Defaults to the one in settings.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        homes: Iterable[Path] | None = None,
        system_logs: Iterable[str] | None = None,
        backup_directory: Path | None = None,
    ) -> None:
        self._settings = settings
        self._homes = list(homes) if homes is not None else None
        self._system_logs = tuple(system_logs) if system_logs is not None else SYSTEM_LOG_FILES
        self._backup_directory = backup_directory or settings.backup_directory

    def enumerate(self) -> list[str]:
        """Collect all candidate paths in processing order.

        Returns:
            Ordered, de-duplicated candidate path strings.
        """
        seen: set[str] = set()
        candidates: list[str] = []

        for path in self._iter_all():
            if path in seen:
                continue
            seen.add(path)
            candidates.append(path)

        return candidates

    def _iter_all(self) -> Iterator[str]:
        homes = self._homes if self._homes is not None else discover_homes()

        yield from self.user_targets(homes)
        yield from self._system_logs
        yield from self.search()
        yield from self._settings.extra_targets

    @staticmethod
    def user_targets(homes: Iterable[Path]) -> Iterator[str]:
        """Yield well-known history files and session dirs for each home.

        Args:
            homes: Home directories to expand.

        Yields:
            Absolute candidate path strings.
        """
        for home in homes:
            for relative in USER_HISTORY_FILES:
                yield str(home / relative)
            for relative in USER_SESSION_DIRS:
                yield str(home / relative)

    def search(self) -> Iterator[str]:
        """Walk the search roots for files matching the history patterns.

        Symlinks are not followed and protected trees are never entered.
        Unreadable directories are logged and skipped.

        Yields:
            Paths of regular files whose name matches a pattern.
        """
        patterns = tuple(self._settings.history_patterns)
        if not patterns:
            return

        # Never descend into the backup directory
        excluded = (os.path.realpath(self._backup_directory),)

        for root in self._settings.search_roots:
            if not os.path.isdir(root) or is_protected_path(os.path.realpath(root), excluded):
                continue
            yield from self._walk(root, patterns, excluded)

    def _walk(
        self, root: str, patterns: tuple[str, ...], excluded: tuple[str, ...]
    ) -> Iterator[str]:
        def on_error(exc: OSError) -> None:
            logger.warning("Cannot search %s: %s", exc.filename, exc.strerror)

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
            dirnames[:] = sorted(
                d for d in dirnames if not is_protected_path(os.path.join(dirpath, d), excluded)
            )
            for name in sorted(filenames):
                if not self._matches(name, patterns):
                    continue
                path = os.path.join(dirpath, name)
                if os.path.isfile(path) and not os.path.islink(path):
                    yield path

    @staticmethod
    def _matches(name: str, patterns: tuple[str, ...]) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)
