"""Erasure domain models.

This module defines the immutable run configuration, the resolved view of
a candidate path, and the per-path outcome returned by the erasure engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from tracewipe.core.paths import get_default_backup_dir
from tracewipe.core.settings import DEFAULT_OVERWRITE_PASSES


@dataclass(frozen=True, slots=True)
class WipeConfig:
    """Configuration for a single wipe run.

    Built once from settings and command-line flags, then shared read-only
    by every component.

    Attributes:
        dry_run: Report intended actions without touching the filesystem.
        verbose: Log every successful destructive operation.
        backup_enabled: Copy file contents aside before destroying them.
        backup_directory: Flat directory receiving ``*.backup`` files.
        overwrite_passes: Total overwrite passes requested from the host.
        extra_protected: Additional protected path prefixes.
    """

    dry_run: bool = False
    verbose: bool = False
    backup_enabled: bool = False
    backup_directory: Path = field(default_factory=get_default_backup_dir)
    overwrite_passes: int = DEFAULT_OVERWRITE_PASSES
    extra_protected: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        if self.overwrite_passes < 3:
            msg = f"At least 3 overwrite passes are required, got {self.overwrite_passes}"
            raise ValueError(msg)


class TargetKind(str, Enum):
    """Kind of filesystem entry behind a canonical path.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory.
        OTHER: Socket, FIFO, device node or anything else.
        MISSING: Nothing exists at the path.
    """

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    """Canonical view of a candidate path, computed per invocation.

    Attributes:
        path: Canonical absolute path with symlinks resolved.
        kind: Type of the entry at the canonical path.
        size_bytes: Size of a regular file, 0 otherwise.
        via_symlink: Whether the candidate itself was a symbolic link.
    """

    path: str
    kind: TargetKind
    size_bytes: int = 0
    via_symlink: bool = False

    @property
    def exists(self) -> bool:
        """Whether anything exists at the canonical path."""
        return self.kind != TargetKind.MISSING

    @property
    def is_dir(self) -> bool:
        """Whether the canonical path is a directory."""
        return self.kind == TargetKind.DIRECTORY


class OutcomeKind(str, Enum):
    """Terminal state reached by the erasure engine for one path."""

    SKIPPED = "skipped"
    DRY_RUN = "dry_run"
    BACKED_UP_AND_ERASED = "backed_up_and_erased"
    ERASED = "erased"
    FAILED = "failed"


class SkipReason(str, Enum):
    """Why a path was left untouched."""

    EMPTY_INPUT = "empty input"
    UNRESOLVED = "unresolved"
    PROTECTED = "protected path"
    MISSING = "missing"
    EMPTY_FILE = "empty"
    NOT_REGULAR = "not a regular file"
    SYMLINKED_DIRECTORY = "symlinked directory"


@dataclass(frozen=True, slots=True)
class EraseOutcome:
    """Result of running one candidate path through the erasure engine.

    Attributes:
        path: Candidate path as supplied by the caller.
        kind: Terminal state reached.
        reason: Skip or failure reason, None for successful outcomes.
        canonical_path: Resolved path, None if resolution failed.
        backup_path: Backup file written before erasure, if any.
        method: Name of the erasure method that succeeded.
    """

    path: str
    kind: OutcomeKind
    reason: str | None = None
    canonical_path: str | None = None
    backup_path: str | None = None
    method: str | None = None

    @classmethod
    def skipped(
        cls, path: str, reason: SkipReason, canonical_path: str | None = None
    ) -> "EraseOutcome":
        """Build a Skipped outcome."""
        return cls(
            path=path,
            kind=OutcomeKind.SKIPPED,
            reason=reason.value,
            canonical_path=canonical_path,
        )

    @classmethod
    def failed(cls, path: str, reason: str, canonical_path: str | None = None) -> "EraseOutcome":
        """Build a Failed outcome."""
        return cls(
            path=path,
            kind=OutcomeKind.FAILED,
            reason=reason,
            canonical_path=canonical_path,
        )

    @property
    def skip_reason(self) -> SkipReason | None:
        """Typed skip reason for Skipped outcomes."""
        if self.kind != OutcomeKind.SKIPPED or self.reason is None:
            return None
        return SkipReason(self.reason)

    @property
    def is_erased(self) -> bool:
        """Whether the target's content was destroyed."""
        return self.kind in (OutcomeKind.ERASED, OutcomeKind.BACKED_UP_AND_ERASED)
