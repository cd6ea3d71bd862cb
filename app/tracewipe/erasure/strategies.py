"""Erasure strategies and the ordered fallback selector.

Strategies, strongest first:

1. ``shred``: the host's secure-delete primitive overwrites the file in
   several passes, finishing with an all-zero pass, then unlinks it.
2. ``truncate``: cuts the file to zero length in place. The content is
   gone from the file, but the inode and directory entry survive and the
   old blocks are simply released, so this is a weaker guarantee.

Neither strategy verifies that overwritten blocks reached durable storage
at their original location. On journaling, copy-on-write or flash media
the old data may survive elsewhere on the device; this is best-effort
destruction, not forensic-grade erasure.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from tracewipe.core.settings import DEFAULT_OVERWRITE_PASSES
from tracewipe.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class StrategyFailure(str, Enum):
    """Typed reason for a failed erasure attempt.

    Attributes:
        UNAVAILABLE: The strategy cannot run on this host.
        COMMAND_FAILED: An external command exited non-zero or could not start.
        IO_ERROR: A filesystem call raised an error.
        STILL_PRESENT: The strategy reported success but the file survived.
    """

    UNAVAILABLE = "unavailable"
    COMMAND_FAILED = "command_failed"
    IO_ERROR = "io_error"
    STILL_PRESENT = "still_present"


@dataclass(frozen=True, slots=True)
class StrategyResult:
    """Result of one erasure attempt.

    Attributes:
        strategy: Name of the strategy that ran.
        success: Whether the content was destroyed.
        failure: Typed failure reason, None on success.
        error: Human-readable error detail, None on success.
    """

    strategy: str
    success: bool
    failure: StrategyFailure | None = None
    error: str | None = None


class EraseStrategy(ABC):
    """Abstract base class for erasure strategies.

    Example:
        >>> strategy = TruncateStrategy()
        >>> if strategy.is_available():
        ...     result = strategy.erase("/home/alice/.bash_history")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier shown in results."""

    @property
    def unlinks(self) -> bool:
        """Whether a successful run removes the directory entry."""
        return False

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this strategy can run on the current host."""

    @abstractmethod
    def erase(self, path: str) -> StrategyResult:
        """Destroy the content of a regular file.

        Implementations must not raise; every error becomes a failed result.

        Args:
            path: Canonical path of an existing, non-empty regular file.

        Returns:
            StrategyResult describing the attempt.
        """

    def _failed(self, failure: StrategyFailure, error: str) -> StrategyResult:
        return StrategyResult(strategy=self.name, success=False, failure=failure, error=error)

    def _succeeded(self) -> StrategyResult:
        return StrategyResult(strategy=self.name, success=True)


class ShredStrategy(EraseStrategy):
    """Multi-pass overwrite and unlink via coreutils ``shred``.

    ``shred --iterations=N-1 --zero --remove`` writes N-1 random passes,
    one final zero pass, then renames and unlinks the file. The command
    runs without a timeout; a stalled filesystem stalls the run.
    """

    def __init__(self, passes: int = DEFAULT_OVERWRITE_PASSES) -> None:
        if passes < 3:
            msg = f"shred needs at least 3 passes, got {passes}"
            raise ValueError(msg)
        self._passes = passes

    @property
    def name(self) -> str:
        return "shred"

    @property
    def unlinks(self) -> bool:
        return True

    @property
    def passes(self) -> int:
        """Total passes including the final zero pass."""
        return self._passes

    def is_available(self) -> bool:
        """Check if shred is on PATH."""
        return command_exists("shred")

    def build_command(self, path: str) -> list[str]:
        """Build the shred command line for a path."""
        return [
            "shred",
            f"--iterations={self._passes - 1}",
            "--zero",
            "--remove",
            "--",
            path,
        ]

    def erase(self, path: str) -> StrategyResult:
        try:
            result = run_command(self.build_command(path), timeout=None)
        except (OSError, subprocess.SubprocessError) as e:
            return self._failed(StrategyFailure.COMMAND_FAILED, str(e))

        if not result.success:
            return self._failed(StrategyFailure.COMMAND_FAILED, result.failure_detail)

        if os.path.lexists(path):
            return self._failed(StrategyFailure.STILL_PRESENT, f"{path} still exists after shred")

        return self._succeeded()


class TruncateStrategy(EraseStrategy):
    """Truncate the file to zero length in place.

    Content is released but not overwritten, and the inode and directory
    entry survive.
    """

    @property
    def name(self) -> str:
        return "truncate"

    def is_available(self) -> bool:
        return True

    def erase(self, path: str) -> StrategyResult:
        try:
            os.truncate(path, 0)
        except OSError as e:
            return self._failed(StrategyFailure.IO_ERROR, str(e))
        return self._succeeded()


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Outcome of running the fallback chain for one file.

    Attributes:
        path: File the chain ran against.
        attempts: Every attempt made, in order, including unavailable ones.
    """

    path: str
    attempts: tuple[StrategyResult, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        """Whether any strategy destroyed the content."""
        return any(a.success for a in self.attempts)

    @property
    def method(self) -> str | None:
        """Name of the strategy that succeeded, if any."""
        for attempt in self.attempts:
            if attempt.success:
                return attempt.strategy
        return None

    @property
    def error(self) -> str | None:
        """Combined failure detail when every strategy failed."""
        if self.success:
            return None
        if not self.attempts:
            return "no erasure strategy configured"
        return "; ".join(f"{a.strategy}: {a.error or a.failure}" for a in self.attempts)


def default_strategies(passes: int = DEFAULT_OVERWRITE_PASSES) -> list[EraseStrategy]:
    """Build the default strategy chain, strongest first."""
    return [ShredStrategy(passes=passes), TruncateStrategy()]


class StrategySelector:
    """Runs erasure strategies in order until one succeeds.

    Args:
        strategies: Ordered strategies, strongest first. Defaults to
            shred followed by truncate.
    """

    def __init__(self, strategies: list[EraseStrategy] | None = None) -> None:
        self._strategies = strategies if strategies is not None else default_strategies()

    @property
    def strategies(self) -> tuple[EraseStrategy, ...]:
        """The configured fallback order."""
        return tuple(self._strategies)

    def erase(self, path: str) -> SelectionResult:
        """Destroy a file's content with the best available strategy.

        Args:
            path: Canonical path of an existing, non-empty regular file.

        Returns:
            SelectionResult recording every attempt.
        """
        attempts: list[StrategyResult] = []

        for strategy in self._strategies:
            if not strategy.is_available():
                attempts.append(
                    StrategyResult(
                        strategy=strategy.name,
                        success=False,
                        failure=StrategyFailure.UNAVAILABLE,
                        error=f"{strategy.name} is not available",
                    )
                )
                continue

            result = strategy.erase(path)
            attempts.append(result)
            if result.success:
                break

            logger.debug("%s failed for %s: %s", strategy.name, path, result.error)

        return SelectionResult(path=path, attempts=tuple(attempts))
