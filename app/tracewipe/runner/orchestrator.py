"""Run orchestration.

Feeds every candidate through the erasure engine in enumeration order,
then runs the auxiliary system actions, and aggregates everything into a
RunSummary. Per-target failures are tallied, never escalated.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from tracewipe.erasure.engine import ErasureEngine
from tracewipe.erasure.models import EraseOutcome, OutcomeKind
from tracewipe.runner.system import SystemAction, SystemActionResult, TempCleanupAction

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunSummary:
    """Aggregated results of a wipe run.

    Attributes:
        outcomes: Per-target outcomes in processing order, including those
            produced by temp cleanup.
        actions: Results of the auxiliary system actions.
    """

    outcomes: list[EraseOutcome] = field(default_factory=list)
    actions: list[SystemActionResult] = field(default_factory=list)

    @property
    def counts(self) -> Counter[OutcomeKind]:
        """Number of outcomes per kind."""
        return Counter(o.kind for o in self.outcomes)

    @property
    def erased(self) -> int:
        """Targets whose content was destroyed (with or without backup)."""
        counts = self.counts
        return counts[OutcomeKind.ERASED] + counts[OutcomeKind.BACKED_UP_AND_ERASED]

    @property
    def backed_up(self) -> int:
        """Targets backed up before erasure."""
        return self.counts[OutcomeKind.BACKED_UP_AND_ERASED]

    @property
    def skipped(self) -> int:
        """Targets left untouched."""
        return self.counts[OutcomeKind.SKIPPED]

    @property
    def dry_run(self) -> int:
        """Targets that would have been erased."""
        return self.counts[OutcomeKind.DRY_RUN]

    @property
    def failed(self) -> list[EraseOutcome]:
        """Targets that could not be erased."""
        return [o for o in self.outcomes if o.kind == OutcomeKind.FAILED]

    @property
    def failed_actions(self) -> list[SystemActionResult]:
        """System actions that did not complete."""
        return [a for a in self.actions if not a.success]

    @property
    def has_failures(self) -> bool:
        """Whether anything failed during the run."""
        return bool(self.failed or self.failed_actions)


class RunOrchestrator:
    """Sequences a full wipe run.

    Args:
        engine: Erasure engine configured for this run.
        actions: Auxiliary system actions, run after all targets.
    """

    def __init__(self, engine: ErasureEngine, actions: Iterable[SystemAction] = ()) -> None:
        self._engine = engine
        self._actions = list(actions)

    def run(self, candidates: Iterable[str]) -> RunSummary:
        """Process all candidates, then run the system actions.

        Args:
            candidates: Candidate paths in processing order.

        Returns:
            RunSummary with every outcome and action result.
        """
        summary = RunSummary()

        for candidate in candidates:
            summary.outcomes.append(self._engine.process(candidate))

        for action in self._actions:
            logger.debug("Running system action %s", action.name)
            result = action.run(self._engine)
            summary.actions.append(result)
            if isinstance(action, TempCleanupAction):
                summary.outcomes.extend(action.outcomes)

        logger.debug(
            "Run finished: %d erased, %d skipped, %d failed",
            summary.erased,
            summary.skipped,
            len(summary.failed),
        )
        return summary
