"""Run orchestration and auxiliary system actions."""

from tracewipe.runner.orchestrator import RunOrchestrator, RunSummary
from tracewipe.runner.system import (
    DropCachesAction,
    JournalRotateAction,
    SystemAction,
    SystemActionResult,
    TempCleanupAction,
    default_actions,
)

__all__ = [
    "DropCachesAction",
    "JournalRotateAction",
    "RunOrchestrator",
    "RunSummary",
    "SystemAction",
    "SystemActionResult",
    "TempCleanupAction",
    "default_actions",
]
