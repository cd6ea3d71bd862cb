"""Secure erasure engine.

This module provides path canonicalization, the protected path guard,
best-effort backups, erasure strategies with ordered fallback, and the
engine that composes them into a total per-path pipeline.
"""

from tracewipe.erasure.backup import BackupResult, BackupWriter, backup_name
from tracewipe.erasure.engine import ErasureEngine
from tracewipe.erasure.models import (
    EraseOutcome,
    OutcomeKind,
    ResolvedTarget,
    SkipReason,
    TargetKind,
    WipeConfig,
)
from tracewipe.erasure.protected import PROTECTED_PREFIXES, is_protected_path
from tracewipe.erasure.resolver import PathResolver
from tracewipe.erasure.strategies import (
    EraseStrategy,
    SelectionResult,
    ShredStrategy,
    StrategyFailure,
    StrategyResult,
    StrategySelector,
    TruncateStrategy,
    default_strategies,
)

__all__ = [
    "PROTECTED_PREFIXES",
    "BackupResult",
    "BackupWriter",
    "EraseOutcome",
    "EraseStrategy",
    "ErasureEngine",
    "OutcomeKind",
    "PathResolver",
    "ResolvedTarget",
    "SelectionResult",
    "ShredStrategy",
    "SkipReason",
    "StrategyFailure",
    "StrategyResult",
    "StrategySelector",
    "TargetKind",
    "TruncateStrategy",
    "WipeConfig",
    "backup_name",
    "default_strategies",
    "is_protected_path",
]
