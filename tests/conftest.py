"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from tracewipe.erasure.engine import ErasureEngine
from tracewipe.erasure.models import WipeConfig
from tracewipe.erasure.strategies import StrategySelector, TruncateStrategy


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    """Backup directory that does not exist yet."""
    return tmp_path / "backups"


@pytest.fixture
def make_config(backup_dir: Path) -> Callable[..., WipeConfig]:
    """Factory for WipeConfig pointing at the test backup directory."""

    def _make(**kwargs: object) -> WipeConfig:
        kwargs.setdefault("backup_directory", backup_dir)
        return WipeConfig(**kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def make_engine(make_config: Callable[..., WipeConfig]) -> Callable[..., ErasureEngine]:
    """Factory for an ErasureEngine that erases by truncation only.

    Truncation behaves the same on every host, unlike shred which may be
    missing.
    """

    def _make(**kwargs: object) -> ErasureEngine:
        return ErasureEngine(
            make_config(**kwargs),
            selector=StrategySelector([TruncateStrategy()]),
        )

    return _make


@pytest.fixture
def history_file(tmp_path: Path) -> Path:
    """A 500-byte shell history file under a fake home directory."""
    home = tmp_path / "home" / "alice"
    home.mkdir(parents=True)
    path = home / ".bash_history"
    path.write_bytes(b"".join(f"echo {i:04d}\n".encode() for i in range(50)))
    assert path.stat().st_size == 500
    return path
