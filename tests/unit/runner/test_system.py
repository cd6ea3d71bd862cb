"""Tests for the auxiliary system actions."""

import subprocess
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from tracewipe.erasure.engine import ErasureEngine
from tracewipe.erasure.models import OutcomeKind
from tracewipe.runner.system import (
    DropCachesAction,
    JournalRotateAction,
    TempCleanupAction,
    default_actions,
)
from tracewipe.utils.shell import CommandResult

EngineFactory = Callable[..., ErasureEngine]


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """A fake /tmp with files, a directory and kept socket dirs."""
    tmp = tmp_path / "tmp"
    tmp.mkdir()
    (tmp / "session.txt").write_text("data")
    (tmp / "build").mkdir()
    (tmp / "build" / "out.o").write_text("obj")
    (tmp / ".X11-unix").mkdir()
    (tmp / "systemd-private-abc-chronyd.service-xyz").mkdir()
    return tmp


class TestTempCleanupAction:
    """Tests for TempCleanupAction."""

    def test_removes_entries(self, make_engine: EngineFactory, temp_dir: Path) -> None:
        """Files are erased and directories removed."""
        action = TempCleanupAction((str(temp_dir),))

        result = action.run(make_engine())

        assert result.success is True
        assert result.detail == "removed 2 entries"
        assert not (temp_dir / "build").exists()
        assert (temp_dir / "session.txt").stat().st_size == 0
        assert len(action.outcomes) == 2

    def test_keeps_backups_written_this_run(
        self, make_engine: EngineFactory, temp_dir: Path, history_file: Path
    ) -> None:
        """A temp entry holding the backup directory survives the sweep."""
        engine = make_engine(backup_enabled=True, backup_directory=temp_dir / "ops" / "backups")
        erased = engine.process(str(history_file))
        action = TempCleanupAction((str(temp_dir),))

        result = action.run(engine)

        assert erased.backup_path is not None
        assert Path(erased.backup_path).exists()
        assert not (temp_dir / "build").exists()
        kept = [o for o in action.outcomes if o.path == str(temp_dir / "ops")]
        assert kept[0].kind == OutcomeKind.SKIPPED
        assert result.success is True

    def test_keeps_runtime_dirs(self, make_engine: EngineFactory, temp_dir: Path) -> None:
        """Socket directories and service sandboxes survive."""
        TempCleanupAction((str(temp_dir),)).run(make_engine())

        assert (temp_dir / ".X11-unix").is_dir()
        assert (temp_dir / "systemd-private-abc-chronyd.service-xyz").is_dir()

    def test_dry_run(self, make_engine: EngineFactory, temp_dir: Path) -> None:
        """Dry-run reports entries without touching them."""
        action = TempCleanupAction((str(temp_dir),))

        result = action.run(make_engine(dry_run=True))

        assert result.dry_run is True
        assert result.detail == "would remove 2 entries"
        assert (temp_dir / "build" / "out.o").exists()
        assert all(o.kind == OutcomeKind.DRY_RUN for o in action.outcomes)

    def test_missing_directory(self, make_engine: EngineFactory, tmp_path: Path) -> None:
        """A temp directory that does not exist is not an error."""
        result = TempCleanupAction((str(tmp_path / "absent"),)).run(make_engine())

        assert result.success is True
        assert result.detail == "removed 0 entries"

    def test_failures_reported(
        self, make_engine: EngineFactory, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Entries that cannot be removed mark the action failed."""

        def fail(path: str) -> None:
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr("tracewipe.erasure.engine.shutil.rmtree", fail)

        result = TempCleanupAction((str(temp_dir),)).run(make_engine())

        assert result.success is False
        assert result.error == "1 entries could not be removed"


class TestJournalRotateAction:
    """Tests for JournalRotateAction."""

    @patch("tracewipe.runner.system.command_exists", return_value=False)
    def test_without_journalctl(self, mock_exists: MagicMock, make_engine: EngineFactory) -> None:
        """Hosts without systemd skip the action successfully."""
        result = JournalRotateAction().run(make_engine())

        assert result.success is True
        assert "not found" in result.detail

    @patch("tracewipe.runner.system.run_command")
    @patch("tracewipe.runner.system.command_exists", return_value=True)
    def test_dry_run(
        self, mock_exists: MagicMock, mock_run: MagicMock, make_engine: EngineFactory
    ) -> None:
        """Dry-run never calls journalctl."""
        result = JournalRotateAction().run(make_engine(dry_run=True))

        assert result.dry_run is True
        mock_run.assert_not_called()

    @patch("tracewipe.runner.system.run_command")
    @patch("tracewipe.runner.system.command_exists", return_value=True)
    def test_rotates_then_vacuums(
        self, mock_exists: MagicMock, mock_run: MagicMock, make_engine: EngineFactory
    ) -> None:
        """Both commands run in order without a timeout."""
        mock_run.return_value = CommandResult(args=("journalctl",), returncode=0)

        result = JournalRotateAction().run(make_engine())

        assert result.success is True
        commands = [c.args[0] for c in mock_run.call_args_list]
        assert commands == [
            ["journalctl", "--rotate"],
            ["journalctl", "--vacuum-time=1s"],
        ]
        assert all(c.kwargs["timeout"] is None for c in mock_run.call_args_list)

    @patch("tracewipe.runner.system.run_command")
    @patch("tracewipe.runner.system.command_exists", return_value=True)
    def test_stops_on_failure(
        self, mock_exists: MagicMock, mock_run: MagicMock, make_engine: EngineFactory
    ) -> None:
        """A failing rotate is reported and vacuum is not attempted."""
        mock_run.return_value = CommandResult(
            args=("journalctl",), returncode=1, stderr="Access denied"
        )

        result = JournalRotateAction().run(make_engine())

        assert result.success is False
        assert result.error == "Access denied"
        assert mock_run.call_count == 1

    @patch("tracewipe.runner.system.run_command", side_effect=subprocess.SubprocessError("x"))
    @patch("tracewipe.runner.system.command_exists", return_value=True)
    def test_launch_error(
        self, mock_exists: MagicMock, mock_run: MagicMock, make_engine: EngineFactory
    ) -> None:
        """Errors launching journalctl are reported, not raised."""
        result = JournalRotateAction().run(make_engine())

        assert result.success is False


class TestDropCachesAction:
    """Tests for DropCachesAction."""

    @patch("tracewipe.runner.system.os.sync")
    def test_writes_three(
        self, mock_sync: MagicMock, make_engine: EngineFactory, tmp_path: Path
    ) -> None:
        """Dirty pages are flushed, then all caches dropped."""
        target = tmp_path / "drop_caches"

        result = DropCachesAction(str(target)).run(make_engine())

        assert result.success is True
        mock_sync.assert_called_once()
        assert target.read_text() == "3\n"

    def test_dry_run(self, make_engine: EngineFactory, tmp_path: Path) -> None:
        """Dry-run writes nothing."""
        target = tmp_path / "drop_caches"

        result = DropCachesAction(str(target)).run(make_engine(dry_run=True))

        assert result.dry_run is True
        assert not target.exists()

    @patch("tracewipe.runner.system.os.sync")
    def test_write_failure(
        self, mock_sync: MagicMock, make_engine: EngineFactory, tmp_path: Path
    ) -> None:
        """An unwritable interface is reported, not raised."""
        result = DropCachesAction(str(tmp_path / "missing" / "drop_caches")).run(make_engine())

        assert result.success is False
        assert result.error is not None


class TestDefaultActions:
    """Tests for default_actions."""

    def test_all(self) -> None:
        """All actions in execution order."""
        names = [a.name for a in default_actions()]
        assert names == ["temp-cleanup", "journal-rotate", "drop-caches"]

    def test_skips(self) -> None:
        """Individual actions can be left out."""
        names = [a.name for a in default_actions(temp=False, caches=False)]
        assert names == ["journal-rotate"]
