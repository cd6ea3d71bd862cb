"""Unit tests for the targets command."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from tracewipe.cli.main import app
from tracewipe.core.settings import Settings
from typer.testing import CliRunner, Result

runner = CliRunner()


def _invoke(candidates: list[str], args: list[str], tmp_path: Path) -> Result:
    settings = Settings(backup_directory=tmp_path / "backups", search_roots=[])
    with (
        patch("tracewipe.cli.commands.targets.load_settings", return_value=settings),
        patch("tracewipe.cli.commands.targets.TargetEnumerator") as mock_enum,
    ):
        mock_enum.return_value.enumerate.return_value = candidates
        return runner.invoke(app, ["targets", *args])


class TestTargetsCommand:
    """Tests for tracewipe targets."""

    def test_json_output(self, history_file: Path, tmp_path: Path) -> None:
        """JSON output describes each candidate's state and size."""
        candidates = [str(history_file), "/proc/1/status"]

        result = _invoke(candidates, ["--format", "json"], tmp_path)

        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert rows[0]["state"] == "file"
        assert rows[0]["size_bytes"] == 500
        assert rows[1]["state"] == "protected"

    def test_missing_hidden_by_default(self, tmp_path: Path) -> None:
        """Candidates that do not exist are hidden without --all."""
        missing = str(tmp_path / "nope")

        hidden = json.loads(_invoke([missing], ["-f", "json"], tmp_path).output)
        shown = json.loads(_invoke([missing], ["-f", "json", "--all"], tmp_path).output)

        assert hidden == []
        assert shown[0]["state"] == "missing"

    def test_read_only(self, history_file: Path, tmp_path: Path) -> None:
        """Listing never modifies candidates."""
        before = history_file.read_bytes()

        result = _invoke([str(history_file)], [], tmp_path)

        assert result.exit_code == 0
        assert "Wipe Candidates" in result.output
        assert "1 candidate(s)" in result.output
        assert history_file.read_bytes() == before

    def test_nothing_found(self, tmp_path: Path) -> None:
        """An empty candidate list is reported."""
        result = _invoke([], [], tmp_path)

        assert result.exit_code == 0
        assert "No history or log artifacts found." in result.output

    @patch("tracewipe.cli.commands.targets.is_protected_path", return_value=True)
    def test_extra_protected_passed(self, mock_protected: MagicMock, tmp_path: Path) -> None:
        """Configured protected prefixes are honored when listing."""
        keep = str(tmp_path / "srv")
        candidate = str(tmp_path / "srv" / "history")
        settings = Settings(backup_directory=tmp_path / "b", extra_protected=[keep])
        with (
            patch("tracewipe.cli.commands.targets.load_settings", return_value=settings),
            patch("tracewipe.cli.commands.targets.TargetEnumerator") as mock_enum,
        ):
            mock_enum.return_value.enumerate.return_value = [candidate]
            runner.invoke(app, ["targets", "-f", "json"])

        mock_protected.assert_called_once_with(candidate, (keep,))
