"""Unit tests for persistent settings."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from tracewipe.core.settings import (
    DEFAULT_HISTORY_PATTERNS,
    Settings,
    SettingsError,
    SettingsParseError,
    load_settings,
    save_settings,
    settings_to_dict,
)


class TestSettingsModel:
    """Tests for Settings validation."""

    def test_defaults(self) -> None:
        """Defaults cover the usual homes and patterns."""
        settings = Settings()

        assert settings.overwrite_passes == 3
        assert settings.history_patterns == list(DEFAULT_HISTORY_PATTERNS)
        assert settings.search_roots == ["/home", "/root"]
        assert settings.extra_targets == []
        assert settings.backup_directory.name == "backups"

    @pytest.mark.parametrize("passes", [0, 2, 36])
    def test_pass_bounds(self, passes: int) -> None:
        """Pass counts outside 3-35 are rejected."""
        with pytest.raises(ValidationError):
            Settings(overwrite_passes=passes)

    def test_relative_protected_prefix_rejected(self) -> None:
        """Protected prefixes must be absolute."""
        with pytest.raises(ValidationError, match="must be absolute"):
            Settings(extra_protected=["srv/data"])

    def test_unknown_key_rejected(self) -> None:
        """Misspelled keys are errors."""
        with pytest.raises(ValidationError):
            Settings(overwrite_pass=5)  # type: ignore[call-arg]

    def test_lists_not_shared(self) -> None:
        """Each instance gets its own list defaults."""
        first = Settings()
        first.extra_targets.append("/x")

        assert Settings().extra_targets == []


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing file is not an error."""
        assert load_settings(tmp_path / "config.toml") == Settings()

    def test_partial_file(self, tmp_path: Path) -> None:
        """Keys not in the file keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text('overwrite_passes = 7\nextra_targets = ["/opt/app/history"]\n')

        settings = load_settings(path)

        assert settings.overwrite_passes == 7
        assert settings.extra_targets == ["/opt/app/history"]
        assert settings.search_roots == ["/home", "/root"]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises SettingsParseError."""
        path = tmp_path / "config.toml"
        path.write_text("overwrite_passes = \n")

        with pytest.raises(SettingsParseError, match="Invalid TOML"):
            load_settings(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Values failing validation raise SettingsError."""
        path = tmp_path / "config.toml"
        path.write_text("overwrite_passes = 1\n")

        with pytest.raises(SettingsError, match="Invalid settings content"):
            load_settings(path)

    def test_default_location(self, tmp_path: Path) -> None:
        """Without a path the XDG location is used."""
        path = tmp_path / "config.toml"
        path.write_text("overwrite_passes = 4\n")

        with patch("tracewipe.core.settings.get_settings_path", return_value=path):
            assert load_settings().overwrite_passes == 4


class TestSaveSettings:
    """Tests for save_settings."""

    def test_writes_toml(self, tmp_path: Path) -> None:
        """Saved settings are valid TOML with every key."""
        path = tmp_path / "nested" / "config.toml"
        settings = Settings(backup_directory=tmp_path / "b", overwrite_passes=9)

        saved = save_settings(settings, path)

        assert saved == path
        data = tomllib.loads(path.read_text())
        assert data == settings_to_dict(settings)
        assert data["backup_directory"] == str(tmp_path / "b")

    def test_reload_matches(self, tmp_path: Path) -> None:
        """Loading what was saved gives equal settings."""
        path = tmp_path / "config.toml"
        settings = Settings(
            backup_directory=tmp_path / "b", extra_protected=["/srv/keep"]
        )

        save_settings(settings, path)

        assert load_settings(path) == settings

    def test_no_temp_file_left(self, tmp_path: Path) -> None:
        """The atomic write leaves only the target file."""
        path = tmp_path / "config.toml"

        save_settings(Settings(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_unwritable_parent(self, tmp_path: Path) -> None:
        """A parent that cannot be created raises SettingsError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        with pytest.raises(SettingsError, match="Cannot create"):
            save_settings(Settings(), blocker / "config.toml")
