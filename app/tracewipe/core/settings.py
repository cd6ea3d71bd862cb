"""Persistent tracewipe settings.

Settings live in ~/.config/tracewipe/config.toml and supply defaults that
the command line can override: where backups go, how many overwrite
passes to request, which roots to search for history files, and any
extra targets or protected prefixes.

A missing settings file is not an error; the defaults apply.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tracewipe.core.paths import get_default_backup_dir, get_settings_path

DEFAULT_OVERWRITE_PASSES = 3

DEFAULT_HISTORY_PATTERNS: tuple[str, ...] = ("*history*", "*_hist")

DEFAULT_SEARCH_ROOTS: tuple[str, ...] = ("/home", "/root")


class Settings(BaseModel):
    """User-editable tracewipe settings.

    Attributes:
        backup_directory: Where backups are written when enabled.
        overwrite_passes: Total overwrite passes (the last one writes zeros).
        history_patterns: Glob patterns matched against file names during search.
        search_roots: Directories walked during the history file search.
        extra_targets: Additional paths always handed to the erasure engine.
        extra_protected: Additional path prefixes that must never be touched.
    """

    model_config = ConfigDict(extra="forbid")

    backup_directory: Annotated[
        Path,
        Field(default_factory=get_default_backup_dir, description="Backup directory"),
    ]
    overwrite_passes: Annotated[
        int,
        Field(ge=3, le=35, description="Overwrite passes (3-35)"),
    ] = DEFAULT_OVERWRITE_PASSES
    history_patterns: Annotated[
        list[str],
        Field(description="File name patterns for the history search"),
    ] = list(DEFAULT_HISTORY_PATTERNS)
    search_roots: Annotated[
        list[str],
        Field(description="Directories walked by the history search"),
    ] = list(DEFAULT_SEARCH_ROOTS)
    extra_targets: Annotated[
        list[str],
        Field(description="Additional candidate paths"),
    ] = []
    extra_protected: Annotated[
        list[str],
        Field(description="Additional protected path prefixes"),
    ] = []

    @field_validator("extra_protected")
    @classmethod
    def validate_absolute(cls, v: list[str]) -> list[str]:
        """Protected prefixes must be absolute paths."""
        for prefix in v:
            if not prefix.startswith("/"):
                msg = f"protected prefix must be absolute: {prefix!r}"
                raise ValueError(msg)
        return v


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default location.

    Returns:
        Validated Settings object. Defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file is unreadable or fails validation.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Destination path. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SettingsError(f"Cannot create {settings_path.parent}: {e}") from e

    data = settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    Args:
        settings: The Settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return {
        "backup_directory": str(settings.backup_directory),
        "overwrite_passes": settings.overwrite_passes,
        "history_patterns": list(settings.history_patterns),
        "search_roots": list(settings.search_roots),
        "extra_targets": list(settings.extra_targets),
        "extra_protected": list(settings.extra_protected),
    }
