"""XDG-compliant path management for tracewipe.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/tracewipe/
- State: ~/.local/state/tracewipe/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "tracewipe"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/tracewipe/ (or XDG_CONFIG_HOME/tracewipe/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/tracewipe/ (or XDG_STATE_HOME/tracewipe/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/tracewipe/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_backup_dir() -> Path:
    """Get the default backup directory.

    Backups are flat files named after the original path, written only
    when backups are enabled for a run.

    Returns:
        Path to ~/.local/state/tracewipe/backups/.
    """
    return get_state_dir() / "backups"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_backup_dir(path: Path) -> Path:
    """Create a backup directory (and parents) if it doesn't exist.

    Args:
        path: Backup directory to create.

    Returns:
        The backup directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(path, "backup")
