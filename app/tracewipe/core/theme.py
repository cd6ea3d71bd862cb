"""Colors for erasure outcomes and console messages.

The bundled data/theme.toml sets the defaults. A [colors] table in
~/.config/tracewipe/theme.toml may override any subset of them.
"""

import functools
import logging
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from tracewipe.core.paths import get_config_dir

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colors keyed by the style names used in tracewipe output."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # One per outcome kind in the results table
    erased: str = "#c1ff62"
    skipped: str = "#b2bec3"
    protected: str = "#d44ebc"
    dry_run: str = "#0e8ac8"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("color must be a string")
        color = value.strip()
        if not color.startswith("#"):
            raise ValueError(f"color {color!r} must start with '#'")
        digits = color[1:]
        if len(digits) not in (3, 6):
            raise ValueError(f"color {color!r} must be #RGB or #RRGGBB")
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"invalid hex color {color!r}") from None
        return color


def get_user_theme_path() -> Path:
    """Return the user theme file, next to settings.toml."""
    return get_config_dir() / "theme.toml"


def get_bundled_theme_path() -> Path:
    return Path(str(resources.files("tracewipe.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    A missing file gives an empty table. Unparsable files and non-string
    values are logged and ignored so a bad theme never stops a wipe.
    """
    try:
        with open(path, "rb") as f:
            table = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user theme over the bundled one.

    Returns:
        The merged colors, or the built-in defaults if they do not validate.
    """
    colors = {**_read_colors(get_bundled_theme_path()), **_read_colors(get_user_theme_path())}
    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Build the Rich styles referenced by console markup and outcome tables."""
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "erased": colors.erased,
            "skipped": colors.skipped,
            "protected": f"bold {colors.protected}",
            "dry_run": colors.dry_run,
        }
    )


@functools.cache
def get_theme() -> Theme:
    """Return the Rich theme, loaded once per process."""
    return get_rich_theme(load_theme())
