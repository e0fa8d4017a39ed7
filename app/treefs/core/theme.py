"""Console colors for the treefs CLI.

The palette lives on :class:`ThemeColors`. Any subset of it can be
replaced from a ``[colors]`` table in ~/.config/treefs/theme.toml:

    [colors]
    directory = "#5fafff"
    error = "#ff5f5f"
"""

import logging
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from treefs.core.xdg import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Palette used for tables and status messages.

    Every value is a hex color, either #RGB or #RRGGBB.
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#e6e6e6"
    muted: str = "#8a939b"
    accent: str = "#4fb0a5"
    border: str = "#3a5566"

    success: str = "#3fbf7f"
    warning: str = "#e8b04a"
    error: str = "#e8506e"
    info: str = "#3fb8d0"

    directory: str = "#4a9fe0"
    file: str = "#e6e6e6"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        """Accept only #RGB or #RRGGBB strings."""
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the string entries of the ``[colors]`` table.

    Returns:
        Color overrides, or None if the file is missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            colors = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Build the palette, applying overrides from ``path``.

    Args:
        path: Theme file. Defaults to the user theme path.

    Returns:
        ThemeColors; the defaults if any override is invalid.
    """
    overrides = _load_toml_colors(path or get_theme_path()) or {}
    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map the palette onto the Rich style names used by the CLI."""
    colors = colors or load_theme()
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "border": colors.border,
            "bold_header": f"bold {colors.accent}",
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "entry.dir": f"bold {colors.directory}",
            "entry.file": colors.file,
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, building it once per process."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
