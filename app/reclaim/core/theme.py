"""Color theme for the reclaim CLI.

Colors come from the bundled ``reclaim/data/theme.toml``; any key under
``[colors]`` in ~/.config/reclaim/theme.toml overrides the bundled value.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from reclaim.core.paths import get_config_dir
from reclaim.models.record import Category

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the console."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#d0d0d8"
    muted: str = "#8a8a96"
    header: str = "#e07020"
    border: str = "#5a1f1f"

    success: str = "#43d17a"
    warning: str = "#e07020"
    error: str = "#cc3333"
    info: str = "#5b8fd5"

    category_duplicate: str = "#c0392b"
    category_log: str = "#e07020"
    category_temp: str = "#5b8fd5"
    category_empty: str = "#cc4444"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a #RGB or #RRGGBB string."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        digits = color[1:]
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if any(c not in "0123456789abcdefABCDEF" for c in digits):
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color

    def category_color(self, category: Category) -> str:
        """Color assigned to a record category."""
        return str(getattr(self, f"category_{category.value}"))


def get_user_theme_path() -> Path:
    """Get the user theme override path (~/.config/reclaim/theme.toml)."""
    return get_config_dir() / "theme.toml"


def _read_colors(path: Path) -> dict[str, str]:
    """Read the string values of the ``[colors]`` table of a TOML file.

    A missing, unreadable or malformed file yields an empty mapping.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load bundled colors merged with the user's overrides.

    Returns:
        Validated ThemeColors; built-in defaults if the merge is invalid.
    """
    bundled = resources.files("reclaim.data").joinpath("theme.toml")
    colors = _read_colors(Path(str(bundled)))
    colors.update(_read_colors(get_user_theme_path()))

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Build the Rich Theme with base, semantic and per-category styles."""
    styles = {
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
    }
    for category in Category:
        styles[f"category.{category.value}"] = colors.category_color(category)
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme(load_theme())
