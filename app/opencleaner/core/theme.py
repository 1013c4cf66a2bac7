"""Console color theme.

Colors come from the bundled ``data/theme.toml``. Any of them can be
overridden in ``~/.config/opencleaner/theme.toml``; keys missing there
keep their bundled value.
"""

import logging
import string
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from opencleaner.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILE_NAME = "theme.toml"

# Rich style name -> (color field, style prefix)
STYLE_MAP: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold "),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold "),
    "info": ("info", ""),
    "risk_safe": ("risk_safe", ""),
    "risk_caution": ("risk_caution", ""),
    "risk_risky": ("risk_risky", "bold "),
}


class ThemeColors(BaseModel):
    """Validated palette. Every value is a ``#RGB`` or ``#RRGGBB`` hex code."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # One color per RiskLevel, looked up as f"risk_{level.value}"
    risk_safe: str = "#03b971"
    risk_caution: str = "#faf870"
    risk_risky: str = "#f53263"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = v.strip()
        if not color.startswith("#"):
            raise ValueError(f"{info.field_name}: color must start with '#'")
        digits = color[1:]
        if len(digits) not in (3, 6):
            raise ValueError(f"{info.field_name}: color must be #RGB or #RRGGBB format")
        if any(ch not in string.hexdigits for ch in digits):
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'")
        return color


def get_user_theme_path() -> Path:
    """Location of the optional user override file."""
    return get_config_dir() / THEME_FILE_NAME


def get_bundled_theme_path() -> Path:
    """Location of the theme shipped inside the package."""
    return Path(str(resources.files("opencleaner.data").joinpath(THEME_FILE_NAME)))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are dropped. Returns None when the file is absent,
    unreadable or not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse theme file %s: %s", path, e)
        print(f"Warning: Failed to parse {path}: {e}", file=sys.stderr)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled palette with the user's overrides.

    An override that fails validation discards the whole merge in favour
    of the built-in defaults.
    """
    merged = _load_toml_colors(get_bundled_theme_path())
    if merged is None:
        logger.error("Bundled theme is missing or unreadable")
        merged = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        merged.update(overrides)

    try:
        return ThemeColors(**merged)
    except ValueError as e:
        logger.warning("Invalid theme, using defaults: %s", e)
        print(f"Warning: Invalid theme configuration: {e}", file=sys.stderr)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme from a palette (loaded from disk when omitted)."""
    palette = colors if colors is not None else load_theme()
    return Theme(
        {
            style: f"{prefix}{getattr(palette, field)}"
            for style, (field, prefix) in STYLE_MAP.items()
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the process-wide theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Rebuild the process-wide theme from the theme files."""
    global _cached_theme
    _cached_theme = get_rich_theme()
    return _cached_theme
