"""Colour theme for terminal output.

Colours come from the bundled ``data/theme.toml``; any subset can be
overridden in ~/.config/ovlspace/theme.toml. Each usage severity gets its
own style so reports can be coloured by ``severity.<level>``.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from ovlspace.core.paths import get_theme_path

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colours (#RGB or #RRGGBB) used by the CLI."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    severity_ok: str = "#03b971"
    severity_warning: str = "#f5b332"
    severity_critical: str = "#f53263"
    severity_unknown: str = "#b2bec3"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = value.strip()
        if not color.startswith("#"):
            raise ValueError(f"{info.field_name}: color must start with '#'")
        digits = color[1:]
        if len(digits) not in (3, 6):
            raise ValueError(f"{info.field_name}: color must be #RGB or #RRGGBB format")
        if any(c not in "0123456789abcdefABCDEF" for c in digits):
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'")
        return color


def get_bundled_theme_path() -> Path:
    """Location of the theme shipped with the package."""
    return Path(str(resources.files("ovlspace.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        Colour names mapped to values, or None if the file is missing,
        unreadable or malformed.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled theme with the user's overrides.

    An invalid merged theme falls back to the built-in defaults.
    """
    colors = _load_toml_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme missing, the installation may be broken")
        colors = {}

    overrides = _load_toml_colors(get_theme_path())
    if overrides:
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme.

    Args:
        colors: Colours to use. Loaded from the theme files if None.
    """
    c = colors or load_theme()
    return Theme(
        {
            "text": c.text,
            "muted": c.muted,
            "dim": c.muted,
            "header": c.header,
            "bold_header": f"bold {c.header}",
            "border": c.border,
            "success": c.success,
            "warning": c.warning,
            "error": f"bold {c.error}",
            "info": c.info,
            "severity.ok": c.severity_ok,
            "severity.warning": f"bold {c.severity_warning}",
            "severity.critical": f"bold reverse {c.severity_critical}",
            "severity.unknown": c.severity_unknown,
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
