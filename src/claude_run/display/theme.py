"""Color themes for console output."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ColorPalette:
    """Color palette for a UI theme."""

    primary: str = "cyan"
    success: str = "green"
    error: str = "red"
    warning: str = "yellow"
    info: str = "blue"
    muted: str = "bright_black"
    highlight: str = "yellow"


@dataclass
class Theme:
    """A named palette."""

    name: str
    palette: ColorPalette


THEMES: dict[str, Theme] = {
    "default": Theme(name="default", palette=ColorPalette()),
    "light": Theme(
        name="light",
        palette=ColorPalette(
            primary="blue",
            warning="dark_orange",
            muted="grey50",
            highlight="magenta",
        ),
    ),
    "minimal": Theme(
        name="minimal",
        palette=ColorPalette(
            primary="default",
            success="default",
            error="bold",
            warning="default",
            info="default",
            muted="dim",
            highlight="bold",
        ),
    ),
}

_current_theme: Optional[Theme] = None


def set_theme(name: str) -> Theme:
    """Set the current theme by name; unknown names fall back to default."""
    global _current_theme
    _current_theme = THEMES.get(name, THEMES["default"])
    return _current_theme


def get_current_theme() -> Theme:
    if _current_theme is None:
        return set_theme("default")
    return _current_theme


def reset_theme() -> None:
    global _current_theme
    _current_theme = None
