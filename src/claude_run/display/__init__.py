"""Display module for claude-run.

This module provides themed console output and rendering helpers.
"""

from claude_run.display.console import get_console, reset_console
from claude_run.display.formatting import (
    display_config,
    display_header,
    display_providers,
    display_saved,
    display_summary,
)
from claude_run.display.theme import (
    THEMES,
    ColorPalette,
    Theme,
    get_current_theme,
    reset_theme,
    set_theme,
)

__all__ = [
    "get_console",
    "reset_console",
    "display_config",
    "display_header",
    "display_providers",
    "display_saved",
    "display_summary",
    "THEMES",
    "ColorPalette",
    "Theme",
    "get_current_theme",
    "reset_theme",
    "set_theme",
]
