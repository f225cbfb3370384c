"""Console factory with theme support.

All user-facing output goes through the singleton returned by get_console().
Markup uses the semantic style names: primary, success, error, warning,
info, muted and highlight.
"""

from typing import Optional

from rich.console import Console
from rich.theme import Theme as RichTheme

from claude_run.display.theme import get_current_theme

_console_instance: Optional[Console] = None


def get_console() -> Console:
    """Get the singleton Console instance with current theme applied."""
    global _console_instance
    if _console_instance is None:
        _console_instance = _create_themed_console()
    return _console_instance


def _create_themed_console() -> Console:
    palette = get_current_theme().palette
    rich_theme = RichTheme(
        {
            "primary": palette.primary,
            "success": palette.success,
            "error": palette.error,
            "warning": palette.warning,
            "info": palette.info,
            "muted": palette.muted,
            "highlight": palette.highlight,
        }
    )
    return Console(theme=rich_theme, highlight=False)


def reset_console() -> None:
    """Reset the console instance (call after theme change)."""
    global _console_instance
    _console_instance = None
