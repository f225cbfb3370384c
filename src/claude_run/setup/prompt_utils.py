"""Terminal prompt helpers.

Interactive terminals get questionary prompts. When stdin or stdout is not
a TTY (pipes, CI, some IDE consoles) the helpers fall back to numbered menus
and plain input(), so the wizard can still be driven from a script.

All helpers raise SetupCancelled on Ctrl+C or EOF when allow_cancel is set.
"""

import getpass
import sys
from typing import Any, Callable, Optional, Sequence, Union

import questionary
from rich.markup import escape

from claude_run.display.console import get_console

Validator = Callable[[str], Union[bool, str]]


class SetupCancelled(Exception):
    """Raised when the user cancels the setup flow (e.g., Ctrl+C)."""

    pass


def safe_prompt(
    prompt: str,
    default: str = "",
    password: bool = False,
    show_default: bool = True,
    allow_cancel: bool = False,
) -> str:
    """
    Plain input prompt.

    Args:
        prompt: The prompt text to display
        default: Default value if user presses Enter
        password: If True, hide input (for API keys)
        show_default: If True, show default value in prompt
        allow_cancel: If True, raise SetupCancelled on Ctrl+C instead of
                      returning the default value

    Returns:
        User input or default value
    """
    if password:
        try:
            result = getpass.getpass(f"{prompt}: ")
            return result if result else default
        except (EOFError, KeyboardInterrupt):
            print()
            if allow_cancel:
                raise SetupCancelled()
            return default

    if default and show_default:
        full_prompt = f"{prompt} ({default}): "
    else:
        full_prompt = f"{prompt}: "

    try:
        result = input(full_prompt).strip()
        return result if result else default
    except (EOFError, KeyboardInterrupt):
        print()
        if allow_cancel:
            raise SetupCancelled()
        return default


def safe_confirm(
    prompt: str,
    default: bool = False,
    allow_cancel: bool = False,
) -> bool:
    """Plain yes/no prompt; Enter keeps the default."""
    default_hint = "[Y/n]" if default else "[y/N]"

    try:
        result = input(f"{prompt} {default_hint}: ").strip().lower()
        if not result:
            return default
        return result in ("y", "yes", "true", "1")
    except (EOFError, KeyboardInterrupt):
        print()
        if allow_cancel:
            raise SetupCancelled()
        return default


def is_interactive() -> bool:
    """Check if stdin/stdout support interactive prompts."""
    return (
        hasattr(sys.stdin, "isatty")
        and sys.stdin.isatty()
        and hasattr(sys.stdout, "isatty")
        and sys.stdout.isatty()
    )


def _choice_items(choices: Sequence[Any]) -> list[tuple[str, str]]:
    """Normalize choices to (value, title) pairs."""
    items: list[tuple[str, str]] = []
    for choice in choices:
        if hasattr(choice, "value") and hasattr(choice, "title"):
            items.append((str(choice.value), str(choice.title)))
        else:
            items.append((str(choice), str(choice)))
    return items


def _fallback_select(
    message: str,
    choices: Sequence[Any],
    default: Optional[str] = None,
    allow_cancel: bool = False,
) -> Optional[str]:
    """Numbered menu for non-interactive mode. Invalid input keeps the default."""
    console = get_console()
    console.print(f"\n[bold]{message}[/bold]")

    items = _choice_items(choices)

    default_index = 1
    for i, (value, _) in enumerate(items, 1):
        if value == default:
            default_index = i
            break

    for i, (value, title) in enumerate(items, 1):
        marker = " \\[default]" if i == default_index else ""
        console.print(f"  \\[{i}] {title}{marker}")

    selection = safe_prompt("Enter number", default=str(default_index), allow_cancel=allow_cancel)
    try:
        idx = int(selection) - 1
        if 0 <= idx < len(items):
            return items[idx][0]
    except ValueError:
        pass

    return items[default_index - 1][0] if items else default


def _fallback_text(
    message: str,
    default: str = "",
    password: bool = False,
    validate: Optional[Validator] = None,
    allow_cancel: bool = False,
) -> str:
    """Ask until the validator accepts the answer."""
    while True:
        try:
            result = safe_prompt(
                message,
                default=default,
                password=password,
                allow_cancel=True,
            )
        except SetupCancelled:
            if allow_cancel:
                raise
            # stdin closed or interrupted: nothing more to read
            return default

        if validate is None:
            return result

        verdict = validate(result)
        if verdict is True:
            return result
        get_console().print(f"[error]{escape(str(verdict))}[/error]")


def q_select(
    message: str,
    choices: Sequence[Any],
    default: Optional[str] = None,
    allow_cancel: bool = False,
) -> Optional[str]:
    """
    Select prompt with non-TTY fallback.

    Args:
        message: Prompt message
        choices: List of choices (strings or questionary.Choice objects)
        default: Value to pre-select
        allow_cancel: If True, raise SetupCancelled on Ctrl+C

    Returns:
        Selected value or None if cancelled
    """
    if not is_interactive():
        return _fallback_select(message, choices, default, allow_cancel=allow_cancel)

    try:
        result = questionary.select(message, choices=choices, default=default).ask()
    except KeyboardInterrupt:
        print()
        result = None

    if result is None and allow_cancel:
        raise SetupCancelled()
    return result


def q_text(
    message: str,
    default: str = "",
    validate: Optional[Validator] = None,
    allow_cancel: bool = False,
) -> str:
    """Free text prompt with optional validation."""
    if not is_interactive():
        return _fallback_text(message, default=default, validate=validate, allow_cancel=allow_cancel)

    try:
        kwargs: dict = {"default": default}
        if validate is not None:
            kwargs["validate"] = validate
        result = questionary.text(message, **kwargs).ask()
    except KeyboardInterrupt:
        print()
        result = None

    if result is None:
        if allow_cancel:
            raise SetupCancelled()
        return default
    return result.strip()


def q_password(
    message: str,
    validate: Optional[Validator] = None,
    allow_cancel: bool = False,
) -> str:
    """Masked input prompt with optional validation."""
    if not is_interactive():
        return _fallback_text(message, password=True, validate=validate, allow_cancel=allow_cancel)

    try:
        kwargs: dict = {}
        if validate is not None:
            kwargs["validate"] = validate
        result = questionary.password(message, **kwargs).ask()
    except KeyboardInterrupt:
        print()
        result = None

    if result is None:
        if allow_cancel:
            raise SetupCancelled()
        return ""
    return result


def q_confirm(
    message: str,
    default: bool = False,
    allow_cancel: bool = False,
) -> bool:
    """Yes/no prompt with non-TTY fallback."""
    if not is_interactive():
        return safe_confirm(message, default=default, allow_cancel=allow_cancel)

    try:
        result = questionary.confirm(message, default=default).ask()
    except KeyboardInterrupt:
        print()
        result = None

    if result is None:
        if allow_cancel:
            raise SetupCancelled()
        return default
    return result
