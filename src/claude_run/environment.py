"""Export the selected settings to the environment.

The current process always gets the variables, so a tool launched from here
sees them immediately. Permanent mode additionally persists them: ``setx`` on
Windows, a marker-fenced block in the user's shell profile elsewhere.
"""

import logging
import os
import platform
import re
import shlex
import subprocess
from datetime import datetime
from pathlib import Path
from typing import MutableMapping, Optional

from rich.markup import escape

from claude_run.config.env_settings import EnvSettings
from claude_run.display.console import get_console

logger = logging.getLogger(__name__)

SHELL_PROFILES = (".bashrc", ".zshrc", ".bash_profile", ".profile")
DEFAULT_PROFILE = ".bashrc"

# Profiles may hold bytes that are not UTF-8; they are written back unchanged
PROFILE_ENCODING = "utf-8"
PROFILE_ERRORS = "surrogateescape"

BLOCK_BEGIN = "# >>> claude-run >>>"
BLOCK_END = "# <<< claude-run <<<"

_BLOCK_PATTERN = re.compile(
    r"\n?" + re.escape(BLOCK_BEGIN) + r".*?" + re.escape(BLOCK_END) + r"\n?",
    re.DOTALL,
)


def is_windows() -> bool:
    return platform.system() == "Windows"


def apply_to_process(
    settings: EnvSettings,
    environ: Optional[MutableMapping[str, str]] = None,
) -> None:
    """Set the variables for this process and its children."""
    if environ is None:
        environ = os.environ
    for name, value in settings.env_vars().items():
        environ[name] = value


def _setx(name: str, value: str) -> bool:
    """Persist one user variable on Windows."""
    try:
        result = subprocess.run(
            ["setx", name, value],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        logger.debug(f"setx {name} could not start: {e}")
        return False

    if result.returncode != 0:
        logger.debug(f"setx {name} exited with {result.returncode}")
        return False
    return True


def set_windows_env(settings: EnvSettings) -> bool:
    """Run setx for each variable, stopping at the first failure."""
    for name, value in settings.env_vars().items():
        if not _setx(name, value):
            get_console().print(
                "[error]Permanent setting failed, administrator rights may be required[/error]"
            )
            return False
    return True


def find_shell_profile(home: Optional[Path] = None) -> Path:
    """First existing profile among SHELL_PROFILES, else ~/.bashrc."""
    home = home or Path.home()
    for name in SHELL_PROFILES:
        candidate = home / name
        if candidate.exists():
            return candidate
    return home / DEFAULT_PROFILE


def build_profile_block(settings: EnvSettings, timestamp: Optional[str] = None) -> str:
    """Shell lines exporting the settings, fenced by marker comments."""
    timestamp = timestamp or datetime.now().astimezone().isoformat(timespec="seconds")
    lines = [
        BLOCK_BEGIN,
        f"# Claude Code environment variables - {timestamp}",
    ]
    for name, value in settings.env_vars().items():
        lines.append(f"export {name}={shlex.quote(value)}")
    lines.append(BLOCK_END)
    return "\n".join(lines) + "\n"


def strip_profile_block(content: str) -> str:
    """Remove any block previously written by this tool."""
    stripped = _BLOCK_PATTERN.sub("\n", content).rstrip("\n")
    return stripped + "\n" if stripped else ""


def _read_profile(path: Path) -> str:
    return path.read_text(encoding=PROFILE_ENCODING, errors=PROFILE_ERRORS)


def _write_profile(path: Path, content: str) -> None:
    path.write_text(content, encoding=PROFILE_ENCODING, errors=PROFILE_ERRORS)


def add_to_shell_profile(
    settings: EnvSettings,
    home: Optional[Path] = None,
) -> Optional[Path]:
    """
    Write the export block to the user's shell profile.

    An earlier block from this tool is replaced rather than duplicated.

    Returns:
        The profile path, or None when it could not be written.
    """
    console = get_console()
    profile_path = find_shell_profile(home)

    try:
        content = _read_profile(profile_path) if profile_path.exists() else ""
        content = strip_profile_block(content)
        separator = "\n" if content else ""
        _write_profile(profile_path, content + separator + build_profile_block(settings))
    except (OSError, UnicodeError) as e:
        console.print(
            f"[error]Could not write {escape(str(profile_path))}: {escape(str(e))}[/error]"
        )
        return None

    console.print(f"[success]Added to {escape(str(profile_path))}[/success]")
    return profile_path


def remove_from_shell_profile(home: Optional[Path] = None) -> list[Path]:
    """Remove the managed block from every known profile. Returns the files changed."""
    home = home or Path.home()
    changed: list[Path] = []

    for name in SHELL_PROFILES:
        profile_path = home / name
        if not profile_path.exists():
            continue
        try:
            content = _read_profile(profile_path)
            if BLOCK_BEGIN not in content:
                continue
            _write_profile(profile_path, strip_profile_block(content))
            changed.append(profile_path)
        except (OSError, UnicodeError) as e:
            logger.warning(f"Could not clean {profile_path}: {e}")

    return changed


def set_permanent(settings: EnvSettings, home: Optional[Path] = None) -> bool:
    """Persist the variables beyond this process. Failures are reported, not raised."""
    if is_windows():
        return set_windows_env(settings)
    return add_to_shell_profile(settings, home=home) is not None
