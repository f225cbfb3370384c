"""Start the target CLI with the prepared environment."""

import logging
import os
import shutil
import subprocess
from typing import Mapping, Optional, Sequence

from claude_run.display.console import get_console

logger = logging.getLogger(__name__)

INSTALL_HINT = "npm install -g @anthropic-ai/claude-code"
COMMAND_NOT_FOUND = 127


def verification_commands(
    names: Sequence[str],
    windows: bool,
    permanent: bool = False,
) -> list[tuple[str, list[str]]]:
    """
    Shell lines that show the exported variables.

    Returns:
        List of (heading, commands) groups
    """
    python_check = [f'python -c "import os; print(os.environ.get(\'{n}\'))"' for n in names]
    posix_echo = [f"echo ${n}" for n in names]

    if windows:
        groups = [("In the current window (immediate):", python_check)]
        if permanent:
            groups.append(("In a new CMD window (permanent):", [f"echo %{n}%" for n in names]))
        return groups

    groups = [("In the current terminal (immediate):", posix_echo)]
    if permanent:
        groups.append(("In a new terminal (permanent):", posix_echo))
    return groups


def show_manual_instructions(command: str, names: Sequence[str] = ()) -> None:
    """Explain how to start the tool by hand."""
    console = get_console()
    console.print()
    console.print(f"[primary]Start {command} manually:[/primary]")
    console.print()
    console.print("[warning]In the current terminal run:[/warning]")
    console.print(f"  {command}")
    if names:
        console.print()
        console.print("[muted]Check the environment:[/muted]")
        for name in names:
            console.print(
                f"[muted]  python -c \"import os; print('set' if os.environ.get('{name}') "
                f"else 'not set')\"[/muted]"
            )


def _report_launch_failure(command: str, reason: str, names: Sequence[str]) -> None:
    console = get_console()
    console.print()
    console.print(f"[error]Could not start {command}:[/error] {reason}")
    console.print(f"[warning]Make sure {command} is installed and on your PATH[/warning]")
    console.print(f"[muted]   Try: {INSTALL_HINT}[/muted]")
    show_manual_instructions(command, names)


def launch(
    command: str = "claude",
    environ: Optional[Mapping[str, str]] = None,
    args: Sequence[str] = (),
    names: Sequence[str] = (),
) -> int:
    """
    Run the command in the foreground with the given environment.

    Args:
        command: Executable name or path
        environ: Environment for the child (default: current os.environ)
        args: Extra arguments passed to the command
        names: Variable names to mention in manual instructions

    Returns:
        Exit code of the command, or 127 if it could not be started
    """
    console = get_console()
    env = dict(os.environ if environ is None else environ)

    executable = shutil.which(command, path=env.get("PATH"))
    if executable is None:
        _report_launch_failure(command, "command not found", names)
        return COMMAND_NOT_FOUND

    console.print()
    console.print(f"[primary]Starting {command}...[/primary]")
    console.print(f"[muted]Environment is configured; {command} will use the current settings[/muted]")
    console.print()

    logger.debug(f"Launching {executable} {' '.join(args)}")
    try:
        completed = subprocess.run([executable, *args], env=env, check=False)
    except OSError as e:
        _report_launch_failure(command, str(e), names)
        return COMMAND_NOT_FOUND
    except KeyboardInterrupt:
        # Ctrl+C also reaches the child
        completed = None

    console.print()
    console.print(f"[primary]{command} exited[/primary]")
    return completed.returncode if completed is not None else 130
