#!/usr/bin/env python3
"""
claude-run CLI entry point.

Usage:
    claude-run                        # Interactive setup wizard
    claude-run --provider glm         # Skip the provider question
    claude-run --mode perm            # Skip the mode question
    claude-run --no-launch            # Never offer to start claude
    claude-run --list-providers       # List known providers
    claude-run --show-config          # Show config locations and saved settings
    claude-run --test                 # Check the saved endpoint and key
    claude-run --reset                # Forget saved settings
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.markup import escape

from claude_run.config import Settings, load_settings
from claude_run.display import display_config, display_providers, get_console, set_theme
from claude_run.display.console import reset_console

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="claude-run",
        description="Pick a model provider and export its environment for the claude CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--provider",
        type=str,
        metavar="PROVIDER_ID",
        help="Provider to configure (skips the provider question)",
    )

    parser.add_argument(
        "--mode",
        choices=["temp", "perm"],
        help="temp: current session only; perm: persist for new terminals",
    )

    parser.add_argument(
        "--no-launch",
        action="store_true",
        help="Do not offer to launch the tool after setup",
    )

    parser.add_argument(
        "--command",
        type=str,
        metavar="CMD",
        help="Tool to launch (default: $CLAUDE_RUN_COMMAND or 'claude')",
    )

    # Info commands
    parser.add_argument(
        "--list-providers",
        action="store_true",
        help="List known providers and exit",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show configuration locations and saved settings, then exit",
    )

    parser.add_argument(
        "--test",
        action="store_true",
        help="Test the saved endpoint and API key, then exit",
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Forget saved settings and remove the shell profile block",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if verbose else logging.WARNING,
    )
    for noisy_logger in ("httpx", "httpcore"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def apply_args_to_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Apply command line arguments to settings."""
    if getattr(args, "verbose", False):
        settings.verbose = True

    command_arg = getattr(args, "command", None)
    if command_arg:
        settings.command = command_arg.strip()

    if getattr(args, "no_launch", False):
        settings.offer_launch = False

    return settings


def show_version() -> None:
    from claude_run import __version__

    print(f"claude-run version {__version__}")


def show_config_info(settings: Settings) -> None:
    store = settings.open_store()
    display_config(
        settings.config_dir,
        settings.config_file,
        settings.providers_file,
        store.saved_settings(settings.providers),
    )


def check_saved_connection(settings: Settings) -> int:
    """Check the saved endpoint and key."""
    from claude_run.setup.connection import check_connection

    console = get_console()
    saved = settings.open_store().saved_settings(settings.providers)
    if saved is None:
        console.print("[error]Error: no saved configuration[/error]")
        console.print("Run 'claude-run' to set one up")
        return 1

    console.print(f"\nTesting provider: [highlight]{escape(saved.provider_name)}[/highlight]")
    console.print(f"  URL: {escape(saved.base_url)}")
    console.print("\nConnecting...")

    success, message = check_connection(saved.base_url, saved.api_key)
    if success:
        console.print(f"\n[success]\\[SUCCESS][/success] {escape(message)}")
        return 0
    console.print(f"\n[error]\\[FAILED][/error] {escape(message)}")
    return 1


def reset_saved(settings: Settings) -> int:
    """Forget saved answers and undo the shell profile change."""
    from claude_run.environment import is_windows, remove_from_shell_profile

    console = get_console()
    store = settings.open_store()
    if store.reset():
        console.print(f"[success]Removed saved settings ({settings.config_file})[/success]")
    else:
        console.print(f"[warning]Could not remove {settings.config_file}[/warning]")

    if is_windows():
        console.print(
            "[muted]Variables set with setx stay in your user environment; "
            "remove them from System Properties > Environment Variables[/muted]"
        )
        return 0

    for profile in remove_from_shell_profile():
        console.print(f"[success]Cleaned {profile}[/success]")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        show_version()
        return 0

    settings = load_settings()
    settings = apply_args_to_settings(args, settings)

    configure_logging(settings.verbose)
    set_theme(settings.theme)
    reset_console()

    if args.list_providers:
        display_providers(settings.providers)
        return 0

    if args.show_config:
        show_config_info(settings)
        return 0

    if args.test:
        return check_saved_connection(settings)

    if args.reset:
        return reset_saved(settings)

    if args.provider and args.provider not in settings.providers:
        console = get_console()
        console.print(f"[error]Error: Provider '{escape(args.provider)}' not found[/error]")
        console.print("\nAvailable providers:")
        for provider_id in settings.providers.ids():
            console.print(f"  - {provider_id}")
        return 1

    from claude_run.setup.wizard import run_setup_wizard

    return run_setup_wizard(settings, provider_id=args.provider, mode=args.mode)


if __name__ == "__main__":
    sys.exit(main())
