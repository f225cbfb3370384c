"""Rendering of providers, summaries and saved configuration."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table

from claude_run.config.env_settings import EnvSettings, mask_secret
from claude_run.config.providers import ProviderRegistry
from claude_run.display.console import get_console

RULE = "=" * 32


def display_header(console: Optional[Console] = None) -> None:
    console = console or get_console()
    console.print(
        Panel.fit(
            "[primary][bold]Claude Code environment setup[/bold][/primary]\n\n"
            "[muted]Pick a provider, enter your key, and launch claude[/muted]",
            title="claude-run",
        )
    )
    console.print()


def display_providers(
    registry: ProviderRegistry,
    console: Optional[Console] = None,
) -> None:
    """Print the provider table."""
    console = console or get_console()

    table = Table(title="Providers", show_lines=False)
    table.add_column("ID", style="primary", no_wrap=True)
    table.add_column("Name")
    table.add_column("Base URL", style="info")
    table.add_column("Variables", style="muted")

    for provider in registry.providers.values():
        table.add_row(
            escape(provider.id),
            escape(provider.display_name),
            escape(provider.base_url) if provider.base_url else "(entered by you)",
            f"{provider.base_url_env}, {provider.api_key_env}",
        )

    console.print(table)


def display_summary(settings: EnvSettings, console: Optional[Console] = None) -> None:
    """Print the settings about to be applied. The key is never shown."""
    console = console or get_console()
    console.print()
    console.print(f"[primary]{RULE}[/primary]")
    console.print("[primary]Settings summary:[/primary]")
    console.print(f"  Provider: [highlight]{escape(settings.provider_name)}[/highlight]")
    console.print(f"  Base URL: [info]{escape(settings.base_url)}[/info]")
    console.print(f"  Mode: {settings.mode_label}")
    console.print(f"  API Key: [muted]{escape(mask_secret(settings.api_key))}[/muted]")
    console.print(f"[primary]{RULE}[/primary]")
    console.print()


def display_saved(last_used: dict, console: Optional[Console] = None) -> None:
    console = console or get_console()
    console.print("[success]Found saved configuration:[/success]")
    console.print(
        f"   Last used: [highlight]{escape(str(last_used.get('modelName', '?')))}[/highlight]"
        f" ({escape(str(last_used.get('mode', '?')))})"
    )
    console.print(f"   Time: {escape(str(last_used.get('timestamp', '?')))}")
    console.print()


def display_config(
    config_dir: Path,
    config_file: Path,
    providers_file: Path,
    saved: Optional[EnvSettings],
    console: Optional[Console] = None,
) -> None:
    """Show where configuration lives and what is saved."""
    console = console or get_console()

    console.print("\n[bold]Configuration:[/bold]")
    console.print(f"  Directory:  {config_dir}")
    status = "[success]exists[/success]" if config_file.exists() else "[muted]not created[/muted]"
    console.print(f"  Saved data: {config_file} ({status})")
    status = (
        "[success]exists[/success]" if providers_file.exists() else "[muted]not created[/muted]"
    )
    console.print(f"  Providers:  {providers_file} ({status})")

    console.print("\n[bold]Last used:[/bold]")
    if saved is None:
        console.print("  [muted]Nothing saved yet[/muted]")
        return

    console.print(
        f"  Provider: [highlight]{escape(saved.provider_name)}[/highlight]"
        f" ({escape(saved.provider)})"
    )
    console.print(f"  Base URL: {escape(saved.base_url)}")
    console.print(f"  Mode:     {saved.mode_label}")
    console.print(f"  {saved.api_key_env}: {escape(mask_secret(saved.api_key))}")
