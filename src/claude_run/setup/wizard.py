"""The interactive setup flow.

load config -> prompt -> confirm -> apply -> persist -> optionally launch
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import questionary
from rich.markup import escape

from claude_run.config.env_settings import MODE_LABELS, EnvSettings, Mode, mask_secret
from claude_run.config.providers import ProviderRegistry, validate_base_url
from claude_run.config.settings import Settings
from claude_run.config.store import ConfigStore
from claude_run.display.console import get_console
from claude_run.display.formatting import display_header, display_saved, display_summary
from claude_run.environment import apply_to_process, is_windows, set_permanent
from claude_run.launcher import launch, verification_commands
from claude_run.setup.prompt_utils import (
    SetupCancelled,
    q_confirm,
    q_password,
    q_select,
    q_text,
)

logger = logging.getLogger(__name__)

Launcher = Callable[..., int]


def _validate_api_key(text: str):
    return bool(text and text.strip()) or "API key cannot be empty"


class EnvSetupWizard:
    """Walks the user from provider choice to an exported environment."""

    def __init__(
        self,
        settings: Settings,
        store: Optional[ConfigStore] = None,
        registry: Optional[ProviderRegistry] = None,
        launcher: Launcher = launch,
        provider_id: Optional[str] = None,
        mode: Optional[Mode] = None,
        home: Optional[Path] = None,
    ):
        self.settings = settings
        self.store = store if store is not None else settings.open_store()
        self.registry = registry if registry is not None else settings.providers
        self.launcher = launcher
        self.preset_provider = provider_id
        self.preset_mode = mode
        self.home = home
        self.console = get_console()
        self.windows = is_windows()

    # Steps

    def show_header(self) -> None:
        self.console.clear()
        display_header(self.console)

    def check_saved_config(self) -> Optional[EnvSettings]:
        """Offer the last used settings when a key was saved for them."""
        saved = self.store.saved_settings(self.registry)
        if saved is None:
            return None

        # An explicit --provider asks for something other than the saved choice
        if self.preset_provider and self.preset_provider != saved.provider:
            return None

        display_saved(self.store.last_used(), self.console)
        if not q_confirm("Use the saved configuration?", default=True, allow_cancel=True):
            return None

        if self.preset_mode:
            saved.mode = self.preset_mode
        return saved

    def get_new_config(self) -> EnvSettings:
        """Ask for provider, base URL (custom only), mode and API key."""
        provider_id = self.preset_provider
        if not provider_id:
            provider_id = q_select(
                "Select a model provider:",
                choices=[
                    questionary.Choice(title=title, value=value)
                    for title, value in self.registry.choices()
                ],
                allow_cancel=True,
            )

        provider = self.registry.get(provider_id) if provider_id else None
        if provider is None:
            raise ValueError(f"Unknown provider: {provider_id}")

        base_url = ""
        if provider.is_custom:
            saved_url = self.store.get(f"providers.{provider.id}.baseUrl")
            base_url = q_text(
                "Enter the custom base URL:",
                default=saved_url if isinstance(saved_url, str) else "",
                validate=validate_base_url,
                allow_cancel=True,
            )

        mode = self.preset_mode
        if not mode:
            mode = q_select(
                "Select how to set the variables:",
                choices=[
                    questionary.Choice(title=label, value=value)
                    for value, label in MODE_LABELS.items()
                ],
                allow_cancel=True,
            )

        api_key = q_password(
            "Enter your API key:",
            validate=_validate_api_key,
            allow_cancel=True,
        )

        return EnvSettings.for_provider(provider, mode, api_key.strip(), base_url=base_url)

    def confirm_settings(self, env_settings: EnvSettings) -> bool:
        display_summary(env_settings, self.console)
        return q_confirm("Apply these settings?", default=True, allow_cancel=True)

    def set_environment_variables(self, env_settings: EnvSettings) -> None:
        """Persist (permanent mode) and export to the current process."""
        console = self.console
        console.print()
        console.print("[info]Setting environment variables...[/info]")
        console.print()

        if env_settings.is_permanent:
            set_permanent(env_settings, home=self.home)

        apply_to_process(env_settings)

        console.print("[success]Environment variables set[/success]")
        console.print(f"   {env_settings.base_url_env}={escape(env_settings.base_url)}")
        hidden_key = escape(mask_secret(env_settings.api_key))
        console.print(f"   {env_settings.api_key_env}=[muted]{hidden_key}[/muted]")
        console.print()

        if env_settings.is_permanent:
            console.print("[warning]Permanent setting notes:[/warning]")
            if self.windows:
                console.print("   - User environment updated; new terminals pick it up automatically")
                console.print("   - This CMD window: reopen it to see the permanent variables")
                console.print("   - Anything started from this tool already has them")
            else:
                console.print("   - Added to your shell profile")
                console.print("   - New terminals pick it up automatically")
                console.print("   - This terminal: run source ~/.bashrc (or your profile)")
        else:
            console.print("[warning]Note: only effective for this session[/warning]")
            console.print("   The settings are gone once this terminal closes")

        console.print()
        console.print("[primary]Current session:[/primary]")
        console.print(
            f"   {env_settings.base_url_env}: [success]{escape(env_settings.base_url)}[/success]"
        )
        console.print(f"   {env_settings.api_key_env}: [success]***\\[set]***[/success]")

    def save_config(self, env_settings: EnvSettings) -> None:
        self.console.print()
        if self.store.remember(env_settings):
            self.console.print("[success]Configuration saved; reuse it on the next run[/success]")
        else:
            self.console.print("[warning]Warning: could not save configuration[/warning]")

    def show_verification(self, env_settings: EnvSettings) -> None:
        names = list(env_settings.env_vars())
        heading = (
            "Verify the environment:"
            if env_settings.is_permanent
            else "Verify the environment (current session):"
        )
        self.console.print(f"[primary]{heading}[/primary]")
        for title, commands in verification_commands(
            names, windows=self.windows, permanent=env_settings.is_permanent
        ):
            self.console.print()
            self.console.print(f"[warning]{title}[/warning]")
            for command in commands:
                self.console.print(f"[muted]  {command}[/muted]")

    def show_success(self, env_settings: EnvSettings) -> int:
        """Offer to launch the tool; otherwise explain how to verify."""
        command = self.settings.command
        console = self.console
        console.print()
        console.print(
            f"[success]Done! You can now run {command} with[/success] "
            f"[highlight]{escape(env_settings.provider_name)}[/highlight]"
        )
        console.print()

        if self.settings.offer_launch and q_confirm(
            f"Launch {command} now?", default=True, allow_cancel=True
        ):
            return self.launcher(command, names=list(env_settings.env_vars()))

        self.show_verification(env_settings)
        console.print()
        console.print(f"[success]{command} is ready to use![/success]")
        return 0

    # Flow

    def run(self) -> int:
        """Run the wizard. Returns a process exit code."""
        try:
            self.show_header()

            env_settings = self.check_saved_config()
            if env_settings is None:
                env_settings = self.get_new_config()

            if not self.confirm_settings(env_settings):
                self.console.print("[warning]Operation cancelled[/warning]")
                return 0

            self.set_environment_variables(env_settings)
            self.save_config(env_settings)
            return self.show_success(env_settings)

        except SetupCancelled:
            self.console.print("\n[warning]Setup cancelled[/warning]")
            return 130
        except Exception as e:
            logger.debug("Setup failed", exc_info=True)
            self.console.print(f"[error]An error occurred:[/error] {escape(str(e))}")
            return 1


def run_setup_wizard(
    settings: Settings,
    provider_id: Optional[str] = None,
    mode: Optional[Mode] = None,
) -> int:
    """Run the setup wizard with the given settings."""
    wizard = EnvSetupWizard(settings, provider_id=provider_id, mode=mode)
    return wizard.run()
