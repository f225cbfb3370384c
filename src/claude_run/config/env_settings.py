"""The settings chosen in the wizard and exported to the environment."""

from dataclasses import dataclass
from typing import Literal

from .providers import DEFAULT_API_KEY_ENV, DEFAULT_BASE_URL_ENV, Provider

Mode = Literal["temp", "perm"]

MODE_LABELS: dict[str, str] = {
    "temp": "Temporary (current session only)",
    "perm": "Permanent (system environment)",
}

HIDDEN = "***[hidden]***"


@dataclass
class EnvSettings:
    """Provider, endpoint and credential selected by the user."""

    provider: str
    provider_name: str
    base_url: str
    mode: Mode
    api_key: str
    base_url_env: str = DEFAULT_BASE_URL_ENV
    api_key_env: str = DEFAULT_API_KEY_ENV

    @property
    def is_permanent(self) -> bool:
        return self.mode == "perm"

    @property
    def mode_label(self) -> str:
        return MODE_LABELS.get(self.mode, self.mode)

    def env_vars(self) -> dict[str, str]:
        """Variables to export, base URL first."""
        return {
            self.base_url_env: self.base_url,
            self.api_key_env: self.api_key,
        }

    @classmethod
    def for_provider(
        cls, provider: Provider, mode: Mode, api_key: str, base_url: str = ""
    ) -> "EnvSettings":
        """Build settings for a provider; custom relays take the user's URL."""
        if provider.is_custom:
            resolved_url = base_url.strip()
            provider_name = f"Custom ({resolved_url})"
        else:
            resolved_url = base_url.strip() or provider.base_url or ""
            provider_name = provider.name

        return cls(
            provider=provider.id,
            provider_name=provider_name,
            base_url=resolved_url,
            mode=mode,
            api_key=api_key,
            base_url_env=provider.base_url_env,
            api_key_env=provider.api_key_env,
        )


def mask_secret(value: str) -> str:
    """Never show a secret; only whether it is set."""
    return HIDDEN if value else "(not set)"
