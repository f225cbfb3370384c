"""Tool settings loaded from the environment and the config directory."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .providers import ProviderRegistry, load_providers
from .store import CONFIG_FILENAME, ConfigStore

CONFIG_HOME_ENV = "CLAUDE_RUN_HOME"
COMMAND_ENV = "CLAUDE_RUN_COMMAND"
VERBOSE_ENV = "CLAUDE_RUN_VERBOSE"
THEME_ENV = "CLAUDE_RUN_THEME"

DEFAULT_COMMAND = "claude"


def get_config_dir() -> Path:
    """Config directory: $CLAUDE_RUN_HOME or ~/.claude-run."""
    override = os.getenv(CONFIG_HOME_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".claude-run"


@dataclass
class Settings:
    """Runtime settings for the setup tool."""

    config_dir: Path = field(default_factory=get_config_dir)
    command: str = DEFAULT_COMMAND
    verbose: bool = False
    theme: str = "default"
    offer_launch: bool = True

    # Loaded from the config directory
    providers: ProviderRegistry = field(default_factory=ProviderRegistry)

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def providers_file(self) -> Path:
        return self.config_dir / "providers.yaml"

    def open_store(self) -> ConfigStore:
        return ConfigStore(self.config_file)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "y", "on"}


def load_settings(config_dir: Optional[Path] = None) -> Settings:
    """
    Load settings.

    Priority (highest to lowest):
    1. Environment variables
    2. <config_dir>/.env
    3. Built-in defaults
    """
    if config_dir is None:
        config_dir = get_config_dir()

    env_file = config_dir / ".env"
    if env_file.exists():
        load_dotenv(env_file, override=False)

    return Settings(
        config_dir=config_dir,
        command=os.getenv(COMMAND_ENV, "").strip() or DEFAULT_COMMAND,
        verbose=_env_flag(VERBOSE_ENV),
        theme=os.getenv(THEME_ENV, "").strip() or "default",
        providers=load_providers(config_dir),
    )
