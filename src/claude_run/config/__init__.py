"""Configuration module for claude-run."""

from .env_settings import EnvSettings, Mode, mask_secret
from .providers import (
    CUSTOM_PROVIDER_ID,
    Provider,
    ProviderRegistry,
    builtin_providers,
    load_providers,
    load_providers_from_file,
    merge_providers,
    validate_base_url,
)
from .settings import Settings, get_config_dir, load_settings
from .store import ConfigStore

__all__ = [
    "EnvSettings",
    "Mode",
    "mask_secret",
    "CUSTOM_PROVIDER_ID",
    "Provider",
    "ProviderRegistry",
    "builtin_providers",
    "load_providers",
    "load_providers_from_file",
    "merge_providers",
    "validate_base_url",
    "Settings",
    "get_config_dir",
    "load_settings",
    "ConfigStore",
]
