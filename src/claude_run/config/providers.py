"""Provider table for Anthropic-compatible endpoints."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL_ENV = "ANTHROPIC_BASE_URL"
DEFAULT_API_KEY_ENV = "ANTHROPIC_API_KEY"
CUSTOM_PROVIDER_ID = "custom"


@dataclass
class Provider:
    """A selectable upstream endpoint and the variables it is exported as."""

    id: str
    name: str
    display_name: str
    base_url: Optional[str] = None  # None: user supplies the URL (custom relay)
    base_url_env: str = DEFAULT_BASE_URL_ENV
    api_key_env: str = DEFAULT_API_KEY_ENV

    @property
    def is_custom(self) -> bool:
        return self.base_url is None


@dataclass
class ProviderRegistry:
    """Ordered collection of providers, in menu order."""

    providers: dict[str, Provider] = field(default_factory=dict)

    def get(self, provider_id: str) -> Optional[Provider]:
        """Get a provider by ID."""
        return self.providers.get(provider_id)

    def ids(self) -> list[str]:
        return list(self.providers.keys())

    def choices(self) -> list[tuple[str, str]]:
        """Return (title, value) pairs for a selection menu."""
        return [(p.display_name, p.id) for p in self.providers.values()]

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self.providers

    def __len__(self) -> int:
        return len(self.providers)


# Built-in providers, in menu order
BUILTIN_PROVIDERS = {
    "glm": {
        "name": "GLM",
        "display_name": "GLM (智谱清言)",
        "base_url": "https://open.bigmodel.cn/api/anthropic",
    },
    "qwen": {
        "name": "QWEN",
        "display_name": "QWEN (通义千问)",
        "base_url": "https://dashscope.aliyuncs.com/api/v1/anthropic",
    },
    "kimi": {
        "name": "Kimi",
        "display_name": "Kimi (月之暗面)",
        "base_url": "https://api.moonshot.cn/anthropic",
    },
    "deepseek": {
        "name": "DeepSeek",
        "display_name": "DeepSeek",
        "base_url": "https://api.deepseek.com/anthropic",
    },
    CUSTOM_PROVIDER_ID: {
        "name": "Custom",
        "display_name": "自定义中转站 (Custom Relay)",
        "base_url": None,
    },
}


def load_provider(data: dict, provider_id: str) -> Provider:
    """
    Build a Provider from a raw mapping.

    Args:
        data: Mapping with name/display_name/base_url and optional variable names
        provider_id: Provider ID used as fallback for the names

    Returns:
        Provider instance

    Raises:
        ValueError: If the mapping is not usable
    """
    if not isinstance(data, dict):
        raise ValueError(f"provider '{provider_id}' must be a mapping")

    base_url = data.get("base_url")
    if base_url is not None:
        base_url = str(base_url).strip()
        if validate_base_url(base_url) is not True:
            raise ValueError(f"provider '{provider_id}' has an invalid base_url: {base_url}")

    name = str(data.get("name") or provider_id)
    return Provider(
        id=provider_id,
        name=name,
        display_name=str(data.get("display_name") or name),
        base_url=base_url,
        base_url_env=str(data.get("base_url_env") or DEFAULT_BASE_URL_ENV),
        api_key_env=str(data.get("api_key_env") or DEFAULT_API_KEY_ENV),
    )


def builtin_providers() -> ProviderRegistry:
    """Return a fresh registry with the built-in providers."""
    return ProviderRegistry(
        providers={pid: load_provider(data, pid) for pid, data in BUILTIN_PROVIDERS.items()}
    )


def load_providers_from_file(file_path: Path) -> ProviderRegistry:
    """
    Load extra providers from a YAML file.

    Expected shape::

        providers:
          openrouter:
            name: OpenRouter
            base_url: https://openrouter.ai/api
            api_key_env: ANTHROPIC_AUTH_TOKEN

    Malformed entries are skipped; an unreadable file gives an empty registry.
    """
    if not file_path.exists():
        return ProviderRegistry()

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read providers file {file_path}: {e}")
        return ProviderRegistry()

    raw_providers = data.get("providers", {}) if isinstance(data, dict) else {}
    if not isinstance(raw_providers, dict):
        logger.warning(f"Ignoring {file_path}: 'providers' must be a mapping")
        return ProviderRegistry()

    providers: dict[str, Provider] = {}
    for provider_id, provider_data in raw_providers.items():
        try:
            providers[str(provider_id)] = load_provider(provider_data, str(provider_id))
        except ValueError as e:
            logger.warning(f"Skipping provider from {file_path}: {e}")

    return ProviderRegistry(providers=providers)


def merge_providers(*registries: ProviderRegistry) -> ProviderRegistry:
    """
    Merge multiple provider registries.

    Later registries take precedence for providers with the same ID.
    The custom relay entry always stays last.
    """
    merged: dict[str, Provider] = {}
    for registry in registries:
        for provider_id, provider in registry.providers.items():
            merged[provider_id] = provider

    custom = merged.pop(CUSTOM_PROVIDER_ID, None)
    if custom is not None:
        merged[CUSTOM_PROVIDER_ID] = custom

    return ProviderRegistry(providers=merged)


def load_providers(config_dir: Optional[Path]) -> ProviderRegistry:
    """Built-in providers merged with ``<config_dir>/providers.yaml``."""
    registries = [builtin_providers()]
    if config_dir is not None:
        registries.append(load_providers_from_file(config_dir / "providers.yaml"))
    return merge_providers(*registries)


def validate_base_url(text: str) -> Union[bool, str]:
    """Validate a base URL; returns True or an error message."""
    if not text or not text.strip():
        return "Base URL cannot be empty"

    parsed = urlparse(text.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return "Enter a valid URL (for example: https://api.example.com/v1)"
    return True
