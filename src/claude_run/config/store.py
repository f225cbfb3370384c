"""Saved answers from previous runs, kept in a small JSON file.

The file layout is shared with earlier releases of the tool::

    {
      "lastUsed": {"provider": ..., "modelName": ..., "baseUrl": ...,
                   "mode": ..., "timestamp": ...},
      "providers": {"<id>": {"apiKey": ..., "baseUrl": ...}}
    }
"""

import copy
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .env_settings import EnvSettings
from .providers import CUSTOM_PROVIDER_ID, ProviderRegistry

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG: dict[str, Any] = {
    "lastUsed": {},
    "providers": {},
}


def _default_config() -> dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


class ConfigStore:
    """Dotted-key access to the saved JSON configuration."""

    def __init__(self, path: Path):
        self.path = path
        self._ensure_dir()
        self.data = self.load()

    def _ensure_dir(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self.path.parent}: {e}")

    def load(self) -> dict[str, Any]:
        """Read the file, falling back to defaults on any problem."""
        if not self.path.exists():
            return _default_config()

        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config {self.path}: {e}")
            return _default_config()

        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring config {self.path}: top level is not an object")
            return _default_config()

        return loaded

    def save(self) -> bool:
        """Write the configuration. Returns False when the file could not be written."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(self.data, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            return True
        except OSError as e:
            logger.warning(f"Could not save configuration to {self.path}: {e}")
            return False

    def get(self, key: str) -> Any:
        """Get a value by dotted key, e.g. ``providers.glm.apiKey``."""
        value: Any = self.data
        for part in key.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    def _assign(self, key: str, value: Any) -> None:
        parts = key.split(".")
        last = parts.pop()
        target = self.data
        for part in parts:
            if not isinstance(target.get(part), dict):
                target[part] = {}
            target = target[part]
        target[last] = value

    def set(self, key: str, value: Any) -> bool:
        """Set a value by dotted key and save immediately."""
        self._assign(key, value)
        return self.save()

    def reset(self) -> bool:
        """Forget everything and delete the file."""
        self.data = _default_config()
        try:
            self.path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Could not delete {self.path}: {e}")
            return False

    def last_used(self) -> dict[str, Any]:
        last = self.get("lastUsed")
        return last if isinstance(last, dict) else {}

    def saved_settings(self, registry: ProviderRegistry) -> Optional[EnvSettings]:
        """
        Rebuild the last used settings, if a key was saved for that provider.

        Base URL priority:
        1. lastUsed.baseUrl
        2. Saved baseUrl of the custom relay
        3. Base URL from the provider table
        """
        last = self.last_used()
        provider_id = last.get("provider")
        if not provider_id:
            return None

        api_key = self.get(f"providers.{provider_id}.apiKey")
        if not api_key:
            return None

        provider = registry.get(provider_id)
        base_url = last.get("baseUrl")
        if not base_url:
            if provider_id == CUSTOM_PROVIDER_ID:
                base_url = self.get(f"providers.{provider_id}.baseUrl")
            elif provider is not None:
                base_url = provider.base_url

        mode = last.get("mode") if last.get("mode") in ("temp", "perm") else "temp"
        settings = EnvSettings(
            provider=provider_id,
            provider_name=last.get("modelName") or (provider.name if provider else provider_id),
            base_url=base_url or "",
            mode=mode,
            api_key=str(api_key),
        )
        if provider is not None:
            settings.base_url_env = provider.base_url_env
            settings.api_key_env = provider.api_key_env
        return settings

    def remember(self, settings: EnvSettings) -> bool:
        """Store the settings as last used, plus the provider's key."""
        self._assign(
            "lastUsed",
            {
                "provider": settings.provider,
                "modelName": settings.provider_name,
                "baseUrl": settings.base_url,
                "mode": settings.mode,
                "timestamp": datetime.now().strftime("%Y/%m/%d %H:%M:%S"),
            },
        )
        self._assign(f"providers.{settings.provider}.apiKey", settings.api_key)
        if settings.provider == CUSTOM_PROVIDER_ID:
            self._assign(f"providers.{settings.provider}.baseUrl", settings.base_url)
        return self.save()
