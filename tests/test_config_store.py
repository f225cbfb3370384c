"""Tests for the saved JSON configuration."""

import json

from claude_run.config.env_settings import EnvSettings
from claude_run.config.providers import builtin_providers
from claude_run.config.store import ConfigStore


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_new_store_creates_directory_and_defaults(tmp_path):
    config_file = tmp_path / "nested" / "config.json"

    store = ConfigStore(config_file)

    assert config_file.parent.is_dir()
    assert store.data == {"lastUsed": {}, "providers": {}}
    assert not config_file.exists()


def test_invalid_json_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding="utf-8")

    store = ConfigStore(config_file)

    assert store.data == {"lastUsed": {}, "providers": {}}


def test_non_object_json_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("[1, 2, 3]", encoding="utf-8")

    assert ConfigStore(config_file).data == {"lastUsed": {}, "providers": {}}


def test_get_walks_dotted_keys(tmp_path):
    config_file = tmp_path / "config.json"
    _write(config_file, {"providers": {"glm": {"apiKey": "k1"}}, "lastUsed": "oops"})

    store = ConfigStore(config_file)

    assert store.get("providers.glm.apiKey") == "k1"
    assert store.get("providers.kimi.apiKey") is None
    assert store.get("lastUsed.provider") is None


def test_set_creates_intermediate_objects_and_saves(tmp_path):
    config_file = tmp_path / "config.json"
    _write(config_file, {"providers": {"custom": "not-an-object"}})
    store = ConfigStore(config_file)

    assert store.set("providers.custom.baseUrl", "https://relay.example.com") is True

    saved = json.loads(config_file.read_text(encoding="utf-8"))
    assert saved["providers"]["custom"] == {"baseUrl": "https://relay.example.com"}


def test_save_writes_indented_json_keeping_unicode(tmp_path):
    config_file = tmp_path / "config.json"
    store = ConfigStore(config_file)

    store.set("lastUsed.modelName", "GLM (智谱清言)")

    text = config_file.read_text(encoding="utf-8")
    assert "智谱清言" in text
    assert '\n  "lastUsed": {' in text


def test_save_failure_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = ConfigStore(blocker / "config.json")

    assert store.set("lastUsed.provider", "glm") is False


def test_saved_settings_requires_provider_and_key(tmp_path):
    config_file = tmp_path / "config.json"
    registry = builtin_providers()

    _write(config_file, {"lastUsed": {}, "providers": {}})
    assert ConfigStore(config_file).saved_settings(registry) is None

    _write(config_file, {"lastUsed": {"provider": "glm"}, "providers": {}})
    assert ConfigStore(config_file).saved_settings(registry) is None


def test_saved_settings_uses_last_used_base_url(tmp_path):
    config_file = tmp_path / "config.json"
    _write(
        config_file,
        {
            "lastUsed": {
                "provider": "kimi",
                "modelName": "Kimi",
                "baseUrl": "https://override.example.com",
                "mode": "perm",
                "timestamp": "2026/10/19 10:00:00",
            },
            "providers": {"kimi": {"apiKey": "sk-kimi"}},
        },
    )

    saved = ConfigStore(config_file).saved_settings(builtin_providers())

    assert saved.provider == "kimi"
    assert saved.provider_name == "Kimi"
    assert saved.base_url == "https://override.example.com"
    assert saved.mode == "perm"
    assert saved.api_key == "sk-kimi"


def test_saved_settings_falls_back_to_provider_table(tmp_path):
    config_file = tmp_path / "config.json"
    _write(
        config_file,
        {
            "lastUsed": {"provider": "deepseek", "modelName": "DeepSeek", "mode": "temp"},
            "providers": {"deepseek": {"apiKey": "sk-ds"}},
        },
    )

    saved = ConfigStore(config_file).saved_settings(builtin_providers())

    assert saved.base_url == "https://api.deepseek.com/anthropic"


def test_saved_settings_uses_stored_custom_base_url(tmp_path):
    config_file = tmp_path / "config.json"
    _write(
        config_file,
        {
            "lastUsed": {"provider": "custom", "modelName": "Custom (x)", "mode": "temp"},
            "providers": {
                "custom": {"apiKey": "sk-relay", "baseUrl": "https://relay.example.com"}
            },
        },
    )

    saved = ConfigStore(config_file).saved_settings(builtin_providers())

    assert saved.base_url == "https://relay.example.com"


def test_saved_settings_defaults_unknown_mode_to_temp(tmp_path):
    config_file = tmp_path / "config.json"
    _write(
        config_file,
        {
            "lastUsed": {"provider": "glm", "mode": "forever"},
            "providers": {"glm": {"apiKey": "k"}},
        },
    )

    saved = ConfigStore(config_file).saved_settings(builtin_providers())

    assert saved.mode == "temp"
    assert saved.provider_name == "GLM"


def test_remember_writes_last_used_and_key(tmp_path):
    config_file = tmp_path / "config.json"
    store = ConfigStore(config_file)
    settings = EnvSettings(
        provider="glm",
        provider_name="GLM",
        base_url="https://open.bigmodel.cn/api/anthropic",
        mode="perm",
        api_key="sk-glm",
    )

    assert store.remember(settings) is True

    saved = json.loads(config_file.read_text(encoding="utf-8"))
    assert saved["lastUsed"]["provider"] == "glm"
    assert saved["lastUsed"]["modelName"] == "GLM"
    assert saved["lastUsed"]["baseUrl"] == "https://open.bigmodel.cn/api/anthropic"
    assert saved["lastUsed"]["mode"] == "perm"
    assert saved["lastUsed"]["timestamp"]
    assert saved["providers"]["glm"] == {"apiKey": "sk-glm"}


def test_remember_keeps_custom_base_url_and_other_keys(tmp_path):
    config_file = tmp_path / "config.json"
    _write(config_file, {"lastUsed": {}, "providers": {"glm": {"apiKey": "old"}}})
    store = ConfigStore(config_file)

    store.remember(
        EnvSettings(
            provider="custom",
            provider_name="Custom (https://relay.example.com)",
            base_url="https://relay.example.com",
            mode="temp",
            api_key="sk-relay",
        )
    )

    saved = json.loads(config_file.read_text(encoding="utf-8"))
    assert saved["providers"]["custom"] == {
        "apiKey": "sk-relay",
        "baseUrl": "https://relay.example.com",
    }
    assert saved["providers"]["glm"] == {"apiKey": "old"}


def test_reset_deletes_file(tmp_path):
    config_file = tmp_path / "config.json"
    store = ConfigStore(config_file)
    store.set("providers.glm.apiKey", "k")

    assert store.reset() is True
    assert not config_file.exists()
    assert store.data == {"lastUsed": {}, "providers": {}}
    assert store.reset() is True
