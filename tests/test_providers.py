"""Tests for the provider table and providers.yaml loading."""

from claude_run.config.providers import (
    CUSTOM_PROVIDER_ID,
    Provider,
    ProviderRegistry,
    builtin_providers,
    load_providers,
    load_providers_from_file,
    merge_providers,
    validate_base_url,
)


def test_builtin_providers_keep_menu_order():
    registry = builtin_providers()

    assert registry.ids() == ["glm", "qwen", "kimi", "deepseek", "custom"]
    assert registry.get("kimi").base_url == "https://api.moonshot.cn/anthropic"
    assert registry.get("qwen").display_name == "QWEN (通义千问)"


def test_builtin_providers_export_anthropic_variables():
    glm = builtin_providers().get("glm")

    assert glm.base_url_env == "ANTHROPIC_BASE_URL"
    assert glm.api_key_env == "ANTHROPIC_API_KEY"
    assert glm.is_custom is False


def test_custom_provider_has_no_base_url():
    custom = builtin_providers().get(CUSTOM_PROVIDER_ID)

    assert custom.base_url is None
    assert custom.is_custom is True


def test_builtin_providers_returns_fresh_registry():
    first = builtin_providers()
    first.get("glm").base_url = "https://changed.example.com"

    assert builtin_providers().get("glm").base_url == "https://open.bigmodel.cn/api/anthropic"


def test_choices_use_display_names():
    choices = builtin_providers().choices()

    assert choices[0] == ("GLM (智谱清言)", "glm")
    assert choices[-1] == ("自定义中转站 (Custom Relay)", "custom")


def test_load_providers_from_file_reads_entries(tmp_path):
    providers_file = tmp_path / "providers.yaml"
    providers_file.write_text(
        "providers:\n"
        "  openrouter:\n"
        "    name: OpenRouter\n"
        "    base_url: https://openrouter.ai/api\n"
        "    api_key_env: ANTHROPIC_AUTH_TOKEN\n",
        encoding="utf-8",
    )

    registry = load_providers_from_file(providers_file)
    provider = registry.get("openrouter")

    assert provider.name == "OpenRouter"
    assert provider.display_name == "OpenRouter"
    assert provider.api_key_env == "ANTHROPIC_AUTH_TOKEN"
    assert provider.base_url_env == "ANTHROPIC_BASE_URL"


def test_load_providers_from_file_skips_invalid_entries(tmp_path):
    providers_file = tmp_path / "providers.yaml"
    providers_file.write_text(
        "providers:\n"
        "  broken: not-a-mapping\n"
        "  bad_url:\n"
        "    base_url: ftp://example.com\n"
        "  good:\n"
        "    base_url: https://relay.example.com\n",
        encoding="utf-8",
    )

    registry = load_providers_from_file(providers_file)

    assert registry.ids() == ["good"]


def test_load_providers_from_file_handles_missing_and_invalid_yaml(tmp_path):
    assert len(load_providers_from_file(tmp_path / "missing.yaml")) == 0

    broken = tmp_path / "providers.yaml"
    broken.write_text("providers: [unclosed\n", encoding="utf-8")
    assert len(load_providers_from_file(broken)) == 0


def test_merge_providers_overrides_and_keeps_custom_last():
    extra = ProviderRegistry(
        providers={
            "glm": Provider(
                id="glm",
                name="GLM",
                display_name="GLM (international)",
                base_url="https://api.z.ai/api/anthropic",
            ),
            "relay": Provider(
                id="relay",
                name="Relay",
                display_name="Relay",
                base_url="https://relay.example.com",
            ),
        }
    )

    merged = merge_providers(builtin_providers(), extra)

    assert merged.get("glm").base_url == "https://api.z.ai/api/anthropic"
    assert merged.ids()[-1] == "custom"
    assert merged.ids()[-2] == "relay"


def test_load_providers_merges_config_dir_file(tmp_path):
    (tmp_path / "providers.yaml").write_text(
        "providers:\n  relay:\n    base_url: https://relay.example.com\n",
        encoding="utf-8",
    )

    registry = load_providers(tmp_path)

    assert "glm" in registry
    assert "relay" in registry
    assert registry.ids()[-1] == "custom"


def test_validate_base_url():
    assert validate_base_url("https://api.example.com/v1") is True
    assert validate_base_url("http://localhost:8080") is True
    assert validate_base_url("") == "Base URL cannot be empty"
    assert validate_base_url("   ") == "Base URL cannot be empty"
    assert "valid URL" in validate_base_url("api.example.com")
    assert "valid URL" in validate_base_url("ftp://example.com")
