"""Tests for console themes and rendering helpers."""

from io import StringIO

from rich.console import Console

from claude_run.config.env_settings import EnvSettings
from claude_run.config.providers import builtin_providers
from claude_run.display import (
    THEMES,
    display_config,
    display_providers,
    display_saved,
    display_summary,
    get_console,
    get_current_theme,
    reset_console,
    set_theme,
)


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    console = get_console()
    console.file = buffer
    console.width = 120
    return console, buffer


def _settings(**overrides) -> EnvSettings:
    values = dict(
        provider="kimi",
        provider_name="Kimi",
        base_url="https://api.moonshot.cn/anthropic",
        mode="perm",
        api_key="sk-kimi-secret",
    )
    values.update(overrides)
    return EnvSettings(**values)


def test_unknown_theme_falls_back_to_default():
    assert set_theme("neon").name == "default"
    assert get_current_theme() is THEMES["default"]


def test_console_is_cached_until_reset():
    first = get_console()

    assert get_console() is first
    reset_console()
    assert get_console() is not first


def test_display_providers_lists_urls():
    console, buffer = _console()

    display_providers(builtin_providers(), console)

    out = buffer.getvalue()
    assert "https://api.deepseek.com/anthropic" in out
    assert "(entered by you)" in out
    assert "ANTHROPIC_BASE_URL, ANTHROPIC_API_KEY" in out


def test_display_summary_masks_key():
    console, buffer = _console()

    display_summary(_settings(), console)

    out = buffer.getvalue()
    assert "Provider: Kimi" in out
    assert "Mode: Permanent (system environment)" in out
    assert "API Key: ***[hidden]***" in out
    assert "sk-kimi-secret" not in out


def test_display_saved_handles_missing_fields():
    console, buffer = _console()

    display_saved({"modelName": "GLM", "mode": "temp"}, console)

    out = buffer.getvalue()
    assert "Last used: GLM (temp)" in out
    assert "Time: ?" in out


def test_display_config_reports_files(tmp_path):
    console, buffer = _console()
    config_file = tmp_path / "config.json"
    config_file.write_text("{}", encoding="utf-8")

    display_config(tmp_path, config_file, tmp_path / "providers.yaml", _settings(), console)

    out = buffer.getvalue()
    assert "(exists)" in out
    assert "(not created)" in out
    assert "Provider: Kimi (kimi)" in out
    assert "ANTHROPIC_API_KEY: ***[hidden]***" in out
    assert "sk-kimi-secret" not in out


def test_markup_in_names_and_urls_is_printed_literally(tmp_path):
    console, buffer = _console()
    settings = _settings(provider_name="Relay [/x]", base_url="https://relay.example.com/[bold]")

    display_summary(settings, console)
    display_config(
        tmp_path, tmp_path / "config.json", tmp_path / "providers.yaml", settings, console
    )
    display_saved({"modelName": "[/highlight]", "mode": "temp", "timestamp": "[red]now"}, console)

    out = buffer.getvalue()
    assert "Provider: Relay [/x]" in out
    assert "Base URL: https://relay.example.com/[bold]" in out
    assert "Last used: [/highlight] (temp)" in out
    assert "Time: [red]now" in out


def test_display_providers_prints_names_from_yaml_literally(tmp_path):
    from claude_run.config.providers import load_providers_from_file

    providers_file = tmp_path / "providers.yaml"
    providers_file.write_text(
        "providers:\n"
        "  relay:\n"
        "    name: \"Relay [/x]\"\n"
        "    base_url: https://relay.example.com\n",
        encoding="utf-8",
    )
    console, buffer = _console()

    display_providers(load_providers_from_file(providers_file), console)

    assert "Relay [/x]" in buffer.getvalue()
