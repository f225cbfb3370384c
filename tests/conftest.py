"""Shared fixtures: every test gets its own HOME and config directory."""

import pytest

from claude_run.display import reset_console, reset_theme

# Variables the tool reads or writes; restored after each test
PROTECTED_ENV = (
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_AUTH_TOKEN",
    "CLAUDE_RUN_COMMAND",
    "CLAUDE_RUN_VERBOSE",
    "CLAUDE_RUN_THEME",
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("CLAUDE_RUN_HOME", str(home / ".claude-run"))
    for name in PROTECTED_ENV:
        # setenv first so monkeypatch restores the original state afterwards
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)

    reset_theme()
    reset_console()
    yield home
    reset_console()
