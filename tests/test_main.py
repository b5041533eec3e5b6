"""Unit tests for the main CLI entry point."""

import pytest
from typer.testing import CliRunner

from gencli.config import ConfigStore
from gencli.exceptions import NoProviderAvailableError
from gencli.main import (
    app,
    build_orchestrator,
    handle_error,
    is_provider_mode,
    split_flags,
)
from gencli.orchestrator import GenOrchestrator
from gencli.providers import ProviderState

runner = CliRunner()


@pytest.fixture
def orchestrator(mocker, make_stub, config_store):
    """Patch the CLI wiring with stub providers."""
    providers = [
        make_stub("gh", internal=True),
        make_stub("gemini", ProviderState.NOT_AUTHENTICATED),
        make_stub("copilot", ProviderState.ERROR, message="boom"),
        make_stub("claude"),
    ]
    orchestrator = GenOrchestrator(providers, config_store)
    mocker.patch("gencli.main.build_orchestrator", return_value=orchestrator)
    return orchestrator


def test_no_args_shows_usage_and_fails():
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "provider -list" in result.output


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "Gen version" in result.output


def test_show_config_flag():
    result = runner.invoke(app, ["--show-config"])
    assert result.exit_code == 0
    assert "Gen Configuration" in result.output
    assert "auto-detect" in result.output


def test_generate_prints_command(orchestrator):
    result = runner.invoke(app, ["list files", "-q"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "echo gh"


def test_generate_with_provider_and_context(orchestrator):
    result = runner.invoke(app, ["list files", "-p", "claude", "-c", "python only", "-q"])

    assert result.exit_code == 0
    assert "echo claude" in result.stdout
    claude = orchestrator.get_provider("claude")
    query, context = claude.requests[0]
    assert query == "list files"
    assert context.startswith("python only. System Info: ")


def test_provider_failure_exits_non_zero(orchestrator):
    result = runner.invoke(app, ["list files", "-p", "gemini", "-q"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Provider 'gemini' is not_authenticated" in result.output


def test_unknown_flag_warns_but_continues(orchestrator):
    result = runner.invoke(app, ["--frobnicate", "list files", "-q"])

    assert result.exit_code == 0
    assert "Unknown option '--frobnicate'" in result.output
    assert "echo gh" in result.output


def test_message_starting_with_provider_is_generated(orchestrator):
    result = runner.invoke(app, ["provider", "for", "dns", "lookups", "-q"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "echo gh"
    gh = orchestrator.get_provider("gh")
    assert gh.requests[0][0] == "provider for dns lookups"


def test_plain_usage_when_rich_output_disabled(monkeypatch):
    monkeypatch.setenv("GENCLI_RICH_OUTPUT", "false")

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "## Usage" in result.output
    assert "gen provider -list" in result.output


def test_provider_list(orchestrator, config_store):
    config_store.set_provider("claude")

    result = runner.invoke(app, ["provider", "-list"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "Available providers:" in lines[0]
    assert any("gemini - not_authenticated" in line for line in lines)
    assert any("copilot - error (boom)" in line for line in lines)
    assert any("claude (current) - ready" in line for line in lines)
    assert not any(" gh " in line for line in lines)
    assert "auto-detect mode" not in result.output


def test_provider_list_without_preference(orchestrator):
    result = runner.invoke(app, ["provider", "--list"])

    assert result.exit_code == 0
    assert "No provider set (auto-detect mode)" in result.output


def test_provider_set(orchestrator, config_store):
    result = runner.invoke(app, ["provider", "-set", "gemini"])

    assert result.exit_code == 0
    assert "Provider set to: gemini" in result.output
    assert ConfigStore(config_store.path).get_provider() == "gemini"


def test_provider_set_auto(orchestrator, config_store):
    config_store.set_provider("gemini")

    result = runner.invoke(app, ["provider", "-set", "auto"])

    assert result.exit_code == 0
    assert "auto-detect" in result.output
    assert config_store.get_provider() is None


def test_provider_set_invalid(orchestrator):
    result = runner.invoke(app, ["provider", "-set", "codex"])

    assert result.exit_code == 1
    assert "Invalid provider 'codex'" in result.output


def test_provider_set_missing_name(orchestrator):
    result = runner.invoke(app, ["provider", "-set"])
    assert result.exit_code == 1


def test_is_provider_mode():
    assert is_provider_mode(["provider", "-list"])
    assert is_provider_mode(["provider", "set", "claude"])
    assert not is_provider_mode(["provider"])
    assert not is_provider_mode(["provider", "for", "dns"])


def test_split_flags():
    assert split_flags(["-x", "list", "files"]) == ["list", "files"]


def test_build_orchestrator_uses_settings(sample_settings):
    orchestrator = build_orchestrator(sample_settings)

    assert [p.name for p in orchestrator.providers] == ["gh", "gemini", "copilot", "claude"]
    assert orchestrator.config_store.path == sample_settings.config_path
    assert orchestrator.providers[0].cache.path == sample_settings.cache_path


def test_handle_error(capsys):
    handle_error(NoProviderAvailableError("nothing ready"), debug=False)
    captured = capsys.readouterr()
    assert "Error:" in captured.err
    assert "nothing ready" in captured.err

    try:
        raise ValueError("debug error")
    except ValueError as e:
        handle_error(e, debug=True)

    captured = capsys.readouterr()
    assert "Debug Error Details" in captured.err
    assert "ValueError: debug error" in captured.err
