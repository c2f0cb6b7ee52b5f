"""End-to-end CLI stories: settings resolved from real files, environment and arguments."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from layered_appsettings.adapters import cli as cli_mod

if TYPE_CHECKING:
    from conftest import SettingsTree


@pytest.fixture
def sample_tree(isolated_process: SettingsTree) -> SettingsTree:
    """A program directory and working directory holding sample settings."""
    isolated_process.write_json(
        isolated_process.entry,
        "appsettings.json",
        {
            "ApplicationName": "MyConsoleApp",
            "Logging": {"LogLevel": {"Default": "Warning"}},
            "ApiTester": {"SupportedMethods": ["GET", "POST"], "MaxRetries": 3, "BaseUrl": "https://api.example.test"},
        },
    )
    isolated_process.write_json(isolated_process.cwd, "LASTEST_appsettings.local.json", {"ExtraEntry": "from-cwd"})
    return isolated_process


def _invoke(runner: CliRunner, factory: Callable[[], Any], tree: SettingsTree, *args: str) -> Result:
    argv = ["--prefix", "LASTEST_", "--entry-dir", str(tree.entry), *args]
    return runner.invoke(cli_mod.cli, argv, obj=factory)


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_show_prints_every_file_layer_in_human_form(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "show")

    assert result.exit_code == 0, result.output
    assert 'ApplicationName = "MyConsoleApp"' in result.stdout
    assert "[ApiTester]" in result.stdout
    assert "from-cwd" in result.stdout


@pytest.mark.os_agnostic
def test_show_json_contains_every_layer(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "show", "--format", "json")

    assert result.exit_code == 0, result.output
    assert '"ApplicationName": "MyConsoleApp"' in result.stdout
    assert '"ExtraEntry": "from-cwd"' in result.stdout
    assert '"BaseUrl": "https://api.example.test"' in result.stdout


@pytest.mark.os_agnostic
def test_show_section_limits_output_to_that_section(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "show", "--format", "json", "--section", "apitester")

    assert result.exit_code == 0, result.output
    assert "https://api.example.test" in result.stdout
    assert "MyConsoleApp" not in result.stdout


@pytest.mark.os_agnostic
def test_show_applies_trailing_application_arguments_last(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LASTEST_ApplicationName", "FromEnvironment")

    result = _invoke(
        cli_runner, production_factory, sample_tree, "show", "--format", "json", "--", "--ApplicationName=FromArgs"
    )

    assert result.exit_code == 0, result.output
    assert '"ApplicationName": "FromArgs"' in result.stdout


@pytest.mark.os_agnostic
def test_show_loads_additional_settings_path_from_arguments(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    extra = sample_tree.write_json(sample_tree.cwd, "overrides/extra.json", {"ApplicationName": "FromAdditional"})

    result = _invoke(
        cli_runner,
        production_factory,
        sample_tree,
        "show",
        "--format",
        "json",
        "--",
        "--AdditionalAppSettingsFilePath",
        str(extra),
    )

    assert result.exit_code == 0, result.output
    assert '"ApplicationName": "FromAdditional"' in result.stdout


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_get_prints_a_value_regardless_of_key_case(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "get", "apitester:maxretries")

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "3"


@pytest.mark.os_agnostic
def test_get_explain_names_the_winning_file(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "get", "--explain", "ExtraEntry")

    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert lines[0] == "from-cwd"
    assert lines[1].startswith("source: file:")
    assert lines[1].endswith("LASTEST_appsettings.local.json")


@pytest.mark.os_agnostic
def test_get_prefers_the_environment_over_files(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LASTEST_ApiTester__MaxRetries", "9")

    result = _invoke(cli_runner, production_factory, sample_tree, "get", "--explain", "ApiTester:MaxRetries")

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["9", "source: environment:LASTEST_*"]


@pytest.mark.os_agnostic
def test_get_honours_switch_aliases(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    argv = [
        "--prefix",
        "LASTEST_",
        "--entry-dir",
        str(sample_tree.entry),
        "--switch=-n=ApplicationName",
        "get",
        "ApplicationName",
        "--",
        "-n",
        "Aliased",
    ]

    result = cli_runner.invoke(cli_mod.cli, argv, obj=production_factory)

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "Aliased"


# ---------------------------------------------------------------------------
# files
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_files_lists_settings_files_lowest_precedence_first(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    sample_tree.write_json(sample_tree.home, "LASTEST_appsettings.json", {})

    result = _invoke(cli_runner, production_factory, sample_tree, "files")

    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert lines[0].startswith("1. [entry-default]")
    assert lines[0].endswith("appsettings.json")
    assert "[user-profile]" in lines[1]
    assert "[working-directory]" in lines[2]


@pytest.mark.os_agnostic
def test_files_reports_when_nothing_is_found(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    isolated_process: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, isolated_process, "files")

    assert result.exit_code == 0, result.output
    assert "No settings files found." in result.stdout


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_demo_prints_the_sample_application_view(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "demo")

    assert result.exit_code == 0, result.output
    assert "Application Name: MyConsoleApp" in result.stdout
    assert "Default Log Level: Warning" in result.stdout
    assert "Extra Entry: from-cwd" in result.stdout
    assert "  Supported Methods: GET, POST" in result.stdout
    assert "  Max Retries: 3" in result.stdout
    assert "  Base Url: https://api.example.test" in result.stdout


@pytest.mark.os_agnostic
def test_demo_accepts_the_app_alias(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    sample_tree: SettingsTree,
) -> None:
    result = _invoke(cli_runner, production_factory, sample_tree, "demo", "--app", "Renamed")

    assert result.exit_code == 0, result.output
    assert "Application Name: Renamed" in result.stdout
