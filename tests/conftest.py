"""Shared pytest fixtures for resolver, CLI and module-entry tests.

Centralizes test infrastructure following clean architecture principles:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import orjson
import pytest
from click.testing import CliRunner

from layered_appsettings.adapters.config.locations import SearchLocations
from layered_appsettings.adapters.config.merger import overlay
from layered_appsettings.domain.enums import SourceKind
from layered_appsettings.domain.keys import ConfigKey
from layered_appsettings.domain.store import ConfigurationStore, ConfigValue, SourceInfo

if TYPE_CHECKING:
    from layered_appsettings.composition import AppServices

_COVERAGE_BASENAME = ".coverage.layered_appsettings"

#: Prefix used by tests that touch the real process environment. Distinct from
#: the tool default so a developer's own ``MYAPP_`` variables never leak in.
TEST_PREFIX = "LASTEST_"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a **local** temp directory.

    coverage.py stores trace data in a SQLite database, which needs POSIX
    file-locking semantics that network mounts do not reliably provide.
    This hook runs before ``pytest-cov`` creates its ``Coverage()`` object.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


class MappingSource:
    """Test source yielding fixed ``key -> value`` pairs under a chosen identity."""

    def __init__(self, values: Mapping[str, ConfigValue], name: str = "fixture", kind: SourceKind = SourceKind.FILE):
        self._values = dict(values)
        self._info = SourceInfo(kind=kind, name=name)

    @property
    def info(self) -> SourceInfo:
        return self._info

    def load(self) -> list[tuple[ConfigKey, ConfigValue]]:
        return [(ConfigKey.parse(key), value) for key, value in self._values.items()]


@dataclass
class SettingsTree:
    """Four throw-away search directories under ``tmp_path``.

    Attributes:
        entry: Stand-in for the running program's directory.
        shared: Stand-in for the shared documents directory.
        home: Stand-in for the user profile directory.
        cwd: Stand-in for the working directory.
    """

    entry: Path
    shared: Path
    home: Path
    cwd: Path

    @property
    def locations(self) -> SearchLocations:
        return SearchLocations(
            entry_dir=self.entry,
            shared_documents_dir=self.shared,
            user_profile_dir=self.home,
            working_dir=self.cwd,
        )

    def write_json(self, directory: Path, name: str, data: Any) -> Path:
        """Serialise *data* as JSON into ``directory / name`` and return the path."""
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(data))
        return path

    def write_text(self, directory: Path, name: str, text: str) -> Path:
        """Write raw *text* into ``directory / name`` and return the path."""
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Click 8.2+ keeps ``result.stdout`` and ``result.stderr`` apart, so tests
    can parse stdout without log lines getting in the way.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests.

    Example:
        def test_info(cli_runner: CliRunner, production_factory: Callable[[], AppServices]) -> None:
            result = cli_runner.invoke(cli, ["info"], obj=production_factory)
            assert result.exit_code == 0
    """
    from layered_appsettings.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def settings_tree(tmp_path: Path) -> SettingsTree:
    """Create empty entry/shared/home/cwd directories for discovery tests.

    Example:
        def test_plan(settings_tree: SettingsTree) -> None:
            settings_tree.write_json(settings_tree.cwd, "MYAPP_appsettings.json", {"A": "1"})
            list(plan_settings_files("MYAPP_", [], environ={}, locations=settings_tree.locations))
    """
    tree = SettingsTree(
        entry=tmp_path / "entry",
        shared=tmp_path / "shared",
        home=tmp_path / "home",
        cwd=tmp_path / "cwd",
    )
    for directory in (tree.entry, tree.shared, tree.home, tree.cwd):
        directory.mkdir()
    return tree


@pytest.fixture
def isolated_process(monkeypatch: pytest.MonkeyPatch, settings_tree: SettingsTree) -> SettingsTree:
    """Point the real process at *settings_tree* for end-to-end CLI runs.

    Changes into the tree's working directory, redirects the home directory
    and drops every environment variable carrying :data:`TEST_PREFIX`.
    Pass ``--prefix LASTEST_ --entry-dir <tree.entry>`` to the CLI.
    """
    monkeypatch.chdir(settings_tree.cwd)
    monkeypatch.setenv("HOME", str(settings_tree.home))
    monkeypatch.setenv("USERPROFILE", str(settings_tree.home))
    for name in list(os.environ):
        if name.startswith(TEST_PREFIX):
            monkeypatch.delenv(name)
    return settings_tree


@pytest.fixture
def store_factory() -> Callable[[Mapping[str, ConfigValue]], ConfigurationStore]:
    """Build a real :class:`ConfigurationStore` from ``"A:B" -> value`` pairs.

    Example:
        def test_section(store_factory) -> None:
            store = store_factory({"ApiTester:MaxRetries": "3"})
            assert store.get_section("apitester")["MaxRetries"] == "3"
    """

    def _factory(values: Mapping[str, ConfigValue]) -> ConfigurationStore:
        return overlay([MappingSource(values)])

    return _factory


@pytest.fixture
def inject_store() -> Callable[[ConfigurationStore], Callable[[], AppServices]]:
    """Return a factory that provides services resolving to a fixed store.

    Only the resolution I/O boundary is replaced; display, planning and
    logging stay on the production adapters.

    Example:
        def test_show(cli_runner, store_factory, inject_store) -> None:
            factory = inject_store(store_factory({"section:key": "value"}))
            result = cli_runner.invoke(cli, ["show"], obj=factory)
            assert "key" in result.output
    """
    from layered_appsettings.composition import AppServices, build_production

    def _inject(store: ConfigurationStore) -> Callable[[], AppServices]:
        def _fixed_resolve(*_args: Any, **_kwargs: Any) -> ConfigurationStore:
            return store

        prod = build_production()
        test_services = AppServices(
            resolve_configuration=_fixed_resolve,
            plan_settings_files=prod.plan_settings_files,
            display_configuration=prod.display_configuration,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject

