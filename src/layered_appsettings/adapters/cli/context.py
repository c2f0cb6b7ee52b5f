"""Click context helpers for CLI state management."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click

if TYPE_CHECKING:
    from layered_appsettings.composition import AppServices

TracebackState = tuple[bool, bool]
"""Captured traceback configuration: (traceback_enabled, force_color)."""


@dataclass(slots=True)
class CLIContext:
    """Typed CLI context for Click subcommand access."""

    traceback: bool
    services: AppServices
    app_prefix: str
    switch_mappings: Mapping[str, str] = field(default_factory=dict)
    entry_dir: Path | None = None


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    services: AppServices,
    app_prefix: str,
    switch_mappings: Mapping[str, str] | None = None,
    entry_dir: Path | None = None,
) -> None:
    """Store CLI state in the Click context for subcommand access.

    Args:
        ctx: Click context associated with the current invocation.
        traceback: Whether verbose tracebacks were requested.
        services: All application services from composition layer.
        app_prefix: Prefix for environment variables and settings filenames.
        switch_mappings: Validated command-line alias table.
        entry_dir: Explicit program directory for the first search steps.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from layered_appsettings.composition import build_testing
        >>> ctx = MagicMock()
        >>> ctx.obj = None
        >>> store_cli_context(ctx, traceback=True, services=build_testing(), app_prefix="MYAPP_")
        >>> ctx.obj.traceback, ctx.obj.app_prefix
        (True, 'MYAPP_')
    """
    ctx.obj = CLIContext(
        traceback=traceback,
        services=services,
        app_prefix=app_prefix,
        switch_mappings=dict(switch_mappings or {}),
        entry_dir=entry_dir,
    )


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Retrieve typed CLI state from Click context.

    Raises:
        RuntimeError: If CLI context was not properly initialized.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> ctx.obj = CLIContext(traceback=False, services=MagicMock(), app_prefix="MYAPP_")
        >>> get_cli_context(ctx).traceback
        False
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Synchronise shared traceback flags with the requested preference.

    Args:
        enabled: ``True`` enables full tracebacks with colour.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    """Capture the current traceback configuration for later restoration.

    Example:
        >>> state = snapshot_traceback_state()
        >>> isinstance(state, tuple) and len(state) == 2
        True
    """
    return (
        bool(getattr(lib_cli_exit_tools.config, "traceback", False)),
        bool(getattr(lib_cli_exit_tools.config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Reapply a previously captured traceback configuration.

    Example:
        >>> original = snapshot_traceback_state()
        >>> apply_traceback_preferences(True)
        >>> restore_traceback_state(original)
        >>> lib_cli_exit_tools.config.traceback == original[0]
        True
    """
    lib_cli_exit_tools.config.traceback = state[0]
    lib_cli_exit_tools.config.traceback_force_color = state[1]


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
