"""Shared helpers for CLI commands that resolve settings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NoReturn

import rich_click as click

from layered_appsettings.adapters.config.locations import SearchLocations
from layered_appsettings.domain.errors import ConfigurationError
from layered_appsettings.domain.store import ConfigurationStore

from ..context import CLIContext
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def search_locations(cli_ctx: CLIContext) -> SearchLocations | None:
    """Return explicit search locations when ``--entry-dir`` was given.

    None lets the resolver detect every directory from the running process.

    Raises:
        EnvironmentInconsistencyError: When another search directory cannot be resolved.
    """
    if cli_ctx.entry_dir is None:
        return None
    return SearchLocations.detect(entry_dir=cli_ctx.entry_dir)


def exit_configuration_error(exc: ConfigurationError) -> NoReturn:
    """Report *exc* on stderr and exit with ``EX_CONFIG``."""
    logger.error("Settings could not be resolved", extra={"error": str(exc)})
    click.echo(f"\nError: {exc}", err=True)
    raise SystemExit(ExitCode.CONFIG_ERROR) from exc


def resolve_or_exit(cli_ctx: CLIContext, app_args: Sequence[str]) -> ConfigurationStore:
    """Resolve the store for *app_args*, exiting 78 on configuration errors."""
    try:
        return cli_ctx.services.resolve_configuration(
            cli_ctx.app_prefix,
            cli_ctx.switch_mappings,
            tuple(app_args),
            locations=search_locations(cli_ctx),
        )
    except ConfigurationError as exc:
        exit_configuration_error(exc)


__all__ = ["exit_configuration_error", "resolve_or_exit", "search_locations"]
