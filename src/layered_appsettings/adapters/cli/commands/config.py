"""Settings inspection CLI commands.

Contents:
    * :func:`cli_show` - Display the resolved store.
    * :func:`cli_get` - Print a single value, optionally with its source.
    * :func:`cli_files` - List the settings files in precedence order.

Every command forwards its trailing arguments verbatim to the command-line
source, so ``layered-appsettings show --ApplicationName=Demo`` shows what
the application would see when started with ``--ApplicationName=Demo``.
Use ``--`` before application arguments that clash with command options.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from layered_appsettings.domain.enums import OutputFormat
from layered_appsettings.domain.errors import ConfigurationError

from ..constants import PASSTHROUGH_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode
from ._shared import exit_configuration_error, resolve_or_exit, search_locations

logger = logging.getLogger(__name__)


@click.command("show", context_settings=PASSTHROUGH_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option(
    "--section",
    type=str,
    default=None,
    help="Show only one section, e.g. 'ApiTester' or 'Logging:LogLevel'",
)
@click.argument("app_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli_show(ctx: click.Context, output_format: str, section: str | None, app_args: tuple[str, ...]) -> None:
    """Display the settings resolved from files, environment and APP_ARGS.

    Precedence: appsettings.json -> prefixed files (program, shared
    documents, home, working directory) -> additional paths -> environment -> APP_ARGS
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "show", "format": fmt.value, "prefix": cli_ctx.app_prefix}
    with lib_log_rich.runtime.bind(job_id="cli-show", extra=extra):
        store = resolve_or_exit(cli_ctx, app_args)
        logger.info("Displaying configuration", extra={"format": fmt.value, "section": section})
        click.echo()
        try:
            cli_ctx.services.display_configuration(store, output_format=fmt, section=section)
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


@click.command("get", context_settings=PASSTHROUGH_CONTEXT_SETTINGS)
@click.option(
    "--explain",
    is_flag=True,
    default=False,
    help="Also print the source that supplied the value",
)
@click.argument("key", type=str)
@click.argument("app_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli_get(ctx: click.Context, explain: bool, key: str, app_args: tuple[str, ...]) -> None:
    """Print the value of KEY (case-insensitive, ':' separated).

    Exits 1 when no source sets KEY. A key set to JSON null prints an empty line.
    """
    cli_ctx = get_cli_context(ctx)

    with lib_log_rich.runtime.bind(job_id="cli-get", extra={"command": "get", "key": key}):
        store = resolve_or_exit(cli_ctx, app_args)
        if key not in store:
            logger.warning("Key not set by any source", extra={"key": key})
            click.echo(f"Error: key '{key}' is not set", err=True)
            raise SystemExit(ExitCode.GENERAL_ERROR)

        value = store[key]
        click.echo("" if value is None else value)
        if explain:
            click.echo(f"source: {store.source_of(key)}")


@click.command("files", context_settings=PASSTHROUGH_CONTEXT_SETTINGS)
@click.argument("app_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli_files(ctx: click.Context, app_args: tuple[str, ...]) -> None:
    """List the settings files that would be loaded, lowest precedence first."""
    cli_ctx = get_cli_context(ctx)

    with lib_log_rich.runtime.bind(job_id="cli-files", extra={"command": "files", "prefix": cli_ctx.app_prefix}):
        try:
            plan = list(
                cli_ctx.services.plan_settings_files(
                    cli_ctx.app_prefix,
                    tuple(app_args),
                    locations=search_locations(cli_ctx),
                )
            )
        except ConfigurationError as exc:
            exit_configuration_error(exc)

        if not plan:
            click.echo("No settings files found.")
            return
        for position, (step, path) in enumerate(plan, start=1):
            click.echo(f"{position}. [{step.value}] {path}")


__all__ = ["cli_files", "cli_get", "cli_show"]
