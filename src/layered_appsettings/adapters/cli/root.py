"""Root CLI command group and global option handling.

Defines the top-level Click command group. Handles the global flags that
shape every resolution: ``--traceback``, ``--prefix``, ``--switch`` and
``--entry-dir``.

Contents:
    * :func:`cli` - Root command group with global options.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import rich_click as click

from layered_appsettings import __init__conf__
from layered_appsettings.adapters.config.sources import validate_switch_mappings
from layered_appsettings.domain.errors import InvalidSwitchMappingError

from .commands._shared import resolve_or_exit
from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, get_cli_context, store_cli_context

if TYPE_CHECKING:
    from layered_appsettings.composition import AppServices


def _parse_switch_mappings(raw: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``ALIAS=KEY`` options into a validated alias table.

    Raises:
        click.UsageError: If an entry lacks ``=`` or the table is invalid.

    Example:
        >>> _parse_switch_mappings(("--app=ApplicationName", "-l=Logging:LogLevel:Default"))
        {'--app': 'ApplicationName', '-l': 'Logging:LogLevel:Default'}
    """
    mappings: dict[str, str] = {}
    for entry in raw:
        alias, separator, target = entry.partition("=")
        if not separator:
            raise click.UsageError(f"--switch expects ALIAS=KEY, got {entry!r}")
        mappings[alias.strip()] = target.strip()
    try:
        return validate_switch_mappings(mappings)
    except InvalidSwitchMappingError as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--prefix",
    "app_prefix",
    type=str,
    default=__init__conf__.DEFAULT_APP_PREFIX,
    show_default=True,
    help="Prefix for environment variables and settings filenames",
)
@click.option(
    "--switch",
    "switches",
    multiple=True,
    default=(),
    metavar="ALIAS=KEY",
    help="Map a command-line alias onto a configuration key (repeatable), e.g. --switch --app=ApplicationName",
)
@click.option(
    "--entry-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory treated as the program directory (defaults to the running program's directory)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    traceback: bool,
    app_prefix: str,
    switches: tuple[str, ...],
    entry_dir: Path | None,
) -> None:
    """Root command storing global flags and initialising logging.

    Resolves the tool's own settings once (files and environment, no
    application arguments) to configure lib_log_rich, then stores the
    resolution options in the Click context for the subcommands.
    """
    # ctx.obj is always the services factory (production or test)
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # Click's obj is typed as Any
    store_cli_context(
        ctx,
        traceback=traceback,
        services=services,
        app_prefix=app_prefix,
        switch_mappings=_parse_switch_mappings(switches),
        entry_dir=entry_dir,
    )
    apply_traceback_preferences(traceback)

    tool_store = resolve_or_exit(get_cli_context(ctx), ())
    services.init_logging(tool_store)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Commands import from package ancestors, so registration is deferred until
# the ``cli`` group exists.
def _register_commands() -> None:
    from .commands import cli_demo, cli_fail, cli_files, cli_get, cli_info, cli_show

    for cmd in (cli_show, cli_get, cli_files, cli_demo, cli_info, cli_fail):
        cli.add_command(cmd)


_register_commands()


__all__ = ["cli"]
