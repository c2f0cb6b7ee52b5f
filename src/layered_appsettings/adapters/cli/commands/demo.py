"""Sample application reading its settings through the resolver.

Contents:
    * :class:`ApiTesterSettings` - typed view of the ``ApiTester`` section.
    * :func:`cli_demo` - print well-known keys and the bound section.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import lib_log_rich.runtime
import rich_click as click
from pydantic import BaseModel, ConfigDict, Field

from layered_appsettings.adapters.config.binding import bind_section
from layered_appsettings.domain.errors import ConfigurationError

from ..constants import PASSTHROUGH_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._shared import exit_configuration_error, resolve_or_exit

logger = logging.getLogger(__name__)

DEMO_SWITCH_MAPPINGS = {"--app": "ApplicationName"}


def _with_demo_aliases(switch_mappings: Mapping[str, str]) -> dict[str, str]:
    """Add the demo aliases the user did not define themselves.

    Example:
        >>> _with_demo_aliases({"--APP": "Name"})
        {'--APP': 'Name'}
        >>> _with_demo_aliases({})
        {'--app': 'ApplicationName'}
    """
    defined = {alias.casefold() for alias in switch_mappings}
    merged = {alias: key for alias, key in DEMO_SWITCH_MAPPINGS.items() if alias.casefold() not in defined}
    merged.update(switch_mappings)
    return merged


class ApiTesterSettings(BaseModel):
    """Typed ``ApiTester`` section.

    Example:
        >>> ApiTesterSettings(SupportedMethods=["GET"]).supported_methods
        ['GET']
    """

    model_config = ConfigDict(populate_by_name=True)

    supported_methods: list[str] = Field(default_factory=list, alias="SupportedMethods")
    max_retries: int = Field(default=0, alias="MaxRetries")
    base_url: str = Field(default="", alias="BaseUrl")


@click.command("demo", context_settings=PASSTHROUGH_CONTEXT_SETTINGS)
@click.argument("app_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli_demo(ctx: click.Context, app_args: tuple[str, ...]) -> None:
    """Print the settings a sample console application would read.

    ``--app`` is always available as an alias for ``ApplicationName``.
    """
    cli_ctx = get_cli_context(ctx)
    cli_ctx.switch_mappings = _with_demo_aliases(cli_ctx.switch_mappings)

    with lib_log_rich.runtime.bind(job_id="cli-demo", extra={"command": "demo", "prefix": cli_ctx.app_prefix}):
        store = resolve_or_exit(cli_ctx, app_args)
        try:
            api_tester = bind_section(store, "ApiTester", ApiTesterSettings)
        except ConfigurationError as exc:
            exit_configuration_error(exc)

        logger.info("Running demo application")
        click.echo(f"Application Name: {store.get('ApplicationName') or ''}")
        click.echo(f"Default Log Level: {store.get('Logging:LogLevel:Default') or ''}")
        click.echo(f"Extra Entry: {store.get('ExtraEntry') or ''}")
        click.echo("ApiTester:")
        click.echo(f"  Supported Methods: {', '.join(api_tester.supported_methods)}")
        click.echo(f"  Max Retries: {api_tester.max_retries}")
        click.echo(f"  Base Url: {api_tester.base_url}")


__all__ = ["ApiTesterSettings", "cli_demo"]
