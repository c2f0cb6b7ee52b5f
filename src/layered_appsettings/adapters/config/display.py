"""Display configuration - delegates to lib_layered_config.

Converts the store into a ``lib_layered_config.Config`` and renders it with
the Rich-styled display, flushing pending log output first so log lines do
not interleave with the configuration.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from layered_appsettings.domain.enums import OutputFormat
from layered_appsettings.domain.store import ConfigurationStore


def to_layered_config(store: ConfigurationStore, section: str | None = None) -> tuple[Config, str | None]:
    """Convert *store* (or one section of it) into a ``Config``.

    Returns the config together with the section name to pass on, spelled as
    stored. Section lookup ignores case and accepts ``:`` paths.

    Raises:
        ValueError: If the requested section does not exist.

    Example:
        >>> from layered_appsettings.adapters.config.merger import overlay
        >>> from layered_appsettings.adapters.config.sources import CommandLineSource
        >>> store = overlay([CommandLineSource(["--Logging:LogLevel:Default=Debug"])])
        >>> config, name = to_layered_config(store, "logging")
        >>> name, config.as_dict()
        ('Logging', {'Logging': {'LogLevel': {'Default': 'Debug'}}})
    """
    if not section:
        return Config(store.as_dict(), {}), None

    view = store.get_section(section)
    if not view.exists():
        raise ValueError(f"Configuration section '{section}' not found")
    data = view.to_data()
    return Config({view.key: data}, {}), view.key if isinstance(data, dict) else None


def display_configuration(
    store: ConfigurationStore,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
) -> None:
    """Display the resolved store using lib_layered_config's Rich display.

    Args:
        store: Resolved configuration store.
        output_format: OutputFormat.HUMAN for TOML-like display or
            OutputFormat.JSON for JSON.
        section: Optional section path to display alone.
        console: Optional Rich Console for output, mainly for tests.

    Side Effects:
        Flushes pending log messages before display.
        Writes formatted configuration to stdout.

    Raises:
        ValueError: If a section was requested that doesn't exist.
    """
    config, lib_section = to_layered_config(store, section)

    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    lib_format = LibOutputFormat(output_format.value)
    _lib_display(config, output_format=lib_format, section=lib_section, console=console)


__all__ = [
    "display_configuration",
    "to_layered_config",
]
