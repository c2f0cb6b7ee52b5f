"""Overlay configuration sources into one immutable store.

Sources are applied in the order given; for every key the value from the
last source that defines it wins. Every source is loaded before the store is
built, so a failing source aborts the pass without exposing a partial store.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from layered_appsettings.domain.keys import ConfigKey
from layered_appsettings.domain.store import ConfigurationStore, StoreEntry

from .sources import CommandLineSource, ConfigurationSource, EnvironmentSource, JsonFileSource

logger = logging.getLogger(__name__)


def overlay(sources: Sequence[ConfigurationSource]) -> ConfigurationStore:
    """Apply *sources* lowest precedence first and return the merged store.

    The first spelling of a key is kept; the value comes from the last source.

    Example:
        >>> from layered_appsettings.adapters.config.sources import CommandLineSource, EnvironmentSource
        >>> env = EnvironmentSource("MYAPP_", {"MYAPP_ApplicationName": "FromEnv"})
        >>> cli = CommandLineSource(["--applicationname=FromCli"])
        >>> store = overlay([env, cli])
        >>> store["ApplicationName"], str(store.source_of("ApplicationName"))
        ('FromCli', 'command-line:argv')
        >>> [str(key) for key in store]
        ['ApplicationName']
    """
    loaded = [(source.info, source.load()) for source in sources]

    entries: dict[ConfigKey, StoreEntry] = {}
    for info, pairs in loaded:
        for key, value in pairs:
            entries[key] = StoreEntry(value=value, source=info)

    return ConfigurationStore(entries, [info for info, _ in loaded])


def build_sources(
    file_paths: Iterable[str | os.PathLike[str]],
    app_prefix: str,
    args: Sequence[str],
    switch_mappings: Mapping[str, str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> list[ConfigurationSource]:
    """Create the full source list: files, then environment, then command line."""
    sources: list[ConfigurationSource] = [JsonFileSource(Path(path)) for path in file_paths]
    sources.append(EnvironmentSource(app_prefix, environ))
    sources.append(CommandLineSource(args, switch_mappings))
    return sources


def merge_sources(
    file_paths: Iterable[str | os.PathLike[str]],
    app_prefix: str,
    args: Sequence[str],
    switch_mappings: Mapping[str, str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ConfigurationStore:
    """Load every file, overlay environment and command line, return the store.

    Args:
        file_paths: Settings files in precedence order (earliest lowest).
            Missing files contribute nothing.
        app_prefix: Environment variable prefix, matched case-sensitively.
        args: Raw command-line arguments.
        switch_mappings: Alias table such as ``{"--app": "ApplicationName"}``.
        environ: Environment mapping. Defaults to ``os.environ``.

    Raises:
        MalformedSourceError: When an existing file cannot be parsed.
        InvalidSwitchMappingError: When the alias table is malformed.
    """
    sources = build_sources(file_paths, app_prefix, args, switch_mappings, environ=environ)
    store = overlay(sources)
    logger.debug("Configuration merged", extra={"sources": len(store.sources), "keys": len(store)})
    return store


__all__ = [
    "build_sources",
    "merge_sources",
    "overlay",
]
