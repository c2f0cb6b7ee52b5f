"""In-memory configuration adapters for testing.

Provides configuration functions that satisfy the same Protocols as
production adapters but operate entirely in memory -- no filesystem,
no environment, no lib_layered_config.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from ...domain.enums import OutputFormat, SearchStep
from ...domain.store import ConfigurationStore

if TYPE_CHECKING:
    from ..config.locations import SearchLocations


def resolve_configuration_in_memory(
    app_prefix: str,
    switch_mappings: Mapping[str, str] | None = None,
    args: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    locations: SearchLocations | None = None,
) -> ConfigurationStore:
    """Return an empty store."""
    return ConfigurationStore.empty()


def plan_settings_files_in_memory(
    app_prefix: str,
    args: Sequence[str],
    *,
    environ: Mapping[str, str] | None = None,
    locations: SearchLocations | None = None,
) -> Iterator[tuple[SearchStep, Path]]:
    """Yield nothing -- there are no settings files in memory."""
    yield from ()


def display_configuration_in_memory(
    store: ConfigurationStore,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
) -> None:
    """No-op display -- satisfies the DisplayConfiguration protocol."""


__all__ = [
    "display_configuration_in_memory",
    "plan_settings_files_in_memory",
    "resolve_configuration_in_memory",
]
