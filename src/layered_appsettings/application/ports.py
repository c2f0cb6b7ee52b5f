"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Module-level functions satisfy
these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Adapter-owned types
    (``SearchLocations``) are imported under ``TYPE_CHECKING`` only.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..domain.enums import OutputFormat, SearchStep
from ..domain.store import ConfigurationStore

if TYPE_CHECKING:
    from ..adapters.config.locations import SearchLocations


class ResolveConfiguration(Protocol):
    """Resolve files, environment and command line into a store."""

    def __call__(
        self,
        app_prefix: str,
        switch_mappings: Mapping[str, str] | None = ...,
        args: Sequence[str] | None = ...,
        *,
        environ: Mapping[str, str] | None = ...,
        locations: SearchLocations | None = ...,
    ) -> ConfigurationStore: ...


class PlanSettingsFiles(Protocol):
    """Yield ``(step, path)`` for every settings file in precedence order."""

    def __call__(
        self,
        app_prefix: str,
        args: Sequence[str],
        *,
        environ: Mapping[str, str] | None = ...,
        locations: SearchLocations | None = ...,
    ) -> Iterator[tuple[SearchStep, Path]]: ...


class DisplayConfiguration(Protocol):
    """Display the resolved store in the requested format."""

    def __call__(
        self,
        store: ConfigurationStore,
        *,
        output_format: OutputFormat = ...,
        section: str | None = ...,
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime from the resolved store."""

    def __call__(self, store: ConfigurationStore) -> None: ...


__all__ = [
    "DisplayConfiguration",
    "InitLogging",
    "PlanSettingsFiles",
    "ResolveConfiguration",
]
