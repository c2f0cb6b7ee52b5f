"""Locate additional settings files before the main file set is loaded.

The reserved key ``AdditionalAppSettingsFilePath`` may only come from the
environment or the command line, since files are discovered using its value.
This module therefore runs its own small resolution over exactly those two
sources and returns a :class:`BootstrapSettings`, kept apart from the full
:class:`~layered_appsettings.domain.store.ConfigurationStore`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .merger import overlay
from .paths import resolve_pattern
from .sources import CommandLineSource, EnvironmentSource

logger = logging.getLogger(__name__)

ADDITIONAL_SETTINGS_KEY = "AdditionalAppSettingsFilePath"
ADDITIONAL_SETTINGS_SEPARATOR = ";"


@dataclass(frozen=True, slots=True)
class BootstrapSettings:
    """Result of the bootstrap pass: additional settings path patterns.

    Example:
        >>> BootstrapSettings.from_value("a.json;;overrides/b_*.json").additional_settings_paths
        ('a.json', 'overrides/b_*.json')
        >>> BootstrapSettings.from_value(None).additional_settings_paths
        ()
    """

    additional_settings_paths: tuple[str, ...] = ()

    @classmethod
    def from_value(cls, raw: str | None) -> BootstrapSettings:
        if not raw:
            return cls()
        segments = (segment for segment in raw.split(ADDITIONAL_SETTINGS_SEPARATOR) if segment.strip())
        return cls(additional_settings_paths=tuple(segments))


def resolve_bootstrap(
    app_prefix: str,
    args: Sequence[str],
    *,
    environ: Mapping[str, str] | None = None,
) -> BootstrapSettings:
    """Read ``AdditionalAppSettingsFilePath`` from environment and command line.

    No file source and no switch mappings take part.

    Example:
        >>> settings = resolve_bootstrap("MYAPP_", ["--AdditionalAppSettingsFilePath", "extra.json"], environ={})
        >>> settings.additional_settings_paths
        ('extra.json',)
    """
    store = overlay([EnvironmentSource(app_prefix, environ), CommandLineSource(args)])
    raw = store.get(ADDITIONAL_SETTINGS_KEY)
    if raw:
        logger.debug("Additional settings path requested", extra={"value": raw})
    return BootstrapSettings.from_value(raw)


def additional_settings_files(bootstrap: BootstrapSettings, *, cwd: Path | None = None) -> Iterator[Path]:
    """Yield files for each additional path pattern, in segment order.

    Segments that match nothing are skipped silently.
    """
    for pattern in bootstrap.additional_settings_paths:
        matches = resolve_pattern(pattern, cwd=cwd)
        if not matches:
            logger.debug("Additional settings path matched no files", extra={"pattern": pattern})
        yield from matches


__all__ = [
    "ADDITIONAL_SETTINGS_KEY",
    "ADDITIONAL_SETTINGS_SEPARATOR",
    "BootstrapSettings",
    "additional_settings_files",
    "resolve_bootstrap",
]
