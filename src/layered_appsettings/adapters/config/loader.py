"""One-shot configuration resolution: bootstrap, discover, merge.

Centralizes the pipeline so every entry point uses the same precedence rules.
Each call is a full, independent pass; calling again is how a caller reloads,
and the new store never affects one handed out earlier.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence

from layered_appsettings.domain.store import ConfigurationStore

from .discovery import plan_settings_files
from .locations import SearchLocations
from .merger import merge_sources
from .sources import validate_switch_mappings

logger = logging.getLogger(__name__)


def resolve_configuration(
    app_prefix: str,
    switch_mappings: Mapping[str, str] | None = None,
    args: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    locations: SearchLocations | None = None,
) -> ConfigurationStore:
    """Resolve settings files, environment variables and arguments into a store.

    Precedence (lowest first): ``appsettings.json`` beside the program →
    ``<prefix>appsettings*.json`` beside the program, in shared documents,
    in the home directory, in the working directory → additional settings
    paths → environment → command line.

    Args:
        app_prefix: Prefix for environment variables and settings filenames
            (e.g. ``"MYAPP_"``).
        switch_mappings: Command-line alias table, e.g. ``{"--app": "ApplicationName"}``.
        args: Command-line arguments. Defaults to ``sys.argv[1:]``.
        environ: Environment mapping. Defaults to ``os.environ``.
        locations: Search directories. Detected from the process when None.

    Returns:
        Immutable configuration store.

    Raises:
        MalformedSourceError: When a discovered settings file is invalid.
        EnvironmentInconsistencyError: When a search directory cannot be resolved.
        InvalidSwitchMappingError: When the alias table is malformed.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     root = Path(tmp)
        ...     _ = (root / "appsettings.json").write_text('{"ApplicationName": "MyConsoleApp"}')
        ...     where = SearchLocations(root, root, root, root)
        ...     store = resolve_configuration("MYAPP_", {"--app": "ApplicationName"}, ["--app", "NewAppName"],
        ...                                   environ={}, locations=where)
        >>> store["ApplicationName"]
        'NewAppName'
    """
    mappings = validate_switch_mappings(switch_mappings)
    argv = tuple(sys.argv[1:] if args is None else args)

    settings_files = []
    for path in plan_settings_files(app_prefix, argv, environ=environ, locations=locations):
        logger.info("AppSettings file processed", extra={"path": str(path)})
        settings_files.append(path)

    return merge_sources(settings_files, app_prefix, argv, mappings, environ=environ)


__all__ = ["resolve_configuration"]
