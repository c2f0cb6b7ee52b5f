"""Plan which settings files to load, in precedence order.

Search order (each step optional, earliest lowest precedence):

1. ``appsettings.json`` beside the running program.
2. ``<prefix>appsettings*.json`` beside the running program.
3. ``<prefix>appsettings*.json`` in the shared documents directory.
4. ``<prefix>appsettings*.json`` in the user's home directory.
5. ``<prefix>appsettings*.json`` in the current working directory.
6. Files named by ``AdditionalAppSettingsFilePath`` (see :mod:`.bootstrap`).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path

from layered_appsettings.domain.enums import SearchStep

from .bootstrap import additional_settings_files, resolve_bootstrap
from .locations import SearchLocations
from .paths import resolve_pattern

APPSETTINGS_FILENAME = "appsettings.json"
APPSETTINGS_WILDCARD = "appsettings*.json"


def settings_wildcard(app_prefix: str) -> str:
    """Return the prefixed filename pattern.

    Example:
        >>> settings_wildcard("MYAPP_")
        'MYAPP_appsettings*.json'
    """
    return f"{app_prefix}{APPSETTINGS_WILDCARD}"


def iter_search_plan(
    app_prefix: str,
    args: Sequence[str],
    *,
    environ: Mapping[str, str] | None = None,
    locations: SearchLocations | None = None,
) -> Iterator[tuple[SearchStep, Path]]:
    """Yield ``(step, path)`` for every existing settings file, lazily.

    Raises:
        EnvironmentInconsistencyError: When *locations* is omitted and a
            special directory cannot be resolved.
    """
    if locations is None:
        locations = SearchLocations.detect(environ)

    default_file = locations.entry_dir / APPSETTINGS_FILENAME
    if default_file.is_file():
        yield SearchStep.ENTRY_DEFAULT, default_file

    wildcard = settings_wildcard(app_prefix)
    for step, directory in (
        (SearchStep.ENTRY, locations.entry_dir),
        (SearchStep.SHARED_DOCUMENTS, locations.shared_documents_dir),
        (SearchStep.USER_PROFILE, locations.user_profile_dir),
        (SearchStep.WORKING_DIRECTORY, locations.working_dir),
    ):
        for path in resolve_pattern(directory / wildcard):
            yield step, path

    bootstrap = resolve_bootstrap(app_prefix, args, environ=environ)
    for path in additional_settings_files(bootstrap, cwd=locations.working_dir):
        yield SearchStep.ADDITIONAL, path


def plan_settings_files(
    app_prefix: str,
    args: Sequence[str],
    *,
    environ: Mapping[str, str] | None = None,
    locations: SearchLocations | None = None,
) -> Iterator[Path]:
    """Yield settings file paths in precedence order (earliest lowest).

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     root = Path(tmp)
        ...     _ = (root / "appsettings.json").write_text("{}")
        ...     _ = (root / "MYAPP_appsettings.local.json").write_text("{}")
        ...     where = SearchLocations(root, root / "shared", root / "home", root / "cwd")
        ...     [p.name for p in plan_settings_files("MYAPP_", [], environ={}, locations=where)]
        ['appsettings.json', 'MYAPP_appsettings.local.json']
    """
    for _step, path in iter_search_plan(app_prefix, args, environ=environ, locations=locations):
        yield path


__all__ = [
    "APPSETTINGS_FILENAME",
    "APPSETTINGS_WILDCARD",
    "iter_search_plan",
    "plan_settings_files",
    "settings_wildcard",
]
