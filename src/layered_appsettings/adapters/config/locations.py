"""Special directories searched for settings files.

Contents:
    * :class:`SearchLocations` - the four fixed search directories.
    * :func:`entry_directory` - directory of the running entry script.
    * :func:`shared_documents_directory` - machine-wide documents folder.
    * :func:`user_profile_directory` - the current user's home.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from layered_appsettings.domain.errors import EnvironmentInconsistencyError


def entry_directory() -> Path:
    """Return the directory holding the running program.

    Frozen executables report ``sys.executable``; otherwise the ``__main__``
    module's file is used, then ``sys.argv[0]``.

    Raises:
        EnvironmentInconsistencyError: When no entry location can be found,
            e.g. in an interactive interpreter.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    main_file = getattr(sys.modules.get("__main__"), "__file__", None)
    if main_file:
        return Path(main_file).resolve().parent

    if sys.argv and sys.argv[0] and Path(sys.argv[0]).is_file():
        return Path(sys.argv[0]).resolve().parent

    raise EnvironmentInconsistencyError("cannot determine the directory of the running program")


def shared_documents_directory(environ: Mapping[str, str] | None = None) -> Path:
    """Return the documents directory shared by all users of the machine.

    Windows uses ``%PUBLIC%\\Documents``, macOS ``/Users/Shared`` and other
    POSIX systems ``/usr/local/share``.

    Raises:
        EnvironmentInconsistencyError: On Windows when ``PUBLIC`` is unset.
    """
    environ = os.environ if environ is None else environ
    if os.name == "nt":
        public = environ.get("PUBLIC")
        if not public:
            raise EnvironmentInconsistencyError("cannot determine the shared documents directory: PUBLIC is not set")
        return Path(public) / "Documents"
    if sys.platform == "darwin":
        return Path("/Users/Shared")
    return Path("/usr/local/share")


def user_profile_directory() -> Path:
    """Return the current user's home directory.

    Raises:
        EnvironmentInconsistencyError: When the home directory is unknown.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise EnvironmentInconsistencyError(f"cannot determine the user profile directory: {exc}") from exc


@dataclass(frozen=True, slots=True)
class SearchLocations:
    """Directories visited by the discovery plan, in search order.

    Example:
        >>> locations = SearchLocations(
        ...     entry_dir=Path("/opt/app"),
        ...     shared_documents_dir=Path("/usr/local/share"),
        ...     user_profile_dir=Path("/home/me"),
        ...     working_dir=Path("/srv/work"),
        ... )
        >>> locations.entry_dir.name
        'app'
    """

    entry_dir: Path
    shared_documents_dir: Path
    user_profile_dir: Path
    working_dir: Path

    @classmethod
    def detect(cls, environ: Mapping[str, str] | None = None, *, entry_dir: Path | None = None) -> SearchLocations:
        """Resolve every location from the running process.

        Args:
            environ: Environment used for platform lookups. Defaults to ``os.environ``.
            entry_dir: Explicit program directory, skipping entry detection.

        Raises:
            EnvironmentInconsistencyError: When any directory cannot be resolved.
        """
        return cls(
            entry_dir=entry_dir if entry_dir is not None else entry_directory(),
            shared_documents_dir=shared_documents_directory(environ),
            user_profile_dir=user_profile_directory(),
            working_dir=Path.cwd(),
        )


__all__ = [
    "SearchLocations",
    "entry_directory",
    "shared_documents_directory",
    "user_profile_directory",
]
