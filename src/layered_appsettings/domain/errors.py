"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from pathlib import Path


class ConfigurationError(Exception):
    """Configuration could not be resolved.

    Base class for every fatal resolution failure. Caught at CLI boundaries
    to provide user-friendly error messages.

    Example:
        >>> from layered_appsettings.domain.errors import ConfigurationError
        >>> err = ConfigurationError("resolution failed")
        >>> str(err)
        'resolution failed'
    """


class MalformedSourceError(ConfigurationError):
    """A discovered settings file exists but cannot be parsed.

    Optional loading only covers absent files; an invalid file aborts the
    whole resolution regardless of what later sources would override.

    Example:
        >>> err = MalformedSourceError(Path("/tmp/appsettings.json"), "unexpected end of data")
        >>> err.path.name
        'appsettings.json'
        >>> "unexpected end of data" in str(err)
        True
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid settings file {path}: {reason}")
        self.path = path
        self.reason = reason


class EnvironmentInconsistencyError(ConfigurationError):
    """A special directory required by the search order cannot be resolved.

    Example:
        >>> str(EnvironmentInconsistencyError("cannot determine home directory"))
        'cannot determine home directory'
    """


class InvalidSwitchMappingError(ConfigurationError, ValueError):
    """The command-line alias table is malformed.

    Inherits from ValueError so argument-validation handlers catch it too.

    Example:
        >>> isinstance(InvalidSwitchMappingError("bad alias"), ValueError)
        True
    """


__all__ = [
    "ConfigurationError",
    "EnvironmentInconsistencyError",
    "InvalidSwitchMappingError",
    "MalformedSourceError",
]
