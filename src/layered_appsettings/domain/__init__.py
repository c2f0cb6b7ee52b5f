"""Domain layer - pure configuration model with no I/O or framework dependencies.

Contents:
    * :mod:`.keys` - Case-insensitive hierarchical keys
    * :mod:`.store` - Immutable configuration store and section views
    * :mod:`.enums` - Domain enumerations (OutputFormat, SourceKind)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import OutputFormat, SearchStep, SourceKind
from .errors import (
    ConfigurationError,
    EnvironmentInconsistencyError,
    InvalidSwitchMappingError,
    MalformedSourceError,
)
from .keys import ConfigKey
from .store import ConfigurationSection, ConfigurationStore, SourceInfo, StoreEntry

__all__ = [
    # Model
    "ConfigKey",
    "ConfigurationSection",
    "ConfigurationStore",
    "SourceInfo",
    "StoreEntry",
    # Enums
    "OutputFormat",
    "SearchStep",
    "SourceKind",
    # Errors
    "ConfigurationError",
    "EnvironmentInconsistencyError",
    "InvalidSwitchMappingError",
    "MalformedSourceError",
]
