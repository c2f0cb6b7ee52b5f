"""Public package surface exposing configuration resolution and metadata.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: Configuration keys, store and errors
- Composition exports: Wired adapter services (resolution, binding)
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Composition exports (wired adapters)
from .composition import bind_section, plan_settings_files, resolve_configuration

# Domain exports
from .domain import (
    ConfigKey,
    ConfigurationError,
    ConfigurationSection,
    ConfigurationStore,
    EnvironmentInconsistencyError,
    InvalidSwitchMappingError,
    MalformedSourceError,
)

__all__ = [
    "ConfigKey",
    "ConfigurationError",
    "ConfigurationSection",
    "ConfigurationStore",
    "EnvironmentInconsistencyError",
    "InvalidSwitchMappingError",
    "MalformedSourceError",
    "bind_section",
    "plan_settings_files",
    "print_info",
    "resolve_configuration",
]
