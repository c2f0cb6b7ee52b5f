"""Configuration adapter - the layered resolution engine.

Contents:
    * :mod:`.paths` - Wildcard path resolution in one directory
    * :mod:`.locations` - Special search directories
    * :mod:`.bootstrap` - Additional settings path pre-resolution
    * :mod:`.discovery` - Ordered settings file discovery
    * :mod:`.sources` - JSON file, environment and command-line sources
    * :mod:`.merger` - Source overlay into the configuration store
    * :mod:`.loader` - One-shot resolution pipeline
    * :mod:`.binding` - Section binding into pydantic models
    * :mod:`.display` - Configuration display in human/JSON formats
"""

from __future__ import annotations

from .binding import bind_section, coerce_value
from .bootstrap import ADDITIONAL_SETTINGS_KEY, BootstrapSettings, additional_settings_files, resolve_bootstrap
from .discovery import iter_search_plan, plan_settings_files
from .display import display_configuration
from .loader import resolve_configuration
from .locations import SearchLocations
from .merger import merge_sources, overlay
from .paths import resolve_pattern
from .sources import CommandLineSource, EnvironmentSource, JsonFileSource, validate_switch_mappings

__all__ = [
    "ADDITIONAL_SETTINGS_KEY",
    "BootstrapSettings",
    "CommandLineSource",
    "EnvironmentSource",
    "JsonFileSource",
    "SearchLocations",
    "additional_settings_files",
    "bind_section",
    "coerce_value",
    "display_configuration",
    "iter_search_plan",
    "merge_sources",
    "overlay",
    "plan_settings_files",
    "resolve_bootstrap",
    "resolve_configuration",
    "resolve_pattern",
    "validate_switch_mappings",
]
