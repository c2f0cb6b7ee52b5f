"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no environment, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_configuration_in_memory,
    plan_settings_files_in_memory,
    resolve_configuration_in_memory,
)
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from layered_appsettings.application.ports import (
        DisplayConfiguration,
        InitLogging,
        PlanSettingsFiles,
        ResolveConfiguration,
    )

    _assert_resolve_configuration: ResolveConfiguration = resolve_configuration_in_memory
    _assert_plan_settings_files: PlanSettingsFiles = plan_settings_files_in_memory
    _assert_display_configuration: DisplayConfiguration = display_configuration_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "display_configuration_in_memory",
    "init_logging_in_memory",
    "plan_settings_files_in_memory",
    "resolve_configuration_in_memory",
]
