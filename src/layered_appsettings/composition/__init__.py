"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.binding import bind_section
from ..adapters.config.discovery import iter_search_plan, plan_settings_files
from ..adapters.config.display import display_configuration
from ..adapters.config.loader import resolve_configuration

# Logging services
from ..adapters.logging.setup import init_logging

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..application.ports import (
        DisplayConfiguration,
        InitLogging,
        PlanSettingsFiles,
        ResolveConfiguration,
    )

    _assert_resolve_configuration: ResolveConfiguration = resolve_configuration
    _assert_plan_settings_files: PlanSettingsFiles = iter_search_plan
    _assert_display_configuration: DisplayConfiguration = display_configuration
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    resolve_configuration: ResolveConfiguration
    plan_settings_files: PlanSettingsFiles
    display_configuration: DisplayConfiguration
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        resolve_configuration=resolve_configuration,
        plan_settings_files=iter_search_plan,
        display_configuration=display_configuration,
        init_logging=init_logging,
    )


def build_testing() -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Returns:
        AppServices container with in-memory adapters: an empty store, no
        settings files, no display output and no logging runtime.
    """
    from ..adapters.memory import (
        display_configuration_in_memory,
        init_logging_in_memory,
        plan_settings_files_in_memory,
        resolve_configuration_in_memory,
    )

    return AppServices(
        resolve_configuration=resolve_configuration_in_memory,
        plan_settings_files=plan_settings_files_in_memory,
        display_configuration=display_configuration_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "bind_section",
    "display_configuration",
    "plan_settings_files",
    "resolve_configuration",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
