"""Application layer - port definitions.

Contains port protocols that define the interfaces for adapter implementations.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    DisplayConfiguration,
    InitLogging,
    PlanSettingsFiles,
    ResolveConfiguration,
)

__all__ = [
    "DisplayConfiguration",
    "InitLogging",
    "PlanSettingsFiles",
    "ResolveConfiguration",
]
