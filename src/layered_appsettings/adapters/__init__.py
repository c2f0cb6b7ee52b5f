"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to the
filesystem, the process environment and frameworks.

Contents:
    * :mod:`.config` - Settings discovery, sources, merging, binding and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory port implementations for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
