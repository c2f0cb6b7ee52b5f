"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Settings inspection commands from :mod:`.config`
    * Sample application from :mod:`.demo`
    * Info commands from :mod:`.info`
"""

from __future__ import annotations

from .config import cli_files, cli_get, cli_show
from .demo import cli_demo
from .info import cli_fail, cli_info

__all__ = [
    "cli_demo",
    "cli_fail",
    "cli_files",
    "cli_get",
    "cli_info",
    "cli_show",
]
