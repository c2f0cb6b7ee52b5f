"""Type-safe domain enums for output formats and source kinds."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class SourceKind(str, Enum):
    """Kinds of configuration source, listed in precedence order.

    Files are applied first, then the environment, then the command line;
    a later kind overrides an earlier one for any shared key.

    Example:
        >>> [kind.value for kind in SourceKind]
        ['file', 'environment', 'command-line']
    """

    FILE = "file"
    ENVIRONMENT = "environment"
    COMMAND_LINE = "command-line"


class SearchStep(str, Enum):
    """Step of the settings file search that found a file, in search order.

    Example:
        >>> SearchStep.WORKING_DIRECTORY.value
        'working-directory'
    """

    ENTRY_DEFAULT = "entry-default"
    ENTRY = "entry"
    SHARED_DOCUMENTS = "shared-documents"
    USER_PROFILE = "user-profile"
    WORKING_DIRECTORY = "working-directory"
    ADDITIONAL = "additional"


__all__ = [
    "OutputFormat",
    "SearchStep",
    "SourceKind",
]
