"""Static package metadata surfaced to CLI commands and documentation.

Keep these values in sync with ``pyproject.toml``; ``tests/test_metadata.py``
checks that they agree.
"""

from __future__ import annotations

name = "layered_appsettings"
title = "Resolve layered appsettings from JSON files, environment variables and command-line arguments"
version = "1.0.0"
homepage = "https://github.com/layered-appsettings/layered_appsettings"
author = "layered-appsettings contributors"
author_email = "maintainers@layered-appsettings.dev"
shell_command = "layered-appsettings"

#: Prefix used for environment variables and settings filenames when none is given.
DEFAULT_APP_PREFIX = "MYAPP_"


def print_info() -> None:
    """Print the summarised metadata block used by ``layered-appsettings info``.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for layered_appsettings:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
        ("default_prefix", DEFAULT_APP_PREFIX),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "DEFAULT_APP_PREFIX",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
