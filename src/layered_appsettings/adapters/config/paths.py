"""Resolve a single-directory wildcard pattern into existing files.

A pattern is a path whose filename may contain ``*`` (any run of characters)
and ``?`` (exactly one character). Only the directory named by the pattern
is listed; there is no recursion. Results are sorted by filename so merges
are reproducible regardless of filesystem enumeration order.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_WILDCARDS = frozenset("*?")


def has_wildcard(name: str) -> bool:
    """Return True when *name* contains ``*`` or ``?``.

    Example:
        >>> has_wildcard("MYAPP_appsettings*.json")
        True
        >>> has_wildcard("appsettings.json")
        False
    """
    return any(char in _WILDCARDS for char in name)


def compile_wildcard(name: str) -> re.Pattern[str]:
    """Translate a ``*``/``?`` filename pattern into an anchored regex.

    Every other character is literal, so ``[`` or ``]`` in a filename do not
    open a character class. Matching ignores case on Windows only.

    Example:
        >>> bool(compile_wildcard("b_*.json").fullmatch("b_local.json"))
        True
        >>> bool(compile_wildcard("b_?.json").fullmatch("b_10.json"))
        False
    """
    parts: list[str] = []
    for char in name:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    flags = re.DOTALL | (re.IGNORECASE if os.name == "nt" else 0)
    return re.compile("".join(parts), flags)


def resolve_pattern(pattern: str | os.PathLike[str], *, cwd: Path | None = None) -> list[Path]:
    """Return existing files matching *pattern*, sorted by filename.

    Args:
        pattern: File path whose filename component may hold wildcards.
        cwd: Directory that relative patterns are resolved against.
            Defaults to the process working directory.

    Returns:
        Matching regular files. A pattern without wildcards resolves to exactly
        that file when it exists. A missing directory yields an empty list.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     for name in ("b_2.json", "a.json", "b_1.json"):
        ...         _ = (Path(tmp) / name).write_text("{}")
        ...     [p.name for p in resolve_pattern(Path(tmp) / "b_*.json")]
        ['b_1.json', 'b_2.json']
    """
    directory, filename = os.path.split(os.fspath(pattern))
    base = Path(directory)
    if not base.is_absolute():
        base = (cwd if cwd is not None else Path.cwd()) / base

    if not filename:
        return []

    if not has_wildcard(filename):
        candidate = base / filename
        try:
            return [candidate] if candidate.is_file() else []
        except OSError as exc:
            logger.debug("Settings path cannot be inspected", extra={"path": str(candidate), "error": str(exc)})
            return []

    matcher = compile_wildcard(filename)
    try:
        with os.scandir(base) as listing:
            entries = list(listing)
    except (FileNotFoundError, NotADirectoryError):
        logger.debug("Search directory does not exist", extra={"directory": str(base)})
        return []
    except OSError as exc:
        logger.debug("Search directory cannot be listed", extra={"directory": str(base), "error": str(exc)})
        return []

    matches = [base / entry.name for entry in entries if matcher.fullmatch(entry.name) and _is_file(entry)]
    return sorted(matches, key=lambda path: path.name)


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


__all__ = [
    "compile_wildcard",
    "has_wildcard",
    "resolve_pattern",
]
