"""Configuration sources: JSON files, environment variables, command line.

Each source turns its raw input into ``(ConfigKey, value)`` pairs. Sources
never merge anything themselves; :mod:`.merger` applies them in order.

Contents:
    * :class:`JsonFileSource` - optional-load JSON settings file.
    * :class:`EnvironmentSource` - prefix-filtered environment variables.
    * :class:`CommandLineSource` - ``--key=value`` style arguments with aliases.
    * :func:`validate_switch_mappings` - alias table validation.
"""

from __future__ import annotations

import codecs
import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

import orjson

from layered_appsettings.domain.enums import SourceKind
from layered_appsettings.domain.errors import InvalidSwitchMappingError, MalformedSourceError
from layered_appsettings.domain.keys import ENV_KEY_DELIMITER, ConfigKey
from layered_appsettings.domain.store import ConfigValue, SourceInfo

logger = logging.getLogger(__name__)

KeyValuePairs = list[tuple[ConfigKey, ConfigValue]]


class ConfigurationSource(Protocol):
    """Anything the merger can apply."""

    @property
    def info(self) -> SourceInfo: ...

    def load(self) -> KeyValuePairs: ...


class JsonFileSource:
    """A JSON settings file loaded with optional-load semantics.

    A missing file yields no pairs. A file that exists but does not parse,
    whose root is not an object, or that repeats a key (ignoring case) raises
    :class:`MalformedSourceError`. Numbers keep the text they have in the
    file, so ``1.50`` stays ``"1.50"`` and large integers keep every digit.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     path = Path(tmp) / "appsettings.json"
        ...     _ = path.write_text('{"ApiTester": {"SupportedMethods": ["GET", "POST"], "MaxRetries": 3}}')
        ...     [(str(k), v) for k, v in JsonFileSource(path).load()]
        [('ApiTester:SupportedMethods:0', 'GET'), ('ApiTester:SupportedMethods:1', 'POST'), ('ApiTester:MaxRetries', '3')]
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def info(self) -> SourceInfo:
        return SourceInfo(kind=SourceKind.FILE, name=str(self.path))

    def load(self) -> KeyValuePairs:
        try:
            raw = self.path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            logger.debug("Optional settings file not present", extra={"path": str(self.path)})
            return []

        if raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8) :]
        try:
            document = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise MalformedSourceError(self.path, str(exc)) from exc

        if not isinstance(document, dict):
            raise MalformedSourceError(self.path, f"top-level JSON value must be an object, got {type(document).__name__}")

        # orjson has validated the document; this second pass only keeps
        # number tokens and repeated keys exactly as written.
        document = json.loads(
            raw.decode("utf-8"),
            object_pairs_hook=_JsonObject,
            parse_int=str,
            parse_float=str,
        )

        flattened: dict[ConfigKey, ConfigValue] = {}
        self._flatten(document, (), flattened)
        return list(flattened.items())

    def _flatten(self, node: object, path: tuple[str, ...], out: dict[ConfigKey, ConfigValue]) -> None:
        if isinstance(node, _JsonObject):
            if not node and path:
                self._put(out, path, None)
            seen: set[str] = set()
            for name, child in node:
                if name.casefold() in seen:
                    raise MalformedSourceError(self.path, f"duplicate key '{ConfigKey((*path, name))}'")
                seen.add(name.casefold())
                self._flatten(child, (*path, name), out)
        elif isinstance(node, list):
            if not node and path:
                self._put(out, path, None)
            for index, child in enumerate(node):
                self._flatten(child, (*path, str(index)), out)
        else:
            self._put(out, path, _scalar_text(node))

    def _put(self, out: dict[ConfigKey, ConfigValue], path: tuple[str, ...], value: ConfigValue) -> None:
        key = ConfigKey(path)
        if key in out:
            raise MalformedSourceError(self.path, f"duplicate key '{key}'")
        out[key] = value


class _JsonObject(list[tuple[str, object]]):
    """Name/value pairs of one JSON object in file order, duplicates kept."""


def _scalar_text(value: object) -> ConfigValue:
    """Render a JSON scalar as store text; numbers already arrive as their token text.

    Example:
        >>> [_scalar_text(v) for v in ("x", "1.50", True, False, None)]
        ['x', '1.50', 'true', 'false', None]
    """
    if value is None or isinstance(value, str):
        return value
    return orjson.dumps(value).decode("utf-8")


class EnvironmentSource:
    """Environment variables whose name starts with *prefix*.

    The prefix match is case-sensitive; the prefix is stripped and ``__``
    separates hierarchy levels. Variables are applied in name order.

    Example:
        >>> env = {"MYAPP_Logging__LogLevel__Default": "Debug", "PATH": "/usr/bin"}
        >>> [(str(k), v) for k, v in EnvironmentSource("MYAPP_", env).load()]
        [('Logging:LogLevel:Default', 'Debug')]
    """

    def __init__(self, prefix: str = "", environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix
        self._environ = environ

    @property
    def info(self) -> SourceInfo:
        return SourceInfo(kind=SourceKind.ENVIRONMENT, name=f"{self.prefix}*")

    def load(self) -> KeyValuePairs:
        environ = os.environ if self._environ is None else self._environ
        pairs: KeyValuePairs = []
        for name in sorted(environ):
            if not name.startswith(self.prefix):
                continue
            remainder = name[len(self.prefix) :]
            if not remainder:
                continue
            pairs.append((ConfigKey.parse(remainder, ENV_KEY_DELIMITER), environ[name]))
        return pairs


def validate_switch_mappings(switch_mappings: Mapping[str, str] | None) -> dict[str, str]:
    """Check an alias table and return it as a plain dict.

    Every alias must start with ``-`` (``-a`` or ``--app``) and no two
    aliases may differ only by case.

    Raises:
        InvalidSwitchMappingError: On a malformed alias.

    Example:
        >>> validate_switch_mappings({"--app": "ApplicationName"})
        {'--app': 'ApplicationName'}
        >>> validate_switch_mappings({"app": "ApplicationName"})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidSwitchMappingError: switch alias 'app' must start with '-' or '--'
    """
    if not switch_mappings:
        return {}
    seen: set[str] = set()
    for alias, target in switch_mappings.items():
        if not alias.startswith("-") or alias.strip("-") == "":
            raise InvalidSwitchMappingError(f"switch alias {alias!r} must start with '-' or '--'")
        folded = alias.casefold()
        if folded in seen:
            raise InvalidSwitchMappingError(f"switch alias {alias!r} is defined more than once")
        if not target:
            raise InvalidSwitchMappingError(f"switch alias {alias!r} maps to an empty key")
        seen.add(folded)
    return dict(switch_mappings)


class CommandLineSource:
    """Command-line arguments in ``--key=value`` / ``--key value`` form.

    ``/key`` is treated as ``--key``. Aliases are looked up on the switch text
    exactly as written (``--app``, ``-a``). Single-dash switches only count
    when aliased; tokens without a switch prefix and switches with no value
    are skipped.

    Example:
        >>> source = CommandLineSource(["--app", "NewAppName", "/Logging:LogLevel:Default=Debug"], {"--app": "ApplicationName"})
        >>> [(str(k), v) for k, v in source.load()]
        [('ApplicationName', 'NewAppName'), ('Logging:LogLevel:Default', 'Debug')]
    """

    def __init__(self, args: Sequence[str], switch_mappings: Mapping[str, str] | None = None) -> None:
        self.args = tuple(args)
        self.switch_mappings = validate_switch_mappings(switch_mappings)

    @property
    def info(self) -> SourceInfo:
        return SourceInfo(kind=SourceKind.COMMAND_LINE, name="argv")

    def load(self) -> KeyValuePairs:
        pairs: KeyValuePairs = []
        tokens = self.args
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1

            if token.startswith("--"):
                switch, key_start = token, 2
            elif token.startswith("/"):
                switch, key_start = "--" + token[1:], 2
            elif token.startswith("-"):
                switch, key_start = token, 1
            else:
                logger.debug("Ignoring positional argument", extra={"argument": token})
                continue

            name, separator, inline_value = switch.partition("=")
            key_text = self._key_for(name, key_start)
            if not key_text:
                continue

            if separator:
                value = inline_value
            elif index < len(tokens):
                value = tokens[index]
                index += 1
            else:
                logger.debug("Ignoring switch without value", extra={"argument": token})
                continue

            pairs.append((ConfigKey.parse(key_text), value))
        return pairs

    def _key_for(self, switch_name: str, key_start: int) -> str:
        mapped = self.switch_mappings.get(switch_name)
        if mapped is not None:
            return mapped
        if key_start == 1:
            return ""
        return switch_name[key_start:]


__all__ = [
    "CommandLineSource",
    "ConfigurationSource",
    "EnvironmentSource",
    "JsonFileSource",
    "KeyValuePairs",
    "validate_switch_mappings",
]
