"""Immutable configuration store produced by one resolution pass.

The store maps :class:`ConfigKey` to a string value (or ``None`` for keys
that exist without a value) and remembers which source supplied each entry.
Sections are lightweight views over the store used for sub-tree extraction
and binding.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .enums import SourceKind
from .keys import ConfigKey, as_key, segment_sort_key

ConfigValue = str | None
"""Scalar value held by the store; ``None`` marks a key without a value."""

ConfigData = str | None | list["ConfigData"] | dict[str, "ConfigData"]
"""Plain Python rendering of a store sub-tree."""

_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class SourceInfo:
    """Identity of one applied source.

    Example:
        >>> info = SourceInfo(kind=SourceKind.FILE, name="/opt/app/appsettings.json")
        >>> str(info)
        'file:/opt/app/appsettings.json'
    """

    kind: SourceKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.name}"


@dataclass(frozen=True, slots=True)
class StoreEntry:
    """A value together with the source that won it."""

    value: ConfigValue
    source: SourceInfo


class _Node:
    __slots__ = ("children", "name", "value")

    def __init__(self, name: str) -> None:
        self.name = name
        self.value: ConfigValue = None
        self.children: dict[str, _Node] = {}

    def descend(self, segment: str) -> _Node:
        folded = segment.casefold()
        node = self.children.get(folded)
        if node is None:
            node = self.children[folded] = _Node(segment)
        return node

    def to_data(self) -> ConfigData:
        if not self.children:
            return self.value
        names = [node.name for node in self.children.values()]
        if all(name.isascii() and name.isdigit() for name in names):
            ordered = sorted(self.children.values(), key=lambda node: int(node.name))
            if [int(node.name) for node in ordered] == list(range(len(ordered))):
                return [node.to_data() for node in ordered]
        return {node.name: node.to_data() for node in self.children.values()}


class ConfigurationStore(Mapping[ConfigKey, ConfigValue]):
    """Read-only mapping from configuration key to value.

    Lookups accept a :class:`ConfigKey` or its ``:``-delimited text and
    ignore case.

    Example:
        >>> info = SourceInfo(SourceKind.COMMAND_LINE, "command-line")
        >>> store = ConfigurationStore({ConfigKey.parse("Logging:LogLevel:Default"): StoreEntry("Debug", info)})
        >>> store["logging:loglevel:default"]
        'Debug'
        >>> store.get("Missing", "fallback")
        'fallback'
        >>> store.as_dict()
        {'Logging': {'LogLevel': {'Default': 'Debug'}}}
    """

    __slots__ = ("_entries", "_sources")

    def __init__(self, entries: Mapping[ConfigKey, StoreEntry], sources: Sequence[SourceInfo] = ()) -> None:
        self._entries: Mapping[ConfigKey, StoreEntry] = MappingProxyType(dict(entries))
        self._sources = tuple(sources)

    @classmethod
    def empty(cls) -> ConfigurationStore:
        return cls({})

    @property
    def sources(self) -> tuple[SourceInfo, ...]:
        """Sources applied to build this store, lowest precedence first."""
        return self._sources

    def __getitem__(self, key: ConfigKey | str) -> ConfigValue:
        return self._entries[as_key(key)].value

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = ConfigKey.parse(key)
        return key in self._entries

    def __iter__(self) -> Iterator[ConfigKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: ConfigKey | str, default: Any = None) -> Any:  # type: ignore[override]
        entry = self._entries.get(as_key(key), _MISSING)
        if entry is _MISSING:
            return default
        return entry.value

    def source_of(self, key: ConfigKey | str) -> SourceInfo | None:
        """Return the source that supplied *key*, or ``None`` when absent."""
        entry = self._entries.get(as_key(key))
        return entry.source if entry is not None else None

    def get_section(self, path: ConfigKey | str) -> ConfigurationSection:
        """Return a view over the sub-tree rooted at *path*.

        The section exists even when nothing lives under *path*; use
        :meth:`ConfigurationSection.exists` to tell.
        """
        return ConfigurationSection(self, self._spelled(as_key(path)))

    def get_children(self) -> list[ConfigurationSection]:
        """Return the top-level sections in key order."""
        return [ConfigurationSection(self, ConfigKey((name,))) for name in self._child_names(None)]

    def as_dict(self) -> dict[str, ConfigData]:
        """Render the whole store as nested plain data.

        Contiguous index families (``0``..``n-1``) become lists.
        """
        root = self._tree(None)
        data = root.to_data()
        if isinstance(data, dict):
            return data
        if isinstance(data, list):
            return {str(index): item for index, item in enumerate(data)}
        return {}

    def _spelled(self, path: ConfigKey) -> ConfigKey:
        """Return *path* in the spelling stored for it, when anything lives there."""
        depth = len(path)
        for key in self._entries:
            if key == path or key.is_under(path):
                return ConfigKey(key.segments[:depth])
        return path

    def _child_names(self, prefix: ConfigKey | None) -> list[str]:
        depth = len(prefix) if prefix is not None else 0
        seen: dict[str, str] = {}
        for key in self._entries:
            if prefix is not None and not key.is_under(prefix):
                continue
            segment = key.segments[depth]
            seen.setdefault(segment.casefold(), segment)
        return sorted(seen.values(), key=segment_sort_key)

    def _tree(self, prefix: ConfigKey | None) -> _Node:
        depth = len(prefix) if prefix is not None else 0
        root = _Node(prefix.name if prefix is not None else "")
        for key, entry in self._entries.items():
            if prefix is not None and not key.is_under(prefix):
                continue
            node = root
            for segment in key.segments[depth:]:
                node = node.descend(segment)
            node.value = entry.value
        return root

    def __repr__(self) -> str:
        return f"ConfigurationStore({len(self._entries)} keys from {len(self._sources)} sources)"


class ConfigurationSection:
    """View over one sub-tree of a :class:`ConfigurationStore`.

    Example:
        >>> info = SourceInfo(SourceKind.FILE, "appsettings.json")
        >>> store = ConfigurationStore({
        ...     ConfigKey.parse("ApiTester:MaxRetries"): StoreEntry("3", info),
        ...     ConfigKey.parse("ApiTester:SupportedMethods:0"): StoreEntry("GET", info),
        ... })
        >>> section = store.get_section("apitester")
        >>> [child.key for child in section.get_children()]
        ['MaxRetries', 'SupportedMethods']
        >>> section.to_data()
        {'MaxRetries': '3', 'SupportedMethods': ['GET']}
    """

    __slots__ = ("_path", "_store")

    def __init__(self, store: ConfigurationStore, path: ConfigKey) -> None:
        self._store = store
        self._path = path

    @property
    def path(self) -> str:
        """Full ``:``-delimited path of the section."""
        return str(self._path)

    @property
    def key(self) -> str:
        """Last segment of the section path."""
        return self._path.name

    @property
    def value(self) -> ConfigValue:
        return self._store.get(self._path)

    def exists(self) -> bool:
        """True when the section has a value entry or any descendants."""
        return self._path in self._store or bool(self._store._child_names(self._path))

    def get_children(self) -> list[ConfigurationSection]:
        return [ConfigurationSection(self._store, self._path.child(name)) for name in self._store._child_names(self._path)]

    def get_section(self, path: ConfigKey | str) -> ConfigurationSection:
        nested = ConfigKey((*self._path.segments, *as_key(path).segments))
        return ConfigurationSection(self._store, self._store._spelled(nested))

    def to_data(self) -> ConfigData:
        """Render the section as plain data (scalar, list or dict)."""
        node = self._store._tree(self._path)
        if not node.children:
            return self.value
        return node.to_data()

    def __repr__(self) -> str:
        return f"ConfigurationSection({self.path!r})"


__all__ = [
    "ConfigData",
    "ConfigValue",
    "ConfigurationSection",
    "ConfigurationStore",
    "SourceInfo",
    "StoreEntry",
]
