"""Hierarchical configuration keys with case-insensitive identity.

Every source spells keys its own way: environment names use ``__``, command
lines use ``:``, JSON files nest objects. All of them normalise to a
:class:`ConfigKey`, an ordered tuple of segments whose equality and hash
ignore case while the original spelling is kept for display.
"""

from __future__ import annotations

from collections.abc import Iterable

KEY_DELIMITER = ":"
ENV_KEY_DELIMITER = "__"


class ConfigKey:
    """Ordered, case-insensitive sequence of key segments.

    Example:
        >>> key = ConfigKey.parse("Logging:LogLevel:Default")
        >>> key.segments
        ('Logging', 'LogLevel', 'Default')
        >>> key == ConfigKey.parse("logging:loglevel:DEFAULT")
        True
        >>> str(key)
        'Logging:LogLevel:Default'
    """

    __slots__ = ("_folded", "_segments")

    def __init__(self, segments: Iterable[str]) -> None:
        self._segments = tuple(segments)
        if not self._segments:
            raise ValueError("configuration key needs at least one segment")
        self._folded = tuple(segment.casefold() for segment in self._segments)

    @classmethod
    def parse(cls, text: str, delimiter: str = KEY_DELIMITER) -> ConfigKey:
        """Split *text* on *delimiter* into a key.

        Example:
            >>> ConfigKey.parse("ApiTester__SupportedMethods__4", ENV_KEY_DELIMITER).segments
            ('ApiTester', 'SupportedMethods', '4')
        """
        return cls(text.split(delimiter))

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def name(self) -> str:
        """Last segment of the key."""
        return self._segments[-1]

    @property
    def parent(self) -> ConfigKey | None:
        """Key one level up, ``None`` for top-level keys."""
        if len(self._segments) == 1:
            return None
        return ConfigKey(self._segments[:-1])

    def child(self, segment: str) -> ConfigKey:
        return ConfigKey((*self._segments, segment))

    def is_under(self, prefix: ConfigKey) -> bool:
        """Return True when *prefix* is a strict ancestor of this key.

        Example:
            >>> ConfigKey.parse("a:b:c").is_under(ConfigKey.parse("A:B"))
            True
            >>> ConfigKey.parse("a:b").is_under(ConfigKey.parse("a:b"))
            False
        """
        depth = len(prefix._folded)
        return len(self._folded) > depth and self._folded[:depth] == prefix._folded

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigKey):
            return NotImplemented
        return self._folded == other._folded

    def __hash__(self) -> int:
        return hash(self._folded)

    def __str__(self) -> str:
        return KEY_DELIMITER.join(self._segments)

    def __repr__(self) -> str:
        return f"ConfigKey({str(self)!r})"


def as_key(key: ConfigKey | str) -> ConfigKey:
    """Accept either a key or its ``:``-delimited text form."""
    if isinstance(key, ConfigKey):
        return key
    return ConfigKey.parse(key)


def segment_sort_key(segment: str) -> tuple[int, int, str]:
    """Order integer segments numerically ahead of named segments.

    Example:
        >>> sorted(["10", "b", "2", "A"], key=segment_sort_key)
        ['2', '10', 'A', 'b']
    """
    if segment.isascii() and segment.isdigit():
        return (0, int(segment), "")
    return (1, 0, segment.casefold())


__all__ = [
    "ENV_KEY_DELIMITER",
    "KEY_DELIMITER",
    "ConfigKey",
    "as_key",
    "segment_sort_key",
]
