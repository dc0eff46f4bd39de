"""Key mappings and sets of mappings matched as keys arrive."""

from __future__ import annotations

from collections.abc import Iterator

from keyui.keycodes import format_key_array, string_to_key_array
from keyui.tree import KuiTree

__all__ = ["MapNotFoundError", "KuiMap", "KuiMapSet"]


class MapNotFoundError(KeyError):
    """Raised when removing a mapping that is not registered."""


class KuiMap:
    """A mapping from a typed key sequence to a replacement sequence.

    ``key`` and ``value`` are the text as the user writes it, for example
    ``"<F6>"`` or ``"p<Space>argc<CR>"``. ``literal_key`` and
    ``literal_value`` are those texts translated into key lists.
    """

    __slots__ = ("key", "value", "literal_key", "literal_value")

    def __init__(self, key: str, value: str) -> None:
        if key is None or value is None:
            raise TypeError("a mapping needs both a key and a value")
        self.key = key
        self.value = value
        self.literal_key: list[int] = string_to_key_array(key)
        self.literal_value: list[int] = string_to_key_array(value)

    def describe(self) -> str:
        """Return the translated value in human readable form."""
        return format_key_array(self.literal_value)

    def __repr__(self) -> str:
        return f"KuiMap({self.key!r}, {self.value!r})"


class KuiMapSet:
    """A group of mappings, together with the tree that matches them."""

    def __init__(self) -> None:
        self.tree = KuiTree()
        self._maps: dict[str, KuiMap] = {}

    def register(self, key: str, value: str) -> KuiMap:
        """Add a mapping, replacing any mapping with the same key text."""
        new_map = KuiMap(key, value)
        old_map = self._maps.pop(key, None)
        if old_map is not None and old_map.literal_key != new_map.literal_key:
            self.tree.delete(old_map.literal_key)
        self._maps[key] = new_map
        self.tree.insert(new_map.literal_key, new_map)
        return new_map

    def deregister(self, key: str) -> None:
        """Remove the mapping for ``key``.

        Raises MapNotFoundError if no such mapping is registered.
        """
        try:
            old_map = self._maps.pop(key)
        except KeyError:
            raise MapNotFoundError(key) from None
        self.tree.delete(old_map.literal_key)

    def __contains__(self, key: object) -> bool:
        return key in self._maps

    def __len__(self) -> int:
        return len(self._maps)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._maps))

    def get(self, key: str) -> KuiMap | None:
        """Return the mapping registered for ``key``, or None."""
        return self._maps.get(key)