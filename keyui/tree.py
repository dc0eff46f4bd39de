"""A prefix tree that matches key sequences one key at a time."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any

__all__ = ["TreeState", "KuiTree"]

_NO_VALUE = object()


class TreeState(IntEnum):
    """Where a match in progress stands."""

    FOUND = 0
    MATCHING = 1
    NOT_FOUND = 2
    ERROR = 3


class _Node:
    __slots__ = ("key", "value", "children")

    def __init__(self, key: int = 0) -> None:
        self.key = key
        self.value: Any = _NO_VALUE
        self.children: dict[int, _Node] = {}

    @property
    def has_value(self) -> bool:
        return self.value is not _NO_VALUE


class KuiTree:
    """Stores key sequences and tracks which of them input is matching.

    Start a match with :meth:`reset_state`, feed keys with :meth:`push_key`,
    then call :meth:`finalize_state` and read :meth:`found_value`.
    """

    def __init__(self) -> None:
        self._root = _Node()
        self._cur: _Node | None = self._root
        self._found_node: _Node | None = None
        self._state = TreeState.MATCHING
        self._found = False
        self.reset_state()

    @property
    def state(self) -> TreeState:
        """The current matching state."""
        return self._state

    def insert(self, keys: Sequence[int], data: Any) -> None:
        """Add ``keys`` to the tree, reaching ``data`` when fully matched."""
        node = self._root
        for key in keys:
            child = node.children.get(key)
            if child is None:
                child = _Node(key)
                node.children[key] = child
            node = child
        node.value = data

    def delete(self, keys: Sequence[int]) -> None:
        """Remove the mapping for ``keys``; unknown sequences are ignored."""
        if keys:
            self._delete(self._root, list(keys))

    @classmethod
    def _delete(cls, node: _Node, keys: list[int]) -> bool:
        child = node.children.get(keys[0])
        if child is None:
            return False
        if len(keys) == 1:
            child.value = _NO_VALUE
            # Keep the node if longer mappings still pass through it.
            if not child.children:
                del node.children[keys[0]]
        else:
            cls._delete(child, keys[1:])
            if not child.children and not child.has_value:
                del node.children[keys[0]]
        return True

    def reset_state(self) -> None:
        """Begin a new match from the root."""
        self._cur = self._root
        self._state = TreeState.MATCHING
        self._found = False
        self._found_node = None

    def finalize_state(self) -> None:
        """Finish matching; a mapping seen on the way becomes the result."""
        if self._found:
            self._state = TreeState.FOUND

    def push_key(self, key: int) -> bool:
        """Advance the match by one key.

        Returns True if a mapping ends at this key. Raises RuntimeError if
        the tree is no longer matching.
        """
        if self._state is not TreeState.MATCHING or self._cur is None:
            raise RuntimeError("the tree is not matching; call reset_state first")

        child = self._cur.children.get(key)
        if child is None:
            self._state = TreeState.NOT_FOUND
            self._cur = None
            return False

        self._cur = child
        if not child.children:
            self._state = TreeState.FOUND
        if child.has_value:
            self._found = True
            self._found_node = child
            return True
        return False

    def found_value(self) -> Any:
        """Return the data of the longest mapping reached.

        Raises LookupError if no mapping has been reached.
        """
        if not self._found or self._found_node is None:
            raise LookupError("no mapping was found")
        return self._found_node.value