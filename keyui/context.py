"""Reading keys from input and applying key mappings as they arrive."""

from __future__ import annotations

import os
import select
from collections import deque
from collections.abc import Callable, Iterable

from keyui.keycodes import keycode_from_cgdb_key
from keyui.mapping import KuiMapSet
from keyui.tree import TreeState

__all__ = ["read_fd_char", "KuiContext", "KuiManager"]

KeyReader = Callable[["int | None"], "int | None"]


def _wait_readable(fd: int, timeout_ms: int | None) -> bool:
    """Wait up to ``timeout_ms`` for ``fd`` to be readable; negative blocks."""
    timeout = None if timeout_ms is None or timeout_ms < 0 else timeout_ms / 1000
    ready, _, _ = select.select([fd], [], [], timeout)
    return bool(ready)


def read_fd_char(fd: int, timeout_ms: int | None) -> int | None:
    """Read one byte from ``fd``, waiting at most ``timeout_ms`` milliseconds.

    A negative or None timeout waits without limit. Returns None if nothing
    arrived in time, and raises EOFError once the input has ended.
    """
    if not _wait_readable(fd, timeout_ms):
        return None
    data = os.read(fd, 1)
    if not data:
        raise EOFError("end of input")
    return data[0]


class KuiContext:
    """Reads keys through ``reader`` and replaces mapped sequences.

    ``reader`` is called with the timeout in milliseconds and returns the
    next key, or None when no key arrived in time. ``map_set`` holds the
    mappings applied to the keys read; with no map set keys pass unchanged.
    """

    def __init__(self, reader: KeyReader, timeout_ms: int | None) -> None:
        self.reader = reader
        self.timeout_ms = timeout_ms
        self.map_set: KuiMapSet | None = None
        self._buffer: deque[int] = deque()

    def can_get_key(self) -> bool:
        """Return True if keys are already buffered."""
        return bool(self._buffer)

    def _find_char(self) -> int | None:
        if self._buffer:
            return self._buffer.popleft()
        return self.reader(self.timeout_ms)

    def _find_key(self) -> tuple[int | None, bool]:
        """Return the next key and whether a mapping was applied instead."""
        if self.map_set is None:
            return self._find_char(), False

        tree = self.map_set.tree
        tree.reset_state()
        # Keys read past the last completed mapping, oldest first.
        extra: list[int] = []

        while True:
            key = self._find_char()
            if key is None:
                break
            extra.append(key)
            if tree.push_key(key):
                extra.clear()
            if tree.state is not TreeState.MATCHING:
                break

        tree.finalize_state()
        map_found = tree.state is TreeState.FOUND

        result: int | None = None
        if not map_found and extra:
            result = extra.pop(0)

        self._buffer.extendleft(reversed(extra))
        if map_found:
            found = tree.found_value()
            self._buffer.extendleft(reversed(found.literal_value))
        return result, map_found

    def get_key(self) -> int | None:
        """Return the next key after mappings, or None if no input is ready."""
        while True:
            key, map_found = self._find_key()
            if not map_found:
                return key


class KuiManager:
    """Combines terminal escape sequence decoding with user key mappings.

    Bytes from ``fd`` are first matched against ``terminal_map_set`` to turn
    escape sequences into keys; the keys are then matched against the user
    map set given to :meth:`set_map_set`.
    """

    def __init__(
        self,
        fd: int,
        keycode_timeout: int | None,
        mapping_timeout: int | None,
        terminal_map_set: KuiMapSet | None = None,
    ) -> None:
        self._fd = fd
        self.terminal_map_set = (
            terminal_map_set if terminal_map_set is not None else KuiMapSet()
        )
        self.terminal_keys = KuiContext(
            lambda timeout_ms: read_fd_char(fd, timeout_ms), keycode_timeout
        )
        self.terminal_keys.map_set = self.terminal_map_set
        self.normal_keys = KuiContext(self._read_terminal_key, mapping_timeout)

    def _read_terminal_key(self, timeout_ms: int | None) -> int | None:
        if self.terminal_keys.can_get_key() or _wait_readable(self._fd, timeout_ms):
            return self.terminal_keys.get_key()
        return None

    def set_map_set(self, map_set: KuiMapSet | None) -> None:
        """Use ``map_set`` for user mappings."""
        self.normal_keys.map_set = map_set

    def clear_map_set(self) -> None:
        """Stop applying user mappings."""
        self.normal_keys.map_set = None

    def can_get_key(self) -> bool:
        """Return True if keys are buffered and can be read without waiting."""
        return self.terminal_keys.can_get_key() or self.normal_keys.can_get_key()

    def get_key(self) -> int | None:
        """Return the next key, or None if no input is ready."""
        return self.normal_keys.get_key()

    def get_key_blocking(self) -> int | None:
        """Return the next key, waiting for input without a time limit."""
        terminal_ms = self.terminal_keys.timeout_ms
        normal_ms = self.normal_keys.timeout_ms
        self.terminal_keys.timeout_ms = -1
        self.normal_keys.timeout_ms = -1
        try:
            return self.normal_keys.get_key()
        finally:
            self.terminal_keys.timeout_ms = terminal_ms
            self.normal_keys.timeout_ms = normal_ms

    def set_terminal_escape_sequence_timeout(self, msec: int | None) -> None:
        """Set how long to wait for the rest of a terminal escape sequence."""
        self.terminal_keys.timeout_ms = msec

    def set_key_mapping_timeout(self, msec: int | None) -> None:
        """Set how long to wait for the rest of a user mapping."""
        self.normal_keys.timeout_ms = msec

    def bind_terminal_key(self, key: int, keyseqs: Iterable[str]) -> None:
        """Make each sequence in ``keyseqs`` produce ``key``.

        Raises ValueError if ``key`` has no keycode.
        """
        keycode = keycode_from_cgdb_key(key)
        if keycode is None:
            raise ValueError(f"key {key!r} has no keycode")
        for seq in keyseqs:
            self.terminal_map_set.register(seq, keycode)