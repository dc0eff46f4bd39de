"""Terminal escape sequences and the key mappings that decode them."""

from __future__ import annotations

import os
from string import ascii_uppercase
from typing import Protocol

from keyui.keycodes import keycode_from_cgdb_key
from keyui.keys import CgdbKey
from keyui.mapping import KuiMapSet

try:
    import curses
except ImportError:  # pragma: no cover - platforms without curses
    curses = None  # type: ignore[assignment]

__all__ = ["TerminalCapabilities", "terminal_mappings", "ascii_sequence_from_key"]


class _CapabilitySource(Protocol):
    def lookup(self, capname: str) -> str | None: ...


# (key, termcap capability name, terminfo capability name)
_SEQLIST: tuple[tuple[CgdbKey, str, str], ...] = (
    (CgdbKey.END, "@7", "kend"),
    (CgdbKey.HOME, "kh", "khome"),
    (CgdbKey.HOME, "kH", "kll"),
    (CgdbKey.DC, "kD", "kdch1"),
    (CgdbKey.IC, "kI", "kich1"),
    (CgdbKey.NPAGE, "kN", "knp"),
    (CgdbKey.PPAGE, "kP", "kpp"),
    # Arrow keys
    (CgdbKey.DOWN, "kd", "kcud1"),
    (CgdbKey.LEFT, "kl", "kcub1"),
    (CgdbKey.RIGHT, "kr", "kcuf1"),
    (CgdbKey.UP, "ku", "kcuu1"),
    (CgdbKey.LEFT, "le", "cub1"),
    (CgdbKey.RIGHT, "nd", "cuf1"),
    (CgdbKey.UP, "up", "cuu1"),
    # Function keys
    (CgdbKey.F1, "k1", "kf1"),
    (CgdbKey.F2, "k2", "kf2"),
    (CgdbKey.F3, "k3", "kf3"),
    (CgdbKey.F4, "k4", "kf4"),
    (CgdbKey.F5, "k5", "kf5"),
    (CgdbKey.F6, "k6", "kf6"),
    (CgdbKey.F7, "k7", "kf7"),
    (CgdbKey.F8, "k8", "kf8"),
    (CgdbKey.F9, "k9", "kf9"),
    (CgdbKey.F10, "k;", "kf10"),
    (CgdbKey.F11, "F1", "kf11"),
    (CgdbKey.F12, "F2", "kf12"),
)

_TERMCAP_TO_TERMINFO = {termcap: terminfo for _, termcap, terminfo in _SEQLIST}

# Sequences common terminals send. Where a key has several, the first one is
# the sequence reported for it, so those the line editor knows come first.
_HARD_CODED_BINDINGS: tuple[tuple[CgdbKey, str], ...] = (
    (CgdbKey.ESC, "\x1b"),
    (CgdbKey.UP, "\x1b[A"),
    (CgdbKey.DOWN, "\x1b[B"),
    (CgdbKey.RIGHT, "\x1b[C"),
    (CgdbKey.LEFT, "\x1b[D"),
    (CgdbKey.HOME, "\x1b[H"),
    (CgdbKey.END, "\x1b[F"),
    # MS-DOS style arrows
    (CgdbKey.UP, "\x1b[0A"),
    (CgdbKey.LEFT, "\x1b[0B"),
    (CgdbKey.RIGHT, "\x1b[0C"),
    (CgdbKey.DOWN, "\x1b[0D"),
    (CgdbKey.UP, "\x1bOA"),
    (CgdbKey.DOWN, "\x1bOB"),
    (CgdbKey.RIGHT, "\x1bOC"),
    (CgdbKey.LEFT, "\x1bOD"),
    (CgdbKey.HOME, "\x1bOH"),
    (CgdbKey.END, "\x1bOF"),
    # Passed through to the line editor
    (CgdbKey.BACKWARD_WORD, "\x1bb"),
    (CgdbKey.FORWARD_WORD, "\x1bf"),
    (CgdbKey.BACKWARD_KILL_WORD, "\x1b\b"),
    (CgdbKey.FORWARD_KILL_WORD, "\x1bd"),
) + tuple(
    (CgdbKey[f"CTRL_{letter}"], chr(position))
    for position, letter in enumerate(ascii_uppercase, start=1)
)


class TerminalCapabilities:
    """String capabilities of a terminal type, read from the terminfo database.

    ``term`` names the terminal type; None means the ``TERM`` environment
    variable. Capability names may be given in terminfo or termcap form.
    The terminfo database is set up once per process, so the first terminal
    type loaded is the one every instance sees.
    """

    def __init__(self, term: str | None = None) -> None:
        self.term = term if term is not None else os.environ.get("TERM")
        self._loaded = False
        self._available = False

    def _load(self) -> bool:
        if self._loaded:
            return self._available
        self._loaded = True
        if not self.term or curses is None:
            return False
        try:
            with open(os.devnull, "wb") as sink:
                curses.setupterm(self.term, sink.fileno())
        except (curses.error, OSError):
            return False
        self._available = True
        return True

    def lookup(self, capname: str) -> str | None:
        """Return the sequence for ``capname``, or None if the terminal lacks it."""
        if not self._load():
            return None
        name = _TERMCAP_TO_TERMINFO.get(capname, capname)
        try:
            value = curses.tigetstr(name)
        except curses.error:
            return None
        if not value:
            return None
        return value.decode("latin-1")


def _register(map_set: KuiMapSet, sequence: str, key: CgdbKey) -> None:
    keycode = keycode_from_cgdb_key(key)
    if keycode is None:
        raise ValueError(f"key {key!r} has no keycode")
    map_set.register(sequence, keycode)


def terminal_mappings(capabilities: _CapabilitySource | None) -> KuiMapSet:
    """Build a map set that turns terminal key sequences into keys.

    Sequences come from ``capabilities`` (skipped when None) and then from
    the hard coded sequences, which replace any identical earlier ones.
    """
    map_set = KuiMapSet()
    if capabilities is not None:
        for key, termcap, terminfo in _SEQLIST:
            for capname in (termcap, terminfo):
                sequence = capabilities.lookup(capname)
                if sequence:
                    _register(map_set, sequence, key)
    for key, sequence in _HARD_CODED_BINDINGS:
        _register(map_set, sequence, key)
    return map_set


def ascii_sequence_from_key(
    key: int, capabilities: _CapabilitySource | None
) -> str | None:
    """Return the character sequence a terminal sends for ``key``.

    Hard coded sequences are preferred, then the termcap and terminfo
    entries of ``capabilities``. Returns None for keys that are not
    :class:`CgdbKey` values or that have no known sequence.
    """
    if not CgdbKey.ESC <= key < CgdbKey.ERROR:
        return None
    for bound_key, sequence in _HARD_CODED_BINDINGS:
        if bound_key == key:
            return sequence
    if capabilities is None:
        return None
    for bound_key, termcap, terminfo in _SEQLIST:
        if bound_key != key:
            continue
        sequence = capabilities.lookup(termcap) or capabilities.lookup(terminfo)
        if sequence:
            return sequence
    return None