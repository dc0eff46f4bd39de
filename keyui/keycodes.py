"""Names for keys in map commands, and conversion of map text to key lists."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from keyui.keys import CgdbKey, is_cgdb_key

__all__ = [
    "cgdb_key_from_keycode",
    "string_from_key",
    "keycode_from_cgdb_key",
    "string_to_key_array",
    "format_key_array",
]


def _shift_entries() -> list[tuple[int, str, str]]:
    return [
        (ord(upper), f"<S-{upper.lower()}>", f"<shift {upper.lower()}>")
        for upper in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    ]


def _ctrl_entries() -> list[tuple[int, str, str]]:
    return [
        (CgdbKey[f"CTRL_{letter}"], f"<C-{letter.lower()}>", f"CGDB_KEY_CTRL_{letter}")
        for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    ]


def _function_entries() -> list[tuple[int, str, str]]:
    return [
        (CgdbKey[f"F{n}"], f"<F{n}>", f"CGDB_KEY_F{n}") for n in range(1, 13)
    ]


# (key, keycode usable in a map command, human readable name).
# Lookups take the first matching entry, so order matters.
_KEYCODES: tuple[tuple[int, str, str], ...] = tuple(
    _shift_entries()
    + [
        (CgdbKey.ESC, "<Esc>", "CGDB_KEY_ESC"),
        (CgdbKey.UP, "<Up>", "CGDB_KEY_UP"),
        (CgdbKey.DOWN, "<Down>", "CGDB_KEY_DOWN"),
        (CgdbKey.LEFT, "<Left>", "CGDB_KEY_LEFT"),
        (CgdbKey.RIGHT, "<Right>", "CGDB_KEY_RIGHT"),
        (CgdbKey.HOME, "<Home>", "CGDB_KEY_HOME"),
        (CgdbKey.END, "<End>", "CGDB_KEY_END"),
        (CgdbKey.PPAGE, "<PageUp>", "CGDB_KEY_PPAGE"),
        (CgdbKey.NPAGE, "<PageDown>", "CGDB_KEY_NPAGE"),
        (CgdbKey.DC, "<Del>", "CGDB_KEY_DC"),
        (CgdbKey.IC, "<Insert>", "CGDB_KEY_IC"),
    ]
    + _function_entries()
    + [
        (CgdbKey.BACKWARD_WORD, "<BACKWARD-WORD>", "CGDB_KEY_BACKWARD_WORD"),
        (CgdbKey.FORWARD_WORD, "<FORWARD-WORD>", "CGDB_KEY_FORWARD_WORD"),
        (
            CgdbKey.BACKWARD_KILL_WORD,
            "<BACKWARD-KILL_WORD>",
            "CGDB_KEY_BACKWARD_KILL_WORD",
        ),
        (
            CgdbKey.FORWARD_KILL_WORD,
            "<FORWARD-KILL_WORD>",
            "CGDB_KEY_FORWARD_KILL_WORD",
        ),
    ]
    + _ctrl_entries()
    + [
        (0, "<Nul>", "<Zero>"),
        (CgdbKey.CTRL_H, "<BS>", "<Backspace>"),
        (CgdbKey.CTRL_I, "<Tab>", "<Tab>"),
        (CgdbKey.CTRL_J, "<NL>", "<linefeed>"),
        (CgdbKey.CTRL_L, "<FF>", "<formfeed>"),
        (CgdbKey.CTRL_M, "<CR>", "<carriage return>"),
        (CgdbKey.CTRL_M, "<Return>", "<carriage return>"),
        (CgdbKey.CTRL_M, "<Enter>", "<carriage return>"),
        (32, "<Space>", "<space>"),
        (60, "<lt>", "<less-than>"),
        (92, "<Bslash>", "<backslash>"),
        (124, "<Bar>", "<vertical bar>"),
        (127, "<Del>", "<delete>"),
    ]
)


def _as_int(key: int) -> int:
    return int(key.value) if isinstance(key, Enum) else int(key)


def cgdb_key_from_keycode(keycode: str) -> int:
    """Return the key named by ``keycode`` (case-insensitive).

    Returns :data:`CgdbKey.ERROR` if no key has that name.
    """
    wanted = keycode.casefold()
    for key, code, _ in _KEYCODES:
        if code.casefold() == wanted:
            return key
    return CgdbKey.ERROR


def string_from_key(key: int) -> str | None:
    """Return a human readable name for ``key``, or None if it has none."""
    for entry_key, _, name in _KEYCODES:
        if entry_key == key:
            return name
    return None


def keycode_from_cgdb_key(key: int) -> str | None:
    """Return the keycode used in map commands for ``key``, or None."""
    for entry_key, code, _ in _KEYCODES:
        if entry_key == key:
            return code
    return None


def string_to_key_array(string: str) -> list[int]:
    """Translate map text such as ``'ab<Esc><Home>'`` into a list of keys.

    Plain characters become their character codes and recognised ``<...>``
    keycodes become their key. Text between angle brackets that names no key
    is kept character by character. A ``<Nul>`` ends the sequence.
    """
    keys: list[int] = []
    macro: list[str] = []
    in_macro = False

    for char in string:
        if not in_macro:
            if char == "<":
                in_macro = True
                macro.append(char)
            else:
                keys.append(ord(char))
            continue

        if char == "<":
            # What came before was not a keycode; start a fresh one here.
            keys.extend(ord(c) for c in macro)
            macro.clear()
        macro.append(char)

        if char == ">":
            in_macro = False
            key = cgdb_key_from_keycode("".join(macro))
            if key == CgdbKey.ERROR:
                keys.extend(ord(c) for c in macro)
            else:
                keys.append(_as_int(key))
            macro.clear()

    if in_macro:
        keys.extend(ord(c) for c in macro)

    if 0 in keys:
        del keys[keys.index(0):]
    return keys


def format_key_array(keys: Iterable[int]) -> str:
    """Render a key list in human readable form, for debugging."""
    parts: list[str] = []
    for key in keys:
        if key == 0:
            break
        if is_cgdb_key(key):
            parts.append(string_from_key(key) or "")
        else:
            parts.append(chr(key))
    return "CGDB_KEY_ARRAY(" + "".join(parts) + ")"