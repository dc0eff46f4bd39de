"""An interactive tool for trying out key mappings on a terminal."""

from __future__ import annotations

import getopt
import os
import re
import select
import sys
import termios
import tty
from typing import TextIO

from keyui.context import KuiManager, read_fd_char
from keyui.keycodes import string_from_key
from keyui.keys import CgdbKey, is_cgdb_key
from keyui.mapping import KuiMapSet, MapNotFoundError
from keyui.terminal import (
    TerminalCapabilities,
    ascii_sequence_from_key,
    terminal_mappings,
)

__all__ = ["apply_map_command", "load_mappings", "main"]

_MAP_RE = re.compile(r"map +([^ ]+) +([^ ]+)")
_UNMAP_RE = re.compile(r"unmap +([^ ]+)")
_MAX_LINE = 4095

_USAGE = (
    "KUI Usage:\r\n"
    "   kui_driver [kui options]\r\n"
    "\r\n"
    "KUI Options:\r\n"
    "   --file      Load an rc file consisting of map and unmap commands.\r\n"
    "   --help      Print help (this message) and then exit.\r\n"
    "\r\n"
    "Type 'q' to quit and Ctrl-z to send map or unmap command.\r\n"
)


def apply_map_command(line: str, map_set: KuiMapSet) -> str | None:
    """Apply a ``map KEY VALUE`` or ``unmap KEY`` command found in ``line``.

    Returns a short report of what changed, or None if the line holds no
    command or names a mapping that does not exist.
    """
    match = _MAP_RE.search(line)
    if match:
        key, value = match.group(1), match.group(2)
        map_set.register(key, value)
        return f"registered key={key} value={value}"
    match = _UNMAP_RE.search(line)
    if match:
        key = match.group(1)
        try:
            map_set.deregister(key)
        except MapNotFoundError:
            return None
        return f"deregister key={key}"
    return None


def load_mappings(path: str | os.PathLike[str], map_set: KuiMapSet) -> list[str]:
    """Apply every map and unmap command in the file at ``path``.

    Returns the reports of the commands applied. Raises OSError if the file
    cannot be read.
    """
    reports: list[str] = []
    with open(path, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            report = apply_map_command(line.rstrip("\n"), map_set)
            if report is not None:
                reports.append(report)
    return reports


def _read_command_line(fd: int, err: TextIO) -> str:
    chars: list[str] = []
    while len(chars) < _MAX_LINE:
        try:
            byte = read_fd_char(fd, -1)
        except EOFError:
            break
        if byte is None:
            break
        char = chr(byte)
        chars.append(char)
        err.write(char)
        if char in "\r\n":
            break
    return "".join(chars).rstrip("\r\n")


def _show_key(key: int, capabilities: TerminalCapabilities | None, err: TextIO) -> None:
    if is_cgdb_key(key):
        err.write(string_from_key(key) or "")
        sequence = ascii_sequence_from_key(key, capabilities) or ""
        err.write("".join(f"[{ord(c)}]" for c in sequence))
    else:
        err.write(chr(key))


def _main_loop(
    manager: KuiManager,
    fd: int,
    map_set: KuiMapSet,
    capabilities: TerminalCapabilities | None,
    err: TextIO,
) -> None:
    while True:
        err.write("\r\n(kui) ")
        err.flush()
        select.select([fd], [], [])

        while True:
            try:
                key = manager.get_key()
            except EOFError:
                err.write("\r\nend of input\r\n")
                return
            if key is None:
                break

            if key == ord("q"):
                err.write("User aborted\r\n")
                return
            if key == CgdbKey.CTRL_Z:
                err.write("\r\n(kui_map)")
                report = apply_map_command(_read_command_line(fd, err), map_set)
                if report is not None:
                    err.write("\r\n" + report)
            else:
                _show_key(key, capabilities, err)

            if not manager.can_get_key():
                break


def main(argv: list[str] | None = None) -> int:
    """Run the interactive key mapping tool."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options, _ = getopt.gnu_getopt(args, "hf:", ["file=", "help"])
    except getopt.GetoptError:
        sys.stdout.write(_USAGE)
        sys.stdout.flush()
        return 0

    files: list[str] = []
    for option, value in options:
        if option in ("-h", "--help"):
            sys.stdout.write(_USAGE)
            sys.stdout.flush()
            return 0
        files.append(value)

    map_set = KuiMapSet()
    for path in files:
        try:
            for report in load_mappings(path, map_set):
                sys.stderr.write("\r\n" + report)
        except OSError as exc:
            sys.stderr.write(f"cannot read {path}: {exc}\n")

    capabilities = TerminalCapabilities()
    fd = sys.stdin.fileno()
    manager = KuiManager(fd, 40, 1000, terminal_mappings(capabilities))
    manager.set_map_set(map_set)

    saved = termios.tcgetattr(fd) if os.isatty(fd) else None
    if saved is not None:
        tty.setraw(fd)
    try:
        _main_loop(manager, fd, map_set, capabilities, sys.stderr)
    finally:
        if saved is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
    return 0


if __name__ == "__main__":
    sys.exit(main())