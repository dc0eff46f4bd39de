# keyui

`keyui` reads keys from a terminal and turns them into something an
application can act on. It works in two layers:

* **Terminal keys.** Multi-byte escape sequences such as `ESC [ A` are
  recognised and reported as single high-level keys (`CgdbKey.UP`,
  `CgdbKey.F1`, control keys and so on).
* **User mappings.** A sequence of keys can be mapped to another sequence,
  in the style of an editor's `map` command: `map abc xyz` makes typing
  `abc` produce `xyz`. Keys written as `<Esc>`, `<F4>`, `<C-a>`, `<CR>`
  and similar are understood on both sides of a mapping.

Both layers wait a limited time for the next key while a sequence is still
only partly matched, then give back what was typed if nothing matched.
When one mapping is a prefix of another, the longest mapping completed
before matching stopped wins, and any keys read past it are kept for the
next read.

## Installing

```
pip install .
```

No third-party packages are needed. The package uses `termios`, `tty` and
`select`, so it runs on POSIX systems.

## Modules

* `keyui.keys` – the `CgdbKey` enumeration and `is_cgdb_key(key)`.
* `keyui.tree` – `KuiTree`, the prefix tree that matches key sequences one
  key at a time, and its `TreeState`.
* `keyui.keycodes` – names such as `<F1>` and conversions:
  `cgdb_key_from_keycode`, `keycode_from_cgdb_key`, `string_from_key`,
  `string_to_key_array` and `format_key_array`.
* `keyui.mapping` – `KuiMap`, `KuiMapSet` and `MapNotFoundError`.
* `keyui.context` – `read_fd_char`, `KuiContext` and `KuiManager`.
* `keyui.terminal` – `TerminalCapabilities`, `terminal_mappings` and
  `ascii_sequence_from_key`.
* `keyui.driver` – the interactive driver, plus `apply_map_command` and
  `load_mappings`.

## Using the library

```python
from keyui.mapping import KuiMapSet
from keyui.context import KuiManager
from keyui.terminal import TerminalCapabilities, terminal_mappings

terminal = terminal_mappings(TerminalCapabilities("xterm"))

user_maps = KuiMapSet()
user_maps.register("abc", "xyz")
user_maps.register("<F6>", "p<Space>argc<CR>")

manager = KuiManager(0, 40, 1000, terminal)
manager.set_map_set(user_maps)

key = manager.get_key_blocking()
```

Keys come back as integers: ordinary characters as their code, special
keys as `CgdbKey` values. `KuiManager.get_key()` returns None when no input
is ready; `get_key_blocking()` waits without a time limit. Reading raises
`EOFError` once the input has ended.

`keyui.keycodes` converts between text and keys:
`string_to_key_array("ab<Esc>")` gives `[97, 98, CgdbKey.ESC]`, text in angle
brackets that names no key is kept character by character, and
`format_key_array(...)` renders a key list for reading.

`KuiMapSet.register` replaces any mapping with the same key text.
`KuiMapSet.deregister` removes one and raises `MapNotFoundError` when no
mapping with that key exists. A map set supports `in`, `len()`, iteration
over its key texts in sorted order, and `get(key)`.

Timeouts, in milliseconds, can be changed at run time with
`KuiManager.set_terminal_escape_sequence_timeout` and
`KuiManager.set_key_mapping_timeout`; a negative value waits without limit.
`KuiManager.bind_terminal_key(key, keyseqs)` makes further byte sequences
produce a given key.

`TerminalCapabilities` reads string capabilities from the terminfo
database through the standard `curses` module, accepting terminfo or termcap
capability names. When the terminal type is unknown or `curses` is not
available, every lookup returns None and `terminal_mappings` falls back to
its built-in sequences alone. Passing None to `terminal_mappings` or
`ascii_sequence_from_key` skips the database entirely.

## The interactive driver

```
keyui-driver --file mappings.rc
```

The driver puts the terminal in raw mode (when standard input is a
terminal) and echoes every key it reads, naming special keys and showing
the bytes that a terminal sends for them. `--file` (or `-f`) may be given
more than once; each file holds lines of the form

```
map <key> <value>
unmap <key>
```

While running, press `Ctrl-Z` to type a `map` or `unmap` command, and `q`
to quit. `--help` (or `-h`) prints the options.

## What it does not do

`keyui` only turns input into keys. It does not draw a screen, edit a
command line or keep command history; the driver is a small tool for
trying out mappings, not a full application.