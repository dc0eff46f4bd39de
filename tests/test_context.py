import os
from collections import deque

import pytest

from keyui.context import KuiContext, KuiManager, read_fd_char
from keyui.keys import CgdbKey
from keyui.mapping import KuiMapSet


def scripted_context(text, map_set=None):
    keys = deque(ord(c) for c in text)

    def reader(timeout_ms):
        return keys.popleft() if keys else None

    ctx = KuiContext(reader, 0)
    ctx.map_set = map_set
    return ctx


def drain(ctx):
    out = []
    while True:
        key = ctx.get_key()
        if key is None:
            return out
        out.append(key)


def as_text(keys):
    return "".join(chr(k) for k in keys)


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


def terminal_set():
    ms = KuiMapSet()
    ms.register("\033", "<Esc>")
    ms.register("\033[A", "<Up>")
    ms.register("\033[B", "<Down>")
    return ms


def test_read_fd_char_returns_byte(pipe):
    read_fd, write_fd = pipe
    os.write(write_fd, b"a")
    assert read_fd_char(read_fd, 100) == ord("a")


def test_read_fd_char_times_out(pipe):
    read_fd, _ = pipe
    assert read_fd_char(read_fd, 0) is None


def test_read_fd_char_eof(pipe):
    read_fd, write_fd = pipe
    os.close(write_fd)
    with pytest.raises(EOFError):
        read_fd_char(read_fd, 100)


def test_context_without_map_set_passes_keys():
    ctx = scripted_context("hello")
    assert as_text(drain(ctx)) == "hello"


def test_context_applies_mapping():
    ms = KuiMapSet()
    ms.register("ab", "xyz")
    ctx = scripted_context("abc", ms)
    assert as_text(drain(ctx)) == "xyzc"


def test_context_source_example_puts_back_extra_keys():
    ms = KuiMapSet()
    ms.register("ab", "xyz")
    ms.register("abcdf", "do_not_reach")
    ctx = scripted_context("abcdefgh", ms)
    assert as_text(drain(ctx)) == "xyzcdefgh"


def test_context_partial_match_is_returned_unchanged():
    ms = KuiMapSet()
    ms.register("abc", "xyz")
    ctx = scripted_context("abd", ms)
    assert as_text(drain(ctx)) == "abd"


def test_context_mapping_results_are_mapped_again():
    ms = KuiMapSet()
    ms.register("a", "b")
    ms.register("b", "c")
    ctx = scripted_context("a", ms)
    assert as_text(drain(ctx)) == "c"


def test_context_longest_mapping_wins():
    ms = KuiMapSet()
    ms.register("ab", "1")
    ms.register("abc", "2")
    ctx = scripted_context("abc", ms)
    assert as_text(drain(ctx)) == "2"


def test_context_can_get_key_reflects_buffer():
    ms = KuiMapSet()
    ms.register("ab", "xyz")
    ctx = scripted_context("ab", ms)
    assert ctx.can_get_key() is False
    assert ctx.get_key() == ord("x")
    assert ctx.can_get_key() is True


def test_context_mapping_to_special_key():
    ms = KuiMapSet()
    ms.register("q", "<F4>")
    ctx = scripted_context("q", ms)
    assert drain(ctx) == [CgdbKey.F4]


def test_manager_decodes_escape_sequence(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    os.write(write_fd, b"\x1b[A")
    assert manager.get_key() == CgdbKey.UP


def test_manager_lone_escape_after_timeout(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    os.write(write_fd, b"\x1b")
    assert manager.get_key() == CgdbKey.ESC


def test_manager_no_input_returns_none(pipe):
    read_fd, _ = pipe
    manager = KuiManager(read_fd, 0, 0, terminal_set())
    assert manager.get_key() is None


def test_manager_user_mapping_and_clear(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    ms = KuiMapSet()
    ms.register("ab", "<F1>")
    manager.set_map_set(ms)
    os.write(write_fd, b"ab")
    assert manager.get_key() == CgdbKey.F1

    manager.clear_map_set()
    os.write(write_fd, b"ab")
    assert [manager.get_key(), manager.get_key()] == [ord("a"), ord("b")]


def test_manager_user_mapping_on_decoded_key(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    ms = KuiMapSet()
    ms.register("<Up><Down>", "k")
    manager.set_map_set(ms)
    os.write(write_fd, b"\x1b[A\x1b[B")
    assert manager.get_key() == ord("k")


def test_manager_can_get_key_after_partial_read(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    ms = KuiMapSet()
    ms.register("x", "yz")
    manager.set_map_set(ms)
    os.write(write_fd, b"x")
    assert manager.get_key() == ord("y")
    assert manager.can_get_key() is True
    assert manager.get_key() == ord("z")
    assert manager.can_get_key() is False


def test_manager_get_key_blocking_restores_timeouts(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 40, 1000, terminal_set())
    manager.set_terminal_escape_sequence_timeout(5)
    manager.set_key_mapping_timeout(7)
    os.write(write_fd, b"q")
    assert manager.get_key_blocking() == ord("q")
    assert manager.terminal_keys.timeout_ms == 5
    assert manager.normal_keys.timeout_ms == 7


def test_manager_bind_terminal_key(pipe):
    read_fd, write_fd = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    manager.bind_terminal_key(CgdbKey.HOME, ["\033[1~", "\033[7~"])
    assert "\033[1~" in manager.terminal_map_set
    os.write(write_fd, b"\x1b[7~")
    assert manager.get_key() == CgdbKey.HOME


def test_manager_bind_terminal_key_without_keycode(pipe):
    read_fd, _ = pipe
    manager = KuiManager(read_fd, 10, 10, terminal_set())
    with pytest.raises(ValueError):
        manager.bind_terminal_key(CgdbKey.ERROR, ["\033[9~"])