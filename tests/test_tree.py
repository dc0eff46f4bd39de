import pytest

from keyui.tree import KuiTree, TreeState


def _keys(text):
    return [ord(c) for c in text]


def _feed(tree, text):
    tree.reset_state()
    results = []
    for key in _keys(text):
        results.append(tree.push_key(key))
        if tree.state is not TreeState.MATCHING:
            break
    tree.finalize_state()
    return results


def test_new_tree_is_matching():
    tree = KuiTree()
    assert tree.state is TreeState.MATCHING


def test_state_values():
    assert TreeState.FOUND == 0
    assert [s.name for s in TreeState] == ["FOUND", "MATCHING", "NOT_FOUND", "ERROR"]
    tree = KuiTree()
    tree.reset_state()
    assert tree.state == 1
    tree.push_key(ord("x"))
    assert tree.state == 2


def test_exact_match_is_found():
    tree = KuiTree()
    tree.insert(_keys("ab"), "xyz")
    tree.reset_state()
    assert tree.push_key(ord("a")) is False
    assert tree.state is TreeState.MATCHING
    assert tree.push_key(ord("b")) is True
    assert tree.state is TreeState.FOUND
    assert tree.found_value() == "xyz"


def test_mismatch_is_not_found():
    tree = KuiTree()
    tree.insert(_keys("ab"), "xyz")
    tree.reset_state()
    tree.push_key(ord("a"))
    assert tree.push_key(ord("c")) is False
    assert tree.state is TreeState.NOT_FOUND
    tree.finalize_state()
    assert tree.state is TreeState.NOT_FOUND
    with pytest.raises(LookupError):
        tree.found_value()


def test_push_after_match_ended_raises():
    tree = KuiTree()
    tree.insert(_keys("a"), 1)
    tree.reset_state()
    tree.push_key(ord("a"))
    with pytest.raises(RuntimeError):
        tree.push_key(ord("a"))


def test_prefix_mapping_found_after_finalize():
    tree = KuiTree()
    tree.insert(_keys("ab"), "short")
    tree.insert(_keys("abcdf"), "long")
    results = _feed(tree, "abcde")
    assert results == [False, True, False, False, False]
    assert tree.state is TreeState.FOUND
    assert tree.found_value() == "short"


def test_longest_mapping_wins():
    tree = KuiTree()
    tree.insert(_keys("ab"), "short")
    tree.insert(_keys("abc"), "long")
    _feed(tree, "abc")
    assert tree.found_value() == "long"


def test_reinsert_replaces_value():
    tree = KuiTree()
    tree.insert(_keys("abc"), "first")
    tree.insert(_keys("abc"), "second")
    _feed(tree, "abc")
    assert tree.found_value() == "second"


def test_reset_clears_found():
    tree = KuiTree()
    tree.insert(_keys("a"), "v")
    _feed(tree, "a")
    tree.reset_state()
    assert tree.state is TreeState.MATCHING
    with pytest.raises(LookupError):
        tree.found_value()


def test_delete_removes_mapping():
    tree = KuiTree()
    tree.insert(_keys("abc"), "v")
    tree.delete(_keys("abc"))
    tree.reset_state()
    tree.push_key(ord("a"))
    assert tree.state is TreeState.NOT_FOUND


def test_delete_keeps_longer_mapping():
    tree = KuiTree()
    tree.insert(_keys("u1"), "a")
    tree.insert(_keys("u12"), "b")
    tree.delete(_keys("u1"))
    results = _feed(tree, "u1")
    assert results == [False, False]
    with pytest.raises(LookupError):
        tree.found_value()
    _feed(tree, "u12")
    assert tree.found_value() == "b"


def test_delete_longer_keeps_shorter_mapping():
    tree = KuiTree()
    tree.insert(_keys("u1"), "a")
    tree.insert(_keys("u12"), "b")
    tree.delete(_keys("u12"))
    tree.reset_state()
    tree.push_key(ord("u"))
    assert tree.push_key(ord("1")) is True
    assert tree.state is TreeState.FOUND
    assert tree.found_value() == "a"


def test_delete_unknown_sequence_leaves_tree_intact():
    tree = KuiTree()
    tree.insert(_keys("ab"), "v")
    tree.delete(_keys("zz"))
    tree.delete([])
    _feed(tree, "ab")
    assert tree.found_value() == "v"


def test_non_character_keys_work():
    tree = KuiTree()
    tree.insert([10001, 10002], "combo")
    tree.reset_state()
    tree.push_key(10001)
    assert tree.push_key(10002) is True
    assert tree.found_value() == "combo"


def test_falsy_data_is_a_valid_value():
    tree = KuiTree()
    tree.insert(_keys("a"), None)
    tree.reset_state()
    assert tree.push_key(ord("a")) is True
    assert tree.found_value() is None