# tests/test_validator.py
# hand-corrupted trees must be caught, healthy ones must pass

import pytest

from suffix_index import InvariantError, SuffixIndex
from suffix_index.core.node import Node
from suffix_index.core.validator import iter_nodes, recount


@pytest.fixture
def index():
    return SuffixIndex(["abc", "abd", "b"])


def test_healthy_tree_passes(index):
    index.check_invariants()
    SuffixIndex().check_invariants()


def test_recount_matches_counters(index):
    assert recount(index.root) == (index.size(), index.word_count())
    assert recount(Node()) == (0, 0)


def test_iter_nodes_paths(index):
    paths = [p for p, _ in iter_nodes(index.root)]
    assert paths == sorted(paths)
    assert "ab" in paths and "abc" in paths and "b" in paths


def test_invariant_error_is_assertion_error():
    assert issubclass(InvariantError, AssertionError)


def test_dirty_root(index):
    index.root.ref_count = 1
    with pytest.raises(InvariantError, match="root"):
        index.check_invariants()


def test_wrong_key(index):
    node = index.root.children.pop("b")
    index.root.children["z"] = node
    with pytest.raises(InvariantError, match="keyed"):
        index.check_invariants()


def test_unreferenced_leaf(index):
    index.root.children["c"].ref_count = 0
    with pytest.raises(InvariantError, match="leaf"):
        index.check_invariants()


def test_uncontracted_chain(index):
    # "ab" -> only "c" left, and "ab" carries no reference
    del index.root.children["a"].children["d"]
    with pytest.raises(InvariantError, match="single-child"):
        index.check_invariants()


def test_word_end_without_reference(index):
    node = index.root.children["a"].children["c"]
    node.ref_count = 0
    with pytest.raises(InvariantError, match="word end"):
        index.check_invariants()


def test_counter_drift(index):
    index._size += 1
    with pytest.raises(InvariantError, match="size"):
        index.check_invariants()
    index._size -= 1
    index._word_count -= 1
    with pytest.raises(InvariantError, match="word_count"):
        index.check_invariants()


def test_erase_on_corrupted_tree_raises():
    index = SuffixIndex(["ab"])
    # the suffix "b" loses its reference behind the index's back
    index.root.children["b"].ref_count = 0
    with pytest.raises(InvariantError):
        index.erase("ab")
