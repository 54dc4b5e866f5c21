# validator.py - tree walks and the full invariant check behind SuffixIndex.check_invariants

from __future__ import annotations
from typing import Iterator, List, Tuple, TYPE_CHECKING

from suffix_index.core.errors import InvariantError
from suffix_index.core.node import Node

if TYPE_CHECKING:
    from suffix_index.core.suffix_index import SuffixIndex


def iter_nodes(root: Node) -> Iterator[Tuple[str, Node]]:
    """
    Depth-first walk yielding (path, node) for every node below `root`.
    path is the concatenation of labels from root to node.
    Children are visited in first-character order so output is deterministic.
    """
    stack: List[Tuple[str, Node]] = [
        (child.label, child) for _, child in sorted(root.children.items(), reverse=True)
    ]
    while stack:
        path, node = stack.pop()
        yield path, node
        for _, child in sorted(node.children.items(), reverse=True):
            stack.append((path + child.label, child))


def recount(root: Node) -> Tuple[int, int]:
    """Fresh (size, word_count) computed by walking the tree."""
    size = 0
    words = 0
    for _path, node in iter_nodes(root):
        size += 1
        if node.is_word_end:
            words += 1
    return size, words


def check_invariants(index: "SuffixIndex") -> None:
    """
    Walk the whole tree and raise InvariantError at the first violation:
     - root: empty label, not a word end, no references
     - every child keyed by the first char of its non-empty label
     - no unreferenced leaf, no unreferenced single-child chain
     - word ends carry at least one reference
     - maintained size/word_count match a recount
    """
    root = index.root
    if root.label or root.is_word_end or root.ref_count:
        raise InvariantError(f"root must be blank, got {root!r}")

    _check_keys("", root)
    for path, node in iter_nodes(root):
        _check_keys(path, node)
        if node.ref_count < 0:
            raise InvariantError(f"negative ref_count at {path!r}")
        if node.is_word_end and node.ref_count < 1:
            raise InvariantError(f"word end without reference at {path!r}")
        if node.ref_count == 0:
            if not node.children:
                raise InvariantError(f"unreferenced leaf left at {path!r}")
            if len(node.children) == 1:
                raise InvariantError(f"uncontracted single-child node at {path!r}")

    size, words = recount(root)
    if size != index.size():
        raise InvariantError(f"size is {index.size()} but tree holds {size} nodes")
    if words != index.word_count():
        raise InvariantError(f"word_count is {index.word_count()} but tree holds {words} words")


def _check_keys(path: str, node: Node) -> None:
    for key, child in node.children.items():
        if not child.label:
            raise InvariantError(f"empty edge label under {path!r}")
        if key != child.label[0]:
            raise InvariantError(
                f"child {child.label!r} under {path!r} is keyed by {key!r}"
            )
