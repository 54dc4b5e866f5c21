# suffix_index.py
"""
SuffixIndex - compressed suffix trie over a set of words.

Every inserted word is stored together with all of its suffixes
(word, word[1:], ..., word[-1:]). Each suffix is a path from the root;
edges carry multi-character labels and only branch where two stored
suffixes diverge, so memory follows the number of branching points
rather than the quadratic number of suffixes.

Per node:
 - is_word_end marks the end of a complete inserted word
 - ref_count counts every suffix insertion (word or plain suffix) ending there

Mutations keep the tree compressed:
 - insert splits an edge when a new suffix diverges partway through it
 - erase prunes nodes left with no references and no children, and
   contracts unreferenced single-child nodes into their child

Not thread-safe: callers sharing an instance across threads must hold
their own lock around every call. copy() gives a fully independent
instance that can be handed to another thread.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from suffix_index.core.errors import InvariantError
from suffix_index.core.node import Node
from suffix_index.core import validator

logger = logging.getLogger(__name__)


class SuffixIndex:
    """
    Compressed suffix index.
    Public API:
      - insert(word) -> bool / erase(word) -> bool
      - search(word) -> bool / ends_with(suffix) -> bool
      - size(), word_count(), empty(), clear()
      - copy(), take(), ==, words(), check_invariants()
    """

    __hash__ = None  # mutable, compared by value

    def __init__(self, words: Optional[Iterable[str]] = None) -> None:
        self._root = Node()
        self._size = 0  # nodes excluding root
        self._word_count = 0
        if words is not None:
            self.insert_many(words)

    # counters ------------------------------------------------------------------
    def size(self) -> int:
        return self._size

    def word_count(self) -> int:
        return self._word_count

    def empty(self) -> bool:
        return not self._root.children

    def __len__(self) -> int:
        return self._word_count

    @property
    def root(self) -> Node:
        """Root node, for inspection only. Mutating it breaks the counters."""
        return self._root

    def __repr__(self) -> str:
        return f"SuffixIndex(size={self._size}, word_count={self._word_count})"

    # insertion -----------------------------------------------------------------
    def insert(self, word: str) -> bool:
        """
        Insert `word` and all of its suffixes.
        Returns False (and leaves the tree untouched) if the word is empty
        or already stored as a complete word.
        """
        if not isinstance(word, str) or not word:
            return False

        if not self._insert_suffix(word, is_word=True):
            logger.debug("insert rejected, %r already stored", word)
            return False

        # once the word pass succeeded every suffix pass must succeed too
        for start in range(1, len(word)):
            if not self._insert_suffix(word[start:], is_word=False):
                raise InvariantError(f"suffix {word[start:]!r} of {word!r} could not be inserted")
        return True

    def insert_many(self, words: Iterable[str]) -> int:
        """Insert each word in order, skipping rejected ones. Returns how many were accepted."""
        added = 0
        for w in words:
            if self.insert(w):
                added += 1
        return added

    def _insert_suffix(self, suffix: str, is_word: bool) -> bool:
        node = self._root
        rest = suffix
        while rest:
            child, common = node.find_by_prefix(rest)
            if child is None:
                child = Node(rest)
                node.children[rest[0]] = child
                self._size += 1
                common = len(rest)
            elif common < len(child.label):
                self._split(child, common)
            node = child
            rest = rest[common:]

        if is_word:
            if node.is_word_end:
                return False
            node.is_word_end = True
            self._word_count += 1
        node.ref_count += 1
        return True

    def _split(self, child: Node, at: int) -> None:
        """
        Cut child's label at `at`. The tail moves to a new grandchild that
        takes over child's flags, count and subtree; child becomes a plain
        branching point. The first character is unchanged so the parent's
        key for child stays valid.
        """
        tail = Node(
            child.label[at:],
            is_word_end=child.is_word_end,
            ref_count=child.ref_count,
            children=child.children,
        )
        logger.debug("split %r -> %r + %r", child.label, child.label[:at], tail.label)
        child.label = child.label[:at]
        child.is_word_end = False
        child.ref_count = 0
        child.children = {tail.label[0]: tail}
        self._size += 1

    # deletion ------------------------------------------------------------------
    def erase(self, word: str) -> bool:
        """
        Remove `word` and the suffix references its insertion added.
        Returns False (and leaves the tree untouched) if the word is empty
        or not currently stored as a complete word.
        """
        if not isinstance(word, str) or not word:
            return False

        if not self._erase_suffix(word, is_word=True):
            logger.debug("erase rejected, %r not stored", word)
            return False

        for start in range(1, len(word)):
            if not self._erase_suffix(word[start:], is_word=False):
                raise InvariantError(f"suffix {word[start:]!r} of {word!r} could not be erased")
        return True

    def _erase_suffix(self, suffix: str, is_word: bool) -> bool:
        # walk down first, remembering (parent, child) edges for cleanup
        path: List[Tuple[Node, Node]] = []
        node = self._root
        rest = suffix
        while rest:
            child, common = node.find_by_prefix(rest)
            if child is None or common < len(child.label):
                return False
            path.append((node, child))
            node = child
            rest = rest[common:]

        if is_word:
            if not node.is_word_end:
                return False
            node.is_word_end = False
            self._word_count -= 1
        elif node.ref_count <= 0:
            raise InvariantError(f"suffix {suffix!r} has no reference left to release")
        node.ref_count -= 1

        # clean up bottom-up
        for parent, child in reversed(path):
            if child.ref_count:
                continue
            if not child.children:
                logger.debug("prune %r", child.label)
                del parent.children[child.label[0]]
                self._size -= 1
            elif len(child.children) == 1:
                self._contract(child)
        return True

    def _contract(self, child: Node) -> None:
        """Merge the only grandchild into `child`, which keeps its place in the parent."""
        grandchild = next(iter(child.children.values()), None)
        if grandchild is None:
            raise InvariantError(f"contraction of {child.label!r} found no grandchild")
        logger.debug("contract %r + %r", child.label, grandchild.label)
        child.label += grandchild.label
        child.is_word_end = grandchild.is_word_end
        child.ref_count = grandchild.ref_count
        child.children = grandchild.children
        self._size -= 1

    # search/traversal ----------------------------------------------------------
    def _locate(self, s: str) -> Optional[Node]:
        """Node reached by spelling `s` from the root along full labels, or None."""
        node = self._root
        rest = s
        while rest:
            child, common = node.find_by_prefix(rest)
            if child is None or common < len(child.label):
                return None
            node = child
            rest = rest[common:]
        return node

    def search(self, word: str) -> bool:
        """True if `word` is currently stored as a complete word."""
        if not isinstance(word, str):
            return False
        node = self._locate(word)
        return node is not None and node.is_word_end

    def ends_with(self, suffix: str) -> bool:
        """
        True if `suffix` ends some stored word other than being only the
        full spelling of that one stored word. At the reached node:
          - not a word end: any reference counts
          - a word end: needs a reference beyond the word itself
        """
        if not isinstance(suffix, str):
            return False
        node = self._locate(suffix)
        if node is None:
            return False
        if node.is_word_end:
            return node.ref_count > 1
        return node.ref_count > 0

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.search(word)

    def words(self) -> List[str]:
        """All stored complete words, sorted."""
        return [path for path, node in validator.iter_nodes(self._root) if node.is_word_end]

    # lifecycle -----------------------------------------------------------------
    def clear(self) -> None:
        """Drop every node and return to the empty tree."""
        self._root = Node()
        self._size = 0
        self._word_count = 0

    def copy(self) -> SuffixIndex:
        """Deep copy: no node is shared with the original."""
        twin = type(self)()
        twin._root = Node.deep_copy(self._root)
        twin._size = self._size
        twin._word_count = self._word_count
        return twin

    __copy__ = copy

    def __deepcopy__(self, memo) -> SuffixIndex:
        return self.copy()

    def take(self) -> SuffixIndex:
        """
        Move the contents into a new index in O(1).
        This instance is left empty.
        """
        moved = type(self)()
        moved._root, moved._size, moved._word_count = self._root, self._size, self._word_count
        self.clear()
        return moved

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SuffixIndex):
            return NotImplemented
        return (
            self._size == other._size
            and self._word_count == other._word_count
            and Node.deep_equal(self._root, other._root)
        )

    # validation ----------------------------------------------------------------
    def check_invariants(self) -> None:
        """Full recount and structural check. Raises InvariantError on the first problem."""
        validator.check_invariants(self)
