# node.py
# Edge-labeled node of the compressed suffix trie.
# Children are keyed by the first character of their label, so a node can
# never hold two edges starting with the same character.
# Copy and comparison walk the tree with an explicit stack (no recursion),
# which keeps long words clear of the interpreter recursion limit.

from __future__ import annotations
from typing import Dict, List, Optional, Tuple


class Node:
    """
    A single node in the suffix trie.
    label: edge string leading into this node from its parent ("" for root)
    is_word_end: path from root spells a word inserted as a complete word
    ref_count: number of suffix insertions terminating exactly here
    children: first char of child label -> child Node
    """

    __slots__ = ("label", "is_word_end", "ref_count", "children")

    def __init__(
        self,
        label: str = "",
        is_word_end: bool = False,
        ref_count: int = 0,
        children: Optional[Dict[str, Node]] = None,
    ) -> None:
        self.label = label
        self.is_word_end = is_word_end
        self.ref_count = ref_count
        self.children: Dict[str, Node] = children if children is not None else {}

    def __repr__(self) -> str:
        return (
            f"Node(label={self.label!r}, is_word_end={self.is_word_end}, "
            f"ref_count={self.ref_count}, children={len(self.children)})"
        )

    # lookup ------------------------------------------------------------------
    def find_by_prefix(self, s: str) -> Tuple[Optional[Node], int]:
        """
        Find the child whose label shares a prefix with `s`.
        Returns (child, common_len) where common_len is the length of the
        longest common prefix of child.label and s. (None, 0) if no child
        starts with s[0] or s is empty.
        """
        if not s:
            return None, 0

        child = self.children.get(s[0])
        if child is None:
            return None, 0

        label = child.label
        limit = min(len(label), len(s))
        end = 1
        while end < limit and label[end] == s[end]:
            end += 1
        return child, end

    # copy/compare ------------------------------------------------------------
    @staticmethod
    def deep_copy(node: Optional[Node]) -> Optional[Node]:
        """Return a full copy of the subtree rooted at `node`, sharing nothing."""
        if node is None:
            return None

        copy_root = Node(node.label, node.is_word_end, node.ref_count)
        stack: List[Tuple[Node, Node]] = [(node, copy_root)]
        while stack:
            src, dst = stack.pop()
            for key, child in src.children.items():
                twin = Node(child.label, child.is_word_end, child.ref_count)
                dst.children[key] = twin
                stack.append((child, twin))
        return copy_root

    @staticmethod
    def deep_equal(a: Optional[Node], b: Optional[Node]) -> bool:
        """True if both subtrees have the same labels, flags and counts everywhere."""
        if a is None or b is None:
            return a is b

        stack: List[Tuple[Node, Node]] = [(a, b)]
        while stack:
            x, y = stack.pop()
            if (
                x.label != y.label
                or x.is_word_end != y.is_word_end
                or x.ref_count != y.ref_count
                or len(x.children) != len(y.children)
            ):
                return False
            for key, child in x.children.items():
                other = y.children.get(key)
                if other is None:
                    return False
                stack.append((child, other))
        return True
