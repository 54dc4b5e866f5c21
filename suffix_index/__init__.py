"""Compressed suffix index: word and suffix lookup over a compressed trie of all suffixes."""

from suffix_index.core import InvariantError, Node, SuffixIndex

__all__ = [
    "InvariantError",
    "Node",
    "SuffixIndex",
]

__version__ = "0.1.0"
