"""
suffix_index.core

The data structure itself.
Contains:
 - edge-labeled trie node (Node)
 - the compressed suffix index with split/contract maintenance (SuffixIndex)
 - tree walks and the full invariant check (validator)
"""

from .errors import InvariantError
from .node import Node
from .suffix_index import SuffixIndex

__all__ = [
    "InvariantError",
    "Node",
    "SuffixIndex",
]
