"""
Core data types for NoteTree: entries, digest primitives and the ordered tree.
"""

from notetree.core.digest import (
    DEFAULT_DIGEST_ALGORITHM,
    DEFAULT_DIGEST_LENGTH,
    DigestFunction,
    algorithm_name,
    available_algorithms,
    blake2b_digest,
    empty_sentinel,
    get_digest_function,
    sha256_digest,
    shake256_digest,
)
from notetree.core.entry import Entry, EntryType, compare_entries, content_sort_key
from notetree.core.ordered_tree import Node, OrderedByteTree

__all__ = [
    "DEFAULT_DIGEST_ALGORITHM",
    "DEFAULT_DIGEST_LENGTH",
    "DigestFunction",
    "Entry",
    "EntryType",
    "Node",
    "OrderedByteTree",
    "algorithm_name",
    "available_algorithms",
    "blake2b_digest",
    "compare_entries",
    "content_sort_key",
    "empty_sentinel",
    "get_digest_function",
    "sha256_digest",
    "shake256_digest",
]
