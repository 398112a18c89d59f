"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

NoteTree - Content-addressable ordered set of binary records.

NoteTree keeps type-tagged byte entries in a plain binary search tree,
maintains a Merkle-style root digest of the tree after every mutation,
and converts trees to and from a flat binary format.
"""

from notetree._version import __version__
from notetree.core.entry import Entry, EntryType, compare_entries
from notetree.merkle.tree import MerkleByteTree

__all__ = [
    "__version__",
    "Entry",
    "EntryType",
    "MerkleByteTree",
    "compare_entries",
]
