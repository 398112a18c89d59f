"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Content-addressable ordered set of binary records.

MerkleByteTree combines an unbalanced binary search tree of type-tagged
entries with a cached Merkle root digest, recomputed after every committed
structural mutation, and the flat binary codec for persisting or
transmitting the tree.

The root digest depends on both the stored entries and the tree's shape,
which in turn depends on insertion order: two trees holding the same
entries may legitimately have different root digests.

Not thread-safe. A mutation interrupted between the structural change and
the digest update leaves the cached digest stale; there is no rollback.
"""

import time
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from notetree.codec.tree_codec import decode_tree, encode_tree
from notetree.config.settings import NoteTreeConfig
from notetree.core.digest import (
    DEFAULT_DIGEST_LENGTH,
    DigestFunction,
    algorithm_name,
    blake2b_digest,
    get_digest_function,
)
from notetree.core.entry import Entry
from notetree.core.ordered_tree import Node, OrderedByteTree
from notetree.logging_config import get_logger, log_root_digest_update, log_tree_decode
from notetree.merkle.aggregator import MerkleAggregator

logger = get_logger(__name__)


class MerkleByteTree:
    """
    Ordered byte tree with a cached Merkle root digest.

    Example:
        >>> tree = MerkleByteTree()
        >>> tree.insert(Entry.from_str("B"))
        True
        >>> tree.insert(Entry.from_str("A"))
        True
        >>> [e.as_str() for e in tree.entries()]
        ['A', 'B']
        >>> restored = MerkleByteTree.from_bytes(tree.to_bytes())
        >>> restored.root_digest == tree.root_digest
        True
    """

    def __init__(
        self,
        digest_fn: DigestFunction = blake2b_digest,
        digest_length: int = DEFAULT_DIGEST_LENGTH,
    ):
        """
        Create an empty tree.

        Args:
            digest_fn: Deterministic digest primitive taking (data, length)
            digest_length: Root digest length in bytes

        Raises:
            InvalidDigestLengthError: If digest_fn cannot produce digest_length bytes
        """
        self._tree = OrderedByteTree()
        self._aggregator = MerkleAggregator(digest_fn, digest_length)
        self._root_digest = self._aggregator.empty_sentinel

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        digest_fn: DigestFunction = blake2b_digest,
        digest_length: int = DEFAULT_DIGEST_LENGTH,
        validate_order: bool = False,
    ) -> "MerkleByteTree":
        """
        Reconstruct a tree from bytes produced by to_bytes().

        Args:
            data: Encoded tree (zero-length input yields an empty tree)
            digest_fn: Digest primitive for the root digest
            digest_length: Root digest length in bytes
            validate_order: Reject input whose entries are not in BST order

        Raises:
            DecodeError: If data is malformed
        """
        tree = cls(digest_fn, digest_length)
        tree.set_bytes(data, validate_order=validate_order)
        return tree

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Entry],
        digest_fn: DigestFunction = blake2b_digest,
        digest_length: int = DEFAULT_DIGEST_LENGTH,
    ) -> "MerkleByteTree":
        """Build a tree by inserting entries in iteration order."""
        tree = cls(digest_fn, digest_length)
        for entry in entries:
            tree.insert(entry)
        return tree

    @classmethod
    def from_config(
        cls,
        config: NoteTreeConfig,
        data: Optional[bytes] = None,
    ) -> "MerkleByteTree":
        """
        Build a tree using the digest and codec settings of a configuration.

        Args:
            config: Loaded configuration
            data: Optional encoded tree to decode into the new tree
        """
        tree = cls(get_digest_function(config.digest.algorithm), config.digest.length)
        if data:
            tree.set_bytes(data, validate_order=config.codec.validate_order)
        return tree

    @property
    def digest_algorithm(self) -> str:
        return algorithm_name(self._aggregator.digest_fn)

    @property
    def digest_length(self) -> int:
        return self._aggregator.digest_length

    @property
    def root(self) -> Optional[Node]:
        """Root node of the underlying tree (read-only use)."""
        return self._tree.root

    @property
    def root_digest(self) -> bytes:
        """Cached root digest; the all-zero sentinel for an empty tree."""
        return self._root_digest

    def root_digest_hex(self) -> str:
        return self._root_digest.hex()

    def _update_root_digest(self, operation: str) -> None:
        start_time = time.perf_counter()
        self._root_digest = self._aggregator.root_digest(self._tree.root)
        duration_ms = (time.perf_counter() - start_time) * 1000
        log_root_digest_update(
            logger,
            operation=operation,
            entry_count=self._tree.size(),
            root_digest=self._root_digest.hex(),
            duration_ms=duration_ms,
        )

    def insert(self, entry: Entry) -> bool:
        """
        Insert an entry and recompute the root digest.

        Inserting content that is already present is a no-op.

        Returns:
            True if the tree changed
        """
        inserted = self._tree.insert(entry)
        if inserted:
            self._update_root_digest("insert")
        return inserted

    def remove(self, entry: Entry) -> bool:
        """
        Remove an entry and recompute the root digest.

        Removing absent content is a no-op. Removing the last entry resets
        the root digest to the empty sentinel.

        Returns:
            True if the tree changed
        """
        removed = self._tree.remove(entry)
        if removed:
            self._update_root_digest("remove")
        return removed

    def contains(self, entry: Entry) -> bool:
        return self._tree.contains(entry)

    def entries(self) -> List[Entry]:
        """Entries in ascending order, as a fresh list."""
        return self._tree.in_order_traversal()

    in_order_traversal = entries

    def as_indexed_pairs(self) -> List[Tuple[int, Entry]]:
        """Ordered (position, entry) pairs."""
        return list(enumerate(self._tree.in_order_traversal()))

    def size(self) -> int:
        return self._tree.size()

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def height(self) -> int:
        return self._tree.height()

    def clear(self) -> None:
        """Discard all entries and reset the root digest to the sentinel."""
        self._tree.clear()
        self._root_digest = self._aggregator.empty_sentinel
        logger.debug("tree_cleared", root_digest=self._root_digest.hex())

    def to_bytes(self) -> bytes:
        """
        Encode the tree in the flat preorder format.

        Returns:
            Encoded bytes; empty for an empty tree
        """
        return encode_tree(self._tree.root)

    def set_bytes(self, data: bytes, validate_order: bool = False) -> None:
        """
        Replace the tree's contents with a decoded tree.

        The input is fully decoded before anything is replaced, so a decode
        failure leaves the current contents untouched.

        Raises:
            DecodeError: If data is malformed
        """
        start_time = time.perf_counter()
        root, count = decode_tree(data, validate_order=validate_order)
        log_tree_decode(
            logger,
            byte_length=len(data),
            entry_count=count,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )

        self._tree.replace_root(root, count)
        self._update_root_digest("decode")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize a JSON-safe summary of the tree and its ordered entries."""
        return {
            "size": self.size(),
            "digest_algorithm": self.digest_algorithm,
            "digest_length": self.digest_length,
            "root_digest": self.root_digest_hex(),
            "entries": [entry.to_dict() for entry in self.entries()],
        }

    def __len__(self) -> int:
        return self._tree.size()

    def __contains__(self, entry: object) -> bool:
        return entry in self._tree

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._tree)

    def __repr__(self) -> str:
        return (
            f"MerkleByteTree(size={self.size()}, "
            f"root_digest={self.root_digest_hex()[:16]}...)"
        )
