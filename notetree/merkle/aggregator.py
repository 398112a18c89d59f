"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Merkle root computation over an ordered byte tree.

Per node:
- A node with no children hashes as digest(entry content).
- A node with at least one child hashes as
  digest(digest(left) || digest(right)), where a missing child contributes
  the all-zero empty sentinel. A leaf and a one-child node holding the same
  entry therefore hash differently.
- The root digest of an empty tree is the empty sentinel itself, not the
  digest of empty input.

Only child presence is consulted at each step, never aggregate tree state.
The whole tree is walked on every call; there is no partial recomputation.
"""

from typing import Dict, List, Optional, Tuple

from notetree.core.digest import (
    DEFAULT_DIGEST_LENGTH,
    DigestFunction,
    blake2b_digest,
    empty_sentinel as zero_digest,
)
from notetree.core.ordered_tree import Node
from notetree.exceptions import InvalidDigestLengthError


class MerkleAggregator:
    """
    Compute fixed-length digests summarizing a tree's content and shape.

    Example:
        >>> aggregator = MerkleAggregator()
        >>> aggregator.root_digest(None) == bytes(32)
        True
    """

    def __init__(
        self,
        digest_fn: DigestFunction = blake2b_digest,
        digest_length: int = DEFAULT_DIGEST_LENGTH,
    ):
        """
        Args:
            digest_fn: Deterministic digest primitive taking (data, length)
            digest_length: Output length in bytes of every digest

        Raises:
            InvalidDigestLengthError: If digest_fn cannot produce digest_length bytes
        """
        if digest_length < 1:
            raise InvalidDigestLengthError(f"Digest length must be positive, got {digest_length}")

        sample = digest_fn(b"", digest_length)
        if len(sample) != digest_length:
            raise InvalidDigestLengthError(
                f"Digest function returned {len(sample)} bytes, expected {digest_length}"
            )

        self.digest_fn = digest_fn
        self.digest_length = digest_length
        self._empty_sentinel = zero_digest(digest_length)

    @property
    def empty_sentinel(self) -> bytes:
        """All-zero digest for an absent subtree or empty tree."""
        return self._empty_sentinel

    def _hash(self, data: bytes) -> bytes:
        return self.digest_fn(data, self.digest_length)

    def leaf_digest(self, node: Node) -> bytes:
        """Digest of a childless node: the digest of its entry content."""
        return self._hash(node.entry.data)

    def combine(self, left: bytes, right: bytes) -> bytes:
        """Digest of an interior node given its children's digests."""
        return self._hash(left + right)

    def node_digest(self, node: Optional[Node]) -> bytes:
        """
        Compute the digest of the subtree rooted at node.

        Uses an explicit post-order work stack, so arbitrarily deep
        (degenerate) trees are handled without recursion.

        Args:
            node: Subtree root, or None for an absent subtree

        Returns:
            Subtree digest, or the empty sentinel when node is None
        """
        if node is None:
            return self._empty_sentinel

        # (node, children_done) pairs; digests of finished nodes keyed by id
        stack: List[Tuple[Node, bool]] = [(node, False)]
        digests: Dict[int, bytes] = {}

        while stack:
            current, children_done = stack.pop()

            if current.is_leaf:
                digests[id(current)] = self.leaf_digest(current)
                continue

            if not children_done:
                stack.append((current, True))
                if current.right is not None:
                    stack.append((current.right, False))
                if current.left is not None:
                    stack.append((current.left, False))
                continue

            left = (
                digests.pop(id(current.left))
                if current.left is not None
                else self._empty_sentinel
            )
            right = (
                digests.pop(id(current.right))
                if current.right is not None
                else self._empty_sentinel
            )
            digests[id(current)] = self.combine(left, right)

        return digests[id(node)]

    def root_digest(self, root: Optional[Node]) -> bytes:
        """Root digest of a whole tree (the empty sentinel when root is None)."""
        return self.node_digest(root)
