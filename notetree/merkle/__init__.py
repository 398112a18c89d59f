"""
Merkle root computation and verification for ordered byte trees.

This module provides the Merkle aggregator, the digest-carrying tree and
verification of encoded trees against expected root digests.
"""

from notetree.merkle.aggregator import MerkleAggregator
from notetree.merkle.tree import MerkleByteTree
from notetree.merkle.verifier import MerkleVerifier, VerificationResult

__all__ = [
    "MerkleAggregator",
    "MerkleByteTree",
    "MerkleVerifier",
    "VerificationResult",
]
