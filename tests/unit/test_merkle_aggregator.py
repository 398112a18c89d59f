"""
Unit tests for the Merkle aggregator.
"""

import hashlib

import pytest

from notetree.core.digest import empty_sentinel, sha256_digest
from notetree.core.entry import Entry
from notetree.core.ordered_tree import Node
from notetree.exceptions import InvalidDigestLengthError
from notetree.merkle.aggregator import MerkleAggregator


def h(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def n(value: str, left=None, right=None) -> Node:
    return Node(Entry.from_str(value), left, right)


ZERO = bytes(32)


class TestMerkleAggregator:
    """Test per-node digest rules."""
    
    def test_empty_tree(self):
        aggregator = MerkleAggregator()
        
        assert aggregator.root_digest(None) == ZERO
        assert aggregator.empty_sentinel == ZERO
    
    def test_leaf(self):
        assert MerkleAggregator().root_digest(n("A")) == h(b"A")
    
    def test_two_children(self):
        root = n("B", n("A"), n("C"))
        
        assert MerkleAggregator().root_digest(root) == h(h(b"A") + h(b"C"))
    
    def test_left_only(self):
        assert MerkleAggregator().root_digest(n("B", left=n("A"))) == h(h(b"A") + ZERO)
    
    def test_right_only(self):
        assert MerkleAggregator().root_digest(n("A", right=n("B"))) == h(ZERO + h(b"B"))
    
    def test_leaf_differs_from_one_child_node(self):
        """Test that leaves are not treated as combining two sentinels."""
        aggregator = MerkleAggregator()
        
        assert aggregator.root_digest(n("A")) != h(ZERO + ZERO)
    
    def test_three_levels(self):
        root = n("D", n("B", n("A"), n("C")), n("F", right=n("G")))
        
        left = h(h(b"A") + h(b"C"))
        right = h(ZERO + h(b"G"))
        assert MerkleAggregator().root_digest(root) == h(left + right)
    
    def test_node_digest_of_subtree(self):
        subtree = n("B", n("A"), n("C"))
        root = n("D", left=subtree)
        aggregator = MerkleAggregator()
        
        assert aggregator.node_digest(subtree) == h(h(b"A") + h(b"C"))
        assert aggregator.root_digest(root) == h(aggregator.node_digest(subtree) + ZERO)
    
    def test_deep_chain(self):
        """Test a left-leaning chain deeper than the default recursion limit."""
        root = None
        for i in range(5000):
            root = Node(Entry.raw(i.to_bytes(2, "big")), left=root)
        
        digest = MerkleAggregator().root_digest(root)
        
        assert len(digest) == 32
    
    def test_sha256_primitive(self):
        sha = lambda b: hashlib.sha256(b).digest()
        aggregator = MerkleAggregator(sha256_digest, 32)
        
        assert aggregator.root_digest(n("B", n("A"))) == sha(sha(b"A") + ZERO)
    
    def test_custom_length_sentinel(self):
        aggregator = MerkleAggregator(digest_length=16)
        
        assert aggregator.empty_sentinel == bytes(16) == empty_sentinel(16)
        assert aggregator.root_digest(n("B", n("A"))) == hashlib.blake2b(
            hashlib.blake2b(b"A", digest_size=16).digest() + bytes(16), digest_size=16
        ).digest()
    
    def test_wrong_output_length_rejected(self):
        """Test that a primitive ignoring the requested length is rejected."""
        with pytest.raises(InvalidDigestLengthError):
            MerkleAggregator(lambda data, length: b"short", 32)
    
    def test_non_positive_length_rejected(self):
        with pytest.raises(InvalidDigestLengthError):
            MerkleAggregator(digest_length=0)
