"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Root digest verification for encoded trees.

A receiver that knows the expected root digest of a tree can check an
encoded copy of it: the bytes are decoded, the root digest recomputed, and
the two compared. Malformed input is reported as a failed verification
rather than raised.
"""

import hmac
import time
from dataclasses import dataclass
from typing import Optional

from notetree.core.digest import DEFAULT_DIGEST_LENGTH, DigestFunction, blake2b_digest
from notetree.exceptions import DecodeError
from notetree.logging_config import get_logger, log_tree_verification
from notetree.merkle.tree import MerkleByteTree

logger = get_logger(__name__)


@dataclass
class VerificationResult:
    """
    Result of verifying an encoded tree against an expected root digest.
    
    Attributes:
        verified: True if the recomputed root digest matches
        expected_root: Root digest supplied by the caller
        computed_root: Root digest recomputed from the input (None if decoding failed)
        entry_count: Number of entries decoded
        error_message: Error message if verification failed
    """
    verified: bool
    expected_root: bytes
    computed_root: Optional[bytes]
    entry_count: int = 0
    error_message: Optional[str] = None


class MerkleVerifier:
    """
    Verify encoded trees against known root digests.
    
    Example:
        >>> tree = MerkleByteTree.from_entries([Entry.from_str("A")])
        >>> verifier = MerkleVerifier()
        >>> verifier.verify_encoded(tree.to_bytes(), tree.root_digest).verified
        True
    """
    
    def __init__(
        self,
        digest_fn: DigestFunction = blake2b_digest,
        digest_length: int = DEFAULT_DIGEST_LENGTH,
        validate_order: bool = True,
    ):
        self.digest_fn = digest_fn
        self.digest_length = digest_length
        self.validate_order = validate_order
    
    def verify_encoded(self, data: bytes, expected_root: bytes) -> VerificationResult:
        """
        Decode an encoded tree and compare its root digest with expected_root.
        
        Args:
            data: Encoded tree
            expected_root: Root digest the tree is expected to have
        
        Returns:
            VerificationResult describing the outcome
        """
        start_time = time.perf_counter()
        
        try:
            tree = MerkleByteTree.from_bytes(
                data,
                digest_fn=self.digest_fn,
                digest_length=self.digest_length,
                validate_order=self.validate_order,
            )
        except DecodeError as e:
            result = VerificationResult(
                verified=False,
                expected_root=expected_root,
                computed_root=None,
                error_message=f"Failed to decode tree: {e}",
            )
            self._log(result, start_time)
            return result
        
        computed_root = tree.root_digest
        verified = hmac.compare_digest(computed_root, expected_root)
        
        result = VerificationResult(
            verified=verified,
            expected_root=expected_root,
            computed_root=computed_root,
            entry_count=tree.size(),
            error_message=None if verified else "Root digest mismatch",
        )
        self._log(result, start_time)
        return result
    
    def verify_tree(self, tree: MerkleByteTree, expected_root: bytes) -> VerificationResult:
        """Verify an in-memory tree by round-tripping it through the codec."""
        return self.verify_encoded(tree.to_bytes(), expected_root)
    
    def _log(self, result: VerificationResult, start_time: float) -> None:
        log_tree_verification(
            logger,
            success=result.verified,
            expected_root=result.expected_root.hex(),
            computed_root=result.computed_root.hex() if result.computed_root is not None else None,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            failure_reason=result.error_message,
            entry_count=result.entry_count,
        )
