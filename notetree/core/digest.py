"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Digest primitives used by the Merkle aggregator.

A digest function takes raw bytes and an output length and returns exactly
that many bytes. It must be deterministic; the aggregator treats it as an
opaque collaborator. BLAKE2b is the default primitive.
"""

import hashlib
from typing import Callable, Dict, List

from notetree.exceptions import InvalidDigestLengthError, UnknownDigestAlgorithmError


DigestFunction = Callable[[bytes, int], bytes]

DEFAULT_DIGEST_LENGTH = 32
DEFAULT_DIGEST_ALGORITHM = "blake2b"

BLAKE2B_MAX_LENGTH = 64
SHA256_LENGTH = 32


def blake2b_digest(data: bytes, length: int = DEFAULT_DIGEST_LENGTH) -> bytes:
    """
    Hash data with BLAKE2b using a variable output size.

    Args:
        data: Data to hash
        length: Digest length in bytes (1-64)

    Returns:
        BLAKE2b digest of the requested length

    Raises:
        InvalidDigestLengthError: If length is outside [1, 64]
    """
    if not 1 <= length <= BLAKE2B_MAX_LENGTH:
        raise InvalidDigestLengthError(
            f"BLAKE2b digest length must be in range [1, {BLAKE2B_MAX_LENGTH}], got {length}"
        )
    return hashlib.blake2b(data, digest_size=length).digest()


def shake256_digest(data: bytes, length: int = DEFAULT_DIGEST_LENGTH) -> bytes:
    """
    Hash data with SHAKE256, an extendable-output function.

    Raises:
        InvalidDigestLengthError: If length is not positive
    """
    if length < 1:
        raise InvalidDigestLengthError(f"SHAKE256 digest length must be positive, got {length}")
    return hashlib.shake_256(data).digest(length)


def sha256_digest(data: bytes, length: int = SHA256_LENGTH) -> bytes:
    """
    Hash data with SHA-256.

    Raises:
        InvalidDigestLengthError: If length is not 32
    """
    if length != SHA256_LENGTH:
        raise InvalidDigestLengthError(
            f"SHA-256 digest length must be {SHA256_LENGTH}, got {length}"
        )
    return hashlib.sha256(data).digest()


_DIGEST_FUNCTIONS: Dict[str, DigestFunction] = {
    "blake2b": blake2b_digest,
    "shake_256": shake256_digest,
    "sha256": sha256_digest,
}


def available_algorithms() -> List[str]:
    """Names of the registered digest algorithms."""
    return sorted(_DIGEST_FUNCTIONS)


def get_digest_function(name: str) -> DigestFunction:
    """
    Resolve a registered digest primitive by name.

    Args:
        name: Algorithm name ("blake2b", "shake_256", "sha256")

    Returns:
        The digest function

    Raises:
        UnknownDigestAlgorithmError: If no primitive is registered under name
    """
    try:
        return _DIGEST_FUNCTIONS[name.lower()]
    except KeyError:
        raise UnknownDigestAlgorithmError(
            f"Unknown digest algorithm '{name}', expected one of {available_algorithms()}"
        ) from None


def validate_digest_length(name: str, length: int) -> None:
    """
    Check that the named algorithm can produce digests of the given length.

    Raises:
        UnknownDigestAlgorithmError: If the algorithm is not registered
        InvalidDigestLengthError: If the algorithm cannot produce the length
    """
    get_digest_function(name)(b"", length)


def empty_sentinel(length: int = DEFAULT_DIGEST_LENGTH) -> bytes:
    """All-zero digest standing for an absent subtree or an empty tree."""
    return bytes(length)


def algorithm_name(digest_fn: DigestFunction) -> str:
    """Registered name of a digest function, or its function name if unregistered."""
    for name, fn in _DIGEST_FUNCTIONS.items():
        if fn is digest_fn:
            return name
    return getattr(digest_fn, "__name__", repr(digest_fn))
