"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Exception hierarchy for NoteTree.

All custom exceptions inherit from NoteTreeError base class.
"""

from typing import Optional


class NoteTreeError(Exception):
    """Base exception for all NoteTree errors."""
    pass


# Entry Errors
class EntryError(NoteTreeError):
    """Base exception for entry-related errors."""
    pass


class InvalidEntryError(EntryError):
    """Raised when an entry has an invalid type tag or content."""
    pass


# Digest Errors
class DigestError(NoteTreeError):
    """Base exception for digest-related errors."""
    pass


class InvalidDigestLengthError(DigestError):
    """Raised when a digest primitive cannot produce the requested length."""
    pass


class UnknownDigestAlgorithmError(DigestError):
    """Raised when a digest algorithm name is not registered."""
    pass


# Codec Errors
class CodecError(NoteTreeError):
    """Base exception for tree codec errors."""
    pass


class EncodeError(CodecError):
    """Raised when a tree cannot be encoded."""
    pass


class EntryTooLargeError(EncodeError):
    """Raised when entry content does not fit the 4-byte length prefix."""
    pass


class DecodeError(CodecError):
    """
    Raised when an encoded tree is malformed.
    
    Attributes:
        offset: Byte offset in the input where decoding failed
    """
    
    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.offset = offset


class TruncatedInputError(DecodeError):
    """Raised when fewer bytes remain than the next field requires."""
    pass


class InvalidPresenceMarkerError(DecodeError):
    """Raised when a presence marker byte is not a valid marker."""
    pass


class TrailingDataError(DecodeError):
    """Raised when bytes remain after the encoded tree is complete."""
    pass


class TreeOrderError(DecodeError):
    """Raised when a decoded tree violates the binary search tree order."""
    pass


# Configuration Errors
class ConfigurationError(NoteTreeError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
