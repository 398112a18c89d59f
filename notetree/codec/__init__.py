"""
Binary codec converting ordered byte trees to and from flat byte sequences.
"""

from notetree.codec.tree_codec import (
    LENGTH_PREFIX_SIZE,
    MARKER_ABSENT,
    MARKER_PRESENT,
    MAX_CONTENT_LENGTH,
    decode_tree,
    encode_tree,
)

__all__ = [
    "LENGTH_PREFIX_SIZE",
    "MARKER_ABSENT",
    "MARKER_PRESENT",
    "MAX_CONTENT_LENGTH",
    "decode_tree",
    "encode_tree",
]
