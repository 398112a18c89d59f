"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Flat binary codec for ordered byte trees.

Layout (depth-first, preorder), per node position:

    marker   1 byte   0 = no node here, 1 = node present
    type     1 byte   entry type tag          (present only)
    length   4 bytes  big-endian content size (present only)
    content  length   raw entry bytes          (present only)
    left     ...      left child position      (present only)
    right    ...      right child position     (present only)

An empty tree encodes to zero bytes, with no marker at all. Decoding
rebuilds the shape directly and never re-runs insertion or comparison.
The codec is independent of hashing.
"""

import struct
from typing import List, Optional, Tuple

from notetree.core.entry import Entry, compare_entries
from notetree.core.ordered_tree import Node
from notetree.exceptions import (
    EntryTooLargeError,
    InvalidPresenceMarkerError,
    TrailingDataError,
    TreeOrderError,
    TruncatedInputError,
)


MARKER_ABSENT = 0
MARKER_PRESENT = 1
TYPE_TAG_SIZE = 1
LENGTH_PREFIX_SIZE = 4
MAX_CONTENT_LENGTH = 0xFFFFFFFF

_NODE_HEADER = struct.Struct(">BBI")  # marker, type tag, content length
_LENGTH = struct.Struct(">I")

_LEFT = 0
_RIGHT = 1


def encode_tree(root: Optional[Node]) -> bytes:
    """
    Encode a tree into its flat preorder byte layout.

    Args:
        root: Root node, or None for an empty tree

    Returns:
        Encoded bytes (empty for an empty tree)

    Raises:
        EntryTooLargeError: If an entry's content exceeds 2^32 - 1 bytes
    """
    if root is None:
        return b""

    out = bytearray()
    # Positions still to emit, popped in preorder; None is an absent child slot
    stack: List[Optional[Node]] = [root]

    while stack:
        node = stack.pop()
        if node is None:
            out.append(MARKER_ABSENT)
            continue

        content = node.entry.data
        if len(content) > MAX_CONTENT_LENGTH:
            raise EntryTooLargeError(
                f"Entry content of {len(content)} bytes exceeds the "
                f"{MAX_CONTENT_LENGTH}-byte length prefix limit"
            )

        out += _NODE_HEADER.pack(MARKER_PRESENT, node.entry.type_tag, len(content))
        out += content

        stack.append(node.right)
        stack.append(node.left)

    return bytes(out)


class _Reader:
    """Bounds-checked cursor over the encoded input."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def take(self, count: int, field: str) -> bytes:
        if count > self.remaining:
            raise TruncatedInputError(
                f"Truncated input: {field} needs {count} bytes at offset "
                f"{self.offset}, only {self.remaining} remain",
                offset=self.offset,
            )
        chunk = self.data[self.offset:self.offset + count]
        self.offset += count
        return chunk

    def read_marker(self) -> int:
        offset = self.offset
        marker = self.take(1, "presence marker")[0]
        if marker not in (MARKER_ABSENT, MARKER_PRESENT):
            raise InvalidPresenceMarkerError(
                f"Invalid presence marker {marker:#04x} at offset {offset}",
                offset=offset,
            )
        return marker

    def read_entry(self) -> Entry:
        type_tag = self.take(TYPE_TAG_SIZE, "type tag")[0]
        (length,) = _LENGTH.unpack(self.take(LENGTH_PREFIX_SIZE, "length prefix"))
        return Entry(type_tag, self.take(length, "entry content"))


def decode_tree(data: bytes, validate_order: bool = False) -> Tuple[Optional[Node], int]:
    """
    Decode bytes produced by encode_tree() back into a node structure.

    Args:
        data: Encoded tree
        validate_order: If True, reject trees whose in-order entry sequence
            is not strictly ascending

    Returns:
        Tuple of (root node or None, number of nodes decoded)

    Raises:
        TruncatedInputError: If input ends before a field is complete
        InvalidPresenceMarkerError: If a marker byte is not 0 or 1, or the
            root position is marked absent in non-empty input
        TrailingDataError: If bytes remain after the root subtree
        TreeOrderError: If validate_order is set and the order is violated
    """
    data = bytes(data)
    if not data:
        return None, 0

    reader = _Reader(data)
    if reader.read_marker() != MARKER_PRESENT:
        raise InvalidPresenceMarkerError(
            "Non-empty input must start with a present root node", offset=0
        )

    root = Node(reader.read_entry())
    count = 1
    # Child slots still to read, popped so that left is read before right
    slots: List[Tuple[Node, int]] = [(root, _RIGHT), (root, _LEFT)]

    while slots:
        parent, side = slots.pop()
        if reader.read_marker() == MARKER_ABSENT:
            continue

        node = Node(reader.read_entry())
        count += 1
        if side == _LEFT:
            parent.left = node
        else:
            parent.right = node

        slots.append((node, _RIGHT))
        slots.append((node, _LEFT))

    if reader.remaining:
        raise TrailingDataError(
            f"{reader.remaining} trailing bytes after encoded tree at offset {reader.offset}",
            offset=reader.offset,
        )

    if validate_order:
        _check_order(root)

    return root, count


def _check_order(root: Node) -> None:
    """Verify strictly ascending in-order content."""
    previous: Optional[Entry] = None
    stack: List[Node] = []
    node: Optional[Node] = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        if previous is not None and compare_entries(previous, node.entry) >= 0:
            raise TreeOrderError(
                f"Decoded tree is not a binary search tree: entry "
                f"{node.entry.data.hex()!r} does not sort after {previous.data.hex()!r}"
            )
        previous = node.entry
        node = node.right
