"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Type-tagged byte entries stored in NoteTree trees.

An entry is an immutable byte sequence carrying a one-byte type tag. The
tree treats entries as opaque: the content bytes are both key and payload,
and the tag is only carried along for re-encoding.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Union

from notetree.exceptions import InvalidEntryError


class EntryType(IntEnum):
    """Well-known type tags of the tagged-byte format."""

    RAW_BYTES = 0x01
    SERIALIZABLE_OBJECT = 0x02
    BOOLEAN = 0x40
    STRING = 0x41
    STRING_UTF16 = 0x42
    INTEGER = 0x43
    DOUBLE = 0x44
    LONG = 0x45
    FLOAT = 0x46
    SHORT = 0x47
    BIG_INTEGER = 0x48
    BIG_DECIMAL = 0x49
    NOTE_BYTES_OBJECT = 0x50
    NOTE_BYTES_ARRAY = 0x51
    NOTE_BYTES_TREE = 0x52
    IMAGE = 0x53
    VIDEO = 0x54


@dataclass(frozen=True)
class Entry:
    """
    Immutable type-tagged byte sequence.

    Attributes:
        type_tag: One-byte type discriminator (0-255)
        data: Raw content bytes
    """
    type_tag: int
    data: bytes

    def __post_init__(self) -> None:
        """Validate the tag and normalise content to bytes."""
        if isinstance(self.type_tag, bool) or not isinstance(self.type_tag, int):
            raise InvalidEntryError(
                f"Entry type tag must be an integer, got {type(self.type_tag).__name__}"
            )
        if not 0 <= self.type_tag <= 0xFF:
            raise InvalidEntryError(
                f"Entry type tag must be in range [0, 255], got {self.type_tag}"
            )
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise InvalidEntryError(
                f"Entry data must be bytes-like, got {type(self.data).__name__}"
            )
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "type_tag", int(self.type_tag))

    def __len__(self) -> int:
        return len(self.data)

    @classmethod
    def raw(cls, data: Union[bytes, bytearray]) -> "Entry":
        """Create a RAW_BYTES entry."""
        return cls(EntryType.RAW_BYTES, data)

    @classmethod
    def from_str(cls, value: str) -> "Entry":
        """Create a STRING entry holding UTF-8 encoded text."""
        return cls(EntryType.STRING, value.encode("utf-8"))

    @classmethod
    def from_int(cls, value: int) -> "Entry":
        """
        Create an INTEGER entry holding a 4-byte big-endian signed integer.

        Raises:
            InvalidEntryError: If value does not fit in 32 bits
        """
        try:
            return cls(EntryType.INTEGER, struct.pack(">i", value))
        except struct.error as e:
            raise InvalidEntryError(f"Integer {value} does not fit in 32 bits: {e}") from e

    def as_str(self) -> str:
        """Decode content as UTF-8 text."""
        return self.data.decode("utf-8")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dictionary."""
        return {
            "type": self.type_tag,
            "data": self.data.hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        """
        Deserialize from a dictionary produced by to_dict().

        Raises:
            InvalidEntryError: If the dictionary is missing fields or holds invalid hex
        """
        try:
            return cls(int(data["type"]), bytes.fromhex(data["data"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidEntryError(f"Invalid entry dictionary: {e}") from e


# Maps each octet to its rank as a signed byte: 0x80..0xFF first, then 0x00..0x7F
_SIGNED_ORDER = bytes((i ^ 0x80) for i in range(256))


def content_sort_key(data: bytes) -> bytes:
    """
    Sort key placing content in tree order.

    Octets compare as signed bytes (-128..127), so 0x80-0xFF sort before
    0x00-0x7F. The mapping is one-to-one and keeps length, so a strict
    prefix still sorts first.
    """
    return bytes(data).translate(_SIGNED_ORDER)


def compare_entries(a: Entry, b: Entry) -> int:
    """
    Compare two entries by content bytes.

    Ordering is lexicographic over signed octets; when one entry is a
    strict prefix of the other, the shorter sorts first. Type tags do not
    participate.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    key_a = content_sort_key(a.data)
    key_b = content_sort_key(b.data)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0
