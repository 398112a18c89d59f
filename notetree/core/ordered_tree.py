"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Unbalanced binary search tree over type-tagged byte entries.

Entries double as key and payload. The tree is intentionally not
self-balancing, so its shape depends on insertion order and can degrade to
linear depth on sorted input. Every walk uses an explicit loop or work stack
instead of call recursion so deep trees never hit the interpreter's
recursion limit.

The tree is not thread-safe. Callers must serialize mutations, and a
mutation interrupted part-way (e.g. by KeyboardInterrupt) is not rolled back.
"""

from typing import Iterable, Iterator, List, Optional

from notetree.core.entry import Entry, compare_entries


class Node:
    """
    A node exclusively owning one entry and up to two children.

    Attributes:
        entry: Entry stored at this node
        left: Subtree of entries sorting before entry
        right: Subtree of entries sorting after entry
    """

    __slots__ = ("entry", "left", "right")

    def __init__(
        self,
        entry: Entry,
        left: Optional["Node"] = None,
        right: Optional["Node"] = None,
    ):
        self.entry = entry
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"Node(entry={self.entry!r})"


class OrderedByteTree:
    """
    Plain binary search tree keyed by full entry content.

    Example:
        >>> tree = OrderedByteTree()
        >>> for value in ("B", "A", "C"):
        ...     tree.insert(Entry.from_str(value))
        >>> [e.as_str() for e in tree.in_order_traversal()]
        ['A', 'B', 'C']
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._root: Optional[Node] = None
        self._size = 0
        if entries is not None:
            for entry in entries:
                self.insert(entry)

    @property
    def root(self) -> Optional[Node]:
        """Root node, or None when the tree is empty."""
        return self._root

    def replace_root(self, root: Optional[Node], size: int) -> None:
        """
        Install an already-built node structure as this tree's contents.

        Used by the codec, which reconstructs shape directly instead of
        replaying inserts. The caller supplies the node count.
        """
        self._root = root
        self._size = size if root is not None else 0

    def insert(self, entry: Entry) -> bool:
        """
        Insert an entry at the first empty slot reached by descent.

        Inserting an entry whose content is already present leaves the tree
        and its size unchanged.

        Args:
            entry: Entry to insert

        Returns:
            True if a node was added, False if an equal entry already existed
        """
        if self._root is None:
            self._root = Node(entry)
            self._size = 1
            return True

        node = self._root
        while True:
            comparison = compare_entries(entry, node.entry)
            if comparison == 0:
                return False
            if comparison < 0:
                if node.left is None:
                    node.left = Node(entry)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = Node(entry)
                    break
                node = node.right

        self._size += 1
        return True

    def contains(self, entry: Entry) -> bool:
        """Check whether an entry with equal content is stored."""
        node = self._root
        while node is not None:
            comparison = compare_entries(entry, node.entry)
            if comparison == 0:
                return True
            node = node.left if comparison < 0 else node.right
        return False

    def remove(self, entry: Entry) -> bool:
        """
        Remove the entry with equal content, if present.

        A node with two children takes the entry of its in-order successor
        (the minimum of its right subtree), and the successor node is
        unlinked instead.

        Args:
            entry: Entry to remove

        Returns:
            True if a node was removed, False if no equal entry was stored
        """
        parent: Optional[Node] = None
        node = self._root
        while node is not None:
            comparison = compare_entries(entry, node.entry)
            if comparison == 0:
                break
            parent = node
            node = node.left if comparison < 0 else node.right

        if node is None:
            return False

        if node.left is not None and node.right is not None:
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left

            node.entry = successor.entry
            # The successor has no left child, so its right subtree takes its place
            if successor_parent is node:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
        else:
            child = node.left if node.left is not None else node.right
            self._replace_child(parent, node, child)

        self._size -= 1
        return True

    def _replace_child(self, parent: Optional[Node], old: Node, new: Optional[Node]) -> None:
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def in_order_traversal(self) -> List[Entry]:
        """
        Collect all entries in ascending order.

        Returns:
            A fresh list; later mutations do not affect it
        """
        result: List[Entry] = []
        stack: List[Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.entry)
            node = node.right
        return result

    def min_entry(self) -> Optional[Entry]:
        """Smallest entry, or None when empty."""
        node = self._root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node.entry

    def max_entry(self) -> Optional[Entry]:
        """Largest entry, or None when empty."""
        node = self._root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node.entry

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        if self._root is None:
            return 0
        height = 0
        level = [self._root]
        while level:
            height += 1
            next_level = []
            for node in level:
                if node.left is not None:
                    next_level.append(node.left)
                if node.right is not None:
                    next_level.append(node.right)
            level = next_level
        return height

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def clear(self) -> None:
        """Discard every node and reset the counter."""
        self._root = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, entry: object) -> bool:
        if not isinstance(entry, Entry):
            return False
        return self.contains(entry)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.in_order_traversal())
