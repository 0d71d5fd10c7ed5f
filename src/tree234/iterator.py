import typing

from .exceptions import InvalidIteratorError
from .navigation import get_predecessor, get_successor, max_node, min_node
from .node import Entry, Node


class TreeIterator:
    """Bidirectional cursor over the entries of a tree in ascending key order.

    ``cursor``/``index`` always name the last visited entry. ``current`` is
    ``None`` once the iterator moved past the largest entry (the end
    sentinel); decrementing from there returns to the last visited entry.
    """

    def __init__(self, tree, at_end: bool = False):
        self.tree = tree
        self.cursor: typing.Optional[Node] = None
        self.current: typing.Optional[Node] = None
        self.index = 0

        if tree.root is None:
            return
        if at_end:
            self.cursor = max_node(tree.root)
            self.index = self.cursor.count - 1
        else:
            self.cursor = self.current = min_node(tree.root)

    @property
    def at_end(self) -> bool:
        return self.current is None

    @property
    def entry(self) -> Entry:
        if self.current is None:
            raise InvalidIteratorError("iterator is at the end of the tree")
        return self.current.entry(self.index)

    @property
    def key(self):
        return self.entry.key

    @property
    def value(self):
        return self.entry.value

    @value.setter
    def value(self, value):
        if self.current is None:
            raise InvalidIteratorError("iterator is at the end of the tree")
        self.current.set_value(self.index, value)

    def increment(self) -> "TreeIterator":
        if self.current is None:
            return self

        successor, index = get_successor(self.cursor, self.index)
        if successor is None:
            self.current = None
        else:
            self.cursor = self.current = successor
            self.index = index
        return self

    def decrement(self) -> "TreeIterator":
        if self.cursor is None:
            return self

        if self.current is None:
            self.current = self.cursor
            return self

        predecessor, index = get_predecessor(self.cursor, self.index)
        if predecessor is not None:
            self.cursor = self.current = predecessor
            self.index = index
        return self

    def copy(self) -> "TreeIterator":
        other = TreeIterator.__new__(TreeIterator)
        other.tree = self.tree
        other.cursor = self.cursor
        other.current = self.current
        other.index = self.index
        return other

    def __eq__(self, other):
        if not isinstance(other, TreeIterator):
            return NotImplemented
        if other.tree is not self.tree:
            return False
        if self.current is None and other.current is None:
            return True
        return self.current is other.current and self.index == other.index

    def __iter__(self):
        return self

    def __next__(self) -> Entry:
        if self.current is None:
            raise StopIteration
        entry = self.current.entry(self.index)
        self.increment()
        return entry

    def __repr__(self):
        if self.current is None:
            return "<TreeIterator at end>"
        return f"<TreeIterator at {self.key!r}>"
