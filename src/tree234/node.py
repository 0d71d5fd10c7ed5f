from dataclasses import dataclass, field
import typing
from collections import namedtuple

from .exceptions import InvariantViolation

K = typing.TypeVar("K")
V = typing.TypeVar("V")

MAX_KEYS = 3

Entry = namedtuple("Entry", ("key", "value"))


def _entry_slots():
    return [None] * MAX_KEYS


def _child_slots():
    return [None] * (MAX_KEYS + 1)


@dataclass(eq=False, repr=False)
class Node(typing.Generic[K, V]):
    """A 2-, 3- or 4-node.

    ``entries`` and ``children`` are fixed capacity slots, only the first
    ``count`` entries and ``count + 1`` children are live. A node is a leaf
    iff its first child slot is empty. ``parent`` is a back reference used for
    upward navigation only; the parent is the node holding this one in its
    ``children``.
    """

    count: int = 0
    entries: typing.List[typing.Optional[Entry]] = field(default_factory=_entry_slots)
    children: typing.List[typing.Optional["Node[K, V]"]] = field(
        default_factory=_child_slots
    )
    parent: typing.Optional["Node[K, V]"] = None

    @classmethod
    def from_entry(cls, entry: Entry, parent=None) -> "Node[K, V]":
        node = cls(parent=parent)
        node.entries[0] = entry
        node.count = 1
        return node

    @property
    def leaf(self) -> bool:
        return self.children[0] is None

    @property
    def is_two_node(self) -> bool:
        return self.count == 1

    @property
    def is_three_node(self) -> bool:
        return self.count == 2

    @property
    def is_four_node(self) -> bool:
        return self.count == MAX_KEYS

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def child_count(self) -> int:
        return 0 if self.leaf else self.count + 1

    @property
    def rightmost_child(self) -> typing.Optional["Node[K, V]"]:
        return self.children[self.count]

    def __len__(self):
        return self.count

    def __repr__(self):
        return f"Node({self.keys()!r})"

    def __str__(self):
        if self.is_empty:
            return "[empty]"
        return "[" + ", ".join(str(k) for k in self.keys()) + "]"

    def key(self, i: int) -> K:
        return self.entries[i].key

    def value(self, i: int) -> V:
        return self.entries[i].value

    def entry(self, i: int) -> Entry:
        return self.entries[i]

    def keys(self) -> typing.List[K]:
        return [e.key for e in self.entries[: self.count]]

    def live_entries(self) -> typing.List[Entry]:
        return self.entries[: self.count]

    def live_children(self) -> typing.List["Node[K, V]"]:
        if self.leaf:
            return []
        return self.children[: self.count + 1]

    def set_value(self, i: int, value: V) -> None:
        self.entries[i] = self.entries[i]._replace(value=value)

    def child_index(self) -> int:
        """Slot of this node in its parent's children."""
        parent = self.parent
        if parent is None:
            raise InvariantViolation(f"{self!r} is the root, it has no parent slot")
        for i in range(parent.count + 1):
            if parent.children[i] is self:
                return i
        raise InvariantViolation(f"parent of {self!r} does not own it as a child")

    def find(self, key: K) -> typing.Tuple[bool, typing.Optional["Node[K, V]"], int]:
        """Returns ``(True, self, i)`` when ``key`` is the key of entry ``i``,
        otherwise ``(False, child, 0)`` with the child to continue descending
        into (``None`` for leaves)."""
        for i in range(self.count):
            k = self.entries[i].key
            if key < k:
                return False, self.children[i], 0
            if k == key:
                return True, self, i
        return False, self.children[self.count], 0

    def insert_entry(self, key: K, value: V) -> int:
        if self.count == MAX_KEYS:
            raise InvariantViolation(f"cannot insert {key!r} into full node {self!r}")
        i = self.count - 1
        while i >= 0 and key < self.entries[i].key:
            self.entries[i + 1] = self.entries[i]
            i -= 1
        self.entries[i + 1] = Entry(key, value)
        self.count += 1
        return i + 1

    def insert_entry_with_child(self, entry: Entry, child: "Node[K, V]") -> None:
        # child holds the keys right above entry, it takes the slot after it
        if self.count == MAX_KEYS:
            raise InvariantViolation(
                f"cannot insert {entry.key!r} into full node {self!r}"
            )
        i = self.count - 1
        while i >= 0 and entry.key < self.entries[i].key:
            self.entries[i + 1] = self.entries[i]
            self.connect_child(i + 2, self.children[i + 1])
            i -= 1
        self.entries[i + 1] = entry
        self.connect_child(i + 2, child)
        self.count += 1

    def remove_entry(self, index: int) -> Entry:
        entry = self.entries[index]
        for i in range(index, self.count - 1):
            self.entries[i] = self.entries[i + 1]
        self.count -= 1
        self.entries[self.count] = None
        return entry

    def connect_child(self, index: int, child: typing.Optional["Node[K, V]"]) -> None:
        self.children[index] = child
        if child is not None:
            child.parent = self

    def insert_child(self, index: int, child: typing.Optional["Node[K, V]"]) -> None:
        # count must already include the entry that goes with the new child
        for i in range(self.count - 1, index - 1, -1):
            self.connect_child(i + 1, self.children[i])
        self.connect_child(index, child)

    def disconnect_child(self, index: int) -> typing.Optional["Node[K, V]"]:
        # must run before remove_entry(), the shift is bounded by count
        child = self.children[index]
        for i in range(index, self.count):
            self.children[i] = self.children[i + 1]
        self.children[self.count] = None
        return child

    def choose_sibling(self, child_index: int) -> typing.Tuple[bool, int]:
        """Pick the sibling of ``children[child_index]`` used to convert it.

        Prefers a 3- or 4-node to the right, then to the left, and otherwise
        the right sibling (left when there is none) for a fusion.
        """
        left, right = child_index - 1, child_index + 1
        if right <= self.count and not self.children[right].is_two_node:
            return True, right
        if left >= 0 and not self.children[left].is_two_node:
            return True, left
        if right <= self.count:
            return False, right
        return False, left

    def fuse_with_children(self) -> "Node[K, V]":
        """Absorb both 2-node children of this root 2-node, becoming a 4-node."""
        if self.parent is not None or not self.is_two_node:
            raise InvariantViolation(f"{self!r} is not a root 2-node")
        left, right = self.children[0], self.children[1]
        if not (left.is_two_node and right.is_two_node):
            raise InvariantViolation(f"children of {self!r} are not both 2-nodes")
        self.entries[1] = self.entries[0]
        self.entries[0] = left.entries[0]
        self.entries[2] = right.entries[0]
        self.count = MAX_KEYS
        self.connect_child(0, left.children[0])
        self.connect_child(1, left.children[1])
        self.connect_child(2, right.children[0])
        self.connect_child(3, right.children[1])
        for orphan in (left, right):
            orphan.parent = None
            orphan.count = 0
        return self
