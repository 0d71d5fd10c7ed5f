import logging
import typing
from collections import deque
from enum import Enum

from .conf import Conf, build_conf
from .deletion import remove_key
from .exceptions import InvariantViolation
from .insertion import insert_key
from .iterator import TreeIterator
from .navigation import get_predecessor, get_successor, max_node, min_node
from .node import Entry, Node
from .printer import format_level_order

logger = logging.getLogger("tree234")

K = typing.TypeVar("K")
V = typing.TypeVar("V")

_missing = object()


class Order(Enum):
    LEVEL = "level"
    IN = "in"
    PRE = "pre"
    POST = "post"


class Tree234(typing.Generic[K, V]):
    """Ordered map backed by a 2-3-4 tree.

    Inserting a key that is already present is a no-op, the stored value is
    kept. Keys only need ``<`` and ``==``.
    """

    def __init__(
        self, pairs: typing.Optional[typing.Iterable[typing.Tuple[K, V]]] = None, **opts
    ):
        self.root: typing.Optional[Node[K, V]] = None
        self.count = 0
        self._conf = build_conf(**opts)
        if pairs is not None:
            for key, value in pairs:
                self.insert(key, value)

    @property
    def conf(self) -> Conf:
        """Current configuration"""
        return self._conf

    # mutation

    def insert(self, key: K, value: V) -> None:
        if insert_key(self, key, value):
            self.count += 1
            self._after_mutation()

    def insert_pair(self, pair: typing.Tuple[K, V]) -> None:
        self.insert(pair[0], pair[1])

    def remove(self, key: K) -> bool:
        if not remove_key(self, key):
            logger.debug("key %r not found, nothing removed", key)
            return False
        self.count -= 1
        self._after_mutation()
        return True

    def _after_mutation(self):
        if self._conf.check_invariants:
            self.verify()

    def clear(self) -> None:
        """Release every node, children before their parent."""
        if self.root is None:
            return
        stack = [(self.root, False)]
        while stack:
            node, expanded = stack.pop()
            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in node.live_children())
                continue
            for i in range(len(node.children)):
                node.children[i] = None
            node.parent = None
        logger.debug("cleared tree of %d entries", self.count)
        self.root = None
        self.count = 0

    # copy and move

    def copy(self) -> "Tree234[K, V]":
        """Independent structural copy; values are shared."""
        other = Tree234(**self._conf)
        other.count = self.count
        if self.root is None:
            return other

        other.root = Node(count=self.root.count, entries=self.root.entries[:])
        stack = [(self.root, other.root)]
        while stack:
            src, dest = stack.pop()
            for i, child in enumerate(src.live_children()):
                clone = Node(count=child.count, entries=child.entries[:])
                dest.connect_child(i, clone)
                stack.append((child, clone))
        logger.debug("copied tree of %d entries", self.count)
        return other

    __copy__ = copy

    def move(self) -> "Tree234[K, V]":
        """Hand the structure over to a new tree, leaving this one empty."""
        other = Tree234(**self._conf)
        other.root, other.count = self.root, self.count
        self.root, self.count = None, 0
        logger.debug("moved tree of %d entries", other.count)
        return other

    # lookup

    def find(self, key: K) -> bool:
        return self._locate(key)[0] is not None

    def _locate(self, key: K) -> typing.Tuple[typing.Optional[Node[K, V]], int]:
        node = self.root
        while node is not None:
            found, child, index = node.find(key)
            if found:
                return node, index
            node = child
        return None, 0

    def get(self, key: K, default=None):
        node, index = self._locate(key)
        if node is None:
            return default
        return node.value(index)

    def __getitem__(self, key: K) -> V:
        value = self.get(key, _missing)
        if value is _missing:
            raise KeyError(key)
        return value

    def __contains__(self, key) -> bool:
        return self.find(key)

    def size(self) -> int:
        return self.count

    def __len__(self):
        return self.count

    def is_empty(self) -> bool:
        return self.root is None

    def height(self) -> int:
        """Edges on the leftmost path; 0 for a single node, -1 when empty."""
        depth = -1
        node = self.root
        while node is not None:
            depth += 1
            node = node.children[0]
        return depth

    # iteration

    def begin(self) -> TreeIterator:
        return TreeIterator(self)

    def end(self) -> TreeIterator:
        return TreeIterator(self, at_end=True)

    def __iter__(self) -> typing.Iterator[Entry]:
        return self.iterative_in_order()

    def __reversed__(self) -> typing.Iterator[Entry]:
        if self.root is None:
            return
        node = max_node(self.root)
        index = node.count - 1
        while node is not None:
            yield node.entry(index)
            node, index = get_predecessor(node, index)

    def keys(self) -> typing.Iterator[K]:
        for entry in self:
            yield entry.key

    def values(self) -> typing.Iterator[V]:
        for entry in self:
            yield entry.value

    def items(self) -> typing.Iterator[Entry]:
        return iter(self)

    # traversals

    def traverse(self, order: Order, visitor: typing.Callable) -> None:
        order = Order(order)
        if order is Order.LEVEL:
            for entry, depth in self.level_order():
                visitor(entry, depth)
            return

        if order is Order.IN:
            entries = self.in_order()
        elif order is Order.PRE:
            entries = self.pre_order()
        else:
            entries = self.post_order()
        for entry in entries:
            visitor(entry)

    def level_order_nodes(self) -> typing.Iterator[typing.Tuple[Node[K, V], int]]:
        if self.root is None:
            return
        queue = deque([(self.root, 0)])
        while queue:
            node, depth = queue.popleft()
            yield node, depth
            for child in node.live_children():
                queue.append((child, depth + 1))

    def level_order(self) -> typing.Iterator[typing.Tuple[Entry, int]]:
        for node, depth in self.level_order_nodes():
            for entry in node.live_entries():
                yield entry, depth

    def in_order(self) -> typing.Iterator[Entry]:
        if self.root is not None:
            yield from self._in_order_node(self.root)

    def _in_order_node(self, node: Node[K, V]):
        if node.leaf:
            yield from node.live_entries()
            return
        for i in range(node.count):
            yield from self._in_order_node(node.children[i])
            yield node.entries[i]
        yield from self._in_order_node(node.children[node.count])

    def pre_order(self) -> typing.Iterator[Entry]:
        if self.root is not None:
            yield from self._pre_order_node(self.root)

    def _pre_order_node(self, node: Node[K, V]):
        # entry0, child0, child1, entry1, child2, entry2, child3
        yield node.entries[0]
        if not node.leaf:
            yield from self._pre_order_node(node.children[0])
            yield from self._pre_order_node(node.children[1])
        for i in range(1, node.count):
            yield node.entries[i]
            if not node.leaf:
                yield from self._pre_order_node(node.children[i + 1])

    def post_order(self) -> typing.Iterator[Entry]:
        if self.root is not None:
            yield from self._post_order_node(self.root)

    def _post_order_node(self, node: Node[K, V]):
        # child0, child1, entry0, child2, entry1, child3, entry2
        if not node.leaf:
            yield from self._post_order_node(node.children[0])
            yield from self._post_order_node(node.children[1])
        yield node.entries[0]
        for i in range(1, node.count):
            if not node.leaf:
                yield from self._post_order_node(node.children[i + 1])
            yield node.entries[i]

    def iterative_in_order(self) -> typing.Iterator[Entry]:
        """In-order walk one successor step at a time."""
        if self.root is None:
            return
        node, index = min_node(self.root), 0
        while node is not None:
            yield node.entry(index)
            node, index = get_successor(node, index)

    # diagnostics

    def _subtree_heights(self) -> typing.Dict[int, int]:
        heights = {}
        stack = [(self.root, False)]
        while stack:
            node, expanded = stack.pop()
            if node.leaf:
                heights[id(node)] = 0
            elif not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in node.live_children())
            else:
                heights[id(node)] = 1 + max(
                    heights[id(child)] for child in node.live_children()
                )
        return heights

    def is_balanced(self) -> bool:
        """Check breadth first that every node's subtrees have equal height."""
        if self.root is None:
            return True
        heights = self._subtree_heights()
        for node, _ in self.level_order_nodes():
            child_heights = {heights[id(child)] for child in node.live_children()}
            if len(child_heights) > 1:
                return False
        return True

    def verify(self) -> None:
        """Check every structural invariant, raising InvariantViolation."""
        if self.root is None:
            if self.count != 0:
                raise InvariantViolation(f"empty tree reports size {self.count}")
            return
        if self.root.parent is not None:
            raise InvariantViolation("root has a parent")

        total = 0
        leaf_depth = None
        # node, depth, lower bound, upper bound
        stack = [(self.root, 0, _missing, _missing)]
        while stack:
            node, depth, low, high = stack.pop()
            if not 1 <= node.count <= len(node.entries):
                raise InvariantViolation(f"{node!r} holds {node.count} entries")
            keys = node.keys()
            for a, b in zip(keys, keys[1:]):
                if not a < b:
                    raise InvariantViolation(f"entries of {node!r} are not ascending")
            if low is not _missing and not low < keys[0]:
                raise InvariantViolation(f"{node!r} is not above separator {low!r}")
            if high is not _missing and not keys[-1] < high:
                raise InvariantViolation(f"{node!r} is not below separator {high!r}")
            total += node.count

            if node.leaf:
                if any(child is not None for child in node.children):
                    raise InvariantViolation(f"leaf {node!r} has children")
                if leaf_depth is None:
                    leaf_depth = depth
                elif leaf_depth != depth:
                    raise InvariantViolation(
                        f"leaf {node!r} at depth {depth}, expected {leaf_depth}"
                    )
                continue

            children = node.live_children()
            if any(child is None for child in children):
                raise InvariantViolation(f"{node!r} is missing a child")
            if any(child is not None for child in node.children[node.count + 1 :]):
                raise InvariantViolation(f"{node!r} has stale children")
            bounds = [low] + keys + [high]
            for i, child in enumerate(children):
                if child.parent is not node:
                    raise InvariantViolation(f"parent of {child!r} is not {node!r}")
                stack.append((child, depth + 1, bounds[i], bounds[i + 1]))

        if total != self.count:
            raise InvariantViolation(f"size is {self.count} but tree holds {total}")

    def __str__(self):
        return format_level_order(self)

    def __repr__(self):
        return f"Tree234({[tuple(e) for e in self]!r})"
