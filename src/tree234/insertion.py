"""Top-down insertion.

New keys always go into a leaf. To guarantee the leaf has room, every 4-node
met on the way down is split first, so the parent of a node being split is
never itself full.
"""
import logging
import typing

from .node import Node, Entry

logger = logging.getLogger("tree234")


def insert_key(tree, key, value) -> bool:
    """Insert ``key`` into ``tree``. Returns False when the key was present."""
    if tree.root is None:
        tree.root = Node.from_entry(Entry(key, value))
        return True

    found, node = find_insert_node(tree, key)
    if found:
        logger.debug("key %r already present, insert ignored", key)
        return False

    node.insert_entry(key, value)
    return True


def find_insert_node(tree, key) -> typing.Tuple[bool, Node]:
    """Descend to the leaf that should hold ``key``, splitting 4-nodes.

    Returns ``(True, node)`` if ``key`` is already in the tree, or
    ``(False, leaf)`` with a leaf that is not full.
    """
    node = tree.root
    while True:
        if node.is_four_node:
            # the middle entry moves up on split, check it first
            if node.key(1) == key:
                return True, node
            node = split(tree, node, key)

        found, child, _ = node.find(key)
        if found:
            return True, node
        if node.leaf:
            return False, node
        node = child


def split(tree, node: Node, new_key) -> Node:
    """Split the 4-node ``node`` and return the half that brackets ``new_key``.

    ``node`` keeps its smallest entry and two leftmost children, a new 2-node
    takes its largest entry and two rightmost children, and the middle entry
    moves into the parent. When ``node`` is the root a new root is created
    above it.
    """
    middle = node.entries[1]

    largest = Node.from_entry(node.entries[2])
    largest.connect_child(0, node.children[2])
    largest.connect_child(1, node.children[3])

    node.entries[1] = node.entries[2] = None
    node.children[2] = node.children[3] = None
    node.count = 1

    if node.parent is None:
        root = Node.from_entry(middle)
        root.connect_child(0, node)
        root.connect_child(1, largest)
        tree.root = root
        logger.debug("split root, tree grows to new root %s", root)
    else:
        node.parent.insert_entry_with_child(middle, largest)
        logger.debug("split 4-node, %r moved up into %s", middle.key, node.parent)

    if new_key < middle.key:
        return node
    return largest
