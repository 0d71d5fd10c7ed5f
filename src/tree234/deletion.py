"""Top-down deletion.

Keys are only ever removed from leaves. A key held by an internal node is
overwritten with its in-order successor, which is then removed from its leaf.
To make sure a leaf never underflows, every non-root 2-node met on the way
down is converted into a 3- or 4-node, either by rotating an entry in from a
richer sibling or by fusing it with a 2-node sibling and a parent entry.
"""
import logging
import typing

from .exceptions import InvariantViolation
from .node import Node, MAX_KEYS

logger = logging.getLogger("tree234")


def remove_key(tree, key) -> bool:
    """Remove ``key`` from ``tree``. Returns False when the key is absent."""
    root = tree.root
    if root is None:
        return False

    if root.leaf:
        for i in range(root.count):
            if root.key(i) == key:
                root.remove_entry(i)
                if root.is_empty:
                    tree.root = None
                    logger.debug("removed last key %r, tree is empty", key)
                return True
        return False

    found, node, index = find_delete_node(tree, key)
    if not found:
        return False

    if not node.leaf:
        node, index, successor = delete_successor(node, key, index)
        if successor is not None:
            node.entries[index] = successor.entries[0]
            successor.remove_entry(0)
            return True

    node.remove_entry(index)
    return True


def find_delete_node(tree, key) -> typing.Tuple[bool, typing.Optional[Node], int]:
    """Search for ``key`` converting every non-root 2-node on the way."""
    node = tree.root
    while True:
        if node.parent is not None and node.is_two_node:
            node = convert_two_node(node)

        found, child, index = node.find(key)
        if found:
            return True, node, index
        if node.leaf:
            return False, None, 0
        node = child


def delete_successor(
    node: Node, key, index: int
) -> typing.Tuple[Node, int, typing.Optional[Node]]:
    """Locate the leaf holding the successor of ``node.entries[index]``.

    Converting the right subtree root may pull ``key`` down into it, in which
    case the search restarts from the converted node. Returns the node and
    index now holding ``key`` together with the successor leaf, or ``None``
    for the leaf when ``key`` itself ended up in a leaf.
    """
    while True:
        subtree = node.children[index + 1]
        if subtree.is_two_node:
            converted = convert_two_node(subtree)
            found, holder, at = converted.find(key)
            if found:
                node, index = holder, at
                if node.leaf:
                    return node, index, None
                continue
            subtree = converted
        return node, index, min_leaf_converting(subtree)


def min_leaf_converting(node: Node) -> Node:
    """Leftmost leaf under ``node``, converting 2-nodes on the way down."""
    while True:
        if node.is_two_node:
            node = convert_two_node(node)
        if node.leaf:
            return node
        node = node.children[0]


def convert_two_node(node: Node) -> Node:
    """Turn the non-root 2-node ``node`` into a 3- or 4-node.

    Returns the node the descent continues from: ``node`` itself, or the root
    when the root and its two children were fused together.
    """
    parent = node.parent
    if parent is None:
        raise InvariantViolation("the root 2-node is never converted")

    child_index = node.child_index()
    has_rich_sibling, sibling_index = parent.choose_sibling(child_index)

    if not has_rich_sibling:
        if parent.is_two_node:
            # only the root can still be a 2-node here
            logger.debug("fusing root %s with its children", parent)
            return parent.fuse_with_children()
        return fuse_siblings(parent, child_index, sibling_index)

    sibling = parent.children[sibling_index]
    parent_key_index = min(child_index, sibling_index)
    if child_index > sibling_index:
        return right_rotation(node, sibling, parent, parent_key_index)
    return left_rotation(node, sibling, parent, parent_key_index)


def right_rotation(node: Node, sibling: Node, parent: Node, parent_key_index: int) -> Node:
    """Borrow through the parent from the richer left ``sibling``."""
    node.entries[1] = node.entries[0]
    node.entries[0] = parent.entries[parent_key_index]
    node.count = 2

    orphan = sibling.disconnect_child(sibling.count)
    parent.entries[parent_key_index] = sibling.remove_entry(sibling.count - 1)
    node.insert_child(0, orphan)

    logger.debug("right rotation into %s from %s", node, sibling)
    return node


def left_rotation(node: Node, sibling: Node, parent: Node, parent_key_index: int) -> Node:
    """Borrow through the parent from the richer right ``sibling``."""
    node.entries[1] = parent.entries[parent_key_index]
    node.count = 2

    orphan = sibling.disconnect_child(0)
    parent.entries[parent_key_index] = sibling.remove_entry(0)
    node.insert_child(node.count, orphan)

    logger.debug("left rotation into %s from %s", node, sibling)
    return node


def fuse_siblings(parent: Node, child_index: int, sibling_index: int) -> Node:
    """Merge the 2-node at ``child_index``, its 2-node sibling and the parent
    entry between them into a 4-node kept at the 2-node's position."""
    if parent.is_two_node:
        raise InvariantViolation(f"cannot fuse siblings under 2-node {parent!r}")

    node = parent.children[child_index]
    parent_key_index = min(child_index, sibling_index)

    # disconnect_child() relies on the parent's count, so it goes first
    sibling = parent.disconnect_child(sibling_index)
    parent_entry = parent.remove_entry(parent_key_index)

    if sibling_index < child_index:
        node.entries[2] = node.entries[0]
        node.entries[1] = parent_entry
        node.entries[0] = sibling.entries[0]
        node.connect_child(3, node.children[1])
        node.connect_child(2, node.children[0])
        node.connect_child(1, sibling.children[1])
        node.connect_child(0, sibling.children[0])
    else:
        node.entries[1] = parent_entry
        node.entries[2] = sibling.entries[0]
        node.connect_child(2, sibling.children[0])
        node.connect_child(3, sibling.children[1])
    node.count = MAX_KEYS

    sibling.parent = None
    sibling.count = 0
    logger.debug("fused siblings into %s under %s", node, parent)
    return node
