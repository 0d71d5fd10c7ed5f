import typing

from .node import Node

Position = typing.Tuple[typing.Optional[Node], int]


def min_node(node: Node) -> Node:
    """Leftmost leaf of the subtree rooted at ``node``."""
    while not node.leaf:
        node = node.children[0]
    return node


def max_node(node: Node) -> Node:
    """Rightmost leaf of the subtree rooted at ``node``."""
    while not node.leaf:
        node = node.rightmost_child
    return node


def get_successor(node: Node, index: int) -> Position:
    """Position of the entry following ``node.entries[index]`` in key order.

    Returns ``(None, 0)`` when it is the largest entry of the tree.
    """
    if not node.leaf:
        leaf = min_node(node.children[index + 1])
        return leaf, 0

    if index < node.count - 1:
        return node, index + 1

    # last entry of a leaf: climb while we keep leaving rightmost children
    key = node.key(index)
    child, parent = node, node.parent
    while parent is not None and child is parent.rightmost_child:
        child, parent = parent, parent.parent
    if parent is None:
        return None, 0

    i = 0
    while i < parent.count and parent.key(i) < key:
        i += 1
    return parent, i


def get_predecessor(node: Node, index: int) -> Position:
    """Position of the entry preceding ``node.entries[index]`` in key order.

    Returns ``(None, 0)`` when it is the smallest entry of the tree.
    """
    if not node.leaf:
        leaf = max_node(node.children[index])
        return leaf, leaf.count - 1

    if index > 0:
        return node, index - 1

    key = node.key(index)
    child, parent = node, node.parent
    while parent is not None and child is parent.children[0]:
        child, parent = parent, parent.parent
    if parent is None:
        return None, 0

    i = parent.count - 1
    while i >= 0 and not parent.key(i) < key:
        i -= 1
    return parent, i
