"""Read-only renderers used when debugging a tree."""
import typing

NODE_KINDS = {1: "Two node:  ", 2: "Three node:", 3: "Four node: "}


def format_level_order(tree) -> str:
    """One line per depth, nodes rendered as ``[k1, k2]``."""
    lines: typing.List[typing.List[str]] = []
    for node, depth in tree.level_order_nodes():
        if depth == len(lines):
            lines.append([])
        lines[depth].append(str(node))
    return "\n".join(
        f"level {depth}: " + " ".join(nodes) for depth, nodes in enumerate(lines)
    )


def format_debug(tree) -> str:
    """One line per entry naming the node kind and its parent slot."""
    out = []
    for node, depth in tree.level_order_nodes():
        kind = NODE_KINDS.get(node.count, "Empty node:")
        if node.parent is None:
            where = "root"
        else:
            where = f"parent {node.parent} children[{node.child_index()}]"
        for i, key in enumerate(node.keys()):
            out.append(f"{kind} depth {depth} key[{i}] = {key!r}: {where}")
    return "\n".join(out)
