import logging
import random

from tree234 import Tree234, Order, format_debug

logger = logging.getLogger("example")


def main():
    logging.basicConfig(level=logging.DEBUG)

    tree = Tree234(
        [(10, "ten"), (20, "twenty"), (5, "five"), (6, "six")],
        check_invariants=True,
    )
    for key in (12, 30, 7, 17):
        tree.insert(key, str(key))

    logger.info("tree of %d entries, height %d:\n%s", len(tree), tree.height(), tree)
    logger.info("node layout:\n%s", format_debug(tree))

    tree.traverse(Order.LEVEL, lambda e, depth: logger.info("depth %d: %r", depth, e))

    it = tree.begin()
    while it != tree.end():
        logger.info("%r -> %r", it.key, it.value)
        it.increment()

    keys = [key for key, _ in tree]
    random.shuffle(keys)
    for key in keys:
        tree.remove(key)
        logger.info("removed %r, %d left, balanced: %s", key, len(tree), tree.is_balanced())


if __name__ == "__main__":
    main()
