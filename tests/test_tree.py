import copy
import random

import pytest

from tree234 import InvariantViolation, Order, Tree234

from .trees import SCENARIO_KEYS, build, in_order_keys, shape


def scenario_tree():
    return Tree234([(key, str(key)) for key in SCENARIO_KEYS])


def test_tree_insert():
    tree = Tree234()

    keys = list(range(1000))

    for key in keys:
        tree.insert(key, key)

    assert len(tree) == len(keys)
    assert tree.is_balanced()


def test_tree_get_remove():
    tree = Tree234((key, key) for key in range(500))

    assert tree.find(40)
    assert tree.get(40) == 40

    assert tree.remove(40)

    assert not tree.find(40)
    assert tree.get(40) is None
    assert tree.get(40, "missing") == "missing"


def test_mapping_surface():
    tree = scenario_tree()
    assert 12 in tree
    assert 13 not in tree
    assert tree[17] == "17"
    with pytest.raises(KeyError):
        tree[13]
    assert list(tree.keys()) == sorted(SCENARIO_KEYS)
    assert list(tree.values()) == [str(k) for k in sorted(SCENARIO_KEYS)]
    assert list(tree.items()) == [(k, str(k)) for k in sorted(SCENARIO_KEYS)]
    assert [key for key, _ in reversed(tree)] == sorted(SCENARIO_KEYS, reverse=True)


def test_insert_pair():
    tree = Tree234()
    tree.insert_pair((3, "c"))
    assert tree[3] == "c"


def test_size_matches_in_order_count():
    rnd = random.Random(1)
    tree = Tree234()
    for _ in range(300):
        key = rnd.randrange(100)
        if rnd.random() < 0.6:
            tree.insert(key, key)
        else:
            tree.remove(key)
        assert tree.size() == len(list(tree.in_order()))


def test_height_conventions():
    tree = Tree234()
    assert tree.height() == -1
    tree.insert(1, "a")
    assert tree.height() == 0
    for key in range(2, 5):
        tree.insert(key, "x")
    assert tree.height() == 1


def test_is_empty():
    tree = Tree234()
    assert tree.is_empty()
    assert not tree
    tree.insert(1, 1)
    assert not tree.is_empty()
    assert tree


def test_in_order_traversal():
    visited = []
    scenario_tree().traverse(Order.IN, visited.append)
    assert [key for key, _ in visited] == [5, 6, 7, 10, 12, 17, 20, 30]
    assert visited[0] == (5, "5")


def test_pre_order_traversal():
    visited = []
    scenario_tree().traverse(Order.PRE, lambda e: visited.append(e.key))
    assert visited == [10, 5, 6, 7, 12, 17, 20, 30]


def test_post_order_traversal():
    visited = []
    scenario_tree().traverse(Order.POST, lambda e: visited.append(e.key))
    assert visited == [5, 6, 7, 12, 17, 10, 30, 20]


def test_level_order_traversal():
    visited = []
    scenario_tree().traverse("level", lambda e, depth: visited.append((e.key, depth)))
    assert visited == [
        (10, 0),
        (20, 0),
        (5, 1),
        (6, 1),
        (7, 1),
        (12, 1),
        (17, 1),
        (30, 1),
    ]


def test_traversals_on_empty_tree():
    tree = Tree234()
    for order in Order:
        tree.traverse(order, pytest.fail)
    assert list(tree) == []
    assert list(reversed(tree)) == []


def test_iterative_in_order_matches_recursive():
    rnd = random.Random(9)
    tree = Tree234((rnd.randrange(10000), None) for _ in range(500))
    assert list(tree.iterative_in_order()) == list(tree.in_order())


def test_copy_is_independent():
    original = scenario_tree()
    clone = original.copy()
    assert shape(clone) == shape(original)
    clone.verify()

    clone.remove(10)
    clone.insert(99, "99")

    assert original.size() == 8
    assert in_order_keys(original) == [5, 6, 7, 10, 12, 17, 20, 30]
    assert clone.root is not original.root
    original.verify()


def test_copy_module_support():
    original = scenario_tree()
    clone = copy.copy(original)
    assert list(clone) == list(original)
    assert clone.root is not original.root


def test_copy_of_empty_tree():
    clone = Tree234().copy()
    assert clone.is_empty()
    assert clone.size() == 0


def test_move_transfers_ownership():
    source = scenario_tree()
    root = source.root
    target = source.move()

    assert target.root is root
    assert target.size() == 8
    assert source.is_empty()
    assert source.size() == 0
    assert list(source) == []
    target.verify()


def test_clear_releases_nodes():
    tree = scenario_tree()
    leaf = tree.root.children[0]
    tree.clear()
    assert tree.is_empty()
    assert tree.size() == 0
    assert leaf.parent is None
    tree.insert(1, "a")
    assert list(tree) == [(1, "a")]


def test_is_balanced_detects_uneven_leaves():
    tree = build(([10], [[5], [15]]))
    tree.root.children[1].connect_child(0, build([12]).root)
    tree.root.children[1].connect_child(1, build([16]).root)
    assert not tree.is_balanced()


def test_verify_detects_broken_parent_link():
    tree = scenario_tree()
    tree.root.children[1].parent = tree.root.children[0]
    with pytest.raises(InvariantViolation):
        tree.verify()


def test_verify_detects_size_mismatch():
    tree = scenario_tree()
    tree.count += 1
    with pytest.raises(InvariantViolation):
        tree.verify()


def test_verify_detects_misplaced_key():
    tree = build(([10], [[5], [15]]))
    tree.root.children[0].entries[0] = tree.root.children[0].entries[0]._replace(key=11)
    with pytest.raises(InvariantViolation):
        tree.verify()


def test_repr_and_str():
    tree = Tree234([(2, "b"), (1, "a")])
    assert repr(tree) == "Tree234([(1, 'a'), (2, 'b')])"
    assert str(tree) == "level 0: [1, 2]"
