import pytest

from tree234 import InvalidIteratorError, Tree234

from .trees import SCENARIO_KEYS


def scenario_tree():
    return Tree234([(key, str(key)) for key in SCENARIO_KEYS])


def test_forward_iteration_visits_every_entry():
    tree = scenario_tree()
    it = tree.begin()
    keys = []
    while it != tree.end():
        keys.append(it.key)
        it.increment()
    assert keys == sorted(SCENARIO_KEYS)
    assert len(keys) == tree.size()


def test_backward_iteration_from_end():
    tree = scenario_tree()
    it = tree.end()
    keys = []
    while it != tree.begin():
        it.decrement()
        keys.append(it.key)
    assert keys == sorted(SCENARIO_KEYS, reverse=True)


def test_decrement_from_end_restores_last_position():
    tree = scenario_tree()
    it = tree.begin()
    for _ in range(tree.size()):
        it.increment()
    assert it.at_end
    assert it == tree.end()

    it.decrement()
    assert it.key == 30
    assert it.value == "30"


def test_increment_past_end_stays_at_end():
    tree = scenario_tree()
    it = tree.end()
    it.increment()
    assert it.at_end


def test_decrement_at_begin_stays_at_begin():
    tree = scenario_tree()
    it = tree.begin()
    it.decrement()
    assert it == tree.begin()
    assert it.key == 5


def test_empty_tree_begin_equals_end():
    tree = Tree234()
    assert tree.begin() == tree.end()
    assert list(tree.begin()) == []
    with pytest.raises(InvalidIteratorError):
        tree.begin().key


def test_dereferencing_end_raises():
    tree = scenario_tree()
    with pytest.raises(InvalidIteratorError):
        tree.end().entry
    with pytest.raises(InvalidIteratorError):
        tree.end().value = "x"


def test_iterators_of_different_trees_differ():
    assert scenario_tree().begin() != scenario_tree().begin()


def test_value_is_writable_through_iterator():
    tree = scenario_tree()
    it = tree.begin()
    it.increment()
    it.value = "six"
    assert tree[6] == "six"
    assert it.key == 6
    tree.verify()


def test_python_iterator_protocol():
    tree = scenario_tree()
    assert [key for key, _ in tree.begin()] == sorted(SCENARIO_KEYS)


def test_copy_is_independent_cursor():
    tree = scenario_tree()
    it = tree.begin()
    other = it.copy()
    it.increment()
    assert other.key == 5
    assert it.key == 6
    assert other != it
