import random

import pytest

from bstviz.errors import LastNodeDeletion, TreeInvariantError
from bstviz.tree import BSTree, Node

from conftest import find, shape


def test_from_values_builds_expected_tree(tree):
    assert tree.root.value == 4
    assert tree.size == 7
    assert len(tree) == 7
    assert tree.in_order() == [1, 2, 3, 4, 5, 6, 7]
    tree.validate()


def test_from_values_rejects_empty():
    with pytest.raises(ValueError):
        BSTree.from_values([])


def test_insert_returns_new_leaf_with_parent():
    t = BSTree(10)
    n = t.insert(5)
    assert n.value == 5
    assert n.is_leaf
    assert n.parent is t.root
    assert t.root.left is n
    assert t.size == 2


def test_insert_ties_route_left():
    t = BSTree(5)
    dup = t.insert(5)
    assert t.root.left is dup
    dup2 = t.insert(5)
    assert dup.left is dup2
    t.validate()


@pytest.mark.parametrize("seed", range(5))
def test_random_inserts_keep_ordering(seed):
    rng = random.Random(seed)
    values = [rng.randint(-99, 99) for _ in range(40)]
    t = BSTree.from_values(values)
    assert t.in_order() == sorted(values)
    assert t.size == len(values)
    t.validate()


def test_delete_root_promotes_predecessor(tree):
    old_root = tree.root
    result = tree.delete(tree.root)
    assert result is old_root
    assert tree.root is old_root
    assert tree.root.value == 3
    assert tree.size == 6
    assert tree.in_order() == [1, 2, 3, 5, 6, 7]
    tree.validate()


def test_delete_leaf_returns_parent(tree):
    leaf = find(tree, 5)
    parent = leaf.parent
    assert tree.delete(leaf) is parent
    assert parent.left is None
    assert leaf.parent is None
    tree.validate()


def test_delete_one_child_splices_child():
    t = BSTree.from_values([4, 2, 1])
    two = t.root.left
    one = two.left
    assert t.delete(two) is one
    assert t.root.left is one
    assert one.parent is t.root
    assert t.size == 2
    t.validate()


def test_delete_root_with_one_child_reroots():
    t = BSTree.from_values([1, 2, 3])
    child = t.root.right
    assert t.delete(t.root) is child
    assert t.root is child
    assert child.parent is None
    assert t.in_order() == [2, 3]
    t.validate()


def test_delete_leaf_root_of_two_node_tree():
    t = BSTree.from_values([2, 1])
    leaf = t.root.left
    assert t.delete(leaf) is t.root
    assert t.size == 1


def test_delete_last_node_refused():
    t = BSTree(7)
    with pytest.raises(LastNodeDeletion):
        t.delete(t.root)
    assert t.size == 1
    assert t.root.value == 7


def test_delete_until_one_node_left(tree):
    while tree.size > 1:
        tree.delete(tree.root)
        tree.validate()
    assert tree.size == 1
    assert tree.root.parent is None


def test_rotate_clockwise_without_left_child_is_noop(tree):
    one = find(tree, 1)
    before = shape(tree.root)
    assert tree.rotate_clockwise(one) is one
    assert shape(tree.root) == before


def test_rotate_counter_clockwise_without_right_child_is_noop(tree):
    seven = find(tree, 7)
    before = shape(tree.root)
    assert tree.rotate_counter_clockwise(seven) is seven
    assert shape(tree.root) == before


def test_rotate_clockwise_at_root(tree):
    old_root = tree.root
    pivot = tree.rotate_clockwise(old_root)
    assert pivot.value == 2
    assert tree.root is pivot
    assert pivot.parent is None
    assert pivot.right is old_root
    assert old_root.left.value == 3
    assert tree.in_order() == [1, 2, 3, 4, 5, 6, 7]
    tree.validate()


def test_rotate_inner_node_keeps_parent_link(tree):
    six = find(tree, 6)
    pivot = tree.rotate_counter_clockwise(six)
    assert pivot.value == 7
    assert pivot.parent is tree.root
    assert tree.root.right is pivot
    tree.validate()


def test_rotate_round_trip_restores_subtree(tree):
    before = shape(tree.root)
    two = find(tree, 2)
    pivot = tree.rotate_clockwise(two)
    back = tree.rotate_counter_clockwise(pivot)
    assert back is two
    assert shape(tree.root) == before
    assert two.parent is tree.root
    tree.validate()


def test_contains(tree):
    assert tree.contains(find(tree, 5))
    assert not tree.contains(Node(5))


def test_validate_detects_broken_parent_link(tree):
    find(tree, 5).parent = None
    with pytest.raises(TreeInvariantError):
        tree.validate()


def test_validate_detects_ordering_violation(tree):
    find(tree, 5).value = 100
    with pytest.raises(TreeInvariantError):
        tree.validate()
