import pytest

from bstviz.cursor import Direction
from bstviz.errors import LastNodeDeletion
from bstviz.session import TreeSession

from conftest import BALANCED_7, find, shape


def test_load_preset(session):
    assert session.root.value == 4
    assert session.size == 7
    assert session.selection is session.root
    assert session.tree.in_order() == [1, 2, 3, 4, 5, 6, 7]
    assert all(n.balanced for n in session.tree.nodes())
    assert not session.animator.animating
    assert [h["action"] for h in session.history] == ["load"]


def test_load_preset_replaces_document(session):
    old_tree = session.tree
    root = session.load_preset([2, 1, 3])
    assert session.tree is not old_tree
    assert root is session.root is session.selection
    assert session.size == 3
    assert len(session.history) == 1


def test_insert_selects_new_node_and_animates(session):
    node = session.insert(8)
    assert session.selection is node
    assert session.size == 8
    assert node.old_row is None
    assert session.animator.animating
    session.tree.validate()
    assert session.history[-1]["action"] == "insert"
    assert session.history[-1]["value"] == 8


def test_delete_root_promotes_predecessor(session):
    result = session.delete(session.root)
    assert session.root is result
    assert session.root.value == 3
    assert session.size == 6
    assert session.tree.in_order() == [1, 2, 3, 5, 6, 7]
    assert session.selection is result


def test_delete_defaults_to_selection(session, scheduler):
    session.move_selection(Direction.RIGHT)
    session.move_selection(Direction.RIGHT)
    assert session.selection.value == 7
    result = session.delete()
    assert result.value == 6
    assert session.selection is result


def test_delete_last_node_refused(scheduler):
    s = TreeSession(scheduler, [9])
    with pytest.raises(LastNodeDeletion):
        s.delete()
    assert s.size == 1
    assert s.root.value == 9
    assert not s.animator.animating


def test_rotate_selection_reroots(session):
    pivot = session.rotate_clockwise()
    assert pivot.value == 2
    assert session.root is pivot
    assert session.selection is pivot
    back = session.rotate_counter_clockwise()
    assert back.value == 4
    assert session.root is back


def test_rotate_noop_keeps_shape(session):
    one = find(session.tree, 1)
    session.select(one)
    before = shape(session.root)
    assert session.rotate_clockwise() is one
    assert shape(session.root) == before


def test_layout_after_mutation(session):
    session.insert(0)
    session.rotate_counter_clockwise(session.root)
    nodes = session.tree.nodes()
    cols = [n.col for n in nodes]
    assert all(a < b for a, b in zip(cols, cols[1:]))
    assert session.root.row == 0


def test_move_up_from_root_is_noop(session):
    assert session.move_selection(Direction.UP) is session.root


def test_select_rejects_foreign_node(session, scheduler):
    other = TreeSession(scheduler, BALANCED_7)
    with pytest.raises(ValueError):
        session.select(other.root)


def test_animation_runs_to_completion(session, scheduler):
    session.insert(10)
    scheduler.run()
    assert not session.animator.animating
    for n in session.tree.nodes():
        assert session.get_position(n) == (n.col, n.row)


def test_second_mutation_starts_from_displayed_positions(session, scheduler):
    session.rotate_clockwise()
    scheduler.advance(40)
    seen = {n: session.get_position(n, scheduler.now())
            for n in session.tree.nodes()}
    session.rotate_counter_clockwise()
    for n, pos in seen.items():
        assert session.get_position(n, scheduler.now()) == pytest.approx(pos)


def test_history_snapshots_tree(session):
    session.insert(8)
    state = session.history[-1]["tree_state"]
    assert state["value"] == 4
    right = state["right"]["right"]["right"]
    assert right["value"] == 8


def test_zero_duration_session_rejected(scheduler):
    with pytest.raises(ValueError):
        TreeSession(scheduler, [4, 2, 6], duration=0)
