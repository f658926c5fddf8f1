import pytest

from bstviz.animation import AnimationController, ease_out_expo, interpolate
from bstviz.layout import recompute_layout
from bstviz.tree import BSTree, Node


def test_ease_endpoints():
    assert ease_out_expo(0) == 0
    assert ease_out_expo(1) == 1
    assert ease_out_expo(2) == 1
    assert ease_out_expo(-1) == 0


def test_ease_is_monotonic():
    samples = [ease_out_expo(i / 100) for i in range(101)]
    assert all(a <= b for a, b in zip(samples, samples[1:]))
    assert samples[50] > 0.9


def test_interpolate():
    assert interpolate(0, 10, 0) == 0
    assert interpolate(0, 10, 1) == 10
    assert interpolate(2, 4, 0.5) == 3


def moved_node(old=(0.0, 0.0), new=(4.0, 2.0)):
    n = Node(1)
    n.old_col, n.old_row = old
    n.col, n.row = new
    return n


def test_idle_controller_returns_final_position(scheduler):
    anim = AnimationController(scheduler)
    n = moved_node()
    assert anim.get_position(n) == (4.0, 2.0)


def test_position_interpolates_during_transition(scheduler):
    anim = AnimationController(scheduler, duration=250)
    n = moved_node()
    anim.begin(n)
    start = scheduler.now()
    assert anim.get_position(n, start) == (0.0, 0.0)
    x = ease_out_expo(0.5)
    col, row = anim.get_position(n, start + 125)
    assert col == pytest.approx(4.0 * x)
    assert row == pytest.approx(2.0 * x)


def test_new_node_renders_at_final_position(scheduler):
    anim = AnimationController(scheduler)
    n = Node(1)
    n.col, n.row = 3, 1
    anim.begin(n)
    assert anim.get_position(n, scheduler.now() + 10) == (3, 1)


def test_transition_self_terminates(scheduler):
    frames = []
    anim = AnimationController(scheduler, duration=250,
                               on_frame=lambda: frames.append(scheduler.now()))
    n = moved_node()
    anim.begin(n)
    assert anim.animating
    scheduler.run(step=50)
    assert not anim.animating
    assert anim.get_position(n) == (4.0, 2.0)
    # frames at +50..+250 interpolate, the one past 250 ends it
    assert len(frames) == 6
    assert not scheduler.pending


def test_frame_updates_current_time(scheduler):
    anim = AnimationController(scheduler, duration=250)
    n = moved_node()
    anim.begin(n)
    scheduler.advance(100)
    assert anim.curr_ts == scheduler.now()
    col, _ = anim.get_position(n)
    assert col == pytest.approx(4.0 * ease_out_expo(100 / 250))


def test_preemption_discards_old_frames(scheduler):
    calls = []
    anim = AnimationController(scheduler, on_frame=lambda: calls.append(1))
    n = moved_node()
    anim.begin(n)
    anim.begin(n)
    assert len(scheduler.pending) == 2
    scheduler.advance(16)
    # only the live transition draws and reschedules
    assert len(calls) == 1
    assert len(scheduler.pending) == 1


def test_baseline_uses_displayed_positions(scheduler):
    t = BSTree.from_values([4, 2, 6])
    recompute_layout(t.root, t.size)
    anim = AnimationController(scheduler, duration=250)

    # first transition: rotate, start moving
    t.rotate_clockwise(t.root)
    recompute_layout(t.root, t.size)
    anim.begin(t.root)
    scheduler.advance(50)
    mid = anim.displayed_positions(t.root, scheduler.now())

    # second transition starts from where nodes are on screen
    t.rotate_counter_clockwise(t.root)
    recompute_layout(t.root, t.size)
    anim.begin(t.root, mid)
    for node, pos in mid.items():
        assert anim.get_position(node, scheduler.now()) == pytest.approx(pos)


def test_cancel_snaps_to_final(scheduler):
    anim = AnimationController(scheduler)
    n = moved_node()
    anim.begin(n)
    anim.cancel()
    assert not anim.animating
    assert anim.get_position(n) == (4.0, 2.0)
    scheduler.advance(16)
    assert not scheduler.pending


@pytest.mark.parametrize("duration", [0, -1])
def test_non_positive_duration_rejected(scheduler, duration):
    with pytest.raises(ValueError):
        AnimationController(scheduler, duration=duration)
