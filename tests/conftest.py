import pytest

from bstviz.session import TreeSession
from bstviz.tree import BSTree

BALANCED_7 = [4, 2, 1, 3, 6, 5, 7]


class ManualScheduler:
    """FrameScheduler driven by hand: time only moves in advance()."""

    def __init__(self, start=1000.0):
        self.time    = start
        self.pending = []

    def now(self):
        return self.time

    def request_frame(self, callback):
        self.pending.append(callback)

    def advance(self, ms):
        """Move the clock forward and fire every frame requested so far."""
        self.time += ms
        callbacks, self.pending = self.pending, []
        for cb in callbacks:
            cb(self.time)

    def run(self, step=16, limit=1000):
        """Advance frame by frame until no frame is pending."""
        for _ in range(limit):
            if not self.pending:
                return
            self.advance(step)
        raise AssertionError("animation never finished")


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def tree():
    return BSTree.from_values(BALANCED_7)


@pytest.fixture
def session(scheduler):
    return TreeSession(scheduler, BALANCED_7)


def find(tree, value):
    """First node with value in in-order order."""
    for n in tree.nodes():
        if n.value == value:
            return n
    raise KeyError(value)


def shape(node):
    """Nested (value, left, right) tuple; identity-free structure."""
    if node is None:
        return None
    return (node.value, shape(node.left), shape(node.right))
