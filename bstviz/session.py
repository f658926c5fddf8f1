"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  SESSION (document state)           ║
║                                                                  ║
║  One TreeSession owns everything a user is editing:              ║
║                                                                  ║
║    tree      (BSTree)              root + size                   ║
║    cursor    (SelectionCursor)     the focused node              ║
║    animator  (AnimationController) on-screen transition          ║
║    history   (list[dict])          one entry per operation       ║
║                                                                  ║
║  Every mutating operation runs the same pipeline:                ║
║                                                                  ║
║    capture on-screen positions ──► mutate tree ──► relayout      ║
║        ──► move selection ──► begin transition ──► record        ║
║                                                                  ║
║  Layout always completes before the next frame, so a renderer    ║
║  only ever sees a fully pre- or fully post-mutation tree.        ║
║                                                                  ║
║  History Entry Schema                                            ║
║  ────────────────────                                            ║
║  { "action"    : str,   # load/insert/delete/rotate_cw/…         ║
║    "desc"      : str,   # human-readable description             ║
║    "value"     : int?,  # value the operation was about          ║
║    "tree_state": dict   # layout.snapshot() after the operation  ║
║  }                                                               ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""
import logging

from bstviz.animation import DURATION, AnimationController
from bstviz.cursor import SelectionCursor
from bstviz.errors import LastNodeDeletion
from bstviz.layout import recompute_layout, snapshot
from bstviz.tree import BSTree

logger = logging.getLogger(__name__)


class TreeSession:
    """
    The document: tree, selection and animation for one editing session.

    Args:
        scheduler (FrameScheduler) : Frame source for transitions.
        values    (list[int])      : Initial preset (first value = root).
        duration  (float)          : Transition length in ms.
        on_frame  (callable|None)  : Redraw hook, called every frame.
    """

    def __init__(self, scheduler, values=(4,), duration=DURATION, on_frame=None):
        self.animator = AnimationController(scheduler, duration, on_frame)
        self.history  = []
        self.tree     = None
        self.cursor   = None
        self.load_preset(values)

    # ── Read-only views ─────────────────────────────────────────
    @property
    def root(self):
        return self.tree.root

    @property
    def size(self):
        return self.tree.size

    @property
    def selection(self):
        return self.cursor.node

    # ─────────────────────────────────────────────────────────────
    #  PRESETS
    # ─────────────────────────────────────────────────────────────

    def load_preset(self, values):
        """
        Replace the whole document with a tree built from values.

        The new tree is laid out immediately and shown without a
        transition.

        Returns:
            Node: The new root (also the new selection).
        """
        self.animator.cancel()
        self.tree   = BSTree.from_values(values)
        self.cursor = SelectionCursor(self.tree.root)
        recompute_layout(self.tree.root, self.tree.size)
        self.history = []
        self._record("load", f"Load preset {list(values)}")
        logger.info("Loaded preset %s", list(values))
        return self.tree.root

    # ─────────────────────────────────────────────────────────────
    #  MUTATIONS
    # ─────────────────────────────────────────────────────────────

    def insert(self, value):
        """Insert value; the new node becomes the selection."""
        baseline = self._capture()
        node = self.tree.insert(value)
        self._commit(node, baseline, "insert", f"Insert {value}", value)
        return node

    def delete(self, node=None):
        """
        Delete node (default: the selection).

        Returns:
            Node: The node returned by the tree model, now selected.

        Raises:
            LastNodeDeletion: Only one node left; nothing changes.
        """
        if node is None:
            node = self.cursor.node
        value = node.value
        baseline = self._capture()
        try:
            result = self.tree.delete(node)
        except LastNodeDeletion:
            logger.warning("Refused to delete %s: last node in tree", value)
            raise
        self._commit(result, baseline, "delete", f"Delete {value}", value)
        return result

    def rotate_clockwise(self, node=None):
        """Rotate node (default: the selection) clockwise; select the pivot."""
        if node is None:
            node = self.cursor.node
        baseline = self._capture()
        result = self.tree.rotate_clockwise(node)
        if result is node:
            logger.debug("rotate CW on %s: no left child", node.value)
        self._commit(result, baseline, "rotate_cw",
                     f"Rotate {node.value} clockwise", node.value)
        return result

    def rotate_counter_clockwise(self, node=None):
        """Rotate node (default: the selection) counter-clockwise."""
        if node is None:
            node = self.cursor.node
        baseline = self._capture()
        result = self.tree.rotate_counter_clockwise(node)
        if result is node:
            logger.debug("rotate CCW on %s: no right child", node.value)
        self._commit(result, baseline, "rotate_ccw",
                     f"Rotate {node.value} counter-clockwise", node.value)
        return result

    # ─────────────────────────────────────────────────────────────
    #  SELECTION
    # ─────────────────────────────────────────────────────────────

    def move_selection(self, direction):
        return self.cursor.move(direction)

    def select(self, node):
        """Select node (e.g. after a mouse click).  Must be in the tree."""
        if not self.tree.contains(node):
            raise ValueError(f"{node!r} is not in the tree")
        self.cursor.select(node)
        return node

    # ─────────────────────────────────────────────────────────────
    #  LAYOUT & POSITIONS
    # ─────────────────────────────────────────────────────────────

    def recompute_layout(self):
        recompute_layout(self.tree.root, self.tree.size)

    def get_position(self, node, timestamp=None):
        """Displayed (col, row) of node, interpolated while animating."""
        return self.animator.get_position(node, timestamp)

    # ── Pipeline internals ──────────────────────────────────────
    def _capture(self):
        return self.animator.displayed_positions(
            self.tree.root, self.animator.scheduler.now())

    def _commit(self, selection, baseline, action, desc, value=None):
        recompute_layout(self.tree.root, self.tree.size)
        self.cursor.reset(selection)
        self.animator.begin(self.tree.root, baseline)
        self._record(action, desc, value)
        logger.debug("%s (size=%d, root=%s)", desc, self.tree.size,
                     self.tree.root.value)

    def _record(self, action, desc, value=None):
        self.history.append({
            "action":     action,
            "desc":       desc,
            "value":      value,
            "tree_state": snapshot(self.tree.root),
        })
