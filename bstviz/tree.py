"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  TREE MODEL                         ║
║                                                                  ║
║  Plain (unbalanced) binary search tree with the four structural  ║
║  mutations the visualizer offers:                                ║
║    • insert                  — ties route LEFT                   ║
║    • delete                  — in-order predecessor promotion    ║
║    • rotate_clockwise        — pivot on the left child           ║
║    • rotate_counter_clockwise— pivot on the right child          ║
║                                                                  ║
║  Balance is only ever reported (see layout.py), never enforced.  ║
║                                                                  ║
║  This module is PURE LOGIC — no GUI code, no layout, no timing.  ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""
import logging

from bstviz.errors import LastNodeDeletion, TreeInvariantError

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  NODE
#
#  Each node stores its value, its two owned children, a non-owning
#  parent link, and the drawing state written by layout.py:
#    row, col          : grid position from the latest layout
#    old_row, old_col  : grid position before the latest layout
#                        (None for a node that was never laid out)
#    balanced          : local balance flag
# ═════════════════════════════════════════════════════════════════
class Node:
    """
    A single node of the binary search tree.

    Attributes:
        value    (int)       : Node value.
        left     (Node|None) : Left child  (values <= value).
        right    (Node|None) : Right child (values >  value).
        parent   (Node|None) : Parent link (None for the root).
        row, col (int|float) : Current grid coordinates.
        old_row, old_col     : Coordinates before the last layout.
        balanced (bool|None) : Children's heights differ by at most 1.
    """
    __slots__ = ('value', 'left', 'right', 'parent', 'balanced',
                 'row', 'col', 'old_row', 'old_col')

    def __init__(self, value):
        self.value    = value
        self.left     = None
        self.right    = None
        self.parent   = None
        self.balanced = None

        # For drawing / animation
        self.old_row  = None
        self.old_col  = None
        self.row      = None
        self.col      = None

    def __repr__(self):
        return f"Node({self.value})"

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def children(self):
        """Existing children, left first."""
        return [c for c in (self.left, self.right) if c is not None]


# ═════════════════════════════════════════════════════════════════
#  LINK HELPERS
#
#  Every structural change goes through these three functions so
#  that a child edge and its parent back-reference are always
#  written together.
# ═════════════════════════════════════════════════════════════════
def replace_child(parent, old_child, new_child):
    """
    Put new_child where old_child hangs under parent.

    Args:
        parent    (Node|None): Parent of old_child (None when old_child
                               is the root).
        old_child (Node)     : Child being replaced.
        new_child (Node|None): Child taking its place.
    """
    if new_child is not None:
        new_child.parent = parent
    if parent is not None:
        if parent.left is old_child:
            parent.left = new_child
        else:
            parent.right = new_child


def set_left_child(parent, child):
    if parent is not None:
        parent.left = child
    if child is not None:
        child.parent = parent


def set_right_child(parent, child):
    if parent is not None:
        parent.right = child
    if child is not None:
        child.parent = parent


# ═════════════════════════════════════════════════════════════════
#  BINARY SEARCH TREE
# ═════════════════════════════════════════════════════════════════
class BSTree:
    """
    Binary search tree that always holds at least one node.

    Attributes:
        root (Node) : Root node (the only node with parent None).
        size (int)  : Number of live nodes.
    """

    def __init__(self, root_value):
        self.root = Node(root_value)
        self.size = 1

    @classmethod
    def from_values(cls, values):
        """
        Build a tree from a sequence: the first value becomes the root,
        the remaining values are inserted in order.

        Raises:
            ValueError: If values is empty.
        """
        values = list(values)
        if not values:
            raise ValueError("a tree needs at least one value")
        tree = cls(values[0])
        for v in values[1:]:
            tree.insert(v)
        return tree

    def __len__(self):
        return self.size

    def __iter__(self):
        return iter(self.nodes())

    # ─────────────────────────────────────────────────────────────
    #  TRAVERSAL
    # ─────────────────────────────────────────────────────────────

    def nodes(self):
        """
        In-order list of all nodes.

        Returns:
            list[Node]: Nodes sorted by in-order rank.
        """
        out = []
        def _in(n):
            if n is None:
                return
            _in(n.left); out.append(n); _in(n.right)
        _in(self.root)
        return out

    def in_order(self):
        """Values in in-order sequence (non-decreasing for a valid tree)."""
        return [n.value for n in self.nodes()]

    def contains(self, node):
        """True when node is reachable from root."""
        while node is not None:
            if node is self.root:
                return True
            node = node.parent
        return False

    def validate(self):
        """
        Check the ordering and parent-consistency invariants.

        Raises:
            TreeInvariantError: On the first violation found.
        """
        if self.root.parent is not None:
            raise TreeInvariantError(f"root {self.root!r} has a parent")

        count = 0
        def _check(n, lo, hi):
            nonlocal count
            if n is None:
                return
            count += 1
            if (lo is not None and n.value <= lo) or \
               (hi is not None and n.value > hi):
                raise TreeInvariantError(f"{n!r} breaks ordering")
            for child in n.children():
                if child.parent is not n:
                    raise TreeInvariantError(
                        f"{child!r} does not point back to {n!r}")
            _check(n.left, lo, n.value)
            _check(n.right, n.value, hi)
        _check(self.root, None, None)

        if count != self.size:
            raise TreeInvariantError(
                f"size is {self.size} but {count} nodes are reachable")

    # ─────────────────────────────────────────────────────────────
    #  INSERT
    #
    #  Walk down from the root: value <= node.value goes LEFT,
    #  otherwise RIGHT.  The new node is attached as a leaf on the
    #  first empty side found.
    # ─────────────────────────────────────────────────────────────

    def insert(self, value):
        """
        Insert value as a new leaf.

        Args:
            value (int): Any integer; range checks are the caller's job.

        Returns:
            Node: The newly created node.
        """
        node = self.root
        while True:
            if value <= node.value:
                if node.left is None:
                    child = Node(value)
                    set_left_child(node, child)
                    break
                node = node.left
            else:
                if node.right is None:
                    child = Node(value)
                    set_right_child(node, child)
                    break
                node = node.right

        self.size += 1
        logger.debug("insert %s under %s (size=%d)", value, node.value, self.size)
        return child

    # ─────────────────────────────────────────────────────────────
    #  DELETE
    #
    #  Three shapes:
    #    a) Leaf          → detach, return parent
    #    b) One child     → splice child into place, return child
    #    c) Two children  → copy in-order predecessor's value into
    #                       node, delete the predecessor instead,
    #                       return node
    # ─────────────────────────────────────────────────────────────

    def delete(self, node):
        """
        Remove node from the tree.

        Args:
            node (Node): A node reachable from root.

        Returns:
            Node: The node that now occupies the deleted position (see
                  shapes above).  Becomes the new root when node was
                  the root.

        Raises:
            LastNodeDeletion: If node is the only node.  Nothing changes.
        """
        if self.size == 1:
            raise LastNodeDeletion(node.value)

        reroot = node is self.root
        result = self._delete(node)
        if reroot:
            self.root = result
        self.size -= 1
        logger.debug("delete -> %r (size=%d)", result, self.size)
        return result

    def _delete(self, node):
        # Precondition: size > 1
        if node.is_leaf:
            parent = node.parent
            replace_child(parent, node, None)
            self._unlink(node)
            return parent
        elif node.left is None or node.right is None:
            child = node.left if node.left is not None else node.right
            replace_child(node.parent, node, child)
            self._unlink(node)
            return child
        else:
            pred = self.predecessor(node)
            node.value = pred.value
            self._delete(pred)
            return node

    @staticmethod
    def predecessor(node):
        """Rightmost node of node's left subtree (None without a left child)."""
        pred = node.left
        if pred is None:
            return None
        while pred.right is not None:
            pred = pred.right
        return pred

    @staticmethod
    def _unlink(node):
        node.parent = node.left = node.right = None

    # ─────────────────────────────────────────────────────────────
    #  ROTATIONS
    #
    #  Single rotations.  A node without the needed child is left
    #  alone and returned unchanged, so callers detect a no-op by
    #  identity.  When the pivot ends up parentless it becomes root.
    # ─────────────────────────────────────────────────────────────

    def rotate_clockwise(self, node):
        """
        Rotate node below its left child.

        Before:       After:
              a          b
             / \\        / \\
            b   γ      α   a
           / \\            / \\
          α   β          β   γ

        Args:
            node (Node): Subtree root "a".

        Returns:
            Node: The new subtree root "b", or node when it has no
                  left child.
        """
        if node.left is None:
            return node

        a = node
        b = node.left

        replace_child(a.parent, a, b)
        set_left_child(a, b.right)
        set_right_child(b, a)

        if b.parent is None:
            self.root = b
        logger.debug("rotate CW at %s, pivot %s", a.value, b.value)
        return b

    def rotate_counter_clockwise(self, node):
        """
        Rotate node below its right child (mirror of rotate_clockwise).

        Before:       After:
            a              b
           / \\            / \\
          α   b          a   γ
             / \\        / \\
            β   γ      α   β

        Returns:
            Node: The new subtree root "b", or node when it has no
                  right child.
        """
        if node.right is None:
            return node

        a = node
        b = node.right

        replace_child(a.parent, a, b)
        set_right_child(a, b.left)
        set_left_child(b, a)

        if b.parent is None:
            self.root = b
        logger.debug("rotate CCW at %s, pivot %s", a.value, b.value)
        return b
