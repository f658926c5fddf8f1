"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  LAYOUT ENGINE                      ║
║                                                                  ║
║  Assigns every node a grid position and a local balance flag     ║
║  from the tree's shape alone:                                    ║
║                                                                  ║
║    row = depth (root = 0)                                        ║
║    col = in-order rank − size / 2   (centred around column 0)    ║
║                                                                  ║
║  Two walks, run back to back after every mutation:               ║
║    1. position_walk — in-order, writes row/col and saves the     ║
║                       previous ones as the animation baseline    ║
║    2. balance_walk  — post-order, writes node.balanced           ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""


# ═════════════════════════════════════════════════════════════════
#  LAYOUT PASSES
# ═════════════════════════════════════════════════════════════════

def position_walk(node, row, col, size):
    """
    In-order traversal that assigns row / col to each node.

    The left subtree starts at the same column as its parent's
    range; the right subtree starts just past the node itself.

    Args:
        node (Node|None) : Subtree root.
        row  (int)       : Depth of node.
        col  (int)       : First in-order rank available to this subtree.
        size (int)       : Total node count (used for centring).

    Returns:
        int: Number of nodes in the subtree.
    """
    if node is None:
        return 0

    l_count = position_walk(node.left,  row + 1, col, size)
    r_count = position_walk(node.right, row + 1, col + l_count + 1, size)

    node.old_row = node.row
    node.old_col = node.col
    node.row     = row
    node.col     = col + l_count - size / 2
    return l_count + 1 + r_count


def balance_walk(node):
    """
    Post-order traversal that computes subtree heights and sets the
    local balance flag (children's heights differ by at most one).

    Only the node's two children are compared; descendants further
    down may be imbalanced while this node is flagged balanced.

    Returns:
        int: Height of the subtree (0 for None).
    """
    if node is None:
        return 0
    l = balance_walk(node.left)
    r = balance_walk(node.right)
    node.balanced = abs(l - r) <= 1
    return 1 + max(l, r)


def recompute_layout(root, size):
    """Run both passes over the whole tree."""
    position_walk(root, 0, 0, size)
    balance_walk(root)


# ═════════════════════════════════════════════════════════════════
#  TREE UTILITY FUNCTIONS
#
#  Read-only helpers for the stats panel and the exporters.
# ═════════════════════════════════════════════════════════════════

def tree_height(node):
    """Height of the subtree rooted at node (0 for None)."""
    if node is None:
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def count_nodes(node):
    """Count total nodes in the subtree."""
    if node is None:
        return 0
    return 1 + count_nodes(node.left) + count_nodes(node.right)


def count_imbalanced(node):
    """Number of nodes whose balance flag is False."""
    if node is None:
        return 0
    own = 0 if node.balanced else 1
    return own + count_imbalanced(node.left) + count_imbalanced(node.right)


def snapshot(root, position=None, selected=None):
    """
    Serialise the laid-out tree into a nested dict.

    Args:
        root     (Node|None)      : Subtree root.
        position (callable|None)  : node -> (col, row).  Defaults to
                                    the node's final layout position;
                                    pass an animator's get_position to
                                    freeze interpolated coordinates.
        selected (Node|None)      : The one node (by identity) whose
                                    dict gets "selected": True.

    Returns:
        dict|None: {"value", "balanced", "selected", "row", "col",
                    "left", "right"}
    """
    def _snap(n):
        if n is None:
            return None
        if position is None:
            col, row = n.col, n.row
        else:
            col, row = position(n)
        return {"value": n.value, "balanced": n.balanced,
                "selected": n is selected,
                "row": row, "col": col,
                "left": _snap(n.left), "right": _snap(n.right)}
    return _snap(root)
