"""
Selection cursor: one focused node plus directional navigation
along tree edges (arrow keys in the Build window).

    LEFT   left child, else up to the parent when we are its right child
    UP     parent
    RIGHT  right child, else up to the parent when we are its left child
    DOWN   the only child, when there is exactly one

Every move is total: an impossible move leaves the selection where it is.
"""
from enum import Enum


class Direction(Enum):
    LEFT  = "left"
    UP    = "up"
    RIGHT = "right"
    DOWN  = "down"


class SelectionCursor:
    """
    Tracks the focused node.

    Attributes:
        node (Node): Currently selected node.
    """

    def __init__(self, node):
        self.node = node

    def reset(self, node):
        """Point the cursor at node (after a preset load or a mutation)."""
        self.node = node

    select = reset

    def move(self, direction):
        """
        Move one step in direction.

        Args:
            direction (Direction): Navigation intent.

        Returns:
            Node: The selection after the move (unchanged on a no-op).
        """
        n = self.node
        parent = n.parent

        if direction is Direction.LEFT:
            if n.left is not None:
                self.node = n.left
            elif parent is not None and parent.right is n:
                self.node = parent
        elif direction is Direction.UP:
            if parent is not None:
                self.node = parent
        elif direction is Direction.RIGHT:
            if n.right is not None:
                self.node = n.right
            elif parent is not None and parent.left is n:
                self.node = parent
        elif direction is Direction.DOWN:
            children = n.children()
            if len(children) == 1:
                self.node = children[0]
        else:
            raise ValueError(f"unknown direction: {direction!r}")
        return self.node
