"""
Exception types for the BST visualizer.

Core errors (raised by the tree model) and input errors (raised only
by the input layer, before the core is ever called) share one base
class so the Build window can report any of them the same way.
"""


class BSTVizError(Exception):
    """Base class for every error raised by bstviz."""


# ═════════════════════════════════════════════════════════════════
#  CORE ERRORS
# ═════════════════════════════════════════════════════════════════
class LastNodeDeletion(BSTVizError):
    """Attempt to delete the only remaining node.  Tree is left untouched."""

    def __init__(self, value=None):
        self.value = value
        super().__init__("can't delete last node in tree")


class TreeInvariantError(BSTVizError):
    """Ordering or parent/child links are inconsistent."""


# ═════════════════════════════════════════════════════════════════
#  INPUT ERRORS
# ═════════════════════════════════════════════════════════════════
class InputError(BSTVizError, ValueError):
    """A raw user-entered value was rejected."""


class NotIntegerInput(InputError):
    def __init__(self, text):
        self.text = text
        super().__init__(f'"{text}" is not an integer')


class OutOfRangeInput(InputError):
    def __init__(self, value, lo, hi):
        self.value = value
        self.lo    = lo
        self.hi    = hi
        super().__init__(
            f"{value} is out of range (must be between {lo} and {hi})")


# ═════════════════════════════════════════════════════════════════
#  EXPORT ERRORS
# ═════════════════════════════════════════════════════════════════
class ExportError(BSTVizError):
    """An image / PDF export could not be produced."""
