"""Interactive binary search tree visualizer with animated relayout."""

__version__ = "1.0.0"
