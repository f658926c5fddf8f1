"""
Input side of the visualizer: preset trees, key bindings and
validation of user-typed values.

Nothing here touches the tree; the Build window turns keys into
commands and hands validated integers to the session.
"""
from typing import Optional

from bstviz.errors import NotIntegerInput, OutOfRangeInput

VALUE_MIN = -99
VALUE_MAX = 99

# ═════════════════════════════════════════════════════════════════
#  PRESETS
#  Loaded with keys 1-8.  The first value becomes the root.
# ═════════════════════════════════════════════════════════════════
PRESETS = [
    [2, 1, 3],
    [4, 2, 1, 3, 6, 5, 7],
    [8, 4, 2, 1, 3, 6, 5, 7, 12, 10, 9, 11, 14, 13, 15],
    [3, 1, 2, 6, 5, 4, 7],
    [6, 4, 2, 5, 1, 3, 7],
    [6, 2, 1, 4, 3, 5, 7],
    [1, 2, 3, 4, 5, 6, 7],
    [4, 3, 2, 1, 5, 6, 7],
]

# ═════════════════════════════════════════════════════════════════
#  KEY BINDINGS  (tkinter keysym → command name)
# ═════════════════════════════════════════════════════════════════
KEY_BINDINGS = {
    "Left":  "move_left",
    "Up":    "move_up",
    "Right": "move_right",
    "Down":  "move_down",
    "a":     "add",
    "d":     "delete",
    "q":     "rotate_cw",
    "e":     "rotate_ccw",
}
KEY_BINDINGS.update({str(i + 1): f"preset_{i}" for i in range(len(PRESETS))})


def parse_value(text: Optional[str], lo: int = VALUE_MIN,
                hi: int = VALUE_MAX) -> Optional[int]:
    """
    Validate a value typed into the Add prompt.

    Args:
        text: Raw text (None when the prompt was cancelled).
        lo:   Smallest accepted value.
        hi:   Largest accepted value.

    Returns:
        The integer, or None for cancelled / blank input.

    Raises:
        NotIntegerInput: Text is not exactly an integer ("07", "1.0",
                         "+3" are all rejected).
        OutOfRangeInput: Integer outside [lo, hi].

    Examples:
        >>> parse_value(" 42 ")
        42
        >>> parse_value("")
    """
    if text is None or not text.strip():
        return None
    text = text.strip()
    try:
        value = int(text)
    except ValueError:
        raise NotIntegerInput(text) from None
    if str(value) != text:
        raise NotIntegerInput(text)
    if value < lo or value > hi:
        raise OutOfRangeInput(value, lo, hi)
    return value
