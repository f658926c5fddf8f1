"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  ANIMATION CONTROLLER               ║
║                                                                  ║
║  Interpolates node positions between two layouts over a fixed    ║
║  window (DURATION ms) with an ease-out-exponential curve.        ║
║                                                                  ║
║  Timeline of one transition:                                     ║
║                                                                  ║
║    begin()  ──► frame ──► frame ──► … ──► frame (ts > DURATION)  ║
║      │            │                          │                   ║
║   start_ts     curr_ts                   animating = False       ║
║                                                                  ║
║  Frames come from an injected FrameScheduler; the controller     ║
║  never sleeps or polls.  A new begin() discards the running      ║
║  transition (its pending callbacks become stale) and starts from ║
║  whatever positions were on screen at that moment.               ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

DURATION = 250    # Transition length in milliseconds


# ═════════════════════════════════════════════════════════════════
#  FRAME SCHEDULER
#
#  The per-frame clock the controller depends on.  The Build window
#  supplies a tkinter-based one; tests supply a manual one.
# ═════════════════════════════════════════════════════════════════
class FrameScheduler(Protocol):
    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def request_frame(self, callback: Callable[[float], None]) -> None:
        """Call callback(timestamp_ms) on the next frame."""
        ...


class TkFrameScheduler:
    """
    FrameScheduler backed by a tkinter widget's ``after()``.

    Args:
        widget   : Any tkinter widget (used only for after()).
        interval : Delay between frames in ms (16 ≈ 60 FPS).
    """

    def __init__(self, widget, interval: int = 16):
        self.widget   = widget
        self.interval = interval

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def request_frame(self, callback: Callable[[float], None]) -> None:
        self.widget.after(self.interval, lambda: callback(self.now()))


# ═════════════════════════════════════════════════════════════════
#  EASING
# ═════════════════════════════════════════════════════════════════
def ease_out_expo(t: float) -> float:
    """
    Exponential ease-out: fast start, long gentle tail.

    Args:
        t: Elapsed fraction; clamped to [0, 1].

    Returns:
        0.0 at t=0, exactly 1.0 at t>=1, monotonic in between.
    """
    t = max(0.0, min(1.0, t))
    if t >= 1.0:
        return 1.0
    return 1.0 - 2.0 ** (-10.0 * t)


def interpolate(src: float, dst: float, x: float) -> float:
    return (1 - x) * src + x * dst


# ═════════════════════════════════════════════════════════════════
#  CONTROLLER
# ═════════════════════════════════════════════════════════════════
class AnimationController:
    """
    Drives one layout transition at a time.

    Attributes:
        scheduler (FrameScheduler) : Clock / frame source.
        duration  (float)          : Transition length in ms.
        on_frame  (callable|None)  : Called after every frame (redraw hook).
        animating (bool)           : True while a transition is in flight.
        start_ts, curr_ts (float)  : Start and latest frame time.

    Raises:
        ValueError: If duration is not positive.
    """

    def __init__(self, scheduler: FrameScheduler, duration: float = DURATION,
                 on_frame: Optional[Callable[[], None]] = None):
        if not duration > 0:
            raise ValueError(f"duration must be positive, got {duration!r}")
        self.scheduler   = scheduler
        self.duration    = duration
        self.on_frame    = on_frame
        self.animating   = False
        self.start_ts: Optional[float] = None
        self.curr_ts: Optional[float]  = None
        self._generation = 0

    # ── Progress ────────────────────────────────────────────────
    def progress(self, timestamp: Optional[float] = None) -> float:
        """Eased progress of the current transition (1.0 when idle)."""
        if not self.animating:
            return 1.0
        ts = self.curr_ts if timestamp is None else timestamp
        return ease_out_expo((ts - self.start_ts) / self.duration)

    def get_position(self, node, timestamp: Optional[float] = None
                     ) -> Tuple[float, float]:
        """
        Displayed grid position of node.

        Args:
            node      (Node)        : A laid-out node.
            timestamp (float|None)  : Time to sample; defaults to the
                                      latest frame time.

        Returns:
            (x, y): (column, row) in grid units.
        """
        if not self.animating or node.old_row is None or node.old_col is None:
            return node.col, node.row
        x = self.progress(timestamp)
        return (interpolate(node.old_col, node.col, x),
                interpolate(node.old_row, node.row, x))

    def displayed_positions(self, root, timestamp: Optional[float] = None
                            ) -> Dict[object, Tuple[float, float]]:
        """
        Capture what is on screen right now, keyed by node.

        Used as the baseline of the next transition so a preempted
        animation continues from where the nodes actually are.
        """
        out = {}
        def _walk(n):
            if n is None or n.row is None:
                return
            out[n] = self.get_position(n, timestamp)
            _walk(n.left)
            _walk(n.right)
        _walk(root)
        return out

    # ── Lifecycle ───────────────────────────────────────────────
    def begin(self, root, baseline: Optional[Dict] = None) -> None:
        """
        Start a new transition, discarding any running one.

        Layout must already have been recomputed.  Nodes listed in
        baseline get their old_row / old_col overwritten with the
        captured on-screen position.
        """
        if baseline:
            self._apply_baseline(root, baseline)

        if self.animating:
            logger.debug("transition preempted")
        self._generation += 1
        generation = self._generation

        self.animating = True
        self.start_ts  = self.curr_ts = self.scheduler.now()
        self.scheduler.request_frame(lambda ts: self._step(ts, generation))

    def cancel(self) -> None:
        """Stop the running transition; nodes snap to their final position."""
        self._generation += 1
        self._finish()

    def _apply_baseline(self, root, baseline):
        def _walk(n):
            if n is None:
                return
            if n in baseline:
                n.old_col, n.old_row = baseline[n]
            _walk(n.left)
            _walk(n.right)
        _walk(root)

    def _step(self, ts: float, generation: int) -> None:
        if generation != self._generation:
            return  # stale callback from a discarded transition
        if ts - self.start_ts > self.duration:
            self._finish()
        else:
            self.curr_ts = ts
        if self.on_frame is not None:
            self.on_frame()
        if self.animating:
            self.scheduler.request_frame(lambda t: self._step(t, generation))

    def _finish(self) -> None:
        self.animating = False
        self.start_ts  = None
        self.curr_ts   = None
