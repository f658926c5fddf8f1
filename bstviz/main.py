#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  Entry Point                        ║
║                                                                  ║
║  Run     : bstviz            (installed console script)          ║
║            python -m bstviz                                      ║
║                                                                  ║
║  Architecture:                                                   ║
║    main()  ──► open_build_window ──► Settings (~/.bstviz.json)   ║
║            ──► BuildWindow ──► TreeSession ──► tree / layout /   ║
║                                               animation / cursor ║
║                                                                  ║
║  Environment:                                                    ║
║    BSTVIZ_LOG_LEVEL   logging level name (default WARNING)       ║
║                                                                  ║
║  License : MIT                                                   ║
╚══════════════════════════════════════════════════════════════════╝
"""
import logging
import os

from bstviz.build import open_build_window

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level_name=None) -> int:
    """
    Configure root logging from a level name or BSTVIZ_LOG_LEVEL.

    Unknown names fall back to WARNING.

    Returns:
        The numeric level that was applied.
    """
    name  = (level_name or os.environ.get("BSTVIZ_LOG_LEVEL") or "WARNING").upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level


def main() -> None:
    """
    Application entry point.

    Flow:
      1. Configure logging
      2. open_build_window(), which loads the user settings from
         disk, opens the Build window on a hidden Tk root and enters
         the tkinter mainloop
    """
    configure_logging()
    logging.getLogger(__name__).info("Starting BST visualizer")

    open_build_window()


if __name__ == "__main__":
    main()
