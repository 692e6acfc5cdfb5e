"""Curses-backed terminal surface and signal-driven shutdown."""

from __future__ import annotations

import curses
import logging
import signal
from typing import Any, Optional, Sequence

from sdfterm.shading import Palette

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = ("SIGHUP", "SIGINT", "SIGQUIT", "SIGTERM")


class CursesSurface:
    """Context manager that owns the terminal while frames are drawn.

    On entry the screen is switched to curses mode, echo and the cursor are
    turned off and, when the terminal supports colour, one pair per palette
    entry is initialised on a black background. The terminal is restored on
    every exit path.
    """

    def __init__(self) -> None:
        self._stdscr: Any = None
        self.palette: Optional[Palette] = None

    def __enter__(self) -> CursesSurface:
        self._stdscr = curses.initscr()
        try:
            curses.nl()
            curses.noecho()
            try:
                curses.curs_set(0)
            except curses.error:
                logger.debug("terminal cannot hide the cursor")
            self.palette = self._init_palette()
        except BaseException:
            curses.endwin()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._stdscr is None:
            return
        curses.endwin()
        self._stdscr = None

    def _init_palette(self) -> Optional[Palette]:
        has_colors = curses.has_colors()
        if has_colors:
            curses.start_color()
        colors = curses.COLORS if has_colors else 0
        palette = Palette.for_terminal(has_colors, colors)
        logger.info("terminal colors=%d palette=%s", colors, palette.colors if palette else None)
        if palette is not None:
            for pair, color in palette.pairs():
                curses.init_pair(pair, color, 0)
        return palette

    def size(self) -> tuple[int, int]:
        lines, cols = self._stdscr.getmaxyx()
        return lines, cols

    def set_color(self, pair: int) -> None:
        self._stdscr.attrset(curses.color_pair(pair))

    def put(self, row: int, col: int, glyph: str) -> None:
        try:
            self._stdscr.addstr(row, col, glyph)
        except curses.error:
            # The glyph is drawn, but the cursor cannot advance past the last cell.
            lines, cols = self.size()
            if (row, col) != (lines - 1, cols - 1):
                raise

    def refresh(self) -> None:
        self._stdscr.refresh()


class ShutdownRequest:
    """Signal handler that records the first termination signal received."""

    def __init__(self) -> None:
        self.signum: Optional[int] = None

    def __call__(self, signum: int, frame: Any) -> None:
        if self.signum is None:
            self.signum = signum

    @property
    def requested(self) -> bool:
        return self.signum is not None


def install_signal_handlers(
        shutdown: ShutdownRequest,
        names: Sequence[str] = SHUTDOWN_SIGNALS,
) -> list[int]:
    """Route termination signals to ``shutdown``.

    Signals the parent process set to be ignored stay ignored. Names the
    platform does not define are skipped. Returns the installed signal numbers.
    """
    installed: list[int] = []
    for name in names:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        if signal.getsignal(signum) == signal.SIG_IGN:
            logger.debug("%s is ignored by the parent process, leaving it alone", name)
            continue
        signal.signal(signum, shutdown)
        installed.append(signum)
        logger.debug("installed handler for %s", name)
    return installed
