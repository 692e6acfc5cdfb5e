from __future__ import annotations

from typing import Callable, Optional


class FakeSurface:
    """In-memory TerminalSurface recording every write."""

    def __init__(self, lines: int, cols: int, on_refresh: Optional[Callable[[int], None]] = None) -> None:
        self.lines = lines
        self.cols = cols
        self.glyphs = [[""] * cols for _ in range(lines)]
        self.colors = [[0] * cols for _ in range(lines)]
        self.color_calls = 0
        self.refreshes = 0
        self._pair = 0
        self._on_refresh = on_refresh

    def size(self) -> tuple[int, int]:
        return self.lines, self.cols

    def set_color(self, pair: int) -> None:
        self.color_calls += 1
        self._pair = pair

    def put(self, row: int, col: int, glyph: str) -> None:
        self.glyphs[row][col] = glyph
        self.colors[row][col] = self._pair

    def refresh(self) -> None:
        self.refreshes += 1
        if self._on_refresh is not None:
            self._on_refresh(self.refreshes)
