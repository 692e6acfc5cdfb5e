from __future__ import annotations

from typing import Any, Protocol

from sdfterm.math_utils import Vec3


class SDF(Protocol):
    """Pure signed distance field contract."""

    def sdf(self, p: Vec3) -> float:
        """Signed distance to surface at point p."""
        ...

    def sdf_batch(self, p: Any) -> Any:
        """Signed distances for points shaped (..., 3); returns shape (...)."""
        ...


class TerminalSurface(Protocol):
    """Character grid the frame driver draws into."""

    def size(self) -> tuple[int, int]:
        """Return (lines, cols)."""
        ...

    def set_color(self, pair: int) -> None:
        """Select the colour pair used by subsequent writes."""
        ...

    def put(self, row: int, col: int, glyph: str) -> None:
        """Move to (row, col) and write a single glyph."""
        ...

    def refresh(self) -> None:
        ...
