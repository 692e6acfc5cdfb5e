from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib as mpl

# IMPORTANT: set backend before importing pyplot
_BACKEND = os.environ.get("SDFTERM_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402

if TYPE_CHECKING:
    import numpy as np

    from sdfterm.render import RenderContext


class IntensityPlotter:
    """Matplotlib preview of a rendered intensity frame.

    Terminal cells are roughly twice as tall as they are wide, so the image
    is drawn with ``cell_aspect`` as pixel aspect to look like the terminal.
    """

    def __init__(self, cell_aspect: float = 2.0) -> None:
        """Initialize the plotter."""
        self.fig, self.ax = plt.subplots(figsize=(8, 5))
        self.cell_aspect = cell_aspect
        self.ax.axis("off")
        self.image = None

    def draw(self, intensity: np.ndarray, ctx: RenderContext | None = None) -> None:
        self.ax.clear()
        self.ax.axis("off")
        self.image = self.ax.imshow(
            intensity,
            cmap="inferno",
            vmin=0.0,
            vmax=1.0,
            aspect=self.cell_aspect,
            interpolation="nearest",
        )
        title = "sdfterm - intensity"
        if ctx is not None:
            title += f" (cycle {ctx.cycle})"
        self.ax.set_title(title)

    def show(self) -> None:
        plt.tight_layout()
        plt.show()

    def save(self, path: str, dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
