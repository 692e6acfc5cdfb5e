import os
import tempfile
import unittest

os.environ.setdefault("SDFTERM_MPL_BACKEND", "Agg")

import numpy as np  # noqa: E402

from sdfterm.raymarch import RayMarchConfig  # noqa: E402
from sdfterm.render import FrameRenderer, RenderContext  # noqa: E402
from sdfterm.scene import default_scene  # noqa: E402
from sdfterm.viz.plot2d import IntensityPlotter  # noqa: E402


class IntensityPlotterTests(unittest.TestCase):
    def test_saves_rendered_frame(self) -> None:
        renderer = FrameRenderer(np, default_scene(np), RayMarchConfig())
        ctx = RenderContext(palette=None)
        intensity = renderer.render_intensity(ctx, 24, 12)

        plotter = IntensityPlotter()
        try:
            plotter.draw(intensity, ctx)
            self.assertIn("cycle 0", plotter.ax.get_title())
            with tempfile.TemporaryDirectory() as tmp:
                path = os.path.join(tmp, "frame.png")
                plotter.save(path, dpi=50)
                self.assertGreater(os.path.getsize(path), 0)
        finally:
            plotter.close()


if __name__ == "__main__":
    unittest.main()
