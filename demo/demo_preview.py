from __future__ import annotations

from sdfterm.backend import get_array_module
from sdfterm.raymarch.config import RayMarchConfig
from sdfterm.render import FrameRenderer, RenderContext
from sdfterm.scene import default_scene
from sdfterm.shading import Palette
from sdfterm.viz.plot2d import IntensityPlotter


def main() -> None:
    xp = get_array_module()
    renderer = FrameRenderer(xp=xp, scene=default_scene(xp), march_config=RayMarchConfig())

    # Same geometry as a 160x48 terminal with 256 colours
    ctx = RenderContext(palette=Palette.for_terminal(True, 256))
    cols, lines = 160, 48

    plotter = IntensityPlotter()
    for _ in range(4):
        intensity = renderer.render_intensity(ctx, cols, lines)
        plotter.draw(intensity, ctx)
        plotter.save(f"sdfterm_cycle_{ctx.cycle:02d}.png")
        ctx.advance()

    plotter.show()


if __name__ == "__main__":
    main()
