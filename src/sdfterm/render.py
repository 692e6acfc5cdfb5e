from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from sdfterm.backend import to_numpy
from sdfterm.camera.camera3d import Camera3D
from sdfterm.raymarch.marcher import ImageMarcher
from sdfterm.shading import GlyphRamp, Palette, Shader

if TYPE_CHECKING:
    from sdfterm.backend import ArrayModule
    from sdfterm.protocols import TerminalSurface
    from sdfterm.raymarch.config import RayMarchConfig
    from sdfterm.scene import Scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FrameConfig:
    zoom: float = 2.0
    aspect_scale: float = 0.6
    focal_length: float = 2.0
    frame_delay: float = 0.001
    cycle_length: int = 36
    degrees_per_cycle: float = 10.0
    orbit_radius: float = 3.0
    orbit_height: float = -0.5


@dataclass(slots=True)
class RenderContext:
    """Per-process render state, owned by the single render loop."""

    palette: Optional[Palette]
    ramp: GlyphRamp = field(default_factory=GlyphRamp)
    frame: FrameConfig = field(default_factory=FrameConfig)
    cycle: int = 0

    def camera(self) -> Camera3D:
        return Camera3D.from_orbit(
            self.cycle,
            degrees_per_cycle=self.frame.degrees_per_cycle,
            radius=self.frame.orbit_radius,
            height=self.frame.orbit_height,
            focal_length=self.frame.focal_length,
        )

    def advance(self) -> None:
        self.cycle = (self.cycle + 1) % self.frame.cycle_length


def screen_coordinates(xp: ArrayModule, cols: int, lines: int, cfg: FrameConfig) -> tuple[Any, Any]:
    """Image-plane coordinates for every column and row.

    The aspect ratio is the integer quotient cols // lines, so a 100x40
    terminal is treated as 2:1.
    """
    aspect_ratio = cols // lines
    half_w = cols / 2.0
    half_h = lines / 2.0
    xs = (xp.arange(cols, dtype=xp.float64) - half_w) / half_w
    ys = (xp.arange(lines, dtype=xp.float64) - half_h) / half_h
    return xs * (cfg.aspect_scale * cfg.zoom * aspect_ratio), ys * cfg.zoom


class FrameRenderer:
    """Turns the scene into one shaded character per terminal cell."""

    def __init__(
            self,
            xp: ArrayModule,
            scene: Scene,
            march_config: RayMarchConfig,
            shader: Shader | None = None,
    ) -> None:
        self.xp = xp
        self.marcher = ImageMarcher(xp=xp, config=march_config, scene=scene)
        self.shader = shader if shader is not None else Shader()

    def render_intensity(self, ctx: RenderContext, cols: int, lines: int) -> np.ndarray:
        """Return the (lines, cols) light intensity of the current frame; misses are 0."""
        if cols < 1 or lines < 1:
            msg = f"Cannot render into a {cols}x{lines} surface"
            raise ValueError(msg)

        xp = self.xp
        camera = ctx.camera()
        xs, ys = screen_coordinates(xp, cols, lines, ctx.frame)
        rd = camera.ray_directions_grid(xp, xs, ys)
        res = self.marcher.march(camera.position, rd)

        intensity = xp.zeros((lines, cols), dtype=xp.float64)
        if bool(xp.any(res.hit)):
            p = camera.position.to_array(xp) + rd[res.hit] * res.distance[res.hit][:, None]
            intensity[res.hit] = self.shader.lambert_batch(xp, self.marcher.normals(p))
        return to_numpy(xp, intensity)

    def draw_frame(self, ctx: RenderContext, surface: TerminalSurface) -> np.ndarray:
        """Render the current frame into the surface in row-major order."""
        lines, cols = surface.size()
        started = time.perf_counter()
        intensity = self.render_intensity(ctx, cols, lines)

        glyphs = ctx.ramp.index_batch(intensity)
        colors = ctx.palette.color_index_batch(intensity) if ctx.palette is not None else None
        chars = ctx.ramp.chars
        for y in range(lines):
            for x in range(cols):
                if colors is not None:
                    surface.set_color(int(colors[y, x]))
                surface.put(y, x, chars[glyphs[y, x]])

        logger.debug(
            "frame cycle=%d size=%dx%d took %.1f ms",
            ctx.cycle, cols, lines, (time.perf_counter() - started) * 1000.0,
        )
        return intensity
