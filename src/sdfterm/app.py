from __future__ import annotations

import locale
import logging
import os
import sys
import time
from typing import TYPE_CHECKING, Optional

from sdfterm.backend import get_array_module
from sdfterm.raymarch.config import RayMarchConfig
from sdfterm.render import FrameRenderer, RenderContext
from sdfterm.scene import default_scene
from sdfterm.terminal import CursesSurface, ShutdownRequest, install_signal_handlers

if TYPE_CHECKING:
    from sdfterm.protocols import TerminalSurface

logger = logging.getLogger(__name__)


def run(
        renderer: FrameRenderer,
        ctx: RenderContext,
        surface: TerminalSurface,
        shutdown: ShutdownRequest,
        max_frames: Optional[int] = None,
) -> int:
    """Draw frames until shutdown is requested; return the number of frames drawn."""
    frames = 0
    while not shutdown.requested and (max_frames is None or frames < max_frames):
        renderer.draw_frame(ctx, surface)
        ctx.advance()
        surface.refresh()
        frames += 1
        time.sleep(ctx.frame.frame_delay)

    if shutdown.requested:
        logger.info("shutdown requested by signal %d after %d frames", shutdown.signum, frames)
    return frames


def _configure_logging() -> None:
    log_path = os.environ.get("SDFTERM_LOG", "").strip()
    if log_path:
        logging.basicConfig(
            filename=log_path,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def main(max_frames: Optional[int] = None) -> None:
    """Run the animation until a termination signal, or for ``max_frames`` frames.

    Exits with the signal number as status when a signal ended the loop.
    """
    _configure_logging()
    locale.setlocale(locale.LC_ALL, "")

    xp = get_array_module()
    scene = default_scene(xp)
    renderer = FrameRenderer(xp=xp, scene=scene, march_config=RayMarchConfig())

    shutdown = ShutdownRequest()
    install_signal_handlers(shutdown)

    with CursesSurface() as surface:
        ctx = RenderContext(palette=surface.palette)
        frames = run(renderer, ctx, surface, shutdown, max_frames=max_frames)

    logger.info("rendered %d frames", frames)
    if shutdown.signum is not None:
        sys.exit(shutdown.signum)


if __name__ == "__main__":
    main()
