from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sdfterm.math_utils import Vec3, normalize_batch
from sdfterm.raymarch.config import CastResult, ImageMarchResult, RayHit, RayMarchConfig

if TYPE_CHECKING:
    from sdfterm.backend import ArrayModule
    from sdfterm.scene import Scene


class RayMarcher:
    """Sphere tracer for a single ray."""

    def __init__(self, config: RayMarchConfig, scene: Scene) -> None:
        """Initialise the marcher."""
        self.cfg = config
        self.scene = scene

    def cast_ray(self, origin: Vec3, direction: Vec3) -> CastResult:
        """March from origin along a unit direction.

        The hit threshold grows with the travelled distance (``eps * t``).
        Running out of steps before either test fires is not a miss: the last
        ``t`` is reported as a hit unless it lies beyond ``max_distance``.
        """
        cfg = self.cfg
        t = cfg.t_start
        for _ in range(cfg.max_steps):
            h = self.scene.distance(origin + direction * t)
            if h < cfg.eps * t or t > cfg.max_distance:
                break
            t += h

        if t > cfg.max_distance:
            return None
        return RayHit(distance=t)

    def estimate_normal(self, p: Vec3) -> Vec3:
        """Forward-difference gradient of the scene at p, normalised."""
        eps = self.cfg.eps
        c = self.scene.distance(p)
        return Vec3(
            self.scene.distance(p + Vec3(eps, 0.0, 0.0)) - c,
            self.scene.distance(p + Vec3(0.0, eps, 0.0)) - c,
            self.scene.distance(p + Vec3(0.0, 0.0, eps)) - c,
        ).normalize()


class ImageMarcher:
    """Frame-wide sphere tracer, ray for ray equivalent to ``RayMarcher``."""

    def __init__(self, xp: ArrayModule, config: RayMarchConfig, scene: Scene) -> None:
        """Initialise the marcher."""
        self.xp = xp
        self.config = config
        self.scene = scene

    def march(self, ro: Vec3, rd: Any) -> ImageMarchResult:
        """March.

        ro: camera position shared by every ray
        rd: (H,W,3) unit directions
        """
        xp = self.xp
        cfg = self.config

        origin = ro.to_array(xp)
        t = xp.full(rd.shape[:-1], cfg.t_start, dtype=xp.float64)
        active = xp.ones(rd.shape[:-1], dtype=bool)

        for _ in range(cfg.max_steps):
            if not bool(xp.any(active)):
                break

            h = self.scene.distance_batch(origin + rd * t[..., None])
            done = (h < cfg.eps * t) | (t > cfg.max_distance)
            active = active & ~done
            t = xp.where(active, t + h, t)

        return ImageMarchResult(hit=t <= cfg.max_distance, distance=t)

    def normals(self, p: Any) -> Any:
        """Forward-difference normals for points shaped (..., 3)."""
        xp = self.xp
        eps = self.config.eps
        c = self.scene.distance_batch(p)
        grad = xp.stack(
            [
                self.scene.distance_batch(p + xp.asarray([eps, 0.0, 0.0])) - c,
                self.scene.distance_batch(p + xp.asarray([0.0, eps, 0.0])) - c,
                self.scene.distance_batch(p + xp.asarray([0.0, 0.0, eps])) - c,
            ],
            axis=-1,
        )
        return normalize_batch(xp, grad)
