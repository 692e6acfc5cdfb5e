from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sdfterm.math_utils import WORLD_UP, Vec3, normalize_batch

if TYPE_CHECKING:
    from sdfterm.backend import ArrayModule

ORIGIN = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Camera3D:
    """Pinhole camera looking from ``position`` at ``target``.

    Parameters
    ----------
    position:
        Eye location in world space.
    target:
        Point the camera looks at. Must differ from ``position`` and must not
        lie straight above or below it, otherwise the basis is degenerate.
    focal_length:
        Distance of the image plane along forward. Larger values narrow the
        field of view.

    """

    position: Vec3
    target: Vec3
    focal_length: float = 2.0

    def __post_init__(self) -> None:
        if self.focal_length <= 0.0:
            msg = "Focal length must be positive"
            raise ValueError(msg)

    def basis(self) -> tuple[Vec3, Vec3, Vec3]:
        """Return (forward, right, up) built against the world up axis."""
        forward = (self.target - self.position).normalize()
        right = WORLD_UP.cross(forward).normalize()
        up = forward.cross(right)
        return forward, right, up

    def ray_direction(self, x: float, y: float) -> Vec3:
        """Unit direction through image-plane coordinates (x, y)."""
        forward, right, up = self.basis()
        return (right * x + up * y + forward * self.focal_length).normalize()

    def ray_directions_grid(self, xp: ArrayModule, xs: Any, ys: Any) -> Any:
        """Return unit directions of shape (H, W, 3) for column coords xs (W,) and row coords ys (H,)."""
        forward, right, up = (v.to_array(xp) for v in self.basis())
        rd = (
                xs[None, :, None] * right[None, None, :]
                + ys[:, None, None] * up[None, None, :]
                + self.focal_length * forward[None, None, :]
        )
        return normalize_batch(xp, rd)

    @classmethod
    def from_orbit(
            cls,
            cycle: int,
            degrees_per_cycle: float = 10.0,
            radius: float = 3.0,
            height: float = -0.5,
            target: Vec3 = ORIGIN,
            focal_length: float = 2.0,
    ) -> Camera3D:
        """Place the camera on a horizontal circle around the target, indexed by animation cycle."""
        angle = math.radians(cycle * degrees_per_cycle)
        position = Vec3(math.sin(angle) * radius, height, math.cos(angle) * radius)
        return cls(position=position, target=target, focal_length=focal_length)


def camera_ray_direction(
        x: float,
        y: float,
        cam_pos: Vec3,
        cam_target: Vec3,
        focal_length: float = 2.0,
) -> Vec3:
    return Camera3D(position=cam_pos, target=cam_target, focal_length=focal_length).ray_direction(x, y)
