from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sdfterm.geometry import OctahedronSDF

if TYPE_CHECKING:
    from sdfterm.backend import ArrayModule
    from sdfterm.math_utils import Vec3
    from sdfterm.protocols import SDF


@dataclass(frozen=True, slots=True)
class Scene:
    """Complete scene definition.

    How far a ray may travel is a marching concern, see ``RayMarchConfig.max_distance``.
    """

    surface: SDF

    def distance(self, p: Vec3) -> float:
        return self.surface.sdf(p)

    def distance_batch(self, p: Any) -> Any:
        return self.surface.sdf_batch(p)


def default_scene(xp: ArrayModule, size: float = 2.0) -> Scene:
    """The animated scene: a single octahedron at the origin."""
    return Scene(surface=OctahedronSDF(xp=xp, size=size))
