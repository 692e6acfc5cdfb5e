from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any

from sdfterm.backend import ArrayModule
from sdfterm.math_utils import Vec3, clamp_float, vclamp
from sdfterm.protocols import SDF

INV_SQRT3 = 0.57735027


@dataclass(frozen=True, slots=True)
class OctahedronSDF(SDF):
    """Octahedron centred at the origin with vertices at distance ``size`` on each axis.

    Closed form from https://iquilezles.org/articles/distfunctions/ :
    the query point is folded into the positive octant, then one of three
    axis permutations reduces the problem to a face-edge distance. When no
    permutation applies the point projects onto the face interior and the
    distance is the plane distance ``m / sqrt(3)``.
    """

    xp: ArrayModule
    size: float = 2.0

    def __post_init__(self) -> None:
        if self.size <= 0.0:
            msg = "Octahedron size must be positive"
            raise ValueError(msg)

    def sdf(self, p: Vec3) -> float:
        s = self.size
        x, y, z = p.abs()
        m = x + y + z - s
        if 3.0 * x < m:
            q = Vec3(x, y, z)
        elif 3.0 * y < m:
            q = Vec3(y, z, x)
        elif 3.0 * z < m:
            q = Vec3(z, x, y)
        else:
            return m * INV_SQRT3

        k = clamp_float(0.5 * (q.z - q.y + s), 0.0, s)
        return Vec3(q.x, q.y - s + k, q.z - k).magnitude()

    def sdf_batch(self, p: Any) -> Any:
        xp = self.xp
        s = self.size
        a = xp.abs(p)
        x, y, z = a[..., 0], a[..., 1], a[..., 2]
        m = x + y + z - s

        case_x = 3.0 * x < m
        case_y = ~case_x & (3.0 * y < m)
        case_z = ~case_x & ~case_y & (3.0 * z < m)

        qx = xp.where(case_x, x, xp.where(case_y, y, z))
        qy = xp.where(case_x, y, xp.where(case_y, z, x))
        qz = xp.where(case_x, z, xp.where(case_y, x, y))

        k = vclamp(xp, 0.5 * (qz - qy + s), 0.0, s)
        ey = qy - s + k
        ez = qz - k
        edge = xp.sqrt(qx * qx + ey * ey + ez * ez)
        return xp.where(case_x | case_y | case_z, edge, m * INV_SQRT3)


@dataclass(frozen=True, slots=True)
class SphereSDF(SDF):
    """Sphere of ``radius`` around ``center``."""

    xp: ArrayModule
    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            msg = "Sphere radius must be positive"
            raise ValueError(msg)

    def sdf(self, p: Vec3) -> float:
        return (p - self.center).magnitude() - self.radius

    def sdf_batch(self, p: Any) -> Any:
        # For p shaped (..., 3) this returns shape (...)
        return self.xp.linalg.norm(p - self.center.to_array(self.xp), axis=-1) - self.radius


@dataclass(frozen=True, slots=True)
class UnionSDF(SDF):
    """Combine primitives by taking the nearest surface."""

    xp: ArrayModule
    children: tuple[SDF, ...]

    def __post_init__(self) -> None:
        if not self.children:
            msg = "UnionSDF requires at least one child"
            raise ValueError(msg)

    def sdf(self, p: Vec3) -> float:
        return min(child.sdf(p) for child in self.children)

    def sdf_batch(self, p: Any) -> Any:
        return reduce(self.xp.minimum, (child.sdf_batch(p) for child in self.children))
