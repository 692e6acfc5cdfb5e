from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Vec3:
    """Immutable 3D vector. Every operation returns a new value."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return self.scale(scalar)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def scale(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec3:
        """Return the unit vector.

        Callers must not pass a zero vector; no guard is applied so that
        results stay bit-identical to a plain division by the norm.
        """
        m = self.magnitude()
        return Vec3(self.x / m, self.y / m, self.z / m)

    def abs(self) -> Vec3:
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def clamp(self, lo: float, hi: float) -> Vec3:
        return Vec3(
            clamp_float(self.x, lo, hi),
            clamp_float(self.y, lo, hi),
            clamp_float(self.z, lo, hi),
        )

    def to_array(self, xp: Any) -> Any:
        return xp.asarray([self.x, self.y, self.z], dtype=xp.float64)


WORLD_UP = Vec3(0.0, 1.0, 0.0)


def clamp_float(x: float, lo: float, hi: float) -> float:
    """Clamp a Python float to [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def normalize_batch(xp: Any, v: Any) -> Any:
    """Normalize (..., 3) vectors along the last axis, without a zero guard."""
    return v / xp.linalg.norm(v, axis=-1, keepdims=True)


def vclamp(xp: Any, a: Any, lo: float, hi: float) -> Any:
    """Element-wise clamp of an array to [lo, hi]."""
    return xp.clip(a, lo, hi)
