"""Lighting and quantisation of intensities into glyphs and colour pairs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from sdfterm.math_utils import Vec3, clamp_float

if TYPE_CHECKING:
    from sdfterm.raymarch.marcher import RayMarcher

LIGHT_DIRECTION = Vec3(0.5, -2.0, -0.5).normalize()

# Faintest to densest. The leading space is what a miss draws; it stands in for
# the mis-encoded "Â" that led the original ramp literal.
DEFAULT_RAMP = " ·-*#W"

# xterm-256 reds through to white, and the bright subset of the 16-colour set.
PALETTE_256 = (88, 124, 160, 196, 210, 216, 229, 231)
PALETTE_16 = (1, 9, 11, 15)


def _round_half_up(v: float) -> int:
    # builtin round() would send 2.5 to 2
    return math.floor(v + 0.5)


@dataclass(frozen=True, slots=True)
class Shader:
    light_direction: Vec3 = LIGHT_DIRECTION
    ambient: float = 0.2

    def lambert(self, normal: Vec3) -> float:
        """Diffuse plus ambient. Deliberately not clamped to 1."""
        return max(normal.dot(self.light_direction), 0.0) + self.ambient

    def intensity(self, marcher: RayMarcher, origin: Vec3, direction: Vec3) -> float:
        hit = marcher.cast_ray(origin, direction)
        if hit is None:
            return 0.0
        p = origin + direction * hit.distance
        return self.lambert(marcher.estimate_normal(p))

    def lambert_batch(self, xp: Any, normals: Any) -> Any:
        light = self.light_direction.to_array(xp)
        diffuse = normals[..., 0] * light[0] + normals[..., 1] * light[1] + normals[..., 2] * light[2]
        return xp.maximum(diffuse, 0.0) + self.ambient


@dataclass(frozen=True, slots=True)
class GlyphRamp:
    """Characters of increasing visual weight."""

    chars: str = DEFAULT_RAMP

    def __post_init__(self) -> None:
        if not self.chars:
            msg = "Glyph ramp must not be empty"
            raise ValueError(msg)

    def index(self, intensity: float) -> int:
        return _round_half_up(clamp_float(intensity, 0.0, 1.0) * (len(self.chars) - 1))

    def glyph(self, intensity: float) -> str:
        return self.chars[self.index(intensity)]

    def index_batch(self, intensity: np.ndarray) -> np.ndarray:
        scaled = np.clip(intensity, 0.0, 1.0) * (len(self.chars) - 1)
        return np.floor(scaled + 0.5).astype(np.intp)


@dataclass(frozen=True, slots=True)
class Palette:
    """Foreground colours bound to curses pairs 1..N; pair 0 stays the terminal default."""

    colors: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            msg = "Palette must contain at least one colour"
            raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.colors)

    def pairs(self) -> list[tuple[int, int]]:
        """(pair number, colour) for every entry."""
        return [(idx + 1, col) for idx, col in enumerate(self.colors)]

    def color_index(self, intensity: float) -> int:
        return 1 + _round_half_up(clamp_float(intensity, 0.0, 1.0) * (len(self.colors) - 1))

    def color_index_batch(self, intensity: np.ndarray) -> np.ndarray:
        scaled = np.clip(intensity, 0.0, 1.0) * (len(self.colors) - 1)
        return 1 + np.floor(scaled + 0.5).astype(np.intp)

    @classmethod
    def for_terminal(cls, has_colors: bool, colors: int) -> Optional[Palette]:
        """Pick the palette matching the terminal's colour depth, or None for monochrome."""
        if not has_colors:
            return None
        if colors >= 256:
            return cls(PALETTE_256)
        if colors >= 16:
            return cls(PALETTE_16)
        return None
