from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class RayMarchConfig:
    max_steps: int = 80
    eps: float = 1e-3
    t_start: float = 0.1
    max_distance: float = 80.0

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            msg = "max_steps must be at least 1"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RayHit:
    """Distance along the ray at which the surface was reached."""

    distance: float


# None means the ray left the scene without touching a surface.
CastResult = Optional[RayHit]


@dataclass(frozen=True, slots=True)
class ImageMarchResult:
    hit: Any
    distance: Any
