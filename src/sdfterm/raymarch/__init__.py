from sdfterm.raymarch.config import ImageMarchResult, RayHit, RayMarchConfig
from sdfterm.raymarch.marcher import ImageMarcher, RayMarcher

__all__ = [
    "ImageMarchResult",
    "ImageMarcher",
    "RayHit",
    "RayMarchConfig",
    "RayMarcher",
]
