"""Animated signed-distance-field raymarcher for text terminals."""

import logging

from sdfterm.camera import Camera3D, camera_ray_direction
from sdfterm.geometry import OctahedronSDF, SphereSDF, UnionSDF
from sdfterm.math_utils import Vec3
from sdfterm.raymarch import ImageMarcher, RayHit, RayMarchConfig, RayMarcher
from sdfterm.render import FrameConfig, FrameRenderer, RenderContext
from sdfterm.scene import Scene, default_scene
from sdfterm.shading import GlyphRamp, Palette, Shader

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Camera3D",
    "FrameConfig",
    "FrameRenderer",
    "GlyphRamp",
    "ImageMarcher",
    "OctahedronSDF",
    "Palette",
    "RayHit",
    "RayMarchConfig",
    "RayMarcher",
    "RenderContext",
    "Scene",
    "Shader",
    "SphereSDF",
    "UnionSDF",
    "Vec3",
    "camera_ray_direction",
    "default_scene",
]
