from sdfterm.camera.camera3d import Camera3D, camera_ray_direction

__all__ = [
    "Camera3D",
    "camera_ray_direction",
]
