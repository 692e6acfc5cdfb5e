import math
import unittest

import numpy as np

from sdfterm.camera import Camera3D
from sdfterm.math_utils import Vec3
from sdfterm.raymarch import ImageMarcher, RayHit, RayMarchConfig, RayMarcher
from sdfterm.scene import default_scene

INV_SQRT3 = 1.0 / math.sqrt(3.0)


class RayMarcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scene = default_scene(np)
        self.config = RayMarchConfig()
        self.marcher = RayMarcher(self.config, self.scene)

    def test_hit_lands_on_surface(self) -> None:
        origin = Vec3(0.0, 0.0, 5.0)
        direction = Vec3(0.0, 0.0, -1.0)
        hit = self.marcher.cast_ray(origin, direction)

        self.assertIsInstance(hit, RayHit)
        assert hit is not None
        self.assertAlmostEqual(hit.distance, 3.0, places=2)
        residual = self.scene.distance(origin + direction * hit.distance)
        self.assertLessEqual(abs(residual), self.config.eps * hit.distance)

    def test_oblique_hit_lands_on_surface(self) -> None:
        origin = Vec3(0.0, -0.5, 3.0)
        direction = Vec3(0.3, 0.1, -1.0).normalize()
        hit = self.marcher.cast_ray(origin, direction)

        assert hit is not None
        residual = self.scene.distance(origin + direction * hit.distance)
        self.assertLessEqual(abs(residual), self.config.eps * hit.distance)

    def test_ray_pointing_away_misses(self) -> None:
        self.assertIsNone(self.marcher.cast_ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, 1.0)))
        self.assertIsNone(self.marcher.cast_ray(Vec3(0.0, 5.0, 0.0), Vec3(1.0, 0.0, 0.0)))

    def test_surface_beyond_max_distance_is_a_miss(self) -> None:
        self.assertIsNone(self.marcher.cast_ray(Vec3(0.0, 0.0, 100.0), Vec3(0.0, 0.0, -1.0)))

    def test_march_limit_comes_from_config(self) -> None:
        origin = Vec3(0.0, 0.0, 50.0)
        direction = Vec3(0.0, 0.0, -1.0)

        hit = self.marcher.cast_ray(origin, direction)
        assert hit is not None
        self.assertAlmostEqual(hit.distance, 48.0, places=1)

        short = RayMarcher(RayMarchConfig(max_distance=10.0), self.scene)
        self.assertIsNone(short.cast_ray(origin, direction))

        image = ImageMarcher(np, RayMarchConfig(max_distance=10.0), self.scene)
        res = image.march(origin, np.array([[[0.0, 0.0, -1.0]]]))
        self.assertFalse(bool(res.hit[0, 0]))

    def test_exhausted_budget_reports_last_distance(self) -> None:
        marcher = RayMarcher(RayMarchConfig(max_steps=1), self.scene)
        hit = marcher.cast_ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        assert hit is not None
        # one step of 2.9 from the starting offset of 0.1
        self.assertAlmostEqual(hit.distance, 3.0)

    def test_max_steps_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            RayMarchConfig(max_steps=0)

    def test_normal_on_faces(self) -> None:
        for sx, sy, sz in ((1, 1, 1), (-1, 1, 1), (1, -1, -1), (-1, -1, 1)):
            p = Vec3(sx * 2.0 / 3.0, sy * 2.0 / 3.0, sz * 2.0 / 3.0)
            n = self.marcher.estimate_normal(p)
            self.assertAlmostEqual(n.magnitude(), 1.0)
            self.assertAlmostEqual(n.x, sx * INV_SQRT3, places=4)
            self.assertAlmostEqual(n.y, sy * INV_SQRT3, places=4)
            self.assertAlmostEqual(n.z, sz * INV_SQRT3, places=4)


class ImageMarcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scene = default_scene(np)
        self.config = RayMarchConfig()
        self.marcher = RayMarcher(self.config, self.scene)
        self.image_marcher = ImageMarcher(np, self.config, self.scene)
        self.camera = Camera3D(position=Vec3(0.0, -0.5, 3.0), target=Vec3(0.0, 0.0, 0.0))

    def test_matches_scalar_marcher(self) -> None:
        xs = np.linspace(-2.4, 2.4, 13)
        ys = np.linspace(-2.0, 2.0, 7)
        rd = self.camera.ray_directions_grid(np, xs, ys)
        res = self.image_marcher.march(self.camera.position, rd)

        self.assertTrue(res.hit.any())
        self.assertFalse(res.hit.all())
        for row in range(rd.shape[0]):
            for col in range(rd.shape[1]):
                hit = self.marcher.cast_ray(self.camera.position, Vec3(*rd[row, col]))
                self.assertEqual(bool(res.hit[row, col]), hit is not None)
                if hit is not None:
                    self.assertAlmostEqual(float(res.distance[row, col]), hit.distance, places=9)

    def test_batch_normals_match_scalar(self) -> None:
        pts = np.array([
            [2.0 / 3.0, 2.0 / 3.0, 2.0 / 3.0],
            [-0.5, 1.0, 0.5],
            [0.2, -0.3, -1.5],
        ])
        normals = self.image_marcher.normals(pts)
        for p, n in zip(pts, normals):
            expected = self.marcher.estimate_normal(Vec3(*p))
            np.testing.assert_allclose(n, list(expected), atol=1e-9)


if __name__ == "__main__":
    unittest.main()
