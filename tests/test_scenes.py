"""Tests for the built-in scene library.

Tests cover:
- Every registered scene builds, with its own framing or an overridden aspect ratio
- Scenes are reproducible from a seeded stream
- The earth scene's texture requirement
- Tiny renders of a few scenes produce finite, non-empty images
"""

import math
import random

import numpy as np
import pytest
from PIL import Image

from core.config import RenderSettings
from core.ray import Ray
from geometry.bvh import BVHNode
from renderer.raytracer import Renderer
from scenes.library import SCENES, Scene, build_scene

TEXTURE_FREE = sorted(name for name in SCENES if name != "earth")


@pytest.fixture
def texture_file(tmp_path):
    path = tmp_path / "earth.png"
    pixels = np.zeros((8, 16, 3), dtype=np.uint8)
    pixels[:4] = (40, 90, 200)
    pixels[4:] = (30, 160, 60)
    Image.fromarray(pixels).save(path)
    return str(path)


class TestSceneLibrary:
    """Registry and builders."""

    @pytest.mark.parametrize("name", TEXTURE_FREE)
    def test_builds(self, name):
        scene = build_scene(name, rng=random.Random(1))
        assert isinstance(scene, Scene)
        assert isinstance(scene.world, BVHNode)
        assert scene.aspect_ratio > 0
        assert scene.camera.aspect_ratio == scene.aspect_ratio

    def test_aspect_ratio_override(self):
        scene = build_scene("cornell_box", aspect_ratio=2.0, rng=random.Random(1))
        assert scene.aspect_ratio == 2.0
        assert scene.camera.aspect_ratio == 2.0

    def test_zero_aspect_ratio_is_not_replaced(self):
        scene = build_scene("two_spheres", aspect_ratio=0.0, rng=random.Random(1))
        assert scene.aspect_ratio == 0.0

    def test_default_framing(self):
        assert build_scene("cornell_box", rng=random.Random(1)).aspect_ratio == 1.0
        assert abs(build_scene("two_spheres", rng=random.Random(1)).aspect_ratio - 16 / 9) < 1e-12

    def test_seeded_scenes_match(self):
        a = build_scene("random", rng=random.Random(5))
        b = build_scene("random", rng=random.Random(5))
        rng = random.Random(0)
        for _ in range(50):
            ray = a.camera.get_ray(rng.random(), rng.random(), rng)
            hit_a = a.world.hit(ray, 0.001, math.inf)
            hit_b = b.world.hit(ray, 0.001, math.inf)
            assert (hit_a is None) == (hit_b is None)
            if hit_a is not None:
                assert hit_a.t == hit_b.t

    def test_camera_sees_cornell_box(self):
        scene = build_scene("cornell_box", rng=random.Random(1))
        ray = scene.camera.get_ray(0.5, 0.5, random.Random(2))
        rec = scene.world.hit(ray, 0.001, math.inf)
        assert rec is not None

    def test_unknown_scene(self):
        with pytest.raises(ValueError, match="Unknown scene"):
            build_scene("teapot")

    def test_earth_needs_texture(self):
        with pytest.raises(ValueError, match="texture"):
            build_scene("earth")

    def test_earth_missing_texture_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build_scene("earth", texture_path=str(tmp_path / "missing.png"))

    def test_earth_with_texture(self, texture_file):
        scene = build_scene("earth", rng=random.Random(1), texture_path=texture_file)
        ray = Ray(scene.camera.origin, scene.camera.lookat - scene.camera.origin)
        rec = scene.world.hit(ray, 0.001, math.inf)
        assert rec is not None
        assert rec.material.albedo.width == 16

    def test_final_scene_with_texture(self, texture_file):
        scene = build_scene("final", rng=random.Random(1), texture_path=texture_file)
        assert isinstance(scene.world, BVHNode)


class TestTinyRenders:
    """A handful of pixels through the full pipeline."""

    @pytest.mark.parametrize("name", ["two_spheres", "simple_light", "cornell_smoke"])
    def test_render(self, name):
        scene = build_scene(name, rng=random.Random(3))
        settings = RenderSettings(image_width=8, aspect_ratio=scene.aspect_ratio,
                                  samples_per_pixel=2, max_depth=4, seed=11)
        sums = Renderer(settings).render(scene.world, scene.camera, scene.background)
        assert sums.shape == (settings.image_height, 8, 3)
        assert np.isfinite(sums).all()
        assert (sums >= 0).all()
