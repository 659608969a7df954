"""Tests for the render driver and image output.

Tests cover:
- End-to-end render of a single red sphere with known pixel values
- Reproducibility from a seed, serial and across worker processes
- Progress reporting and cancellation
- Sample averaging, gamma and clamping in to_rgb8
- PPM and Pillow output
"""

import io
import math
import threading

import numpy as np
import pytest
from PIL import Image

from camera.camera import Camera
from core.config import RenderSettings
from core.vector import Color, Point3, Vector3
from geometry.world import HittableList
from renderer.output import save_image, to_rgb8, write_ppm
from renderer.integrator import ray_color, sky_gradient
from renderer.raytracer import RenderCancelled, Renderer, render_row, row_rng

BACKGROUND = Color(0.25, 0.5, 1.0)


@pytest.fixture
def scene(red_sphere):
    """Unit red sphere seen head-on, filling the middle of a square image."""
    world = HittableList([red_sphere]).build_bvh()
    camera = Camera(Point3(0, 0, 3), Point3(0, 0, 0), Vector3(0, 1, 0), 90.0, 1.0,
                    aperture=0.0, focus_dist=1.0)
    return world, camera


def settings(**overrides):
    params = dict(image_width=21, aspect_ratio=1.0, samples_per_pixel=4, max_depth=2, seed=7)
    params.update(overrides)
    return RenderSettings(**params)


class TestEndToEnd:
    """Known pixels of the red sphere scene."""

    def test_center_and_corner_pixels(self, scene):
        world, camera = scene
        image = Renderer(settings()).render_image(world, camera, BACKGROUND)
        assert image.shape == (21, 21, 3)
        assert image.dtype == np.uint8
        # One diffuse bounce off red, then the sky: 0.25 red, gamma 2 -> 0.5.
        assert tuple(image[10, 10]) == (128, 0, 0)
        assert tuple(image[0, 0]) == (128, 181, 255)
        assert tuple(image[20, 20]) == (128, 181, 255)

    def test_single_bounce_budget_is_black(self, scene):
        world, camera = scene
        image = Renderer(settings(max_depth=1)).render_image(world, camera, BACKGROUND)
        assert tuple(image[10, 10]) == (0, 0, 0)
        assert tuple(image[0, 0]) == (128, 181, 255)

    @pytest.mark.parametrize("row, col", [(0, 0), (0, 20), (20, 0), (10, 0)])
    def test_miss_pixels_match_gradient_for_their_ray(self, scene, row, col):
        world, camera = scene
        s = settings(samples_per_pixel=1)
        sums = Renderer(s).render(world, camera, sky_gradient)
        # Replay the single sample drawn for this pixel from its row stream.
        j = s.image_height - 1 - row
        rng = row_rng(s.seed, j)
        ray = None
        for i in range(col + 1):
            u = (i + rng.random()) / (s.image_width - 1)
            v = (j + rng.random()) / (s.image_height - 1)
            ray = camera.get_ray(u, v, rng)
            if i < col:
                ray_color(ray, sky_gradient, world, s.max_depth, rng)
        assert world.hit(ray, 0.001, math.inf) is None
        t = 0.5 * (ray.direction.normalize().y + 1.0)
        expected = [(1.0 - t) + t * 0.5, (1.0 - t) + t * 0.7, 1.0]
        assert np.allclose(sums[row, col], expected, atol=1e-12)

    def test_gradient_brightens_toward_bottom(self, scene):
        world, camera = scene
        sums = Renderer(settings(samples_per_pixel=1)).render(world, camera, sky_gradient)
        # Blue channel is 1 everywhere; red drops as the rays tilt upward.
        assert np.allclose(sums[:, 0, 2], 1.0)
        assert sums[0, 0, 0] < sums[10, 0, 0] < sums[20, 0, 0]

    def test_accumulated_sums(self, scene):
        world, camera = scene
        sums = Renderer(settings()).render(world, camera, BACKGROUND)
        assert sums.shape == (21, 21, 3)
        assert np.allclose(sums[0, 0], 4 * np.array([0.25, 0.5, 1.0]))


class TestReproducibility:
    """Seeds fix the image regardless of how rows are scheduled."""

    def test_same_seed_same_image(self, scene):
        world, camera = scene
        a = Renderer(settings(max_depth=5)).render(world, camera, BACKGROUND)
        b = Renderer(settings(max_depth=5)).render(world, camera, BACKGROUND)
        assert np.array_equal(a, b)

    def test_row_matches_full_render(self, scene):
        world, camera = scene
        s = settings(max_depth=5)
        full = Renderer(s).render(world, camera, BACKGROUND)
        row = render_row(world, camera, BACKGROUND, s, 7, 15)
        # Row j counts up from the bottom; the image is stored top row first.
        assert np.array_equal(full[s.image_height - 1 - 15], row)

    def test_row_rng_streams_differ(self):
        assert row_rng(1, 0).random() != row_rng(1, 1).random()
        assert row_rng(1, 0).random() == row_rng(1, 0).random()

    def test_workers_match_serial(self, scene):
        world, camera = scene
        serial = Renderer(settings(image_width=9, max_depth=5)).render(world, camera, BACKGROUND)
        parallel = Renderer(settings(image_width=9, max_depth=5, workers=2)).render(
            world, camera, BACKGROUND)
        assert np.array_equal(serial, parallel)


class TestProgressAndCancel:
    """Scanline callbacks and cancellation."""

    def test_progress_counts_down_to_zero(self, scene):
        world, camera = scene
        seen = []
        Renderer(settings(image_width=5)).render(world, camera, BACKGROUND, progress=seen.append)
        assert seen == [5, 4, 3, 2, 1, 0]

    def test_parallel_progress_counts_down_to_zero(self, scene):
        world, camera = scene
        seen = []
        Renderer(settings(image_width=5, workers=2)).render(world, camera, BACKGROUND,
                                                            progress=seen.append)
        assert seen == [5, 4, 3, 2, 1, 0]

    def test_cancel_before_start(self, scene):
        world, camera = scene
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(RenderCancelled):
            Renderer(settings()).render(world, camera, BACKGROUND, cancel=cancel)

    def test_cancel_from_progress_callback(self, scene):
        world, camera = scene
        cancel = threading.Event()
        seen = []

        def progress(remaining):
            seen.append(remaining)
            if remaining == 18:
                cancel.set()

        with pytest.raises(RenderCancelled, match="17 scanlines remaining"):
            Renderer(settings()).render(world, camera, BACKGROUND, progress=progress, cancel=cancel)
        assert seen == [21, 20, 19, 18]


class TestToRGB8:
    """Sample averaging, gamma 2 and clamping."""

    def test_average_and_gamma(self):
        sums = np.array([[[1.0, 0.0, 4.0]]])
        assert to_rgb8(sums, 4).tolist() == [[[128, 0, 255]]]

    def test_clamps_out_of_range(self):
        sums = np.array([[[-1.0, 100.0, 0.0]]])
        assert to_rgb8(sums, 1).tolist() == [[[0, 255, 0]]]

    def test_nan_becomes_black(self, caplog):
        sums = np.array([[[np.nan, 0.25, 0.0]]])
        with caplog.at_level("WARNING"):
            assert to_rgb8(sums, 1).tolist() == [[[0, 128, 0]]]
        assert "1 NaN color channel" in caplog.text

    def test_infinity_clamps_without_warning(self, caplog):
        sums = np.array([[[np.inf, -np.inf, 0.25]]])
        with caplog.at_level("WARNING"):
            assert to_rgb8(sums, 1).tolist() == [[[255, 0, 128]]]
        assert "NaN" not in caplog.text


class TestOutput:
    """PPM text and Pillow-backed formats."""

    def test_write_ppm(self):
        pixels = np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8)
        buf = io.StringIO()
        write_ppm(buf, pixels)
        assert buf.getvalue() == "P3\n2 1\n255\n1 2 3\n4 5 6\n"

    def test_write_ppm_rows_top_first(self):
        pixels = np.array([[[9, 9, 9]], [[0, 0, 0]]], dtype=np.uint8)
        buf = io.StringIO()
        write_ppm(buf, pixels)
        assert buf.getvalue().splitlines()[3:] == ["9 9 9", "0 0 0"]

    def test_save_ppm(self, tmp_path):
        pixels = np.array([[[10, 20, 30]]], dtype=np.uint8)
        path = tmp_path / "out.ppm"
        save_image(str(path), pixels)
        assert path.read_text() == "P3\n1 1\n255\n10 20 30\n"

    def test_save_png(self, tmp_path):
        pixels = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
        path = tmp_path / "out.png"
        save_image(str(path), pixels)
        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert np.array_equal(np.asarray(img.convert("RGB")), pixels)
