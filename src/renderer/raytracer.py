# renderer/raytracer.py
import logging
import random
import threading
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, Optional
import numpy as np
from camera.camera import Camera
from core.config import RenderSettings
from core.vector import Color
from geometry.hittable import Hittable
from renderer.integrator import Background, ray_color
from renderer.output import to_rgb8

logger = logging.getLogger(__name__)

# Called with the number of scanlines still to render.
ProgressCallback = Callable[[int], None]

class RenderCancelled(RuntimeError):
    """Raised when a render is stopped through its cancel event."""

def row_rng(seed: int, row: int) -> random.Random:
    """Independent, reproducible random stream for one image row."""
    return random.Random(seed * 1_000_003 + row)

def render_row(world: Hittable, camera: Camera, background: Background,
               settings: RenderSettings, seed: int, j: int) -> np.ndarray:
    """
    Render image row ``j`` (0 is the bottom of the viewport) and return the
    per-pixel sums of ``samples_per_pixel`` samples as a (width, 3) array.
    """
    rng = row_rng(seed, j)
    width = settings.image_width
    height = settings.image_height
    u_span = max(width - 1, 1)
    v_span = max(height - 1, 1)
    row = np.zeros((width, 3), dtype=np.float64)
    for i in range(width):
        pixel_color = Color(0.0, 0.0, 0.0)
        for _ in range(settings.samples_per_pixel):
            u = (i + rng.random()) / u_span
            v = (j + rng.random()) / v_span
            ray = camera.get_ray(u, v, rng)
            pixel_color = pixel_color + ray_color(ray, background, world, settings.max_depth, rng)
        row[i] = (pixel_color.x, pixel_color.y, pixel_color.z)
    return row

# Per-process scene state installed by the pool initializer.
_worker_scene = None

def _init_worker(world, camera, background, settings, seed):
    global _worker_scene
    _worker_scene = (world, camera, background, settings, seed)

def _render_row_in_worker(j: int):
    world, camera, background, settings, seed = _worker_scene
    return j, render_row(world, camera, background, settings, seed, j)

class Renderer:
    """
    Drives a render: generates camera samples for every pixel, accumulates
    their colors and converts the result to an 8-bit image.

    Rows are independent, so with ``settings.workers > 1`` they are spread
    over a process pool. Each row draws from its own seeded stream, making
    the output identical for any worker count.
    """
    def __init__(self, settings: RenderSettings):
        self.settings = settings

    def render(self, world: Hittable, camera: Camera, background: Background,
               progress: Optional[ProgressCallback] = None,
               cancel: Optional[threading.Event] = None) -> np.ndarray:
        """
        Returns the (height, width, 3) array of sample sums, top row first.
        """
        settings = self.settings
        seed = settings.seed if settings.seed is not None else random.randrange(2 ** 32)
        width, height = settings.image_width, settings.image_height
        logger.info("Rendering %dx%d, %d samples/pixel, depth %d, %d worker(s), seed %d",
                    width, height, settings.samples_per_pixel, settings.max_depth,
                    settings.workers, seed)

        accumulated = np.zeros((height, width, 3), dtype=np.float64)
        start = time.perf_counter()

        if settings.workers == 1:
            for j in range(height - 1, -1, -1):
                if cancel is not None and cancel.is_set():
                    raise RenderCancelled(f"Render cancelled with {j + 1} scanlines remaining")
                if progress is not None:
                    progress(j + 1)
                accumulated[height - 1 - j] = render_row(world, camera, background,
                                                         settings, seed, j)
        else:
            self._render_parallel(accumulated, world, camera, background, seed,
                                  progress, cancel)

        if progress is not None:
            progress(0)
        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return accumulated

    def _render_parallel(self, accumulated, world, camera, background, seed,
                         progress, cancel):
        settings = self.settings
        height = settings.image_height
        remaining = height
        with ProcessPoolExecutor(max_workers=settings.workers, initializer=_init_worker,
                                 initargs=(world, camera, background, settings, seed)) as executor:
            rows = executor.map(_render_row_in_worker, range(height - 1, -1, -1))
            for j, row in rows:
                if cancel is not None and cancel.is_set():
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise RenderCancelled(f"Render cancelled with {remaining} scanlines remaining")
                if progress is not None:
                    progress(remaining)
                accumulated[height - 1 - j] = row
                remaining -= 1

    def render_image(self, world: Hittable, camera: Camera, background: Background,
                     progress: Optional[ProgressCallback] = None,
                     cancel: Optional[threading.Event] = None) -> np.ndarray:
        """
        Render and convert to a (height, width, 3) uint8 image.
        """
        accumulated = self.render(world, camera, background, progress, cancel)
        return to_rgb8(accumulated, self.settings.samples_per_pixel)
