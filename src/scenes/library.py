# scenes/library.py
"""
Scenes rendered throughout the journal, built programmatically.

Every builder has the same signature, ``builder(aspect_ratio=None, rng=None,
texture_path=None)``, and returns a ``Scene`` whose world is wrapped in a BVH.
``aspect_ratio`` of None uses the scene's own framing.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from camera.camera import Camera
from core.utils import random_in_range, random_vector
from core.vector import Color, Point3, Vector3
from geometry.box import Box
from geometry.constant_medium import ConstantMedium
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.hittable import Hittable
from geometry.moving_sphere import MovingSphere
from geometry.sphere import Sphere
from geometry.transforms import RotateY, Translate
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import ColorPresets, DielectricPresets, LightPresets, MetalPresets, TexturePresets
from materials.textures import NoiseTexture
from materials.texture_loader import load_texture
from renderer.integrator import Background

logger = logging.getLogger(__name__)

UP = Vector3(0, 1, 0)

@dataclass
class Scene:
    world: Hittable
    camera: Camera
    background: Background
    aspect_ratio: float

def _finish(name: str, objects: HittableList, camera: Camera, background: Background,
            aspect_ratio: float, rng: random.Random) -> Scene:
    world = objects.build_bvh(camera.time0, camera.time1, rng)
    logger.info("Built scene %r with %d top-level objects", name, len(objects))
    return Scene(world, camera, background, aspect_ratio)

def random_scene(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                 texture_path: Optional[str] = None) -> Scene:
    """The cover image: a field of small random spheres around three large ones."""
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 16.0 / 9.0
    world = HittableList()

    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(TexturePresets.checkerboard())))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                # diffuse, bouncing during the shutter interval
                albedo = random_vector(rng) * random_vector(rng)
                center2 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = random_in_range(rng, 0.5, 1.0)
                world.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0, 0.5))))
            else:
                world.add(Sphere(center, 0.2, DielectricPresets.glass()))

    world.add(Sphere(Point3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(Point3(13, 2, 3), Point3(0, 0, 0), UP, 20, aspect_ratio,
                    aperture=0.1, focus_dist=10.0, time0=0.0, time1=1.0)
    return _finish("random", world, camera, ColorPresets.SKY, aspect_ratio, rng)

def two_spheres(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                texture_path: Optional[str] = None) -> Scene:
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 16.0 / 9.0
    checker = Lambertian(TexturePresets.checkerboard())
    world = HittableList([
        Sphere(Point3(0, -10, 0), 10, checker),
        Sphere(Point3(0, 10, 0), 10, checker),
    ])
    camera = Camera(Point3(13, 2, 3), Point3(0, 0, 0), UP, 20, aspect_ratio, focus_dist=10.0)
    return _finish("two_spheres", world, camera, ColorPresets.SKY, aspect_ratio, rng)

def _perlin_spheres(rng: random.Random) -> HittableList:
    pertext = Lambertian(TexturePresets.marble(4.0, rng))
    return HittableList([
        Sphere(Point3(0, -1000, 0), 1000, pertext),
        Sphere(Point3(0, 2, 0), 2, pertext),
    ])

def two_perlin_spheres(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                       texture_path: Optional[str] = None) -> Scene:
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 16.0 / 9.0
    camera = Camera(Point3(13, 2, 3), Point3(0, 0, 0), UP, 20, aspect_ratio, focus_dist=10.0)
    return _finish("two_perlin_spheres", _perlin_spheres(rng), camera, ColorPresets.SKY,
                   aspect_ratio, rng)

def earth(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
          texture_path: Optional[str] = None) -> Scene:
    """A globe wrapped in an image texture; needs ``texture_path``."""
    if texture_path is None:
        raise ValueError("The earth scene needs a texture image path")
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 16.0 / 9.0
    surface = Lambertian(load_texture(texture_path))
    world = HittableList([Sphere(Point3(0, 0, 0), 2, surface)])
    camera = Camera(Point3(13, 2, 3), Point3(0, 0, 0), UP, 20, aspect_ratio, focus_dist=10.0)
    return _finish("earth", world, camera, ColorPresets.SKY, aspect_ratio, rng)

def simple_light(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                 texture_path: Optional[str] = None) -> Scene:
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 16.0 / 9.0
    world = _perlin_spheres(rng)
    world.add(XYRect(3, 5, 1, 3, -2, LightPresets.white(4.0)))
    camera = Camera(Point3(26, 3, 6), Point3(0, 2, 0), UP, 20, aspect_ratio, focus_dist=10.0)
    return _finish("simple_light", world, camera, ColorPresets.BLACK, aspect_ratio, rng)

def _cornell_walls(light: Hittable) -> HittableList:
    red = ColorPresets.matte(ColorPresets.RED)
    white = ColorPresets.matte(ColorPresets.WHITE)
    green = ColorPresets.matte(ColorPresets.GREEN)
    return HittableList([
        YZRect(0, 555, 0, 555, 555, green),
        YZRect(0, 555, 0, 555, 0, red),
        light,
        XZRect(0, 555, 0, 555, 0, white),
        XZRect(0, 555, 0, 555, 555, white),
        XYRect(0, 555, 0, 555, 555, white),
    ])

def _cornell_blocks():
    white = ColorPresets.matte(ColorPresets.WHITE)
    tall = Translate(RotateY(Box(Point3(0, 0, 0), Point3(165, 330, 165), white), 15),
                     Vector3(265, 0, 295))
    short = Translate(RotateY(Box(Point3(0, 0, 0), Point3(165, 165, 165), white), -18),
                      Vector3(130, 0, 65))
    return tall, short

def _cornell_camera(aspect_ratio: float) -> Camera:
    return Camera(Point3(278, 278, -800), Point3(278, 278, 0), UP, 40, aspect_ratio,
                  focus_dist=10.0)

def cornell_box(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                texture_path: Optional[str] = None) -> Scene:
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 1.0
    world = _cornell_walls(XZRect(213, 343, 227, 332, 554, LightPresets.white(15.0)))
    for block in _cornell_blocks():
        world.add(block)
    return _finish("cornell_box", world, _cornell_camera(aspect_ratio), ColorPresets.BLACK,
                   aspect_ratio, rng)

def cornell_smoke(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                  texture_path: Optional[str] = None) -> Scene:
    """The Cornell box with its two blocks replaced by dark and light smoke."""
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 1.0
    world = _cornell_walls(XZRect(113, 443, 127, 432, 554, LightPresets.white(7.0)))
    tall, short = _cornell_blocks()
    world.add(ConstantMedium(tall, 0.01, Color(0, 0, 0)))
    world.add(ConstantMedium(short, 0.01, Color(1, 1, 1)))
    return _finish("cornell_smoke", world, _cornell_camera(aspect_ratio), ColorPresets.BLACK,
                   aspect_ratio, rng)

def final_scene(aspect_ratio: Optional[float] = None, rng: Optional[random.Random] = None,
                texture_path: Optional[str] = None) -> Scene:
    """
    Every feature at once. The textured globe is included only when
    ``texture_path`` is given.
    """
    rng = rng or random.Random()
    if aspect_ratio is None:
        aspect_ratio = 1.0

    ground = ColorPresets.matte(ColorPresets.GROUND)
    boxes1 = HittableList()
    boxes_per_side = 20
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            y1 = rng.uniform(1, 101)
            boxes1.add(Box(Point3(x0, 0.0, z0), Point3(x0 + w, y1, z0 + w), ground))

    world = HittableList()
    world.add(boxes1.build_bvh(0.0, 1.0, rng))
    world.add(XZRect(123, 423, 147, 412, 554, LightPresets.white(7.0)))

    center1 = Point3(400, 400, 200)
    center2 = center1 + Vector3(30, 0, 0)
    world.add(MovingSphere(center1, center2, 0, 1, 50, Lambertian(Color(0.7, 0.3, 0.1))))

    world.add(Sphere(Point3(260, 150, 45), 50, DielectricPresets.glass()))
    world.add(Sphere(Point3(0, 150, 145), 50, MetalPresets.brushed(1.0)))

    boundary = Sphere(Point3(360, 150, 145), 70, Dielectric(1.5))
    world.add(boundary)
    world.add(ConstantMedium(boundary, 0.2, Color(0.2, 0.4, 0.9)))
    mist = Sphere(Point3(0, 0, 0), 5000, Dielectric(1.5))
    world.add(ConstantMedium(mist, 0.0001, Color(1, 1, 1)))

    if texture_path is not None:
        world.add(Sphere(Point3(400, 200, 400), 100, Lambertian(load_texture(texture_path))))
    world.add(Sphere(Point3(220, 280, 300), 80,
                     Lambertian(NoiseTexture(0.1, NoiseTexture.MARBLE, rng))))

    white = ColorPresets.matte(ColorPresets.WHITE)
    boxes2 = HittableList()
    for _ in range(1000):
        boxes2.add(Sphere(random_in_range(rng, 0, 165), 10, white))
    world.add(Translate(RotateY(boxes2.build_bvh(0.0, 1.0, rng), 15), Vector3(-100, 270, 395)))

    camera = Camera(Point3(478, 278, -600), Point3(278, 278, 0), UP, 40, aspect_ratio,
                    focus_dist=10.0, time0=0.0, time1=1.0)
    return _finish("final", world, camera, ColorPresets.BLACK, aspect_ratio, rng)

SCENES: Dict[str, Callable[..., Scene]] = {
    "random": random_scene,
    "two_spheres": two_spheres,
    "two_perlin_spheres": two_perlin_spheres,
    "earth": earth,
    "simple_light": simple_light,
    "cornell_box": cornell_box,
    "cornell_smoke": cornell_smoke,
    "final": final_scene,
}

def build_scene(name: str, aspect_ratio: Optional[float] = None,
                rng: Optional[random.Random] = None,
                texture_path: Optional[str] = None) -> Scene:
    if name not in SCENES:
        known = ", ".join(sorted(SCENES))
        raise ValueError(f"Unknown scene {name!r} (known: {known})")
    return SCENES[name](aspect_ratio=aspect_ratio, rng=rng, texture_path=texture_path)
