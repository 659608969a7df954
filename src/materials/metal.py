# materials/metal.py
import random
from typing import Optional
from core.ray import Ray
from core.vector import Color
from core.utils import clamp, reflect, random_in_unit_sphere
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult

class Metal(Material):
    """
    Metal material with reflective properties. ``fuzz`` in [0, 1] blurs the
    reflection; values outside that range are clamped to it.
    """
    def __init__(self, albedo: Color, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = clamp(fuzz, 0.0, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Optional[ScatterResult]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        scattered = Ray(rec.p, reflected + random_in_unit_sphere(rng) * self.fuzz, ray_in.time)

        if scattered.direction.dot(rec.normal) > 0:
            return ScatterResult(self.albedo, scattered)

        return None  # Absorb the ray if it does not scatter forward
