# src/materials/dielectric.py
import math
import random
from core.ray import Ray
from core.vector import Color
from core.utils import reflect, refract, reflectance
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult

class Dielectric(Material):
    """
    Clear refractive material (glass, water). Always scatters: either
    reflects or refracts, chosen by total internal reflection and Schlick's
    approximation.
    """
    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        attenuation = Color(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        refraction_ratio = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return ScatterResult(attenuation, Ray(rec.p, direction, ray_in.time))
