# materials/isotropic.py
import random
from typing import Union
from core.ray import Ray
from core.vector import Color
from core.utils import random_in_unit_sphere
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult
from materials.textures import Texture, as_texture

class Isotropic(Material):
    """
    Phase function for participating media: scatters uniformly in all directions.
    """
    def __init__(self, albedo: Union[Color, Texture]):
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        scattered = Ray(rec.p, random_in_unit_sphere(rng), ray_in.time)
        return ScatterResult(self.albedo.value(rec.u, rec.v, rec.p), scattered)
