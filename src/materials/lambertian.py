# materials/lambertian.py
import random
from typing import Union
from core.ray import Ray
from core.vector import Color
from core.utils import random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult
from materials.textures import Texture, as_texture

class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Color, Texture]):
        # Store either a solid color or a texture.
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        """
        Scatter a ray according to a Lambertian reflection model.
        """
        # Pick a random scatter direction by adding a random vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        scattered = Ray(rec.p, scatter_direction, ray_in.time)
        attenuation = self.albedo.value(rec.u, rec.v, rec.p)
        return ScatterResult(attenuation, scattered)
