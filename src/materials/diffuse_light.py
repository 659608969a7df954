# materials/diffuse_light.py
import random
from typing import Union
from core.ray import Ray
from core.vector import Color, Point3
from geometry.hittable import HitRecord
from materials.material import Material
from materials.textures import Texture, as_texture

class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    The texture can be used to create patterns in the emitted light.
    """
    def __init__(self, emit: Union[Color, Texture]):
        self.emit = as_texture(emit)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> None:
        """
        Emissive materials do not scatter rays.
        """
        return None

    def emitted(self, u: float, v: float, p: Point3) -> Color:
        """
        Return the emitted radiance, which can be textured.

        Args:
            u (float): The horizontal texture coordinate.
            v (float): The vertical texture coordinate.
            p (Point3): The hit point.

        Returns:
            Color: The emission color from the texture.
        """
        return self.emit.value(u, v, p)
