# geometry/constant_medium.py
import math
import random
from typing import Optional, Union
from core.vector import Color, Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord
from materials.isotropic import Isotropic
from materials.textures import Texture

class ConstantMedium(Hittable):
    """
    A volume of constant density filling a convex boundary (smoke, fog).

    A ray passing through scatters at distance ``-ln(r) / density`` inside the
    boundary, or passes straight through if that exceeds the chord length.
    The random draw is seeded from the ray itself, which keeps hit() a pure
    function and renders reproducible.
    """
    def __init__(self, boundary: Hittable, density: float, albedo: Union[Color, Texture]):
        if density <= 0:
            raise ValueError(f"density must be positive, got {density}")
        self.boundary = boundary
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo)

    @staticmethod
    def _ray_rng(ray: Ray) -> random.Random:
        o, d = ray.origin, ray.direction
        return random.Random(hash((o.x, o.y, o.z, d.x, d.y, d.z, ray.time)))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rec1 = self.boundary.hit(ray, -math.inf, math.inf)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, rec1.t + 0.0001, math.inf)
        if rec2 is None:
            return None

        t1 = max(rec1.t, t_min)
        t2 = min(rec2.t, t_max)
        if t1 >= t2:
            return None
        t1 = max(t1, 0.0)

        ray_length = ray.direction.length()
        distance_inside_boundary = (t2 - t1) * ray_length
        hit_distance = self.neg_inv_density * math.log(1.0 - self._ray_rng(ray).random())
        if hit_distance > distance_inside_boundary:
            return None

        rec = HitRecord()
        rec.t = t1 + hit_distance / ray_length
        rec.p = ray.at(rec.t)
        rec.normal = Vector3(1, 0, 0)  # arbitrary
        rec.front_face = True  # also arbitrary
        rec.material = self.phase_function
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.boundary.bounding_box(time0, time1)
