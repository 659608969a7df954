# geometry/moving_sphere.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord
from geometry.sphere import hit_sphere

class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time0 to center1 at
    time1. Rays are tested against the center at their own sample time.
    """
    def __init__(self, center0: Vector3, center1: Vector3,
                 time0: float, time1: float, radius: float, material):
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vector3:
        if self.time1 == self.time0:
            return self.center0
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * fraction

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return hit_sphere(self.center(ray.time), self.radius, self.material, ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        c0 = self.center(time0)
        c1 = self.center(time1)
        box0 = AABB(c0 - offset, c0 + offset)
        box1 = AABB(c1 - offset, c1 + offset)
        return AABB.surrounding_box(box0, box1)
