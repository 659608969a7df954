# geometry/transforms.py
"""
Instance transforms. Rather than moving geometry, the incoming ray is moved
into object space and the resulting hit is mapped back.
"""
import math
from typing import Optional
from core.vector import Vector3, Point3
from core.ray import Ray
from core.aabb import AABB
from core.utils import degrees_to_radians
from geometry.hittable import Hittable, HitRecord

class Translate(Hittable):
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max)
        if rec is None:
            return None
        # Translation leaves the normal and the face side unchanged.
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return AABB(box.minimum + self.offset, box.maximum + self.offset)

class RotateY(Hittable):
    """
    Rotates an object by ``angle`` degrees about the Y axis.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.box = self._rotated_box()

    def _rotated_box(self) -> Optional[AABB]:
        box = self.obj.bounding_box(0.0, 1.0)
        if box is None:
            return None
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for i in range(2):
            for j in range(2):
                for k in range(2):
                    x = i * box.maximum.x + (1 - i) * box.minimum.x
                    y = j * box.maximum.y + (1 - j) * box.minimum.y
                    z = k * box.maximum.z + (1 - k) * box.minimum.z
                    corner = self._to_world(Vector3(x, y, z))
                    for c in range(3):
                        lo[c] = min(lo[c], corner[c])
                        hi[c] = max(hi[c], corner[c])
        return AABB(Point3(*lo), Point3(*hi))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max)
        if rec is None:
            return None
        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.box
