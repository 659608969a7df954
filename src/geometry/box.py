# geometry/box.py
from typing import Optional
from core.vector import Point3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.world import HittableList

class Box(Hittable):
    """
    Axis-aligned box between corners p0 and p1, made of six rectangles whose
    normals all point out of the box.
    """
    def __init__(self, p0: Point3, p1: Point3, material):
        self.box_min = p0
        self.box_max = p1
        self.sides = HittableList([
            XYRect(p0.x, p1.x, p0.y, p1.y, p1.z, material),
            XYRect(p0.x, p1.x, p0.y, p1.y, p0.z, material, flip=True),
            XZRect(p0.x, p1.x, p0.z, p1.z, p1.y, material),
            XZRect(p0.x, p1.x, p0.z, p1.z, p0.y, material, flip=True),
            YZRect(p0.y, p1.y, p0.z, p1.z, p1.x, material),
            YZRect(p0.y, p1.y, p0.z, p1.z, p0.x, material, flip=True),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        return AABB(self.box_min, self.box_max)
