# geometry/aarect.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord

# Half-thickness given to rectangle boxes along their flat axis.
PAD = 1e-4

class AxisAlignedRect(Hittable):
    """
    A rectangle lying in the plane ``axis == k``, spanning [a0, a1] along
    ``a_axis`` and [b0, b1] along ``b_axis``. The concrete subclasses fix the
    three axes; u runs along a_axis and v along b_axis. The outward normal is
    the positive ``axis`` direction, or the negative one when ``flip`` is set.
    """
    axis = 2
    a_axis = 0
    b_axis = 1

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float, material,
                 flip: bool = False):
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material
        self.flip = flip

    def _normal(self) -> Vector3:
        n = [0.0, 0.0, 0.0]
        n[self.axis] = -1.0 if self.flip else 1.0
        return Vector3(*n)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        direction = ray.direction[self.axis]
        if direction == 0.0:
            return None
        t = (self.k - ray.origin[self.axis]) / direction
        if t < t_min or t > t_max:
            return None

        a = ray.origin[self.a_axis] + t * ray.direction[self.a_axis]
        b = ray.origin[self.b_axis] + t * ray.direction[self.b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        rec.t = t
        rec.set_face_normal(ray, self._normal())
        rec.material = self.material
        rec.p = ray.at(t)
        return rec

    def bounding_box(self, time0: float, time1: float) -> AABB:
        lo = [0.0, 0.0, 0.0]
        hi = [0.0, 0.0, 0.0]
        lo[self.a_axis], hi[self.a_axis] = self.a0, self.a1
        lo[self.b_axis], hi[self.b_axis] = self.b0, self.b1
        lo[self.axis], hi[self.axis] = self.k - PAD, self.k + PAD
        return AABB(Vector3(*lo), Vector3(*hi))

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.a0}, {self.a1}, {self.b0}, {self.b1}, "
                f"k={self.k})")

class XYRect(AxisAlignedRect):
    """Rectangle in the plane z = k."""
    axis, a_axis, b_axis = 2, 0, 1

    def __init__(self, x0: float, x1: float, y0: float, y1: float, k: float, material,
                 flip: bool = False):
        super().__init__(x0, x1, y0, y1, k, material, flip)

class XZRect(AxisAlignedRect):
    """Rectangle in the plane y = k."""
    axis, a_axis, b_axis = 1, 0, 2

    def __init__(self, x0: float, x1: float, z0: float, z1: float, k: float, material,
                 flip: bool = False):
        super().__init__(x0, x1, z0, z1, k, material, flip)

class YZRect(AxisAlignedRect):
    """Rectangle in the plane x = k."""
    axis, a_axis, b_axis = 0, 1, 2

    def __init__(self, y0: float, y1: float, z0: float, z1: float, k: float, material,
                 flip: bool = False):
        super().__init__(y0, y1, z0, z1, k, material, flip)
