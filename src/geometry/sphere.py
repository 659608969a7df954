# geometry/sphere.py
import math
from typing import Optional, Tuple
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord
from core.aabb import AABB

def get_sphere_uv(p: Vector3) -> Tuple[float, float]:
    """
    Maps a point on the unit sphere to (u, v) longitude/latitude coordinates.

    u runs from 0 at -X around through +Z, and v from 0 at the south pole
    (Y = -1) to 1 at the north pole.
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi

def solve_sphere(center: Vector3, radius: float, ray: Ray) -> Tuple[float, float, float]:
    """
    Returns (a, half_b, discriminant) of the ray/sphere quadratic.
    """
    oc = ray.origin - center
    a = ray.direction.length_squared()
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius
    return a, half_b, half_b * half_b - a * c

def hit_sphere(center: Vector3, radius: float, material, ray: Ray,
               t_min: float, t_max: float) -> Optional[HitRecord]:
    a, half_b, discriminant = solve_sphere(center, radius, ray)
    if discriminant <= 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root <= t_min or root >= t_max:
        root = (-half_b + sqrt_disc) / a
        if root <= t_min or root >= t_max:
            return None

    rec = HitRecord()
    rec.t = root
    rec.p = ray.at(rec.t)
    outward_normal = (rec.p - center) / radius
    rec.set_face_normal(ray, outward_normal)
    rec.u, rec.v = get_sphere_uv(outward_normal)
    rec.material = material
    return rec

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)  # negative radii model hollow shells
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"
