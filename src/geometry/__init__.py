"""
Surfaces a ray can hit, and the BVH that accelerates searching them.

Participating media live in ``geometry.constant_medium``; it depends on the
materials package and is not re-exported here.
"""
from geometry.hittable import HitRecord, Hittable
from geometry.sphere import Sphere
from geometry.moving_sphere import MovingSphere
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.world import HittableList
from geometry.bvh import BVHConstructionError, BVHNode
from geometry.box import Box
from geometry.transforms import RotateY, Translate

__all__ = [
    "HitRecord",
    "Hittable",
    "Sphere",
    "MovingSphere",
    "XYRect",
    "XZRect",
    "YZRect",
    "HittableList",
    "BVHConstructionError",
    "BVHNode",
    "Box",
    "RotateY",
    "Translate",
]
