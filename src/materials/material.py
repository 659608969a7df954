# materials/material.py
import random
from typing import NamedTuple, Optional
from core.ray import Ray
from core.vector import Color, Point3
from geometry.hittable import HitRecord

BLACK = Color(0.0, 0.0, 0.0)

class ScatterResult(NamedTuple):
    attenuation: Color
    scattered: Ray

class Material:
    """
    Abstract material class. Subclasses must implement scatter(); emissive
    materials also override emitted().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Optional[ScatterResult]:
        """
        Computes the scattered ray and attenuation.
        Returns None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Point3) -> Color:
        return BLACK
