# core/utils.py
"""
Sampling and optics helpers shared by the camera, materials and textures.

Every random helper takes an explicit ``rng`` (a ``random.Random``) so that
renders can be reproduced from a seed.
"""
import math
import random
from core.vector import Vector3

def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0

def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x

def random_vector(rng: random.Random) -> Vector3:
    """
    Returns a vector with each component uniform in [0, 1).
    """
    return Vector3(rng.random(), rng.random(), rng.random())

def random_in_range(rng: random.Random, lo: float, hi: float) -> Vector3:
    """
    Returns a vector with each component uniform in [lo, hi).
    """
    return Vector3(rng.uniform(lo, hi), rng.uniform(lo, hi), rng.uniform(lo, hi))

def random_in_unit_sphere(rng: random.Random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = random_in_range(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p

def random_unit_vector(rng: random.Random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).

    Uses the spherical parametrization z = cos(theta), phi uniform, which is
    exact and needs no rejection loop.
    """
    a = rng.uniform(0.0, 2.0 * math.pi)
    z = rng.uniform(-1.0, 1.0)
    r = math.sqrt(1.0 - z * z)
    return Vector3(r * math.cos(a), r * math.sin(a), z)

def random_in_unit_disk(rng: random.Random) -> Vector3:
    """Generate random point in unit disk for DOF."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0)
        if p.length_squared() < 1:
            return p

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts unit vector uv through a surface with normal n (Snell's law).
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel

def reflectance(cosine: float, ref_idx: float) -> float:
    """
    Schlick's approximation for angle-dependent reflectance.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)
