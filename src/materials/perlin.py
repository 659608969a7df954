# materials/perlin.py
"""
Gradient (Perlin) noise over precomputed random tables.

The per-point work runs in numba-compiled kernels over numpy tables; the
``Perlin`` class owns the tables and exposes the Python-facing API.
"""
import math
import random
from typing import Optional
import numpy as np
from numba import njit
from core.vector import Point3

POINT_COUNT = 256

@njit
def _noise(ranvec, perm_x, perm_y, perm_z, x, y, z):
    fi = math.floor(x)
    fj = math.floor(y)
    fk = math.floor(z)
    u = x - fi
    v = y - fj
    w = z - fk
    i = int(fi)
    j = int(fj)
    k = int(fk)

    # Hermite smoothing
    uu = u * u * (3.0 - 2.0 * u)
    vv = v * v * (3.0 - 2.0 * v)
    ww = w * w * (3.0 - 2.0 * w)

    accum = 0.0
    for di in range(2):
        for dj in range(2):
            for dk in range(2):
                h = perm_x[(i + di) & 255] ^ perm_y[(j + dj) & 255] ^ perm_z[(k + dk) & 255]
                gx = ranvec[h, 0]
                gy = ranvec[h, 1]
                gz = ranvec[h, 2]
                dot = gx * (u - di) + gy * (v - dj) + gz * (w - dk)
                accum += ((di * uu + (1 - di) * (1.0 - uu))
                          * (dj * vv + (1 - dj) * (1.0 - vv))
                          * (dk * ww + (1 - dk) * (1.0 - ww))
                          * dot)
    return accum

@njit
def _turbulence(ranvec, perm_x, perm_y, perm_z, x, y, z, depth):
    accum = 0.0
    weight = 1.0
    for _ in range(depth):
        accum += weight * _noise(ranvec, perm_x, perm_y, perm_z, x, y, z)
        weight *= 0.5
        x *= 2.0
        y *= 2.0
        z *= 2.0
    return abs(accum)

def _generate_perm(rng: random.Random) -> np.ndarray:
    p = list(range(POINT_COUNT))
    # Fisher-Yates: every index, including 0, can end up anywhere.
    for i in range(POINT_COUNT - 1, 0, -1):
        target = rng.randint(0, i)
        p[i], p[target] = p[target], p[i]
    return np.array(p, dtype=np.int64)

class Perlin:
    """
    Perlin noise generator: 256 random unit gradient vectors plus three
    independent permutations used to hash lattice coordinates.

    Tables are fixed at construction, so noise() is a pure function of the
    point for a given instance.
    """
    def __init__(self, rng: Optional[random.Random] = None):
        if rng is None:
            rng = random.Random()
        ranvec = np.empty((POINT_COUNT, 3), dtype=np.float64)
        for n in range(POINT_COUNT):
            while True:
                g = np.array([rng.uniform(-1.0, 1.0) for _ in range(3)])
                length = math.sqrt(float(g @ g))
                if length > 1e-8:
                    break
            ranvec[n] = g / length
        self.ranvec = ranvec
        self.perm_x = _generate_perm(rng)
        self.perm_y = _generate_perm(rng)
        self.perm_z = _generate_perm(rng)

    def noise(self, p: Point3) -> float:
        """Gradient noise at p, roughly in [-1, 1]."""
        return float(_noise(self.ranvec, self.perm_x, self.perm_y, self.perm_z,
                            float(p.x), float(p.y), float(p.z)))

    def turbulence(self, p: Point3, depth: int = 7) -> float:
        """Absolute value of a sum of ``depth`` octaves of noise with halving weights."""
        return float(_turbulence(self.ranvec, self.perm_x, self.perm_y, self.perm_z,
                                 float(p.x), float(p.y), float(p.z), depth))
