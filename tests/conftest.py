"""Pytest configuration for renderer tests.

Provides seeded random streams and a few small scenes shared across modules.
"""

import random

import pytest

from core.vector import Color, Point3
from geometry.hittable import HitRecord
from geometry.sphere import Sphere
from materials.lambertian import Lambertian


class FixedRandom:
    """Stand-in RNG whose random() always returns the same value.

    Used to force a particular branch in materials that draw one number.
    """

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, a, b):
        return a + (b - a) * self.value


@pytest.fixture
def rng():
    """A seeded random stream so each test is reproducible."""
    return random.Random(1234)


@pytest.fixture
def red_sphere():
    """Unit sphere at the origin with a solid red diffuse surface."""
    return Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color(1.0, 0.0, 0.0)))


def make_record(point, normal, front_face=True, material=None):
    """Build a HitRecord by hand for material tests."""
    return HitRecord(p=point, normal=normal, t=1.0, front_face=front_face, material=material)
