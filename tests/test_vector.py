"""Unit tests for vector arithmetic and random sampling helpers.

Tests cover:
- Arithmetic operators returning new values
- Dot, cross, length and normalization (including the zero vector)
- Random generators staying inside their domains
- Reflection and refraction helpers
"""

import math
import random

import numpy as np
import pytest

from core.utils import (
    random_in_range,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vector,
    reflect,
    reflectance,
    refract,
)
from core.vector import Color, Point3, Vector3


class TestVectorArithmetic:
    """Tests for Vector3 operators."""

    def test_add_sub_neg(self):
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert -a == Vector3(-1, -2, -3)

    def test_operators_return_new_values(self):
        a = Vector3(1, 2, 3)
        b = a + Vector3(1, 1, 1)
        assert a == Vector3(1, 2, 3)
        assert b is not a

    def test_scalar_and_componentwise_multiply(self):
        a = Vector3(1, 2, 3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)
        assert a * Vector3(2, 0, -1) == Vector3(2, 0, -3)
        assert a / 2 == Vector3(0.5, 1, 1.5)

    def test_numpy_scalar_multiply_stays_vector(self):
        result = np.float64(2.0) * Vector3(1, 2, 3)
        assert isinstance(result, Vector3)
        assert result == Vector3(2, 4, 6)

    def test_indexing(self):
        a = Vector3(7, 8, 9)
        assert (a[0], a[1], a[2]) == (7, 8, 9)
        assert list(a) == [7, 8, 9]
        with pytest.raises(IndexError):
            a[3]

    def test_dot_and_cross(self):
        x = Vector3(1, 0, 0)
        y = Vector3(0, 1, 0)
        assert x.dot(y) == 0
        assert x.cross(y) == Vector3(0, 0, 1)
        assert y.cross(x) == Vector3(0, 0, -1)

    def test_length(self):
        v = Vector3(3, 4, 0)
        assert v.length_squared() == 25
        assert v.length() == 5

    def test_normalize(self):
        n = Vector3(0, 3, 4).normalize()
        assert abs(n.length() - 1.0) < 1e-12
        assert n == Vector3(0, 0.6, 0.8)

    def test_normalize_zero_vector_is_zero(self):
        assert Vector3(0, 0, 0).normalize() == Vector3(0, 0, 0)

    def test_aliases_are_same_type(self):
        assert Point3 is Vector3
        assert Color is Vector3


class TestRandomSampling:
    """Random helpers draw from the documented domains."""

    def test_random_vector_in_unit_cube(self, rng):
        for _ in range(200):
            v = random_vector(rng)
            assert all(0.0 <= c < 1.0 for c in v)

    def test_random_in_range(self, rng):
        for _ in range(200):
            v = random_in_range(rng, -2.0, 3.0)
            assert all(-2.0 <= c <= 3.0 for c in v)

    def test_random_in_unit_sphere(self, rng):
        for _ in range(200):
            assert random_in_unit_sphere(rng).length_squared() < 1.0

    def test_random_unit_vector_has_unit_length(self, rng):
        for _ in range(200):
            assert abs(random_unit_vector(rng).length() - 1.0) < 1e-9

    def test_random_unit_vector_is_unbiased(self):
        rng = random.Random(99)
        n = 20000
        total = Vector3(0, 0, 0)
        for _ in range(n):
            total = total + random_unit_vector(rng)
        mean = total / n
        assert mean.length() < 0.03

    def test_random_in_unit_disk(self, rng):
        for _ in range(200):
            p = random_in_unit_disk(rng)
            assert p.z == 0
            assert p.length_squared() < 1.0

    def test_seeded_streams_repeat(self):
        a = [random_unit_vector(random.Random(5)) for _ in range(3)]
        b = [random_unit_vector(random.Random(5)) for _ in range(3)]
        assert a == b


class TestOptics:
    """Tests for reflect/refract/reflectance."""

    def test_reflect(self):
        v = Vector3(1, -1, 0)
        n = Vector3(0, 1, 0)
        assert reflect(v, n) == Vector3(1, 1, 0)

    def test_refract_normal_incidence_passes_straight(self):
        out = refract(Vector3(0, -1, 0), Vector3(0, 1, 0), 1 / 1.5)
        assert abs(out.x) < 1e-12
        assert abs(out.y + 1.0) < 1e-12

    def test_refract_bends_toward_normal(self):
        incoming = Vector3(1, -1, 0).normalize()
        out = refract(incoming, Vector3(0, 1, 0), 1 / 1.5)
        sin_in = incoming.x
        sin_out = out.x / out.length()
        assert abs(sin_out - sin_in / 1.5) < 1e-9

    def test_reflectance_at_normal_incidence(self):
        assert abs(reflectance(1.0, 1.5) - 0.04) < 1e-12
        # Symmetric in the ratio and its inverse.
        assert abs(reflectance(1.0, 1 / 1.5) - 0.04) < 1e-12

    def test_reflectance_at_grazing_angle_is_one(self):
        assert math.isclose(reflectance(0.0, 1.5), 1.0)
