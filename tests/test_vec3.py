"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from sphereglow.vec3 import Vec3, Point3, Color


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert v.x == 0.0
        assert v.y == 0.0
        assert v.z == 0.0

    def test_value_constructor(self):
        v = Vec3(1.0, 2.0, 3.0)
        assert v.x == 1.0
        assert v.y == 2.0
        assert v.z == 3.0

    def test_from_array(self):
        v = Vec3.from_array(np.array([1.0, 2.0, 3.0]))
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)

    def test_iteration(self):
        assert list(Vec3(1, 2, 3)) == [1.0, 2.0, 3.0]


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        neg = -Vec3(1, 2, 3)
        assert (neg.x, neg.y, neg.z) == (-1, -2, -3)

    def test_addition(self):
        result = Vec3(1, 2, 3) + Vec3(4, 5, 6)
        assert (result.x, result.y, result.z) == (5, 7, 9)

    def test_subtraction(self):
        result = Vec3(4, 5, 6) - Vec3(1, 2, 3)
        assert (result.x, result.y, result.z) == (3, 3, 3)

    def test_multiplication_vector(self):
        result = Vec3(1, 2, 3) * Vec3(2, 3, 4)
        assert (result.x, result.y, result.z) == (2, 6, 12)

    def test_scalar_on_left(self):
        result = 2 * Vec3(1, 2, 3)
        assert (result.x, result.y, result.z) == (2, 4, 6)

    def test_division(self):
        result = Vec3(2, 4, 6) / 2
        assert (result.x, result.y, result.z) == (1, 2, 3)

    def test_operations_do_not_mutate(self):
        v = Vec3(1, 2, 3)
        _ = v * 5 + Vec3(1, 1, 1)
        assert v == Vec3(1, 2, 3)


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        assert Vec3(3, 4, 0).length() == 5.0

    def test_length_squared(self):
        assert Vec3(3, 4, 0).length_squared() == 25.0

    def test_normalize(self):
        n = Vec3(3, 4, 0).normalize()
        assert abs(n.length() - 1.0) < 1e-10

    def test_normalize_zero_vector(self):
        assert Vec3(0, 0, 0).normalize().length() == 0.0

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0

    def test_reflect(self):
        incoming = Vec3(1, -1, 0).normalize()
        reflected = incoming.reflect(Vec3(0, 1, 0))
        expected = Vec3(1, 1, 0).normalize()
        assert abs(reflected.x - expected.x) < 1e-10
        assert abs(reflected.y - expected.y) < 1e-10

    def test_reflect_head_on(self):
        assert Vec3(0, 0, 1).reflect(Vec3(0, 0, -1)) == Vec3(0, 0, -1)

    def test_max_component(self):
        assert Vec3(0.2, 0.9, 0.5).max_component() == 0.9


class TestVec3Shading:
    """Test GLSL-style shading helpers."""

    def test_clamp(self):
        clamped = Vec3(-0.5, 0.5, 1.5).clamp(0, 1)
        assert (clamped.x, clamped.y, clamped.z) == (0, 0.5, 1)

    def test_mix_scalar(self):
        result = Vec3(0, 0, 0).mix(Vec3(2, 4, 6), 0.25)
        assert result == Vec3(0.5, 1.0, 1.5)

    def test_mix_endpoints(self):
        a = Vec3(1, 2, 3)
        b = Vec3(4, 5, 6)
        assert a.mix(b, 0.0) == a
        assert a.mix(b, 1.0) == b

    def test_mix_per_component(self):
        result = Vec3(1, 1, 1).mix(Vec3(5, 5, 5), Vec3(0, 1, 0.5))
        assert result == Vec3(1, 5, 3)

    def test_pow(self):
        assert Vec3(4, 9, 16).pow(0.5) == Vec3(2, 3, 4)
        assert Vec3(2, 2, 2).pow(Vec3(1, 2, 3)) == Vec3(2, 4, 8)

    def test_less_than(self):
        assert Vec3(0.001, 0.5, 0.0031308).less_than(0.0031308) == Vec3(1, 0, 0)

    def test_near_zero(self):
        assert Vec3(1e-10, 1e-10, 1e-10).near_zero()
        assert not Vec3(1, 0, 0).near_zero()

    def test_is_finite(self):
        assert Vec3(1, 2, 3).is_finite()
        assert not Vec3(math.inf, 0, 0).is_finite()
        assert not Vec3(0, math.nan, 0).is_finite()

    def test_to_array_is_copy(self):
        v = Vec3(1, 2, 3)
        arr = v.to_array()
        arr[0] = 10
        assert v.x == 1


class TestVec3Spherical:
    """Test unit vectors built from spherical coordinates."""

    def test_poles(self):
        assert Vec3.from_spherical(1.0, 0.0) == Vec3(0, 0, 1)
        assert Vec3.from_spherical(-1.0, 1.3) == Vec3(0, 0, -1)

    def test_equator(self):
        v = Vec3.from_spherical(0.0, math.pi / 2)
        assert v == Vec3(0, 1, 0)

    @pytest.mark.parametrize("z,azimuth", [(0.3, 0.1), (-0.7, 2.5), (0.99, 5.0)])
    def test_unit_length(self, z, azimuth):
        assert abs(Vec3.from_spherical(z, azimuth).length() - 1.0) < 1e-12


class TestVec3Comparison:
    """Test Vec3 comparison operations."""

    def test_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1, 2, 3)

    def test_inequality(self):
        assert Vec3(1, 2, 3) != Vec3(1, 2, 4)

    def test_approximate_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1 + 1e-12, 2, 3)

    def test_aliases_are_same_type(self):
        assert Point3 is Vec3
        assert Color is Vec3


class TestVec3Indexing:
    """Test Vec3 indexing."""

    def test_getitem(self):
        v = Vec3(1, 2, 3)
        assert (v[0], v[1], v[2]) == (1, 2, 3)
