"""
===============================================================================
ATTITUDE - Vector and Matrix Test Suite
===============================================================================
Tests for the Vec3 and Mat33 collaborators of the Quaternion class:
construction and defaulting, normalization of degenerate vectors, random
unit vectors, row-major matrix layout and matrix-vector products.
===============================================================================
"""

import copy
import os
import pickle
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from attitude.core.mat33 import Mat33
from attitude.core.vec3 import Vec3


# =============================================================================
# Test: Vec3
# =============================================================================

class TestVec3Construction:
    """Tests for Vec3 construction."""

    def test_default_is_zero(self):
        assert Vec3().to_array() == [0.0, 0.0, 0.0]

    def test_components(self):
        v = Vec3(1.0, -2.0, 3.5)
        assert (v.x, v.y, v.z) == (1.0, -2.0, 3.5)

    @pytest.mark.parametrize("values,expected", [
        ([], [0.0, 0.0, 0.0]),
        ([4.0], [4.0, 0.0, 0.0]),
        ([4.0, 5.0], [4.0, 5.0, 0.0]),
        ([4.0, 5.0, 6.0, 7.0], [4.0, 5.0, 6.0]),
    ])
    def test_from_array(self, values, expected):
        assert Vec3.from_array(values).to_array() == expected

    def test_immutable(self):
        v = Vec3(1.0, 2.0, 3.0)
        with pytest.raises(AttributeError):
            v.x = 0.0

    def test_copy_and_pickle(self):
        v = Vec3(1.0, -2.0, 3.5)
        for clone in (copy.copy(v), copy.deepcopy(v), pickle.loads(pickle.dumps(v))):
            assert clone == v
            with pytest.raises(AttributeError):
                clone.x = 0.0


class TestVec3Algebra:
    """Tests for Vec3 length, normalization, dot and cross products."""

    def test_length(self):
        assert Vec3(3.0, 0.0, 4.0).length() == 5.0

    def test_normalize(self):
        assert_allclose(Vec3(3.0, 0.0, 4.0).normalize().to_array(), [0.6, 0.0, 0.8],
                        atol=1e-15)

    def test_normalize_zero_is_zero(self):
        """Zero vectors normalize to the zero vector, never NaN."""
        assert Vec3().normalize() == Vec3()

    def test_dot(self):
        assert Vec3(1.0, 2.0, 3.0).dot(Vec3(4.0, -5.0, 6.0)) == 12.0

    def test_cross(self):
        assert Vec3(1.0, 0.0, 0.0).cross(Vec3(0.0, 1.0, 0.0)) == Vec3(0.0, 0.0, 1.0)

    def test_equals_epsilon(self):
        a = Vec3(1.0, 2.0, 3.0)
        assert a.equals(Vec3(1.0, 2.0, 3.0005), 0.001)
        assert not a.equals(Vec3(1.0, 2.0, 3.0005))

    def test_str(self):
        assert str(Vec3(1.0, 2.0, 3.0)) == "1.0, 2.0, 3.0"


class TestVec3Random:
    """Tests for random unit vectors."""

    def test_random_is_unit(self):
        rng = np.random.default_rng(11)
        for _ in range(20):
            assert_allclose(Vec3.random(rng).length(), 1.0, atol=1e-14)

    def test_random_is_reproducible(self):
        assert Vec3.random(np.random.default_rng(9)) == Vec3.random(np.random.default_rng(9))

    def test_random_covers_sphere(self):
        """The mean of many samples is close to the origin."""
        rng = np.random.default_rng(2024)
        samples = np.array([Vec3.random(rng).to_array() for _ in range(4000)])
        assert_allclose(samples.mean(axis=0), np.zeros(3), atol=0.05)


# =============================================================================
# Test: Mat33
# =============================================================================

class TestMat33:
    """Tests for the row-major 3x3 matrix."""

    def test_default_is_identity(self):
        assert Mat33().to_array() == [1, 0, 0, 0, 1, 0, 0, 0, 1]
        assert Mat33.identity() == Mat33()

    def test_row_major_layout(self):
        m = Mat33([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert m.row(0).to_array() == [1.0, 2.0, 3.0]
        assert m.col(0).to_array() == [1.0, 4.0, 7.0]
        assert m[1, 2] == 6.0

    @pytest.mark.parametrize("values", [[], [1.0] * 8, [1.0] * 10])
    def test_wrong_length_raises(self, values):
        with pytest.raises(ValueError):
            Mat33(values)

    def test_mult_vector(self):
        m = Mat33([0, -1, 0, 1, 0, 0, 0, 0, 1])
        assert m.mult_vector(Vec3(1.0, 0.0, 0.0)) == Vec3(0.0, 1.0, 0.0)

    def test_mult(self):
        a = Mat33([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert a.mult(Mat33.identity()) == a
        assert_allclose(a.mult(a).as_ndarray(), a.as_ndarray() @ a.as_ndarray())

    def test_transpose(self):
        m = Mat33([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert m.transpose().to_array() == [1, 4, 7, 2, 5, 8, 3, 6, 9]

    def test_determinant(self):
        assert_allclose(Mat33([2, 0, 0, 0, 3, 0, 0, 0, 4]).determinant(), 24.0)

    def test_equals_epsilon(self):
        a = Mat33()
        b = Mat33([1.0, 0.0, 0.0, 0.0, 1.0, 1e-6, 0.0, 0.0, 1.0])
        assert a.equals(b, 1e-5)
        assert not a.equals(b)

    def test_immutable(self):
        m = Mat33()
        with pytest.raises(ValueError):
            m._m[0, 0] = 2.0
        copy = m.as_ndarray()
        copy[0, 0] = 2.0
        assert m[0, 0] == 1.0

    def test_copy_and_pickle(self):
        m = Mat33([1, 2, 3, 4, 5, 6, 7, 8, 9])
        for clone in (copy.copy(m), copy.deepcopy(m), pickle.loads(pickle.dumps(m))):
            assert clone == m
            with pytest.raises(ValueError):
                clone._m[0, 0] = 0.0

    def test_index_row(self):
        m = Mat33([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert m[0] == Vec3(1.0, 2.0, 3.0)
        assert m[np.int64(2)] == m.row(2)
        assert m[-1] == Vec3(7.0, 8.0, 9.0)

    @pytest.mark.parametrize("index", ['0', 1.5, (0, 1, 2), slice(0, 2)])
    def test_index_invalid(self, index):
        with pytest.raises(TypeError):
            Mat33()[index]
