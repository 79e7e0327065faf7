import logging
import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from pygeom3 import Matrix3, Quaternion, Vector3

tol = 1e-9  # tolerance

a = Quaternion(1, 2, 3, 4)
b = Quaternion(0, 1, 0, 0)


def random_unit(rng):
    return Quaternion.create_unit(*rng.normal(size=4))


def test_arithmetic():
    assert a * 2 == Quaternion(2, 4, 6, 8)
    assert 2 * a == a * 2
    assert a / 2 == Quaternion(0.5, 1, 1.5, 2)
    assert -a == Quaternion(-1, -2, -3, -4)
    with pytest.raises(TypeError):
        a * Vector3.unit_x


def test_product():
    i = Quaternion(1, 0, 0, 0)
    j = Quaternion(0, 1, 0, 0)
    k = Quaternion(0, 0, 1, 0)
    assert i * j == k
    assert j * k == i
    assert k * i == j
    assert j * i == -k
    assert i * i == Quaternion(0, 0, 0, -1)
    assert a * Quaternion.identity == a


def test_product_matches_matrix_product(rng):
    for _ in range(20):
        p = random_unit(rng)
        q = random_unit(rng)
        assert (p * q).to_matrix().is_close(p.to_matrix() * q.to_matrix())


def test_norm_unit():
    q = Quaternion(0, 0, 3, 4)
    assert q.norm_squared == 25.0
    assert q.norm == 5.0
    assert not q.is_unit
    assert q.unit.is_close(Quaternion(0, 0, 0.6, 0.8))
    assert q.unit.is_unit
    assert Quaternion.identity.unit is Quaternion.identity


def test_create_unit(rng):
    for _ in range(10):
        assert abs(random_unit(rng).norm - 1) < tol
    assert all(math.isnan(c) for c in Quaternion.create_unit(0, 0, 0, 0))


def test_inv():
    assert (a * a.inv).is_close(Quaternion.identity)
    assert (a.inv * a).is_close(Quaternion.identity)
    assert a.conjugate == Quaternion(-1, -2, -3, 4)
    q = Quaternion.create_rotation(Vector3(1, 1, 0), 0.4)
    assert q.inv.is_close(q.conjugate)


def test_close_equivalent():
    p = Quaternion(1, 0, 0, 0)
    q = Quaternion(-1, 0, 0, 0)
    assert p.is_equivalent(q)
    assert not p.is_close(q)
    assert not p.is_equivalent(Quaternion(0, 1, 0, 0))
    assert a.is_close(Quaternion(1, 2, 3, 4 + 1e-12))


def test_identity():
    assert Quaternion.identity.to_matrix().is_close(Matrix3.identity)
    assert Quaternion.identity.angle == 0.0
    assert Quaternion.identity.axis is None


def test_to_matrix_normalizes():
    assert (a * 3).to_matrix().is_close(a.to_matrix())
    assert a.to_matrix().is_orthogonal


def test_to_matrix_matches_scipy(rng):
    for _ in range(20):
        q = random_unit(rng)
        expected = Rotation.from_quat(q.to_array()).as_matrix()
        np.testing.assert_allclose(q.to_matrix().to_array(), expected, atol=tol)


def test_create_rotation_matches_matrix(rng):
    for _ in range(20):
        axis = Vector3.random(rng) * 10
        theta = rng.uniform(-2 * math.pi, 2 * math.pi)
        q = Quaternion.create_rotation(axis, theta)
        assert q.is_unit
        assert q.to_matrix().is_close(Matrix3.create_rotation(axis, theta))


def test_create_rotation_zero_axis(caplog):
    with caplog.at_level(logging.DEBUG, logger='pygeom3.quat'):
        assert Quaternion.create_rotation(Vector3.zero, 1.0) is None
    assert 'axis is zero' in caplog.text


def test_angle_axis():
    q = Quaternion.create_rotation(Vector3(0, 0, 2), 0.5)
    assert abs(q.angle - 0.5) < tol
    assert q.axis.is_close(Vector3.unit_z)
    q = Quaternion.create_rotation(Vector3(1, -1, 1), 2.0)
    assert abs(q.angle - 2.0) < tol
    assert q.axis.is_close(Vector3(1, -1, 1).unit)
    # a negative angle flips the axis
    q = Quaternion.create_rotation(Vector3.unit_y, -1.0)
    assert abs(q.angle - 1.0) < tol
    assert q.axis.is_close(-Vector3.unit_y)


def test_axis_small_angle():
    for theta in [1e-6, 1e-8, -1e-7]:
        q = Quaternion.create_rotation(Vector3.unit_z, theta)
        expected = Vector3.unit_z if theta > 0 else -Vector3.unit_z
        assert q.axis.is_close(expected)
        assert abs(q.axis.length - 1) < tol


def test_to_matrix_unit_within_tolerance():
    q = Quaternion(0, 0, 0, 1 + 4e-11)
    assert q.is_unit
    m = q.to_matrix()
    assert m.is_orthogonal
    assert Quaternion.create_from_matrix(m).is_equivalent(Quaternion.identity)

    q = Quaternion.create_rotation(Vector3(1, 2, 3), 0.8) * (1 + 4e-11)
    assert q.is_unit
    p = Quaternion.create_from_matrix(q.to_matrix())
    assert p is not None
    assert p.is_equivalent(q.unit)


def test_create_from_matrix_negative_radicand():
    # orthogonal within tolerance, but 1 - m11 - m22 + m33 and
    # 1 + m11 + m22 + m33 are slightly below zero
    m = Matrix3(
        1, 0, 0,
        0, -1, 0,
        0, 0, -1 - 1e-12)
    assert m.is_orthogonal
    assert 1 + m.m11 + m.m22 + m.m33 < 0
    q = Quaternion.create_from_matrix(m)
    assert q.is_equivalent(Quaternion(1, 0, 0, 0))
    assert q.x > 0


def test_rotate():
    q = Quaternion.create_rotation(Vector3.unit_z, math.pi / 2)
    assert q.rotate(Vector3.unit_x).is_close(Vector3.unit_y)


@pytest.mark.parametrize('axis', [Vector3.unit_x, Vector3.unit_y, Vector3.unit_z])
def test_create_from_matrix_half_turn(axis):
    # half turns make x, y or z the largest component
    q = Quaternion.create_rotation(axis, math.pi)
    assert Quaternion.create_from_matrix(q.to_matrix()).is_equivalent(q)


def test_create_from_matrix_identity():
    q = Quaternion.create_from_matrix(Matrix3.identity)
    assert q.is_close(Quaternion.identity)


def test_create_from_matrix_round_trip(rng):
    for _ in range(50):
        q = random_unit(rng)
        p = Quaternion.create_from_matrix(q.to_matrix())
        assert p is not None
        assert p.is_equivalent(q)


def test_create_from_matrix_matches_scipy(rng):
    for _ in range(20):
        r = Matrix3.create_rotation(Vector3.random(rng), rng.uniform(-math.pi, math.pi))
        q = Quaternion.create_from_matrix(r)
        expected = Quaternion.from_array(Rotation.from_matrix(r.to_array()).as_quat())
        assert q.is_equivalent(expected)


def test_create_from_matrix_not_orthogonal(caplog):
    with caplog.at_level(logging.DEBUG, logger='pygeom3.quat'):
        assert Quaternion.create_from_matrix(Matrix3.create_scale(Vector3.unit_x, 2.0)) is None
    assert 'not orthogonal' in caplog.text
    assert Quaternion.create_from_matrix(Matrix3.zero) is None


def test_vector():
    assert a.vector == Vector3(1, 2, 3)
    assert Quaternion.from_vector(Vector3(1, 2, 3), 4) == a


def test_conversions():
    x, y, z, w = a
    assert (x, y, z, w) == (1.0, 2.0, 3.0, 4.0)
    assert a.to_list() == [1.0, 2.0, 3.0, 4.0]
    assert Quaternion.from_array(a.to_array()) == a
    assert hash(Quaternion(1, 2, 3, 4)) == hash(a)
    with pytest.raises(AssertionError):
        Quaternion.from_array([1, 2, 3])


def test_str():
    assert str(Quaternion.identity) == '[0.00000000 0.00000000 0.00000000 1.00000000]'
    assert repr(b) == 'Quaternion(0.0, 1.0, 0.0, 0.0)'
