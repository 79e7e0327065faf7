"""
A module for quaternions.

A quaternion (x, y, z, w) has imaginary part (x, y, z) and real part w.
Unit quaternions represent rotations, q and -q represent the same
rotation. The product follows the Hamilton convention, so that
(a * b).to_matrix() matches a.to_matrix() * b.to_matrix().
"""
import logging
import math
import numbers
from functools import cached_property
from typing import Optional

import numpy as np

from . import util
from .matrix3 import Matrix3
from .vector3 import Vector3

logger = logging.getLogger(__name__)


class Quaternion:

    def __init__(self, x: float, y: float, z: float, w: float):
        self._q = (float(x), float(y), float(z), float(w))

    x = property(lambda self: self._q[0])
    y = property(lambda self: self._q[1])
    z = property(lambda self: self._q[2])
    w = property(lambda self: self._q[3])

    @classmethod
    def from_vector(cls, vec: Vector3, w: float) -> 'Quaternion':
        return cls(vec.x, vec.y, vec.z, w)

    @cached_property
    def vector(self) -> Vector3:
        """The imaginary part."""
        return Vector3(self.x, self.y, self.z)

    @cached_property
    def norm_squared(self) -> float:
        return sum(c * c for c in self._q)

    @cached_property
    def is_unit(self) -> bool:
        return util.is_close(self.norm_squared, 1.0)

    @cached_property
    def norm(self) -> float:
        return math.sqrt(self.norm_squared)

    @cached_property
    def unit(self) -> 'Quaternion':
        return self if self.is_unit else self / self.norm

    @cached_property
    def conjugate(self) -> 'Quaternion':
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    @cached_property
    def inv(self) -> 'Quaternion':
        """
        The multiplicative inverse, q * q.inv is the identity also for
        quaternions that are not unit.
        """
        return self.conjugate / self.norm_squared

    @cached_property
    def angle(self) -> float:
        """The rotation angle in radians, in [0, 2 pi]."""
        return 2 * math.acos(util.clip_unit(self.unit.w))

    @cached_property
    def axis(self) -> Optional[Vector3]:
        """
        The unit rotation axis.
        :return: The axis, None when the quaternion is not a rotation
            (sin of the half angle is zero) and the axis is undefined.
        """
        q = self / self.norm
        sin_half = q.vector.length
        if util.is_close(sin_half, 0.0):
            logger.debug('rotation angle is zero, axis is undefined')
            return None
        return q.vector / sin_half

    def __neg__(self) -> 'Quaternion':
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, other):
        """
        The Hamilton product with a quaternion, or scaling by a real number.
        :param other: Quaternion or a real number
        :return: The product
        """
        if isinstance(other, Quaternion):
            x1, y1, z1, w1 = self._q
            x2, y2, z2, w2 = other._q
            return Quaternion(
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2)
        if isinstance(other, numbers.Real):
            return Quaternion(*(other * c for c in self._q))
        return NotImplemented

    def __rmul__(self, k: float) -> 'Quaternion':
        if not isinstance(k, numbers.Real):
            return NotImplemented
        return self * k

    def __truediv__(self, k: float) -> 'Quaternion':
        if not isinstance(k, numbers.Real):
            return NotImplemented
        return Quaternion(*(util.divide(c, k) for c in self._q))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self._q == other._q

    def __hash__(self):
        return hash((Quaternion,) + self._q)

    def __iter__(self):
        return iter(self._q)

    def is_close(self, other: 'Quaternion') -> bool:
        return all(util.is_close(a, b) for a, b in zip(self._q, other._q))

    def is_equivalent(self, other: 'Quaternion') -> bool:
        """True if both quaternions represent the same rotation."""
        return self.is_close(other) or self.is_close(-other)

    def to_matrix(self) -> Matrix3:
        """
        Converts to a rotation matrix, the quaternion is normalized first.
        :return: The rotation matrix.
        """
        # self.unit skips quaternions that are unit within eps
        x, y, z, w = self / self.norm
        return Matrix3(
            x * x - y * y - z * z + w * w, 2 * (x * y - z * w), 2 * (x * z + y * w),
            2 * (x * y + z * w), -x * x + y * y - z * z + w * w, 2 * (y * z - x * w),
            2 * (x * z - y * w), 2 * (y * z + x * w), -x * x - y * y + z * z + w * w)

    def rotate(self, vec: Vector3) -> Vector3:
        return self.to_matrix() * vec

    def to_list(self):
        return list(self._q)

    def to_array(self) -> np.ndarray:
        return np.array(self._q, dtype=np.float64)

    @classmethod
    def from_array(cls, a) -> 'Quaternion':
        a = np.asarray(a, dtype=np.float64).reshape(-1)
        assert a.shape == (4,)
        return cls(*a)

    def __str__(self):
        return '[' + ' '.join(util.format_elements(self._q)) + ']'

    def __repr__(self):
        return 'Quaternion({})'.format(', '.join(repr(c) for c in self._q))

    @classmethod
    def create_unit(cls, x: float, y: float, z: float, w: float) -> 'Quaternion':
        norm = math.sqrt(x * x + y * y + z * z + w * w)
        return cls(util.divide(x, norm), util.divide(y, norm), util.divide(z, norm), util.divide(w, norm))

    @classmethod
    def create_rotation(cls, axis: Vector3, theta: float) -> Optional['Quaternion']:
        """
        The rotation about an axis.
        :param axis: The rotation axis, need not be unit.
        :param theta: The rotation angle in radians, right handed.
        :return: The unit quaternion, None if the axis is zero.
        """
        if axis.is_close(Vector3.zero):
            logger.debug('rotation axis is zero, no rotation quaternion')
            return None
        s = math.sin(theta / 2)
        return cls.from_vector(axis.unit * s, math.cos(theta / 2))

    # noinspection PyPep8Naming
    @classmethod
    def create_from_matrix(cls, R: Matrix3) -> Optional['Quaternion']:
        """
        Converts a rotation matrix to a quaternion.

        Each of the four components can be found from the diagonal, the
        largest one is used and the other three follow from the off
        diagonal entries divided by it, which keeps the divisor away from
        zero.
        :param R: The rotation matrix.
        :return: The quaternion, None if R is not orthogonal.
        """
        if not R.is_orthogonal:
            logger.debug('matrix is not orthogonal, no rotation quaternion')
            return None
        (m11, m12, m13), (m21, m22, m23), (m31, m32, m33) = R.to_list()
        b = [
            util.safe_sqrt(1.0 + m11 - m22 - m33) / 2,
            util.safe_sqrt(1.0 - m11 + m22 - m33) / 2,
            util.safe_sqrt(1.0 - m11 - m22 + m33) / 2,
            util.safe_sqrt(1.0 + m11 + m22 + m33) / 2,
        ]
        i = max(range(4), key=b.__getitem__)
        d = 4 * b[i]
        if i == 0:
            return cls(b[0], (m21 + m12) / d, (m31 + m13) / d, (m32 - m23) / d)
        elif i == 1:
            return cls((m21 + m12) / d, b[1], (m23 + m32) / d, (m13 - m31) / d)
        elif i == 2:
            return cls((m13 + m31) / d, (m23 + m32) / d, b[2], (m21 - m12) / d)
        else:
            return cls((m32 - m23) / d, (m13 - m31) / d, (m21 - m12) / d, b[3])


Quaternion.identity = Quaternion(0.0, 0.0, 0.0, 1.0)
