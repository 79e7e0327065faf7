"""
A module for 3x3 matrices.

Besides the usual algebra, a matrix tracks whether it is orthogonal. The
check is made at most once per matrix, and matrices built from known
orthogonal ones (transpose, products, rotations, coordinate systems)
carry the answer along instead of checking again. For an orthogonal
matrix the inverse is just the transpose.
"""
import enum
import logging
import math
import numbers
from functools import cached_property
from typing import Optional

import numpy as np

from . import util
from .vector3 import Vector3

logger = logging.getLogger(__name__)


class Orthogonality(enum.Enum):
    UNKNOWN = 0
    TRUE = 1
    FALSE = 2


class Matrix3:

    def __init__(self,
                 m11: float, m12: float, m13: float,
                 m21: float, m22: float, m23: float,
                 m31: float, m32: float, m33: float):
        self._m = tuple(float(m) for m in (m11, m12, m13, m21, m22, m23, m31, m32, m33))
        self._orthogonality = Orthogonality.UNKNOWN

    def _tag(self, orthogonality: Orthogonality) -> 'Matrix3':
        # only applied to matrices that were just created
        self._orthogonality = orthogonality
        return self

    m11 = property(lambda self: self._m[0])
    m12 = property(lambda self: self._m[1])
    m13 = property(lambda self: self._m[2])
    m21 = property(lambda self: self._m[3])
    m22 = property(lambda self: self._m[4])
    m23 = property(lambda self: self._m[5])
    m31 = property(lambda self: self._m[6])
    m32 = property(lambda self: self._m[7])
    m33 = property(lambda self: self._m[8])

    @cached_property
    def rows(self):
        m = self._m
        return Vector3(m[0], m[1], m[2]), Vector3(m[3], m[4], m[5]), Vector3(m[6], m[7], m[8])

    @cached_property
    def cols(self):
        m = self._m
        return Vector3(m[0], m[3], m[6]), Vector3(m[1], m[4], m[7]), Vector3(m[2], m[5], m[8])

    def row(self, i: int) -> Vector3:
        return self.rows[i]

    def col(self, i: int) -> Vector3:
        return self.cols[i]

    @cached_property
    def det(self) -> float:
        m11, m12, m13, m21, m22, m23, m31, m32, m33 = self._m
        return m11 * m22 * m33 + m12 * m23 * m31 + m13 * m21 * m32 \
            - m13 * m22 * m31 - m11 * m23 * m32 - m12 * m21 * m33

    @cached_property
    def T(self) -> 'Matrix3':
        m11, m12, m13, m21, m22, m23, m31, m32, m33 = self._m
        return Matrix3(
            m11, m21, m31,
            m12, m22, m32,
            m13, m23, m33)._tag(self._orthogonality)

    @property
    def orthogonality(self) -> Orthogonality:
        """
        The orthogonality of the matrix, checked on first access unless it
        was already known when the matrix was built.
        """
        if self._orthogonality is Orthogonality.UNKNOWN:
            self._orthogonality = Orthogonality.TRUE if self._check_orthogonal() else Orthogonality.FALSE
        return self._orthogonality

    @property
    def is_orthogonal(self) -> bool:
        return self.orthogonality is Orthogonality.TRUE

    def _check_orthogonal(self) -> bool:
        i, j, k = self.cols
        return i.is_unit and j.is_unit and k.is_unit \
            and util.is_close(i.dot(j), 0.0) and util.is_close(j.dot(k), 0.0) and util.is_close(k.dot(i), 0.0)

    @cached_property
    def inv(self) -> Optional['Matrix3']:
        """
        The inverse matrix, the transpose if the matrix is orthogonal.
        :return: The inverse, None if the matrix is singular.
        """
        if self.is_orthogonal:
            return self.T
        if util.is_close(self.det, 0.0):
            logger.debug('matrix is singular, det=%g', self.det)
            return None
        m11, m12, m13, m21, m22, m23, m31, m32, m33 = self._m
        return Matrix3(
            m22 * m33 - m32 * m23, -(m12 * m33 - m32 * m13), m12 * m23 - m22 * m13,
            -(m21 * m33 - m31 * m23), m11 * m33 - m31 * m13, -(m11 * m23 - m21 * m13),
            m21 * m32 - m31 * m22, -(m11 * m32 - m31 * m12), m11 * m22 - m21 * m12
        ) * (1 / self.det)

    def __add__(self, other: 'Matrix3') -> 'Matrix3':
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(*(a + b for a, b in zip(self._m, other._m)))

    def __sub__(self, other: 'Matrix3') -> 'Matrix3':
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(*(a - b for a, b in zip(self._m, other._m)))

    def __mul__(self, other):
        """
        Multiplies by a matrix, a vector or a scalar.
        :param other: Matrix3, Vector3 or a real number
        :return: Matrix3 for matrix and scalar operands, Vector3 for a vector
        """
        if isinstance(other, Matrix3):
            return self._product(other)
        if isinstance(other, Vector3):
            row1, row2, row3 = self.rows
            return Vector3(row1.dot(other), row2.dot(other), row3.dot(other))
        if isinstance(other, numbers.Real):
            return Matrix3(*(other * a for a in self._m))
        return NotImplemented

    def __rmul__(self, k: float) -> 'Matrix3':
        if not isinstance(k, numbers.Real):
            return NotImplemented
        return self * k

    def _product(self, other: 'Matrix3') -> 'Matrix3':
        row1, row2, row3 = self.rows
        col1, col2, col3 = other.cols
        a = self._orthogonality
        b = other._orthogonality
        if a is Orthogonality.TRUE and b is Orthogonality.TRUE:
            orthogonality = Orthogonality.TRUE
        elif {a, b} == {Orthogonality.TRUE, Orthogonality.FALSE}:
            orthogonality = Orthogonality.FALSE
        else:
            orthogonality = Orthogonality.UNKNOWN
        return Matrix3(
            row1.dot(col1), row1.dot(col2), row1.dot(col3),
            row2.dot(col1), row2.dot(col2), row2.dot(col3),
            row3.dot(col1), row3.dot(col2), row3.dot(col3))._tag(orthogonality)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self._m == other._m

    def __hash__(self):
        return hash((Matrix3,) + self._m)

    def __iter__(self):
        return iter(self.rows)

    def is_close(self, other: 'Matrix3') -> bool:
        return all(util.is_close(a, b) for a, b in zip(self._m, other._m))

    def to_list(self):
        return [list(self._m[0:3]), list(self._m[3:6]), list(self._m[6:9])]

    def to_array(self) -> np.ndarray:
        return np.array(self.to_list(), dtype=np.float64)

    @classmethod
    def from_array(cls, a) -> 'Matrix3':
        a = np.asarray(a, dtype=np.float64)
        assert a.shape == (3, 3)
        return cls(*a.reshape(-1))

    def __str__(self):
        strings = util.format_elements(self._m)
        rows = ['[' + ' '.join(strings[i:i + 3]) + ']' for i in range(0, 9, 3)]
        return '[' + '\n '.join(rows) + ']'

    def __repr__(self):
        return 'Matrix3({})'.format(', '.join(repr(m) for m in self._m))

    @classmethod
    def of_rows(cls, row1: Vector3, row2: Vector3, row3: Vector3) -> 'Matrix3':
        return cls(*row1, *row2, *row3)

    @classmethod
    def of_cols(cls, col1: Vector3, col2: Vector3, col3: Vector3) -> 'Matrix3':
        return cls(
            col1.x, col2.x, col3.x,
            col1.y, col2.y, col3.y,
            col1.z, col2.z, col3.z)

    @classmethod
    def random(cls, rng: np.random.Generator = None) -> 'Matrix3':
        """A matrix with each entry drawn uniformly from [-1, 1]."""
        if rng is None:
            rng = np.random.default_rng()
        return cls.of_rows(Vector3.random(rng), Vector3.random(rng), Vector3.random(rng))

    @classmethod
    def create_diag(cls, x: float, y: float, z: float) -> 'Matrix3':
        return cls(
            x, 0.0, 0.0,
            0.0, y, 0.0,
            0.0, 0.0, z)

    @classmethod
    def create_scale(cls, axis: Vector3, scale: float) -> 'Matrix3':
        """
        Scaling along a direction, leaving the perpendicular plane unchanged.
        :param axis: The scaling direction, need not be unit.
        :param scale: The scale factor.
        :return: The scaling matrix.
        """
        x, y, z = axis.unit
        s = scale - 1
        return cls(
            1 + s * x * x, s * x * y, s * z * x,
            s * x * y, 1 + s * y * y, s * y * z,
            s * z * x, s * y * z, 1 + s * z * z)

    @classmethod
    def create_csys(cls, i: Vector3, j: Vector3) -> 'Matrix3':
        """
        The coordinate system with x along i and y in the plane of i and j.
        :param i: The x direction.
        :param j: A direction in the xy plane, not parallel to i.
        :return: The orthogonal matrix with the unit axes as columns.
        """
        j_ortho = j - i.unit * i.unit.dot(j)
        k = i.unit.cross(j_ortho.unit)
        return cls.of_cols(i.unit, j_ortho.unit, k)._tag(Orthogonality.TRUE)

    @classmethod
    def create_rotation(cls, axis: Vector3, angle: float) -> Optional['Matrix3']:
        """
        Rotation about an axis, using Rodrigues' rotation formula.
        :param axis: The rotation axis, need not be unit.
        :param angle: The rotation angle in radians, right handed.
        :return: The rotation matrix, None if the axis is zero.
        """
        if axis.is_close(Vector3.zero):
            logger.debug('rotation axis is zero, no rotation matrix')
            return None
        x, y, z = axis.unit
        c = math.cos(angle)
        s = math.sin(angle)
        return cls(
            c + x * x * (1 - c), x * y * (1 - c) - z * s, z * x * (1 - c) + y * s,
            x * y * (1 - c) + z * s, c + y * y * (1 - c), y * z * (1 - c) - x * s,
            z * x * (1 - c) - y * s, y * z * (1 - c) + x * s, c + z * z * (1 - c)
        )._tag(Orthogonality.TRUE)


Matrix3.zero = Matrix3(
    0.0, 0.0, 0.0,
    0.0, 0.0, 0.0,
    0.0, 0.0, 0.0)._tag(Orthogonality.FALSE)

Matrix3.identity = Matrix3(
    1.0, 0.0, 0.0,
    0.0, 1.0, 0.0,
    0.0, 0.0, 1.0)._tag(Orthogonality.TRUE)
