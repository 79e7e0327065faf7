"""
A module for 3 dimensional vectors.

Vectors are immutable, every operation returns a new vector. Derived
properties such as the length and the unit vector are computed on first
access and then cached.
"""
import math
import numbers
from functools import cached_property

import numpy as np

from . import util


class Vector3:

    def __init__(self, x: float, y: float, z: float):
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    @cached_property
    def length_squared(self) -> float:
        return self._x * self._x + self._y * self._y + self._z * self._z

    @cached_property
    def is_unit(self) -> bool:
        return util.is_close(self.length_squared, 1.0)

    @cached_property
    def is_finite(self) -> bool:
        return math.isfinite(self.length_squared)

    @cached_property
    def length(self) -> float:
        return math.sqrt(self.length_squared)

    @cached_property
    def unit(self) -> 'Vector3':
        """
        The unit vector in the same direction. A zero vector has no
        direction, its unit vector has nan components.
        """
        return self if self.is_unit else self / self.length

    def __neg__(self) -> 'Vector3':
        return Vector3(-self._x, -self._y, -self._z)

    def __add__(self, other: 'Vector3') -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self._x + other.x, self._y + other.y, self._z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self._x - other.x, self._y - other.y, self._z - other.z)

    def __mul__(self, k: float) -> 'Vector3':
        if not isinstance(k, numbers.Real):
            return NotImplemented
        return Vector3(k * self._x, k * self._y, k * self._z)

    def __rmul__(self, k: float) -> 'Vector3':
        return self.__mul__(k)

    def __truediv__(self, k: float) -> 'Vector3':
        if not isinstance(k, numbers.Real):
            return NotImplemented
        return Vector3(util.divide(self._x, k), util.divide(self._y, k), util.divide(self._z, k))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __hash__(self):
        return hash((Vector3, self._x, self._y, self._z))

    def __iter__(self):
        return iter((self._x, self._y, self._z))

    def dot(self, other: 'Vector3') -> float:
        return self._x * other.x + self._y * other.y + self._z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3(
            self._y * other.z - self._z * other.y,
            self._z * other.x - self._x * other.z,
            self._x * other.y - self._y * other.x)

    def is_close(self, other: 'Vector3') -> bool:
        return util.is_close(self._x, other.x) and util.is_close(self._y, other.y) \
            and util.is_close(self._z, other.z)

    def angle_to(self, other: 'Vector3') -> float:
        """
        The angle between two vectors.
        :param other: The other vector.
        :return: The angle in radians, in [0, pi].
        """
        return math.acos(util.clip_unit(self.unit.dot(other.unit)))

    def parallel_to(self, other: 'Vector3') -> 'Vector3':
        """
        The component of this vector parallel to other (the projection).
        :param other: The direction to project on, need not be unit.
        :return: The parallel component.
        """
        return other.unit * self.dot(other.unit)

    def perpendicular_to(self, other: 'Vector3') -> 'Vector3':
        """
        The component of this vector perpendicular to other (the rejection).
        :param other: The reference direction, need not be unit.
        :return: The perpendicular component.
        """
        return self - self.parallel_to(other)

    def to_list(self):
        return [self._x, self._y, self._z]

    def to_array(self) -> np.ndarray:
        return np.array(self.to_list(), dtype=np.float64)

    @classmethod
    def from_array(cls, a) -> 'Vector3':
        a = np.asarray(a, dtype=np.float64).reshape(-1)
        assert a.shape == (3,)
        return cls(a[0], a[1], a[2])

    @classmethod
    def random(cls, rng: np.random.Generator = None) -> 'Vector3':
        """
        A vector with each component drawn uniformly from [-1, 1].
        :param rng: The numpy random generator, a fresh one if None.
        :return: The random vector.
        """
        if rng is None:
            rng = np.random.default_rng()
        return cls(*rng.uniform(-1.0, 1.0, 3))

    def __str__(self):
        return '[' + '\n '.join(util.format_elements(self.to_list())) + ']'

    def __repr__(self):
        return 'Vector3({!r}, {!r}, {!r})'.format(self._x, self._y, self._z)


Vector3.zero = Vector3(0.0, 0.0, 0.0)
Vector3.unit_x = Vector3(1.0, 0.0, 0.0)
Vector3.unit_y = Vector3(0.0, 1.0, 0.0)
Vector3.unit_z = Vector3(0.0, 0.0, 1.0)
