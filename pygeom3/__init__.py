"""
Vectors, quaternions and rotation matrices in 3 dimensions, in double precision.

vector3: 3 component vectors
matrix3: 3x3 matrices, orthogonality tracked and reused for inversion
quat: quaternions, converting to and from rotation matrices
util: the tolerance used for comparisons and text formatting
"""
from .util import is_close
from .vector3 import Vector3
from .matrix3 import Matrix3, Orthogonality
from .quat import Quaternion

__all__ = ['is_close', 'Vector3', 'Matrix3', 'Orthogonality', 'Quaternion']
