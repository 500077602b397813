"""Immutable 3-vectors, used as free vectors and as quaternion vector parts."""
from __future__ import annotations

import logging
import math
import numbers
from collections import namedtuple
from typing import Any, Optional

import numpy as np

from errors import ArgumentCountError

logger = logging.getLogger(__name__)


def _is_real(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


class Vec3(namedtuple('Vec3', 'x y z')):
    __slots__ = ()
    __array_ufunc__ = None

    def __new__(cls, *args):
        if len(args) == 3:
            x, y, z = args
        elif len(args) == 1 and not _is_real(args[0]):
            try:
                x, y, z = args[0]
            except (TypeError, ValueError) as e:
                raise ArgumentCountError(f"Vec3 needs three components, got {args[0]!r}") from e
        else:
            raise ArgumentCountError(f"Vec3 takes 1 or 3 arguments, got {len(args)}")
        return super().__new__(cls, float(x), float(y), float(z))

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        a, b, c = self
        d, e, f = other
        return Vec3(b * f - c * e, c * d - a * f, a * e - b * d)

    def len(self) -> float:
        return math.sqrt(self.len_sqr())

    def len_sqr(self) -> float:
        return self.dot(self)

    def dist(self, other: Vec3) -> float:
        return (self - other).len()

    def dist_sqr(self, other: Vec3) -> float:
        return (self - other).len_sqr()

    def len1(self) -> float:
        return abs(self.x) + abs(self.y) + abs(self.z)

    def dist1(self, other: Vec3) -> float:
        return (self - other).len1()

    def leninf(self) -> float:
        return max(abs(self.x), abs(self.y), abs(self.z))

    def distinf(self, other: Vec3) -> float:
        return (self - other).leninf()

    def __abs__(self) -> float:
        return self.len()

    def normalize(self) -> Vec3:
        """Unit vector in the same direction; NaN components for the zero vector."""
        length = self.len()
        if length == 0:
            return Vec3(math.nan, math.nan, math.nan)
        return Vec3(self.x / length, self.y / length, self.z / length)

    def normalise(self) -> Vec3:
        """Unit vector, or `(0, 0, 1)` when the direction is undefined."""
        v = self.normalize()
        if v.is_finite():
            return v
        logger.debug(f"normalise: {self!r} has no direction, using +z")
        return Vec3(0, 0, 1)

    # --- Arithmetic: scalars broadcast over all components for + and - ---

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        if _is_real(other):
            return Vec3(self.x + other, self.y + other, self.z + other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        if _is_real(other):
            return Vec3(self.x - other, self.y - other, self.z - other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_real(other):
            return Vec3(other - self.x, other - self.y, other - self.z)
        return NotImplemented

    def __mul__(self, other):
        """Scalar multiple, or componentwise product with another Vec3."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if _is_real(other):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if _is_real(other):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __pos__(self) -> Vec3:
        return self

    # --- Matrices (4x4, row-major, homogeneous with perspective divide) ---

    def apply_matrix_left(self, m) -> Vec3:
        """`m · v` treating `v` as the column `(x, y, z, 1)`."""
        h = np.asarray(m, dtype=float).reshape(4, 4) @ np.array([self.x, self.y, self.z, 1.0])
        return Vec3(h[:3] / h[3])

    def apply_matrix_right(self, m) -> Vec3:
        """`v · m` treating `v` as the row `(x, y, z, 1)`."""
        h = np.array([self.x, self.y, self.z, 1.0]) @ np.asarray(m, dtype=float).reshape(4, 4)
        return Vec3(h[:3] / h[3])

    # --- Quaternions ---

    def to_quaternion(self):
        """Pure quaternion `(0, x, y, z)`."""
        from quaternion import Quaternion
        return Quaternion(0.0, self.x, self.y, self.z)

    def apply_quaternion(self, q) -> Vec3:
        """Rotate by `q` as `q v q*` (assumes `q` is a unit quaternion)."""
        return (q * self.to_quaternion() * q.conjugate()).vector()

    def rotate(self, q, *axis) -> Vec3:
        """Rotate by a quaternion, or by an angle about an axis."""
        if _is_real(q):
            from rotation import from_angle_axis
            q = from_angle_axis(q, *axis)
        return self.apply_quaternion(q)

    def rotate_to(self, other: Vec3):
        """Quaternion turning this vector onto `other` along the shorter arc."""
        from rotation import rotate_to
        return rotate_to(self, other)

    def exp(self, t: float = 1.0):
        """Unit quaternion reached by flowing along this tangent vector for time `t`."""
        from rotation import tangent
        return tangent(self, t)

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> Vec3:
        """Uniformly distributed point on the unit sphere."""
        rng = np.random.default_rng() if rng is None else rng
        th = 2 * math.pi * float(rng.random())
        z = 2 * float(rng.random()) - 1
        r = math.sqrt(1 - z * z)
        return Vec3(r * math.cos(th), r * math.sin(th), z)

    def __str__(self) -> str:
        return f"({self.x:g},{self.y:g},{self.z:g})"


ZERO = Vec3(0, 0, 0)
X_AXIS = Vec3(1, 0, 0)
Y_AXIS = Vec3(0, 1, 0)
Z_AXIS = Vec3(0, 0, 1)
