"""
Quaternions as immutable 4-vectors `(w, x, y, z)`.

Unit quaternions double-cover the rotation group: `q` and `-q` are the same
rotation. Multiplication is the Hamilton product, so composition reads right
to left like rotation matrices acting on column vectors.

>>> i, j, k = Quaternion(0, 1, 0, 0), Quaternion(0, 0, 1, 0), Quaternion(0, 0, 0, 1)
>>> i * j == k, j * k == i, k * i == j
(True, True, True)
>>> q1 = Quaternion(1, 2, 3, 4)
>>> q2 = Quaternion(0.5, 0.5, -0.5, -0.5)
>>> q1 * q2
Quaternion(w=3.0, x=2.0, y=4.0, z=-1.0)
>>> q1 / q2
Quaternion(w=-2.0, x=0.0, y=-1.0, z=5.0)
>>> q1 ** q2
Quaternion(w=1.0, x=-4.0, y=-2.0, z=3.0)
>>> print(Quaternion(0.3, 0.4, 0.5, 0.6))
0.300 + 0.400i + 0.500j + 0.600k
"""
from __future__ import annotations

import logging
import math
import numbers
from collections import namedtuple
from typing import Any, Optional, Tuple

import numpy as np

from display import format_quaternion
from errors import ArgumentCountError, DomainError
from vec3 import Vec3

logger = logging.getLogger(__name__)


def _is_real(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


class Quaternion(namedtuple('Quaternion', 'w x y z')):
    """A quaternion `w + xi + yj + zk`.

    Built from four reals, from a real scalar part and a 3-vector part, or
    from a single 4-component value (another Quaternion, a sequence, an array).
    """
    __slots__ = ()
    __array_ufunc__ = None

    def __new__(cls, *args):
        if len(args) == 4:
            w, x, y, z = args
        elif len(args) == 2:
            w, v = args
            if not _is_real(w):
                raise ArgumentCountError(f"Quaternion scalar part must be real, got {w!r}")
            try:
                x, y, z = v
            except (TypeError, ValueError) as e:
                raise ArgumentCountError(f"Quaternion vector part needs three components, got {v!r}") from e
        elif len(args) == 1:
            value = args[0]
            if _is_real(value) or isinstance(value, (str, bytes)):
                raise ArgumentCountError(f"Quaternion needs four components, got {value!r}")
            try:
                w, x, y, z = value
            except (TypeError, ValueError) as e:
                raise ArgumentCountError(f"Quaternion needs four components, got {value!r}") from e
        else:
            raise ArgumentCountError(f"Quaternion takes 1, 2 or 4 arguments, got {len(args)}")
        return super().__new__(cls, float(w), float(x), float(y), float(z))

    # --- Predicates ---

    def is_zero(self) -> bool:
        return self.w == 0 and self.x == 0 and self.y == 0 and self.z == 0

    def is_real(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def is_imaginary(self) -> bool:
        return self.w == 0

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self)

    def __bool__(self) -> bool:
        return not self.is_zero()

    # --- Metric ---

    def dot(self, other: Quaternion) -> float:
        return self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z

    def len(self) -> float:
        return math.sqrt(self.len_sqr())

    def len_sqr(self) -> float:
        return self.dot(self)

    def dist(self, other: Quaternion) -> float:
        return (self - other).len()

    def dist_sqr(self, other: Quaternion) -> float:
        return (self - other).len_sqr()

    def len1(self) -> float:
        return sum(abs(c) for c in self)

    def dist1(self, other: Quaternion) -> float:
        return (self - other).len1()

    def leninf(self) -> float:
        return max(abs(c) for c in self)

    def distinf(self, other: Quaternion) -> float:
        return (self - other).leninf()

    def __abs__(self) -> float:
        return self.len()

    def normalize(self) -> Quaternion:
        """Scale to unit length; NaN components for the zero quaternion."""
        length = self.len()
        if length == 0:
            return Quaternion(math.nan, math.nan, math.nan, math.nan)
        return self.scale(1 / length)

    def normalise(self) -> Quaternion:
        """Scale to unit length, falling back to the identity when that is not finite."""
        q = self.normalize()
        if q.is_finite():
            return q
        logger.debug(f"normalise: {self!r} has no direction, using the identity")
        return IDENTITY

    def sdist(self, other: Quaternion) -> float:
        """Spherical distance between the normalised quaternions."""
        chord = self.normalise().dist(other.normalise())
        return 2 * math.asin(min(1.0, chord / 2))

    def slen(self) -> float:
        """Spherical distance from the identity."""
        return self.sdist(IDENTITY)

    def scale(self, s: float) -> Quaternion:
        return Quaternion(s * self.w, s * self.x, s * self.y, s * self.z)

    # --- Arithmetic ---

    def __add__(self, other):
        if isinstance(other, Quaternion):
            return Quaternion(self.w + other.w, self.x + other.x, self.y + other.y, self.z + other.z)
        if _is_real(other):
            return Quaternion(self.w + other, self.x, self.y, self.z)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Quaternion):
            return Quaternion(self.w - other.w, self.x - other.x, self.y - other.y, self.z - other.z)
        if _is_real(other):
            return Quaternion(self.w - other, self.x, self.y, self.z)
        return NotImplemented

    def __rsub__(self, other):
        if _is_real(other):
            return Quaternion(other - self.w, -self.x, -self.y, -self.z)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            a, b, c, d = self
            e, f, g, h = other
            return Quaternion(
                a * e - b * f - c * g - d * h,
                a * f + b * e + c * h - d * g,
                a * g - b * h + c * e + d * f,
                a * h + b * g - c * f + d * e,
            )
        if _is_real(other):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_real(other):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Quaternion):
            return self * other.reciprocal()
        if _is_real(other):
            if other == 0:
                raise DomainError(f"division of {self!r} by zero")
            return self.scale(1 / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_real(other):
            return self.reciprocal().scale(other)
        return NotImplemented

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.w, -self.x, -self.y, -self.z)

    def __pos__(self) -> Quaternion:
        return self

    def conjugate(self) -> Quaternion:
        """Inverse rotation for unit quaternions."""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    co = conjugate

    def conjugate_via(self, marker: Any = None) -> Quaternion:
        """Conjugate; stands in for "raise to a non-numeric power"."""
        return self.conjugate()

    def conjugate_by(self, n: Quaternion) -> Quaternion:
        """`n q n⁻¹`: this rotation seen from the frame `n`."""
        return n * self / n

    def reciprocal(self) -> Quaternion:
        if self.is_zero():
            raise DomainError("cannot reciprocate a zero quaternion")
        return self.conjugate().scale(1 / self.len_sqr())

    def power(self, n: float) -> Quaternion:
        """Integer powers by repeated products, real powers along the geodesic."""
        if not math.isfinite(n):
            raise DomainError(f"non-finite exponent {n}")
        if n == math.floor(n):
            n = int(n)
            if n < 0:
                return self.reciprocal().power(-n)
            result = IDENTITY
            for _ in range(n):
                result = self * result
            return result
        length = self.len()
        if length == 0:
            if n < 0:
                raise DomainError(f"zero quaternion raised to the negative power {n}")
            return Quaternion(0, 0, 0, 0)
        from interp import slerp
        return length ** n * slerp(IDENTITY, self.normalise(), n)

    def __pow__(self, exponent, modulo=None):
        if modulo is not None:
            return NotImplemented
        if _is_real(exponent):
            return self.power(exponent)
        if isinstance(exponent, Quaternion):
            return self.conjugate_by(exponent)
        return NotImplemented

    # --- Interpolation (see interp) ---

    def lerp(self, other, t: Optional[float] = None) -> Quaternion:
        from interp import lerp
        return lerp(self, other, t)

    def slerp(self, other, t: Optional[float] = None) -> Quaternion:
        from interp import slerp
        return slerp(self, other, t)

    def make_lerp(self, other: Optional[Quaternion] = None):
        from interp import make_lerp
        return make_lerp(self, other)

    def make_slerp(self, other: Optional[Quaternion] = None):
        from interp import make_slerp
        return make_slerp(self, other)

    # --- Parts and conversions ---

    def real(self) -> float:
        return self.w

    def vector(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    to_vector = vector

    def log(self) -> Vec3:
        """Tangent vector at the identity whose exponential is this rotation."""
        v = self.vector().normalize()
        if not v.is_finite():
            return Vec3(0, 0, 0)
        return v * self.slen()

    def apply(self, v: Vec3) -> Vec3:
        """Rotate `v` by this (unit) quaternion."""
        return (self * Quaternion(0.0, v) * self.conjugate()).vector()

    def _rotation_matrix(self, a: float, b: float, c: float, d: float) -> np.ndarray:
        ab, ac, ad = 2 * a * b, 2 * a * c, 2 * a * d
        bb, bc, bd = 2 * b * b, 2 * b * c, 2 * b * d
        cc, cd, dd = 2 * c * c, 2 * c * d, 2 * d * d
        return np.array([
            [1 - cc - dd, bc - ad, ac + bd, 0.0],
            [bc + ad, 1 - bb - dd, cd - ab, 0.0],
            [bd - ac, cd + ab, 1 - bb - cc, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ], dtype=float)

    def to_matrix_left(self) -> np.ndarray:
        """Rotation matrix acting on column vectors: `m @ v` rotates `v` by `q`."""
        q = self.normalise()
        return self._rotation_matrix(q.w, q.x, q.y, q.z)

    def to_matrix_right(self) -> np.ndarray:
        """Rotation matrix acting on row vectors: `v @ m` rotates `v` by `q`."""
        q = self.normalise()
        return self._rotation_matrix(q.w, -q.x, -q.y, -q.z)

    to_matrix = to_matrix_right

    def to_angle_axis(self) -> Tuple[float, Vec3]:
        """Rotation angle in [0, 2π] and unit axis; `(0, +z)` for the identity."""
        q = self.normalise()
        v = q.vector()
        if v.is_zero():
            return 0.0, Vec3(0, 0, 1)
        return 2 * math.acos(max(-1.0, min(1.0, q.w))), v.normalise()

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> Quaternion:
        """Uniformly distributed unit quaternion (a uniformly random rotation)."""
        rng = np.random.default_rng() if rng is None else rng
        u = float(rng.random())
        v = 2 * math.pi * float(rng.random())
        w = 2 * math.pi * float(rng.random())
        s, t = math.sqrt(1 - u), math.sqrt(u)
        return Quaternion(s * math.sin(v), s * math.cos(v), t * math.sin(w), t * math.cos(w))

    def __str__(self) -> str:
        return format_quaternion(*self)


IDENTITY = Quaternion(1, 0, 0, 0)
