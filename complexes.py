"""
Complex numbers as immutable 2-vectors.

`Complex` is a value type: every operation returns a new instance and a real
operand is promoted to `(s, 0)` on either side of `+ - * /`. Powers and
logarithms take an optional branch index `k` selecting the sheet of the
multi-valued function.

>>> z = Complex(2, 4)
>>> w = Complex(-1, 1)
>>> z * w
Complex(re=-6.0, im=-2.0)
>>> 3 - w
Complex(re=4.0, im=-1.0)
>>> print(z ** 2)
-12 + 16i
>>> print(z.conjugate())
2 - 4i
>>> print(log(1.0, 1))
6.28i

The module-level functions accept either a real or a Complex and keep reals
on the real line:

>>> sqrt(4.0)
2.0
>>> print(sqrt(Complex(-4, 0)))
2i
"""
from __future__ import annotations

import logging
import math
import numbers
from collections import namedtuple
from typing import Any, Optional, Union

import numpy as np

from display import ComplexFormat, DEFAULT_FORMAT, format_cartesian, format_complex, format_polar
from errors import ArgumentCountError, DomainError

logger = logging.getLogger(__name__)

Number = Union[float, "Complex"]


def _is_real(x: Any) -> bool:
    """Real scalars, excluding bools."""
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


class Complex(namedtuple('Complex', 're im')):
    """A complex number `re + im·i`.

    Built from two reals, or from one pair-like value (a 2-sequence, another
    Complex, or a Python `complex`).
    """
    __slots__ = ()
    # numpy scalars defer to our reflected operators instead of broadcasting
    __array_ufunc__ = None

    def __new__(cls, *args):
        if len(args) == 2:
            re, im = args
        elif len(args) == 1:
            value = args[0]
            if isinstance(value, complex):
                re, im = value.real, value.imag
            elif _is_real(value) or isinstance(value, (str, bytes)):
                raise ArgumentCountError(
                    f"Complex needs two components or a pair, got {value!r}")
            else:
                try:
                    re, im = value
                except (TypeError, ValueError) as e:
                    raise ArgumentCountError(
                        f"Complex needs two components or a pair, got {value!r}") from e
        else:
            raise ArgumentCountError(
                f"Complex takes 1 or 2 arguments, got {len(args)}")
        return super().__new__(cls, float(re), float(im))

    # --- Predicates ---

    def is_zero(self) -> bool:
        return self.re == 0 and self.im == 0

    def is_real(self) -> bool:
        return self.im == 0

    def is_imaginary(self) -> bool:
        return self.re == 0

    def is_finite(self) -> bool:
        return math.isfinite(self.re) and math.isfinite(self.im)

    def __bool__(self) -> bool:
        return not self.is_zero()

    # --- Metric ---

    def dot(self, other: Complex) -> float:
        return self.re * other.re + self.im * other.im

    def len(self) -> float:
        return math.hypot(self.re, self.im)

    def len_sqr(self) -> float:
        return self.re * self.re + self.im * self.im

    def dist(self, other: Complex) -> float:
        return math.hypot(self.re - other.re, self.im - other.im)

    def dist_sqr(self, other: Complex) -> float:
        return (self.re - other.re) ** 2 + (self.im - other.im) ** 2

    def len1(self) -> float:
        return abs(self.re) + abs(self.im)

    def dist1(self, other: Complex) -> float:
        return abs(self.re - other.re) + abs(self.im - other.im)

    def leninf(self) -> float:
        return max(abs(self.re), abs(self.im))

    def distinf(self, other: Complex) -> float:
        return max(abs(self.re - other.re), abs(self.im - other.im))

    def arg(self) -> float:
        """Argument in (-π, π]."""
        return math.atan2(self.im, self.re)

    def __abs__(self) -> float:
        return self.len()

    def normalize(self) -> Complex:
        """Scale to unit length; a zero input gives NaN components."""
        length = self.len()
        if length == 0:
            return Complex(math.nan, math.nan)
        return Complex(self.re / length, self.im / length)

    def normalise(self) -> Complex:
        """Scale to unit length, falling back to `1` when that is not finite."""
        c = self.normalize()
        if c.is_finite():
            return c
        logger.debug(f"normalise: {self!r} has no direction, using 1")
        return UNIT

    def scale(self, s: float) -> Complex:
        return Complex(s * self.re, s * self.im)

    # --- Arithmetic ---

    def __add__(self, other):
        if isinstance(other, Complex):
            return Complex(self.re + other.re, self.im + other.im)
        if _is_real(other):
            return Complex(self.re + other, self.im)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Complex):
            return Complex(self.re - other.re, self.im - other.im)
        if _is_real(other):
            return Complex(self.re - other, self.im)
        return NotImplemented

    def __rsub__(self, other):
        if _is_real(other):
            return Complex(other - self.re, -self.im)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Complex):
            a, b = self
            c, d = other
            return Complex(a * c - b * d, a * d + b * c)
        if _is_real(other):
            return self.scale(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Complex):
            l = other.len_sqr()
            if l == 0:
                raise DomainError(f"division of {self!r} by zero")
            a, b = self
            c, d = other
            return Complex((a * c + b * d) / l, (b * c - a * d) / l)
        if _is_real(other):
            if other == 0:
                raise DomainError(f"division of {self!r} by zero")
            return Complex(self.re / other, self.im / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_real(other):
            return self.reciprocal().scale(other)
        return NotImplemented

    def __neg__(self) -> Complex:
        return Complex(-self.re, -self.im)

    def __pos__(self) -> Complex:
        return self

    def conjugate(self) -> Complex:
        return Complex(self.re, -self.im)

    co = conjugate

    def conjugate_via(self, marker: Any = None) -> Complex:
        """Conjugate; stands in for "raise to a non-numeric power".

        The marker is accepted and ignored so call sites that used a sentinel
        exponent keep their shape.
        """
        return self.conjugate()

    def reciprocal(self) -> Complex:
        if self.is_zero():
            raise DomainError("cannot reciprocate a zero complex number")
        return self.conjugate().scale(1 / self.len_sqr())

    def power(self, exponent: Number, k: int = 0) -> Complex:
        """Raise to a real or complex power on branch `k`."""
        if isinstance(exponent, complex):
            exponent = Complex(exponent)
        if isinstance(exponent, Complex):
            return complex_power(self, exponent, k)
        if _is_real(exponent):
            return real_power(self, exponent, k)
        raise TypeError(f"cannot raise a complex number to {exponent!r}")

    def __pow__(self, exponent, modulo=None):
        if modulo is not None:
            return NotImplemented
        if isinstance(exponent, (Complex, complex)) or _is_real(exponent):
            return self.power(exponent)
        return NotImplemented

    def __rpow__(self, base):
        if _is_real(base):
            return complex_power(Complex(base, 0), self)
        return NotImplemented

    # --- Accessors and conversion ---

    @property
    def real(self) -> float:
        return self.re

    @property
    def imag(self) -> float:
        return self.im

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def to_matrix(self) -> np.ndarray:
        """4x4 matrix acting on the xy-plane as multiplication by this number."""
        x, y = self
        return np.array([
            [x, y, 0.0, 0.0],
            [-y, x, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ], dtype=float)

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> Complex:
        """Uniformly distributed point on the unit circle."""
        rng = np.random.default_rng() if rng is None else rng
        th = 2 * math.pi * float(rng.random())
        return Complex(math.cos(th), math.sin(th))

    # --- Text ---

    def format(self, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
        return format_complex(self, fmt)

    def to_cartesian_string(self, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
        return format_cartesian(self.re, self.im, fmt)

    def to_polar_string(self, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
        return format_polar(self.len(), self.arg(), fmt)

    def __str__(self) -> str:
        return format_complex(self, DEFAULT_FORMAT)


UNIT = Complex(1, 0)
ZERO = Complex(0, 0)
I = Complex(0, 1)


def polar(r: float, theta: float) -> Complex:
    return Complex(r * math.cos(theta), r * math.sin(theta))


def promote(x: Number) -> Complex:
    """Lift a real to `(x, 0)`; Complex values pass through."""
    if isinstance(x, Complex):
        return x
    if isinstance(x, complex):
        return Complex(x)
    if _is_real(x):
        return Complex(x, 0)
    raise TypeError(f"expected a real or complex number, got {x!r}")


# --- Powers ---

def real_power(c: Complex, n: float, k: int = 0) -> Complex:
    """`c^n` via the polar form, with the argument taken on branch `k`.

    At `c = 0` only integer powers are defined (the argument is not): `0` for
    `n > 0`, `1` for `n == 0`.
    """
    if not math.isfinite(n):
        raise DomainError(f"non-finite exponent {n}")
    r = c.len()
    if r == 0:
        if n != math.floor(n):
            raise DomainError(f"zero raised to the non-integer power {n}")
        if n > 0:
            return ZERO
        if n == 0:
            return UNIT
        raise DomainError(f"zero raised to the negative power {n}")
    t = (c.arg() + 2 * k * math.pi) * n
    return polar(r ** n, t)


def complex_power(c: Complex, w: Complex, k: int = 0) -> Complex:
    """`c^w` for complex `w = u + vi`; undefined at `c = 0`."""
    if c.is_zero():
        raise DomainError("complex powers of zero are undefined")
    r, t = c.len(), c.arg()
    u, v = w
    nr = r ** u * math.exp(-v * t)
    nt = (t + 2 * k * math.pi) * u + math.log(r) * v
    return polar(nr, nt)


def power(base: Number, exponent: Number, k: int = 0) -> Number:
    if _is_real(base) and _is_real(exponent):
        return math.pow(base, exponent)
    return promote(base).power(exponent, k)


# --- Elementary functions over reals and complex numbers ---

def absolute(n: Number) -> float:
    if _is_real(n):
        return abs(n)
    if isinstance(n, Complex):
        return n.len()
    raise TypeError(f"cannot take the length of {n!r}")


def sqrt(n: Number) -> Number:
    if _is_real(n):
        return math.sqrt(n)
    if isinstance(n, Complex):
        return real_power(n, 0.5)
    raise TypeError(f"cannot take the square root of {n!r}")


def exp(n: Number) -> Number:
    if _is_real(n):
        return math.exp(n)
    if isinstance(n, Complex):
        return polar(math.exp(n.re), n.im)
    raise TypeError(f"cannot exponentiate {n!r}")


def log(n: Number, k: Optional[int] = None) -> Number:
    """Natural logarithm; with a branch index a real input gives `(ln n, 2kπ)`."""
    if _is_real(n):
        if k is None:
            return math.log(n)
        return Complex(math.log(n), 2 * k * math.pi)
    if isinstance(n, Complex):
        if n.is_zero():
            raise DomainError("logarithm of zero")
        k = k or 0
        return Complex(math.log(n.len()), n.arg() + 2 * k * math.pi)
    raise TypeError(f"cannot take the logarithm of {n!r}")


def cos(n: Number) -> Number:
    """cos(x+iy) = cos x cosh y - i sin x sinh y"""
    if _is_real(n):
        return math.cos(n)
    if isinstance(n, Complex):
        x, y = n
        return Complex(math.cos(x) * math.cosh(y), -math.sin(x) * math.sinh(y))
    raise TypeError(f"cannot take the cosine of {n!r}")


def sin(n: Number) -> Number:
    """sin(x+iy) = sin x cosh y + i cos x sinh y"""
    if _is_real(n):
        return math.sin(n)
    if isinstance(n, Complex):
        x, y = n
        return Complex(math.sin(x) * math.cosh(y), math.cos(x) * math.sinh(y))
    raise TypeError(f"cannot take the sine of {n!r}")


def cosh(n: Number) -> Number:
    """cosh(x+iy) = cosh x cos y + i sinh x sin y"""
    if _is_real(n):
        return math.cosh(n)
    if isinstance(n, Complex):
        x, y = n
        return Complex(math.cosh(x) * math.cos(y), math.sinh(x) * math.sin(y))
    raise TypeError(f"cannot take the hyperbolic cosine of {n!r}")


def sinh(n: Number) -> Number:
    """sinh(x+iy) = sinh x cos y + i cosh x sin y"""
    if _is_real(n):
        return math.sinh(n)
    if isinstance(n, Complex):
        x, y = n
        return Complex(math.sinh(x) * math.cos(y), math.cosh(x) * math.sin(y))
    raise TypeError(f"cannot take the hyperbolic sine of {n!r}")


def tan(n: Number) -> Number:
    """tan(x+iy) = (sin x cos x + i sinh y cosh y) / (cos²x cosh²y + sin²x sinh²y)"""
    if _is_real(n):
        return math.tan(n)
    if isinstance(n, Complex):
        x, y = n
        cx, sx = math.cos(x), math.sin(x)
        chy, shy = math.cosh(y), math.sinh(y)
        d = cx ** 2 * chy ** 2 + sx ** 2 * shy ** 2
        if d == 0:
            raise DomainError(f"tangent has a pole at {n!r}")
        return Complex(sx * cx / d, shy * chy / d)
    raise TypeError(f"cannot take the tangent of {n!r}")


def tanh(n: Number) -> Number:
    """tanh(x+iy) = (sinh x cosh x + i sin y cos y) / (cos²y cosh²x + sin²y sinh²x)"""
    if _is_real(n):
        return math.tanh(n)
    if isinstance(n, Complex):
        x, y = n
        cy, sy = math.cos(y), math.sin(y)
        chx, shx = math.cosh(x), math.sinh(x)
        d = cy ** 2 * chx ** 2 + sy ** 2 * shx ** 2
        if d == 0:
            raise DomainError(f"hyperbolic tangent has a pole at {n!r}")
        return Complex(shx * chx / d, sy * cy / d)
    raise TypeError(f"cannot take the hyperbolic tangent of {n!r}")
