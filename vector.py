"""
A resizable vector of reals and/or Complex values, with a radix-2 FFT.

>>> v = Vector(1, 2, 3)
>>> print(v + Vector(1, 1, 1))
(2,3,4)
>>> print(Vector(1, 0, 0, 0).fft())
(1,1,1,1)
>>> print(Vector(1, 2, 3).bitwise_reorder())
(1,3,2,0)
"""
from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Iterator, List, Union

from bitstring import BitArray

from complexes import Complex, UNIT, absolute, promote
from display import ComplexFormat, DEFAULT_FORMAT
from errors import DomainError
from quaternion import Quaternion
from vec3 import Vec3

logger = logging.getLogger(__name__)

Entry = Union[float, Complex]


def _is_real(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _is_scalar(x: Any) -> bool:
    return _is_real(x) or isinstance(x, Complex)


def _entry_is_zero(v: Entry) -> bool:
    return v.is_zero() if isinstance(v, Complex) else v == 0


def _entries_equal(a: Entry, b: Entry) -> bool:
    if isinstance(a, Complex) or isinstance(b, Complex):
        return promote(a) == promote(b)
    return a == b


def _render(v: Entry, fmt: ComplexFormat) -> str:
    return f"{v:g}" if _is_real(v) else v.format(fmt)


# --- Bit helpers ---

def bin_length(n: int) -> int:
    """Bits needed to index `n` slots: `ceil(log2 n)`, 0 for `n <= 1`."""
    return max(0, n - 1).bit_length()


def bin_reverse(k: int, h: int) -> int:
    """Reverse the low `h` bits of `k`.

    >>> bin_reverse(1, 3), bin_reverse(6, 3), bin_reverse(0, 0)
    (4, 3, 0)
    """
    if h == 0:
        return 0
    bits = BitArray(uint=k, length=h)
    bits.reverse()
    return bits.uint


class Vector:
    """An ordered, resizable sequence of numeric entries.

    `Vector(1, 2, 3)` takes the entries directly; a single list, tuple, Vec3,
    Quaternion or array is unpacked, while a single Complex is one entry.
    """
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, *args):
        if len(args) == 1 and not _is_scalar(args[0]):
            self.items: List[Entry] = list(args[0])
        else:
            self.items = list(args)

    @property
    def size(self) -> int:
        return len(self.items)

    @classmethod
    def zero(cls, n: Union[int, Vector]) -> Vector:
        if isinstance(n, Vector):
            n = n.size
        return cls([0] * n)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.items)

    def __getitem__(self, k):
        return self.items[k]

    def __setitem__(self, k, value):
        self.items[k] = value

    def _check_size(self, other: Vector, op: str):
        if self.size != other.size:
            raise ValueError(f"{op}: size mismatch {self.size} != {other.size}")

    # --- Predicates ---

    def is_zero(self) -> bool:
        return all(_entry_is_zero(v) for v in self.items)

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        if self.size != other.size:
            return False
        return all(_entries_equal(a, b) for a, b in zip(self.items, other.items))

    # --- Metric ---

    def dot(self, other: Vector) -> Entry:
        """Bilinear product, no conjugation of complex entries."""
        self._check_size(other, "dot")
        return sum((a * b for a, b in zip(self.items, other.items)), 0)

    def len_sqr(self) -> float:
        return sum(absolute(v) ** 2 for v in self.items)

    def len(self) -> float:
        return math.sqrt(self.len_sqr())

    def linfty(self) -> float:
        return max((absolute(v) for v in self.items), default=0)

    def lone(self) -> float:
        return sum(absolute(v) for v in self.items)

    def normalise(self) -> Vector:
        if self.is_zero():
            raise DomainError("cannot normalise a zero-length vector")
        return self.scale(1 / self.len())

    # --- Arithmetic ---

    def scale(self, s: Entry) -> Vector:
        return Vector([s * v for v in self.items])

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_size(other, "add")
        return Vector([a + b for a, b in zip(self.items, other.items)])

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_size(other, "subtract")
        return Vector([a - b for a, b in zip(self.items, other.items)])

    def __neg__(self) -> Vector:
        return self.scale(-1)

    def __mul__(self, other):
        if _is_scalar(other):
            return self.scale(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if _is_real(other):
            return self.scale(1 / other)
        return NotImplemented

    # --- Matrices given as a list of rows ---

    def apply_matrix_left(self, m) -> Vector:
        """`m · v`: one dot product per row of `m`."""
        rows = [Vector(row) for row in m]
        for row in rows:
            self._check_size(row, "apply_matrix_left")
        return Vector([self.dot(row) for row in rows])

    def apply_matrix_right(self, m) -> Vector:
        """`v · m`: the rows of `m` weighted by the entries of `v`."""
        rows = [Vector(row) for row in m]
        if len(rows) != self.size:
            raise ValueError(f"apply_matrix_right: {len(rows)} rows for a vector of size {self.size}")
        result = Vector.zero(rows[0].size if rows else 0)
        for v, row in zip(self.items, rows):
            result = result + v * row
        return result

    def __matmul__(self, m):
        return self.apply_matrix_right(m)

    def __rmatmul__(self, m):
        return self.apply_matrix_left(m)

    # --- Conversion ---

    def to_value(self):
        """The fixed-size value type of matching dimension."""
        if self.size == 2:
            return Complex(*self.items)
        if self.size == 3:
            return Vec3(*self.items)
        if self.size == 4:
            return Quaternion(*self.items)
        raise ValueError(f"no fixed-size value type has {self.size} components")

    def __repr__(self) -> str:
        return f"Vector({self.items!r})"

    def format(self, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
        return "(" + ",".join(_render(v, fmt) for v in self.items) + ")"

    def __str__(self) -> str:
        return self.format()

    # --- FFT ---

    def bitwise_reorder(self, in_place: bool = False) -> Vector:
        """Bit-reversal permutation, padded with zeros to the next power of two.

        With `in_place` the entries of this vector are replaced and it is
        returned; otherwise a new Vector is built and this one is untouched.
        """
        h = bin_length(self.size)
        m = 1 << h
        items = self.items + [0] * (m - self.size)
        seen = [False] * m
        for k in range(m):
            if not seen[k]:
                l = bin_reverse(k, h)
                items[k], items[l] = items[l], items[k]
                seen[k] = seen[l] = True
        if in_place:
            self.items = items
            return self
        return Vector(items)

    def fft(self, inverse: bool = False, in_place: bool = False) -> Vector:
        """Iterative radix-2 Cooley-Tukey transform.

        The forward transform uses the kernel `exp(-2πi jk/N)`, the inverse
        `exp(+2πi jk/N)`. The inverse is NOT divided by N: a round trip
        returns the input scaled by the padded size.

        >>> v = Vector(1, 2, 3, 4).fft()
        >>> print(v.fft(inverse=True) / v.size)
        (1,2,3,4)
        """
        v = self.bitwise_reorder(in_place)
        angle = math.pi if inverse else -math.pi
        r = v.size
        for k in range(bin_length(r)):
            i = 1 << k
            j = i << 1
            d = angle / i
            s = math.sin(d / 2)
            # twiddle step: fi <- m*fi + fi rotates fi by d
            m = Complex(-2 * s * s, math.sin(d))
            fi = UNIT
            for l in range(i):
                for ll in range(l, r, j):
                    p = ll + i
                    pr = fi * v.items[p]
                    v.items[p] = v.items[ll] - pr
                    v.items[ll] = v.items[ll] + pr
                fi = m * fi + fi
        logger.debug(f"fft: {r} points, {'inverse' if inverse else 'forward'}")
        return v
