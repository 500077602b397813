"""
Interpolation between rotations.

The direct functions assume unit inputs for speed; the `make_*` constructors
normalise their endpoints and precompute everything that does not depend on
`t`, returning a small recipe object to evaluate repeatedly.

Every function also accepts a "from identity" form with the start omitted:
`slerp(p, t)` is `slerp(IDENTITY, p, t)`.

>>> print(slerp(IDENTITY, Quaternion(0, 0, 0, 1), 0.5))
0.707 + 0.707k
>>> quarter = make_slerp(Quaternion(0, 0, 0, 1))
>>> print(quarter(0.5))
0.707 + 0.707k
>>> print(quarter(0.0))
1.000
>>> smoothstep(0.5)
0.5
"""
from __future__ import annotations

import logging
import math
from collections import namedtuple
from typing import Optional, Tuple

from quaternion import IDENTITY, Quaternion

logger = logging.getLogger(__name__)

# |q + p| at or below this counts as antipodal (p = -q, the same rotation).
ANTIPODAL_TOLERANCE = 1e-12

_ZERO = Quaternion(0, 0, 0, 0)


def _endpoints(q, p, t) -> Tuple[Quaternion, Quaternion, float]:
    if t is None:
        q, p, t = IDENTITY, q, p
    if t is None or isinstance(t, Quaternion):
        raise TypeError("interpolation needs a parameter t")
    return Quaternion(q), Quaternion(p), t


def is_antipodal(q: Quaternion, p: Quaternion) -> bool:
    return (q + p).len() <= ANTIPODAL_TOLERANCE


def midpoint(q: Quaternion) -> Quaternion:
    """A quaternion orthogonal to `q`, halfway round from `q` to `-q`."""
    return Quaternion(q.x, -q.w, q.z, -q.y)


def lerp(q, p=None, t: Optional[float] = None) -> Quaternion:
    """Normalised linear interpolation from `q` to `p`."""
    q, p, t = _endpoints(q, p, t)
    if is_antipodal(q, p):
        logger.debug(f"lerp: antipodal endpoints {q!r}, routing through a midpoint")
        v = (1 - 2 * t) * q + (1 - abs(2 * t - 1)) * midpoint(q)
    else:
        v = (1 - t) * q + t * p
    return v.normalise()


def slerp(q, p=None, t: Optional[float] = None) -> Quaternion:
    """Spherical linear interpolation from `q` to `p` at constant angular speed."""
    q, p, t = _endpoints(q, p, t)
    if is_antipodal(q, p):
        logger.debug(f"slerp: antipodal endpoints {q!r}, routing through a midpoint")
        p, t = midpoint(q), 2 * t
    elif (q - p).len() == 0:
        return q
    ca = q.dot(p)
    d = 1 - ca * ca
    if not d > 0:
        # coincident up to rounding: nothing to interpolate
        return q
    sa = math.sqrt(d)
    a = math.acos(ca)
    s = math.sin(a * t) / sa
    return (math.cos(a * t) - ca * s) * q + s * p


class LerpRecipe(namedtuple('LerpRecipe', 'start end antipodal')):
    """Normalised linear interpolation with resolved endpoints."""
    __slots__ = ()

    def at(self, t: float) -> Quaternion:
        if self.antipodal:
            v = (1 - 2 * t) * self.start + (1 - abs(2 * t - 1)) * self.end
        else:
            v = (1 - t) * self.start + t * self.end
        return v.normalise()

    __call__ = at


class SlerpRecipe(namedtuple('SlerpRecipe', 'start direction angle factor')):
    """`cos(a f t)·start + sin(a f t)·direction`, `direction` orthogonal to `start`.

    An `angle` of zero means the endpoints coincide and `at` returns `start`.
    """
    __slots__ = ()

    def at(self, t: float) -> Quaternion:
        if self.angle == 0:
            return self.start
        theta = self.angle * self.factor * t
        return math.cos(theta) * self.start + math.sin(theta) * self.direction

    __call__ = at


def make_lerp(q, p=None) -> LerpRecipe:
    if p is None:
        q, p = IDENTITY, q
    q, p = Quaternion(q).normalise(), Quaternion(p).normalise()
    if is_antipodal(q, p):
        return LerpRecipe(q, midpoint(q), True)
    return LerpRecipe(q, p, False)


def make_slerp(q, p=None) -> SlerpRecipe:
    if p is None:
        q, p = IDENTITY, q
    q, p = Quaternion(q).normalise(), Quaternion(p).normalise()
    factor = 1
    if is_antipodal(q, p):
        p, factor = midpoint(q), 2
    elif (q - p).len() == 0:
        return SlerpRecipe(q, _ZERO, 0.0, 1)
    ca = q.dot(p)
    d = 1 - ca * ca
    if not d > 0:
        return SlerpRecipe(q, _ZERO, 0.0, 1)
    sa = math.sqrt(d)
    return SlerpRecipe(q, (p - ca * q) / sa, math.acos(ca), factor)


# --- Scalar easing ---

def edge(t: float, a: float = 0.0, b: float = 1.0) -> float:
    """Clamp `(t - a)/(b - a)` to [0, 1]."""
    return min(1.0, max(0.0, (t - a) / (b - a)))


def smoothstep(t: float, a: float = 0.0, b: float = 1.0) -> float:
    t = edge(t, a, b)
    return t * t * (3 - 2 * t)


def smootherstep(t: float, a: float = 0.0, b: float = 1.0) -> float:
    t = edge(t, a, b)
    return t * t * t * (t * (t * 6 - 15) + 10)
