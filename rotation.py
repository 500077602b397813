"""
Building rotations as unit quaternions.

>>> q = from_angle_axis(math.pi / 2, 0, 0, 1)
>>> print(q)
0.707 + 0.707k
>>> print(rotate_to(Vec3(1, 0, 0), Vec3(0, 1, 0)))
0.707 + 0.707k
>>> from_angle_axis(1.0, Vec3(0, 0, 0)) == IDENTITY
True
"""
from __future__ import annotations

import logging
import math
from typing import Sequence, Union

from errors import ArgumentCountError
from quaternion import IDENTITY, Quaternion
from vec3 import Vec3, X_AXIS, Y_AXIS, Z_AXIS

logger = logging.getLogger(__name__)

# unit directions whose cross product is shorter than this count as parallel
PARALLEL_TOLERANCE = 1e-7

# Euler axis selectors: lowercase follows the frame rotated so far,
# uppercase stays fixed in the world frame.
EULER_AXES = {
    "x": (X_AXIS, True), "X": (X_AXIS, False),
    "y": (Y_AXIS, True), "Y": (Y_AXIS, False),
    "z": (Z_AXIS, True), "Z": (Z_AXIS, False),
}


def _axis(args) -> Vec3:
    if len(args) == 3:
        return Vec3(*args)
    if len(args) == 1:
        return Vec3(args[0])
    raise ArgumentCountError(f"axis needs a Vec3 or three components, got {len(args)} arguments")


def from_angle_axis(angle: float, *axis) -> Quaternion:
    """Rotation by `angle` radians about `axis`, counterclockwise looking down the axis.

    The axis is a Vec3 (or any 3-sequence) or three numbers. A zero axis gives
    the identity.
    """
    q = Quaternion(0.0, _axis(axis)).normalise()
    if q == IDENTITY:
        logger.debug(f"from_angle_axis: zero axis {axis!r}, returning the identity")
        return IDENTITY
    return q * math.sin(angle / 2) + math.cos(angle / 2)


def euler_axis(selector: str, q: Quaternion) -> Vec3:
    try:
        axis, moving = EULER_AXES[selector]
    except KeyError:
        raise ValueError(f"unknown Euler axis {selector!r}, expected one of {''.join(EULER_AXES)}") from None
    return q.apply(axis) if moving else axis


def from_euler_angles(angles: Union[Vec3, Sequence[float]],
                      order: Sequence[str] = ("x", "y", "z")) -> Quaternion:
    """Compose one angle-axis step per selector in `order`, right-multiplying each.

    >>> q = from_euler_angles((0, 0, math.pi / 2))
    >>> q == from_angle_axis(math.pi / 2, Z_AXIS)
    True
    """
    angles = list(angles)
    if len(angles) < len(order):
        raise ArgumentCountError(f"{len(order)} Euler axes need as many angles, got {len(angles)}")
    q = IDENTITY
    for angle, selector in zip(angles, order):
        q = q * from_angle_axis(angle, euler_axis(selector, q))
    return q


def rotate_to(u, v) -> Quaternion:
    """Shortest-arc rotation taking the direction of `u` onto the direction of `v`."""
    u, v = Vec3(u), Vec3(v)
    if u.is_zero() or v.is_zero():
        logger.debug(f"rotate_to: zero vector in {u!r}, {v!r}, returning the identity")
        return IDENTITY
    u, v = u.normalise(), v.normalise()
    if u.cross(v).len() < PARALLEL_TOLERANCE:
        if u.dot(v) >= 0:
            return IDENTITY
        # opposite directions: turn half way round an axis orthogonal to u,
        # built from the two components of largest magnitude
        a, b, c = abs(u.x), abs(u.y), abs(u.z)
        if a < b and a < c:
            v = Vec3(0, -u.z, u.y)
        elif b < c:
            v = Vec3(u.z, 0, -u.x)
        else:
            v = Vec3(u.y, -u.x, 0)
        logger.debug(f"rotate_to: antiparallel inputs, turning about {v}")
    else:
        v = u + v
    v = v.normalise()
    return Quaternion(u.dot(v), u.cross(v))


def tangent(v, t: float = 1.0) -> Quaternion:
    """Exponential map: follow the tangent vector `v` at the identity for time `t`."""
    v = Vec3(v)
    qn = Quaternion(0.0, v).normalise()
    if qn == IDENTITY:
        return qn
    a = t * v.len()
    return math.cos(a) * IDENTITY + math.sin(a) * qn
