"""Functions for creating 2D geometric representations of tree segments."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vec:
    """Immutable 2D vector.

    Every operation returns a new vector. Angles are in radians and follow the
    screen convention used by the renderer (y grows downward, so a heading of
    -pi/2 points up).
    """

    x: float
    y: float

    def plus(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y)

    def minus(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def times(self, scalar: float) -> Vec:
        return Vec(self.x * scalar, self.y * scalar)

    def divide(self, scalar: float) -> Vec:
        """Divides both components by `scalar`.

        Division by zero is not guarded: the result has non-finite components.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            x, y = self.as_array() / np.float64(scalar)
        return Vec(float(x), float(y))

    def rotate(self, angle: float, pivot: Vec | None = None) -> Vec:
        """Rotates this vector by `angle` radians about `pivot`.

        Parameters
        ----------
        angle : numeric
            rotation angle in radians
        pivot : Vec, optional
            center of rotation, defaults to the coordinate origin

        Returns:
        --------
        rotated : Vec
        """
        if pivot is not None:
            return self.minus(pivot).rotate(angle).plus(pivot)

        x, y = _rotation_matrix(angle) @ self.as_array()
        return Vec(float(x), float(y))

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def as_array(self) -> np.ndarray:
        return np.array((self.x, self.y), dtype=float)

    __add__ = plus
    __sub__ = minus
    __mul__ = times
    __truediv__ = divide


def _rotation_matrix(angle: float) -> np.ndarray:
    """Returns the 2x2 counter-clockwise rotation matrix for `angle` radians."""
    cos, sin = np.cos(angle), np.sin(angle)
    return np.array(((cos, -sin), (sin, cos)))


def heading_vector(heading: float) -> Vec:
    """Unit vector pointing along `heading`."""
    return Vec(math.cos(heading), math.sin(heading))


def tangent_vector(heading: float) -> Vec:
    """Unit vector perpendicular to `heading`, used to offset segment edges."""
    return Vec(math.sin(heading), -math.cos(heading))


def interpolate_by_depth(
    low: float, high: float, depth: int, max_depth: int
) -> float:
    """Interpolates between `low` and `high` according to a node's depth.

    Nodes with a larger depth-to-leaf get values closer to `high`. The
    interpolation factor is clamped to [0, 1] so the result stays between the
    two bounds, and a non-positive `max_depth` always yields `high`.

    Parameters
    ----------
    low, high : numeric
        bounds of the interpolated value
    depth : int
        depth of the node (longest path down to a leaf)
    max_depth : int
        configured maximum recursion depth

    Returns:
    --------
    value : float
    """
    if max_depth <= 0:
        factor = 1.0
    else:
        factor = 1 - (max_depth - depth) / max_depth
    factor = min(max(factor, 0.0), 1.0)
    return low + (high - low) * factor
