"""Handling basic 2D geometry: vector helpers and infinite lines"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from biarc.common import DegenerateGeometryError, InvalidParameterError, PointLike
from biarc.consts import GEOM_EPS


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to 2D vector handling."""

    @staticmethod
    def as_point(point: PointLike) -> NDArray[np.float64]:
        """
        Convert the given _point_ into a read-only float64 array of shape (2,).

        Args:
            point (PointLike): 2D point - (x, y)

        Returns:
            NDArray[np.float64]: the point as immutable array

        Raises:
            InvalidParameterError: if the point is not 2D or contains NaN/infinity
        """
        result = np.array(point, dtype=np.float64).reshape(-1)
        if result.shape != (2,):
            raise InvalidParameterError(f"Point must have exactly two coordinates, got {point!r}")
        if not np.all(np.isfinite(result)):
            raise InvalidParameterError(f"Point contains invalid coordinates (NaN or infinity): {point!r}")
        result.flags.writeable = False
        return result

    @staticmethod
    def cross(vec_a: NDArray[np.float64], vec_b: NDArray[np.float64]) -> float:
        """z-component of the cross product of two 2D vectors."""
        return float(vec_a[0] * vec_b[1] - vec_a[1] * vec_b[0])

    @staticmethod
    def dot(vec_a: NDArray[np.float64], vec_b: NDArray[np.float64]) -> float:
        """Dot product of two 2D vectors."""
        return float(vec_a[0] * vec_b[0] + vec_a[1] * vec_b[1])

    @staticmethod
    def norm(vec: NDArray[np.float64]) -> float:
        """Length of a 2D vector."""
        return math.hypot(vec[0], vec[1])

    @staticmethod
    def distance(point_a: NDArray[np.float64], point_b: NDArray[np.float64]) -> float:
        """Euclidean distance between two 2D points."""
        return math.hypot(point_a[0] - point_b[0], point_a[1] - point_b[1])

    @staticmethod
    def perpendicular(vec: NDArray[np.float64]) -> NDArray[np.float64]:
        """The given vector rotated by +90 degrees."""
        return np.array([-vec[1], vec[0]], dtype=np.float64)

    @staticmethod
    def is_zero(vec: NDArray[np.float64], scale: float = 1.0) -> bool:
        """
        Check if a vector is (numerically) of zero length.

        Args:
            vec (NDArray[np.float64]): vector to check
            scale (float, optional): typical length of the geometry the vector belongs to.
                Defaults to 1.0.

        Returns:
            bool: True if the length of _vec_ is below GEOM_EPS relative to _scale_
        """
        return GeomMath.norm(vec) <= GEOM_EPS * max(scale, 1.0)


###############################################################################
# Line
###############################################################################
class Line:
    """An infinite 2D line given by a point on the line and a direction."""

    __slots__ = ("_point", "_direction")

    def __init__(self, point: PointLike, direction: PointLike):
        """Initialize the line.

        Args:
            point: A point the line passes through
            direction: The (non-zero) direction of the line

        Raises:
            DegenerateGeometryError: if _direction_ has zero length
        """
        self._point = GeomMath.as_point(point)
        self._direction = GeomMath.as_point(direction)
        if GeomMath.norm(self._direction) == 0.0:
            raise DegenerateGeometryError("Line direction must be non-zero")

    @property
    def point(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: A point on the line."""
        return self._point

    @property
    def direction(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: The direction of the line."""
        return self._direction

    @classmethod
    def from_points(cls, point_a: PointLike, point_b: PointLike) -> Line:
        """Create the line passing through _point_a_ and _point_b_."""
        start = GeomMath.as_point(point_a)
        return cls(start, GeomMath.as_point(point_b) - start)

    @classmethod
    def perpendicular_at(cls, point: PointLike, direction: PointLike) -> Line:
        """Create the line through _point_ which is perpendicular to _direction_."""
        return cls(point, GeomMath.perpendicular(GeomMath.as_point(direction)))

    def point_at(self, s: float) -> NDArray[np.float64]:
        """Point at parameter _s_, i.e. point + s * direction."""
        return self._point + s * self._direction

    def intersection(self, other: Line) -> NDArray[np.float64]:
        """
        Calculate the intersection point of this line and the _other_ line.

        Solves point + s * direction = other.point + u * other.direction for s.

        Args:
            other (Line): the line to intersect with

        Returns:
            NDArray[np.float64]: the intersection point

        Raises:
            DegenerateGeometryError: if the lines are parallel or coincident
        """
        denominator = GeomMath.cross(self._direction, other.direction)
        scale = GeomMath.norm(self._direction) * GeomMath.norm(other.direction)
        if abs(denominator) <= GEOM_EPS * scale:
            raise DegenerateGeometryError("Lines are parallel, no unique intersection point")

        s = GeomMath.cross(other.point - self._point, other.direction) / denominator
        return self.point_at(s)

    def __repr__(self) -> str:
        return (
            f"Line(point=({self._point[0]}, {self._point[1]}), "
            f"direction=({self._direction[0]}, {self._direction[1]}))"
        )
