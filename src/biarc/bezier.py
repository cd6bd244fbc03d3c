"""Cubic Bezier curve handling: evaluation, subdivision and inflexion points."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from biarc.common import InvalidParameterError, PointLike, RootKind
from biarc.consts import GEOM_EPS
from biarc.geom import GeomMath


###############################################################################
# InflexionRoot
###############################################################################
@dataclass(frozen=True)
class InflexionRoot:
    """
    One root of the inflexion quadratic of a cubic Bezier curve.

    Attributes:
        kind (RootKind): REAL, COMPLEX or NONE (root does not exist)
        value (Optional[complex]): the root; imaginary part is 0 for REAL, None for NONE
    """

    kind: RootKind
    value: Optional[complex] = None

    @classmethod
    def real(cls, t: float) -> InflexionRoot:
        """Create a real root at parameter _t_."""
        return cls(RootKind.REAL, complex(t, 0.0))

    @classmethod
    def complex_root(cls, value: complex) -> InflexionRoot:
        """Create one root of a complex conjugate pair."""
        return cls(RootKind.COMPLEX, value)

    @classmethod
    def missing(cls) -> InflexionRoot:
        """Create a missing root (degenerated quadratic)."""
        return cls(RootKind.NONE)

    @property
    def is_real(self) -> bool:
        """bool: True if the root is a real number."""
        return self.kind is RootKind.REAL

    @property
    def t(self) -> float:
        """float: the parameter value of a real root."""
        if self.kind is not RootKind.REAL or self.value is None:
            raise ValueError(f"Root of kind {self.kind.name} has no real parameter value")
        return self.value.real

    @property
    def is_real_inflexion(self) -> bool:
        """bool: True if the root is real and lies strictly inside the segment, i.e. 0 < t < 1."""
        return self.is_real and 0.0 < self.t < 1.0


###############################################################################
# CubicBezier
###############################################################################
class CubicBezier:
    """
    Cubic Bezier segment given by start point p1, control points c1, c2 and end point p2.

    B(t) = (1-t)^3*P1 + 3*(1-t)^2*t*C1 + 3*(1-t)*t^2*C2 + t^3*P2

    The control points are stored as read-only array, a curve never changes
    after construction. Subdivision returns new independent curves.
    """

    __slots__ = ("_points",)

    def __init__(self, p1: PointLike, c1: PointLike, c2: PointLike, p2: PointLike):
        """Initialize the curve.

        Args:
            p1: start point
            c1: first control point
            c2: second control point
            p2: end point

        Raises:
            InvalidParameterError: if a point is not 2D or contains NaN/infinity
        """
        points = np.array([GeomMath.as_point(pt) for pt in (p1, c1, c2, p2)], dtype=np.float64)
        points.flags.writeable = False
        self._points: NDArray[np.float64] = points

    @classmethod
    def from_points(cls, points: Union[Sequence[PointLike], NDArray[np.float64]]) -> CubicBezier:
        """
        Create a curve from a sequence of exactly four points (start, control1, control2, end).

        Raises:
            InvalidParameterError: if not exactly four points are given
        """
        if len(points) != 4:
            raise InvalidParameterError(f"A cubic Bezier curve needs exactly 4 points, got {len(points)}")
        return cls(points[0], points[1], points[2], points[3])

    @property
    def p1(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: The start point."""
        return self._points[0]

    @property
    def c1(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: The first control point."""
        return self._points[1]

    @property
    def c2(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: The second control point."""
        return self._points[2]

    @property
    def p2(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: The end point."""
        return self._points[3]

    @property
    def points(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: All four points as read-only array of shape (4, 2)."""
        return self._points

    @property
    def chord_length(self) -> float:
        """float: Distance between start and end point."""
        return GeomMath.distance(self.p1, self.p2)

    @property
    def control_length(self) -> float:
        """float: Length of the control polygon, an upper bound of the curve length."""
        diffs = np.diff(self._points, axis=0)
        return float(np.sum(np.hypot(diffs[:, 0], diffs[:, 1])))

    @property
    def start_tangent(self) -> NDArray[np.float64]:
        """
        Direction of travel at the start point.

        If c1 coincides with p1 the next distinct control point defines the direction.
        A curve collapsed to a single point has a zero tangent.
        """
        scale = self.control_length
        for other in (self.c1, self.c2, self.p2):
            tangent = other - self.p1
            if not GeomMath.is_zero(tangent, scale):
                return tangent
        return np.zeros(2, dtype=np.float64)

    @property
    def end_tangent(self) -> NDArray[np.float64]:
        """
        Direction of travel at the end point.

        If c2 coincides with p2 the previous distinct control point defines the direction.
        """
        scale = self.control_length
        for other in (self.c2, self.c1, self.p1):
            tangent = self.p2 - other
            if not GeomMath.is_zero(tangent, scale):
                return tangent
        return np.zeros(2, dtype=np.float64)

    def point_at(self, t: Union[float, NDArray[np.float64]]) -> NDArray[np.float64]:
        """
        Calculate the point(s) on the curve at parameter _t_ using the Bernstein basis.

        Values of t outside [0, 1] extrapolate the same polynomial.

        Args:
            t: a single parameter value or an array of n parameter values

        Returns:
            NDArray[np.float64]: shape (2,) for a scalar _t_, shape (n, 2) for an array
        """
        t_arr = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        omt = 1.0 - t_arr
        return (
            omt**3 * self._points[0]
            + 3.0 * omt**2 * t_arr * self._points[1]
            + 3.0 * omt * t_arr**2 * self._points[2]
            + t_arr**3 * self._points[3]
        )

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        """
        Polygonize the curve into _steps_ line segments of uniform parameter step.

        Returns:
            NDArray[np.float64] of shape (steps+1, 2) containing the polygon points
        """
        if steps < 1:
            raise InvalidParameterError(f"Number of steps must be positive, got {steps}")
        return self.point_at(np.linspace(0.0, 1.0, steps + 1, dtype=np.float64))

    def split(self, t: float) -> Tuple[CubicBezier, CubicBezier]:
        """
        Subdivide the curve at parameter _t_ using de Casteljau's algorithm.

        A value of 0 or 1 produces a zero-length curve on one side.

        Returns:
            Tuple[CubicBezier, CubicBezier]: the parts covering [0, t] and [t, 1]
        """
        p1, c1, c2, p2 = self._points
        p12 = p1 + t * (c1 - p1)
        p23 = c1 + t * (c2 - c1)
        p34 = c2 + t * (p2 - c2)
        p123 = p12 + t * (p23 - p12)
        p234 = p23 + t * (p34 - p23)
        p1234 = p123 + t * (p234 - p123)
        return CubicBezier(p1, p12, p123, p1234), CubicBezier(p1234, p234, p34, p2)

    @property
    def inflexion_points(self) -> Tuple[InflexionRoot, InflexionRoot]:
        """
        Roots of the inflexion condition B'(t) x B''(t) = 0.

        With B(t) = a*t^3 + b*t^2 + c*t + d the condition reduces to the quadratic
            3*(a x b)*t^2 + 3*(a x c)*t + (b x c) = 0

        Real roots are returned in ascending order. Complex roots are tagged as
        RootKind.COMPLEX by the sign of the discriminant. If the quadratic degenerates
        to a linear equation, the second root is RootKind.NONE.

        Returns:
            Tuple[InflexionRoot, InflexionRoot]: both roots
        """
        p1, c1, c2, p2 = self._points
        a = -p1 + 3.0 * c1 - 3.0 * c2 + p2
        b = 3.0 * p1 - 6.0 * c1 + 3.0 * c2
        c = 3.0 * (c1 - p1)

        qa = 3.0 * GeomMath.cross(a, b)
        qb = 3.0 * GeomMath.cross(a, c)
        qc = GeomMath.cross(b, c)

        coeff_scale = max(abs(qa), abs(qb), abs(qc))
        if coeff_scale == 0.0:
            # straight line: the curvature vanishes everywhere
            return InflexionRoot.missing(), InflexionRoot.missing()

        if abs(qa) <= GEOM_EPS * coeff_scale:
            if abs(qb) <= GEOM_EPS * coeff_scale:
                return InflexionRoot.missing(), InflexionRoot.missing()
            return InflexionRoot.real(-qc / qb), InflexionRoot.missing()

        discriminant = qb * qb - 4.0 * qa * qc
        if discriminant < 0.0:
            root = (-qb + cmath.sqrt(discriminant)) / (2.0 * qa)
            return InflexionRoot.complex_root(root), InflexionRoot.complex_root(root.conjugate())

        # numerically stable form avoiding cancellation
        q = -0.5 * (qb + math.copysign(math.sqrt(discriminant), qb))
        t1 = q / qa
        t2 = qc / q if q != 0.0 else t1
        t1, t2 = min(t1, t2), max(t1, t2)
        return InflexionRoot.real(t1), InflexionRoot.real(t2)

    def approx_equal(self, other: CubicBezier, rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        """Check if all control points of _other_ are close to the ones of this curve."""
        return bool(np.allclose(self._points, other.points, rtol=rtol, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubicBezier):
            return NotImplemented
        return bool(np.array_equal(self._points, other.points))

    def __hash__(self) -> int:
        return hash(self._points.tobytes())

    def __repr__(self) -> str:
        coords = ", ".join(f"({x}, {y})" for x, y in self._points)
        return f"CubicBezier({coords})"
