"""Circular arcs and biarcs (two tangent arcs) built from points and tangents."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from biarc.bezier import CubicBezier
from biarc.common import DegenerateGeometryError, PointLike
from biarc.geom import GeomMath, Line


###############################################################################
# Arc
###############################################################################
@dataclass(frozen=True, eq=False)
class Arc:
    """
    Circular arc from start_point to end_point.

    Angles are measured in radians in the mathematical sense (counter-clockwise in a
    y-up coordinate system). A positive sweep_angle travels in increasing angle direction.

    If the arc degenerates to its chord (centre at infinity) the arc is a straight arc:
    radius is infinite, center is None and the angles are 0.

    Attributes:
        center (Optional[NDArray[np.float64]]): centre of the circle, None for a straight arc
        radius (float): radius of the circle, math.inf for a straight arc
        start_angle (float): angle of start_point seen from the centre
        sweep_angle (float): signed angle covered by the arc
        start_point (NDArray[np.float64]): first point of the arc
        end_point (NDArray[np.float64]): last point of the arc
    """

    center: Optional[NDArray[np.float64]]
    radius: float
    start_angle: float
    sweep_angle: float
    start_point: NDArray[np.float64]
    end_point: NDArray[np.float64]

    @classmethod
    def straight(cls, start: PointLike, end: PointLike) -> Arc:
        """Create a straight arc, i.e. the chord from _start_ to _end_."""
        return cls(None, math.inf, 0.0, 0.0, GeomMath.as_point(start), GeomMath.as_point(end))

    @classmethod
    def from_center(cls, center: PointLike, start: PointLike, end: PointLike, ccw: bool) -> Arc:
        """
        Create the arc around _center_ from _start_ to _end_.

        The sweep angle is normalized to (0, 2*pi) for ccw and (-2*pi, 0) otherwise.
        """
        center_pt = GeomMath.as_point(center)
        start_pt = GeomMath.as_point(start)
        end_pt = GeomMath.as_point(end)

        start_vec = start_pt - center_pt
        end_vec = end_pt - center_pt
        start_angle = math.atan2(start_vec[1], start_vec[0])
        sweep_angle = math.atan2(end_vec[1], end_vec[0]) - start_angle
        if ccw and sweep_angle < 0.0:
            sweep_angle += 2.0 * math.pi
        elif not ccw and sweep_angle > 0.0:
            sweep_angle -= 2.0 * math.pi

        return cls(center_pt, GeomMath.norm(start_vec), start_angle, sweep_angle, start_pt, end_pt)

    @classmethod
    def from_start_tangent(cls, start: PointLike, tangent: PointLike, end: PointLike) -> Arc:
        """
        Create the arc from _start_ to _end_ whose direction of travel at _start_ is _tangent_.

        The centre is the intersection of the perpendicular to _tangent_ at _start_ and the
        perpendicular bisector of the chord. Falls back to a straight arc if both are parallel.
        """
        start_pt = GeomMath.as_point(start)
        end_pt = GeomMath.as_point(end)
        chord = end_pt - start_pt
        tangent_vec = GeomMath.as_point(tangent)
        try:
            center = Line.perpendicular_at(start_pt, tangent_vec).intersection(
                Line.perpendicular_at((start_pt + end_pt) / 2.0, chord)
            )
        except DegenerateGeometryError:
            return cls.straight(start_pt, end_pt)
        return cls.from_center(center, start_pt, end_pt, GeomMath.cross(tangent_vec, chord) > 0.0)

    @classmethod
    def from_end_tangent(cls, start: PointLike, end: PointLike, tangent: PointLike) -> Arc:
        """
        Create the arc from _start_ to _end_ whose direction of travel at _end_ is _tangent_.

        Falls back to a straight arc if the construction is degenerate.
        """
        start_pt = GeomMath.as_point(start)
        end_pt = GeomMath.as_point(end)
        chord = end_pt - start_pt
        tangent_vec = GeomMath.as_point(tangent)
        try:
            center = Line.perpendicular_at(end_pt, tangent_vec).intersection(
                Line.perpendicular_at((start_pt + end_pt) / 2.0, chord)
            )
        except DegenerateGeometryError:
            return cls.straight(start_pt, end_pt)
        return cls.from_center(center, start_pt, end_pt, GeomMath.cross(chord, tangent_vec) > 0.0)

    @property
    def is_straight(self) -> bool:
        """bool: True if the arc degenerated to its chord."""
        return self.center is None

    @property
    def is_clockwise(self) -> bool:
        """bool: True if the arc travels in decreasing angle direction (clockwise in a y-up system)."""
        return self.sweep_angle < 0.0

    @property
    def end_angle(self) -> float:
        """float: start_angle + sweep_angle."""
        return self.start_angle + self.sweep_angle

    @property
    def length(self) -> float:
        """float: arc length radius * |sweep_angle|, chord length for a straight arc."""
        if self.center is None:
            return GeomMath.distance(self.start_point, self.end_point)
        return self.radius * abs(self.sweep_angle)

    @property
    def start_tangent(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: unit direction of travel at the start point."""
        return self._tangent_at(self.start_point)

    @property
    def end_tangent(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: unit direction of travel at the end point."""
        return self._tangent_at(self.end_point)

    def _tangent_at(self, point: NDArray[np.float64]) -> NDArray[np.float64]:
        if self.center is None:
            direction = self.end_point - self.start_point
        else:
            direction = math.copysign(1.0, self.sweep_angle) * GeomMath.perpendicular(point - self.center)
        length = GeomMath.norm(direction)
        if length == 0.0:
            return np.zeros(2, dtype=np.float64)
        return direction / length

    def point_at(self, t: Union[float, NDArray[np.float64]]) -> NDArray[np.float64]:
        """
        Calculate the point(s) on the arc at parameter _t_ in [0, 1] (uniform in angle).

        Args:
            t: a single parameter value or an array of n parameter values

        Returns:
            NDArray[np.float64]: shape (2,) for a scalar _t_, shape (n, 2) for an array
        """
        t_arr = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        if self.center is None:
            return self.start_point + t_arr * (self.end_point - self.start_point)
        angle = self.start_angle + t_arr * self.sweep_angle
        return self.center + self.radius * np.concatenate((np.cos(angle), np.sin(angle)), axis=-1)

    def svg_path_command(self) -> str:
        """
        SVG path command drawing the arc from the current point (= start_point).

        Returns:
            str: "A rx ry rotation large-arc-flag sweep-flag x y" or "L x y" for a straight arc
        """
        x, y = self.end_point
        if self.center is None:
            return f"L {x} {y}"
        large_arc = 1 if abs(self.sweep_angle) > math.pi else 0
        sweep = 1 if self.sweep_angle > 0.0 else 0
        return f"A {self.radius} {self.radius} 0 {large_arc} {sweep} {x} {y}"

    def __str__(self) -> str:
        if self.center is None:
            return f"Arc(straight, start={tuple(self.start_point)}, end={tuple(self.end_point)})"
        return (
            f"Arc(center=({self.center[0]}, {self.center[1]}), radius={self.radius}, "
            f"start_angle={self.start_angle}, sweep_angle={self.sweep_angle})"
        )


###############################################################################
# BiArc
###############################################################################
@dataclass(frozen=True, eq=False)
class BiArc:
    """
    Two circular arcs a1 and a2 joined at the transition point with a common tangent.

    a1 runs from the start point to the transition point, a2 from the transition point
    to the end point.
    """

    a1: Arc
    a2: Arc

    @classmethod
    def from_points_and_tangents(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        p1: PointLike,
        t1: PointLike,
        p2: PointLike,
        t2: PointLike,
        transition: PointLike,
    ) -> BiArc:
        """
        Create the biarc from _p1_ to _p2_ through _transition_.

        Args:
            p1: start point
            t1: direction of travel at p1
            p2: end point
            t2: direction of travel at p2
            transition: the point where both arcs meet

        Returns:
            BiArc: a1 tangent to t1 at p1, a2 tangent to t2 at p2
        """
        return cls(
            Arc.from_start_tangent(p1, t1, transition),
            Arc.from_end_tangent(transition, p2, t2),
        )

    @classmethod
    def from_cubic_bezier(cls, curve: CubicBezier) -> BiArc:
        """
        Create the biarc approximating the given cubic Bezier _curve_.

        The transition point is the incenter of the triangle formed by the end points
        and the intersection of the tangent lines at the end points.
        """
        t1 = curve.start_tangent
        t2 = curve.end_tangent
        transition = cls.transition_point(curve.p1, t1, curve.p2, t2)
        return cls.from_points_and_tangents(curve.p1, t1, curve.p2, t2, transition)

    @staticmethod
    def transition_point(
        p1: NDArray[np.float64], t1: NDArray[np.float64], p2: NDArray[np.float64], t2: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """
        Calculate the incenter G of the triangle (p1, V, p2).

        V is the intersection of the tangent lines at p1 and p2. If the tangents are parallel
        or of zero length, V is replaced by the midpoint of the chord (then G is that midpoint).

            G = (|p2V| * p1 + |p1V| * p2 + |p1p2| * V) / (|p2V| + |p1V| + |p1p2|)
        """
        try:
            vertex = Line(p1, t1).intersection(Line(p2, t2))
        except DegenerateGeometryError:
            vertex = (p1 + p2) / 2.0

        d_p2v = GeomMath.distance(p2, vertex)
        d_p1v = GeomMath.distance(p1, vertex)
        d_p1p2 = GeomMath.distance(p1, p2)
        perimeter = d_p2v + d_p1v + d_p1p2
        if perimeter == 0.0:
            return np.array(p1, dtype=np.float64)
        return (d_p2v * p1 + d_p1v * p2 + d_p1p2 * vertex) / perimeter

    @property
    def start_point(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: start point of a1."""
        return self.a1.start_point

    @property
    def transition(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: the point where a1 ends and a2 starts."""
        return self.a1.end_point

    @property
    def end_point(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: end point of a2."""
        return self.a2.end_point

    @property
    def length(self) -> float:
        """float: total arc length of both arcs."""
        return self.a1.length + self.a2.length

    def point_at(self, t: Union[float, NDArray[np.float64]]) -> NDArray[np.float64]:
        """
        Calculate the point(s) on the biarc at parameter _t_ in [0, 1].

        The parameter is distributed over both arcs in proportion to their length, so
        uniform steps in _t_ are uniform steps in distance.

        Args:
            t: a single parameter value or an array of n parameter values

        Returns:
            NDArray[np.float64]: shape (2,) for a scalar _t_, shape (n, 2) for an array
        """
        total = self.length
        ratio = self.a1.length / total if total > 0.0 else 0.5
        if ratio <= 0.0:
            return self.a2.point_at(t)
        if ratio >= 1.0:
            return self.a1.point_at(t)

        t_arr = np.asarray(t, dtype=np.float64)
        first = self.a1.point_at(t_arr / ratio)
        second = self.a2.point_at((t_arr - ratio) / (1.0 - ratio))
        on_first = np.asarray(t_arr <= ratio)[..., np.newaxis]
        return np.where(on_first, first, second)

    def svg_path_string(self, move_to_start: bool = True) -> str:
        """
        SVG path string drawing both arcs.

        Args:
            move_to_start (bool, optional): start with a MoveTo to start_point. Defaults to True.
        """
        commands = [self.a1.svg_path_command(), self.a2.svg_path_command()]
        if move_to_start:
            x, y = self.start_point
            commands.insert(0, f"M {x} {y}")
        return " ".join(commands)

    def __str__(self) -> str:
        return f"BiArc(a1={self.a1}, a2={self.a2})"
