"""Test module for Arc and BiArc in biarc.arc

The tests are run using pytest.
"""

import math

import numpy as np
import pytest

from biarc.arc import Arc, BiArc
from biarc.bezier import CubicBezier

CURVE_NO_INFLEXION = CubicBezier((100, 500), (150, 100), (500, 150), (350, 350))
CURVE_NO_INFLEXION_2 = CubicBezier((100, 500), (250, 350), (450, 350), (500, 500))


def _unit(vec) -> np.ndarray:
    vec = np.asarray(vec, dtype=np.float64)
    return vec / np.hypot(vec[0], vec[1])


###############################################################################
# Arc Tests
###############################################################################


class TestArc:
    """Test class for Arc functionality."""

    def test_from_center_counter_clockwise(self):
        """Test a quarter circle in increasing angle direction."""
        arc = Arc.from_center((0, 0), (1, 0), (0, 1), ccw=True)

        assert arc.radius == pytest.approx(1.0)
        assert arc.start_angle == pytest.approx(0.0)
        assert arc.sweep_angle == pytest.approx(math.pi / 2)
        assert arc.length == pytest.approx(math.pi / 2)
        assert not arc.is_clockwise
        assert np.allclose(arc.point_at(0.5), [math.sqrt(0.5), math.sqrt(0.5)])

    def test_from_center_clockwise(self):
        """Test the complementary three quarter circle in decreasing angle direction."""
        arc = Arc.from_center((0, 0), (1, 0), (0, 1), ccw=False)

        assert arc.sweep_angle == pytest.approx(-1.5 * math.pi)
        assert arc.is_clockwise
        assert arc.end_angle == pytest.approx(-1.5 * math.pi)
        assert np.allclose(arc.point_at(1.0), [0.0, 1.0])
        assert np.allclose(arc.point_at(1.0 / 3.0), [0.0, -1.0])

    def test_from_start_tangent(self):
        """Test a half circle starting upwards."""
        arc = Arc.from_start_tangent((1, 0), (0, 1), (-1, 0))

        assert np.allclose(arc.center, [0.0, 0.0])
        assert arc.radius == pytest.approx(1.0)
        assert arc.sweep_angle == pytest.approx(math.pi)
        assert np.allclose(arc.point_at(0.5), [0.0, 1.0])
        assert np.allclose(arc.start_tangent, [0.0, 1.0])

    def test_from_end_tangent(self):
        """Test a half circle ending downwards."""
        arc = Arc.from_end_tangent((-1, 0), (1, 0), (0, -1))

        assert np.allclose(arc.center, [0.0, 0.0])
        assert arc.sweep_angle == pytest.approx(-math.pi)
        assert np.allclose(arc.point_at(0.5), [0.0, 1.0])
        assert np.allclose(arc.end_tangent, [0.0, -1.0])

    def test_tangent_along_chord_gives_straight_arc(self):
        """Test the fallback when the arc degenerates to its chord."""
        arc = Arc.from_start_tangent((0, 0), (1, 0), (2, 0))

        assert arc.is_straight
        assert arc.center is None
        assert math.isinf(arc.radius)
        assert arc.length == pytest.approx(2.0)
        assert np.allclose(arc.point_at(0.25), [0.5, 0.0])
        assert np.allclose(arc.start_tangent, [1.0, 0.0])
        assert arc.svg_path_command().startswith("L ")

    def test_zero_tangent_gives_straight_arc(self):
        """Test that a zero tangent does not produce NaN values."""
        arc = Arc.from_start_tangent((0, 0), (0, 0), (3, 4))

        assert arc.is_straight
        assert arc.length == pytest.approx(5.0)

    def test_point_at_array(self):
        """Test vectorized evaluation."""
        arc = Arc.from_center((0, 0), (1, 0), (-1, 0), ccw=True)
        points = arc.point_at(np.array([0.0, 0.5, 1.0]))

        assert points.shape == (3, 2)
        assert np.allclose(points, [[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0]])

    def test_svg_path_command(self):
        """Test the SVG arc command flags."""
        small = Arc.from_center((0, 0), (1, 0), (0, 1), ccw=True)
        large = Arc.from_center((0, 0), (1, 0), (0, 1), ccw=False)

        small_parts = small.svg_path_command().split()
        large_parts = large.svg_path_command().split()

        assert small_parts[0] == "A"
        assert float(small_parts[1]) == pytest.approx(1.0)
        assert small_parts[4:6] == ["0", "1"]
        assert large_parts[4:6] == ["1", "0"]
        assert float(small_parts[6]) == pytest.approx(0.0, abs=1e-12)
        assert float(small_parts[7]) == pytest.approx(1.0)


###############################################################################
# BiArc Tests
###############################################################################


class TestBiArc:
    """Test class for BiArc functionality."""

    def test_transition_point_is_incenter(self):
        """Test the incenter of a symmetric triangle."""
        transition = BiArc.transition_point(
            np.array([0.0, 0.0]), np.array([1.0, 1.0]), np.array([2.0, 0.0]), np.array([1.0, -1.0])
        )

        assert np.allclose(transition, [1.0, math.sqrt(2.0) - 1.0])

    def test_transition_point_for_parallel_tangents(self):
        """Test the chord midpoint fallback for parallel tangents."""
        transition = BiArc.transition_point(
            np.array([0.0, 0.0]), np.array([0.0, 1.0]), np.array([2.0, 0.0]), np.array([0.0, -1.0])
        )

        assert np.allclose(transition, [1.0, 0.0])

    def test_symmetric_biarc(self):
        """Test both arcs of a symmetric biarc."""
        p1 = np.array([0.0, 0.0])
        p2 = np.array([2.0, 0.0])
        t1 = np.array([1.0, 1.0])
        t2 = np.array([1.0, -1.0])
        biarc = BiArc.from_points_and_tangents(p1, t1, p2, t2, BiArc.transition_point(p1, t1, p2, t2))

        assert np.allclose(biarc.a1.center, [1.0, -1.0])
        assert biarc.a1.radius == pytest.approx(math.sqrt(2.0))
        assert biarc.a1.sweep_angle == pytest.approx(-math.pi / 4)
        assert biarc.a2.radius == pytest.approx(math.sqrt(2.0))
        assert biarc.length == pytest.approx(math.sqrt(2.0) * math.pi / 2)
        assert np.allclose(biarc.a1.end_tangent, [1.0, 0.0])
        assert np.allclose(biarc.a2.start_tangent, [1.0, 0.0])

    @pytest.mark.parametrize("curve", [CURVE_NO_INFLEXION, CURVE_NO_INFLEXION_2])
    def test_end_points(self, curve):
        """Test that the biarc starts and ends at the curve's end points."""
        biarc = BiArc.from_cubic_bezier(curve)

        assert np.allclose(biarc.point_at(0.0), curve.p1, atol=1e-6)
        assert np.allclose(biarc.point_at(1.0), curve.p2, atol=1e-6)
        assert np.allclose(biarc.start_point, curve.p1)
        assert np.allclose(biarc.end_point, curve.p2)

    @pytest.mark.parametrize("curve", [CURVE_NO_INFLEXION, CURVE_NO_INFLEXION_2])
    def test_tangents_follow_curve(self, curve):
        """Test tangency at both end points and tangent continuity at the transition point."""
        biarc = BiArc.from_cubic_bezier(curve)

        assert np.allclose(biarc.a1.start_tangent, _unit(curve.c1 - curve.p1), atol=1e-9)
        assert np.allclose(biarc.a2.end_tangent, _unit(curve.p2 - curve.c2), atol=1e-9)
        assert np.allclose(biarc.a1.end_tangent, biarc.a2.start_tangent, atol=1e-6)

    def test_point_at_is_uniform_in_arc_length(self):
        """Test that the parameter is shared in proportion to the arc lengths."""
        biarc = BiArc.from_cubic_bezier(CURVE_NO_INFLEXION)
        ratio = biarc.a1.length / biarc.length

        assert np.allclose(biarc.point_at(ratio), biarc.transition)
        assert np.allclose(biarc.point_at(ratio / 2), biarc.a1.point_at(0.5))
        assert np.allclose(biarc.point_at(ratio + (1 - ratio) / 2), biarc.a2.point_at(0.5))

    def test_point_at_array(self):
        """Test vectorized evaluation against scalar evaluation."""
        biarc = BiArc.from_cubic_bezier(CURVE_NO_INFLEXION)
        t = np.linspace(0.0, 1.0, 9)
        points = biarc.point_at(t)

        assert points.shape == (9, 2)
        for i, ti in enumerate(t):
            assert np.allclose(points[i], biarc.point_at(ti))

    def test_straight_curve(self):
        """Test a straight curve: parallel tangents and straight arcs."""
        biarc = BiArc.from_cubic_bezier(CubicBezier((0, 0), (1, 0), (2, 0), (3, 0)))

        assert biarc.a1.is_straight and biarc.a2.is_straight
        assert np.allclose(biarc.transition, [1.5, 0.0])
        assert biarc.length == pytest.approx(3.0)
        assert np.allclose(biarc.point_at(1.0 / 3.0), [1.0, 0.0])

    def test_collapsed_curve(self):
        """Test that a curve collapsed to a point gives a finite zero-length biarc."""
        biarc = BiArc.from_cubic_bezier(CubicBezier((1, 1), (1, 1), (1, 1), (1, 1)))

        assert biarc.length == 0.0
        assert np.allclose(biarc.point_at(np.linspace(0.0, 1.0, 3)), [[1.0, 1.0]] * 3)

    def test_svg_path_string(self):
        """Test the SVG path with both arcs."""
        biarc = BiArc.from_cubic_bezier(CURVE_NO_INFLEXION)
        parts = biarc.svg_path_string().split()

        assert parts[0] == "M"
        assert parts.count("A") == 2
        assert not biarc.svg_path_string(move_to_start=False).startswith("M")
