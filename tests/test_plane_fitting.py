"""
Line/plane fitter: degenerate fallbacks in their fixed order, vertical
planes, and exact reproduction of planar chart data.

Published charts repeat samples in flat regions, so the duplicate-pair
fallbacks must select the same 2-point line every time.
"""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

import pytest  # noqa: E402

from core.errors import DegenerateGeometryError, GeometryError, VerticalPlaneError  # noqa: E402
from core.fitting import (  # noqa: E402
    Axis,
    ConstantFunction,
    LineFunction,
    PlaneFunction,
    line_from_two_points,
    line_from_two_points_2d,
    plane_from_three_points,
)
from core.geometry import Point2D, Point3D  # noqa: E402


def _plane(x, y):
    return 2 * x + 3 * y + 1


class TestLineFromTwoPoints:

    def test_prefers_x_axis(self):
        line = line_from_two_points(Point3D(0, 0, 1), Point3D(10, 5, 21))
        assert line.variable is Axis.X
        assert line.slope == pytest.approx(2.0)
        assert line.intercept == pytest.approx(1.0)
        # y is ignored by a line in x
        assert line(5, 1000) == pytest.approx(11.0)

    def test_falls_back_to_y_axis(self):
        line = line_from_two_points(Point3D(10, 0, 10), Point3D(10, 50, 35))
        assert line.variable is Axis.Y
        assert line.evaluate(-99, 26) == pytest.approx(23.0)

    def test_intercept_uses_first_point(self):
        line = line_from_two_points(Point3D(2, 0, 7), Point3D(4, 0, 11))
        assert line.intercept == pytest.approx(7 - 2 * 2)

    def test_coincident_points_raise(self):
        with pytest.raises(DegenerateGeometryError):
            line_from_two_points(Point3D(1, 1, 0), Point3D(1, 1, 5))

    def test_degenerate_is_a_geometry_error(self):
        assert issubclass(DegenerateGeometryError, GeometryError)
        assert issubclass(VerticalPlaneError, ValueError)


class TestPlaneFromThreePoints:

    def test_all_equal_gives_constant(self):
        p = Point3D(3, 4, 42)
        surface = plane_from_three_points(p, p, Point3D(3, 4, 42))
        assert isinstance(surface, ConstantFunction)
        for x, y in [(0, 0), (100, -5), (3, 4)]:
            assert surface(x, y) == 42

    @pytest.mark.parametrize(
        "triple, expected_line",
        [
            # (A == B) -> line(C, A)
            ((Point3D(0, 0, 1), Point3D(0, 0, 1), Point3D(10, 0, 21)),
             (Point3D(10, 0, 21), Point3D(0, 0, 1))),
            # (A == C) -> line(B, A)
            ((Point3D(0, 0, 1), Point3D(0, 10, 31), Point3D(0, 0, 1)),
             (Point3D(0, 10, 31), Point3D(0, 0, 1))),
            # (B == C) -> line(A, B)
            ((Point3D(5, 0, 11), Point3D(5, 5, 26), Point3D(5, 5, 26)),
             (Point3D(5, 0, 11), Point3D(5, 5, 26))),
        ],
    )
    def test_duplicate_pair_collapses_to_line(self, triple, expected_line):
        surface = plane_from_three_points(*triple)
        assert isinstance(surface, LineFunction)
        assert surface == line_from_two_points(*expected_line)

    def test_duplicate_pair_over_same_position_raises(self):
        """A duplicate pair plus a third sample at the same x, y cannot form a line."""
        a = Point3D(1, 1, 10)
        with pytest.raises(DegenerateGeometryError):
            plane_from_three_points(a, a, Point3D(1, 1, 20))

    def test_collinear_points_raise_vertical_plane(self):
        with pytest.raises(VerticalPlaneError):
            plane_from_three_points(Point3D(0, 0, 0), Point3D(1, 1, 5), Point3D(2, 2, 3))

    def test_reproduces_exact_plane(self):
        pts = [Point3D(x, y, _plane(x, y)) for x, y in [(0, 0), (10, 0), (0, 10)]]
        surface = plane_from_three_points(*pts)
        assert isinstance(surface, PlaneFunction)
        for x, y in [(0, 0), (2.5, 7.5), (-4, 12), (100, 100)]:
            assert surface(x, y) == pytest.approx(_plane(x, y))
        a, b, c = surface.coefficients
        assert (a, b, c) == pytest.approx((2.0, 3.0, 1.0))

    def test_vertex_order_does_not_change_plane(self):
        pts = [Point3D(1, 2, 4), Point3D(7, 3, -2), Point3D(4, 9, 8)]
        forward = plane_from_three_points(*pts)
        backward = plane_from_three_points(*reversed(pts))
        assert forward(3.3, 4.4) == pytest.approx(backward(3.3, 4.4))

    def test_inputs_are_not_mutated(self):
        pts = (Point3D(0, 0, 1), Point3D(10, 0, 21), Point3D(0, 10, 31))
        snapshot = tuple(p.to_dict() for p in pts)
        plane_from_three_points(*pts)
        assert tuple(p.to_dict() for p in pts) == snapshot


class TestRendering:

    def test_constant(self):
        assert str(ConstantFunction(5.0)) == "z = 5.0"

    def test_line_in_y(self):
        assert LineFunction(0.5, 10.0, Axis.Y).render() == "z = 0.5 * y + 10.0"

    def test_line_negative_intercept(self):
        assert str(LineFunction(2.0, -3.0, Axis.X)) == "z = 2.0 * x - 3.0"

    def test_plane(self):
        surface = plane_from_three_points(
            Point3D(0, 10, 5), Point3D(0, 0, 0), Point3D(10, 0, 5)
        )
        assert str(surface) == "z = + 0.5 * x + 0.5 * y + 0.0"

    def test_plane_leading_sign(self):
        surface = plane_from_three_points(
            Point3D(0, 0, 0), Point3D(10, 0, -5), Point3D(0, 10, 5)
        )
        assert surface.render() == "z = - 0.5 * x + 0.5 * y + 0.0"


class TestGuideLine:

    def test_sloped_line(self):
        line = line_from_two_points_2d(Point2D(0, 1), Point2D(2, 5))
        assert line(1) == pytest.approx(3.0)
        assert str(line) == "y = 2.0x + 1.0"

    def test_negative_intercept_keeps_plus(self):
        line = line_from_two_points_2d(Point2D(0, -1), Point2D(1, 1))
        assert str(line) == "y = 2.0x + -1.0"

    def test_vertical_line_refuses_evaluation(self):
        line = line_from_two_points_2d(Point2D(4, 0), Point2D(4, 9))
        assert str(line) == "x = 4"
        with pytest.raises(DegenerateGeometryError):
            line(4)
