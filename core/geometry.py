"""
Nomograph Engine: Geometric Primitives
======================================

Point types and the small 2D predicates used to bracket a query point
inside a scattered chart dataset. Every function here accepts anything
with ``x``/``y`` attributes, so Point3D samples can be tested against
Point2D targets directly.
"""

from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Point2D:
    """Query target on a chart (x and y are the two chart axes)."""

    x: float
    y: float


@dataclass(frozen=True)
class Point3D:
    """Digitized chart sample: z is the value read at (x, y)."""

    x: float
    y: float
    z: float

    @classmethod
    def from_mapping(cls, data) -> "Point3D":
        return cls(x=float(data["x"]), y=float(data["y"]), z=float(data["z"]))

    def to_dict(self):
        return {"x": self.x, "y": self.y, "z": self.z}


def is_points_equal(*points: Point3D) -> bool:
    """True if fewer than two points are given or all share x, y and z."""
    if len(points) < 2:
        return True
    first = points[0]
    for point in points[1:]:
        if point.x != first.x or point.y != first.y or point.z != first.z:
            return False
    return True


def signed_area2(p1, p2, p3) -> float:
    """Twice the signed area of triangle p1p2p3 (cross-product form)."""
    return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)


def is_point_in_triangle(p, a, b, c) -> bool:
    """
    Non-strict containment test.

    Points on an edge, and every point of a fully collinear "triangle",
    count as inside: only a mix of positive and negative areas rejects.
    """
    d1 = signed_area2(p, a, b)
    d2 = signed_area2(p, b, c)
    d3 = signed_area2(p, c, a)

    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0

    return not (has_neg and has_pos)


def triangle_area(a, b, c) -> float:
    """Absolute triangle area (shoelace formula)."""
    return 0.5 * abs(a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))


def distance_2d(p, target) -> float:
    """Euclidean distance between two points projected onto the xy-plane."""
    return math.sqrt((p.x - target.x) ** 2 + (p.y - target.y) ** 2)
