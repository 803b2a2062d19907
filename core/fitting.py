"""
Nomograph Engine: Line/Plane Fitter
===================================

Builds the local surface z = f(x, y) through the three bracketing samples
of one chart step. Surfaces are a small tagged family rather than bare
callables so that evaluation and text rendering stay separate operations:

- ConstantFunction: all three samples coincide
- LineFunction:     two samples coincide, collapse to a 2-point line in x or y
- PlaneFunction:    general case, from the plane normal and offset

The degeneracy checks run in a fixed order (equal triple, equal pair,
cross product). Published charts repeat points on purpose in flat regions,
and the order decides which fallback line is produced.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import DegenerateGeometryError, VerticalPlaneError
from .geometry import Point3D, is_points_equal


class Axis(Enum):
    """Chart axis a line function depends on."""
    X = "x"
    Y = "y"


def _signed(value: float) -> str:
    value = value + 0.0  # -0.0 renders as "+ 0.0"
    return f"+ {value}" if value >= 0 else f"- {-value}"


class SurfaceFunction(ABC):
    """Affine surface over a chart step, evaluated at (x, y)."""

    @abstractmethod
    def evaluate(self, x: float, y: float) -> float:
        pass

    @abstractmethod
    def render(self) -> str:
        pass

    def __call__(self, x: float, y: float) -> float:
        return self.evaluate(x, y)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ConstantFunction(SurfaceFunction):
    value: float

    def evaluate(self, x: float, y: float) -> float:
        return self.value

    def render(self) -> str:
        return f"z = {self.value}"


@dataclass(frozen=True)
class LineFunction(SurfaceFunction):
    """z = slope * v + intercept, where v is the x or y coordinate."""

    slope: float
    intercept: float
    variable: Axis

    def evaluate(self, x: float, y: float) -> float:
        v = x if self.variable is Axis.X else y
        return self.slope * v + self.intercept

    def render(self) -> str:
        return f"z = {self.slope} * {self.variable.value} {_signed(self.intercept)}"


@dataclass(frozen=True)
class PlaneFunction(SurfaceFunction):
    """Plane nx*x + ny*y + nz*z + d = 0 solved for z (nz is never zero)."""

    nx: float
    ny: float
    nz: float
    d: float

    def evaluate(self, x: float, y: float) -> float:
        return (-self.nx * x - self.ny * y - self.d) / self.nz

    @property
    def coefficients(self):
        """(a, b, c) of z = a*x + b*y + c."""
        return (-self.nx / self.nz, -self.ny / self.nz, -self.d / self.nz)

    def render(self) -> str:
        a, b, c = self.coefficients
        return f"z = {_signed(a)} * x {_signed(b)} * y {_signed(c)}"


@dataclass(frozen=True)
class GuideLine:
    """2D chart guide line y = slope * x + intercept, or x = constant."""

    slope: float
    intercept: float
    vertical_x: float | None = None

    def __call__(self, x: float) -> float:
        if self.vertical_x is not None:
            raise DegenerateGeometryError(
                f"Cannot compute y from x on a vertical line x = {self.vertical_x}"
            )
        return self.slope * x + self.intercept

    def __str__(self) -> str:
        if self.vertical_x is not None:
            return f"x = {self.vertical_x}"
        return f"y = {self.slope}x + {self.intercept}"


def line_from_two_points(p1: Point3D, p2: Point3D) -> LineFunction:
    """
    Fit z along whichever axis varies between two samples.

    x is preferred; y is used only when both samples share x. p1 is the
    base point for the intercept.

    Raises:
        DegenerateGeometryError: both samples share x and y.
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    if dx != 0:
        m = (p2.z - p1.z) / dx
        return LineFunction(slope=m, intercept=p1.z - m * p1.x, variable=Axis.X)
    if dy != 0:
        m = (p2.z - p1.z) / dy
        return LineFunction(slope=m, intercept=p1.z - m * p1.y, variable=Axis.Y)
    raise DegenerateGeometryError(
        "Insufficient variation to define a function: x and y are constant."
    )


def line_from_two_points_2d(p1, p2) -> GuideLine:
    """y = f(x) through two points in the chart plane."""
    if p1.x == p2.x:
        return GuideLine(slope=0.0, intercept=0.0, vertical_x=p1.x)
    m = (p2.y - p1.y) / (p2.x - p1.x)
    return GuideLine(slope=m, intercept=p1.y - m * p1.x)


def plane_from_three_points(a: Point3D, b: Point3D, c: Point3D) -> SurfaceFunction:
    """
    Surface through three chart samples.

    Raises:
        DegenerateGeometryError: a duplicate pair leaves two samples that
            share x and y.
        VerticalPlaneError: the samples are collinear in the xy-plane.
    """
    if is_points_equal(a, b, c):
        return ConstantFunction(a.z)
    if is_points_equal(a, b):
        return line_from_two_points(c, a)
    if is_points_equal(a, c):
        return line_from_two_points(b, a)
    if is_points_equal(b, c):
        return line_from_two_points(a, b)

    ab = np.array([b.x - a.x, b.y - a.y, b.z - a.z], dtype=float)
    ac = np.array([c.x - a.x, c.y - a.y, c.z - a.z], dtype=float)
    nx, ny, nz = (float(v) for v in np.cross(ab, ac))
    d = -(nx * a.x + ny * a.y + nz * a.z)

    if nz == 0:
        raise VerticalPlaneError("Plane is vertical, cannot solve for z.")

    return PlaneFunction(nx=nx, ny=ny, nz=nz, d=d)
