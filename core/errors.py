"""Geometry errors raised by the line/plane fitter."""


class GeometryError(ValueError):
    """Sample points cannot define the requested surface."""


class DegenerateGeometryError(GeometryError):
    """Two points requested for a line fit coincide in x and y."""


class VerticalPlaneError(GeometryError):
    """Three points define a plane that cannot be solved for z."""
