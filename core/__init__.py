# Nomograph Engine Core Module
from .geometry import Point2D, Point3D
from .errors import GeometryError, DegenerateGeometryError, VerticalPlaneError
from .fitting import (
    ConstantFunction, LineFunction, PlaneFunction,
    line_from_two_points, plane_from_three_points,
)
from .locator import locate_triangle, smallest_inscribing_triangle
from .chain import Step, ChainResult, ChainFailure, evaluate_chain, run_chain
from .wind import WindComponents, wind_components
from .charts import ChartChain, ChartLibrary, load_chart

__all__ = [
    "Point2D",
    "Point3D",
    "GeometryError",
    "DegenerateGeometryError",
    "VerticalPlaneError",
    "ConstantFunction",
    "LineFunction",
    "PlaneFunction",
    "line_from_two_points",
    "plane_from_three_points",
    "locate_triangle",
    "smallest_inscribing_triangle",
    "Step",
    "ChainResult",
    "ChainFailure",
    "evaluate_chain",
    "run_chain",
    "WindComponents",
    "wind_components",
    "ChartChain",
    "ChartLibrary",
    "load_chart",
]
