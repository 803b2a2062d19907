"""
Nomograph Engine: Chain Evaluator
=================================

Drives a multi-step performance chart. The first step consumes two
inputs (x, y); every later step consumes one new input as x and reuses
the previous step's result as y.

Callers see a single outcome: a float, or None when any step fails.
The specific failure kind and step index are kept on ChainResult
(see `run_chain`) and logged at DEBUG level for diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from config import config

from .errors import DegenerateGeometryError, VerticalPlaneError
from .fitting import plane_from_three_points
from .geometry import Point2D, Point3D
from .locator import Triangle, get_locator

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Locator = Callable[[Sequence[Point3D], Point2D], Optional[Triangle]]


@dataclass(frozen=True)
class Step:
    """One chart of the chain: its digitized sample cloud."""

    points: Tuple[Point3D, ...]
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))
        min_points = config.locator.min_points
        if len(self.points) < min_points:
            raise ValueError(
                f"Step '{self.name}' has {len(self.points)} points; "
                f"at least {min_points} are required."
            )

    @classmethod
    def from_mappings(cls, rows: Iterable[dict], name: str = "") -> "Step":
        """Build a step from ``{"x": .., "y": .., "z": ..}`` rows."""
        return cls(points=tuple(Point3D.from_mapping(r) for r in rows), name=name)


class ChainFailure(Enum):
    """Why a chain produced no result."""
    NO_TRIANGLE = "no_triangle"
    VERTICAL_PLANE = "vertical_plane"
    DEGENERATE_GEOMETRY = "degenerate_geometry"


@dataclass
class ChainResult:
    """Outcome of one chain evaluation, with per-step intermediates."""

    value: Optional[float] = None
    failure: Optional[ChainFailure] = None
    failed_step: Optional[int] = None
    step_values: List[float] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failure is None and self.value is not None


StepLike = Union[Step, Sequence[Point3D]]


def _as_step(step: StepLike, index: int) -> Step:
    if isinstance(step, Step):
        return step
    return Step(points=tuple(step), name=f"step {index + 1}")


def run_chain(
    steps: Sequence[StepLike],
    inputs: Sequence[float],
    locator: Optional[Locator] = None,
) -> ChainResult:
    """
    Evaluate the chain and report which step failed, if any.

    Args:
        steps: Ordered chart steps (Step objects or sequences of Point3D).
        inputs: Positional chart inputs; at least ``len(steps) + 1`` values.
            Surplus values are ignored.
        locator: Triangle locator; defaults to the configured strategy.

    Raises:
        ValueError: too few inputs, or a step with too few points.
    """
    steps = [_as_step(s, i) for i, s in enumerate(steps)]
    needed = len(steps) + 1 if steps else 0
    if len(inputs) < needed:
        raise ValueError(
            f"Chain of {len(steps)} steps needs {needed} inputs, got {len(inputs)}."
        )
    locator = locator or get_locator(config.locator.strategy)

    result = ChainResult()
    previous: Optional[float] = None
    cursor = 0

    for index, step in enumerate(steps):
        x = inputs[cursor]
        cursor += 1
        if previous is not None:
            y = previous
        else:
            y = inputs[cursor]
            cursor += 1

        triangle = locator(step.points, Point2D(x, y))
        if triangle is None:
            return ChainResult(
                failure=ChainFailure.NO_TRIANGLE,
                failed_step=index,
                step_values=result.step_values,
            )

        try:
            surface = plane_from_three_points(*triangle)
        except VerticalPlaneError:
            return ChainResult(
                failure=ChainFailure.VERTICAL_PLANE,
                failed_step=index,
                step_values=result.step_values,
            )
        except DegenerateGeometryError:
            return ChainResult(
                failure=ChainFailure.DEGENERATE_GEOMETRY,
                failed_step=index,
                step_values=result.step_values,
            )

        previous = surface.evaluate(x, y)
        result.step_values.append(previous)
        logger.debug("Step %d at (%s, %s): %s -> %s", index + 1, x, y, surface, previous)

    result.value = previous
    return result


def evaluate_chain(
    steps: Sequence[StepLike],
    inputs: Sequence[float],
    locator: Optional[Locator] = None,
) -> Optional[float]:
    """
    Read a chained chart: the result value, or None for "no result".

    Every failure collapses to None; the cause goes to the debug log.
    """
    result = run_chain(steps, inputs, locator=locator)
    if not result.ok:
        logger.debug(
            "No result: %s at step %s",
            result.failure.value if result.failure else "empty chain",
            None if result.failed_step is None else result.failed_step + 1,
        )
        return None
    return result.value
