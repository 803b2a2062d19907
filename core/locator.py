"""
Nomograph Engine: Enclosing-Triangle Locator
============================================

Picks three chart samples believed to bracket a query point, the way a
reader traces a nomograph by eye: anchor on the nearest sample at or
above the target's y and the nearest at or below it, then take the
nearest sample that closes a triangle around the target.

This is a nearest-neighbour heuristic, not a Delaunay triangulation.
Its tie-breaks are part of the contract since the chart tables were
digitized against it:

- distance ties in the y-above partition go to the smaller y, then to
  the earlier sample in the dataset
- distance ties in the y-below partition go to the larger y, then to
  the earlier sample
- the closing sample is the first in a stable distance ordering

The x-partitions are built alongside the y-partitions but only the
y-partitions anchor the triangle.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Optional, Sequence, Tuple

import numpy as np

from config import config

from .geometry import Point2D, Point3D, is_point_in_triangle, triangle_area

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Triangle = Tuple[Point3D, Point3D, Point3D]


def _check_dataset(points: Sequence[Point3D]) -> None:
    min_points = config.locator.min_points
    if len(points) < min_points:
        raise ValueError(
            f"Need at least {min_points} points to locate a triangle, got {len(points)}."
        )


def _nearest(mask: np.ndarray, dist: np.ndarray, tie_key: np.ndarray) -> Optional[int]:
    """Index of the nearest masked sample, ties broken by tie_key then index."""
    candidates = np.flatnonzero(mask)
    if candidates.size == 0:
        return None
    # lexsort is stable and sorts by the last key first
    order = np.lexsort((tie_key[candidates], dist[candidates]))
    return int(candidates[order[0]])


def locate_triangle(points: Sequence[Point3D], target: Point2D) -> Optional[Triangle]:
    """
    Bracket `target` with three samples from `points`.

    Returns:
        (closest_y_above, closest_y_below, closing_point), or None when no
        sample lies on one side of the target's y or no sample closes a
        triangle containing the target.

    Raises:
        ValueError: fewer than three samples.
    """
    _check_dataset(points)

    xs = np.array([p.x for p in points], dtype=float)
    ys = np.array([p.y for p in points], dtype=float)
    dist = np.sqrt((xs - target.x) ** 2 + (ys - target.y) ** 2)

    x_above = xs >= target.x
    x_below = xs <= target.x
    y_above = ys >= target.y
    y_below = ys <= target.y
    logger.debug(
        "Partitions at (%s, %s): x>=%d x<=%d y>=%d y<=%d",
        target.x, target.y,
        int(x_above.sum()), int(x_below.sum()), int(y_above.sum()), int(y_below.sum()),
    )

    above_idx = _nearest(y_above, dist, ys)
    below_idx = _nearest(y_below, dist, -ys)
    if above_idx is None or below_idx is None:
        logger.debug("No sample on one side of y=%s", target.y)
        return None

    above = points[above_idx]
    below = points[below_idx]

    for idx in np.argsort(dist, kind="stable"):
        candidate = points[int(idx)]
        if is_point_in_triangle(target, above, below, candidate):
            return (above, below, candidate)

    logger.debug("No closing sample for (%s, %s)", target.x, target.y)
    return None


def smallest_inscribing_triangle(
    points: Sequence[Point3D], target: Point2D
) -> Optional[Triangle]:
    """
    Exhaustive search for the minimum-area triangle containing `target`.

    Cubic in the number of samples; kept as a cross-check for the
    bracketing heuristic on small datasets. The first triangle found wins
    area ties.
    """
    _check_dataset(points)

    best: Optional[Triangle] = None
    min_area = float("inf")
    for a, b, c in combinations(points, 3):
        if is_point_in_triangle(target, a, b, c):
            area = triangle_area(a, b, c)
            if area < min_area:
                min_area = area
                best = (a, b, c)
    return best


LOCATORS = {
    "bracket": locate_triangle,
    "smallest": smallest_inscribing_triangle,
}


def get_locator(name: str):
    """Locator strategy by configuration name."""
    try:
        return LOCATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown locator strategy '{name}'. Choose from: {', '.join(LOCATORS)}"
        ) from None
