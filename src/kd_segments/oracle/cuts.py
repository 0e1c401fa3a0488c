"""Cut coordinate selection.

The cut is placed at the arithmetic mean of the points contributing to a
node, not the median. The spread of the points is returned alongside so that
a visualization can draw the cut line across the region it divides.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from kd_segments.geometry import Axis, Point, Segment


@dataclass(frozen=True)
class CutSelection:
    """Result of a cut selection.

    Attributes:
        cut: Mean point. Only the coordinate on the cut axis is meaningful
            to callers.
        min_point: Component-wise minimum of the input points.
        max_point: Component-wise maximum of the input points.
        count: Number of points consumed.
    """

    cut: Point
    min_point: Point
    max_point: Point
    count: int

    def coordinate(self, axis: Axis) -> float:
        """The cut coordinate on ``axis``."""
        return axis.coord(self.cut)


def cut_point(axis: Axis, points: Iterable[Point]) -> CutSelection | None:
    """Pick a split coordinate for a set of points.

    Args:
        axis: Axis the cut will be applied on.
        points: Points contributing to the fragment. May be a one-shot
            iterator; it is consumed exactly once.

    Returns:
        The cut selection, or None when ``points`` is empty (the node
        should become a leaf).
    """
    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    if len(coords) == 0:
        return None

    mean = coords.mean(axis=0)
    lo = coords.min(axis=0)
    hi = coords.max(axis=0)

    return CutSelection(
        cut=Point(x=float(mean[0]), y=float(mean[1])),
        min_point=Point(x=float(lo[0]), y=float(lo[1])),
        max_point=Point(x=float(hi[0]), y=float(hi[1])),
        count=len(coords),
    )


def cut_guide(axis: Axis, selection: CutSelection) -> Segment:
    """Line segment drawing a cut across the spread of its points."""
    at = selection.coordinate(axis)
    across = axis.other
    return Segment(
        src=axis.point(at, across.coord(selection.min_point)),
        dst=axis.point(at, across.coord(selection.max_point)),
    )
