"""Segment oracle: the capability set the engine needs for line segments."""

from collections.abc import Iterable

from kd_segments.config import settings
from kd_segments.geometry import Axis, Bound, Point, Segment
from kd_segments.oracle.bounds import compute_bound
from kd_segments.oracle.cuts import CutSelection, cut_point
from kd_segments.oracle.distance import bound_to_bound_dist, bound_to_point_dist
from kd_segments.oracle.split import split_fragment


class SegmentOracle:
    """Bundles the segment callbacks for injection into the engine.

    Holds configuration only; every call is pure, so one oracle can be
    shared by any number of trees and queries.
    """

    def __init__(self, min_fragment_extent: float | None = None):
        if min_fragment_extent is None:
            min_fragment_extent = settings.min_fragment_extent
        if min_fragment_extent < 0:
            raise ValueError("min_fragment_extent must be >= 0")
        self.min_fragment_extent = float(min_fragment_extent)

    def bounding_volume(self, shape: Segment) -> Bound:
        return compute_bound(shape)

    def cut_point(self, axis: Axis, points: Iterable[Point]) -> CutSelection | None:
        return cut_point(axis, points)

    def split(
        self,
        shape: Segment,
        fragment: Bound,
        axis: Axis,
        cut: Point,
    ) -> tuple[Bound, Bound] | None:
        return split_fragment(shape, fragment, axis, cut, self.min_fragment_extent)

    def point_distance(self, axis: Axis, bound: Bound, point: Point) -> float:
        return bound_to_point_dist(axis, bound, point)

    def bound_distance(self, a: Bound, b: Bound) -> float:
        return bound_to_bound_dist(a, b)

    def __repr__(self) -> str:
        return f"SegmentOracle(min_fragment_extent={self.min_fragment_extent})"
