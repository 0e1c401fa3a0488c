"""kd-tree oracle for 2D line segments."""

from kd_segments.engine import Intersection, NearestNeighbor, Tree, build
from kd_segments.errors import GeometryError, KdSegmentsError
from kd_segments.geometry import Axis, Bound, Point, Segment
from kd_segments.oracle import (
    CutSelection,
    SegmentOracle,
    bound_to_bound_dist,
    bound_to_point_dist,
    compute_bound,
    cut_point,
    split_fragment,
)

__version__ = "0.1.0"
__all__ = [
    "Axis",
    "Bound",
    "CutSelection",
    "GeometryError",
    "Intersection",
    "KdSegmentsError",
    "NearestNeighbor",
    "Point",
    "Segment",
    "SegmentOracle",
    "Tree",
    "bound_to_bound_dist",
    "bound_to_point_dist",
    "build",
    "compute_bound",
    "cut_point",
    "split_fragment",
]
