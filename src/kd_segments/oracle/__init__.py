"""Segment oracle - bounding volumes, cuts, splits and distance metrics."""

from kd_segments.oracle.bounds import compute_bound
from kd_segments.oracle.cuts import CutSelection, cut_guide, cut_point
from kd_segments.oracle.distance import bound_to_bound_dist, bound_to_point_dist
from kd_segments.oracle.segment import SegmentOracle
from kd_segments.oracle.split import interpolate, split_fragment

__all__ = [
    "CutSelection",
    "SegmentOracle",
    "bound_to_bound_dist",
    "bound_to_point_dist",
    "compute_bound",
    "cut_guide",
    "cut_point",
    "interpolate",
    "split_fragment",
]
