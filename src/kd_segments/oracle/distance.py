"""Lower-bound distance metrics used to prune nearest-neighbor searches."""

import math

from kd_segments.geometry import Axis, Bound, Point


def bound_to_point_dist(axis: Axis, bound: Bound, point: Point) -> float:
    """Distance along ``axis`` from the nearer face of ``bound`` to ``point``."""
    at = axis.coord(point)
    return min(abs(axis.low(bound) - at), abs(axis.high(bound) - at))


def bound_to_bound_dist(a: Bound, b: Bound) -> float:
    """Minimum Euclidean distance between two axis-aligned boxes.

    Zero when the boxes overlap or touch. Otherwise the gap is either
    diagonal (corner to corner) or straight along one axis.
    """
    a_before_b_x = a.rb.x < b.lt.x
    b_before_a_x = b.rb.x < a.lt.x
    a_before_b_y = a.rb.y < b.lt.y
    b_before_a_y = b.rb.y < a.lt.y

    # Diagonal placements
    if a_before_b_x and a_before_b_y:
        return math.hypot(b.lt.x - a.rb.x, b.lt.y - a.rb.y)
    if a_before_b_x and b_before_a_y:
        return math.hypot(b.lt.x - a.rb.x, a.lt.y - b.rb.y)
    if b_before_a_x and a_before_b_y:
        return math.hypot(a.lt.x - b.rb.x, b.lt.y - a.rb.y)
    if b_before_a_x and b_before_a_y:
        return math.hypot(a.lt.x - b.rb.x, a.lt.y - b.rb.y)

    # Straight gaps
    if a_before_b_x:
        return b.lt.x - a.rb.x
    if b_before_a_x:
        return a.lt.x - b.rb.x
    if a_before_b_y:
        return b.lt.y - a.rb.y
    if b_before_a_y:
        return a.lt.y - b.rb.y

    return 0.0
