"""Fragment splitting at a cut.

A fragment is the part of a segment's bounding box that falls inside one
tree node. Splitting slices the fragment at the cut coordinate and then
tightens each half on the other axis to the portion of the segment that
actually passes through it.
"""

import logging
import math

from kd_segments.config import MIN_FRAGMENT_EXTENT
from kd_segments.errors import GeometryError
from kd_segments.geometry import Axis, Bound, Point, Segment

logger = logging.getLogger(__name__)


def interpolate(shape: Segment, axis: Axis, at: float) -> float | None:
    """Coordinate on the other axis where ``shape`` crosses ``at``.

    Returns None when the segment is parallel to the cut, since it either
    misses the cut line or lies along it.

    Raises:
        GeometryError: If the result is not a finite number.
    """
    src_along = axis.coord(shape.src)
    dst_along = axis.coord(shape.dst)
    if dst_along == src_along:
        return None

    across = axis.other
    src_across = across.coord(shape.src)
    dst_across = across.coord(shape.dst)

    factor = (at - src_along) / (dst_along - src_along)
    value = src_across + factor * (dst_across - src_across)
    if not math.isfinite(value):
        raise GeometryError(
            f"Interpolation along {axis.value} axis at {at} is not finite for "
            f"segment ({shape.src.x}, {shape.src.y}) -> ({shape.dst.x}, {shape.dst.y})"
        )
    return value


def _child(
    axis: Axis,
    fragment: Bound,
    low: float,
    high: float,
    endpoint: Point,
    crossing: float,
) -> Bound:
    across = axis.other
    if across.coord(endpoint) < crossing:
        across_low, across_high = across.low(fragment), crossing
    else:
        across_low, across_high = crossing, across.high(fragment)
    return Bound(
        lt=axis.point(low, across_low),
        rb=axis.point(high, across_high),
    )


def split_fragment(
    shape: Segment,
    fragment: Bound,
    axis: Axis,
    cut: Point,
    min_extent: float = MIN_FRAGMENT_EXTENT,
) -> tuple[Bound, Bound] | None:
    """Split a fragment of ``shape`` in two at ``cut``.

    Args:
        shape: The segment the fragment belongs to.
        fragment: Current fragment of the segment.
        axis: Axis of the cut.
        cut: Cut point. Only its coordinate on ``axis`` is used.
        min_extent: Fragments narrower than this on ``axis`` are terminal.

    Returns:
        (low child, high child) where the low child lies below the cut
        coordinate, or None if the fragment cannot be split on ``axis``.

    Raises:
        GeometryError: If interpolation produced a non-finite coordinate.
    """
    at = axis.coord(cut)
    low, high = axis.low(fragment), axis.high(fragment)

    if not low <= at <= high:
        return None
    if high - low < min_extent:
        return None

    crossing = interpolate(shape, axis, at)
    if crossing is None:
        logger.debug("Segment parallel to %s cut at %s, not splitting", axis.value, at)
        return None

    across = axis.other
    crossing = min(max(crossing, across.low(fragment)), across.high(fragment))

    if axis.coord(shape.src) < axis.coord(shape.dst):
        low_end, high_end = shape.src, shape.dst
    else:
        low_end, high_end = shape.dst, shape.src

    return (
        _child(axis, fragment, low, at, low_end, crossing),
        _child(axis, fragment, at, high, high_end, crossing),
    )
