"""Bounding volume of a segment."""

from kd_segments.geometry import Bound, Point, Segment


def compute_bound(shape: Segment) -> Bound:
    """Compute the minimal axis-aligned box containing both endpoints.

    Degenerate segments produce a zero-area box.
    """
    src, dst = shape.src, shape.dst
    return Bound(
        lt=Point(x=min(src.x, dst.x), y=min(src.y, dst.y)),
        rb=Point(x=max(src.x, dst.x), y=max(src.y, dst.y)),
    )
