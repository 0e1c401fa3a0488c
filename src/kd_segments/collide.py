"""Exact collision and distance checks for segment trees.

Tree queries compare bounding boxes, so they only report candidates.
These helpers confirm the candidates against the real segment geometry
using Shapely.
"""

import logging

from shapely.errors import GEOSException
from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry.base import BaseGeometry

from kd_segments.engine.tree import Tree
from kd_segments.errors import GeometryError
from kd_segments.geometry import Segment

logger = logging.getLogger(__name__)


def to_shapely(segment: Segment) -> BaseGeometry:
    """Convert a segment to a Shapely geometry.

    Degenerate segments become points.
    """
    if segment.src == segment.dst:
        return ShapelyPoint(segment.src.x, segment.src.y)
    return LineString([(segment.src.x, segment.src.y), (segment.dst.x, segment.dst.y)])


def segment_distance(a: Segment, b: Segment) -> float:
    """Exact minimum distance between two segments."""
    try:
        return float(to_shapely(a).distance(to_shapely(b)))
    except GEOSException as e:
        raise GeometryError(f"Distance computation failed: {e}") from e


def segments_intersect(a: Segment, b: Segment) -> bool:
    """Check if two segments touch or cross."""
    try:
        return bool(to_shapely(a).intersects(to_shapely(b)))
    except GEOSException as e:
        raise GeometryError(f"Intersection test failed: {e}") from e


def find_collisions(tree: Tree[Segment], needle: Segment) -> list[int]:
    """Find stored segments that touch or cross ``needle``.

    Returns:
        Shape ids in the order the tree first reported them.
    """
    checked: set[int] = set()
    hits: list[int] = []
    for candidate in tree.intersects(needle):
        if candidate.shape_id in checked:
            continue
        checked.add(candidate.shape_id)
        if segments_intersect(tree.shapes[candidate.shape_id], needle):
            hits.append(candidate.shape_id)

    logger.debug("Collision query: %d candidates, %d hits", len(checked), len(hits))
    return hits


def nearest_shapes(tree: Tree[Segment], needle: Segment, limit: int = 1) -> list[tuple[float, int]]:
    """Find the ``limit`` stored segments closest to ``needle``.

    Consumes the tree's nearest stream only until no unseen segment can
    beat the current results.

    Returns:
        (exact distance, shape id) pairs, closest first.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    exact: dict[int, float] = {}
    for candidate in tree.nearest(needle):
        if len(exact) >= limit:
            worst = sorted(exact.values())[limit - 1]
            if candidate.distance > worst:
                break
        if candidate.shape_id not in exact:
            exact[candidate.shape_id] = segment_distance(tree.shapes[candidate.shape_id], needle)

    return sorted((distance, shape_id) for shape_id, distance in exact.items())[:limit]
