"""Generic kd-tree over shape fragments.

The tree never inspects shapes itself. Everything shape-specific goes
through a ShapeOracle: bounding volumes, cut selection, fragment splits
and the distance metrics used to order nearest-neighbor results.

Query results are generators. They do work only as they are consumed, and
a caller can stop iterating at any point.
"""

import heapq
import itertools
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Generic

from kd_segments.config import GeometryErrorPolicy, settings
from kd_segments.engine.types import (
    Intersection,
    NearestNeighbor,
    S,
    ShapeFragment,
    ShapeOracle,
    TreeNode,
)
from kd_segments.errors import GeometryError
from kd_segments.geometry import Axis, Bound, Point, Segment
from kd_segments.oracle.cuts import cut_guide

logger = logging.getLogger(__name__)


def build(
    axes: Iterable[Axis],
    shapes: Sequence[S],
    oracle: ShapeOracle[S],
    *,
    max_depth: int | None = None,
    on_error: GeometryErrorPolicy | str | None = None,
) -> "Tree[S]":
    """Build a tree over ``shapes``.

    Shape ids are positions in ``shapes``.

    Args:
        axes: Axes to cut on, cycled by depth.
        shapes: Shapes to store.
        oracle: Shape callbacks.
        max_depth: Depth at which nodes always become leaves. Defaults to
            ``settings.max_tree_depth``.
        on_error: What to do when a split raises GeometryError. Defaults
            to ``settings.on_geometry_error``.

    Returns:
        The built tree.

    Raises:
        ValueError: If ``axes`` is empty or ``max_depth`` is negative.
        GeometryError: If a split fails and the policy is ABORT.
    """
    axes = tuple(axes)
    if not axes:
        raise ValueError("At least one axis is required")
    if max_depth is None:
        max_depth = settings.max_tree_depth
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")
    policy = GeometryErrorPolicy(on_error if on_error is not None else settings.on_geometry_error)

    tree = Tree(axes, list(shapes), oracle, policy)
    fragments = [
        ShapeFragment(shape_id=shape_id, bound=oracle.bounding_volume(shape))
        for shape_id, shape in enumerate(tree.shapes)
    ]
    tree.root = tree._build_node(fragments, depth=0, max_depth=max_depth)

    logger.info(
        "Built tree over %d shapes: %d fragments, %d nodes, depth %d",
        len(tree.shapes),
        tree.fragment_count(),
        sum(1 for _ in tree.iter_nodes()),
        tree.depth(),
    )
    return tree


class Tree(Generic[S]):
    """A built partition tree. Create with :func:`build`."""

    def __init__(
        self,
        axes: tuple[Axis, ...],
        shapes: list[S],
        oracle: ShapeOracle[S],
        on_error: GeometryErrorPolicy = GeometryErrorPolicy.ABORT,
    ):
        self.axes = axes
        self.shapes = shapes
        self.oracle = oracle
        self.on_error = on_error
        self.root = TreeNode(depth=0)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _split(self, shape: S, fragment: Bound, axis: Axis, cut: Point) -> tuple[Bound, Bound] | None:
        try:
            return self.oracle.split(shape, fragment, axis, cut)
        except GeometryError as e:
            if self.on_error is GeometryErrorPolicy.ABORT:
                raise
            logger.warning("Leaving fragment %s unsplit: %s", fragment.as_tuple(), e)
            return None

    def _build_node(self, fragments: list[ShapeFragment], depth: int, max_depth: int) -> TreeNode:
        node = TreeNode(depth=depth, fragments=fragments)
        if len(fragments) <= 1 or depth >= max_depth:
            return node

        axis = self.axes[depth % len(self.axes)]
        corners = (corner for fragment in fragments for corner in (fragment.bound.lt, fragment.bound.rb))
        selection = self.oracle.cut_point(axis, corners)
        if selection is None:
            return node

        at = selection.coordinate(axis)
        low: list[ShapeFragment] = []
        high: list[ShapeFragment] = []
        here: list[ShapeFragment] = []
        for fragment in fragments:
            shape = self.shapes[fragment.shape_id]
            pieces = self._split(shape, fragment.bound, axis, selection.cut)
            if pieces is not None:
                low.append(ShapeFragment(shape_id=fragment.shape_id, bound=pieces[0]))
                high.append(ShapeFragment(shape_id=fragment.shape_id, bound=pieces[1]))
            elif axis.high(fragment.bound) < at:
                low.append(fragment)
            elif axis.low(fragment.bound) > at:
                high.append(fragment)
            else:
                here.append(fragment)

        # Nothing left the node, or everything moved to one side untouched.
        if len(here) == len(fragments) or not (here or low) or not (here or high):
            logger.debug("Stalled at depth %d with %d fragments", depth, len(fragments))
            return node

        logger.debug(
            "Depth %d: %s cut at %.3f -> low=%d high=%d here=%d",
            depth,
            axis.value,
            at,
            len(low),
            len(high),
            len(here),
        )
        node.axis = axis
        node.selection = selection
        node.fragments = here
        if low:
            node.low = self._build_node(low, depth + 1, max_depth)
        if high:
            node.high = self._build_node(high, depth + 1, max_depth)
        return node

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def intersects(self, needle: S) -> Iterator[Intersection]:
        """Yield every stored fragment overlapping a fragment of ``needle``.

        A shape stored as several fragments can be reported more than once.
        """
        stack = [(self.root, self.oracle.bounding_volume(needle))]
        while stack:
            node, needle_fragment = stack.pop()
            for fragment in node.fragments:
                if fragment.bound.overlaps(needle_fragment):
                    yield Intersection(
                        shape_id=fragment.shape_id,
                        shape_fragment=fragment.bound,
                        needle_fragment=needle_fragment,
                    )
            if node.is_leaf:
                continue

            axis, cut = node.axis, node.selection.cut
            at = axis.coord(cut)
            pieces = self._split(needle, needle_fragment, axis, cut)
            if pieces is not None:
                low_piece, high_piece = pieces
            else:
                low_piece = needle_fragment if axis.low(needle_fragment) <= at else None
                high_piece = needle_fragment if axis.high(needle_fragment) >= at else None

            if node.high is not None and high_piece is not None:
                stack.append((node.high, high_piece))
            if node.low is not None and low_piece is not None:
                stack.append((node.low, low_piece))

    def nearest(self, needle: S) -> Iterator[NearestNeighbor]:
        """Yield stored fragments in ascending order of distance to ``needle``.

        Distances are lower bounds between fragment boxes. The needle is
        refined into pieces while descending so that the bounds tighten.
        """
        counter = itertools.count()
        heap: list = [(0.0, next(counter), self.root, (self.oracle.bounding_volume(needle),))]
        while heap:
            distance, _, item, pieces = heapq.heappop(heap)
            if isinstance(item, ShapeFragment):
                yield NearestNeighbor(
                    distance=distance,
                    shape_id=item.shape_id,
                    shape_fragment=item.bound,
                )
                continue

            node: TreeNode = item
            for fragment in node.fragments:
                gap = min(self.oracle.bound_distance(piece, fragment.bound) for piece in pieces)
                heapq.heappush(heap, (max(distance, gap), next(counter), fragment, ()))
            if node.is_leaf:
                continue

            axis, cut = node.axis, node.selection.cut
            at = axis.coord(cut)
            refined: list[Bound] = []
            for piece in pieces:
                split = self._split(needle, piece, axis, cut)
                refined.extend(split if split is not None else (piece,))

            if node.low is not None:
                gap = min(
                    0.0 if axis.low(piece) <= at else self.oracle.point_distance(axis, piece, cut)
                    for piece in refined
                )
                heapq.heappush(heap, (max(distance, gap), next(counter), node.low, tuple(refined)))
            if node.high is not None:
                gap = min(
                    0.0 if axis.high(piece) >= at else self.oracle.point_distance(axis, piece, cut)
                    for piece in refined
                )
                heapq.heappush(heap, (max(distance, gap), next(counter), node.high, tuple(refined)))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Walk all nodes depth-first."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def iter_fragments(self) -> Iterator[ShapeFragment]:
        for node in self.iter_nodes():
            yield from node.fragments

    def fragment_count(self) -> int:
        return sum(len(node.fragments) for node in self.iter_nodes())

    def depth(self) -> int:
        return max(node.depth for node in self.iter_nodes())

    def cut_guides(self) -> Iterator[tuple[Segment, Axis]]:
        """Yield a drawable line for every cut in the tree."""
        for node in self.iter_nodes():
            if node.selection is not None:
                yield cut_guide(node.axis, node.selection), node.axis

    def __len__(self) -> int:
        return len(self.shapes)

    def __repr__(self) -> str:
        return f"Tree(shapes={len(self.shapes)}, axes={[axis.value for axis in self.axes]})"
