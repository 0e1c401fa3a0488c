"""Type definitions for the partitioning engine."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional, Protocol, TypeVar

from kd_segments.geometry import Axis, Bound, Point
from kd_segments.oracle.cuts import CutSelection

S = TypeVar("S")
S_contra = TypeVar("S_contra", contravariant=True)


class ShapeOracle(Protocol[S_contra]):
    """Callbacks a shape kind provides to be stored in a tree."""

    def bounding_volume(self, shape: S_contra) -> Bound:
        """Full bounding box of a shape."""
        ...

    def cut_point(self, axis: Axis, points: Iterable[Point]) -> CutSelection | None:
        """Choose where to cut a node, or None to make it a leaf."""
        ...

    def split(
        self,
        shape: S_contra,
        fragment: Bound,
        axis: Axis,
        cut: Point,
    ) -> tuple[Bound, Bound] | None:
        """Split a fragment of a shape at a cut, or None if it cannot be split."""
        ...

    def point_distance(self, axis: Axis, bound: Bound, point: Point) -> float:
        """Lower-bound distance along an axis from a box to a cut."""
        ...

    def bound_distance(self, a: Bound, b: Bound) -> float:
        """Lower-bound distance between two boxes."""
        ...


@dataclass(frozen=True)
class ShapeFragment:
    """A piece of a stored shape's bounding volume."""

    shape_id: int
    bound: Bound


@dataclass(frozen=True)
class Intersection:
    """A stored fragment overlapping a fragment of the needle."""

    shape_id: int
    shape_fragment: Bound
    needle_fragment: Bound


@dataclass(frozen=True)
class NearestNeighbor:
    """A stored fragment and its lower-bound distance to the needle."""

    distance: float
    shape_id: int
    shape_fragment: Bound


@dataclass
class TreeNode:
    """A node of the partition tree.

    ``fragments`` holds the fragments that straddle this node's cut and
    could not be split further; on leaves it holds everything that
    reached the node.
    """

    depth: int
    fragments: list[ShapeFragment] = field(default_factory=list)
    axis: Optional[Axis] = None
    selection: Optional[CutSelection] = None
    low: Optional["TreeNode"] = None
    high: Optional["TreeNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.low is None and self.high is None

    def children(self) -> list["TreeNode"]:
        return [child for child in (self.low, self.high) if child is not None]
