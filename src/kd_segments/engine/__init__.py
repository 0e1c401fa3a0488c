"""Partitioning engine - builds and queries kd-trees through a shape oracle."""

from kd_segments.engine.tree import Tree, build
from kd_segments.engine.types import (
    Intersection,
    NearestNeighbor,
    ShapeFragment,
    ShapeOracle,
    TreeNode,
)

__all__ = [
    "Intersection",
    "NearestNeighbor",
    "ShapeFragment",
    "ShapeOracle",
    "Tree",
    "TreeNode",
    "build",
]
