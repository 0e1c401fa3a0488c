"""Pytest configuration and shared fixtures."""

import pytest

from kd_segments.engine import build
from kd_segments.geometry import Axis, Segment
from kd_segments.main import random_segments
from kd_segments.oracle import SegmentOracle


@pytest.fixture
def oracle() -> SegmentOracle:
    """Segment oracle with the default subdivision threshold."""
    return SegmentOracle(min_fragment_extent=10.0)


@pytest.fixture
def diagonal() -> Segment:
    """Segment from (0, 0) to (10, 10)."""
    return Segment.from_coords(0, 0, 10, 10)


@pytest.fixture
def scene_segments() -> list[Segment]:
    """Seeded random scene of segments inside a 200x200 square."""
    return random_segments(60, 200.0, seed=7)


@pytest.fixture
def scene_tree(scene_segments, oracle):
    """Tree built over the random scene, cutting x then y."""
    return build([Axis.HORIZONTAL, Axis.VERTICAL], scene_segments, oracle, max_depth=16)
