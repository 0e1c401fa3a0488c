"""Tests for fragment splitting."""

import math

import pytest

from kd_segments.errors import GeometryError
from kd_segments.geometry import Axis, Bound, Point, Segment
from kd_segments.oracle import compute_bound, interpolate, split_fragment


def _cut(x: float = 0.0, y: float = 0.0) -> Point:
    return Point(x=x, y=y)


def _assert_axis_partition(axis: Axis, fragment: Bound, low: Bound, high: Bound, at: float):
    """The children cover the fragment on ``axis`` and meet only at the cut."""
    assert axis.low(low) == axis.low(fragment)
    assert axis.high(low) == at
    assert axis.low(high) == at
    assert axis.high(high) == axis.high(fragment)
    across = axis.other
    for child in (low, high):
        assert across.low(child) >= across.low(fragment)
        assert across.high(child) <= across.high(fragment)
    # Together the children span the fragment on the other axis as well.
    assert min(across.low(low), across.low(high)) == across.low(fragment)
    assert max(across.high(low), across.high(high)) == across.high(fragment)


class TestInterpolate:
    """Tests for interpolate."""

    def test_midpoint(self, diagonal):
        assert interpolate(diagonal, Axis.HORIZONTAL, 5.0) == 5.0
        assert interpolate(diagonal, Axis.VERTICAL, 2.5) == 2.5

    def test_parallel_segment_returns_none(self):
        vertical = Segment.from_coords(3, 0, 3, 20)
        assert interpolate(vertical, Axis.HORIZONTAL, 3.0) is None

    def test_non_finite_result_raises(self):
        seg = Segment.from_coords(0, 0, 20, math.inf)
        with pytest.raises(GeometryError):
            interpolate(seg, Axis.HORIZONTAL, 10.0)


class TestSplitFragment:
    """Tests for split_fragment."""

    def test_diagonal_split_at_midpoint(self, diagonal):
        """Segment (0,0)-(10,10) cut at x=5 gives two tight quarter boxes."""
        fragment = Bound.from_coords(0, 0, 10, 10)
        result = split_fragment(diagonal, fragment, Axis.HORIZONTAL, _cut(x=5))
        assert result == (
            Bound.from_coords(0, 0, 5, 5),
            Bound.from_coords(5, 5, 10, 10),
        )

    def test_descending_segment(self):
        """Off-axis bounds follow the endpoint on each side of the cut."""
        seg = Segment.from_coords(0, 10, 10, 0)
        low, high = split_fragment(seg, compute_bound(seg), Axis.HORIZONTAL, _cut(x=5))
        assert low == Bound.from_coords(0, 5, 5, 10)
        assert high == Bound.from_coords(5, 0, 10, 5)

    def test_endpoint_order_does_not_matter(self):
        seg = Segment.from_coords(0, 0, 40, 20)
        reverse = Segment.from_coords(40, 20, 0, 0)
        fragment = compute_bound(seg)
        assert split_fragment(seg, fragment, Axis.HORIZONTAL, _cut(x=10)) == split_fragment(
            reverse, fragment, Axis.HORIZONTAL, _cut(x=10)
        )

    def test_vertical_axis_split(self):
        seg = Segment.from_coords(0, 0, 20, 10)
        low, high = split_fragment(seg, compute_bound(seg), Axis.VERTICAL, _cut(y=5))
        assert low == Bound.from_coords(0, 0, 10, 5)
        assert high == Bound.from_coords(10, 5, 20, 10)

    def test_cut_off_axis_coordinate_is_ignored(self, diagonal):
        """Only the cut's coordinate on the split axis matters."""
        fragment = compute_bound(diagonal)
        expected = split_fragment(diagonal, fragment, Axis.HORIZONTAL, _cut(x=5, y=0))
        assert split_fragment(diagonal, fragment, Axis.HORIZONTAL, _cut(x=5, y=1000)) == expected

    @pytest.mark.parametrize("at", [-0.1, 10.1, 100.0])
    def test_cut_outside_fragment_returns_none(self, diagonal, at):
        fragment = Bound.from_coords(0, 0, 10, 10)
        assert split_fragment(diagonal, fragment, Axis.HORIZONTAL, _cut(x=at)) is None
        assert split_fragment(diagonal, fragment, Axis.VERTICAL, _cut(y=at)) is None

    def test_fragment_below_threshold_returns_none(self):
        seg = Segment.from_coords(0, 0, 9, 30)
        fragment = compute_bound(seg)
        assert split_fragment(seg, fragment, Axis.HORIZONTAL, _cut(x=4)) is None
        # The same fragment is wide enough on the other axis.
        assert split_fragment(seg, fragment, Axis.VERTICAL, _cut(y=15)) is not None

    def test_threshold_is_configurable(self):
        seg = Segment.from_coords(0, 0, 4, 4)
        fragment = compute_bound(seg)
        assert split_fragment(seg, fragment, Axis.HORIZONTAL, _cut(x=2)) is None
        low, high = split_fragment(seg, fragment, Axis.HORIZONTAL, _cut(x=2), min_extent=1.0)
        assert low == Bound.from_coords(0, 0, 2, 2)
        assert high == Bound.from_coords(2, 2, 4, 4)

    def test_outside_check_precedes_threshold(self):
        """A tiny fragment and an outside cut both give None without error."""
        seg = Segment.from_coords(0, 0, 1, 1)
        assert split_fragment(seg, compute_bound(seg), Axis.HORIZONTAL, _cut(x=50)) is None

    @pytest.mark.parametrize("at", [0.0, 5.0, 10.0, 20.0, -3.0])
    def test_vertical_segment_with_horizontal_cut_returns_none(self, at):
        """A segment parallel to the cut is never split and never divides by zero."""
        seg = Segment.from_coords(5, 0, 5, 20)
        fragment = Bound.from_coords(0, 0, 10, 20)
        assert split_fragment(seg, fragment, Axis.HORIZONTAL, _cut(x=at)) is None

    def test_horizontal_segment_with_vertical_cut_returns_none(self):
        seg = Segment.from_coords(0, 5, 30, 5)
        fragment = Bound.from_coords(0, 0, 30, 10)
        assert split_fragment(seg, fragment, Axis.VERTICAL, _cut(y=5)) is None

    def test_degenerate_segment_returns_none(self):
        seg = Segment.from_coords(5, 5, 5, 5)
        fragment = Bound.from_coords(0, 0, 20, 20)
        assert split_fragment(seg, fragment, Axis.HORIZONTAL, _cut(x=5)) is None
        assert split_fragment(seg, fragment, Axis.VERTICAL, _cut(y=5)) is None

    def test_horizontal_segment_split_horizontally(self):
        """A flat segment still splits across the other axis."""
        seg = Segment.from_coords(0, 5, 30, 5)
        low, high = split_fragment(seg, compute_bound(seg), Axis.HORIZONTAL, _cut(x=12))
        assert low == Bound.from_coords(0, 5, 12, 5)
        assert high == Bound.from_coords(12, 5, 30, 5)

    def test_cut_on_fragment_edge(self, diagonal):
        """A cut on the edge is inside the closed range and gives a flat child."""
        fragment = compute_bound(diagonal)
        low, high = split_fragment(diagonal, fragment, Axis.HORIZONTAL, _cut(x=0))
        assert Axis.HORIZONTAL.extent(low) == 0
        assert fragment.contains(low.lt) and fragment.contains(low.rb)
        assert high == fragment

    @pytest.mark.parametrize(
        "coords",
        [
            (0, 0, 100, 37),
            (100, 37, 0, 0),
            (0, 80, 60, 3),
            (-50, -20, 50, 90),
            (13.7, 99.1, 87.3, 2.2),
        ],
    )
    @pytest.mark.parametrize("axis", [Axis.HORIZONTAL, Axis.VERTICAL])
    def test_children_partition_fragment(self, coords, axis):
        seg = Segment.from_coords(*coords)
        fragment = compute_bound(seg)
        at = axis.low(fragment) + axis.extent(fragment) * 0.37
        low, high = split_fragment(seg, fragment, axis, axis.point(at, 0.0))
        _assert_axis_partition(axis, fragment, low, high, at)

    def test_recursive_splits_stay_within_parent(self):
        """Splitting children again keeps every box inside its parent."""
        seg = Segment.from_coords(3, 91, 187, 14)
        pending = [(compute_bound(seg), 0)]
        leaves = []
        while pending:
            fragment, depth = pending.pop()
            axis = Axis.HORIZONTAL if depth % 2 == 0 else Axis.VERTICAL
            at = axis.low(fragment) + axis.extent(fragment) / 2
            result = split_fragment(seg, fragment, axis, axis.point(at, 0.0))
            if result is None:
                leaves.append(fragment)
                continue
            for child in result:
                assert fragment.contains(child.lt) and fragment.contains(child.rb)
                assert axis.extent(child) < axis.extent(fragment)
                pending.append((child, depth + 1))
        assert len(leaves) > 1

    def test_loose_fragment_is_clamped(self, diagonal):
        """Children never escape a fragment narrower than the segment crossing."""
        fragment = Bound.from_coords(0, 0, 10, 4)
        low, high = split_fragment(diagonal, fragment, Axis.HORIZONTAL, _cut(x=5))
        assert low == Bound.from_coords(0, 0, 5, 4)
        assert high == Bound.from_coords(5, 4, 10, 4)

    def test_non_finite_interpolation_raises(self):
        seg = Segment.from_coords(0, 0, 20, math.inf)
        with pytest.raises(GeometryError):
            split_fragment(seg, compute_bound(seg), Axis.HORIZONTAL, _cut(x=10))
