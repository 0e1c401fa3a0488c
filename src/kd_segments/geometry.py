"""Core geometry schemas shared by the oracle and the engine."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class Point(BaseModel):
    """A 2D point."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Segment(BaseModel):
    """A line segment between two endpoints.

    Degenerate (``src == dst``) and axis-parallel segments are valid.
    """

    model_config = ConfigDict(frozen=True)

    src: Point
    dst: Point

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        """Create a segment from raw endpoint coordinates."""
        return cls(src=Point(x=x1, y=y1), dst=Point(x=x2, y=y2))


class Bound(BaseModel):
    """An axis-aligned bounding box.

    ``lt`` is the minimum corner and ``rb`` the maximum corner.
    """

    model_config = ConfigDict(frozen=True)

    lt: Point
    rb: Point

    @model_validator(mode="after")
    def _check_corners(self) -> "Bound":
        if self.lt.x > self.rb.x or self.lt.y > self.rb.y:
            raise ValueError(
                f"Bound corners are inverted: lt=({self.lt.x}, {self.lt.y}), "
                f"rb=({self.rb.x}, {self.rb.y})"
            )
        return self

    @classmethod
    def from_coords(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "Bound":
        """Create a bound from its minimum and maximum coordinates."""
        return cls(lt=Point(x=min_x, y=min_y), rb=Point(x=max_x, y=max_y))

    @property
    def width(self) -> float:
        return self.rb.x - self.lt.x

    @property
    def height(self) -> float:
        return self.rb.y - self.lt.y

    def contains(self, point: Point) -> bool:
        """Check if a point lies inside the box or on its border."""
        return self.lt.x <= point.x <= self.rb.x and self.lt.y <= point.y <= self.rb.y

    def overlaps(self, other: "Bound") -> bool:
        """Check if two boxes overlap or touch."""
        return (
            self.lt.x <= other.rb.x
            and other.lt.x <= self.rb.x
            and self.lt.y <= other.rb.y
            and other.lt.y <= self.rb.y
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        return (self.lt.x, self.lt.y, self.rb.x, self.rb.y)


class Axis(str, Enum):
    """Axis a cut or comparison applies to.

    A horizontal cut picks an x coordinate, a vertical cut a y coordinate.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def other(self) -> "Axis":
        """The perpendicular axis."""
        if self is Axis.HORIZONTAL:
            return Axis.VERTICAL
        return Axis.HORIZONTAL

    def coord(self, point: Point) -> float:
        """Get the coordinate of ``point`` this axis selects."""
        if self is Axis.HORIZONTAL:
            return point.x
        return point.y

    def point(self, along: float, across: float) -> Point:
        """Build a point from a coordinate on this axis and one on the other axis."""
        if self is Axis.HORIZONTAL:
            return Point(x=along, y=across)
        return Point(x=across, y=along)

    def low(self, bound: Bound) -> float:
        """Minimum coordinate of ``bound`` on this axis."""
        return self.coord(bound.lt)

    def high(self, bound: Bound) -> float:
        """Maximum coordinate of ``bound`` on this axis."""
        return self.coord(bound.rb)

    def extent(self, bound: Bound) -> float:
        """Size of ``bound`` along this axis."""
        return self.high(bound) - self.low(bound)
