"""
Integer-grid geometry shared by the puzzle aggregate and its constraints.

Bridges are straight segments between two grid points. Placement rules keep
them orthogonal, but the helpers here only assume that where noted.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union, Mapping, Any
import math


@dataclass(frozen=True)
class Point:
    """A point on the puzzle grid"""
    x: int
    y: int

    @classmethod
    def coerce(cls, value: Union['Point', Tuple[int, int], Mapping[str, Any]]) -> 'Point':
        """Accept a Point, an (x, y) pair or an {'x': .., 'y': ..} mapping"""
        if isinstance(value, Point):
            return value
        if isinstance(value, Mapping):
            return cls(value['x'], value['y'])
        x, y = value
        return cls(x, y)

    def as_dict(self) -> dict:
        return {'x': self.x, 'y': self.y}

    def __repr__(self):
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Placement:
    """Endpoints of a placed bridge"""
    start: Point
    end: Point

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y and self.start.x != self.end.x

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x and self.start.y != self.end.y

    @property
    def length(self) -> float:
        return distance(self.start, self.end)

    def has_endpoint(self, x: int, y: int) -> bool:
        return (self.start.x == x and self.start.y == y) or (self.end.x == x and self.end.y == y)

    def connects(self, a: Point, b: Point) -> bool:
        """True if the placement joins a and b, in either direction"""
        return ((self.start == a and self.end == b) or
                (self.start == b and self.end == a))

    def other_end(self, x: int, y: int) -> Point:
        return self.end if (self.start.x == x and self.start.y == y) else self.start


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two grid points"""
    return math.hypot(b.x - a.x, b.y - a.y)


def is_axis_aligned(a: Point, b: Point) -> bool:
    """Exactly one coordinate is shared"""
    return (a.x == b.x) != (a.y == b.y)


def strictly_between(value: int, a: int, b: int) -> bool:
    return min(a, b) < value < max(a, b)


def within(value: int, a: int, b: int) -> bool:
    return min(a, b) <= value <= max(a, b)


def covers_interior(placement: Placement, x: int, y: int) -> bool:
    """
    True if (x, y) lies on the bridge's row or column strictly between its
    endpoints.
    """
    start, end = placement.start, placement.end
    if start.y == end.y and start.y == y:
        return strictly_between(x, start.x, end.x)
    if start.x == end.x and start.x == x:
        return strictly_between(y, start.y, end.y)
    return False


def covers_cell(placement: Placement, x: int, y: int) -> bool:
    """Like covers_interior but endpoints count as covered"""
    start, end = placement.start, placement.end
    if start.y == end.y and start.y == y:
        return within(x, start.x, end.x)
    if start.x == end.x and start.x == x:
        return within(y, start.y, end.y)
    return False


def interior_cells(placement: Placement) -> Iterator[Tuple[int, int]]:
    """Cells strictly between the endpoints of an orthogonal bridge"""
    start, end = placement.start, placement.end
    if start.x == end.x:
        for y in range(min(start.y, end.y) + 1, max(start.y, end.y)):
            yield start.x, y
    elif start.y == end.y:
        for x in range(min(start.x, end.x) + 1, max(start.x, end.x)):
            yield x, start.y


def span_cells(placement: Placement) -> Iterator[Tuple[int, int]]:
    """Every cell of an orthogonal bridge, endpoints included"""
    start, end = placement.start, placement.end
    if start.x == end.x:
        for y in range(min(start.y, end.y), max(start.y, end.y) + 1):
            yield start.x, y
    elif start.y == end.y:
        for x in range(min(start.x, end.x), max(start.x, end.x) + 1):
            yield x, start.y


def ccw(p1: Point, p2: Point, p3: Point) -> bool:
    """Strict counter-clockwise orientation test (no epsilon)"""
    return (p3.y - p1.y) * (p2.x - p1.x) > (p2.y - p1.y) * (p3.x - p1.x)


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """
    Proper intersection of segments a1-a2 and b1-b2.

    Collinear segments never satisfy the strict orientation test, so
    overlapping bridges on the same line are not reported.
    """
    return ccw(a1, b1, b2) != ccw(a2, b1, b2) and ccw(a1, a2, b1) != ccw(a1, a2, b2)


def shares_endpoint(a: Placement, b: Placement) -> bool:
    return (a.start == b.start or a.start == b.end or
            a.end == b.start or a.end == b.end)


# Occupancy grid cell markers
EMPTY = 0
ISLAND = 1
BRIDGE = 2
