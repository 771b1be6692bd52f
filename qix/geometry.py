"""Distance and polyline helpers shared by the engine and its tests."""

import math
from typing import Iterable, NamedTuple, Sequence, Tuple

Point = Tuple[float, float]


class Rect(NamedTuple):
    """Axis-aligned rectangle, origin at the top-left corner."""
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def polyline_length(points: Sequence[Point]) -> float:
    """Sum of the segment lengths between consecutive points."""
    return sum(distance(points[i - 1], points[i]) for i in range(1, len(points)))


def bounding_box(points: Iterable[Point]) -> Rect:
    """
    Smallest axis-aligned rectangle containing every point.

    Raises:
        ValueError: if no points are given
    """
    xs, ys = [], []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    if not xs:
        raise ValueError("bounding_box() needs at least one point")
    return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
