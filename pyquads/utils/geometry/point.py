import math
from typing import NamedTuple


class Point2D(NamedTuple):
    """Immutable 2D point with float coordinates."""

    x: float
    y: float

    def taxicab_distance(self, other: "Point2D") -> float:
        """Taxicab (Manhattan) distance to other point."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def euclidean_distance(self, other: "Point2D") -> float:
        """Euclidean distance to other point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class PixelCoordinate(NamedTuple):
    """Integer pixel position, x is the column and y the row."""

    x: int
    y: int


__all__ = ["Point2D", "PixelCoordinate"]
