from __future__ import annotations
import logging
import math
from typing import List, NamedTuple, Sequence

from pyquads.utils.components import ComponentProperties
from pyquads.utils.geometry import KDTree, Point2D

log = logging.getLogger(__name__)


class StarInfo(NamedTuple):
    """Position and brightness of a selected star."""

    x: float
    y: float
    area: int
    is_seed: bool = False
    id: int = -1

    @property
    def point(self) -> Point2D:
        return Point2D(self.x, self.y)

    def as_seed(self, is_seed: bool = True) -> StarInfo:
        """Returns a copy of this star with the given seed flag."""
        return self._replace(is_seed=is_seed)

    @classmethod
    def from_properties(cls, properties: ComponentProperties, id: int = -1, is_seed: bool = False) -> StarInfo:
        """Create star from the centroid and area of a component.

        Args:
            properties: Shape statistics of component.
            id: ID of component.
            is_seed: Whether star is a seed star.

        Returns:
            New star.
        """
        return cls(float(properties.centroid.x), float(properties.centroid.y), int(properties.area), is_seed, id)


def min_distance_pixels(min_distance_percent: float, width: int, height: int) -> float:
    """Convert a minimum distance in percent of the taxicab diagonal of an image into pixels."""
    return (width + height) * min_distance_percent / 100.0


def select_stars(
    components: Sequence[ComponentProperties],
    max_stars: int = 50,
    min_distance_percent: float = 0.0,
    width: int = 0,
    height: int = 0,
) -> List[StarInfo]:
    """Select the brightest stars, optionally keeping a minimum distance between them.

    The area of a component is used as proxy for its brightness. Stars are accepted greedily, brightest first, and
    with a minimum distance given, a star is rejected if any of the already accepted stars lies within that taxicab
    distance.

    Args:
        components: Candidate components.
        max_stars: Maximum number of stars to select.
        min_distance_percent: Minimum distance between stars in percent of width + height, 0 to disable.
        width: Width of image in pixels.
        height: Height of image in pixels.

    Returns:
        Selected stars, brightest first. Their IDs are the indices of their components in the input.
    """

    # sort by area, stable for equal areas
    candidates = [
        StarInfo.from_properties(c, id=i)
        for i, c in enumerate(components)
        if math.isfinite(c.centroid.x) and math.isfinite(c.centroid.y)
    ]
    candidates.sort(key=lambda s: s.area, reverse=True)
    if max_stars <= 0:
        return []

    # no distance constraint?
    if min_distance_percent <= 0:
        return candidates[:max_stars]

    min_distance = min_distance_pixels(min_distance_percent, width, height)
    log.debug("Selecting up to %d stars with a minimum distance of %.1f pixels.", max_stars, min_distance)

    # greedy selection, rebuilding the tree for every accepted star
    selected: List[StarInfo] = []
    tree = KDTree()
    for star in candidates:
        if len(selected) >= max_stars:
            break
        if not tree.has_point_within_distance(star.point, min_distance):
            selected.append(star)
            tree.build([s.point for s in selected])

    log.debug("Selected %d of %d candidate stars.", len(selected), len(candidates))
    return selected


__all__ = ["StarInfo", "select_stars", "min_distance_pixels"]
