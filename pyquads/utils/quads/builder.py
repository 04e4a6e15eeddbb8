from __future__ import annotations
import itertools
import logging
from typing import Dict, List, NamedTuple, Sequence, Set, Tuple

from pyquads.utils.geometry import KDTree, Point2D
from .quad import Quad, Descriptor
from .stars import StarInfo

log = logging.getLogger(__name__)


"""Number of decimals descriptors are rounded to when looking for duplicates."""
DEDUP_DECIMALS = 6


class SeedQuad(NamedTuple):
    """A seed star, its nearest neighbours, and the quads built from them."""

    seed: StarInfo
    neighbors: List[StarInfo]
    quads: List[Quad]

    @property
    def neighbor_count(self) -> int:
        return len(self.neighbors)


def descriptor_key(descriptor: Descriptor) -> Tuple[float, ...]:
    """Key for identifying equal descriptors."""
    return tuple(round(v, DEDUP_DECIMALS) + 0.0 for v in descriptor)


def seed_quads(stars: Sequence[StarInfo], k_neighbors: int = 5) -> List[SeedQuad]:
    """Build quads from every star and its nearest neighbours.

    For every star as seed, its k nearest neighbours are found and every combination of three of them forms a quad
    together with the seed. Seeds with less than three neighbours are skipped.

    Args:
        stars: Stars to build quads from.
        k_neighbors: Number of neighbours to use per seed.

    Returns:
        List of seeds with all their quads, not deduplicated.
    """

    if len(stars) == 0 or k_neighbors <= 0:
        return []

    # map points to stars, first one wins for identical positions
    stars_at: Dict[Point2D, StarInfo] = {}
    for star in stars:
        stars_at.setdefault(star.point, star)
    points = list(stars_at.keys())
    tree = KDTree(points)

    result: List[SeedQuad] = []
    for point in points:
        # nearest neighbours include the seed itself
        neighbors = tree.k_nearest_neighbors(point, min(k_neighbors + 1, len(points)))
        neighbor_points = [p for p in neighbors if p != point][:k_neighbors]
        if len(neighbor_points) < 3:
            continue

        seed = stars_at[point].as_seed(True)
        neighbor_stars = [stars_at[p].as_seed(False) for p in neighbor_points]

        quads = [Quad.from_stars((seed,) + combination) for combination in itertools.combinations(neighbor_stars, 3)]
        result.append(SeedQuad(seed, neighbor_stars, quads))

    return result


def deduplicate(seeds: Sequence[SeedQuad]) -> List[SeedQuad]:
    """Remove quads with descriptors that have been seen before, and seeds that are left without quads.

    Args:
        seeds: Seeds with their quads.

    Returns:
        Seeds with unique quads.
    """

    seen: Set[Tuple[float, ...]] = set()
    result: List[SeedQuad] = []
    for seed in seeds:
        quads = []
        for quad in seed.quads:
            key = descriptor_key(quad.descriptor)
            if key not in seen:
                seen.add(key)
                quads.append(quad)
        if quads:
            result.append(seed._replace(quads=quads))
    return result


def build_quads(stars: Sequence[StarInfo], k_neighbors: int = 5) -> List[SeedQuad]:
    """Build deduplicated quads from stars.

    Args:
        stars: Stars to build quads from.
        k_neighbors: Number of neighbours to use per seed.

    Returns:
        Seeds with their unique quads.
    """
    raw = seed_quads(stars, k_neighbors)
    unique = deduplicate(raw)
    log.debug(
        "Built %d quads from %d seeds, %d remain after removing duplicates.",
        sum(len(s.quads) for s in raw),
        len(raw),
        sum(len(s.quads) for s in unique),
    )
    return unique


__all__ = ["SeedQuad", "seed_quads", "deduplicate", "build_quads", "descriptor_key", "DEDUP_DECIMALS"]
