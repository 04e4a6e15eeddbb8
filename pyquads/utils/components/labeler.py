import logging
from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from .component import Component

log = logging.getLogger(__name__)


"""Factor for packing (x, y) into a single integer key, valid for images below 1,000,000 pixels per axis."""
PIXEL_KEY_FACTOR = 1_000_000

"""Offsets of the 8 neighbours of a pixel."""
_NEIGHBOURS = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


class _UnionFind:
    """Disjoint sets with path compression and union by rank."""

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank = [0] * size

    def find(self, i: int) -> int:
        # find root
        root = i
        while self.parent[root] != root:
            root = self.parent[root]

        # compress path
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: int, j: int) -> None:
        root_i, root_j = self.find(i), self.find(j)
        if root_i == root_j:
            return
        if self.rank[root_i] < self.rank[root_j]:
            self.parent[root_i] = root_j
        elif self.rank[root_i] > self.rank[root_j]:
            self.parent[root_j] = root_i
        else:
            self.parent[root_j] = root_i
            self.rank[root_i] += 1


def label_components(coordinates: Union[npt.NDArray[Any], Sequence[Tuple[int, int]]]) -> List[Component]:
    """Group pixel coordinates into 8-connected components.

    Args:
        coordinates: Foreground pixels as (x, y) pairs in any order, e.g. from
            :func:`~pyquads.utils.components.scan_mask`.

    Returns:
        List of components, ordered by their first pixel in row-major order, i.e. independent of the input order.
    """

    # row-major order, since the order of scanned pixels depends on thread scheduling
    coords: List[Tuple[int, int]] = sorted(
        ((int(x), int(y)) for x, y in (coordinates.tolist() if isinstance(coordinates, np.ndarray) else coordinates)),
        key=lambda c: (c[1], c[0]),
    )
    if len(coords) == 0:
        return []

    # map packed coordinates to index for neighbour lookups
    index: Dict[int, int] = {x * PIXEL_KEY_FACTOR + y: i for i, (x, y) in enumerate(coords)}

    # union all pairs of neighbours
    sets = _UnionFind(len(coords))
    for i, (x, y) in enumerate(coords):
        for dx, dy in _NEIGHBOURS:
            j = index.get((x + dx) * PIXEL_KEY_FACTOR + (y + dy))
            if j is not None:
                sets.union(i, j)

    # group by root, dicts keep insertion order
    groups: Dict[int, List[Tuple[int, int]]] = {}
    for i, coord in enumerate(coords):
        groups.setdefault(sets.find(i), []).append(coord)

    log.debug("Found %d connected components in %d pixels.", len(groups), len(coords))
    return [Component(np.array(g, dtype=np.int64)) for g in groups.values()]


__all__ = ["label_components", "PIXEL_KEY_FACTOR"]
