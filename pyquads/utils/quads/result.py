from __future__ import annotations
from typing import List, Sequence

import numpy as np
import pandas as pd
from astropy.table import Table

from pyquads.utils.components import ComponentProperties
from .builder import SeedQuad
from .quad import Quad


class QuadResult:
    """Selected components and the quads built from them."""

    __module__ = "pyquads.utils.quads"

    def __init__(
        self,
        components: Sequence[ComponentProperties],
        seed_quads: Sequence[SeedQuad],
        total_components: int,
        max_stars: int,
        min_distance_percent: float,
        k_neighbors: int,
    ):
        """Create new result.

        Args:
            components: Components selected as stars, brightest first.
            seed_quads: Seeds with their deduplicated quads.
            total_components: Number of components before selection.
            max_stars: Maximum number of stars used for selection.
            min_distance_percent: Minimum distance used for selection.
            k_neighbors: Number of neighbours used per seed.
        """
        self.components = list(components)
        self.seed_quads = list(seed_quads)
        self.total_components = total_components
        self.max_stars = max_stars
        self.min_distance_percent = min_distance_percent
        self.k_neighbors = k_neighbors

    @property
    def quads(self) -> List[Quad]:
        """All quads of all seeds."""
        return [q for s in self.seed_quads for q in s.quads]

    @property
    def quad_count(self) -> int:
        return sum(len(s.quads) for s in self.seed_quads)

    @property
    def seed_quad_count(self) -> int:
        return len(self.seed_quads)

    @property
    def component_count(self) -> int:
        return len(self.components)

    def __repr__(self) -> str:
        return (
            f"QuadResult(components={self.component_count}/{self.total_components}, "
            f"seeds={self.seed_quad_count}, quads={self.quad_count})"
        )

    def to_table(self) -> Table:
        """Returns all quads as a table with their descriptors, and the image coordinates and IDs of their stars."""

        rows = [(s, q) for s in self.seed_quads for q in s.quads]
        columns = {
            "id": np.arange(len(rows), dtype=np.int64),
            "seed_id": np.array([s.seed.id for s, _ in rows], dtype=np.int64),
        }
        for i, name in enumerate(["x3", "y3", "x4", "y4"]):
            columns[f"descriptor_{name}"] = np.array([q.descriptor[i] for _, q in rows], dtype=float)
        for name in ["s1", "s2", "s3", "s4"]:
            columns[f"{name}_x"] = np.array([getattr(q, name).x for _, q in rows], dtype=float)
            columns[f"{name}_y"] = np.array([getattr(q, name).y for _, q in rows], dtype=float)
        for name in ["s1", "s2", "s3", "s4"]:
            columns[f"{name}_id"] = np.array([getattr(q, name).id for _, q in rows], dtype=np.int64)
        columns["degenerate"] = np.array([q.degenerate for _, q in rows], dtype=bool)

        table = Table.from_pandas(pd.DataFrame(columns))
        table.meta["TOTALCMP"] = self.total_components
        table.meta["MAXSTARS"] = self.max_stars
        table.meta["MINDIST"] = self.min_distance_percent
        table.meta["KNEIGHB"] = self.k_neighbors
        return table


__all__ = ["QuadResult"]
