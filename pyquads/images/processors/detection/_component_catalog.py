from copy import copy
from typing import List, Sequence

import numpy as np
import pandas as pd
from astropy.table import Table

from pyquads.images import Image
from pyquads.utils.components import ComponentProperties
from pyquads.utils.exceptions import MissingInputError
from pyquads.utils.geometry import Point2D


class _ComponentCatalog:
    _SHAPE_KEYS = ["major_axis", "minor_axis", "eccentricity", "rotation_angle"]
    _REQUIRED_KEYS = ["area", "x", "y"]

    def __init__(self, components: pd.DataFrame):
        self.components = components

    @classmethod
    def from_properties(cls, properties: Sequence[ComponentProperties]) -> "_ComponentCatalog":
        component_dataframe = pd.DataFrame(
            {
                "area": np.array([p.area for p in properties], dtype=np.int64),
                "x": np.array([p.centroid.x for p in properties], dtype=float),
                "y": np.array([p.centroid.y for p in properties], dtype=float),
                "major_axis": np.array([p.major_axis for p in properties], dtype=float),
                "minor_axis": np.array([p.minor_axis for p in properties], dtype=float),
                "eccentricity": np.array([p.eccentricity for p in properties], dtype=float),
                "rotation_angle": np.array([p.rotation_angle for p in properties], dtype=float),
            }
        )
        return cls(component_dataframe)

    @classmethod
    def from_table(cls, components: Table) -> "_ComponentCatalog":
        for key in cls._REQUIRED_KEYS:
            if key not in components.colnames:
                raise MissingInputError(key, f"Missing required catalog column: {key}")

        component_dataframe = components.to_pandas()
        for key in cls._SHAPE_KEYS:
            if key not in component_dataframe:
                component_dataframe[key] = 0.0
        return cls(component_dataframe)

    def sort_by_area(self) -> List[int]:
        """Sorts components by area, largest first, keeping the order of equal areas, and returns the new order."""
        self.components = self.components.sort_values("area", ascending=False, kind="mergesort")
        order = [int(i) for i in self.components.index]
        self.components = self.components.reset_index(drop=True)
        self.components.insert(0, "id", np.arange(len(self.components), dtype=np.int64))
        return order

    def to_properties(self) -> List[ComponentProperties]:
        return [
            ComponentProperties(
                area=int(row.area),
                centroid=Point2D(float(row.x), float(row.y)),
                major_axis=float(row.major_axis),
                minor_axis=float(row.minor_axis),
                eccentricity=float(row.eccentricity),
                rotation_angle=float(row.rotation_angle),
            )
            for row in self.components.itertuples(index=False)
        ]

    def save_to_image(self, image: Image, keys: List[str]) -> Image:
        cat = self.components[keys]

        output_image = copy(image)
        output_image.catalog = Table.from_pandas(cat)
        return output_image


__all__ = ["_ComponentCatalog"]
