from __future__ import annotations
from typing import Any, Iterable, Iterator, Union

import numpy as np
import numpy.typing as npt

from pyquads.utils.geometry import PixelCoordinate


class Component:
    """An immutable, non-empty set of 8-connected pixels."""

    __module__ = "pyquads.utils.components"

    def __init__(self, coordinates: Union[npt.NDArray[Any], Iterable[PixelCoordinate]]):
        """Create new component.

        Args:
            coordinates: Pixel coordinates, either an array of shape (N, 2) or (x, y) pairs.
        """
        coords = np.array(coordinates if isinstance(coordinates, np.ndarray) else list(coordinates), dtype=np.int64)
        if coords.size == 0:
            raise ValueError("A component needs at least one pixel.")
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError("Coordinates must be given as (x, y) pairs.")
        coords.flags.writeable = False
        self._coordinates = coords

    @property
    def coordinates(self) -> npt.NDArray[np.int64]:
        """Read-only array of shape (N, 2) with (x, y) coordinates."""
        return self._coordinates

    @property
    def area(self) -> int:
        return len(self._coordinates)

    def __len__(self) -> int:
        return len(self._coordinates)

    def __iter__(self) -> Iterator[PixelCoordinate]:
        return (PixelCoordinate(int(x), int(y)) for x, y in self._coordinates)

    def __contains__(self, item: Any) -> bool:
        x, y = item
        return bool(np.any((self._coordinates[:, 0] == x) & (self._coordinates[:, 1] == y)))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Component):
            return NotImplemented
        return set(self) == set(other)

    def __hash__(self) -> int:
        return hash(frozenset(self))

    def __repr__(self) -> str:
        return f"Component(area={self.area})"


__all__ = ["Component"]
