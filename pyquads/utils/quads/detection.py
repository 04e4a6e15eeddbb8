import logging
from typing import Any, Optional, Sequence

import numpy as np
import numpy.typing as npt

from pyquads.utils.components import ComponentProperties, scan_mask, label_components, measure_components
from pyquads.utils.context import ComputeContext
from pyquads.utils.exceptions import MissingInputError
from .builder import build_quads
from .result import QuadResult
from .stars import select_stars

log = logging.getLogger(__name__)


def _check_parameters(max_stars: int, min_distance_percent: float, k_neighbors: int) -> None:
    if max_stars < 0:
        raise ValueError("Maximum number of stars must not be negative.")
    if min_distance_percent < 0:
        raise ValueError("Minimum distance must not be negative.")
    if k_neighbors < 0:
        raise ValueError("Number of neighbours must not be negative.")


def find_quads(
    components: Sequence[ComponentProperties],
    width: int,
    height: int,
    max_stars: int = 50,
    min_distance_percent: float = 0.0,
    k_neighbors: int = 5,
) -> QuadResult:
    """Select stars from measured components and build quads from them.

    Args:
        components: Shape statistics of all components.
        width: Width of image in pixels.
        height: Height of image in pixels.
        max_stars: Maximum number of stars to use.
        min_distance_percent: Minimum distance between stars in percent of width + height, 0 to disable.
        k_neighbors: Number of neighbours to build quads with for each star.

    Returns:
        Selected components and quads.
    """
    _check_parameters(max_stars, min_distance_percent, k_neighbors)

    stars = select_stars(components, max_stars, min_distance_percent, width, height)
    seed_quads = build_quads(stars, k_neighbors)

    result = QuadResult(
        [components[s.id] for s in stars],
        seed_quads,
        total_components=len(components),
        max_stars=max_stars,
        min_distance_percent=min_distance_percent,
        k_neighbors=k_neighbors,
    )
    log.info(
        "Selected %d of %d components and built %d quads from %d seeds.",
        result.component_count,
        result.total_components,
        result.quad_count,
        result.seed_quad_count,
    )
    return result


def detect_quads(
    mask: Optional[npt.NDArray[Any]],
    max_stars: int = 50,
    min_distance_percent: float = 0.0,
    k_neighbors: int = 5,
    context: Optional[ComputeContext] = None,
) -> QuadResult:
    """Find stars in a binary mask and build quads from them.

    Runs the whole chain: the foreground pixels of the mask are collected, grouped into connected components and
    measured, then the brightest components are selected as stars and quads are built from them.

    Args:
        mask: Binary mask of shape (height, width).
        max_stars: Maximum number of stars to use.
        min_distance_percent: Minimum distance between stars in percent of width + height, 0 to disable.
        k_neighbors: Number of neighbours to build quads with for each star.
        context: Context for parallel mask scan. If None, a temporary one is used.

    Returns:
        Selected components and quads.
    """
    if mask is None:
        raise MissingInputError("mask")
    _check_parameters(max_stars, min_distance_percent, k_neighbors)

    coordinates = scan_mask(mask, context)
    components = measure_components(label_components(coordinates))
    height, width = np.shape(mask)
    return find_quads(components, width, height, max_stars, min_distance_percent, k_neighbors)


__all__ = ["detect_quads", "find_quads"]
