import asyncio
import logging
from typing import Any

from pyquads.images import Image
from pyquads.images.processor import ImageProcessor
from pyquads.images.processors.detection._component_catalog import _ComponentCatalog
from pyquads.utils.exceptions import MissingInputError
from pyquads.utils.quads import QuadResult, find_quads

log = logging.getLogger(__name__)


class Quads(ImageProcessor):
    """Builds quads from the brightest components in the catalog of an image.

    Expects a component catalog as written by
    :class:`~pyquads.images.processors.detection.ConnectedComponents`, at least with the columns ``area``, ``x`` and
    ``y``. The row index of a component in the catalog is used as its ID. The resulting
    :class:`~pyquads.utils.quads.QuadResult` is stored as meta in a copy of the image, use
    :meth:`~pyquads.utils.quads.QuadResult.to_table` to get the quads as table.
    """

    __module__ = "pyquads.images.processors.quads"

    def __init__(self, max_stars: int = 50, min_distance_percent: float = 0.0, k_neighbors: int = 5, **kwargs: Any):
        """Initializes a new quad builder.

        Args:
            max_stars: Maximum number of components to use as stars.
            min_distance_percent: Minimum distance between stars in percent of width + height of image.
            k_neighbors: Number of neighbours to build quads with for each star.
        """
        ImageProcessor.__init__(self, **kwargs)

        if max_stars < 0:
            raise ValueError("Maximum number of stars must not be negative.")
        if min_distance_percent < 0:
            raise ValueError("Minimum distance must not be negative.")
        if k_neighbors < 0:
            raise ValueError("Number of neighbours must not be negative.")

        # store
        self.max_stars = max_stars
        self.min_distance_percent = min_distance_percent
        self.k_neighbors = k_neighbors

    async def __call__(self, image: Image) -> Image:
        """Build quads from catalog of given image.

        Args:
            image: Image with component catalog.

        Returns:
            Image with QuadResult meta.
        """

        catalog = image.safe_catalog
        if catalog is None:
            raise MissingInputError("catalog")
        components = _ComponentCatalog.from_table(catalog).to_properties()

        # image size is only needed for minimum distance
        width, height = image.width, image.height
        if self.min_distance_percent > 0 and (width is None or height is None):
            raise MissingInputError("NAXIS1/NAXIS2", "Image size is required for minimum distance between stars.")

        loop = asyncio.get_running_loop()
        result: QuadResult = await loop.run_in_executor(
            None,
            find_quads,
            components,
            width or 0,
            height or 0,
            self.max_stars,
            self.min_distance_percent,
            self.k_neighbors,
        )

        output_image = image.copy()
        output_image.set_meta(result)
        return output_image


__all__ = ["Quads"]
