import asyncio
import logging
from typing import Any, List, Optional, Tuple

import numpy.typing as npt

from pyquads.images import Image
from pyquads.images.meta import ComponentList
from pyquads.images.processor import ImageProcessor
from pyquads.utils.components import Component, ComponentProperties, label_components, measure_components, scan_mask
from pyquads.utils.exceptions import MissingInputError
from ._component_catalog import _ComponentCatalog

log = logging.getLogger(__name__)


class ConnectedComponents(ImageProcessor):
    """
    Find 8-connected pixel clusters in the mask of an image and measure their shapes.

    The foreground pixels of ``image.mask`` are collected in parallel row bands, grouped into components and
    measured from their image moments. A copy of the image is returned with a catalog containing the columns
    ``id, area, x, y, major_axis, minor_axis, eccentricity, rotation_angle``, sorted by area (largest first).
    Coordinates are 0-based pixel coordinates, x is the column and y the row. The pixels of all components are
    stored as :class:`~pyquads.images.meta.ComponentList` meta in the same order as the catalog rows.

    Raises :class:`~pyquads.utils.exceptions.MissingInputError`, if the image has no mask.
    """

    __module__ = "pyquads.images.processors.detection"

    _CATALOG_KEYS = ["id", "area", "x", "y", "major_axis", "minor_axis", "eccentricity", "rotation_angle"]

    def __init__(self, **kwargs: Any):
        """Initializes a new component finder."""
        ImageProcessor.__init__(self, **kwargs)

    def _find_components(self, mask: npt.NDArray[Any]) -> Tuple[List[Component], List[ComponentProperties]]:
        coordinates = scan_mask(mask, self.context)
        components = label_components(coordinates)
        return components, measure_components(components)

    async def __call__(self, image: Image) -> Image:
        """Find components in mask of given image and attach catalog.

        Args:
            image: Image with mask.

        Returns:
            Image with attached catalog.
        """

        mask: Optional[npt.NDArray[Any]] = image.mask
        if mask is None:
            raise MissingInputError("mask")

        loop = asyncio.get_running_loop()
        components, properties = await loop.run_in_executor(None, self._find_components, mask)
        log.info("Found %d connected components.", len(components))

        catalog = _ComponentCatalog.from_properties(properties)
        order = catalog.sort_by_area()
        output_image = catalog.save_to_image(image, self._CATALOG_KEYS)
        output_image.set_meta(ComponentList([components[i] for i in order]))
        return output_image


__all__ = ["ConnectedComponents"]
