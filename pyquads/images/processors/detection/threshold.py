import asyncio
import logging
from typing import Any

import numpy as np
import numpy.typing as npt
import scipy.ndimage as ndi
from astropy.stats import sigma_clipped_stats

from pyquads.images.processor import ImageProcessor
from pyquads.images import Image

log = logging.getLogger(__name__)


class Threshold(ImageProcessor):
    """
    Create a binary detection mask from the pixel data of an image.

    This asynchronous processor measures robust background statistics of the image and marks every pixel that is
    significantly brighter than the background. The result is written to ``image.mask`` of a copy of the image,
    pixel data are not modified.

    :param float threshold: Detection threshold in units of the background standard deviation. A pixel is
                            foreground, if ``data > median + threshold * std``. Default: ``3.0``.
    :param float sigma: Sigma for the kappa-sigma clipping used to determine median and standard deviation.
                        Default: ``3.0``.
    :param int opening: Number of iterations for a binary opening (erosion followed by dilation) of the mask,
                        which removes single hot pixels and thin artifacts. ``0`` disables it. Default: ``0``.
    :param kwargs: Additional keyword arguments forwarded to :class:`pyquads.images.processor.ImageProcessor`.

    Behavior
    --------
    - If the input image has no data (``image.safe_data is None``), a warning is logged and the image is returned
      unchanged.
    - Median and standard deviation are calculated with :func:`astropy.stats.sigma_clipped_stats`.
    - The mask is of type bool with the same shape as the data.

    Configuration (YAML)
    --------------------

    .. code-block:: yaml

       class: pyquads.images.processors.detection.Threshold
       threshold: 5.0
       opening: 1
    """

    __module__ = "pyquads.images.processors.detection"

    def __init__(self, threshold: float = 3.0, sigma: float = 3.0, opening: int = 0, **kwargs: Any):
        """Initializes a new threshold.

        Args:
            threshold: Threshold in standard deviations above median.
            sigma: Sigma for kappa-sigma clipping.
            opening: Iterations for binary opening, 0 for none.
        """
        ImageProcessor.__init__(self, **kwargs)

        if sigma <= 0:
            raise ValueError("Sigma for clipping must be positive.")
        if opening < 0:
            raise ValueError("Number of iterations for opening must not be negative.")

        # store
        self.threshold = threshold
        self.sigma = sigma
        self.opening = opening

    def _create_mask(self, data: npt.NDArray[Any]) -> npt.NDArray[np.bool_]:
        # statistics
        _, median, std = sigma_clipped_stats(data, sigma=self.sigma)
        level = median + self.threshold * std
        log.debug("Using threshold level %.3f (median=%.3f, std=%.3f).", level, median, std)

        # create mask and remove small structures
        mask = data > level
        if self.opening > 0:
            mask = ndi.binary_opening(mask, iterations=self.opening)
        return np.asarray(mask, dtype=bool)

    async def __call__(self, image: Image) -> Image:
        """Create mask for given image.

        Args:
            image: Image to create mask for.

        Returns:
            Image with mask.
        """

        if image.safe_data is None:
            log.warning("No data found in image.")
            return image

        data = image.safe_data.astype(float)
        loop = asyncio.get_running_loop()
        mask = await loop.run_in_executor(None, self._create_mask, data)
        log.info("Found %d foreground pixels.", int(np.count_nonzero(mask)))

        output_image = image.copy()
        output_image.mask = mask
        return output_image


__all__ = ["Threshold"]
