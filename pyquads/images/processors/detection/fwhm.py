import asyncio
import logging
import math
from typing import Any, List, Optional, Tuple

import numpy as np
import numpy.typing as npt
from astropy.stats import sigma_clipped_stats

from pyquads.images import Image
from pyquads.images.meta import FWHMStatistics
from pyquads.images.processor import ImageProcessor
from pyquads.utils.components import star_profile
from pyquads.utils.exceptions import MissingInputError
from ._component_catalog import _ComponentCatalog

log = logging.getLogger(__name__)


class FWHM(ImageProcessor):
    """
    Measure the full width at half maximum (FWHM) of all stars in the catalog of an image.

    This asynchronous processor uses the pixel data of the image, not its binary mask. For every star in the catalog,
    a square box around its position is cut from the background-subtracted data, and the intensity-weighted second
    moments in that box give the standard deviations along the major and minor axis of the star. Assuming a Gaussian
    profile, they are converted into FWHMs. The box size follows the axes measured by
    :class:`~pyquads.images.processors.detection.ConnectedComponents`.

    :param float saturation: Pixel value at or above which a star counts as saturated. If not given, it is taken
                             from ``DET-SATU`` (divided by ``DET-GAIN``, if available) in the header. If neither is
                             available, no star is considered saturated. Default: ``None``.
    :param float sigma: Sigma for the kappa-sigma clipping of the background and of the FWHM statistics.
                        Default: ``3.0``.
    :param float box_scale: Box size in units of the larger axis of a star. Default: ``4.0``.
    :param int min_box: Minimum box size in pixels. Default: ``15``.
    :param int max_box: Maximum box size in pixels. Default: ``200``.
    :param kwargs: Additional keyword arguments forwarded to :class:`pyquads.images.processor.ImageProcessor`.

    Behavior
    --------
    - If the input image has no data (``image.safe_data is None``), a warning is logged and the image is returned
      unchanged.
    - Raises :class:`~pyquads.utils.exceptions.MissingInputError`, if the image has no catalog or the catalog lacks
      one of the columns ``area``, ``x`` or ``y``.
    - The catalog of the returned copy gets the columns ``flux``, ``fwhm_major``, ``fwhm_minor`` and ``saturated``.
      Stars that could not be measured get NaN.
    - Median and sigma-clipped mean of both FWHMs over all unsaturated stars are stored as
      :class:`~pyquads.images.meta.FWHMStatistics` meta, and the medians in the header as ``FWHMMAJ`` and
      ``FWHMMIN``.

    Configuration (YAML)
    --------------------

    .. code-block:: yaml

       class: pyquads.images.processors.detection.FWHM
       saturation: 60000
    """

    __module__ = "pyquads.images.processors.detection"

    _COLUMNS = ["flux", "fwhm_major", "fwhm_minor", "saturated"]

    def __init__(
        self,
        saturation: Optional[float] = None,
        sigma: float = 3.0,
        box_scale: float = 4.0,
        min_box: int = 15,
        max_box: int = 200,
        **kwargs: Any,
    ):
        """Initializes a new FWHM measurement.

        Args:
            saturation: Saturation level, None to take it from the header.
            sigma: Sigma for kappa-sigma clipping.
            box_scale: Box size in units of the larger axis.
            min_box: Minimum box size.
            max_box: Maximum box size.
        """
        ImageProcessor.__init__(self, **kwargs)

        if sigma <= 0:
            raise ValueError("Sigma for clipping must be positive.")
        if min_box < 1 or max_box < min_box:
            raise ValueError("Invalid box size limits.")

        # store
        self.saturation = saturation
        self.sigma = sigma
        self.box_scale = box_scale
        self.min_box = min_box
        self.max_box = max_box

    def _saturation_level(self, image: Image) -> Optional[float]:
        if self.saturation is not None:
            return float(self.saturation)
        if "DET-SATU" in image.header:
            gain = float(image.header["DET-GAIN"]) if "DET-GAIN" in image.header else 1.0
            return float(image.header["DET-SATU"]) / gain
        return None

    def _box_size(self, major_axis: float, minor_axis: float) -> int:
        size = int(math.ceil(max(major_axis, minor_axis) * self.box_scale))
        size = max(self.min_box, min(size, self.max_box))
        # odd, so that the box is centred on the star
        return size if size % 2 == 1 else size + 1

    def _measure(
        self, data: npt.NDArray[Any], catalog: _ComponentCatalog, saturation: Optional[float]
    ) -> Tuple[List[float], List[float], List[float], List[bool]]:
        _, background, _ = sigma_clipped_stats(data, sigma=self.sigma)

        flux, fwhm_major, fwhm_minor, saturated = [], [], [], []
        for row in catalog.components.itertuples(index=False):
            size = self._box_size(float(row.major_axis), float(row.minor_axis))
            profile = star_profile(data, float(row.x), float(row.y), size, background=float(background))
            if profile is None:
                flux.append(math.nan)
                fwhm_major.append(math.nan)
                fwhm_minor.append(math.nan)
                saturated.append(False)
                continue
            flux.append(profile.flux)
            fwhm_major.append(profile.fwhm_major)
            fwhm_minor.append(profile.fwhm_minor)
            saturated.append(saturation is not None and profile.peak >= saturation)
        return flux, fwhm_major, fwhm_minor, saturated

    def _statistics(self, fwhm: npt.NDArray[np.float64]) -> Tuple[float, float]:
        if len(fwhm) == 0:
            return math.nan, math.nan
        mean, _, _ = sigma_clipped_stats(fwhm, sigma=self.sigma)
        return float(np.median(fwhm)), float(mean)

    async def __call__(self, image: Image) -> Image:
        """Measure FWHM of all stars in the catalog of the given image.

        Args:
            image: Image with data and catalog.

        Returns:
            Image with FWHM columns in catalog.
        """

        if image.safe_data is None:
            log.warning("No data found in image.")
            return image
        if image.catalog is None:
            raise MissingInputError("catalog")

        catalog = _ComponentCatalog.from_table(image.catalog)
        data = image.safe_data.astype(float)
        saturation = self._saturation_level(image)

        loop = asyncio.get_running_loop()
        flux, fwhm_major, fwhm_minor, saturated = await loop.run_in_executor(
            None, self._measure, data, catalog, saturation
        )

        # add columns
        catalog.components["flux"] = np.array(flux, dtype=float)
        catalog.components["fwhm_major"] = np.array(fwhm_major, dtype=float)
        catalog.components["fwhm_minor"] = np.array(fwhm_minor, dtype=float)
        catalog.components["saturated"] = np.array(saturated, dtype=bool)
        keys = [k for k in image.catalog.colnames if k not in self._COLUMNS] + self._COLUMNS
        output_image = catalog.save_to_image(image, keys)

        # statistics over unsaturated stars with valid FWHM
        valid = ~catalog.components["saturated"].to_numpy()
        major = catalog.components["fwhm_major"].to_numpy()
        minor = catalog.components["fwhm_minor"].to_numpy()
        major = major[valid & np.isfinite(major) & (major > 0)]
        minor = minor[valid & np.isfinite(minor) & (minor > 0)]
        median_major, mean_major = self._statistics(major)
        median_minor, mean_minor = self._statistics(minor)
        output_image.set_meta(FWHMStatistics(median_major, median_minor, mean_major, mean_minor, count=len(major)))

        if len(major) == 0 or len(minor) == 0:
            log.warning("No unsaturated stars for measuring FWHM.")
            return output_image

        log.info(
            "Median FWHM is %.3f/%.3f pixels (major/minor), sigma-clipped mean is %.3f/%.3f.",
            median_major,
            median_minor,
            mean_major,
            mean_minor,
        )
        output_image.header["FWHMMAJ"] = (median_major, "Median FWHM along major axis [px]")
        output_image.header["FWHMMIN"] = (median_minor, "Median FWHM along minor axis [px]")
        return output_image


__all__ = ["FWHM"]
