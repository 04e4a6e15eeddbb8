import math
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np
import numpy.typing as npt

from pyquads.utils.geometry import Point2D
from .component import Component


"""Scale factor from square root of covariance eigenvalue to axis length."""
AXIS_SCALE = 4.0

"""Factor between standard deviation and FWHM of a Gaussian profile, 2 * sqrt(2 * ln(2))."""
GAUSSIAN_FWHM = 2.0 * math.sqrt(2.0 * math.log(2.0))


class ComponentProperties(NamedTuple):
    """Shape statistics of a component."""

    area: int
    centroid: Point2D
    major_axis: float
    minor_axis: float
    eccentricity: float
    rotation_angle: float


class StarProfile(NamedTuple):
    """Intensity-weighted moments of a star in the pixel data."""

    flux: float
    centroid: Point2D
    peak: float
    sigma_major: float
    sigma_minor: float

    @property
    def fwhm_major(self) -> float:
        return GAUSSIAN_FWHM * self.sigma_major

    @property
    def fwhm_minor(self) -> float:
        return GAUSSIAN_FWHM * self.sigma_minor


def _eigenvalues(mu20: float, mu02: float, mu11: float) -> Optional[Tuple[float, float]]:
    """Larger and smaller eigenvalue of the covariance matrix, None for a negative discriminant."""
    trace = mu20 + mu02
    det = mu20 * mu02 - mu11 * mu11
    discriminant = trace * trace - 4.0 * det
    if discriminant < 0:
        return None
    root = math.sqrt(discriminant)
    return (trace + root) / 2.0, max((trace - root) / 2.0, 0.0)


def component_properties(component: Component) -> ComponentProperties:
    """Calculate image moments of a component and derive its shape from them.

    The second central moments form the covariance matrix [[mu20, mu11], [mu11, mu02]], whose eigenvalues give the
    lengths of the major and minor axis and whose orientation gives the rotation angle of the major axis.

    Args:
        component: Component to measure.

    Returns:
        Shape statistics.
    """

    coords = component.coordinates.astype(float)
    m00 = float(len(coords))

    # first moments give centroid
    cx = float(np.sum(coords[:, 0])) / m00
    cy = float(np.sum(coords[:, 1])) / m00
    centroid = Point2D(cx, cy)

    # normalized second central moments
    dx = coords[:, 0] - cx
    dy = coords[:, 1] - cy
    mu20 = float(np.sum(dx * dx)) / m00
    mu02 = float(np.sum(dy * dy)) / m00
    mu11 = float(np.sum(dx * dy)) / m00

    # eigenvalues of covariance matrix
    eigenvalues = _eigenvalues(mu20, mu02, mu11)
    if eigenvalues is None:
        return ComponentProperties(int(m00), centroid, 0.0, 0.0, 0.0, 0.0)
    lambda_max, lambda_min = eigenvalues

    major = AXIS_SCALE * math.sqrt(lambda_max)
    minor = AXIS_SCALE * math.sqrt(lambda_min)
    eccentricity = math.sqrt(max(0.0, 1.0 - (minor / major) ** 2)) if major > 0 else 0.0
    rotation = 0.5 * math.atan2(2.0 * mu11, mu20 - mu02)

    return ComponentProperties(int(m00), centroid, major, minor, eccentricity, rotation)


def measure_components(components: Iterable[Component]) -> List[ComponentProperties]:
    """Calculate shape statistics for all given components."""
    return [component_properties(c) for c in components]


def star_profile(
    data: npt.NDArray[Any], x: float, y: float, size: int, background: float = 0.0
) -> Optional[StarProfile]:
    """Measure the profile of a star from the intensity-weighted moments of a box around its position.

    The background is subtracted from the pixel values, which are then used as weights for the first moments, giving
    flux and centroid, and for the second central moments. The eigenvalues of their covariance matrix are the
    variances along the major and minor axis.

    Args:
        data: Pixel data, indexed as ``data[y, x]``.
        x: Column of star.
        y: Row of star.
        size: Width and height of box, cropped at the image border.
        background: Background level to subtract.

    Returns:
        Profile of star, or None if the box is empty or contains no flux above the background.
    """

    # box around star
    half = size // 2
    cx, cy = int(round(x)), int(round(y))
    x0, x1 = max(cx - half, 0), min(cx + half + 1, data.shape[1])
    y0, y1 = max(cy - half, 0), min(cy + half + 1, data.shape[0])
    if x0 >= x1 or y0 >= y1:
        return None
    box = np.asarray(data[y0:y1, x0:x1], dtype=float)
    weights = box - background

    # flux and centroid
    m00 = float(np.sum(weights))
    if m00 <= 0:
        return None
    yy, xx = np.mgrid[y0:y1, x0:x1]
    mx = float(np.sum(weights * xx)) / m00
    my = float(np.sum(weights * yy)) / m00

    # second central moments
    dx, dy = xx - mx, yy - my
    mu20 = float(np.sum(weights * dx * dx)) / m00
    mu02 = float(np.sum(weights * dy * dy)) / m00
    mu11 = float(np.sum(weights * dx * dy)) / m00
    eigenvalues = _eigenvalues(mu20, mu02, mu11)
    if eigenvalues is None or eigenvalues[0] < 0:
        return None

    return StarProfile(
        flux=m00,
        centroid=Point2D(mx, my),
        peak=float(np.max(box)),
        sigma_major=math.sqrt(eigenvalues[0]),
        sigma_minor=math.sqrt(eigenvalues[1]),
    )


__all__ = [
    "ComponentProperties",
    "component_properties",
    "measure_components",
    "StarProfile",
    "star_profile",
    "AXIS_SCALE",
    "GAUSSIAN_FWHM",
]
