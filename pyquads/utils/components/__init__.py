"""
Connected components
--------------------

Extraction of connected pixel clusters from a binary mask and their shape statistics:

    - :func:`scan_mask` collects the coordinates of all foreground pixels in parallel.
    - :func:`label_components` groups them into 8-connected :class:`Component` objects.
    - :func:`component_properties` derives area, centroid, axes, eccentricity and rotation from image moments.
    - :func:`star_profile` measures flux and widths of a star from intensity-weighted moments of the pixel data.
"""

from .component import Component
from .scanner import scan_mask, FOREGROUND_LEVEL
from .labeler import label_components, PIXEL_KEY_FACTOR
from .moments import (
    ComponentProperties,
    component_properties,
    measure_components,
    StarProfile,
    star_profile,
    AXIS_SCALE,
    GAUSSIAN_FWHM,
)

__all__ = [
    "Component",
    "scan_mask",
    "FOREGROUND_LEVEL",
    "label_components",
    "PIXEL_KEY_FACTOR",
    "ComponentProperties",
    "component_properties",
    "measure_components",
    "StarProfile",
    "star_profile",
    "AXIS_SCALE",
    "GAUSSIAN_FWHM",
]
