"""
Images
------

:class:`~pyquads.images.Image` bundles pixel data, FITS header, binary mask, catalog and class-keyed meta
information. Image processors take an image and return a processed copy of it.
"""
__title__ = "Images"

from .image import Image
from .processor import ImageProcessor

__all__ = ["Image", "ImageProcessor"]
