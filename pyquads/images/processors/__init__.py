"""
Image processors
----------------

An image processor is an asynchronous component that takes a :class:`pyquads.images.Image` and returns a processed
copy of it. Processors are usually configured as dicts with a ``class`` key and can be combined into a
:class:`Pipeline`:

    - :class:`~pyquads.images.processors.detection.Threshold` creates a binary mask from pixel data.
    - :class:`~pyquads.images.processors.detection.ConnectedComponents` extracts a component catalog from the mask.
    - :class:`~pyquads.images.processors.detection.FWHM` measures the FWHM of the catalog stars in the pixel data.
    - :class:`~pyquads.images.processors.quads.Quads` builds quads from the catalog.

:class:`ExceptionHandler` wraps another processor and turns its non-fatal errors into warnings.
"""

from .exceptionhandler import ExceptionHandler
from .pipeline import Pipeline

__all__ = ["ExceptionHandler", "Pipeline"]
