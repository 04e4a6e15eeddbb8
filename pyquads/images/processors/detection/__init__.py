"""
Detection
---------

Creation of binary masks from pixel data, extraction of connected components from them, and measurement of the
FWHM of the detected stars.
"""

from .threshold import Threshold
from .connectedcomponents import ConnectedComponents
from .fwhm import FWHM

__all__ = ["Threshold", "ConnectedComponents", "FWHM"]
