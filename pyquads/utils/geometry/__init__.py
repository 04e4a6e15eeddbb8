"""
Geometry
--------
"""

from .point import Point2D, PixelCoordinate
from .kdtree import KDTree

__all__ = ["Point2D", "PixelCoordinate", "KDTree"]
