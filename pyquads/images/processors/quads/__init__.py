"""
Quads
-----
"""

from .quads import Quads

__all__ = ["Quads"]
