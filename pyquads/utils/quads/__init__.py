"""
Quads
-----

Selection of bright stars and construction of quads, i.e. groups of four stars with a descriptor that is invariant
under translation, rotation, scaling and mirroring, for matching an image against a reference catalog.
"""

from .stars import StarInfo, select_stars, min_distance_pixels
from .quad import Quad, QuadDistances, NormalizedQuad, normalize_quad, DESCRIPTOR_DECIMALS, DEGENERATE_DESCRIPTOR
from .builder import SeedQuad, seed_quads, deduplicate, build_quads, descriptor_key, DEDUP_DECIMALS
from .result import QuadResult
from .detection import detect_quads, find_quads

__all__ = [
    "StarInfo",
    "select_stars",
    "min_distance_pixels",
    "Quad",
    "QuadDistances",
    "NormalizedQuad",
    "normalize_quad",
    "DESCRIPTOR_DECIMALS",
    "DEGENERATE_DESCRIPTOR",
    "SeedQuad",
    "seed_quads",
    "deduplicate",
    "build_quads",
    "descriptor_key",
    "DEDUP_DECIMALS",
    "QuadResult",
    "detect_quads",
    "find_quads",
]
