from __future__ import annotations
import itertools
import math
from typing import Iterator, List, NamedTuple, Sequence, Tuple

from pyquads.utils.geometry import Point2D
from .stars import StarInfo


"""Number of decimals normalized coordinates are rounded to before variants are compared."""
DESCRIPTOR_DECIMALS = 10

"""Descriptor of a quad with a baseline of zero length."""
DEGENERATE_DESCRIPTOR = (0.0, 0.0, 0.0, 0.0)

Descriptor = Tuple[float, float, float, float]

"""Index pairs of the 6 distances in a quad, in order d12, d13, d14, d23, d24, d34."""
_PAIRS = list(itertools.combinations(range(4), 2))


class QuadDistances(NamedTuple):
    """The 6 pairwise Euclidean distances between the stars of a quad, in input order."""

    d12: float
    d13: float
    d14: float
    d23: float
    d24: float
    d34: float

    @classmethod
    def from_points(cls, points: Sequence[Point2D]) -> QuadDistances:
        return cls(*[points[i].euclidean_distance(points[j]) for i, j in _PAIRS])

    def baselines(self) -> List[Tuple[int, int]]:
        """Indices of all pairs of stars sharing the largest distance, up to a relative difference of 1e-10."""
        longest = max(self)
        return [pair for pair, d in zip(_PAIRS, self) if math.isclose(d, longest, rel_tol=10**-DESCRIPTOR_DECIMALS)]

    def baseline(self) -> Tuple[int, int]:
        """Indices of the pair of stars with the largest distance, the first one in order d12 to d34 on ties."""
        return self.baselines()[0]


class NormalizedQuad(NamedTuple):
    """Result of a quad normalization.

    With S1 moved to (0, 0) and S2 to (1, 0), the descriptor contains the coordinates (x3, y3, x4, y4) of S3 and S4.
    The order arrays give the indices of S1..S4 in the input, so that ``points[order[0]]`` is S1 and so on.
    ``mirrored`` is set, if the normalized frame is a mirror image of the input, i.e. S3 and S4 are on the other side
    of the baseline than the descriptor says.
    """

    descriptor: Descriptor
    order: Tuple[int, int, int, int]
    mirrored: bool = False
    degenerate: bool = False


def _round(value: float) -> float:
    # adding 0.0 folds -0.0 into 0.0
    return round(value, DESCRIPTOR_DECIMALS) + 0.0


def _variants(pts: Sequence[Point2D], i1: int, i2: int) -> Iterator[NormalizedQuad]:
    """Yields the four variants of a quad with the baseline between the given points."""
    i3, i4 = [i for i in range(4) if i not in (i1, i2)]
    s1, s2 = pts[i1], pts[i2]

    # baseline vector
    bx, by = s2.x - s1.x, s2.y - s1.y
    length = math.hypot(bx, by)
    cos, sin = bx / length, by / length

    def _project(p: Point2D) -> Tuple[float, float]:
        # translate S1 into origin, rotate baseline onto x axis, and scale
        tx, ty = p.x - s1.x, p.y - s1.y
        return (tx * cos + ty * sin) / length, (-tx * sin + ty * cos) / length

    (x3, y3), (x4, y4) = _project(pts[i3]), _project(pts[i4])

    # variants: (swap S1/S2, mirror)
    for swap, mirror in ((False, False), (True, False), (False, True), (True, True)):
        a = (1.0 - x3 if swap else x3, y3 if swap == mirror else -y3)
        b = (1.0 - x4 if swap else x4, y4 if swap == mirror else -y4)
        a, b = (_round(a[0]), _round(a[1])), (_round(b[0]), _round(b[1]))
        base = (i2, i1) if swap else (i1, i2)
        free = (i3, i4)
        if b < a:
            a, b = b, a
            free = (i4, i3)
        yield NormalizedQuad((a[0], a[1], b[0], b[1]), base + free, mirrored=mirror)


def normalize_quad(points: Sequence[Point2D]) -> NormalizedQuad:
    """Calculate the canonical descriptor of four points.

    The pair of points with the largest distance forms the baseline S1-S2, the other two points are S3 and S4. All
    points are translated, rotated and scaled so that S1 ends up at (0, 0) and S2 at (1, 0). Since neither the
    direction of the baseline nor the handedness of the image is known, four variants are created by swapping S1 and
    S2, ``(x, y) -> (1 - x, -y)``, and by mirroring at the baseline, ``(x, y) -> (x, -y)``. Within each variant, S3
    and S4 are ordered by their coordinates. If several pairs share the largest distance, the variants of all of them
    are created, and the lexicographically smallest of all variants is the canonical descriptor. Thus any rotated,
    shifted, scaled, mirrored or permuted version of the same four points gives the same descriptor.

    Args:
        points: Four points.

    Returns:
        Normalized quad. If the baseline has zero length, the descriptor is all zeros and ``degenerate`` is set.
    """

    if len(points) != 4:
        raise ValueError("A quad needs exactly four points.")
    pts = [Point2D(*p) for p in points]

    # baseline is longest distance
    distances = QuadDistances.from_points(pts)
    if max(distances) == 0:
        return NormalizedQuad(DEGENERATE_DESCRIPTOR, (0, 1, 2, 3), degenerate=True)

    # smallest variant of all baselines, first one wins on equal descriptors
    variants = [v for i1, i2 in distances.baselines() for v in _variants(pts, i1, i2)]
    return min(variants, key=lambda v: v.descriptor)


class Quad(NamedTuple):
    """Four stars and their canonical descriptor.

    ``stars`` keeps the stars in the order they were combined (seed first), while ``s1`` to ``s4`` are the same stars
    in canonical order: S1 and S2 are the baseline, i.e. the pair with the largest distance, with S1 at the origin of
    the normalized frame. ``mirrored`` tells, whether the normalized frame is a mirror image of the image.
    """

    stars: Tuple[StarInfo, StarInfo, StarInfo, StarInfo]
    distances: QuadDistances
    s1: StarInfo
    s2: StarInfo
    s3: StarInfo
    s4: StarInfo
    descriptor: Descriptor
    degenerate: bool = False
    mirrored: bool = False

    @classmethod
    def from_stars(cls, stars: Sequence[StarInfo]) -> Quad:
        """Create quad from four stars.

        Args:
            stars: Four stars.

        Returns:
            New quad with canonical descriptor.
        """
        points = [s.point for s in stars]
        normalized = normalize_quad(points)
        ordered = [stars[i] for i in normalized.order]
        return cls(
            tuple(stars),  # type: ignore
            QuadDistances.from_points(points),
            *ordered,
            descriptor=normalized.descriptor,
            degenerate=normalized.degenerate,
            mirrored=normalized.mirrored,
        )

    @property
    def baseline(self) -> float:
        """Length of baseline in pixels."""
        return self.s1.point.euclidean_distance(self.s2.point)

    @property
    def image_coordinates(self) -> List[Tuple[float, float]]:
        """Image coordinates of S1 to S4."""
        return [(s.x, s.y) for s in (self.s1, self.s2, self.s3, self.s4)]


__all__ = [
    "Quad",
    "QuadDistances",
    "NormalizedQuad",
    "normalize_quad",
    "Descriptor",
    "DESCRIPTOR_DECIMALS",
    "DEGENERATE_DESCRIPTOR",
]
