import itertools
import math

import pytest

from pyquads.utils.geometry import Point2D
from pyquads.utils.quads import DEGENERATE_DESCRIPTOR, Quad, QuadDistances, StarInfo, descriptor_key, normalize_quad

POINTS = [Point2D(0, 0), Point2D(10, 1), Point2D(3, 7), Point2D(6, -2)]


def transform(points, angle: float, scale: float, dx: float, dy: float):
    c, s = math.cos(angle), math.sin(angle)
    return [Point2D(scale * (c * p.x - s * p.y) + dx, scale * (s * p.x + c * p.y) + dy) for p in points]


def test_needs_four_points():
    with pytest.raises(ValueError):
        normalize_quad(POINTS[:3])


def test_square():
    result = normalize_quad([Point2D(0, 0), Point2D(1, 0), Point2D(0, 1), Point2D(1, 1)])

    assert result.descriptor == pytest.approx((0.5, -0.5, 0.5, 0.5))
    assert not result.degenerate
    assert sorted(result.order[:2]) in ([0, 3], [1, 2])


@pytest.mark.parametrize(
    "angle,scale,dx,dy", [(0.0, 1.0, 100.0, -50.0), (0.7, 2.5, 100.0, -50.0), (3.0, 0.1, 0.0, 0.0), (-1.2, 17.0, 5.0, 5.0)]
)
def test_similarity_invariance(angle, scale, dx, dy):
    expected = normalize_quad(POINTS).descriptor

    result = normalize_quad(transform(POINTS, angle, scale, dx, dy)).descriptor

    assert result == pytest.approx(expected, abs=1e-6)


def test_mirror_invariance():
    expected = normalize_quad(POINTS).descriptor

    result = normalize_quad([Point2D(p.x, -p.y) for p in POINTS]).descriptor

    assert result == pytest.approx(expected, abs=1e-6)


def test_permutation_invariance():
    expected = normalize_quad(POINTS).descriptor

    for permutation in itertools.permutations(POINTS):
        assert normalize_quad(permutation).descriptor == pytest.approx(expected, abs=1e-6)


def test_tied_baselines_permutation_invariance():
    # d23 and d24 are both sqrt(17)
    points = [Point2D(4, 2), Point2D(6, 4), Point2D(2, 3), Point2D(2, 5)]
    assert QuadDistances.from_points(points).baselines() == [(1, 2), (1, 3)]

    descriptors = [normalize_quad(permutation).descriptor for permutation in itertools.permutations(points)]

    assert len({descriptor_key(d) for d in descriptors}) == 1
    assert descriptors[0] == pytest.approx((0.117647, -0.470588, 0.411765, 0.352941), abs=1e-6)


def test_rotated_square_permutation_invariance():
    square = transform([Point2D(0, 0), Point2D(1, 0), Point2D(1, 1), Point2D(0, 1)], 0.3, 12.0, 40.0, 7.0)

    descriptors = [normalize_quad(permutation).descriptor for permutation in itertools.permutations(square)]

    assert len({descriptor_key(d) for d in descriptors}) == 1


def test_no_negative_zero():
    result = normalize_quad([Point2D(0, 0), Point2D(4, 0), Point2D(1, 0), Point2D(2, 0)])

    assert result.descriptor == pytest.approx((0.25, 0.0, 0.5, 0.0))
    for value in result.descriptor:
        assert math.copysign(1.0, value) == 1.0


def test_degenerate():
    result = normalize_quad([Point2D(3, 3)] * 4)

    assert result.degenerate
    assert result.descriptor == DEGENERATE_DESCRIPTOR


def test_distances_and_baseline():
    distances = QuadDistances.from_points(POINTS)

    assert distances.d12 == pytest.approx(math.hypot(10, 1))
    assert distances.baseline() == (0, 1)
    i, j = distances.baseline()
    assert POINTS[i].euclidean_distance(POINTS[j]) == pytest.approx(max(distances))


def test_quad_from_stars():
    stars = [StarInfo(p.x, p.y, 1, i == 0, i) for i, p in enumerate(POINTS)]

    quad = Quad.from_stars(stars)

    assert quad.stars[0].is_seed
    assert quad.baseline == pytest.approx(max(quad.distances))
    assert {s.id for s in (quad.s1, quad.s2, quad.s3, quad.s4)} == {0, 1, 2, 3}
    assert quad.descriptor == normalize_quad(POINTS).descriptor
    assert not quad.degenerate


def test_quad_coordinates_match_descriptor():
    stars = [StarInfo(p.x, p.y, 1, False, i) for i, p in enumerate(POINTS)]
    quad = Quad.from_stars(stars)

    # project S3 and S4 into frame of baseline
    (x1, y1), (x2, y2), p3, p4 = quad.image_coordinates
    bx, by = x2 - x1, y2 - y1
    length2 = bx * bx + by * by
    projected = []
    for x, y in (p3, p4):
        projected += [((x - x1) * bx + (y - y1) * by) / length2, ((y - y1) * bx - (x - x1) * by) / length2]

    x3, y3, x4, y4 = quad.descriptor
    assert projected[0] == pytest.approx(x3)
    assert projected[2] == pytest.approx(x4)
    sign = -1.0 if quad.mirrored else 1.0
    assert projected[1] == pytest.approx(sign * y3)
    assert projected[3] == pytest.approx(sign * y4)


def test_mirrored_flag():
    stars = [StarInfo(p.x, p.y, 1, False, i) for i, p in enumerate(POINTS)]
    mirrored_stars = [StarInfo(p.x, -p.y, 1, False, i) for i, p in enumerate(POINTS)]

    quad = Quad.from_stars(stars)
    mirrored = Quad.from_stars(mirrored_stars)

    assert quad.descriptor == pytest.approx(mirrored.descriptor, abs=1e-9)
    assert quad.mirrored != mirrored.mirrored
    assert quad.mirrored == normalize_quad(POINTS).mirrored
