import itertools
import math

import numpy as np
import pytest

from pyquads.utils.components import ComponentProperties
from pyquads.utils.geometry import Point2D
from pyquads.utils.quads import StarInfo, min_distance_pixels, select_stars


def props(x: float, y: float, area: int) -> ComponentProperties:
    return ComponentProperties(area, Point2D(x, y), 0.0, 0.0, 0.0, 0.0)


def test_min_distance_pixels():
    assert min_distance_pixels(5, 1000, 1000) == pytest.approx(100)
    assert min_distance_pixels(0, 1000, 1000) == 0


def test_sorted_by_area_with_ids():
    components = [props(0, 0, 3), props(10, 10, 7), props(20, 20, 5)]

    stars = select_stars(components, max_stars=10)

    assert [s.area for s in stars] == [7, 5, 3]
    assert [s.id for s in stars] == [1, 2, 0]
    assert not any(s.is_seed for s in stars)


def test_equal_areas_keep_order():
    components = [props(i, i, 1) for i in range(5)]

    stars = select_stars(components, max_stars=3)

    assert [s.id for s in stars] == [0, 1, 2]


def test_max_stars():
    components = [props(i, 0, i + 1) for i in range(10)]

    assert len(select_stars(components, max_stars=4)) == 4
    assert select_stars(components, max_stars=0) == []


def test_skips_non_finite():
    components = [props(math.nan, 0, 10), props(1, 1, 5), props(math.inf, 2, 4)]

    stars = select_stars(components)

    assert [s.id for s in stars] == [1]


def test_minimum_separation():
    rng = np.random.default_rng(3)
    components = [props(float(x), float(y), int(a)) for (x, y), a in zip(rng.uniform(0, 1000, (10, 2)), range(10, 0, -1))]

    stars = select_stars(components, max_stars=10, min_distance_percent=5, width=1000, height=1000)

    assert stars[0].id == 0
    for a, b in itertools.combinations(stars, 2):
        assert a.point.taxicab_distance(b.point) >= 100


def test_close_star_is_rejected():
    components = [props(0, 0, 10), props(30, 30, 9), props(200, 0, 8)]

    stars = select_stars(components, max_stars=10, min_distance_percent=5, width=1000, height=1000)

    assert [s.id for s in stars] == [0, 2]


def test_star_info():
    star = StarInfo.from_properties(props(1.5, 2.5, 4), id=3)

    assert star.point == Point2D(1.5, 2.5)
    assert star.as_seed().is_seed
    assert not star.as_seed().as_seed(False).is_seed
    assert star.id == 3
